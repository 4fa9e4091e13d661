"""
Basic example of decoding the images of a PDF page by page.
"""

from pathlib import Path
from pdf_image_codec import PageReader, PDFImageCodecError


def main():
    # Path to your PDF file
    pdf_path = Path("example.pdf")

    try:
        with PageReader.from_bytes(pdf_path.read_bytes()) as reader:
            print("=" * 60)
            print(f"PDF: {pdf_path} ({reader.page_count} pages)")
            print("=" * 60)

            while reader.advance():
                # Skip pages that fail to decode instead of stopping
                try:
                    images = reader.decode_current_page()
                except PDFImageCodecError as e:
                    print(f"Page {reader.cursor}: skipped ({e})")
                    continue

                print(f"Page {reader.cursor}: {len(images)} image(s)")
                for image in images[:5]:  # Show first 5
                    print(f"  - {image.width}x{image.height} {image.mode}")

    except FileNotFoundError:
        print(f"Error: PDF file not found at {pdf_path}")
    except PDFImageCodecError as e:
        print(f"Error processing PDF: {e}")


if __name__ == "__main__":
    main()
