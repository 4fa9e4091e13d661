"""
Example of appending image files to a PDF without risking the existing file.
"""

from pathlib import Path
from pdf_image_codec import EncodeOptions, PDFImageCodecError, append_images


def main(pdf_path: Path, images):
    try:
        result = append_images(pdf_path, images, EncodeOptions(quality=85))

        print("=" * 60)
        print("PDF APPEND COMPLETE")
        print("=" * 60)
        print(f"Output PDF: {result.output_path}")
        print(f"Existing pages: {result.existing_pages}")
        print(f"Appended pages: {result.appended_pages}")
        print(f"Total pages: {result.total_pages}")
        print(f"Processing time: {result.processing_time:.2f} seconds")

    except FileNotFoundError as e:
        print(f"Error: input image not found: {e.filename}")
    except PDFImageCodecError as e:
        print(f"Error appending images: {e}")


if __name__ == "__main__":
    main(Path("album.pdf"), [Path("photo1.jpg"), Path("photo2.png")])
