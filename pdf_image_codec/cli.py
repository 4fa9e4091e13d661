"""
Command-line interface for pdf-image-codec.
"""

import logging
from pathlib import Path

import click

from . import __version__
from .append import append_images
from .exceptions import PDFImageCodecError
from .models import EncodeOptions, ReaderConfig
from .reader import PageReader, inspect_first_page_config


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def main(verbose):
    """
    Decode images embedded in PDFs and package images into PDFs.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@main.command()
@click.argument("input_pdf", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--output-dir", "-o",
    default="extracted_images",
    help="Output directory for decoded images",
    type=click.Path(file_okay=False),
)
@click.option("--lenient", is_flag=True, help="Skip pages that fail to decode")
def extract(input_pdf, output_dir, lenient):
    """
    Decode every image of INPUT_PDF and save them as PNG files.
    """
    data = Path(input_pdf).read_bytes()
    config = ReaderConfig(failure_policy="lenient" if lenient else "strict")
    images_dir = Path(output_dir) / "images"

    try:
        with PageReader.from_bytes(data, config=config) as reader:
            count = 0
            while reader.advance():
                page_number = reader.cursor
                try:
                    page_images = reader.decode_current_page()
                except PDFImageCodecError as e:
                    if not lenient:
                        raise
                    click.echo(f"Skipping page {page_number}: {e}", err=True)
                    continue
                if not page_images:
                    continue
                page_dir = images_dir / f"page_{page_number}"
                page_dir.mkdir(parents=True, exist_ok=True)
                for index, image in enumerate(page_images, start=1):
                    filepath = page_dir / f"img{index:03d}.png"
                    image.save(filepath, format="PNG")
                    count += 1
                    click.echo(f"  Saved {filepath} ({image.width}x{image.height})")
    except PDFImageCodecError as e:
        raise click.ClickException(str(e))

    click.echo(f"Extracted {count} image(s) to {images_dir}")


@main.command()
@click.argument("input_pdf", type=click.Path(exists=True, dir_okay=False))
def info(input_pdf):
    """
    Show page count and first image details of INPUT_PDF.
    """
    data = Path(input_pdf).read_bytes()
    try:
        with PageReader.from_bytes(data) as reader:
            page_count = reader.page_count
        config = inspect_first_page_config(data)
    except PDFImageCodecError as e:
        raise click.ClickException(str(e))

    click.echo(f"Pages: {page_count}")
    click.echo(f"First image: {config.width}x{config.height} {config.mode}")


@main.command()
@click.argument("output_pdf", type=click.Path(dir_okay=False))
@click.argument("images", nargs=-1, required=True, type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--quality", "-q",
    default=EncodeOptions().quality,
    show_default=True,
    help="JPEG quality (1-100)",
    type=int,
)
def append(output_pdf, images, quality):
    """
    Append IMAGES to OUTPUT_PDF, creating it if needed.
    """
    try:
        result = append_images(output_pdf, images, EncodeOptions(quality=quality))
    except PDFImageCodecError as e:
        raise click.ClickException(str(e))

    click.echo(
        f"Appended {result.appended_pages} page(s) to {result.output_path} "
        f"({result.total_pages} total)"
    )

