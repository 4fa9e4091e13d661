"""
Document model adapter - the narrow surface the reader and writer use on top of PyMuPDF.
"""

import logging
from typing import BinaryIO, List, Optional, Sequence
from pymupdf import Document as PyMuPDFDocument, open as pdfopen

from .exceptions import EmptyDocumentError, EncryptedPDFError, MalformedPDFError
from .models import DocumentConfig, EncodedImage, ImageMetadata, RawImageStream
from .utils.image_processing import recover_pixmap
from .utils.pdf_utils import get_page_images, get_pdf_page_count

logger = logging.getLogger(__name__)


class Document:
    """A parsed, optimized PDF with at least one page. Read-only for this package."""

    def __init__(self, doc: PyMuPDFDocument):
        self.doc = doc

    @property
    def page_count(self) -> int:
        return get_pdf_page_count(self.doc)

    def close(self) -> None:
        self.doc.close()

    def __enter__(self) -> "Document":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def _parse(data: bytes) -> PyMuPDFDocument:
    try:
        return pdfopen(stream=data, filetype="pdf")
    except (RuntimeError, ValueError) as e:
        raise MalformedPDFError(f"Unable to parse PDF: {e}") from e


def open_document(data: bytes, config: Optional[DocumentConfig] = None) -> Document:
    """
    Parse PDF bytes into a Document.

    MuPDF repairs broken cross-reference tables while parsing; relaxed
    validation keeps such documents, strict validation rejects them.

    Args:
        data: Raw PDF bytes
        config: Validation, optimization and password settings

    Returns:
        The opened Document

    Raises:
        MalformedPDFError: If the bytes cannot be parsed
        EncryptedPDFError: If the document is encrypted and cannot be unlocked
        EmptyDocumentError: If the document has no pages
    """
    config = config or DocumentConfig()
    doc = _parse(data)

    try:
        if config.validation == "strict" and doc.is_repaired:
            raise MalformedPDFError("PDF needed repair and strict validation is enabled")

        encrypted = doc.needs_pass
        if encrypted:
            if not config.password:
                raise EncryptedPDFError()
            if not doc.authenticate(config.password):
                raise EncryptedPDFError("Failed to decrypt PDF with supplied password.")

        page_count = doc.page_count
        logger.debug(f"Parsed PDF with {page_count} pages (repaired: {doc.is_repaired})")
        if page_count == 0:
            raise EmptyDocumentError()

        optimized = None
        if config.optimize and not encrypted:
            optimized = doc.tobytes(garbage=3, deflate=True)
    except BaseException:
        doc.close()
        raise

    if optimized is not None:
        doc.close()
        doc = _parse(optimized)
        logger.debug(f"Optimized PDF: {len(data)} -> {len(optimized)} bytes")

    return Document(doc)


def extract_page_images(document: Document, page_number: int) -> List[RawImageStream]:
    """
    Extract every image embedded on a page.

    Args:
        document: Opened document
        page_number: Page number (1-based)

    Returns:
        Raw image streams in page order; empty for pages without images
    """
    doc = document.doc
    streams: List[RawImageStream] = []

    image_list = get_page_images(doc, page_number)
    logger.info(f"  Found {len(image_list)} image references on page {page_number}")

    for img_index, img_tuple in enumerate(image_list):
        try:
            img_metadata = ImageMetadata.from_tuple(img_tuple)
        except (ValueError, IndexError) as e:
            raise MalformedPDFError(
                f"Unreadable image reference {img_index + 1} on page {page_number}: {e}"
            ) from e

        # Skip if no meaningful data
        if not img_metadata.has_data:
            logger.warning(f"    Skipping image with no data on page {page_number}")
            continue

        try:
            stream = recover_pixmap(doc, img_metadata, page_number)
        except (RuntimeError, ValueError) as e:
            raise MalformedPDFError(
                f"Error extracting image {img_metadata.xref} on page {page_number}: {e}"
            ) from e

        logger.debug(
            f"    Extracted xref {stream.xref}: {stream.file_type or 'unknown'} "
            f"({len(stream.data)} bytes, {stream.width}x{stream.height})"
        )
        streams.append(stream)

    return streams


def import_images(
    destination: BinaryIO,
    images: Sequence[EncodedImage],
    existing: Optional[BinaryIO] = None,
) -> int:
    """
    Write a PDF with one page per image, optionally after the pages of an existing PDF.

    Args:
        destination: Binary stream receiving the new PDF
        images: JPEG encoded images, one page each, in order
        existing: Seekable binary source whose pages come first

    Returns:
        Number of pages written
    """
    out = pdfopen()
    try:
        if existing is not None:
            existing.seek(0)
            source = _parse(existing.read())
            try:
                out.insert_pdf(source)
            finally:
                source.close()
            logger.info(f"Copied {out.page_count} existing pages")

        for image in images:
            page = out.new_page(width=image.width, height=image.height)
            page.insert_image(page.rect, stream=image.data)

        page_count = out.page_count
        if page_count == 0:
            raise EmptyDocumentError("Nothing to write: no existing pages and no images")

        destination.write(out.tobytes(garbage=3, deflate=True))
        logger.info(f"Wrote PDF with {page_count} pages ({len(images)} new)")
        return page_count
    finally:
        out.close()
