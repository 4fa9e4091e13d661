"""
PDF document utilities.
"""

import logging
from typing import List, Tuple
from pymupdf import Document

from ..exceptions import PageOutOfRangeError

logger = logging.getLogger(__name__)


def get_pdf_page_count(doc: Document) -> int:
    """
    Get the number of pages in a PDF document.

    Args:
        doc: PDF document object

    Returns:
        Number of pages in the document
    """
    return doc.page_count


def get_page_images(doc: Document, page_number: int) -> List[Tuple]:
    """
    Get all image references from a specific page.

    Args:
        doc: PDF document object
        page_number: Page number (1-based)

    Returns:
        List of image tuples containing metadata

    Raises:
        PageOutOfRangeError: If the page does not exist
    """
    page_count = doc.page_count
    if page_number < 1 or page_number > page_count:
        raise PageOutOfRangeError(
            f"Page {page_number} is out of range (document has {page_count} pages)"
        )
    return doc.get_page_images(page_number - 1)
