"""
Utility modules for PDF image decoding.
"""

from .image_processing import recover_pixmap, handle_alpha_channel, pixmap_to_image
from .pdf_utils import get_pdf_page_count, get_page_images

__all__ = [
    "recover_pixmap",
    "handle_alpha_channel",
    "pixmap_to_image",
    "get_pdf_page_count",
    "get_page_images",
]
