"""
PDF as a pseudo image format.

Registering the codec lets any caller of ``FormatRegistry.decode_image`` open a
PDF the same way it opens a PNG: the first image of the first page is returned.
"""

import logging

from .models import ImageConfig
from .reader import decode_first_page, inspect_first_page_config
from .registry import DecodedImage, FormatRegistry, ImageCodec

logger = logging.getLogger(__name__)

PDF_SIGNATURE = b"%PDF"


class PdfCodec(ImageCodec):
    name = "pdf"

    def __init__(self, registry: FormatRegistry):
        # Embedded images are decoded through the registry the codec lives in
        self.registry = registry

    def probe(self, data: bytes) -> bool:
        return data.startswith(PDF_SIGNATURE)

    def decode(self, data: bytes) -> DecodedImage:
        return decode_first_page(data, registry=self.registry)

    def decode_config(self, data: bytes) -> ImageConfig:
        return inspect_first_page_config(data, registry=self.registry)


def register_pdf_format(registry: FormatRegistry) -> PdfCodec:
    """Add the pdf pseudo-codec to registry and return it."""
    codec = PdfCodec(registry)
    registry.register(codec)
    logger.debug("Registered pdf format")
    return codec
