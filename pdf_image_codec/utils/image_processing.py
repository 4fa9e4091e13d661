"""
Image processing utilities for PDF image extraction.
"""

import logging
from io import BytesIO
from PIL import Image
from pymupdf import Document, Pixmap, csRGB

from ..models import ImageMetadata, RawImageStream

logger = logging.getLogger(__name__)


def handle_alpha_channel(pix: Pixmap) -> Pixmap:
    """
    Remove alpha channel from a pixmap if present.

    Args:
        pix: Input pixmap

    Returns:
        Pixmap without alpha channel
    """
    if pix.alpha:
        return Pixmap(pix, 0)
    return pix


def pixmap_to_image(pix: Pixmap) -> Image.Image:
    """
    Convert a MuPDF pixmap into a fully loaded Pillow image.

    Pixmaps that are neither gray nor RGB (CMYK, separations) are converted to
    RGB first, since PNG cannot carry them.

    Args:
        pix: Input pixmap

    Returns:
        Decoded Pillow image
    """
    if pix.colorspace is not None and pix.colorspace.n not in (1, 3):
        pix = Pixmap(csRGB, pix)
    image = Image.open(BytesIO(pix.tobytes("png")))
    image.load()
    return image


def recover_pixmap(
    doc: Document, img_metadata: ImageMetadata, page_number: int
) -> RawImageStream:
    """
    Recover image data from PDF, handling special cases like SMask and ColorSpace.

    This is based on the recoverpix function from PyMuPDF utilities. Images
    that are stored in a gray or RGB color space are returned exactly as
    MuPDF extracts them.

    Args:
        doc: PDF document object
        img_metadata: Metadata about the image to extract
        page_number: 1-based page the image is referenced from

    Returns:
        RawImageStream containing the image bytes and metadata
    """
    xref = img_metadata.xref
    smask = img_metadata.smask

    # Special case: /SMask or /Mask exists
    if smask > 0:
        pix0 = Pixmap(doc.extract_image(xref)["image"])
        pix0 = handle_alpha_channel(pix0)
        if pix0.colorspace is not None and pix0.colorspace.n not in (1, 3):
            pix0 = Pixmap(csRGB, pix0)
        mask = Pixmap(doc.extract_image(smask)["image"])

        try:
            pix = Pixmap(pix0, mask)
        except Exception as e:
            # Fallback to the base image without transparency
            logger.error(
                f"Error combining pixmap with mask for xref {xref}: {e}. Using base image only."
            )
            pix = pix0

        return RawImageStream(
            page_number=page_number,
            xref=xref,
            file_type="png",
            width=pix.width,
            height=pix.height,
            colorspace=pix.colorspace.n,
            data=pix.tobytes("png"),
        )

    extracted = doc.extract_image(xref)
    if not extracted:
        raise ValueError(f"No image data stored under xref {xref}")

    # Special case: CMYK, Indexed or other non gray/RGB color spaces
    # Convert these cases to RGB PNG images to be safe
    if extracted["colorspace"] not in (1, 3):
        logger.debug(
            f"    Converting xref {xref} from {extracted['colorspace']} components to RGB"
        )
        pix = Pixmap(doc, xref)
        pix = Pixmap(csRGB, pix)
        return RawImageStream(
            page_number=page_number,
            xref=xref,
            file_type="png",
            width=pix.width,
            height=pix.height,
            colorspace=3,
            data=pix.tobytes("png"),
        )

    # Normal case: extract image directly
    return RawImageStream(
        page_number=page_number,
        xref=xref,
        file_type=extracted["ext"],
        width=extracted["width"],
        height=extracted["height"],
        colorspace=extracted["colorspace"],
        data=extracted["image"],
    )
