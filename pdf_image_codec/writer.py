"""
PDF Writer - packages decoded images into a PDF, one JPEG page per image.
"""

import logging
from io import BytesIO
from typing import BinaryIO, List, Optional, Sequence
from PIL import Image

from .document import import_images
from .models import DEFAULT_QUALITY, EncodedImage, EncodeOptions

logger = logging.getLogger(__name__)

# Modes Pillow can write as JPEG without conversion
JPEG_MODES = ("L", "RGB", "CMYK")


def resolve_quality(options: Optional[EncodeOptions]) -> int:
    """Quality from options, clamped to [1, 100]; the default when options are not given."""
    if options is None:
        return DEFAULT_QUALITY
    return EncodeOptions(quality=options.quality).quality


def _to_jpeg_mode(image: Image.Image) -> Image.Image:
    if image.mode in JPEG_MODES:
        return image
    if image.mode == "1":
        return image.convert("L")
    if image.mode == "P":
        image = image.convert("RGBA")
    if image.mode in ("RGBA", "LA"):
        # Flatten transparency onto white
        background = Image.new("RGB", image.size, (255, 255, 255))
        background.paste(image.convert("RGBA"), mask=image.getchannel("A"))
        return background
    return image.convert("RGB")


def encode_image(image: Image.Image, quality: int = DEFAULT_QUALITY) -> EncodedImage:
    """Encode one image as JPEG."""
    buffer = BytesIO()
    _to_jpeg_mode(image).save(buffer, format="JPEG", quality=quality)
    return EncodedImage(data=buffer.getvalue(), width=image.width, height=image.height)


def encode_images(
    images: Sequence[Image.Image], options: Optional[EncodeOptions] = None
) -> List[EncodedImage]:
    """Encode images as JPEG at the resolved quality."""
    quality = resolve_quality(options)
    logger.debug(f"Encoding {len(images)} images as JPEG at quality {quality}")
    return [encode_image(image, quality) for image in images]


def encode_encoded(destination: BinaryIO, images: Sequence[EncodedImage]) -> int:
    """Write already encoded images to a new PDF."""
    return import_images(destination, images)


def append_encoded(
    existing: BinaryIO, destination: BinaryIO, images: Sequence[EncodedImage]
) -> int:
    """Write the pages of existing followed by already encoded images."""
    return import_images(destination, images, existing=existing)


def encode(
    destination: BinaryIO,
    images: Sequence[Image.Image],
    options: Optional[EncodeOptions] = None,
) -> int:
    """
    Write images to destination as a brand-new PDF.

    Args:
        destination: Binary stream receiving the PDF
        images: Decoded images, one page each
        options: Encoding parameters

    Returns:
        Number of pages written
    """
    return encode_encoded(destination, encode_images(images, options))


def encode_to_existing(
    existing: BinaryIO,
    destination: BinaryIO,
    images: Sequence[Image.Image],
    options: Optional[EncodeOptions] = None,
) -> int:
    """
    Write the pages of an existing PDF followed by one page per image.

    Args:
        existing: Seekable binary source of the existing PDF
        destination: Binary stream receiving the combined PDF
        images: Decoded images, one page each
        options: Encoding parameters

    Returns:
        Number of pages written
    """
    return append_encoded(existing, destination, encode_images(images, options))


def encode_to_bytes(
    images: Sequence[Image.Image], options: Optional[EncodeOptions] = None
) -> bytes:
    """Encode images into PDF bytes."""
    buffer = BytesIO()
    encode(buffer, images, options)
    return buffer.getvalue()
