"""
Atomic append of image files to a PDF file.

The combined document is written to a temporary file next to the output and
only renamed over it once every step succeeded. A failed call leaves the
output exactly as it was and removes the temporary file.
"""

import logging
import os
from pathlib import Path
from time import time
from typing import BinaryIO, Optional, Sequence, Union

from .models import AppendResult, EncodeOptions
from .registry import DecodedImage, FormatRegistry, default_registry
from .writer import encode_images, append_encoded, encode_encoded

logger = logging.getLogger(__name__)

TEMP_SUFFIX = ".tmp"

PathLike = Union[str, Path]


def load_image_file(path: PathLike, registry: Optional[FormatRegistry] = None) -> DecodedImage:
    """Decode an image file through the format registry."""
    registry = registry or default_registry()
    with open(path, "rb") as f:
        data = f.read()
    logger.debug(f"Decoding {path} ({len(data)} bytes)")
    return registry.decode_image(data)


def append_images(
    output_path: PathLike,
    input_paths: Sequence[PathLike],
    options: Optional[EncodeOptions] = None,
    registry: Optional[FormatRegistry] = None,
) -> AppendResult:
    """
    Append image files to a PDF, creating it if necessary.

    Args:
        output_path: PDF to create or extend
        input_paths: Image files, one new page each, in order
        options: Encoding parameters
        registry: Format registry used to decode the input files

    Returns:
        AppendResult describing the written document
    """
    start_time = time()
    output = Path(output_path)
    registry = registry or default_registry()

    existing: Optional[BinaryIO] = None
    temp_path = output
    temp_created = False
    existing_pages = 0

    if output.exists():
        existing = open(output, "rb")
        temp_path = output.with_name(output.name + TEMP_SUFFIX)

    try:
        images = [load_image_file(path, registry) for path in input_paths]
        encoded = encode_images(images, options)

        with open(temp_path, "wb") as f:
            temp_created = True
            if existing is not None:
                total_pages = append_encoded(existing, f, encoded)
            else:
                total_pages = encode_encoded(f, encoded)

        if existing is not None:
            existing.close()
            existing = None
            os.replace(temp_path, output)
            existing_pages = total_pages - len(encoded)

    except BaseException:
        if existing is not None:
            existing.close()
        if temp_created:
            logger.warning(f"Append to {output} failed, removing {temp_path}")
            temp_path.unlink(missing_ok=True)
        raise

    result = AppendResult(
        output_path=output,
        existing_pages=existing_pages,
        appended_pages=len(encoded),
        total_pages=total_pages,
        processing_time=time() - start_time,
    )
    logger.info(
        f"Appended {result.appended_pages} pages to {output} ({result.total_pages} pages total)"
    )
    return result
