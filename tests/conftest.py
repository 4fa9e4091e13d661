"""
Shared fixtures: real images and PDFs built on the fly with Pillow and PyMuPDF.
"""

from io import BytesIO
from typing import Callable, List, Sequence

import pymupdf
import pytest
from PIL import Image


def image_bytes(image: Image.Image, fmt: str = "PNG") -> bytes:
    buffer = BytesIO()
    image.save(buffer, format=fmt)
    return buffer.getvalue()


def gradient_image(width: int, height: int, seed: int = 0) -> Image.Image:
    """An RGB image whose pixels differ per seed, so PyMuPDF never deduplicates it."""
    image = Image.new("RGB", (width, height))
    image.putdata(
        [((x * 7 + seed * 31) % 256, (y * 5 + seed * 17) % 256, seed % 256)
         for y in range(height) for x in range(width)]
    )
    return image


def build_pdf(pages: Sequence[Sequence[bytes]]) -> bytes:
    """One page per entry, each holding the given encoded images side by side."""
    doc = pymupdf.open()
    try:
        for page_images in pages:
            page = doc.new_page(width=400, height=400)
            for index, data in enumerate(page_images):
                x0 = 10 + index * 90
                page.insert_image(pymupdf.Rect(x0, 10, x0 + 80, 90), stream=data)
        return doc.tobytes()
    finally:
        doc.close()


def pdf_page_count(data: bytes) -> int:
    with pymupdf.open(stream=data, filetype="pdf") as doc:
        return doc.page_count


@pytest.fixture
def pdf_factory() -> Callable[[Sequence[Sequence[bytes]]], bytes]:
    return build_pdf


@pytest.fixture
def sample_images() -> List[Image.Image]:
    return [
        gradient_image(40, 30, seed=1),
        gradient_image(20, 50, seed=2),
        gradient_image(33, 17, seed=3),
    ]


@pytest.fixture
def multi_page_pdf(sample_images) -> bytes:
    """Three pages: two images, no image, one image."""
    first, second, third = (image_bytes(image) for image in sample_images)
    return build_pdf([[first, second], [], [third]])


@pytest.fixture
def two_image_pdf() -> bytes:
    """Two pages with one image each."""
    return build_pdf(
        [
            [image_bytes(gradient_image(64, 48, seed=4))],
            [image_bytes(gradient_image(48, 64, seed=5))],
        ]
    )


@pytest.fixture
def blank_first_page_pdf() -> bytes:
    return build_pdf([[], [image_bytes(gradient_image(16, 16, seed=6))]])


@pytest.fixture
def imageless_pdf() -> bytes:
    return build_pdf([[], []])


@pytest.fixture
def zero_page_pdf() -> bytes:
    """A well-formed PDF whose page tree has no kids."""
    objects = [
        b"<</Type/Catalog/Pages 2 0 R>>",
        b"<</Type/Pages/Kids[]/Count 0>>",
    ]
    body = bytearray(b"%PDF-1.7\n")
    offsets = []
    for number, obj in enumerate(objects, start=1):
        offsets.append(len(body))
        body += b"%d 0 obj\n" % number + obj + b"\nendobj\n"

    xref_offset = len(body)
    body += b"xref\n0 %d\n" % (len(objects) + 1)
    body += b"0000000000 65535 f \n"
    for offset in offsets:
        body += b"%010d 00000 n \n" % offset
    body += b"trailer\n<</Size %d/Root 1 0 R>>\n" % (len(objects) + 1)
    body += b"startxref\n%d\n%%%%EOF\n" % xref_offset
    return bytes(body)
