"""
Page Reader - lazily extracts and decodes images page by page.
"""

import logging
import threading
from enum import Enum
from typing import BinaryIO, List, Optional, Tuple

from .document import Document, extract_page_images, open_document
from .exceptions import (
    NoImageFoundError,
    PDFImageCodecError,
    ReaderStateError,
    UnrecognizedFormatError,
)
from .models import ImageConfig, RawImageStream, ReaderConfig
from .registry import DecodedImage, FormatRegistry, default_registry

logger = logging.getLogger(__name__)


class ReaderState(str, Enum):
    FRESH = "fresh"
    POSITIONED = "positioned"
    EXHAUSTED = "exhausted"


class PageReader:
    """
    Cursor over the pages of a Document.

    The cursor starts at 0 and addresses pages from 1. ``advance`` is the only
    way to move it; once it passes the last page the reader is exhausted and
    stays that way. Cursor moves and every extraction from the underlying
    document hold the same lock, so one reader can be shared between threads.
    """

    def __init__(
        self,
        document: Document,
        registry: Optional[FormatRegistry] = None,
        config: Optional[ReaderConfig] = None,
    ):
        self.document = document
        self.registry = registry or default_registry()
        self.config = config or ReaderConfig()
        self._cursor = 0
        self._lock = threading.RLock()

    @classmethod
    def from_bytes(
        cls,
        data: bytes,
        registry: Optional[FormatRegistry] = None,
        config: Optional[ReaderConfig] = None,
    ) -> "PageReader":
        config = config or ReaderConfig()
        return cls(open_document(data, config), registry=registry, config=config)

    @classmethod
    def from_stream(
        cls,
        stream: BinaryIO,
        registry: Optional[FormatRegistry] = None,
        config: Optional[ReaderConfig] = None,
    ) -> "PageReader":
        return cls.from_bytes(stream.read(), registry=registry, config=config)

    @property
    def page_count(self) -> int:
        return self.document.page_count

    @property
    def cursor(self) -> int:
        with self._lock:
            return self._cursor

    @property
    def state(self) -> ReaderState:
        with self._lock:
            return self._state()

    def _state(self) -> ReaderState:
        if self._cursor == 0:
            return ReaderState.FRESH
        if self._cursor <= self.page_count:
            return ReaderState.POSITIONED
        return ReaderState.EXHAUSTED

    def advance(self) -> bool:
        """Move to the next page. Returns False once the reader is exhausted."""
        with self._lock:
            if self._cursor <= self.page_count:
                self._cursor += 1
            return self._state() is ReaderState.POSITIONED

    def extract_current_page(self) -> List[RawImageStream]:
        """Extract the raw image streams of the page under the cursor."""
        with self._lock:
            if self._state() is not ReaderState.POSITIONED:
                raise ReaderStateError(
                    f"Cannot extract while reader is {self._state().value}"
                )
            return extract_page_images(self.document, self._cursor)

    def next_page(self) -> Optional[Tuple[int, List[RawImageStream]]]:
        """Advance and extract under one lock hold; None once exhausted."""
        with self._lock:
            if not self.advance():
                return None
            return self._cursor, self.extract_current_page()

    def decode_current_page(self) -> List[DecodedImage]:
        """Extract and decode every image on the page under the cursor."""
        return self.decode_streams(self.extract_current_page())

    def extract_page(self, page_number: int) -> List[RawImageStream]:
        """Extract the images of any page without moving the cursor."""
        with self._lock:
            return extract_page_images(self.document, page_number)

    def decode_page(self, page_number: int) -> List[DecodedImage]:
        """Decode the images of any page without moving the cursor."""
        return self.decode_streams(self.extract_page(page_number))

    def decode_streams(self, streams: List[RawImageStream]) -> List[DecodedImage]:
        images: List[DecodedImage] = []
        for stream in streams:
            try:
                images.append(self.registry.decode_image(stream.data, stream.file_type))
            except UnrecognizedFormatError as e:
                raise UnrecognizedFormatError(
                    file_type=stream.file_type or e.file_type,
                    page_number=stream.page_number,
                ) from e
        return images

    def close(self) -> None:
        self.document.close()

    def __enter__(self) -> "PageReader":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def _first_page_streams(reader: PageReader) -> List[RawImageStream]:
    reader.advance()
    streams = reader.extract_current_page()
    if not streams:
        raise NoImageFoundError("No embedded image found on page 1")
    return streams


def decode_first_page(
    data: bytes,
    registry: Optional[FormatRegistry] = None,
    config: Optional[ReaderConfig] = None,
) -> DecodedImage:
    """Decode the first image of the first page of a PDF."""
    with PageReader.from_bytes(data, registry=registry, config=config) as reader:
        streams = _first_page_streams(reader)
        return reader.decode_streams(streams[:1])[0]


def inspect_first_page_config(
    data: bytes,
    registry: Optional[FormatRegistry] = None,
    config: Optional[ReaderConfig] = None,
) -> ImageConfig:
    """Return the color model and dimensions of the first image without decoding it."""
    with PageReader.from_bytes(data, registry=registry, config=config) as reader:
        stream = _first_page_streams(reader)[0]
        try:
            return reader.registry.decode_image_config(stream.data, stream.file_type)
        except UnrecognizedFormatError as e:
            raise UnrecognizedFormatError(
                file_type=stream.file_type or e.file_type, page_number=1
            ) from e


def decode_all_pages(
    data: bytes,
    registry: Optional[FormatRegistry] = None,
    config: Optional[ReaderConfig] = None,
) -> List[DecodedImage]:
    """
    Decode every image of every page, in page order then stream order.

    Pages without images are skipped. A page that fails to decode aborts the
    call under the strict failure policy and is logged and skipped under the
    lenient one. A document that yields no image at all is an error.
    """
    config = config or ReaderConfig()
    images: List[DecodedImage] = []
    skipped: List[int] = []

    with PageReader.from_bytes(data, registry=registry, config=config) as reader:
        logger.info(f"Decoding {reader.page_count} pages ({config.failure_policy} policy)")
        while reader.advance():
            page_number = reader.cursor
            try:
                page_images = reader.decode_current_page()
            except PDFImageCodecError as e:
                if config.failure_policy == "strict":
                    raise
                logger.warning(f"Skipping page {page_number}: {e}")
                skipped.append(page_number)
                continue
            images.extend(page_images)

    if not images:
        message = "No embedded image found in document"
        if skipped:
            message += f" (skipped pages: {skipped})"
        raise NoImageFoundError(message)

    logger.info(f"Decoded {len(images)} images")
    return images
