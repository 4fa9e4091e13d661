"""
Exceptions raised while decoding images out of PDFs and writing them back.

I/O failures are never wrapped: ``OSError`` from the file system reaches the
caller unchanged.
"""

from typing import Optional


class PDFImageCodecError(Exception):
    """Base exception for all PDF image codec errors."""

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.default_message)
        self.message = message or self.default_message

    @property
    def default_message(self) -> str:
        return "An unknown PDF image codec error occurred."


class MalformedPDFError(PDFImageCodecError):
    """Raised when the document cannot be parsed, even with repair enabled."""

    @property
    def default_message(self) -> str:
        return "Invalid or corrupted PDF document."


class EncryptedPDFError(MalformedPDFError):
    """Raised when the document is encrypted and no valid password was given."""

    @property
    def default_message(self) -> str:
        return "PDF is encrypted and cannot be processed without a password."


class EmptyDocumentError(PDFImageCodecError):
    """Raised when a document parses but has no pages."""

    @property
    def default_message(self) -> str:
        return "PDF document has no pages."


class NoImageFoundError(PDFImageCodecError):
    """Raised when no embedded image could be located."""

    @property
    def default_message(self) -> str:
        return "No embedded image found."


class UnrecognizedFormatError(PDFImageCodecError):
    """Raised when no registered codec claims an image stream."""

    def __init__(
        self,
        message: str = "",
        file_type: Optional[str] = None,
        page_number: Optional[int] = None,
    ) -> None:
        self.file_type = file_type or None
        self.page_number = page_number
        if not message:
            message = self.default_message
            if self.file_type:
                message += f" (declared type: {self.file_type})"
            if page_number is not None:
                message += f" on page {page_number}"
        super().__init__(message)

    @property
    def default_message(self) -> str:
        return "Unrecognized image format."


class CodecDecodeError(PDFImageCodecError):
    """Raised when a codec claimed a stream but failed to decode it."""

    def __init__(self, message: str = "", codec: Optional[str] = None) -> None:
        self.codec = codec
        if codec and message:
            message = f"{codec}: {message}"
        super().__init__(message)

    @property
    def default_message(self) -> str:
        return "Image stream is truncated or corrupt."


class ReaderStateError(PDFImageCodecError):
    """Raised when a page-bound operation is used while the reader is not positioned."""

    @property
    def default_message(self) -> str:
        return "Reader is not positioned on a page."


class PageOutOfRangeError(PDFImageCodecError):
    """Raised when a requested page number is out of bounds."""

    @property
    def default_message(self) -> str:
        return "Requested page number is out of bounds."
