"""
PDFImageCodec - Decode images embedded in PDFs and package images into PDFs

A Python package exposing PDF documents through a generic image interface:
images are extracted page by page and decoded with the registered raster
codecs, and decoded images are written back as a PDF with one JPEG page each,
optionally appended atomically to an existing file.
"""

__version__ = "1.0.0"

from .append import append_images, load_image_file
from .document import Document, extract_page_images, import_images, open_document
from .exceptions import (
    PDFImageCodecError,
    MalformedPDFError,
    EncryptedPDFError,
    EmptyDocumentError,
    NoImageFoundError,
    UnrecognizedFormatError,
    CodecDecodeError,
    ReaderStateError,
    PageOutOfRangeError,
)
from .models import (
    AppendResult,
    DocumentConfig,
    EncodedImage,
    EncodeOptions,
    ImageConfig,
    ImageMetadata,
    RawImageStream,
    ReaderConfig,
)
from .pdf_format import PdfCodec, register_pdf_format
from .reader import (
    PageReader,
    ReaderState,
    decode_all_pages,
    decode_first_page,
    inspect_first_page_config,
)
from .registry import FormatRegistry, ImageCodec, default_registry
from .writer import encode, encode_to_bytes, encode_to_existing, resolve_quality

__all__ = [
    "append_images",
    "load_image_file",
    "Document",
    "open_document",
    "extract_page_images",
    "import_images",
    "PDFImageCodecError",
    "MalformedPDFError",
    "EncryptedPDFError",
    "EmptyDocumentError",
    "NoImageFoundError",
    "UnrecognizedFormatError",
    "CodecDecodeError",
    "ReaderStateError",
    "PageOutOfRangeError",
    "AppendResult",
    "DocumentConfig",
    "EncodedImage",
    "EncodeOptions",
    "ImageConfig",
    "ImageMetadata",
    "RawImageStream",
    "ReaderConfig",
    "PdfCodec",
    "register_pdf_format",
    "PageReader",
    "ReaderState",
    "decode_all_pages",
    "decode_first_page",
    "inspect_first_page_config",
    "FormatRegistry",
    "ImageCodec",
    "default_registry",
    "encode",
    "encode_to_bytes",
    "encode_to_existing",
    "resolve_quality",
]
