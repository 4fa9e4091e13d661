"""
Data models for PDF image decoding and encoding.
"""

from pathlib import Path
from typing import Tuple, Optional, Literal
from pydantic import BaseModel, Field, field_validator

DEFAULT_QUALITY = 75


class ImageMetadata(BaseModel):
    """Metadata for an image referenced by a page."""

    xref: int = Field(..., description="Cross-reference number of the image")
    smask: int = Field(..., description="Soft mask xref (0 if none)")
    width: int = Field(..., description="Width of the image in pixels")
    height: int = Field(..., description="Height of the image in pixels")
    bpc: int = Field(..., description="Bits per component")
    colorspace: str = Field(..., description="Color space of the image")
    alt_colorspace: str = Field(..., description="Alternate color space, if any")
    name: str = Field(..., description="Resource name of the image on the page")
    filter_type: str = Field(..., description="Filter type used for the image")

    @classmethod
    def from_tuple(cls, img_tuple: Tuple) -> "ImageMetadata":
        """Create ImageMetadata from the tuple returned by get_page_images()."""
        # full=True appends the referencer xref as a tenth element
        if len(img_tuple) not in (9, 10):
            raise ValueError(
                f"Expected 9 or 10 elements in image tuple, got {len(img_tuple)}: {img_tuple}"
            )

        return cls(
            xref=img_tuple[0],
            smask=img_tuple[1],
            width=img_tuple[2],
            height=img_tuple[3],
            bpc=img_tuple[4],
            colorspace=img_tuple[5],
            alt_colorspace=img_tuple[6],
            name=img_tuple[7],
            filter_type=img_tuple[8],
        )

    @property
    def has_data(self) -> bool:
        """Check if the image has meaningful data."""
        return self.xref != 0

    @property
    def has_mask(self) -> bool:
        """Check if the image has a transparency mask."""
        return self.smask > 0


class RawImageStream(BaseModel):
    """An embedded image payload, still encoded, tied to the page it came from."""

    page_number: int = Field(..., description="1-based page the image was found on")
    xref: int = Field(..., description="Cross-reference number of the image")
    file_type: str = Field(default="", description="Detected file type, empty if unknown")
    width: int = Field(default=0, description="Width of the image in pixels")
    height: int = Field(default=0, description="Height of the image in pixels")
    colorspace: int = Field(default=0, description="Number of color channels")
    data: bytes = Field(..., description="Encoded image bytes")


class ImageConfig(BaseModel):
    """Color model and dimensions of an image, read without decoding pixels."""

    mode: str = Field(..., description="Color model (Pillow mode string)")
    width: int
    height: int


class EncodeOptions(BaseModel):
    """Encoding parameters. Quality ranges from 1 to 100 inclusive, higher is better."""

    quality: int = Field(default=DEFAULT_QUALITY, description="JPEG quality (1-100)")

    @field_validator("quality")
    @classmethod
    def clamp_quality(cls, v):
        if v < 1:
            return 1
        if v > 100:
            return 100
        return v


class EncodedImage(BaseModel):
    """A JPEG-encoded image ready to be placed on its own page."""

    data: bytes = Field(..., description="JPEG bytes")
    width: int = Field(..., description="Width of the image in pixels")
    height: int = Field(..., description="Height of the image in pixels")

    @field_validator("width", "height")
    @classmethod
    def validate_positive(cls, v):
        if v <= 0:
            raise ValueError("Image dimensions must be positive")
        return v


class DocumentConfig(BaseModel):
    """Configuration for opening a PDF document."""

    validation: Literal["relaxed", "strict"] = Field(
        default="relaxed",
        description="'relaxed' accepts documents that needed repair, 'strict' rejects them",
    )
    optimize: bool = Field(
        default=True, description="Merge duplicate objects and compress streams after parsing"
    )
    password: Optional[str] = Field(
        default=None, description="Password for encrypted documents"
    )


class ReaderConfig(DocumentConfig):
    """Configuration for page-by-page decoding."""

    failure_policy: Literal["strict", "lenient"] = Field(
        default="strict",
        description="'strict' fails on the first page decode error, 'lenient' logs and skips the page",
    )


class AppendResult(BaseModel):
    """Result of appending images to a PDF file."""

    output_path: Path
    existing_pages: int
    appended_pages: int
    total_pages: int
    processing_time: float
