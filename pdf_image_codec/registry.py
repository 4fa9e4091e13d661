"""
Format registry - signature based dispatch over raster codecs.

Codecs are probed in registration order; the first one whose probe accepts
the leading bytes decodes the stream. Fallback codecs are keyed by the file
type the document declared for a stream and are only tried when normal
dispatch fails.
"""

import logging
from io import BytesIO
from typing import Dict, List, Optional, Sequence
from PIL import Image
from pymupdf import Pixmap

from .exceptions import CodecDecodeError, PDFImageCodecError, UnrecognizedFormatError
from .models import ImageConfig
from .utils.image_processing import pixmap_to_image

logger = logging.getLogger(__name__)

DecodedImage = Image.Image


class ImageCodec:
    """Capability shared by every codec the registry can dispatch to."""

    name: str = ""

    def probe(self, data: bytes) -> bool:
        raise NotImplementedError

    def decode(self, data: bytes) -> DecodedImage:
        raise NotImplementedError

    def decode_config(self, data: bytes) -> ImageConfig:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


class PillowCodec(ImageCodec):
    """Decodes a single Pillow format recognised by one of its byte signatures."""

    def __init__(self, name: str, signatures: Sequence[bytes], pil_format: str):
        self.name = name
        self.signatures = tuple(signatures)
        self.pil_format = pil_format

    def probe(self, data: bytes) -> bool:
        return data.startswith(self.signatures)

    def _open(self, data: bytes) -> Image.Image:
        return Image.open(BytesIO(data), formats=[self.pil_format])

    def decode(self, data: bytes) -> DecodedImage:
        image = self._open(data)
        image.load()
        return image

    def decode_config(self, data: bytes) -> ImageConfig:
        with self._open(data) as image:
            return ImageConfig(mode=image.mode, width=image.width, height=image.height)


class WebPCodec(PillowCodec):
    """WEBP lives inside a RIFF container, so the signature is not a plain prefix."""

    def __init__(self):
        super().__init__("webp", (b"RIFF",), "WEBP")

    def probe(self, data: bytes) -> bool:
        return data[:4] == b"RIFF" and data[8:12] == b"WEBP"


class MuPDFTiffCodec(ImageCodec):
    """Dedicated TIFF decoder for variants Pillow does not cover."""

    name = "tiff"

    def probe(self, data: bytes) -> bool:
        return data.startswith((b"II*\x00", b"MM\x00*"))

    def decode(self, data: bytes) -> DecodedImage:
        return pixmap_to_image(Pixmap(data))

    def decode_config(self, data: bytes) -> ImageConfig:
        pix = Pixmap(data)
        components = pix.n - pix.alpha
        mode = {1: "L", 3: "RGB", 4: "CMYK"}.get(components, "RGB")
        if pix.alpha:
            mode = "LA" if components == 1 else "RGBA"
        return ImageConfig(mode=mode, width=pix.width, height=pix.height)


class FormatRegistry:
    """Ordered collection of codecs, isolated per instance."""

    def __init__(self, codecs: Optional[Sequence[ImageCodec]] = None):
        self._codecs: List[ImageCodec] = list(codecs or [])
        self._fallbacks: Dict[str, ImageCodec] = {}

    @property
    def codecs(self) -> List[ImageCodec]:
        return list(self._codecs)

    def register(self, codec: ImageCodec) -> None:
        """Add a codec at the end of the probe order."""
        logger.debug(f"Registering codec {codec.name}")
        self._codecs.append(codec)

    def register_fallback(self, file_type: str, codec: ImageCodec) -> None:
        """Use codec when dispatch fails for streams declared as file_type."""
        self._fallbacks[file_type] = codec

    def find(self, data: bytes) -> Optional[ImageCodec]:
        """Return the first codec whose probe accepts data."""
        for codec in self._codecs:
            if codec.probe(data):
                return codec
        return None

    def decode_image(self, data: bytes, file_type: str = "") -> DecodedImage:
        """Decode an image whose format is identified by its signature."""
        return self._dispatch(data, file_type, config_only=False)

    def decode_image_config(self, data: bytes, file_type: str = "") -> ImageConfig:
        """Read color model and dimensions without materializing pixels."""
        return self._dispatch(data, file_type, config_only=True)

    def _dispatch(self, data: bytes, file_type: str, config_only: bool):
        codec = self.find(data)
        fallback = self._fallbacks.get(file_type) if file_type else None

        if codec is None:
            if fallback is None:
                raise UnrecognizedFormatError(file_type=file_type)
            logger.debug(f"No codec matched, retrying with {fallback.name} fallback")
            return self._run(fallback, data, config_only)

        try:
            return self._run(codec, data, config_only)
        except CodecDecodeError:
            if fallback is None or fallback is codec:
                raise
            logger.warning(
                f"Codec {codec.name} failed on declared {file_type} stream, retrying with fallback"
            )
            return self._run(fallback, data, config_only)

    @staticmethod
    def _run(codec: ImageCodec, data: bytes, config_only: bool):
        try:
            if config_only:
                return codec.decode_config(data)
            return codec.decode(data)
        except PDFImageCodecError:
            raise
        except Exception as e:
            raise CodecDecodeError(str(e), codec=codec.name) from e


def default_registry() -> FormatRegistry:
    """Build a registry with the raster codecs and the TIFF fallback."""
    registry = FormatRegistry(
        [
            PillowCodec("jpeg", (b"\xff\xd8",), "JPEG"),
            PillowCodec("png", (b"\x89PNG\r\n\x1a\n",), "PNG"),
            PillowCodec("gif", (b"GIF87a", b"GIF89a"), "GIF"),
            PillowCodec("tiff", (b"II*\x00", b"MM\x00*"), "TIFF"),
            WebPCodec(),
            PillowCodec("bmp", (b"BM",), "BMP"),
        ]
    )
    registry.register_fallback("tiff", MuPDFTiffCodec())
    return registry
