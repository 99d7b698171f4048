# Path: core/imaging/thumbnails.py
# Purpose: Turn a source image file into a JPEG thumbnail held in memory.
# Layer: core/imaging.
# Details: Read, decode, resize and encode steps each raise their own ThumbnailError subclass.

from __future__ import annotations

import io
from pathlib import Path

from PIL import Image

from core.models.errors import ImageDecodeError, ImageEncodeError, ImageIOError

DEFAULT_RESOLUTION = 720

# Modes Pillow's JPEG encoder writes without conversion.
JPEG_MODES = {"1", "L", "RGB", "CMYK"}

# Integer modes holding 16-bit samples; Pillow cannot reduce these while resizing.
WIDE_INT_MODES = {"I", "I;16", "I;16B", "I;16L", "I;16N"}


class ThumbnailRenderer:
    """Decode an image, shrink it into a square bounding box and re-encode it as JPEG."""

    def __init__(self, quality: int = 75) -> None:
        self.quality = quality

    def render(self, path: str, resolution: int = DEFAULT_RESOLUTION) -> bytes:
        """
        Return JPEG bytes of ``path`` fitted within ``resolution`` x ``resolution``.

        Aspect ratio is preserved and images are never upscaled.

        Raises:
        - ImageIOError: the file cannot be read.
        - ImageDecodeError: the bytes are not a decodable image, or its pixels cannot be resized.
        - ImageEncodeError: the pixels cannot be converted to or encoded as JPEG.
        """

        data = self._read(path)
        image = self._decode(path, data)
        image = self._to_jpeg_mode(path, image)
        try:
            image.thumbnail((resolution, resolution))
        except (OSError, ValueError) as exc:
            raise ImageDecodeError(path, exc) from exc
        return self._encode(path, image)

    @staticmethod
    def _read(path: str) -> bytes:
        try:
            return Path(path).read_bytes()
        except OSError as exc:
            raise ImageIOError(path, exc) from exc

    @staticmethod
    def _decode(path: str, data: bytes) -> Image.Image:
        """Identify the format from content rather than the file extension and load pixels."""

        try:
            image = Image.open(io.BytesIO(data))
            image.load()
        except (OSError, ValueError, SyntaxError, EOFError, Image.DecompressionBombError) as exc:
            raise ImageDecodeError(path, exc) from exc
        return image

    @staticmethod
    def _to_jpeg_mode(path: str, image: Image.Image) -> Image.Image:
        """Convert pixels to a mode both the resampler and the JPEG encoder accept.

        16-bit grayscale is scaled down to 8-bit ``L``; other unsupported modes become ``RGB``.
        """

        if image.mode in JPEG_MODES:
            return image
        try:
            if image.mode in WIDE_INT_MODES:
                return image.convert("I").point(lambda value: value * (1 / 256)).convert("L")
            return image.convert("RGB")
        except (OSError, ValueError) as exc:
            raise ImageEncodeError(path, exc) from exc

    def _encode(self, path: str, image: Image.Image) -> bytes:
        buffer = io.BytesIO()
        try:
            image.save(buffer, format="JPEG", quality=self.quality)
        except (OSError, ValueError, KeyError) as exc:
            raise ImageEncodeError(path, exc) from exc
        return buffer.getvalue()
