# Path: core/models/errors.py
# Purpose: Define the error taxonomy for index construction and thumbnail rendering.
# Layer: core/models.
# Details: Construction errors are fatal at startup; thumbnail errors are mapped to HTTP 500 per request.

from __future__ import annotations

from pathlib import Path
from typing import Optional


class MediaIndexError(Exception):
    """Base class for failures that prevent a media index from being built."""

    def __init__(self, root: Path, message: str) -> None:
        super().__init__(message)
        self.root = root


class NotADirectory(MediaIndexError):
    """The configured media root does not exist or is not a directory."""

    def __init__(self, root: Path) -> None:
        super().__init__(root, f"Path is not a directory: {root}")


class EmptyIndex(MediaIndexError):
    """The walk finished without finding a single eligible image."""

    def __init__(self, root: Path) -> None:
        super().__init__(root, f"Directory does not contain images: {root}")


class WalkFailed(MediaIndexError):
    """The media root itself could not be enumerated."""

    def __init__(self, root: Path, cause: OSError) -> None:
        super().__init__(root, f"Failed to list media root {root}: {cause}")
        self.cause = cause


class ThumbnailError(Exception):
    """Base class for per-request rendering failures.

    ``kind`` and ``message`` are safe to show to HTTP clients; ``cause`` is
    only meant for server-side logs.
    """

    kind: str = "Unknown"
    message: str = "Failed to render image"

    def __init__(self, path: str, cause: Optional[BaseException] = None) -> None:
        super().__init__(f"{self.message}: {path}: {cause}")
        self.path = path
        self.cause = cause


class ImageIOError(ThumbnailError):
    """Reading the source file failed."""

    kind = "IO"
    message = "IO error: failed to read image"


class ImageDecodeError(ThumbnailError):
    """The source bytes could not be identified or decoded."""

    kind = "Load"
    message = "Load error: failed to decode image"


class ImageEncodeError(ThumbnailError):
    """The resized image could not be encoded as JPEG."""

    kind = "Encode"
    message = "Encode error: failed to encode image"
