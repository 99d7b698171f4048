# Path: core/models/__init__.py
# Purpose: Package initializer for domain model definitions.
# Layer: core/models.
# Details: Exposes scan result dataclasses and the service error taxonomy.

from .domain import ScanFailure, ScanResult
from .errors import (
    EmptyIndex,
    ImageDecodeError,
    ImageEncodeError,
    ImageIOError,
    MediaIndexError,
    NotADirectory,
    ThumbnailError,
    WalkFailed,
)

__all__ = [
    "EmptyIndex",
    "ImageDecodeError",
    "ImageEncodeError",
    "ImageIOError",
    "MediaIndexError",
    "NotADirectory",
    "ScanFailure",
    "ScanResult",
    "ThumbnailError",
    "WalkFailed",
]
