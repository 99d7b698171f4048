# Path: core/imaging/__init__.py
# Purpose: Package initializer for image transformation helpers.
# Layer: core/imaging.
# Details: Exposes the thumbnail renderer used by the HTTP layer.

from .thumbnails import DEFAULT_RESOLUTION, ThumbnailRenderer

__all__ = ["DEFAULT_RESOLUTION", "ThumbnailRenderer"]
