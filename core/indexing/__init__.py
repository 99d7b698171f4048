# Path: core/indexing/__init__.py
# Purpose: Package initializer for indexing utilities.
# Layer: core/indexing.
# Details: Exposes the image scanner, the path filter and the media index.

from .scanner import SUPPORTED_EXTENSIONS, ImageScanner, canonical_image_path
from .media_index import MediaIndex

__all__ = ["SUPPORTED_EXTENSIONS", "ImageScanner", "MediaIndex", "canonical_image_path"]
