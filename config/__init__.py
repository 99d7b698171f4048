# Path: config/__init__.py
# Purpose: Package initializer for configuration module.
# Layer: config.
# Details: Exposes the settings model and logging setup.

from .log_setup import configure_logging
from .settings import AppSettings

__all__ = ["AppSettings", "configure_logging"]
