# Path: config/log_setup.py
# Purpose: Configure process-wide logging for the server.
# Layer: config.
# Details: Routes all loggers to a single file or stderr handler.

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = "INFO", log_file: Optional[Path] = None) -> logging.Handler:
    """Install one root handler at ``level`` and return it."""

    if log_file is not None:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(log_file, encoding="utf-8")
    else:
        handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    logging.basicConfig(level=level.upper(), handlers=[handler], force=True)
    return handler
