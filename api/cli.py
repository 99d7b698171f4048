# Path: api/cli.py
# Purpose: Command-line entry point that configures, indexes, and serves the random art API.
# Layer: api.
# Details: Loads settings from TOML and flags, sets up logging, builds the index, then runs uvicorn.

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

import uvicorn
from pydantic import ValidationError

from config import AppSettings, configure_logging
from core.indexing.media_index import MediaIndex
from core.models.errors import MediaIndexError
from .app import create_app

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Serve random thumbnails from an image folder")
    parser.add_argument("--config", type=Path, default=None, help="TOML settings file")
    parser.add_argument("--media-root", type=Path, default=None, help="Folder scanned for images")
    parser.add_argument("--resolution", type=int, default=None, help="Thumbnail bounding box edge in pixels")
    parser.add_argument("--listen", default=None, help="Listen address as host:port")
    parser.add_argument("--log-level", default=None, help="Logging level (DEBUG, INFO, ...)")
    parser.add_argument("--log-file", type=Path, default=None, help="Write logs to this file")
    return parser


def load_settings(args: argparse.Namespace) -> AppSettings:
    """Merge the optional TOML file with command-line overrides."""

    overrides = {
        "media_root": args.media_root,
        "resolution": args.resolution,
        "listen_address": args.listen,
        "log_level": args.log_level,
        "log_file": args.log_file,
    }
    if args.config is not None:
        return AppSettings.from_toml(args.config, **overrides)
    return AppSettings.from_env(**overrides)


def main(argv: Optional[List[str]] = None) -> int:
    """Run the server; return a non-zero exit status when startup fails."""

    args = build_parser().parse_args(argv)

    try:
        settings = load_settings(args)
    except (OSError, ValueError, ValidationError) as exc:
        configure_logging()
        logger.error("Invalid configuration: %s", exc)
        return 2

    configure_logging(settings.log_level, settings.log_file)

    try:
        media_index = MediaIndex.build(settings.media_root, follow_symlinks=settings.follow_symlinks)
    except MediaIndexError as exc:
        logger.error("Failed to load media: %s", exc)
        return 1

    app = create_app(settings, media_index=media_index)
    logger.info("Server started, listening on http://%s", settings.listen_address)
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=settings.log_level.lower())
    return 0


if __name__ == "__main__":
    sys.exit(main())
