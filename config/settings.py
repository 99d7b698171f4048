# Path: config/settings.py
# Purpose: Provide typed application configuration models.
# Layer: config.
# Details: Centralizes media root, thumbnail resolution, listen address, and logging settings.

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, PositiveInt, field_validator, model_validator

LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


class AppSettings(BaseModel):
    """Top-level application settings shared by the server and the command line."""

    media_root: Path = Field(
        default=Path("/mnt/media/Images/Art"),
        description="Root folder scanned for images at startup.",
    )
    resolution: PositiveInt = Field(default=720, description="Bounding box edge for served thumbnails.")
    host: str = Field(default="0.0.0.0", description="Interface the HTTP server binds to.")
    port: int = Field(default=3000, ge=1, le=65535, description="Port the HTTP server binds to.")
    jpeg_quality: int = Field(default=75, ge=1, le=95, description="Quality used when encoding thumbnails.")
    follow_symlinks: bool = Field(default=True, description="Descend into symlinked directories while indexing.")
    log_level: str = Field(default="INFO", description="Verbosity level for application logs.")
    log_file: Optional[Path] = Field(default=None, description="Write logs to this file instead of stderr.")

    @model_validator(mode="before")
    @classmethod
    def split_listen_address(cls, data: Any) -> Any:
        """Accept ``listen_address = "host:port"`` as an alternative to host and port."""

        if not isinstance(data, dict) or data.get("listen_address") is None:
            return data

        data = dict(data)
        address = str(data.pop("listen_address"))
        host, sep, port = address.rpartition(":")
        if host.startswith("[") and host.endswith("]"):
            host = host[1:-1]
        if not sep or not host or not port.isdigit():
            raise ValueError(f"listen_address must look like host:port, got {address!r}")
        data["host"] = host
        data["port"] = int(port)
        return data

    @field_validator("log_level")
    @classmethod
    def check_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {sorted(LOG_LEVELS)}, got {value!r}")
        return level

    @property
    def listen_address(self) -> str:
        """Return the bind address as ``host:port``."""

        if ":" in self.host:
            return f"[{self.host}]:{self.port}"
        return f"{self.host}:{self.port}"

    @classmethod
    def from_toml(cls, path: Path | str, **overrides: Any) -> "AppSettings":
        """Load settings from a TOML file, letting non-None ``overrides`` win.

        Keys are read from the top level of the document or from a ``[server]`` table.
        """

        payload = tomllib.loads(Path(path).read_text(encoding="utf-8"))
        data: Dict[str, Any] = dict(payload.get("server", payload))
        data.update({key: value for key, value in overrides.items() if value is not None})
        return cls(**data)

    @classmethod
    def from_env(cls, **overrides: Any) -> "AppSettings":
        """Instantiate settings from ``RANDOM_ART_*`` environment variables when available."""

        env_keys = {
            "media_root": "RANDOM_ART_MEDIA_ROOT",
            "resolution": "RANDOM_ART_RESOLUTION",
            "listen_address": "RANDOM_ART_LISTEN_ADDRESS",
            "log_level": "RANDOM_ART_LOG_LEVEL",
            "log_file": "RANDOM_ART_LOG_FILE",
        }
        data: Dict[str, Any] = {}
        for field_name, env_name in env_keys.items():
            value = os.environ.get(env_name)
            if value:
                data[field_name] = value
        data.update({key: value for key, value in overrides.items() if value is not None})
        return cls(**data)


__all__ = ["AppSettings"]
