# Path: core/models/domain.py
# Purpose: Define domain models shared across indexing and serving workflows.
# Layer: core/models.
# Details: Lightweight dataclasses describing the outcome of a media directory walk.

from dataclasses import dataclass, field
from pathlib import Path
from typing import List


@dataclass
class ScanFailure:
    """A directory that could not be listed during a walk."""

    path: Path
    error: OSError


@dataclass
class ScanResult:
    """Canonical image paths collected by a walk plus the subtrees it had to skip."""

    paths: List[str] = field(default_factory=list)
    failures: List[ScanFailure] = field(default_factory=list)
