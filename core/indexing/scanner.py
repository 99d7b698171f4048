# Path: core/indexing/scanner.py
# Purpose: Walk a media folder and collect canonical paths of eligible image files.
# Layer: core/indexing.
# Details: Unreadable subdirectories are logged and skipped; only a failure to list the root propagates.

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import List, Optional, Set, Tuple

from core.models.domain import ScanFailure, ScanResult

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = {".png", ".jpg", ".jpeg"}


def canonical_image_path(entry: os.DirEntry) -> Optional[str]:
    """Return the resolved absolute path of ``entry`` if it is an eligible image file.

    Directories, special files, names without a supported extension and
    entries that cannot be resolved (broken symlinks) yield ``None``.
    """

    try:
        if not entry.is_file():
            return None
    except OSError:
        return None

    if os.path.splitext(entry.name)[1].lower() not in SUPPORTED_EXTENSIONS:
        return None

    try:
        return str(Path(entry.path).resolve(strict=True))
    except (OSError, RuntimeError):
        return None


class ImageScanner:
    """Depth-first scan of a directory tree for supported image files."""

    def __init__(self, root: Path, follow_symlinks: bool = True) -> None:
        self.root = Path(root)
        self.follow_symlinks = follow_symlinks

    def scan(self) -> ScanResult:
        """Walk the tree below ``root`` and return every eligible image path.

        Raises ``OSError`` if the root directory itself cannot be listed.
        """

        result = ScanResult()
        visited: Set[Tuple[int, int]] = set()
        pending: List[Path] = []

        self._first_visit(self.root, visited)
        self._scan_directory(self.root, result, pending, visited)

        while pending:
            directory = pending.pop()
            try:
                self._scan_directory(directory, result, pending, visited)
            except OSError as exc:
                logger.warning("Error accessing subdirectory %s: %s", directory, exc)
                result.failures.append(ScanFailure(path=directory, error=exc))

        return result

    def _scan_directory(
        self,
        directory: Path,
        result: ScanResult,
        pending: List[Path],
        visited: Set[Tuple[int, int]],
    ) -> None:
        with os.scandir(directory) as iterator:
            entries = list(iterator)

        for entry in entries:
            if self._is_directory(entry):
                child = Path(entry.path)
                if self._first_visit(child, visited):
                    pending.append(child)
                else:
                    logger.debug("Skipping already visited directory %s", child)
                continue

            path = canonical_image_path(entry)
            if path is not None:
                result.paths.append(path)

    def _is_directory(self, entry: os.DirEntry) -> bool:
        try:
            return entry.is_dir(follow_symlinks=self.follow_symlinks)
        except OSError:
            return False

    @staticmethod
    def _first_visit(directory: Path, visited: Set[Tuple[int, int]]) -> bool:
        """Record ``directory`` by device and inode, returning False when it was seen before."""

        try:
            stat = os.stat(directory)
        except OSError:
            # Listing will fail too and is reported there.
            return True
        key = (stat.st_dev, stat.st_ino)
        if key in visited:
            return False
        visited.add(key)
        return True
