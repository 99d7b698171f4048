# Path: core/indexing/media_index.py
# Purpose: Hold the immutable set of image paths served by the random art endpoint.
# Layer: core/indexing.
# Details: Built once at startup from the configured media root; shared read-only by request handlers.

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Tuple

from core.models.errors import EmptyIndex, NotADirectory, WalkFailed
from .scanner import ImageScanner

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MediaIndex:
    """Indexed image paths with uniform random selection.

    The index never changes after construction, so concurrent readers need
    no locking. Files removed after indexing are reported by the renderer.
    """

    paths: Tuple[str, ...]
    root: Optional[Path] = None
    rng: random.Random = field(default_factory=random.SystemRandom, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not self.paths:
            raise EmptyIndex(self.root or Path("."))

    @classmethod
    def build(
        cls,
        root: Path | str,
        follow_symlinks: bool = True,
        rng: Optional[random.Random] = None,
    ) -> "MediaIndex":
        """
        Scan ``root`` and return an index of every eligible image below it.

        Raises:
        - NotADirectory: ``root`` is missing or not a directory.
        - WalkFailed: ``root`` exists but cannot be listed.
        - EmptyIndex: the walk found no eligible image.
        """

        root = Path(root)
        if not root.is_dir():
            raise NotADirectory(root)

        scanner = ImageScanner(root, follow_symlinks=follow_symlinks)
        try:
            result = scanner.scan()
        except OSError as exc:
            raise WalkFailed(root, exc) from exc

        if not result.paths:
            raise EmptyIndex(root)

        logger.info(
            "Indexed %d images under %s (%d unreadable directories skipped)",
            len(result.paths),
            root,
            len(result.failures),
        )
        return cls(paths=tuple(result.paths), root=root, rng=rng or random.SystemRandom())

    def count(self) -> int:
        """Return the number of indexed images."""

        return len(self.paths)

    def __len__(self) -> int:
        return len(self.paths)

    def random_path(self) -> str:
        """Return one indexed path chosen uniformly at random."""

        return self.paths[self.rng.randrange(len(self.paths))]
