from pathlib import Path

from PIL import Image


def write_image(path: Path, size=(64, 48), color=(200, 40, 40), mode="RGB", fmt=None) -> Path:
    """Write a solid-color image, creating parent folders as needed."""
    path.parent.mkdir(parents=True, exist_ok=True)
    if fmt is None:
        fmt = "PNG" if path.suffix.lower() == ".png" else "JPEG"
    Image.new(mode, size, color).save(path, format=fmt)
    return path


class ScriptedRandom:
    """Stand-in RNG returning preset indexes from randrange."""

    def __init__(self, picks):
        self.picks = list(picks)

    def randrange(self, stop):
        pick = self.picks.pop(0)
        assert 0 <= pick < stop
        return pick
