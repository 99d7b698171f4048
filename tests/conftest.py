import pytest

from .helpers import write_image


@pytest.fixture()
def media_root(tmp_path):
    root = tmp_path / "media"
    root.mkdir()
    return root


@pytest.fixture()
def single_image_root(media_root):
    write_image(media_root / "only.png", size=(1600, 900))
    return media_root
