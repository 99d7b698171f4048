import io
import logging
import shutil
import threading
from concurrent.futures import ThreadPoolExecutor

import pytest
from fastapi.testclient import TestClient
from PIL import Image

from api import create_app
from config import AppSettings
from core.indexing.media_index import MediaIndex
from core.models.errors import ImageEncodeError, NotADirectory
from .helpers import ScriptedRandom, write_image


class FailingEncodeRenderer:
    def render(self, path, resolution):
        raise ImageEncodeError(path, ValueError("cannot write mode I;16 as JPEG"))


class BlockingRenderer:
    """Holds every render until released, counting how many run at once."""

    def __init__(self, payload, expected):
        self.payload = payload
        self.expected = expected
        self.in_flight = 0
        self.all_in_flight = threading.Event()
        self.release = threading.Event()
        self._lock = threading.Lock()

    def render(self, path, resolution):
        with self._lock:
            self.in_flight += 1
            if self.in_flight >= self.expected:
                self.all_in_flight.set()
        self.release.wait(timeout=10)
        with self._lock:
            self.in_flight -= 1
        return self.payload


def _client(root, **kwargs):
    settings = AppSettings(media_root=root, **kwargs)
    return TestClient(create_app(settings))


def test_random_art_returns_jpeg(single_image_root):
    client = _client(single_image_root)

    response = client.get("/get_random_art")

    assert response.status_code == 200
    assert response.headers["content-type"] == "image/jpeg"
    image = Image.open(io.BytesIO(response.content))
    assert image.format == "JPEG"
    assert image.size == (720, 405)


def test_random_art_honors_configured_resolution(single_image_root):
    client = _client(single_image_root, resolution=160)

    response = client.get("/get_random_art")

    assert response.status_code == 200
    assert Image.open(io.BytesIO(response.content)).size == (160, 90)


def test_health_reports_image_count(media_root):
    write_image(media_root / "a.png")
    write_image(media_root / "nested" / "b.jpg")
    client = _client(media_root)

    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok", "images": 2}


def test_create_app_fails_for_missing_root(tmp_path):
    with pytest.raises(NotADirectory):
        create_app(AppSettings(media_root=tmp_path / "nope"))


def test_deleted_file_fails_only_its_own_request(media_root):
    keep = write_image(media_root / "keep.png")
    drop = write_image(media_root / "drop.png")
    index = MediaIndex(paths=(str(keep.resolve()), str(drop.resolve())), rng=ScriptedRandom([0, 1, 0]))
    client = TestClient(create_app(AppSettings(media_root=media_root), media_index=index))
    drop.unlink()

    first = client.get("/get_random_art")
    second = client.get("/get_random_art")
    third = client.get("/get_random_art")

    assert first.status_code == 200
    assert second.status_code == 500
    assert second.headers["content-type"].startswith("text/plain")
    assert second.text == "IO error: failed to read image"
    assert third.status_code == 200


def test_index_keeps_serving_after_root_moves(single_image_root, tmp_path):
    inside = (single_image_root / "only.png").resolve()
    outside = write_image(tmp_path / "elsewhere" / "kept.jpg").resolve()
    index = MediaIndex(paths=(str(inside), str(outside)), rng=ScriptedRandom([0, 1, 0, 1]))
    client = TestClient(create_app(AppSettings(media_root=single_image_root), media_index=index))
    assert client.get("/get_random_art").status_code == 200

    shutil.move(str(single_image_root), str(tmp_path / "moved"))

    still_indexed = client.get("/get_random_art")
    moved_away = client.get("/get_random_art")
    after_failure = client.get("/get_random_art")

    assert still_indexed.status_code == 200
    assert still_indexed.headers["content-type"] == "image/jpeg"
    assert moved_away.status_code == 500
    assert moved_away.text.startswith("IO error")
    assert after_failure.status_code == 200
    assert index.count() == 2


def test_corrupt_image_maps_to_load_error_without_leaking_cause(media_root, caplog):
    broken = media_root / "broken.jpg"
    broken.write_bytes(b"\xff\xd8\xff\xe0 definitely not a jpeg")
    rng = ScriptedRandom([0])
    index = MediaIndex(paths=(str(broken.resolve()),), rng=rng)
    client = TestClient(create_app(AppSettings(media_root=media_root), media_index=index))

    with caplog.at_level(logging.ERROR, logger="api.app"):
        response = client.get("/get_random_art")

    assert response.status_code == 500
    assert response.text == "Load error: failed to decode image"
    assert "broken.jpg" not in response.text
    assert "broken.jpg" in caplog.text
    # A failed render is not retried with another pick.
    assert rng.picks == []


def test_encode_failure_maps_to_encode_error(single_image_root):
    app = create_app(AppSettings(media_root=single_image_root), renderer=FailingEncodeRenderer())
    client = TestClient(app)

    response = client.get("/get_random_art")

    assert response.status_code == 500
    assert response.text == "Encode error: failed to encode image"


def test_concurrent_requests_render_in_parallel(single_image_root):
    buffer = io.BytesIO()
    Image.new("RGB", (8, 8)).save(buffer, format="JPEG")
    renderer = BlockingRenderer(buffer.getvalue(), expected=2)
    app = create_app(AppSettings(media_root=single_image_root), renderer=renderer)

    with TestClient(app) as client, ThreadPoolExecutor(max_workers=2) as pool:
        futures = [pool.submit(client.get, "/get_random_art") for _ in range(2)]
        try:
            both_started = renderer.all_in_flight.wait(timeout=5)
        finally:
            renderer.release.set()
        responses = [future.result(timeout=10) for future in futures]

    assert both_started, "second render did not start while the first was still running"
    assert [response.status_code for response in responses] == [200, 200]
    assert all(response.content == renderer.payload for response in responses)


def test_large_16bit_image_is_served(media_root):
    Image.new("I;16", (3000, 1500), 20000).save(media_root / "scan.png", format="PNG")
    client = _client(media_root)

    response = client.get("/get_random_art")

    assert response.status_code == 200
    assert response.headers["content-type"] == "image/jpeg"
    assert Image.open(io.BytesIO(response.content)).size == (720, 360)
