# Path: api/app.py
# Purpose: Expose a FastAPI application serving random thumbnails from the media index.
# Layer: api.
# Details: Provides a health check and the random art endpoint delegating to the core renderer.

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from config import AppSettings
from core.imaging.thumbnails import ThumbnailRenderer
from core.indexing.media_index import MediaIndex
from core.models.errors import ThumbnailError

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[AppSettings] = None,
    media_index: Optional[MediaIndex] = None,
    renderer: Optional[ThumbnailRenderer] = None,
):  # type: ignore[override]
    """Create a FastAPI app serving thumbnails of randomly chosen indexed images.

    When ``media_index`` is omitted the index is built from ``settings.media_root``
    here, so construction errors surface before the app is returned.
    """

    from fastapi import FastAPI, Request
    from fastapi.responses import PlainTextResponse, Response

    settings = settings or AppSettings()
    if media_index is None:
        media_index = MediaIndex.build(settings.media_root, follow_symlinks=settings.follow_symlinks)
    renderer = renderer or ThumbnailRenderer(quality=settings.jpeg_quality)

    app = FastAPI(title="Random Art Server", version="0.1.0")
    app.state.settings = settings
    app.state.media_index = media_index
    app.state.renderer = renderer

    @app.exception_handler(ThumbnailError)
    async def thumbnail_error_handler(request: Request, exc: ThumbnailError) -> PlainTextResponse:
        """Log the full cause and answer with the failure kind only."""

        logger.error("%s error for %s: %r", exc.kind, exc.path, exc.cause)
        return PlainTextResponse(exc.message, status_code=500)

    @app.get("/health")
    def health() -> Dict[str, Any]:
        """Return a simple health status payload."""

        return {"status": "ok", "images": media_index.count()}

    # Plain def: FastAPI runs it on its worker thread pool, keeping decoding off the event loop.
    @app.get("/get_random_art")
    def get_random_art() -> Response:
        """Serve a JPEG thumbnail of one randomly selected image."""

        path = media_index.random_path()
        payload = renderer.render(path, settings.resolution)
        return Response(content=payload, media_type="image/jpeg")

    return app
