"""
Preview image service.

Serves the social preview card consumed by link unfurlers:

    uvicorn philoreader.server:app --port 8000
    GET /opengraph-image?title=...&description=...
"""

import logging
from typing import Optional

from fastapi import FastAPI, Query
from fastapi.responses import PlainTextResponse, Response

from philoreader.config import APP_TITLE, PREVIEW_CACHE_SECONDS, setup_logging
from philoreader.viewer.preview import compose_preview_image

logger = logging.getLogger(__name__)

setup_logging()

app = FastAPI(title=APP_TITLE)


@app.get("/health")
def health():
    return {"ok": True}


@app.get("/opengraph-image")
def opengraph_image(
    title: Optional[str] = Query(default=None),
    description: Optional[str] = Query(default=None),
):
    """1200x630 PNG preview. Empty parameters use the default text."""
    try:
        image = compose_preview_image(title=title or None, description=description or None)
    except Exception:
        logger.exception("Failed to generate preview image")
        return PlainTextResponse("Failed to generate image", status_code=500)

    return Response(
        content=image,
        media_type="image/png",
        headers={"Cache-Control": f"public, max-age={PREVIEW_CACHE_SECONDS}"},
    )
