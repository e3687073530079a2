"""
Front-end serving.

Every GET outside /api/ is answered from the built single-page app, falling
back to index.html so client-side routes work on reload.  GET requests to
unknown /api/ paths get a JSON 404 instead of the app shell.

Include this router last: its catch-all paths shadow anything registered after it.
"""
from __future__ import annotations

import logging
from pathlib import Path

from fastapi import APIRouter, status
from fastapi.responses import FileResponse, JSONResponse

from app.config import settings

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/api/{path:path}", include_in_schema=False)
async def api_get_not_allowed(path: str) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"error": "GET method not allowed for API endpoints"},
    )


@router.get("/{path:path}", include_in_schema=False)
async def serve_frontend(path: str):
    """Static file if it exists inside the build directory, otherwise index.html."""
    root = Path(settings.STATIC_DIR).resolve()

    if path:
        candidate = (root / path).resolve()
        # Refuse anything that escapes the build directory
        if candidate.is_file() and root in candidate.parents:
            return FileResponse(candidate)

    index = root / "index.html"
    if index.is_file():
        return FileResponse(index)

    logger.warning("Front-end build not found at %s", root)
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"detail": "Front-end build not found"},
    )
