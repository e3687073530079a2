"""
Main FastAPI application for the thesis export backend.
Handles CORS, request logging and size limits, lifespan events, and router registration.
"""
import logging
import os
import time
from contextlib import asynccontextmanager
from datetime import datetime

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import settings
from app.routers import export, frontend, health
from app.services.styles import list_styles

# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Lifespan
# ---------------------------------------------------------------------------

@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown event handler."""
    logger.info("=" * 60)
    logger.info("  Starting thesis export backend …")
    logger.info("=" * 60)

    # Front-end build (optional; the export API works without it)
    index = os.path.join(settings.STATIC_DIR, "index.html")
    if os.path.isfile(index):
        logger.info("✓ Front-end build: %s", os.path.abspath(settings.STATIC_DIR))
    else:
        logger.warning(
            "⚠ No front-end build at %s — only the API will be served",
            os.path.abspath(settings.STATIC_DIR),
        )

    logger.info("✓ Templates: %s", ", ".join(p.name for p in list_styles()))

    logger.info("=" * 60)
    logger.info("  Backend ready on http://%s:%d", settings.HOST, settings.PORT)
    logger.info("  Swagger UI : http://%s:%d/docs", settings.HOST, settings.PORT)
    logger.info("  Export     : POST http://%s:%d/api/export-docx", settings.HOST, settings.PORT)
    logger.info("=" * 60)

    yield  # ← server is running

    logger.info("✓ Shutdown complete.")


# ---------------------------------------------------------------------------
# Application
# ---------------------------------------------------------------------------

app = FastAPI(
    title="Thesis Wizard API",
    description=(
        "Backend for the thesis-writing wizard.\n\n"
        "Serves the built front end and turns the wizard's chapter/section/"
        "block answers into a formatted Word document.\n\n"
        "Key endpoints:\n"
        "- `POST /api/export-docx` — build a DOCX from content + guide\n"
        "- `GET  /api/export-docx/templates` — available style templates\n"
        "- `GET  /api/health` — service status\n"
    ),
    version="0.1.0",
    lifespan=lifespan,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
)


# ---------------------------------------------------------------------------
# CORS
# ---------------------------------------------------------------------------

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_allowed_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# ---------------------------------------------------------------------------
# Request size limit
# ---------------------------------------------------------------------------

@app.middleware("http")
async def limit_request_size(request: Request, call_next):
    """Reject bodies whose declared Content-Length exceeds MAX_REQUEST_SIZE."""
    content_length = request.headers.get("content-length")
    if content_length is not None:
        try:
            size = int(content_length)
        except ValueError:
            return JSONResponse(
                status_code=status.HTTP_400_BAD_REQUEST,
                content={"detail": "Invalid Content-Length header."},
            )
        if size > settings.MAX_REQUEST_SIZE:
            logger.warning("Rejected %s %s: %d bytes", request.method, request.url.path, size)
            return JSONResponse(
                status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
                content={
                    "detail": (
                        f"Request exceeds the {settings.MAX_REQUEST_SIZE // (1024 * 1024)} MB "
                        "size limit."
                    )
                },
            )
    return await call_next(request)


# ---------------------------------------------------------------------------
# Request / response logging middleware
# ---------------------------------------------------------------------------

@app.middleware("http")
async def log_requests(request: Request, call_next):
    """
    Log every API request with method, path, status code, and elapsed time.
    Attaches an ``X-Process-Time`` header (milliseconds) to every response.
    """
    t0 = time.monotonic()
    response = await call_next(request)
    elapsed_ms = round((time.monotonic() - t0) * 1000, 2)

    # Static assets and health polling are too noisy to log
    path = request.url.path
    if path.startswith("/api/") and not path.startswith("/api/health"):
        logger.info(
            "%s %s → %d  (%.2f ms)",
            request.method,
            path,
            response.status_code,
            elapsed_ms,
        )

    response.headers["X-Process-Time"] = f"{elapsed_ms}ms"
    return response


# ---------------------------------------------------------------------------
# Global exception handler
# ---------------------------------------------------------------------------

@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Return a structured JSON error for any unhandled exception."""
    logger.error(
        "Unhandled exception on %s %s: %s",
        request.method,
        request.url.path,
        exc,
        exc_info=True,
    )
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "detail": "Internal server error",
            "error": str(exc),
            "path": str(request.url.path),
            "timestamp": datetime.utcnow().isoformat(),
        },
    )


# ---------------------------------------------------------------------------
# Routers
# ---------------------------------------------------------------------------

app.include_router(health.router,  prefix="/api/health",      tags=["Health"])
app.include_router(export.router,  prefix="/api/export-docx", tags=["Export"])
# Catch-all GET routes; must stay last
app.include_router(frontend.router, tags=["Frontend"])


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=True,
        log_level="info",
    )
