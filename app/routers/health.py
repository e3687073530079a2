"""
Health check endpoint.
"""
from fastapi import APIRouter
from datetime import datetime
from pathlib import Path
import logging

from app.config import settings
from app.models.schemas import HealthCheckResponse
from app.services.packager import package
from app.services.styles import resolve_style

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/", response_model=HealthCheckResponse)
@router.get("", response_model=HealthCheckResponse, include_in_schema=False)
async def health_check():
    """
    Health check endpoint to verify system status.

    Returns:
        HealthCheckResponse with status of the DOCX toolchain and the front-end build
    """
    # Check that an empty document can be packaged
    docx_status = "ok"
    try:
        package([], resolve_style(None))
    except Exception as e:
        logger.error(f"DOCX health check failed: {e}")
        docx_status = "error"

    # Check the front-end build
    index = Path(settings.STATIC_DIR) / "index.html"
    frontend_status = "ok" if index.is_file() else "missing"

    # Overall status; the API works without the front end
    overall_status = "healthy" if docx_status == "ok" else "degraded"

    return HealthCheckResponse(
        status=overall_status,
        docx=docx_status,
        frontend=frontend_status,
        timestamp=datetime.utcnow()
    )
