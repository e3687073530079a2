"""
DOCX export endpoints.

POST /            — build a DOCX from the wizard's content and guide.
GET  /templates   — list the style templates a client may request.
"""
from __future__ import annotations

import asyncio
import logging
from typing import List

from fastapi import APIRouter, HTTPException, status
from fastapi.responses import JSONResponse, Response

from app.models.schemas import ExportErrorResponse, ExportRequest, TemplateResponse
from app.services.export_service import export_docx
from app.services.packager import DOCX_CONTENT_TYPE, PackagingError
from app.services.styles import DEFAULT_TEMPLATE, list_styles

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "",
    response_class=Response,
    responses={
        200: {"content": {DOCX_CONTENT_TYPE: {}}, "description": "The generated document"},
        400: {"description": "thesisContent or guideData missing"},
        500: {"model": ExportErrorResponse, "description": "Document generation failed"},
    },
)
async def export_document(request: ExportRequest) -> Response:
    """
    Render the thesis as a Word document and return it as an attachment.

    - ``thesisContent`` and ``guideData`` are required
    - ``template`` selects the style preset (unknown names use the default)
    - ``includeFrontMatter`` overrides the template's project-title/variables default
    """
    if request.thesis_content is None or request.guide_data is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Missing thesis content or guide data",
        )

    try:
        # CPU-bound; keep the event loop free for other requests
        result = await asyncio.to_thread(
            export_docx,
            request.thesis_content,
            request.guide_data,
            request.template,
            request.filled_variables,
            request.include_front_matter,
        )
    except PackagingError as exc:
        logger.error("Error generating DOCX: %s", exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=ExportErrorResponse(
                error="Failed to generate DOCX document",
                details=str(exc),
            ).model_dump(),
        )

    return Response(
        content=result.content,
        media_type=result.media_type,
        headers={"Content-Disposition": f'attachment; filename="{result.filename}"'},
    )


@router.get("/templates", response_model=List[TemplateResponse])
async def list_templates() -> List[TemplateResponse]:
    """Available style templates, default first."""
    return [
        TemplateResponse(
            name=profile.name,
            title_font=profile.title_font,
            body_font=profile.body_font,
            font_size=profile.font_size,
            heading1_size=profile.heading1_size,
            heading2_size=profile.heading2_size,
            heading3_size=profile.heading3_size,
            line_spacing=profile.line_spacing,
            margins=profile.to_dict()["margins"],
            include_front_matter=profile.include_front_matter,
            is_default=profile.name == DEFAULT_TEMPLATE,
        )
        for profile in list_styles()
    ]
