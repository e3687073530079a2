"""
DOCX export pipeline.

resolve style → parse content store → assemble paragraphs → package bytes.
Each call is independent: it reads the request without mutating it and keeps
no state between calls, so concurrent exports need no coordination.
"""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional

from app.config import settings
from app.models.schemas import GuideDocument
from app.services.assembler import AssemblyOptions, assemble
from app.services.content_store import ContentStore
from app.services.packager import DOCX_CONTENT_TYPE, package
from app.services.styles import resolve_style

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExportResult:
    content: bytes
    filename: str
    media_type: str = DOCX_CONTENT_TYPE


def export_docx(
    thesis_content: Dict[str, Any],
    guide: GuideDocument,
    template: Optional[str] = None,
    filled_variables: Optional[Dict[str, Any]] = None,
    include_front_matter: Optional[bool] = None,
) -> ExportResult:
    """
    Build the thesis document.

    Args:
        thesis_content:       The wizard's nested ``chapter-<i>/section-<j>/block-<k>`` answers.
        guide:                Parsed guide document.
        template:             Style template name; unknown names use the default.
        filled_variables:     Placeholder values for the optional variables summary.
        include_front_matter: Overrides the template's front-matter default when set.

    Returns:
        ExportResult with the DOCX bytes.

    Raises:
        PackagingError: The document could not be serialised.
    """
    t0 = time.monotonic()

    style = resolve_style(template or settings.DEFAULT_TEMPLATE)
    store = ContentStore.from_raw(thesis_content)
    options = AssemblyOptions.for_style(
        style,
        include_front_matter=include_front_matter,
        filled_variables=filled_variables,
    )

    logger.info(
        "Export: template=%s chapters=%d stored_values=%d variables=%d",
        style.name,
        len(guide.chapters),
        len(store),
        len(filled_variables or {}),
    )

    paragraphs = assemble(guide, store, style, options)
    content = package(paragraphs, style)

    logger.info(
        "Export finished: %d paragraphs in %.2f ms",
        len(paragraphs),
        (time.monotonic() - t0) * 1000,
    )
    return ExportResult(content=content, filename=settings.EXPORT_FILENAME)
