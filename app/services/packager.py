"""
Packager: writes the paragraph list into a DOCX file with python-docx.

This is the only module that touches python-docx.  A failure here is fatal to
the export and surfaces as ``PackagingError``; no partial document is returned.
"""
from __future__ import annotations

import io
import logging
from typing import List

from docx import Document
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.oxml.ns import qn
from docx.shared import Inches, Pt, Twips

from app.config import settings
from app.models.paragraphs import Alignment, ImageRun, Paragraph, TextRun
from app.services.styles import StyleProfile
from app.utils.helpers import clean_xml_text

logger = logging.getLogger(__name__)

DOCX_CONTENT_TYPE = (
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
)

_ALIGNMENT = {
    Alignment.LEFT: WD_ALIGN_PARAGRAPH.LEFT,
    Alignment.CENTER: WD_ALIGN_PARAGRAPH.CENTER,
    Alignment.JUSTIFY: WD_ALIGN_PARAGRAPH.JUSTIFY,
}

_SINGLE_SPACING = 240  # twips per line at single spacing


class PackagingError(RuntimeError):
    """Raised when the document cannot be built or serialised."""


def _apply_page_setup(doc, style: StyleProfile) -> None:
    normal = doc.styles["Normal"]
    normal.font.name = style.body_font
    normal.font.size = Pt(style.font_size)
    # python-docx only sets the ascii/hAnsi slots; Word falls back to eastAsia for some text
    normal.element.rPr.rFonts.set(qn("w:eastAsia"), style.body_font)

    margins = style.margins
    for section in doc.sections:
        section.top_margin = Twips(margins.top)
        section.right_margin = Twips(margins.right)
        section.bottom_margin = Twips(margins.bottom)
        section.left_margin = Twips(margins.left)


def _add_text_run(p, run: TextRun) -> None:
    r = p.add_run(clean_xml_text(run.text))
    r.bold = run.bold or None
    r.italic = run.italic or None
    if run.font:
        r.font.name = run.font
    if run.size:
        r.font.size = Pt(run.size)


def _add_image_run(p, run: ImageRun, style: StyleProfile) -> None:
    dpi = settings.IMAGE_DPI
    try:
        p.add_run().add_picture(
            io.BytesIO(run.data),
            width=Inches(run.width / dpi),
            height=Inches(run.height / dpi),
        )
    except Exception as exc:
        logger.warning("Could not embed %s image: %s", run.subtype, exc)
        p.add_run(style.image_failure_text)


def _write_paragraph(doc, paragraph: Paragraph, style: StyleProfile) -> None:
    p = doc.add_paragraph()
    p.alignment = _ALIGNMENT[paragraph.alignment]

    fmt = p.paragraph_format
    if paragraph.first_line_indent is not None:
        fmt.first_line_indent = Inches(paragraph.first_line_indent)
    if paragraph.space_before is not None:
        fmt.space_before = Pt(paragraph.space_before)
    if paragraph.space_after is not None:
        fmt.space_after = Pt(paragraph.space_after)
    if paragraph.line_spacing is not None:
        fmt.line_spacing = paragraph.line_spacing / _SINGLE_SPACING

    for run in paragraph.runs:
        if isinstance(run, ImageRun):
            _add_image_run(p, run, style)
        else:
            _add_text_run(p, run)


def package(paragraphs: List[Paragraph], style: StyleProfile) -> bytes:
    """
    Serialise paragraphs into DOCX bytes.

    Args:
        paragraphs: Output of the assembler, in document order.
        style:      Profile providing default font, size and page margins.

    Returns:
        The complete .docx file content.

    Raises:
        PackagingError: The document could not be built or saved.
    """
    try:
        doc = Document()
        _apply_page_setup(doc, style)
        for paragraph in paragraphs:
            _write_paragraph(doc, paragraph, style)

        buffer = io.BytesIO()
        doc.save(buffer)
    except Exception as exc:
        logger.error("DOCX packaging failed: %s", exc, exc_info=True)
        raise PackagingError(str(exc)) from exc

    data = buffer.getvalue()
    logger.info("Packaged %d paragraphs into %s bytes", len(paragraphs), f"{len(data):,}")
    return data
