"""
Content-block renderer: one typed block in, a list of paragraphs out.

``render_block`` never raises.  A failing image becomes a visible
placeholder paragraph and any other unexpected failure drops the block's
contribution, so one malformed answer cannot abort the whole export.
"""
from __future__ import annotations

import logging
from typing import Callable, Dict, List, Type

from app.config import settings
from app.models.content import (
    ComboBlock,
    ContentBlock,
    EmptyBlock,
    FigureBlock,
    ImageBlock,
    ImagePayload,
    ListBlock,
    LiteratureReviewBlock,
    TableBlock,
    TextBlock,
)
from app.models.paragraphs import Alignment, ImageRun, Paragraph, TextRun
from app.services.image_decoder import ImageDecodeError, decode_image, prepare_for_docx
from app.services.styles import StyleProfile

logger = logging.getLogger(__name__)

BULLET = "•"
_CAPTION_SIZE_DELTA = 2  # figure captions are this many points below body size


# ---------------------------------------------------------------------------
# Paragraph builders
# ---------------------------------------------------------------------------

def body_paragraph(text: str, style: StyleProfile) -> Paragraph:
    """Justified body text with a first-line indent."""
    return Paragraph(
        runs=[TextRun(text, font=style.body_font, size=style.font_size)],
        alignment=Alignment.JUSTIFY,
        first_line_indent=settings.FIRST_LINE_INDENT_INCHES,
        line_spacing=style.line_spacing,
    )


def bullet_paragraph(text: str, style: StyleProfile) -> Paragraph:
    return Paragraph(
        runs=[TextRun(f"{BULLET} {text}", font=style.body_font, size=style.font_size)],
        line_spacing=style.line_spacing,
    )


def _caption_paragraph(text: str, style: StyleProfile) -> Paragraph:
    return Paragraph(
        runs=[TextRun(
            text,
            font=style.body_font,
            size=max(style.font_size - _CAPTION_SIZE_DELTA, 1),
            italic=True,
        )],
        alignment=Alignment.CENTER,
        line_spacing=style.line_spacing,
    )


def placeholder_paragraph(style: StyleProfile) -> Paragraph:
    """Visible stand-in for an image that could not be embedded."""
    return Paragraph(
        runs=[TextRun(style.image_failure_text, font=style.body_font, size=style.font_size)],
        alignment=Alignment.CENTER,
        placeholder=True,
    )


def image_paragraph(image: ImagePayload, style: StyleProfile) -> Paragraph:
    """Centered picture, or the template's placeholder if the image is unusable."""
    try:
        decoded = decode_image(image.data_uri)
        stream = prepare_for_docx(decoded)
    except ImageDecodeError as exc:
        logger.warning("Image skipped: %s", exc)
        return placeholder_paragraph(style)

    return Paragraph(
        runs=[ImageRun(
            data=stream.getvalue(),
            subtype=decoded.subtype,
            width=image.width,
            height=image.height,
        )],
        alignment=Alignment.CENTER,
    )


def table_text(block: TableBlock) -> str:
    """Tab/newline text rendering of a grid, prefixed with ``Table:``."""
    lines = ["Table:\n"]
    for r in range(block.rows):
        row = "\t".join(block.cells.get((r, c), "") for c in range(block.cols))
        lines.append(row + "\n")
    return "".join(lines)


# ---------------------------------------------------------------------------
# Per-variant renderers
# ---------------------------------------------------------------------------

def _render_empty(block: EmptyBlock, style: StyleProfile) -> List[Paragraph]:
    return []


def _render_text(block: TextBlock, style: StyleProfile) -> List[Paragraph]:
    return [body_paragraph(block.text, style)]


def _render_literature_review(block: LiteratureReviewBlock, style: StyleProfile) -> List[Paragraph]:
    return [body_paragraph(part, style) for part in block.parts]


def _render_list(block: ListBlock, style: StyleProfile) -> List[Paragraph]:
    return [bullet_paragraph(item, style) for item in block.items]


def _render_combo(block: ComboBlock, style: StyleProfile) -> List[Paragraph]:
    paragraphs = [body_paragraph(block.text, style)] if block.text else []
    paragraphs.extend(bullet_paragraph(entry, style) for entry in block.entries)
    return paragraphs


def _render_table(block: TableBlock, style: StyleProfile) -> List[Paragraph]:
    return [Paragraph(
        runs=[TextRun(table_text(block), font=style.body_font, size=style.font_size)],
        line_spacing=style.line_spacing,
    )]


def _render_image(block: ImageBlock, style: StyleProfile) -> List[Paragraph]:
    return [image_paragraph(block.image, style)]


def _render_figure(block: FigureBlock, style: StyleProfile) -> List[Paragraph]:
    paragraphs = [Paragraph(
        runs=[TextRun(block.title, font=style.body_font, size=style.font_size, bold=True)],
        alignment=Alignment.CENTER,
        line_spacing=style.line_spacing,
    )]
    if block.description:
        paragraphs.append(body_paragraph(block.description, style))
    if block.figure_type:
        paragraphs.append(_caption_paragraph(f"(Type: {block.figure_type})", style))
    if block.variables:
        labels = ", ".join(f"{label}: {value}" for label, value in block.variables)
        paragraphs.append(_caption_paragraph(labels, style))
    return paragraphs


_RENDERERS: Dict[Type, Callable[..., List[Paragraph]]] = {
    EmptyBlock: _render_empty,
    TextBlock: _render_text,
    LiteratureReviewBlock: _render_literature_review,
    ListBlock: _render_list,
    ComboBlock: _render_combo,
    TableBlock: _render_table,
    ImageBlock: _render_image,
    FigureBlock: _render_figure,
}


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def render_block(block: ContentBlock, style: StyleProfile) -> List[Paragraph]:
    """
    Render one content block, then its attached image if it has one.

    Args:
        block: Any ContentBlock variant.
        style: Active style profile.

    Returns:
        Zero or more paragraphs in output order.
    """
    paragraphs: List[Paragraph] = []

    renderer = _RENDERERS.get(type(block))
    if renderer is None:
        logger.error("No renderer for block type %s", type(block).__name__)
    else:
        try:
            paragraphs.extend(renderer(block, style))
        except Exception as exc:
            logger.error("Failed to render %s: %s", type(block).__name__, exc, exc_info=True)

    if block.attachment is not None:
        try:
            paragraphs.append(image_paragraph(block.attachment, style))
        except Exception as exc:
            logger.error("Failed to render attached image: %s", exc, exc_info=True)
            paragraphs.append(placeholder_paragraph(style))

    return paragraphs
