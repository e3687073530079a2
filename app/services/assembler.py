"""
Document assembler: walks the guide tree and collects every paragraph.

Output order is exactly guide order (chapters, then sections, then blocks).
Nothing is sorted, merged or deduplicated.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any, List, Mapping, Optional

from app.config import settings
from app.models.content import ContentPath
from app.models.paragraphs import Alignment, Paragraph, TextRun
from app.models.schemas import GuideChapter, GuideDocument, GuideSection
from app.services.block_builder import build_block
from app.services.block_renderer import render_block
from app.services.content_store import ContentStore, format_path
from app.services.styles import StyleProfile

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AssemblyOptions:
    """
    Optional front matter.

    Attributes:
        include_front_matter:   Project title and "Variables Used" summary before chapter 1.
        include_section_guides: The guide's note for each section, after its heading.
        filled_variables:       Placeholder values shown in the variables summary.
    """

    include_front_matter: bool = False
    include_section_guides: bool = False
    filled_variables: Optional[Mapping[str, Any]] = None

    @classmethod
    def for_style(cls, style: StyleProfile, **overrides: Any) -> "AssemblyOptions":
        """
        Defaults taken from the template and settings; None overrides are ignored.

        Section guides follow the effective front-matter flag unless they are
        overridden themselves.
        """
        overrides = {k: v for k, v in overrides.items() if v is not None}
        front_matter = overrides.pop("include_front_matter", style.include_front_matter)
        options = cls(
            include_front_matter=front_matter,
            include_section_guides=settings.INCLUDE_SECTION_GUIDES or front_matter,
        )
        return replace(options, **overrides)


# ---------------------------------------------------------------------------
# Headings and front matter
# ---------------------------------------------------------------------------

def _chapter_heading(text: str, style: StyleProfile) -> Paragraph:
    return Paragraph(
        runs=[TextRun(text, font=style.title_font, size=style.heading1_size, bold=True)],
        alignment=Alignment.CENTER,
        line_spacing=style.line_spacing,
        space_after=0,
    )


def chapter_headings(number: int, chapter: GuideChapter, style: StyleProfile) -> List[Paragraph]:
    """``Chapter <n>`` followed by the upper-cased chapter title."""
    return [
        _chapter_heading(f"Chapter {number}", style),
        _chapter_heading(chapter.chapter_title.upper(), style),
    ]


def section_heading(section: GuideSection, style: StyleProfile) -> Paragraph:
    return Paragraph(
        runs=[TextRun(section.section_title, font=style.title_font, size=style.heading2_size, bold=True)],
        alignment=Alignment.LEFT,
        space_before=settings.SECTION_SPACE_BEFORE_PT,
        line_spacing=style.line_spacing,
    )


def _section_guide(text: str, style: StyleProfile) -> Paragraph:
    return Paragraph(
        runs=[TextRun(text, font=style.body_font, size=style.font_size, italic=True)],
        alignment=Alignment.JUSTIFY,
        line_spacing=style.line_spacing,
    )


def front_matter(guide: GuideDocument, options: AssemblyOptions, style: StyleProfile) -> List[Paragraph]:
    """Project title and the filled-in variables, each followed by a blank line."""
    paragraphs: List[Paragraph] = []

    if guide.project_title:
        paragraphs.append(Paragraph(
            runs=[TextRun(guide.project_title, font=style.title_font, size=style.heading1_size, bold=True)],
            alignment=Alignment.CENTER,
            line_spacing=style.line_spacing,
        ))
        paragraphs.append(Paragraph())

    if options.filled_variables:
        paragraphs.append(Paragraph(
            runs=[TextRun("Variables Used", font=style.title_font, size=style.heading2_size, bold=True)],
            line_spacing=style.line_spacing,
        ))
        for key, value in options.filled_variables.items():
            paragraphs.append(Paragraph(
                runs=[
                    TextRun(f"{key}: ", font=style.body_font, size=style.font_size, bold=True),
                    TextRun("" if value is None else str(value), font=style.body_font, size=style.font_size),
                ],
                line_spacing=style.line_spacing,
            ))
        paragraphs.append(Paragraph())

    return paragraphs


# ---------------------------------------------------------------------------
# Assembler
# ---------------------------------------------------------------------------

def assemble(
    guide: GuideDocument,
    store: ContentStore,
    style: StyleProfile,
    options: Optional[AssemblyOptions] = None,
) -> List[Paragraph]:
    """
    Render the whole guide tree into one ordered paragraph list.

    Args:
        guide:   Chapters, sections and block declarations.
        store:   The user's answers.
        style:   Active style profile.
        options: Front-matter switches; defaults come from ``style``.

    Returns:
        Paragraphs in guide order.  A guide without chapters yields only the
        optional front matter.
    """
    options = options or AssemblyOptions.for_style(style)
    paragraphs: List[Paragraph] = []

    if options.include_front_matter:
        paragraphs.extend(front_matter(guide, options, style))

    for i, chapter in enumerate(guide.chapters):
        paragraphs.extend(chapter_headings(i + 1, chapter, style))

        for j, section in enumerate(chapter.sections):
            paragraphs.append(section_heading(section, style))
            if options.include_section_guides and section.section_guide:
                paragraphs.append(_section_guide(section.section_guide, style))

            for k, declaration in enumerate(section.content_blocks):
                path = ContentPath(i, j, k)
                try:
                    block = build_block(declaration, store, path)
                except Exception as exc:
                    logger.error("Skipping %s: %s", format_path(path), exc, exc_info=True)
                    continue
                rendered = render_block(block, style)
                logger.debug(
                    "%s (%s) → %s, %d paragraph(s)",
                    format_path(path),
                    declaration.content_type,
                    type(block).__name__,
                    len(rendered),
                )
                paragraphs.extend(rendered)

    return paragraphs
