"""
Style templates for DOCX export.

Each template is an immutable ``StyleProfile``.  Sizes are in points; line
spacing and page margins are in twentieths of a point (twips), so 240 is
single spacing and 1440 is one inch.
"""
from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from typing import Dict, List, Optional

logger = logging.getLogger(__name__)

DEFAULT_TEMPLATE = "standard"

IMAGE_FAILED_TEXT = "[Image Failed to Insert]"
IMAGE_ERROR_TEXT = "[Error Inserting Image]"


@dataclass(frozen=True)
class PageMargins:
    top: int = 1440
    right: int = 1440
    bottom: int = 1440
    left: int = 1440


@dataclass(frozen=True)
class StyleProfile:
    """Fonts, sizes, spacing and margins applied uniformly to one export."""

    name: str
    title_font: str
    body_font: str
    font_size: int
    heading1_size: int
    heading2_size: int
    heading3_size: int
    line_spacing: int
    margins: PageMargins = field(default_factory=PageMargins)
    include_front_matter: bool = False
    image_failure_text: str = IMAGE_FAILED_TEXT

    def to_dict(self) -> Dict[str, object]:
        return asdict(self)


_TEMPLATES: Dict[str, StyleProfile] = {
    "standard": StyleProfile(
        name="standard",
        title_font="Times New Roman",
        body_font="Times New Roman",
        font_size=12,
        heading1_size=16,
        heading2_size=14,
        heading3_size=12,
        line_spacing=240,
    ),
    "academic": StyleProfile(
        name="academic",
        title_font="Times New Roman",
        body_font="Times New Roman",
        font_size=12,
        heading1_size=16,
        heading2_size=14,
        heading3_size=12,
        line_spacing=240,
    ),
    "modern": StyleProfile(
        name="modern",
        title_font="Arial",
        body_font="Arial",
        font_size=11,
        heading1_size=14,
        heading2_size=12,
        heading3_size=11,
        line_spacing=200,
    ),
    "arial": StyleProfile(
        name="arial",
        title_font="Arial",
        body_font="Arial",
        font_size=12,
        heading1_size=16,
        heading2_size=14,
        heading3_size=12,
        line_spacing=240,
    ),
    # Double-spaced manuscript with the project title and variable summary up front.
    "draft": StyleProfile(
        name="draft",
        title_font="Times New Roman",
        body_font="Times New Roman",
        font_size=12,
        heading1_size=16,
        heading2_size=14,
        heading3_size=12,
        line_spacing=480,
        include_front_matter=True,
        image_failure_text=IMAGE_ERROR_TEXT,
    ),
}


def resolve_style(template_name: Optional[str]) -> StyleProfile:
    """
    Return the profile for ``template_name``.

    Names are matched case-insensitively; unknown or missing names fall back
    to the standard template.
    """
    key = template_name.strip().lower() if isinstance(template_name, str) else ""
    profile = _TEMPLATES.get(key)
    if profile is None:
        if key:
            logger.info("Unknown template %r, using %r", template_name, DEFAULT_TEMPLATE)
        return _TEMPLATES[DEFAULT_TEMPLATE]
    return profile


def list_styles() -> List[StyleProfile]:
    """All recognised profiles, default first."""
    default = _TEMPLATES[DEFAULT_TEMPLATE]
    return [default] + [p for name, p in _TEMPLATES.items() if name != DEFAULT_TEMPLATE]
