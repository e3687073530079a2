"""
Intermediate paragraph model.

The renderer and assembler produce a flat list of ``Paragraph`` objects; the
packager is the only code that knows about python-docx.  Keeping the two apart
lets the rendering rules be tested without opening a DOCX file.
"""
from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import List, Optional, Union


class Alignment(str, enum.Enum):
    LEFT = "left"
    CENTER = "center"
    JUSTIFY = "justify"


@dataclass(frozen=True)
class TextRun:
    """A run of text with character formatting."""

    text: str
    font: Optional[str] = None
    size: Optional[float] = None   # points
    bold: bool = False
    italic: bool = False


@dataclass(frozen=True)
class ImageRun:
    """An inline picture.  Dimensions are in pixels."""

    data: bytes
    subtype: str
    width: int
    height: int


Run = Union[TextRun, ImageRun]


@dataclass
class Paragraph:
    """
    One output paragraph.

    Attributes:
        runs:              Ordered text and image runs.
        alignment:         Horizontal alignment.
        first_line_indent: Inches; None leaves the style default.
        space_before:      Points; None leaves the style default.
        space_after:       Points; None leaves the style default.
        line_spacing:      Twentieths of a point (240 = single); None leaves the default.
        placeholder:       True when the paragraph stands in for content that failed.
    """

    runs: List[Run] = field(default_factory=list)
    alignment: Alignment = Alignment.LEFT
    first_line_indent: Optional[float] = None
    space_before: Optional[float] = None
    space_after: Optional[float] = None
    line_spacing: Optional[int] = None
    placeholder: bool = False

    @property
    def text(self) -> str:
        """Concatenated text of all text runs."""
        return "".join(run.text for run in self.runs if isinstance(run, TextRun))

    @property
    def images(self) -> List[ImageRun]:
        return [run for run in self.runs if isinstance(run, ImageRun)]
