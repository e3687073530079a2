"""
Typed addressing and content-block variants.

``ContentPath`` replaces the wizard's string keys (``chapter-0`` /
``section-1`` / ``block-2-item-3``) with a hashable value, and each content
kind gets its own dataclass carrying only the fields that kind needs.
"""
from __future__ import annotations

import enum
from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional, Tuple, Union


# ---------------------------------------------------------------------------
# Addressing
# ---------------------------------------------------------------------------

class SlotKind(str, enum.Enum):
    MAIN = "main"     # block-<k>
    ITEM = "item"     # block-<k>-item-<m>   (list blocks)
    LIST = "list"     # block-<k>-list-<m>   (combo blocks)
    IMAGE = "image"   # block-<k>-image      (attached illustration)


@dataclass(frozen=True)
class Slot:
    """Sub-part of a content block.  ``index`` is set only for ITEM and LIST."""

    kind: SlotKind = SlotKind.MAIN
    index: Optional[int] = None

    @classmethod
    def item(cls, index: int) -> "Slot":
        return cls(SlotKind.ITEM, index)

    @classmethod
    def list_entry(cls, index: int) -> "Slot":
        return cls(SlotKind.LIST, index)


MAIN = Slot()
IMAGE = Slot(SlotKind.IMAGE)


@dataclass(frozen=True)
class ContentPath:
    """Position of one stored value: chapter, section and block indices plus slot."""

    chapter: int
    section: int
    block: int
    slot: Slot = MAIN

    def at(self, slot: Slot) -> "ContentPath":
        return replace(self, slot=slot)


# ---------------------------------------------------------------------------
# Stored payloads
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ImagePayload:
    """An uploaded image: data URI plus display size in pixels."""

    data_uri: str
    width: int
    height: int


# ---------------------------------------------------------------------------
# Block variants
# ---------------------------------------------------------------------------

class Block:
    """Base class for the closed set of renderable content blocks."""


@dataclass
class EmptyBlock(Block):
    attachment: Optional[ImagePayload] = None


@dataclass
class TextBlock(Block):
    text: str
    attachment: Optional[ImagePayload] = None


@dataclass
class LiteratureReviewBlock(Block):
    """Multi-part text; ``parts`` is already in ``textp-<n>`` order."""

    parts: List[str]
    attachment: Optional[ImagePayload] = None


@dataclass
class ListBlock(Block):
    """Bulleted entries that were filled in, in declared index order."""

    items: List[str]
    attachment: Optional[ImagePayload] = None


@dataclass
class ComboBlock(Block):
    text: Optional[str]
    entries: List[str]
    attachment: Optional[ImagePayload] = None


@dataclass
class TableBlock(Block):
    rows: int
    cols: int
    cells: Dict[Tuple[int, int], str] = field(default_factory=dict)
    attachment: Optional[ImagePayload] = None


@dataclass
class ImageBlock(Block):
    image: ImagePayload
    attachment: Optional[ImagePayload] = None


@dataclass
class FigureBlock(Block):
    """
    A figure placeholder described by its variables.

    ``variables`` holds (label, value) pairs such as ("IV", "Sleep"), in
    IV, DV, MODV, IV1, IV2 order, with empty values already dropped.
    """

    title: str
    description: Optional[str] = None
    figure_type: Optional[str] = None
    variables: List[Tuple[str, str]] = field(default_factory=list)
    attachment: Optional[ImagePayload] = None


ContentBlock = Union[
    EmptyBlock,
    TextBlock,
    LiteratureReviewBlock,
    ListBlock,
    ComboBlock,
    TableBlock,
    ImageBlock,
    FigureBlock,
]
