"""
Turns a guide block declaration plus its stored values into one typed block.

The declared ``contentType`` decides the shape for list, combo and figure
blocks, whose answers live in several slots.  For every other type the
runtime shape of the stored value decides: an image payload becomes an
ImageBlock, a table payload a TableBlock, ``textp-*`` parts a
LiteratureReviewBlock and a string a TextBlock.
"""
from __future__ import annotations

import logging
import re
from typing import Any, Dict, List, Mapping, Optional, Tuple

from app.config import settings
from app.models.content import (
    IMAGE,
    ComboBlock,
    ContentBlock,
    ContentPath,
    EmptyBlock,
    FigureBlock,
    ImageBlock,
    ImagePayload,
    ListBlock,
    LiteratureReviewBlock,
    Slot,
    TableBlock,
    TextBlock,
)
from app.models.schemas import BlockDeclaration, ContentType
from app.services.content_store import ContentStore

logger = logging.getLogger(__name__)

_TEXTP_RE = re.compile(r"^textp-(\d+)$")
_CELL_RE = re.compile(r"^(\d+)-(\d+)$")

# (label, key) in output order
FIGURE_VARIABLES: Tuple[Tuple[str, str], ...] = (
    ("IV", "iv"),
    ("DV", "dv"),
    ("MODV", "modv"),
    ("IV1", "iv1"),
    ("IV2", "iv2"),
)
_FIGURE_KEYS = {"type"} | {key for _, key in FIGURE_VARIABLES}


# ---------------------------------------------------------------------------
# Payload helpers
# ---------------------------------------------------------------------------

def as_text(value: Any) -> Optional[str]:
    """Stored scalar as text, or None when absent or blank."""
    if value is None or isinstance(value, (dict, list, bool)):
        return None
    text = value if isinstance(value, str) else str(value)
    return text if text.strip() else None


def _as_dimension(value: Any, default: int) -> int:
    try:
        number = int(float(value))
    except (TypeError, ValueError):
        return default
    return number if number > 0 else default


def as_image_payload(value: Any) -> Optional[ImagePayload]:
    """``{type: "image", data: <uri>, width, height}`` → ImagePayload, else None."""
    if not isinstance(value, Mapping) or value.get("type") != "image":
        return None
    data = value.get("data")
    if not isinstance(data, str) or not data:
        return None
    return ImagePayload(
        data_uri=data,
        width=_as_dimension(value.get("width"), settings.DEFAULT_IMAGE_WIDTH),
        height=_as_dimension(value.get("height"), settings.DEFAULT_IMAGE_HEIGHT),
    )


def as_table(value: Any) -> Optional[TableBlock]:
    """
    ``{rows, cols, data: {"r-c": text}}`` → TableBlock, else None.

    The same payload wrapped as ``{type: "table", data: {...}}`` is accepted.
    """
    if not isinstance(value, Mapping):
        return None
    if value.get("type") == "table" and isinstance(value.get("data"), Mapping):
        value = value["data"]
    if "rows" not in value or "cols" not in value:
        return None
    try:
        rows, cols = int(value["rows"]), int(value["cols"])
    except (TypeError, ValueError):
        return None
    if rows <= 0 or cols <= 0:
        return None

    cells: Dict[Tuple[int, int], str] = {}
    raw_cells = value.get("data")
    if isinstance(raw_cells, Mapping):
        for key, text in raw_cells.items():
            match = _CELL_RE.match(str(key))
            if match and text is not None:
                cells[(int(match.group(1)), int(match.group(2)))] = str(text)
    return TableBlock(rows=rows, cols=cols, cells=cells)


def textp_parts(value: Any) -> Optional[List[str]]:
    """Non-blank ``textp-<n>`` values ordered by ``n``, or None if there are no such keys."""
    if not isinstance(value, Mapping):
        return None
    numbered = []
    for key, text in value.items():
        match = _TEXTP_RE.match(str(key))
        if match:
            numbered.append((int(match.group(1)), text))
    if not numbered:
        return None
    numbered.sort(key=lambda pair: pair[0])
    return [text for text in (as_text(v) for _, v in numbered) if text is not None]


def _slot_texts(store: ContentStore, path: ContentPath, slots: List[Slot]) -> List[str]:
    texts = []
    for slot in slots:
        text = as_text(store.get(path.at(slot)))
        if text is not None:
            texts.append(text)
    return texts


# ---------------------------------------------------------------------------
# Builder
# ---------------------------------------------------------------------------

def _figure_fields(source: Mapping[str, Any]) -> Dict[str, Any]:
    """Figure keys folded to lower case; an exact lower-case key beats its upper-case twin."""
    fields: Dict[str, Any] = {}
    for key, value in source.items():
        if not isinstance(key, str):
            continue
        folded = key.lower()
        if folded in _FIGURE_KEYS and (key == folded or folded not in fields):
            fields[folded] = value
    return fields


def _build_figure(declared: Mapping[str, Any], stored: Any) -> FigureBlock:
    values: Dict[str, Any] = dict(declared)
    values.update(_figure_fields(declared))
    if isinstance(stored, Mapping) and as_image_payload(stored) is None:
        # Answers entered in the wizard take precedence over the guide's template
        values.update(_figure_fields(stored))

    variables = []
    for label, key in FIGURE_VARIABLES:
        text = as_text(values.get(key))
        if text is not None:
            variables.append((label, text))

    return FigureBlock(
        title=as_text(values.get("figureTitle")) or "Figure",
        description=as_text(values.get("description")),
        figure_type=as_text(values.get("type")),
        variables=variables,
    )


def _build_from_shape(stored: Any) -> ContentBlock:
    image = as_image_payload(stored)
    if image is not None:
        return ImageBlock(image=image)

    table = as_table(stored)
    if table is not None:
        return table

    parts = textp_parts(stored)
    if parts is not None:
        return LiteratureReviewBlock(parts=parts) if parts else EmptyBlock()

    text = as_text(stored)
    if text is not None:
        return TextBlock(text=text)

    if stored is not None:
        logger.debug("Stored value of type %s has no renderable shape", type(stored).__name__)
    return EmptyBlock()


def build_block(
    declaration: BlockDeclaration,
    store: ContentStore,
    path: ContentPath,
) -> ContentBlock:
    """
    Resolve one declared block into its typed variant.

    Args:
        declaration: The guide's declaration for this block.
        store:       All stored answers.
        path:        Position of the block (slot is ignored).

    Returns:
        Exactly one ContentBlock.  Blocks with nothing stored come back as
        EmptyBlock; an attached ``-image`` payload is set on any variant.
    """
    kind = declaration.kind
    content = declaration.content
    stored = store.get(path)

    items = content.get("items")
    entries = content.get("lText")

    block: ContentBlock
    if kind is ContentType.LIST and isinstance(items, list):
        block = ListBlock(items=_slot_texts(store, path, [Slot.item(m) for m in range(len(items))]))
    elif kind is ContentType.COMBO:
        slots = [Slot.list_entry(m) for m in range(len(entries))] if isinstance(entries, list) else []
        block = ComboBlock(text=as_text(stored), entries=_slot_texts(store, path, slots))
    elif kind is ContentType.FIGURE:
        block = _build_figure(content, stored)
    else:
        block = _build_from_shape(stored)

    block.attachment = as_image_payload(store.get(path.at(IMAGE)))
    return block
