"""
Content store: the user's answers indexed by ``ContentPath``.

The wizard posts a nested mapping ``chapter-<i> → section-<j> → block-<k>…``.
``ContentStore.from_raw`` parses those keys once; after that every lookup is a
plain dictionary access on a typed path and a missing value is simply None.
"""
from __future__ import annotations

import logging
import re
from typing import Any, Dict, Iterator, Mapping, Optional, Tuple

from app.models.content import IMAGE, MAIN, ContentPath, Slot, SlotKind

logger = logging.getLogger(__name__)

_CHAPTER_RE = re.compile(r"^chapter-(\d+)$")
_SECTION_RE = re.compile(r"^section-(\d+)$")
_BLOCK_RE = re.compile(r"^block-(\d+)(?:-(item|list)-(\d+)|-(image))?$")


def parse_block_key(key: str) -> Optional[Tuple[int, Slot]]:
    """
    Parse ``block-<k>``, ``block-<k>-item-<m>``, ``block-<k>-list-<m>`` or
    ``block-<k>-image`` into (block index, slot).  Returns None for anything else.
    """
    match = _BLOCK_RE.match(key)
    if match is None:
        return None
    block = int(match.group(1))
    if match.group(4):
        return block, IMAGE
    if match.group(2):
        kind = SlotKind.ITEM if match.group(2) == "item" else SlotKind.LIST
        return block, Slot(kind, int(match.group(3)))
    return block, MAIN


def format_path(path: ContentPath) -> str:
    """Render a path back into the wizard's key notation, for log messages."""
    block = f"block-{path.block}"
    if path.slot.kind is SlotKind.IMAGE:
        block += "-image"
    elif path.slot.kind is not SlotKind.MAIN:
        block += f"-{path.slot.kind.value}-{path.slot.index}"
    return f"chapter-{path.chapter}/section-{path.section}/{block}"


class ContentStore:
    """Read-only mapping from ContentPath to stored value."""

    def __init__(self, values: Optional[Mapping[ContentPath, Any]] = None) -> None:
        self._values: Dict[ContentPath, Any] = dict(values or {})

    @classmethod
    def from_raw(cls, raw: Optional[Mapping[str, Any]]) -> "ContentStore":
        """
        Build a store from the wizard's nested key mapping.

        Keys that do not follow the positional scheme, and levels that are not
        mappings, are skipped.
        """
        values: Dict[ContentPath, Any] = {}
        skipped = 0

        for chapter_key, sections in (raw or {}).items():
            chapter_match = _CHAPTER_RE.match(str(chapter_key))
            if chapter_match is None or not isinstance(sections, Mapping):
                skipped += 1
                continue
            chapter = int(chapter_match.group(1))

            for section_key, blocks in sections.items():
                section_match = _SECTION_RE.match(str(section_key))
                if section_match is None or not isinstance(blocks, Mapping):
                    skipped += 1
                    continue
                section = int(section_match.group(1))

                for block_key, value in blocks.items():
                    parsed = parse_block_key(str(block_key))
                    if parsed is None:
                        skipped += 1
                        continue
                    block, slot = parsed
                    values[ContentPath(chapter, section, block, slot)] = value

        if skipped:
            logger.debug("Ignored %d content keys outside the positional scheme", skipped)
        return cls(values)

    def get(self, path: ContentPath) -> Any:
        """Stored value at ``path`` or None."""
        return self._values.get(path)

    def __contains__(self, path: object) -> bool:
        return path in self._values

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[ContentPath]:
        return iter(self._values)
