"""
Data models for the SiteBinder crawler.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, Optional, Tuple

BULLET = "•"
BLOCK_SEPARATOR = "\n\n"


class BlockKind(str, Enum):
    """Semantic type of an extracted text block."""

    HEADING1 = "heading1"
    HEADING2 = "heading2"
    HEADING3 = "heading3"
    HEADING4 = "heading4"
    HEADING5 = "heading5"
    PARAGRAPH = "paragraph"
    LIST_ITEM = "list-item"
    BLOCKQUOTE = "blockquote"
    PREFORMATTED = "preformatted"

    @property
    def is_heading(self) -> bool:
        return self.value.startswith("heading")

    @property
    def is_major(self) -> bool:
        """Levels 1-3 are rendered with full heading emphasis."""
        return self in (BlockKind.HEADING1, BlockKind.HEADING2, BlockKind.HEADING3)


@dataclass(frozen=True, slots=True)
class Block:
    """One unit of extracted text."""

    kind: BlockKind
    text: str

    def to_dict(self) -> Dict[str, str]:
        return {"kind": self.kind.value, "text": self.text}


def join_blocks(blocks: Iterable[Block]) -> str:
    """Join block texts with a blank line, the format used on the wire."""
    return BLOCK_SEPARATOR.join(b.text for b in blocks)


@dataclass(slots=True)
class PageData:
    """Raw fetch result: requested URL, decoded body and HTTP status."""

    url: str
    content: str
    status: Optional[int] = None


@dataclass(frozen=True, slots=True)
class PageResult:
    """An accepted crawl outcome; never mutated once recorded."""

    url: str
    title: str
    blocks: Tuple[Block, ...] = field(default_factory=tuple)

    @property
    def content(self) -> str:
        return join_blocks(self.blocks)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "url": self.url,
            "title": self.title,
            "content": self.content,
            "blocks": [b.to_dict() for b in self.blocks],
        }
