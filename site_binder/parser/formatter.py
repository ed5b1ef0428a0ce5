"""Turns an extracted content fragment into ordered, typed text blocks.

Only the outermost block-level element of a nested group is kept, so a
paragraph inside a list item never produces duplicate text. Styling that
survives into plain text (bullets, upper-cased major headings) is applied
here rather than at render time.
"""
from __future__ import annotations

import re
from typing import Dict, List, Union

from bs4 import BeautifulSoup
from bs4.element import Tag

from site_binder.crawler.models import BLOCK_SEPARATOR, BULLET, Block, BlockKind, join_blocks

__all__ = ["format_blocks", "normalize_text", "join_blocks", "blocks_from_text", "looks_like_heading"]

TAG_KINDS: Dict[str, BlockKind] = {
    "h1": BlockKind.HEADING1,
    "h2": BlockKind.HEADING2,
    "h3": BlockKind.HEADING3,
    "h4": BlockKind.HEADING4,
    "h5": BlockKind.HEADING5,
    "p": BlockKind.PARAGRAPH,
    "li": BlockKind.LIST_ITEM,
    "blockquote": BlockKind.BLOCKQUOTE,
    "pre": BlockKind.PREFORMATTED,
}

_WS_RE = re.compile(r"\s+")


def normalize_text(text: str) -> str:
    """Collapse whitespace runs to one space and trim."""
    return _WS_RE.sub(" ", text).strip()


def _has_block_ancestor(tag: Tag) -> bool:
    return any(parent.name in TAG_KINDS for parent in tag.parents)


def _styled(kind: BlockKind, text: str) -> str:
    if kind is BlockKind.LIST_ITEM:
        return f"{BULLET} {text}"
    if kind.is_major:
        return text.upper()
    return text


def format_blocks(fragment: Union[BeautifulSoup, Tag, str]) -> List[Block]:
    """Return the blocks of *fragment* in document order."""
    root = BeautifulSoup(fragment, "html.parser") if isinstance(fragment, str) else fragment
    blocks: List[Block] = []
    for tag in root.find_all(list(TAG_KINDS)):
        if not isinstance(tag, Tag) or _has_block_ancestor(tag):
            continue
        text = normalize_text(tag.get_text())
        if not text:
            continue
        kind = TAG_KINDS[tag.name]
        blocks.append(Block(kind, _styled(kind, text)))
    return blocks


# --------------------------------------------------------------------------- #
# Plain-text round trip                                                       #
# --------------------------------------------------------------------------- #


def looks_like_heading(text: str, max_length: int = 100) -> bool:
    """Legacy detection of a major heading from its rendered text alone."""
    return text == text.upper() and len(text) < max_length and not text.startswith(BULLET)


def blocks_from_text(content: str, heading_max_length: int = 100) -> List[Block]:
    """Rebuild blocks from blank-line separated text (``/api/scrape`` content)."""
    blocks: List[Block] = []
    for chunk in content.split(BLOCK_SEPARATOR):
        text = chunk.strip()
        if not text:
            continue
        if looks_like_heading(text, heading_max_length):
            kind = BlockKind.HEADING1
        elif text.startswith(BULLET):
            kind = BlockKind.LIST_ITEM
        else:
            kind = BlockKind.PARAGRAPH
        blocks.append(Block(kind, text))
    return blocks
