"""Extraction pipeline shared by the crawler and the HTTP service:
readability → block formatter → same-host links.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from site_binder.crawler.link_extractor import resolve_links
from site_binder.crawler.models import Block, join_blocks
from site_binder.parser.extractor import NO_TITLE, extract_article
from site_binder.parser.formatter import format_blocks

__all__ = ["ScrapedPage", "scrape_page", "scrape_payload"]


@dataclass(frozen=True, slots=True)
class ScrapedPage:
    title: str
    blocks: Tuple[Block, ...]
    links: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def content(self) -> str:
        return join_blocks(self.blocks)


def scrape_page(html: str, url: str) -> Optional[ScrapedPage]:
    """Extract, format and collect links. None when no readable content is found."""
    article = extract_article(html, url)
    if article is None:
        return None
    blocks = format_blocks(article.content)
    if not blocks:
        return None
    return ScrapedPage(title=article.title, blocks=tuple(blocks), links=tuple(resolve_links(html, url)))


def scrape_payload(html: str, url: str) -> Dict[str, Any]:
    """Response body of ``POST /api/scrape``; an empty article keeps the links."""
    page = scrape_page(html, url)
    if page is None:
        links: List[str] = resolve_links(html, url)
        return {"title": NO_TITLE, "content": "", "links": links}
    return {"title": page.title, "content": page.content, "links": list(page.links)}
