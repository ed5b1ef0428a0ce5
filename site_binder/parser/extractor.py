"""Main-content extraction on top of readability-lxml."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from bs4 import BeautifulSoup
from lxml.etree import ParserError
from readability import Document
from readability.readability import Unparseable

from site_binder.logger import logger

__all__ = ["Article", "extract_article", "NO_TITLE"]

NO_TITLE = "No Title"
_READABILITY_NO_TITLE = "[no-title]"


@dataclass(slots=True)
class Article:
    """Readable part of a page: its title and the content fragment."""

    title: str
    content: BeautifulSoup


def _pick_title(document: Document) -> str:
    title = (document.short_title() or "").strip()
    if not title or title == _READABILITY_NO_TITLE:
        return NO_TITLE
    return title


def extract_article(html: str, base_url: str) -> Optional[Article]:
    """Return the article found in *html*, or None if there is none.

    Relative links inside the fragment are resolved against *base_url*.
    """
    if not html or not html.strip():
        return None
    try:
        document = Document(html, url=base_url)
        summary_html = document.summary(html_partial=True)
        title = _pick_title(document)
    except (Unparseable, ParserError, ValueError) as exc:
        logger.debug("readability failed on %s: %s", base_url, exc)
        return None

    fragment = BeautifulSoup(summary_html, "html.parser")
    if not fragment.get_text(strip=True):
        return None
    return Article(title=title, content=fragment)
