# File: tests/conftest.py
from __future__ import annotations

from typing import Callable, Dict, Iterable, List, Optional, Union

import pytest

from site_binder.config import CrawlerConfig
from site_binder.crawler.models import Block, BlockKind, PageData
from site_binder.errors import FetchError
from site_binder.parser.pipeline import ScrapedPage


def pytest_configure(config):
    """Register custom markers so that `--strict-markers` does not fail."""
    config.addinivalue_line(
        "markers",
        "slow: marks tests as slow (deselect with '-m \"not slow\"')",
    )


LOREM = (
    "The quick brown fox jumps over the lazy dog, again and again, while the "
    "reader keeps following the story through several long and winding sentences, "
    "because readable articles need enough text to be recognised as content."
)


def article_html(title: str, paragraphs: Iterable[str] = (LOREM, LOREM), links: Iterable[str] = ()) -> str:
    """Build a small but realistic article page with a navigation bar."""
    nav = "".join(f'<a href="{href}">{href}</a> ' for href in links)
    body = "".join(f"<p>{p}</p>" for p in paragraphs)
    return (
        f"<html><head><title>{title}</title></head><body>"
        f"<nav>{nav}</nav>"
        f"<article><h1>{title}</h1>{body}</article>"
        "<footer>Copyright</footer>"
        "</body></html>"
    )


class FakeFetcher:
    """In-memory fetch collaborator: url -> html, or url -> HTTP status for failures."""

    def __init__(self, pages: Dict[str, Union[str, int]]) -> None:
        self.pages = pages
        self.calls: List[str] = []

    async def fetch(self, url: str) -> PageData:
        self.calls.append(url)
        page = self.pages.get(url, 404)
        if isinstance(page, int):
            raise FetchError(url, f"HTTP {page}", page)
        return PageData(url, page, 200)


def make_scraper(pages: Dict[str, ScrapedPage]) -> Callable[[str, str], Optional[ScrapedPage]]:
    """Scraper that ignores the HTML and returns a prepared result per URL."""

    def scraper(html: str, url: str) -> Optional[ScrapedPage]:
        return pages.get(url)

    return scraper


def scraped(text: str, links: Iterable[str] = (), title: str = "Page") -> ScrapedPage:
    return ScrapedPage(title=title, blocks=(Block(BlockKind.PARAGRAPH, text),), links=tuple(links))


class RecordingPacing:
    def __init__(self) -> None:
        self.waits = 0

    async def wait(self) -> None:
        self.waits += 1


@pytest.fixture()
def basic_config() -> CrawlerConfig:
    """
    Return a basic valid CrawlerConfig for crawler tests.
    """
    return CrawlerConfig(
        seed_url="http://example.com/",
        max_pages=5,
        delay=0,
        timeout=2.0,
        user_agent="TestAgent/1.0",
    )
