from __future__ import annotations

import logging
import time
from collections import deque
from dataclasses import dataclass, field
from typing import Callable, Deque, List, Optional, Protocol, Set

from aiohttp import ClientSession, ClientTimeout

from site_binder.config import CrawlerConfig
from site_binder.crawler.fetcher import Fetcher
from site_binder.crawler.link_extractor import normalize_url
from site_binder.crawler.models import PageData, PageResult
from site_binder.crawler.pacing import FixedDelay, PacingPolicy
from site_binder.errors import FetchError, SeedUnreachableError
from site_binder.parser.pipeline import ScrapedPage, scrape_page

__all__ = ("CrawlSession", "AsyncCrawler", "PageFetcher")

Scraper = Callable[[str, str], Optional[ScrapedPage]]


class PageFetcher(Protocol):
    async def fetch(self, url: str) -> PageData: ...


@dataclass
class CrawlSession:
    """Loop state of one crawl run.

    ``visited`` holds accepted URLs; ``requested`` holds every URL fetched so far,
    so a page that failed or was rejected is not requested again.
    """

    frontier: Deque[str] = field(default_factory=deque)
    visited: Set[str] = field(default_factory=set)
    requested: Set[str] = field(default_factory=set)
    results: List[PageResult] = field(default_factory=list)
    attempted: int = 0
    failed: int = 0
    rejected: int = 0

    @classmethod
    def start(cls, seed_url: str) -> CrawlSession:
        return cls(frontier=deque([normalize_url(seed_url)]))

    def enqueue(self, links) -> int:
        added = 0
        for link in links:
            if link not in self.visited and link not in self.requested:
                self.frontier.append(link)
                added += 1
        return added


class AsyncCrawler:
    """Обход в ширину: одна загрузка за раз, пауза вежливости между запросами."""

    def __init__(
        self,
        config: CrawlerConfig,
        *,
        fetcher: Optional[PageFetcher] = None,
        scraper: Scraper = scrape_page,
        pacing: Optional[PacingPolicy] = None,
    ) -> None:
        if config.seed_url is None:
            raise ValueError("config.seed_url is required to crawl")
        self.config = config
        self.seed_url = normalize_url(str(config.seed_url))
        self.fetcher = fetcher
        self.scraper = scraper
        self.pacing: PacingPolicy = pacing if pacing is not None else FixedDelay(config.delay)
        self.session: Optional[ClientSession] = None
        self.logger = logging.getLogger("SiteBinder")

    async def __aenter__(self) -> AsyncCrawler:
        if self.fetcher is None:
            self.session = ClientSession(
                timeout=ClientTimeout(total=self.config.timeout),
                headers={"User-Agent": self.config.user_agent},
                raise_for_status=False,
            )
            self.fetcher = Fetcher(self.session)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self.session and not self.session.closed:
            await self.session.close()

    async def crawl(self, session: Optional[CrawlSession] = None) -> List[PageResult]:
        if self.fetcher is None:
            raise RuntimeError("Fetcher not initialized; use 'async with AsyncCrawler(...)'")
        state = session if session is not None else CrawlSession.start(self.seed_url)
        max_pages = self.config.max_pages
        self.logger.info("Старт обхода: %s (лимит %d стр.)", self.seed_url, max_pages)
        start = time.monotonic()

        while state.frontier and len(state.results) < max_pages:
            current = state.frontier.popleft()
            if current in state.visited or current in state.requested:
                continue
            await self._visit(current, state)

        duration = time.monotonic() - start
        self.logger.info(
            "Завершено: %d страниц за %.2f с (ошибок загрузки: %d, отклонено: %d)",
            len(state.results), duration, state.failed, state.rejected,
        )
        return state.results

    async def _visit(self, url: str, state: CrawlSession) -> None:
        self.logger.info("Processing: %s", url)
        await self.pacing.wait()
        state.attempted += 1
        state.requested.add(url)
        try:
            page = await self.fetcher.fetch(url)  # type: ignore[union-attr]
        except FetchError as exc:
            state.failed += 1
            if url == self.seed_url and not state.results:
                self.logger.error("Seed URL unreachable: %s", exc)
                raise SeedUnreachableError.from_fetch_error(exc) from exc
            self.logger.warning("Error fetching page %s: %s", url, exc.reason)
            return

        scraped = self.scraper(page.content, url)
        if scraped is None:
            state.rejected += 1
            self.logger.info("No readable content, skipped: %s", url)
            return

        content_length = len(scraped.content)
        if content_length <= self.config.min_content_length:
            state.rejected += 1
            self.logger.info(
                "Rejected %s: %d chars (need more than %d)",
                url, content_length, self.config.min_content_length,
            )
            return

        state.visited.add(url)
        state.results.append(PageResult(url=url, title=scraped.title, blocks=scraped.blocks))
        self.logger.info("Saved: %s", scraped.title[:60])
        added = state.enqueue(scraped.links)
        self.logger.debug("Queued %d links from %s (frontier: %d)", added, url, len(state.frontier))
