# File: site_binder/engine.py
"""site_binder.engine: запуск обхода и сборка итогового PDF."""

from __future__ import annotations

from pathlib import Path
from typing import List, Sequence, Union

from site_binder.config import CrawlerConfig
from site_binder.crawler.crawler import AsyncCrawler
from site_binder.crawler.models import PageResult
from site_binder.logger import logger
from site_binder.report.paginator import paginate
from site_binder.report.pdf_report import render_pdf, safe_filename

__all__ = ["start_crawl", "export_pdf"]


async def start_crawl(cfg: CrawlerConfig) -> List[PageResult]:
    """
    Запускает краулер в контексте и возвращает принятые страницы в порядке обхода.

    Raises
    ------
    SeedUnreachableError
        Если стартовый URL не удалось загрузить.
    """
    async with AsyncCrawler(cfg) as crawler:
        return await crawler.crawl()


def export_pdf(
    results: Sequence[PageResult],
    cfg: CrawlerConfig,
    output_dir: Union[str, Path] = ".",
) -> Path:
    """Раскладывает страницы по листам и сохраняет PDF как ``<output_dir>/<output_name>.pdf``."""
    width, height = cfg.layout.page_dimensions()
    pages = paginate(results, width, height, cfg.layout.margins())
    logger.info("Generating PDF: %d sections, %d pages", len(results), len(pages))
    output = Path(output_dir) / safe_filename(cfg.output_name)
    return render_pdf(pages, output, title=results[0].title if results else None)
