"""HTTP extraction service: ``POST /api/scrape``.

Request body ``{"url": "..."}``. Success returns
``{"title": str, "content": str, "links": [str]}`` where *content* is the
formatted blocks joined by a blank line; failures return ``{"error": str}``
with a non-2xx status: 400 for a missing or malformed URL, 500 when the
page cannot be fetched.
"""
from __future__ import annotations

import json
from typing import AsyncIterator

from aiohttp import ClientSession, ClientTimeout, web

from site_binder.config import CrawlerConfig
from site_binder.crawler.fetcher import Fetcher
from site_binder.crawler.link_extractor import hostname_of
from site_binder.errors import FetchError
from site_binder.logger import logger
from site_binder.parser.pipeline import scrape_payload

__all__ = ["create_app", "run_service"]

CONFIG_KEY = web.AppKey("config", CrawlerConfig)
FETCHER_KEY = web.AppKey("fetcher", Fetcher)


async def scrape(request: web.Request) -> web.Response:
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return web.json_response({"error": "Invalid JSON body"}, status=400)
    url = body.get("url") if isinstance(body, dict) else None
    if not url or not isinstance(url, str):
        return web.json_response({"error": "URL is required"}, status=400)
    if not url.lower().startswith(("http://", "https://")) or not hostname_of(url):
        return web.json_response({"error": f"Invalid URL: {url}"}, status=400)

    try:
        page = await request.app[FETCHER_KEY].fetch(url)
    except FetchError as exc:
        logger.warning("Scrape failed for %s: %s", url, exc.reason)
        return web.json_response({"error": f"Failed to fetch: {exc.reason}"}, status=500)

    return web.json_response(scrape_payload(page.content, url))


def create_app(config: CrawlerConfig) -> web.Application:
    app = web.Application()
    app[CONFIG_KEY] = config

    async def client_session(app: web.Application) -> AsyncIterator[None]:
        cfg = app[CONFIG_KEY]
        async with ClientSession(
            timeout=ClientTimeout(total=cfg.timeout),
            headers={"User-Agent": cfg.user_agent},
        ) as session:
            app[FETCHER_KEY] = Fetcher(session)
            yield

    app.cleanup_ctx.append(client_session)
    app.router.add_post("/api/scrape", scrape)
    return app


def run_service(config: CrawlerConfig, host: str = "127.0.0.1", port: int = 8080) -> None:
    logger.info("Serving /api/scrape on http://%s:%d", host, port)
    web.run_app(create_app(config), host=host, port=port, print=None)
