# File: tests/test_service.py
from __future__ import annotations

from collections.abc import AsyncIterator

import pytest
import pytest_asyncio
from aiohttp import ClientSession, web

from conftest import article_html
from site_binder.config import CrawlerConfig
from site_binder.service import create_app


async def _serve_app(app: web.Application, port: int) -> AsyncIterator[str]:
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, "localhost", port)
    await site.start()
    try:
        yield f"http://localhost:{port}"
    finally:
        await runner.cleanup()


@pytest_asyncio.fixture
async def origin(unused_tcp_port_factory) -> AsyncIterator[str]:
    app = web.Application()

    async def handle_article(_):
        return web.Response(
            text=article_html("Service Guide", links=["/next", "https://elsewhere.org/"]),
            content_type="text/html",
        )

    async def handle_empty(_):
        return web.Response(text="<html><body></body></html>", content_type="text/html")

    app.router.add_get("/article", handle_article)
    app.router.add_get("/empty", handle_empty)

    async for url in _serve_app(app, unused_tcp_port_factory()):
        yield url


@pytest_asyncio.fixture
async def service(unused_tcp_port_factory) -> AsyncIterator[str]:
    config = CrawlerConfig(timeout=5.0, user_agent="TestAgent/1.0")
    async for url in _serve_app(create_app(config), unused_tcp_port_factory()):
        yield f"{url}/api/scrape"


@pytest.mark.asyncio()
async def test_scrape_success(origin: str, service: str):
    async with ClientSession() as client:
        async with client.post(service, json={"url": f"{origin}/article"}) as resp:
            assert resp.status == 200
            data = await resp.json()

    assert data["title"] == "Service Guide"
    assert "quick brown fox" in data["content"]
    assert "\n\n" in data["content"]
    assert data["links"] == [f"{origin}/next"]


@pytest.mark.asyncio()
async def test_scrape_requires_url(service: str):
    async with ClientSession() as client:
        async with client.post(service, json={}) as resp:
            assert resp.status == 400
            assert await resp.json() == {"error": "URL is required"}
        async with client.post(service, data="not json") as resp:
            assert resp.status == 400
            assert "error" in await resp.json()


@pytest.mark.asyncio()
@pytest.mark.parametrize("bad_url", ["not a url", "ftp://example.com/file", "http://"])
async def test_scrape_rejects_malformed_url(service: str, bad_url: str):
    async with ClientSession() as client:
        async with client.post(service, json={"url": bad_url}) as resp:
            assert resp.status == 400
            data = await resp.json()
    assert data["error"].startswith("Invalid URL")


@pytest.mark.asyncio()
async def test_scrape_fetch_failure(origin: str, service: str):
    async with ClientSession() as client:
        async with client.post(service, json={"url": f"{origin}/missing"}) as resp:
            assert resp.status == 500
            data = await resp.json()
    assert data["error"].startswith("Failed to fetch: HTTP 404")


@pytest.mark.asyncio()
async def test_scrape_without_article(origin: str, service: str):
    async with ClientSession() as client:
        async with client.post(service, json={"url": f"{origin}/empty"}) as resp:
            assert resp.status == 200
            data = await resp.json()
    assert data == {"title": "No Title", "content": "", "links": []}
