# site_binder/crawler/fetcher.py
"""
Fetcher module: one GET per call, no retries. Any failure becomes a FetchError.
"""
from __future__ import annotations

import asyncio

from aiohttp import ClientError, ClientSession

from site_binder.crawler.models import PageData
from site_binder.errors import FetchError

_HTML_MIME = ("text/html", "application/xhtml+xml")


class Fetcher:
    """Fetches HTML pages through a shared aiohttp session."""

    def __init__(self, session: ClientSession) -> None:
        self.session = session

    async def fetch(self, url: str) -> PageData:
        """
        Fetch *url* and return its decoded body.

        Raises FetchError on network errors, timeouts, non-2xx statuses
        and non-HTML responses.
        """
        try:
            async with self.session.get(url, raise_for_status=False) as resp:
                if not 200 <= resp.status < 300:
                    raise FetchError(url, f"HTTP {resp.status} {resp.reason or ''}".strip(), resp.status)
                mime = resp.headers.get("Content-Type", "").split(";", 1)[0].strip().lower()
                if mime and mime not in _HTML_MIME:
                    raise FetchError(url, f"unsupported content type {mime}", resp.status)
                text = await resp.text(errors="replace")
                return PageData(url, text, resp.status)
        except asyncio.TimeoutError as exc:
            raise FetchError(url, "timed out") from exc
        except ClientError as exc:
            raise FetchError(url, str(exc) or exc.__class__.__name__) from exc
