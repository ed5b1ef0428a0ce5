# site_binder/crawler/link_extractor.py
"""
Link extraction and URL normalization utilities for SiteBinder.
"""
from __future__ import annotations

from typing import List, Optional
from urllib.parse import urljoin, urlsplit, urlunsplit

from bs4 import BeautifulSoup
from bs4.element import Tag

from site_binder.logger import logger

__all__ = ["resolve_links", "normalize_url", "hostname_of"]


def normalize_url(url: str) -> str:
    """
    Normalize URL for comparison: lowercase scheme and host,
    keep path and query, drop the fragment.
    """
    parts = urlsplit(url.strip())
    path = parts.path or "/"
    normalized = urlunsplit((parts.scheme.lower(), parts.netloc.lower(), path, parts.query, ""))
    if normalized != url:
        logger.debug("Normalized URL: %s -> %s", url, normalized)
    return normalized


def hostname_of(url: str) -> Optional[str]:
    """Return the lower-cased hostname of *url*, or None if it has none or is malformed."""
    try:
        return urlsplit(url).hostname
    except ValueError:
        return None


def resolve_links(html: str, base_url: str) -> List[str]:
    """
    Extract same-host absolute links from anchor elements, in document order.

    Malformed hrefs are skipped. Hostnames must match exactly (no subdomains).
    """
    base_host = hostname_of(base_url)
    if not base_host:
        return []
    soup = BeautifulSoup(html, "html.parser")
    links: List[str] = []
    for tag in soup.find_all("a", href=True):
        if not isinstance(tag, Tag):
            continue
        href_val = tag.get("href")
        if not isinstance(href_val, str):
            continue
        raw = href_val.strip()
        if not raw:
            continue
        try:
            absolute = urljoin(base_url, raw)
            parsed = urlsplit(absolute)
            host = parsed.hostname
        except ValueError:
            logger.debug("Skipping malformed href %r on %s", raw, base_url)
            continue
        if parsed.scheme in ("http", "https") and host == base_host:
            links.append(normalize_url(absolute))
    return list(dict.fromkeys(links))
