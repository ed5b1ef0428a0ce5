"""Exceptions raised across the crawl pipeline."""
from __future__ import annotations

from typing import Optional

__all__ = ["SiteBinderError", "FetchError", "SeedUnreachableError"]


class SiteBinderError(Exception):
    """Base class for SiteBinder errors."""


class FetchError(SiteBinderError):
    """Raised when a page cannot be fetched (network error or non-2xx status)."""

    def __init__(self, url: str, reason: str, status: Optional[int] = None) -> None:
        super().__init__(f"{url}: {reason}")
        self.url = url
        self.reason = reason
        self.status = status


class SeedUnreachableError(FetchError):
    """The seed URL itself could not be fetched; the crawl cannot produce a document."""

    @classmethod
    def from_fetch_error(cls, exc: FetchError) -> SeedUnreachableError:
        return cls(exc.url, exc.reason, exc.status)
