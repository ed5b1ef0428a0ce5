"""Politeness pacing between consecutive requests to the origin."""
from __future__ import annotations

import asyncio
import time
from typing import Optional, Protocol

__all__ = ["PacingPolicy", "FixedDelay"]


class PacingPolicy(Protocol):
    async def wait(self) -> None:
        """Suspend until the next request may be issued."""
        ...


class FixedDelay:
    """Keeps at least *delay* seconds between the starts of two requests.

    The first request is never delayed. ``FixedDelay(0)`` disables pacing.
    """

    def __init__(self, delay: float) -> None:
        if delay < 0:
            raise ValueError("delay must be >= 0")
        self.delay = delay
        self._last_request_ts: Optional[float] = None

    async def wait(self) -> None:
        if self._last_request_ts is not None and self.delay:
            remaining = self.delay - (time.monotonic() - self._last_request_ts)
            if remaining > 0:
                await asyncio.sleep(remaining)
        self._last_request_ts = time.monotonic()

    def __repr__(self) -> str:
        return f"FixedDelay({self.delay!r})"
