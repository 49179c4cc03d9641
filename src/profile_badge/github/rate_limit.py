"""Cooperative pacing based on GitHub's rate limit headers."""

from __future__ import annotations

import asyncio
import logging
import time

import httpx

log = logging.getLogger(__name__)


class RateLimitMonitor:
    """Track the remaining request budget and pause when it runs low."""

    def __init__(self, threshold: int = 5) -> None:
        self._threshold = threshold
        self._remaining: int | None = None
        self._reset_at: float | None = None

    def update(self, response: httpx.Response) -> None:
        remaining = response.headers.get("X-RateLimit-Remaining")
        reset = response.headers.get("X-RateLimit-Reset")
        try:
            if remaining is not None:
                self._remaining = int(remaining)
            if reset is not None:
                self._reset_at = float(reset)
        except ValueError:
            log.debug("Ignoring malformed rate limit headers: %r / %r", remaining, reset)

    async def wait_if_needed(self) -> None:
        if self._remaining is None or self._reset_at is None:
            return
        if self._remaining > self._threshold:
            return
        delay = max(0.0, self._reset_at - time.time()) + 1
        log.warning(
            "Rate limit nearly exhausted (%d left), sleeping %.0fs until reset",
            self._remaining,
            delay,
        )
        await asyncio.sleep(delay)
        self._remaining = None
