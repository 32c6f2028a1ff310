"""Fixed-window request quota per API key."""

from __future__ import annotations

import asyncio
import contextlib
import threading

import structlog
from prometheus_client import Counter

from weather_gateway.config import Settings
from weather_gateway.exceptions import RateLimitExceededError
from weather_gateway.services.keys import mask_key

logger = structlog.get_logger()

# Metrics
rate_limit_rejections = Counter(
    "rate_limit_rejections_total",
    "Total requests rejected by the rate limiter",
)
rate_limit_resets = Counter(
    "rate_limit_resets_total",
    "Total rate limit window resets",
)


class RateLimiter:
    """Counts requests per API key within one global fixed window.

    Every key shares the same window boundary: ``reset`` clears all counters
    at once, regardless of when each key made its first request.
    """

    def __init__(self, settings: Settings) -> None:
        """Initialize limiter with settings."""
        self._quota = settings.rate_limit_quota
        self._lock = threading.Lock()
        self._counts: dict[str, int] = {}

    def consume(self, key: str) -> int:
        """Record one request for the key.

        The counter keeps growing past the quota, so every call after the
        limit is hit fails until the next reset.

        Returns:
            The request count for the key in the current window

        Raises:
            RateLimitExceededError: If the count now exceeds the quota
        """
        with self._lock:
            count = self._counts.get(key, 0) + 1
            self._counts[key] = count

        if count > self._quota:
            rate_limit_rejections.inc()
            logger.warning(
                "Rate limit exceeded",
                api_key=mask_key(key),
                count=count,
                quota=self._quota,
            )
            raise RateLimitExceededError("Rate limit exceeded", count=count, quota=self._quota)

        logger.debug("Request counted", api_key=mask_key(key), count=count)
        return count

    def count(self, key: str) -> int:
        """Return the request count for the key in the current window."""
        with self._lock:
            return self._counts.get(key, 0)

    def reset(self) -> None:
        """Clear the counters of every key."""
        with self._lock:
            tracked = len(self._counts)
            self._counts = {}

        rate_limit_resets.inc()
        logger.info("Rate limit counts reset", tracked_keys=tracked)


class RateLimitResetScheduler:
    """Background task resetting a rate limiter at a fixed interval."""

    def __init__(self, limiter: RateLimiter, interval_seconds: float) -> None:
        self._limiter = limiter
        self._interval = interval_seconds
        self._task: asyncio.Task[None] | None = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        """Start the reset loop on the running event loop."""
        if self.running:
            return
        self._task = asyncio.create_task(self._run(), name="rate-limit-reset")
        logger.info("Rate limit reset scheduler started", interval_seconds=self._interval)

    async def stop(self) -> None:
        """Cancel the reset loop and wait for it to finish."""
        if self._task is None:
            return
        self._task.cancel()
        with contextlib.suppress(asyncio.CancelledError):
            await self._task
        self._task = None
        logger.info("Rate limit reset scheduler stopped")

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self._interval)
            try:
                self._limiter.reset()
            except Exception:
                logger.exception("Rate limit reset failed")
