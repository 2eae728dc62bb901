"""Rate limiter for outgoing API requests.

Bounds the number of requests in flight and spaces request starts by a
minimum delay, so preload bursts stay polite to the transit API.
"""

from __future__ import annotations

import asyncio
import logging
import time

logger = logging.getLogger(__name__)


class ApiRateLimiter:
    """Limits concurrency and request rate for one API.

    Use as an async context manager around each request.
    """

    def __init__(
        self, api_name: str, min_delay_seconds: float = 0.0, max_concurrent: int = 50
    ) -> None:
        """Initialize the rate limiter.

        Args:
            api_name: Name of the API (for logging).
            min_delay_seconds: Minimum delay between request starts in seconds.
            max_concurrent: Maximum number of requests in flight.
        """
        if max_concurrent < 1:
            raise ValueError("max_concurrent must be at least 1")
        self.api_name = api_name
        self.min_delay_seconds = min_delay_seconds
        self.max_concurrent = max_concurrent
        self._semaphore = asyncio.Semaphore(max_concurrent)
        self._last_request_time: float = 0.0
        self._lock = asyncio.Lock()

    async def _wait_for_slot(self) -> None:
        if self.min_delay_seconds <= 0:
            return
        async with self._lock:
            elapsed = time.monotonic() - self._last_request_time
            wait_time = self.min_delay_seconds - elapsed
            if wait_time > 0:
                logger.debug(f"{self.api_name}: waiting {wait_time:.2f}s before next request")
                await asyncio.sleep(wait_time)
            self._last_request_time = time.monotonic()

    async def __aenter__(self) -> ApiRateLimiter:
        """Acquire a concurrency slot, then wait out the minimum delay."""
        await self._semaphore.acquire()
        try:
            await self._wait_for_slot()
        except BaseException:
            self._semaphore.release()
            raise
        return self

    async def __aexit__(
        self, _exc_type: type | None, _exc_val: BaseException | None, _exc_tb: object
    ) -> None:
        """Release the concurrency slot."""
        self._semaphore.release()
