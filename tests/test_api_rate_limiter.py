"""Tests for the API rate limiter."""

import asyncio
import time

import pytest

from hsl_departures.adapters.api_rate_limiter import ApiRateLimiter


class TestApiRateLimiter:
    """Tests for ApiRateLimiter class."""

    @pytest.mark.asyncio
    async def test_first_request_is_immediate(self) -> None:
        """First request should not wait."""
        limiter = ApiRateLimiter("test_api", min_delay_seconds=1.0)

        start = time.monotonic()
        async with limiter:
            pass
        elapsed = time.monotonic() - start

        assert elapsed < 0.05

    @pytest.mark.asyncio
    async def test_second_request_waits_for_delay(self) -> None:
        """Second request should wait for the minimum delay."""
        delay = 0.2
        limiter = ApiRateLimiter("test_api", min_delay_seconds=delay)

        async with limiter:
            pass

        start = time.monotonic()
        async with limiter:
            pass
        elapsed = time.monotonic() - start

        assert elapsed >= delay * 0.9  # Allow 10% tolerance

    @pytest.mark.asyncio
    async def test_request_after_delay_is_immediate(self) -> None:
        """Request after the delay period should not wait."""
        delay = 0.1
        limiter = ApiRateLimiter("test_api", min_delay_seconds=delay)

        async with limiter:
            pass
        await asyncio.sleep(delay * 1.5)

        start = time.monotonic()
        async with limiter:
            pass
        elapsed = time.monotonic() - start

        assert elapsed < 0.05

    @pytest.mark.asyncio
    async def test_concurrency_is_bounded(self) -> None:
        """No more than max_concurrent requests should be in flight."""
        limiter = ApiRateLimiter("test_api", max_concurrent=3)
        in_flight = 0
        peak = 0

        async def request() -> None:
            nonlocal in_flight, peak
            async with limiter:
                in_flight += 1
                peak = max(peak, in_flight)
                await asyncio.sleep(0.01)
                in_flight -= 1

        await asyncio.gather(*(request() for _ in range(10)))

        assert peak == 3

    @pytest.mark.asyncio
    async def test_slot_released_when_request_fails(self) -> None:
        """A failing request should release its slot."""
        limiter = ApiRateLimiter("test_api", max_concurrent=1)

        with pytest.raises(RuntimeError):
            async with limiter:
                raise RuntimeError("boom")

        await asyncio.wait_for(limiter.__aenter__(), timeout=0.1)
        await limiter.__aexit__(None, None, None)

    def test_invalid_concurrency_raises(self) -> None:
        """max_concurrent below 1 should be rejected."""
        with pytest.raises(ValueError):
            ApiRateLimiter("test_api", max_concurrent=0)
