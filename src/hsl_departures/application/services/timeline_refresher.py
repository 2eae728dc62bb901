"""Periodic timeline refresh loop."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from hsl_departures.application.services.timeline_provider import (
        DisplayFamily,
        TimelineProvider,
    )
    from hsl_departures.domain.models.timetable_entry import Timeline

logger = logging.getLogger(__name__)

RETRY_INTERVAL = timedelta(minutes=1)


class TimelineRefresher:
    """Rebuilds the timeline whenever its refresh policy expires.

    A failed rebuild keeps the previously published timeline and is retried
    after ``retry_interval``.
    """

    def __init__(
        self,
        provider: TimelineProvider,
        family: DisplayFamily,
        on_timeline: Callable[[Timeline], None] | None = None,
        clock: Callable[[], datetime] | None = None,
        retry_interval: timedelta = RETRY_INTERVAL,
    ) -> None:
        """Initialize the refresher.

        Args:
            provider: Provider that builds timelines.
            family: Display family to build for.
            on_timeline: Called with each newly built timeline.
            clock: Source of the current time.
            retry_interval: Delay before retrying a failed rebuild.
        """
        self.provider = provider
        self.family = family
        self.on_timeline = on_timeline
        self._clock = clock or (lambda: datetime.now(UTC))
        self.retry_interval = retry_interval
        self.timeline: Timeline | None = None
        self._task: asyncio.Task | None = None

    async def start(self) -> None:
        """Build the first timeline immediately, then keep refreshing."""
        if self._task is not None and not self._task.done():
            logger.warning("Timeline refresher already running")
            return

        await self.refresh()

        self._task = asyncio.create_task(self._refresh_loop())
        logger.info("Started timeline refresher")

    async def stop(self) -> None:
        """Stop the refresher."""
        if self._task and not self._task.done():
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                logger.info("Timeline refresher cancelled")
            logger.info("Stopped timeline refresher")

    async def refresh(self) -> bool:
        """Rebuild the timeline once.

        Returns:
            True if a new timeline was published.
        """
        try:
            timeline = await self.provider.get_timeline(self.family, now=self._clock())
        except Exception as e:
            logger.error(f"Error rebuilding timeline (keeping previous): {e}", exc_info=True)
            return False

        self.timeline = timeline
        if self.on_timeline is not None:
            self.on_timeline(timeline)
        return True

    def _seconds_until_next_refresh(self) -> float:
        if self.timeline is None:
            return self.retry_interval.total_seconds()
        remaining = (self.timeline.refresh_at - self._clock()).total_seconds()
        return max(remaining, 0.0)

    async def _refresh_loop(self) -> None:
        try:
            while True:
                await asyncio.sleep(self._seconds_until_next_refresh())
                if not await self.refresh() and self.timeline is not None:
                    await asyncio.sleep(self.retry_interval.total_seconds())
        except asyncio.CancelledError:
            logger.info("Timeline refresher cancelled")
            raise
