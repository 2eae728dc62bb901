"""Display-surface facing timeline provider."""

from __future__ import annotations

import logging
from datetime import UTC, datetime, timedelta
from enum import Enum
from typing import TYPE_CHECKING

from hsl_departures.domain.models.departure import Departure
from hsl_departures.domain.models.timetable_entry import Timeline, TimetableEntry, WidgetState

if TYPE_CHECKING:
    from hsl_departures.application.services.timeline_builder import TimelineBuilder

logger = logging.getLogger(__name__)

DEFAULT_DEPARTURES_SHOWN = 2
SMALL_FAMILY_DEPARTURES = 3


class DisplayFamily(Enum):
    """Size class of the display surface."""

    SMALL = "small"
    MEDIUM = "medium"
    RECTANGULAR = "rectangular"
    INLINE = "inline"


class TimelineProvider:
    """Decides how many departures a display shows and delegates to the builder."""

    def __init__(
        self,
        timeline_builder: TimelineBuilder,
        departures_shown: int = DEFAULT_DEPARTURES_SHOWN,
        small_family_departures: int = SMALL_FAMILY_DEPARTURES,
    ) -> None:
        self._builder = timeline_builder
        self._departures_shown = departures_shown
        self._small_family_departures = small_family_departures

    def max_shown(self, family: DisplayFamily) -> int:
        """Number of departures per entry for a display family."""
        if family == DisplayFamily.SMALL:
            return self._small_family_departures
        return self._departures_shown if self._departures_shown > 0 else DEFAULT_DEPARTURES_SHOWN

    async def get_timeline(
        self, family: DisplayFamily = DisplayFamily.MEDIUM, now: datetime | None = None
    ) -> Timeline:
        """Build a fresh timeline for the given display family."""
        now = now or datetime.now(UTC)
        max_shown = self.max_shown(family)
        logger.debug(f"Timeline reload for {family.value} display, max_shown={max_shown}")
        return await self._builder.build_timeline(now, max_shown)

    @staticmethod
    def placeholder(now: datetime | None = None) -> TimetableEntry:
        """Sample entry shown while the real timeline is loading."""
        now = now or datetime.now(UTC)
        return TimetableEntry(
            date=now,
            stop_name="Merisotilaantori",
            departures=(
                Departure(
                    departure_time=now + timedelta(minutes=5),
                    route_short_name="4",
                    headsign="Munkkiniemi",
                    mode="TRAM",
                ),
                Departure(
                    departure_time=now + timedelta(minutes=12),
                    route_short_name="550",
                    headsign="Westendinasema",
                    mode="BUS",
                ),
            ),
            state=WidgetState.NORMAL,
        )
