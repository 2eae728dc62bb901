"""Builds widget timelines from favorites and departures."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import TYPE_CHECKING

from hsl_departures.application.services.closest_stop_selector import ClosestStopSelector
from hsl_departures.application.services.departure_filter import DepartureFilter
from hsl_departures.domain.models.timetable_entry import Timeline, TimetableEntry, WidgetState

if TYPE_CHECKING:
    from hsl_departures.application.services.location_resolver import LocationResolver
    from hsl_departures.domain.models.departure import Departure
    from hsl_departures.domain.models.stop import Stop
    from hsl_departures.domain.ports import DepartureRepository, FavoritesRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TimelineSettings:
    """Tunables of the timeline pipeline."""

    fetched_departures: int = 12
    max_entries: int = 6
    refresh_interval: timedelta = timedelta(minutes=15)
    no_favorites_refresh_interval: timedelta = timedelta(minutes=60)


def build_entries(
    stop_name: str,
    departures: list[Departure],
    now: datetime,
    max_shown: int,
    max_entries: int = 6,
) -> list[TimetableEntry]:
    """Turn sorted departures into a sliding window of display snapshots.

    Only departures strictly after ``now`` take part. Each entry becomes
    current when the most imminent departure of the previous entry leaves,
    so consecutive entries overlap by ``max_shown - 1`` departures. Window
    start offsets run from 0 to ``len(future) - max_shown`` and are capped at
    ``max_entries``; with ``max_shown`` or fewer future departures exactly
    one entry holds all of them.

    Never returns an empty list: without future departures a single
    ``NO_DEPARTURES`` entry at ``now`` is produced.

    Raises:
        ValueError: If ``max_shown`` or ``max_entries`` is below 1.
    """
    if max_shown < 1:
        raise ValueError("max_shown must be at least 1")
    if max_entries < 1:
        raise ValueError("max_entries must be at least 1")

    future = [d for d in departures if d.departure_time > now]
    if not future:
        logger.debug(f"No future departures for {stop_name}")
        return [
            TimetableEntry(
                date=now, stop_name=stop_name, departures=(), state=WidgetState.NO_DEPARTURES
            )
        ]

    entries: list[TimetableEntry] = []
    entry_date = now
    window_starts = max(len(future) - max_shown, 0) + 1

    for start in range(min(window_starts, max_entries)):
        window = future[start : start + max_shown]
        # Departures in the window may already have left by the time this entry is shown
        valid = tuple(d for d in window if d.departure_time > entry_date)
        if not valid:
            break

        entries.append(
            TimetableEntry(
                date=entry_date, stop_name=stop_name, departures=valid, state=WidgetState.NORMAL
            )
        )
        entry_date = valid[0].departure_time

    logger.debug(f"Created {len(entries)} timeline entries for {stop_name}")
    return entries


class TimelineBuilder:
    """Resolves the stop to show, fetches its departures and builds a timeline."""

    def __init__(
        self,
        favorites_repository: FavoritesRepository,
        departure_repository: DepartureRepository,
        location_resolver: LocationResolver,
        settings: TimelineSettings | None = None,
    ) -> None:
        """Initialize with injected collaborators.

        Args:
            favorites_repository: Source of the favorite stops.
            departure_repository: Transport used to fetch departures.
            location_resolver: Fallback chain for the user's location.
            settings: Pipeline tunables; defaults when omitted.
        """
        self._favorites = favorites_repository
        self._departures = departure_repository
        self._location_resolver = location_resolver
        self.settings = settings or TimelineSettings()

    async def build_timeline(self, now: datetime, max_shown: int) -> Timeline:
        """Build the complete timeline for one refresh tick.

        Steps run strictly in sequence: favorites, closest stop, departures
        fetch, filtering, entry construction. Must not be awaited
        concurrently with itself.
        """
        if max_shown < 1:
            raise ValueError("max_shown must be at least 1")

        favorites = self._favorites.get_favorites()
        logger.debug(f"Retrieved {len(favorites)} favorites")

        if not favorites:
            logger.info("No favorites found, showing empty state")
            entry = TimetableEntry(
                date=now, stop_name="", departures=(), state=WidgetState.NO_FAVORITES
            )
            return Timeline(
                entries=(entry,), refresh_at=now + self.settings.no_favorites_refresh_interval
            )

        location = self._location_resolver.resolve()
        if location is None:
            logger.debug("No location available, using alphabetical fallback")

        stop = ClosestStopSelector.select(favorites, location)
        logger.info(f"Selected stop: {stop.name} (ID: {stop.id})")
        if DepartureFilter.has_filters(stop):
            logger.debug(
                f"Stop filters: lines={stop.filtered_lines} "
                f"headsign_pattern={stop.filtered_headsign_pattern!r}"
            )

        departures = await self._fetch_filtered_departures(stop)
        entries = build_entries(
            stop.name, departures, now, max_shown, max_entries=self.settings.max_entries
        )

        return Timeline(entries=tuple(entries), refresh_at=now + self.settings.refresh_interval)

    async def _fetch_filtered_departures(self, stop: Stop) -> list[Departure]:
        """Fetch departures for a stop, filter them and sort by departure time."""
        try:
            all_departures = await self._departures.fetch_departures(
                stop.id, self.settings.fetched_departures
            )
        except Exception as e:
            logger.error(f"Failed to fetch departures for {stop.id}: {e}", exc_info=True)
            return []

        departures = DepartureFilter.apply(stop, all_departures)
        return sorted(departures, key=lambda d: d.departure_time)
