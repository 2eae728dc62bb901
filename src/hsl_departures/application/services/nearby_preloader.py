"""Preloading of headsigns for stops near the user."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from hsl_departures.application.services.batch_executor import BatchExecutor
from hsl_departures.domain.models.coordinate import Coordinate

if TYPE_CHECKING:
    from hsl_departures.domain.contracts.headsign_cache import HeadsignCacheProtocol
    from hsl_departures.domain.models.stop import Stop
    from hsl_departures.domain.ports import StopRepository

logger = logging.getLogger(__name__)

# Helsinki city centre, used when the user's location is unknown
DEFAULT_REFERENCE_LOCATION = Coordinate(latitude=60.1699, longitude=24.9384)
DEFAULT_RADIUS_METERS = 5000.0


@dataclass(frozen=True)
class PreloadSettings:
    """Tunables of the nearby preload."""

    batch_size: int = 50
    batch_pause_seconds: float = 0.1
    max_headsigns_per_stop: int = 4
    reference_location: Coordinate = DEFAULT_REFERENCE_LOCATION


def unique_headsigns(headsigns: list[str], limit: int) -> list[str]:
    """Deduplicate headsigns preserving first-seen order, keeping at most ``limit``."""
    return list(dict.fromkeys(headsigns))[:limit]


class NearbyPreloader:
    """Fetches and caches headsigns for all stops within a radius.

    ``is_loading``, ``loading_progress``, ``total_stops`` and
    ``loading_message`` are observable state for a stop picker; assign
    ``on_progress`` to be notified whenever they change.
    """

    def __init__(
        self,
        stop_repository: StopRepository,
        cache: HeadsignCacheProtocol,
        settings: PreloadSettings | None = None,
    ) -> None:
        """Initialize the preloader.

        Args:
            stop_repository: Transport used to fetch headsigns.
            cache: Location-keyed headsign cache to read and populate.
            settings: Preload tunables; defaults when omitted.
        """
        self._stop_repository = stop_repository
        self._cache = cache
        self.settings = settings or PreloadSettings()
        self._executor = BatchExecutor(
            batch_size=self.settings.batch_size,
            pause_seconds=self.settings.batch_pause_seconds,
        )
        self._cancelled = False

        self.is_loading = False
        self.loading_progress = 0
        self.total_stops = 0
        self.loading_message = ""
        self.on_progress: Callable[[NearbyPreloader], None] | None = None

    @property
    def progress(self) -> tuple[int, int]:
        """Processed and total stop counts of the current preload."""
        return self.loading_progress, self.total_stops

    def cancel(self) -> None:
        """Request the running preload to stop before its next batch."""
        self._cancelled = True

    def _notify(self) -> None:
        if self.on_progress is not None:
            self.on_progress(self)

    @staticmethod
    def stops_within_radius(stops: list[Stop], location: Coordinate, radius: float) -> list[Stop]:
        """Return the stops with coordinates at most ``radius`` metres from ``location``."""
        nearby = []
        for stop in stops:
            coordinate = stop.coordinate
            if coordinate is not None and location.distance_to(coordinate) <= radius:
                nearby.append(stop)
        return nearby

    async def _fetch_stop_headsigns(self, stop: Stop) -> tuple[str, list[str]]:
        """Fetch headsigns across every platform ID of a stop."""
        all_headsigns: list[str] = []
        for stop_id in stop.query_stop_ids:
            try:
                all_headsigns.extend(await self._stop_repository.fetch_headsigns(stop_id))
            except Exception as e:
                logger.warning(f"Failed to fetch headsigns for stop {stop_id}: {e}")
        return stop.id, unique_headsigns(all_headsigns, self.settings.max_headsigns_per_stop)

    def _on_batch_done(self, processed: int, total: int) -> None:
        self.loading_progress = processed
        self.loading_message = f"Loaded {processed}/{total} stops..."
        logger.debug(self.loading_message)
        self._notify()

    async def preload_nearby_headsigns(
        self,
        all_stops: list[Stop],
        location: Coordinate | None = None,
        radius: float = DEFAULT_RADIUS_METERS,
    ) -> dict[str, list[str]]:
        """Fetch headsigns for every stop within ``radius`` of the location.

        Falls back to the configured reference location when ``location`` is
        None. Stops without any headsign are left out of the result.
        """
        self._cancelled = False
        return await self._preload(all_stops, location, radius)

    async def _preload(
        self, all_stops: list[Stop], location: Coordinate | None, radius: float
    ) -> dict[str, list[str]]:
        if location is None:
            logger.info("No user location, using reference location as fallback")
            location = self.settings.reference_location

        nearby_stops = self.stops_within_radius(all_stops, location, radius)

        self.total_stops = len(nearby_stops)
        self.loading_progress = 0
        self.loading_message = f"Loading {len(nearby_stops)} nearby stops..."
        self._notify()

        logger.info(f"Preloading headsigns for {len(nearby_stops)} stops within {int(radius)}m")

        results = await self._executor.run(
            nearby_stops,
            self._fetch_stop_headsigns,
            should_continue=lambda: not self._cancelled,
            on_batch_done=self._on_batch_done,
        )

        stop_headsigns = {stop_id: headsigns for stop_id, headsigns in results if headsigns}
        logger.info(f"Preload complete, {len(stop_headsigns)} stops with headsigns")
        return stop_headsigns

    async def load_or_refresh_cache(
        self,
        all_stops: list[Stop],
        location: Coordinate | None = None,
        radius: float = DEFAULT_RADIUS_METERS,
        force_refresh: bool = False,
    ) -> dict[str, list[str]]:
        """Return cached headsigns near the location, preloading on a miss.

        A preload cancelled part way returns what it fetched without saving it.
        """
        self._cancelled = False
        if not force_refresh:
            cached = self._cache.load(location, radius)
            if cached is not None:
                logger.info(f"Using cached headsigns ({len(cached)} stops)")
                return cached

        self.is_loading = True
        self._notify()
        try:
            stop_headsigns = await self._preload(all_stops, location, radius)
            if self._cancelled:
                logger.info("Preload cancelled, not caching partial headsigns")
            else:
                self._cache.save(stop_headsigns, location, radius)
        finally:
            self.is_loading = False
            self._notify()

        return stop_headsigns
