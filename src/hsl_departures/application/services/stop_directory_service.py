"""Stop directory lookup backed by the stops cache."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from hsl_departures.domain.contracts.stops_cache import StopsCacheProtocol
    from hsl_departures.domain.models.stop import Stop
    from hsl_departures.domain.ports import StopRepository

logger = logging.getLogger(__name__)


class StopDirectoryService:
    """Serves the stop list from cache while fresh, fetching it otherwise."""

    def __init__(self, stop_repository: StopRepository, stops_cache: StopsCacheProtocol) -> None:
        self._stop_repository = stop_repository
        self._stops_cache = stops_cache

    async def get_stops(self, force_refresh: bool = False) -> list[Stop]:
        """Return the stop directory.

        A failed or empty fetch falls back to the cached list even when it is
        stale.
        """
        if not force_refresh and not self._stops_cache.needs_refresh():
            cached = self._stops_cache.load()
            if cached:
                logger.debug(f"Using {len(cached)} cached stops")
                return cached

        stops = await self._stop_repository.fetch_all_stops()
        if stops:
            self._stops_cache.save(stops)
            return stops

        stale = self._stops_cache.load()
        if stale:
            logger.warning(f"Stop fetch returned nothing, using {len(stale)} stale cached stops")
            return stale
        logger.warning("No stops available")
        return []

    @staticmethod
    def search(stops: list[Stop], query: str) -> list[Stop]:
        """Stops whose name or code contains ``query``, ignoring case, sorted by name."""
        needle = query.strip().casefold()
        if not needle:
            return sorted(stops, key=lambda s: s.name)
        matches = [
            s for s in stops if needle in s.name.casefold() or needle in s.code.casefold()
        ]
        return sorted(matches, key=lambda s: s.name)

    @staticmethod
    def find(stops: list[Stop], stop_id: str) -> Stop | None:
        """Stop matching an ID, a stop code or any of its platform IDs."""
        for stop in stops:
            if stop_id in (stop.id, stop.code) or stop_id in stop.query_stop_ids:
                return stop
        return None
