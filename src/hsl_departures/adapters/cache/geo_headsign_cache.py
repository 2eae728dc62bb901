"""Location-keyed, LRU-evicted headsign cache."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING

from pydantic import TypeAdapter, ValidationError

from hsl_departures.domain.contracts.headsign_cache import HeadsignCacheProtocol
from hsl_departures.domain.models.coordinate import Coordinate
from hsl_departures.domain.models.geo_cache_entry import GeoCacheEntry

if TYPE_CHECKING:
    from hsl_departures.domain.ports.key_value_store import KeyValueStore

logger = logging.getLogger(__name__)

CACHE_KEY = "headsignsCache"
MAX_CACHED_LOCATIONS = 5
CACHE_EXPIRATION = timedelta(days=7)
CACHE_LOCATION_THRESHOLD_METERS = 2000.0

_entries_adapter: TypeAdapter[dict[str, GeoCacheEntry]] = TypeAdapter(dict[str, GeoCacheEntry])


def location_key(location: Coordinate) -> str:
    """Quantize a location to a ~111 m grid cell key."""
    return f"{location.latitude:.3f},{location.longitude:.3f}"


class GeoHeadsignCache(HeadsignCacheProtocol):
    """Caches stop headsigns for up to ``max_cached_locations`` places.

    Entries are matched by distance (within ``threshold_meters``), exact
    radius and age (within ``expiration``). When the cache grows past its
    limit, the least recently accessed entries are evicted. The whole cache
    is read and written as one blob.
    """

    def __init__(
        self,
        store: KeyValueStore,
        clock: Callable[[], datetime] | None = None,
        max_cached_locations: int = MAX_CACHED_LOCATIONS,
        expiration: timedelta = CACHE_EXPIRATION,
        threshold_meters: float = CACHE_LOCATION_THRESHOLD_METERS,
    ) -> None:
        """Initialize the cache.

        Args:
            store: Persistence for the cache blob.
            clock: Source of the current time; defaults to UTC now.
            max_cached_locations: Maximum number of location entries.
            expiration: Maximum age of usable data.
            threshold_meters: Maximum distance between a lookup and an entry.
        """
        if max_cached_locations < 1:
            raise ValueError("max_cached_locations must be at least 1")
        self._store = store
        self._clock = clock or (lambda: datetime.now(UTC))
        self.max_cached_locations = max_cached_locations
        self.expiration = expiration
        self.threshold_meters = threshold_meters

    def _read_entries(self) -> dict[str, GeoCacheEntry]:
        data = self._store.get(CACHE_KEY)
        if data is None:
            return {}
        try:
            return _entries_adapter.validate_json(data)
        except (ValidationError, ValueError) as e:
            logger.warning(f"Headsign cache is unreadable, treating as empty: {e}")
            return {}

    def _write_entries(self, entries: dict[str, GeoCacheEntry]) -> bool:
        try:
            self._store.set(CACHE_KEY, _entries_adapter.dump_json(entries))
        except OSError as e:
            logger.warning(f"Failed to persist headsign cache: {e}")
            return False
        return True

    def _find_in(
        self, entries: dict[str, GeoCacheEntry], location: Coordinate, radius: float
    ) -> GeoCacheEntry | None:
        now = self._clock()
        for entry in entries.values():
            if entry.radius != radius:
                continue
            if now - entry.timestamp > self.expiration:
                continue
            distance = location.distance_to(Coordinate(entry.latitude, entry.longitude))
            if distance <= self.threshold_meters:
                return entry
        return None

    @property
    def entry_count(self) -> int:
        """Number of stored location entries."""
        return len(self._read_entries())

    def find(self, location: Coordinate, radius: float) -> GeoCacheEntry | None:
        """Return a fresh entry near ``location`` stored with the same radius."""
        return self._find_in(self._read_entries(), location, radius)

    def should_refresh(self, location: Coordinate | None, radius: float) -> bool:
        """Check whether headsigns near the location must be fetched again."""
        if location is None:
            logger.debug("No location, headsign cache needs refresh")
            return True
        entries = self._read_entries()
        if not entries:
            logger.debug("Headsign cache is empty, needs refresh")
            return True
        if self._find_in(entries, location, radius) is None:
            logger.debug("No valid headsign cache entry nearby, needs refresh")
            return True
        return False

    def load(self, location: Coordinate | None, radius: float) -> dict[str, list[str]] | None:
        """Load cached headsigns near a location, promoting the entry on a hit."""
        if location is None:
            return None

        entries = self._read_entries()
        entry = self._find_in(entries, location, radius)
        if entry is None:
            logger.debug(f"Headsign cache miss at {location_key(location)}")
            return None

        entries[entry.location_key] = entry.model_copy(
            update={"last_access_time": self._clock()}
        )
        self._write_entries(entries)
        logger.info(
            f"Loaded headsign cache entry {entry.location_key} "
            f"with {len(entry.stop_headsigns)} stops"
        )
        return entry.stop_headsigns

    def save(
        self, stop_headsigns: dict[str, list[str]], location: Coordinate | None, radius: float
    ) -> None:
        """Upsert the entry for the location's grid cell and evict the oldest entries."""
        if location is None:
            logger.debug("Not saving headsign cache without a location")
            return

        now = self._clock()
        key = location_key(location)
        entries = self._read_entries()
        entries[key] = GeoCacheEntry(
            location_key=key,
            latitude=location.latitude,
            longitude=location.longitude,
            timestamp=now,
            radius=radius,
            stop_headsigns=stop_headsigns,
            last_access_time=now,
        )

        overflow = len(entries) - self.max_cached_locations
        if overflow > 0:
            by_access = sorted(entries.values(), key=lambda e: e.last_access_time)
            for evicted in by_access[:overflow]:
                del entries[evicted.location_key]
                logger.debug(f"Evicted headsign cache entry {evicted.location_key}")

        if not self._write_entries(entries):
            return
        logger.info(
            f"Saved headsign cache entry {key} with {len(stop_headsigns)} stops "
            f"({len(entries)} locations cached)"
        )

    def clear(self) -> None:
        """Drop all cached entries."""
        self._store.remove(CACHE_KEY)
        logger.info("Headsign cache cleared")

    def cache_age_days(self, location: Coordinate, radius: float) -> float | None:
        """Age in days of the entry that would serve ``location``, if any."""
        entry = self.find(location, radius)
        if entry is None:
            return None
        return (self._clock() - entry.timestamp) / timedelta(days=1)
