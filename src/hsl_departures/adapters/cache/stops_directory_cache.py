"""Single-slot cache of the full stop directory."""

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING

from pydantic import TypeAdapter, ValidationError

from hsl_departures.domain.contracts.stops_cache import StopsCacheProtocol
from hsl_departures.domain.models.stop import Stop

if TYPE_CHECKING:
    from hsl_departures.domain.ports.key_value_store import KeyValueStore

logger = logging.getLogger(__name__)

CACHE_KEY = "cachedStops"
TIMESTAMP_KEY = "cachedStopsTimestamp"
CACHE_EXPIRATION = timedelta(hours=24)

stops_adapter: TypeAdapter[list[Stop]] = TypeAdapter(list[Stop])


class StopsDirectoryCache(StopsCacheProtocol):
    """Caches the stop list so the picker can open without a network call."""

    def __init__(
        self,
        store: KeyValueStore,
        clock: Callable[[], datetime] | None = None,
        expiration: timedelta = CACHE_EXPIRATION,
    ) -> None:
        """Initialize the cache.

        Args:
            store: Persistence for the stop list and its timestamp.
            clock: Source of the current time; defaults to UTC now.
            expiration: Age after which the list needs a refresh.
        """
        self._store = store
        self._clock = clock or (lambda: datetime.now(UTC))
        self.expiration = expiration

    def _timestamp(self) -> datetime | None:
        raw = self._store.get(TIMESTAMP_KEY)
        if raw is None:
            return None
        try:
            return datetime.fromisoformat(raw.decode("utf-8"))
        except (UnicodeDecodeError, ValueError) as e:
            logger.warning(f"Stops cache timestamp is unreadable: {e}")
            return None

    def load(self) -> list[Stop] | None:
        """Load the cached stops, or None if absent or corrupt."""
        data = self._store.get(CACHE_KEY)
        if data is None:
            logger.debug("No cached stops found")
            return None
        try:
            stops = stops_adapter.validate_json(data)
        except (ValidationError, ValueError) as e:
            logger.warning(f"Stops cache is unreadable, ignoring: {e}")
            return None
        logger.debug(f"Loaded {len(stops)} stops from cache")
        return stops

    def needs_refresh(self) -> bool:
        """True if the cache is empty, has no timestamp, or is older than the expiration."""
        if self._store.get(CACHE_KEY) is None:
            logger.debug("No stops cache exists, needs refresh")
            return True

        timestamp = self._timestamp()
        if timestamp is None:
            logger.debug("No stops cache timestamp found, needs refresh")
            return True

        age = self._clock() - timestamp
        if age > self.expiration:
            logger.info(f"Stops cache expired ({age / timedelta(hours=1):.1f} hours old)")
            return True
        return False

    def save(self, stops: list[Stop]) -> None:
        """Replace the cached stop list and stamp it with the current time."""
        try:
            self._store.set(CACHE_KEY, stops_adapter.dump_json(stops))
            self._store.set(TIMESTAMP_KEY, self._clock().isoformat().encode("utf-8"))
        except OSError as e:
            logger.warning(f"Failed to persist stop directory cache: {e}")
            return
        logger.info(f"Saved {len(stops)} stops to cache")

    def clear(self) -> None:
        """Remove the cached stop list."""
        self._store.remove(CACHE_KEY)
        self._store.remove(TIMESTAMP_KEY)
        logger.info("Stops cache cleared")

    def cache_info(self) -> str:
        """Human-readable summary of the cache state."""
        timestamp = self._timestamp()
        if timestamp is None:
            return "No cache"
        hours = (self._clock() - timestamp) / timedelta(hours=1)
        stops = self.load()
        count = len(stops) if stops else 0
        return f"Cached {count} stops, age: {hours:.1f} hours"
