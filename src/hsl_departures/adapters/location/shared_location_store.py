"""Last known location shared through key-value storage."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from hsl_departures.domain.models.coordinate import Coordinate
from hsl_departures.domain.ports.location_provider import LocationProvider

if TYPE_CHECKING:
    from hsl_departures.domain.ports.key_value_store import KeyValueStore

logger = logging.getLogger(__name__)

LATITUDE_KEY = "currentLatitude"
LONGITUDE_KEY = "currentLongitude"


class SharedLocationStore(LocationProvider):
    """Persists the most recent location so other processes can read it.

    A stored (0, 0) pair is treated as "no location".
    """

    def __init__(self, store: KeyValueStore) -> None:
        self._store = store

    def _read_float(self, key: str) -> float | None:
        raw = self._store.get(key)
        if raw is None:
            return None
        try:
            return float(raw.decode("utf-8"))
        except (UnicodeDecodeError, ValueError):
            logger.warning(f"Stored {key} is not a number, ignoring")
            return None

    def current_location(self) -> Coordinate | None:
        """Return the persisted location, or None if none was saved."""
        latitude = self._read_float(LATITUDE_KEY)
        longitude = self._read_float(LONGITUDE_KEY)
        if latitude is None or longitude is None:
            return None
        if latitude == 0 and longitude == 0:
            return None
        return Coordinate(latitude, longitude)

    def save_location(self, location: Coordinate) -> None:
        """Persist a new location."""
        self._store.set(LATITUDE_KEY, repr(location.latitude).encode("utf-8"))
        self._store.set(LONGITUDE_KEY, repr(location.longitude).encode("utf-8"))
        logger.debug(f"Saved shared location {location.latitude}, {location.longitude}")

    def clear(self) -> None:
        """Forget the persisted location."""
        self._store.remove(LATITUDE_KEY)
        self._store.remove(LONGITUDE_KEY)
