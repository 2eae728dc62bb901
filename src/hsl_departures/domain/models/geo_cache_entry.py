"""Persisted record of the location-keyed headsign cache."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class GeoCacheEntry(BaseModel):
    """Headsigns of the stops around one quantized location.

    ``timestamp`` is when the data was fetched; ``last_access_time`` drives
    LRU eviction and is refreshed on every cache hit.
    """

    model_config = ConfigDict(frozen=True)

    location_key: str
    latitude: float
    longitude: float
    timestamp: datetime
    radius: float
    stop_headsigns: dict[str, list[str]]
    last_access_time: datetime
