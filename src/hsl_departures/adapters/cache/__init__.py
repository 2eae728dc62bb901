"""Cache adapters backed by key-value storage."""

from hsl_departures.adapters.cache.geo_headsign_cache import GeoHeadsignCache, location_key
from hsl_departures.adapters.cache.stops_directory_cache import StopsDirectoryCache

__all__ = ["GeoHeadsignCache", "StopsDirectoryCache", "location_key"]
