"""Contracts (protocols) for internal services."""

from hsl_departures.domain.contracts.headsign_cache import HeadsignCacheProtocol
from hsl_departures.domain.contracts.stops_cache import StopsCacheProtocol

__all__ = ["HeadsignCacheProtocol", "StopsCacheProtocol"]
