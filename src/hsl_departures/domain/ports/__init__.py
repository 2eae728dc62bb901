"""Ports (interfaces) for the ports-and-adapters architecture."""

from hsl_departures.domain.ports.departure_repository import DepartureRepository
from hsl_departures.domain.ports.favorites_repository import FavoritesRepository
from hsl_departures.domain.ports.key_value_store import KeyValueStore
from hsl_departures.domain.ports.location_provider import LocationProvider
from hsl_departures.domain.ports.stop_repository import StopRepository

__all__ = [
    "DepartureRepository",
    "FavoritesRepository",
    "KeyValueStore",
    "LocationProvider",
    "StopRepository",
]
