"""Domain layer - core business models and interfaces."""

from hsl_departures.domain.models import (
    Coordinate,
    Departure,
    Stop,
    Timeline,
    TimetableEntry,
    WidgetState,
)
from hsl_departures.domain.ports import (
    DepartureRepository,
    FavoritesRepository,
    KeyValueStore,
    LocationProvider,
    StopRepository,
)

__all__ = [
    "Coordinate",
    "Departure",
    "DepartureRepository",
    "FavoritesRepository",
    "KeyValueStore",
    "LocationProvider",
    "Stop",
    "StopRepository",
    "Timeline",
    "TimetableEntry",
    "WidgetState",
]
