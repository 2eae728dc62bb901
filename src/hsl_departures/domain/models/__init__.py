"""Domain models for HSL departures."""

from hsl_departures.domain.models.coordinate import Coordinate
from hsl_departures.domain.models.departure import Departure
from hsl_departures.domain.models.geo_cache_entry import GeoCacheEntry
from hsl_departures.domain.models.stop import Stop
from hsl_departures.domain.models.timetable_entry import Timeline, TimetableEntry, WidgetState

__all__ = [
    "Coordinate",
    "Departure",
    "GeoCacheEntry",
    "Stop",
    "Timeline",
    "TimetableEntry",
    "WidgetState",
]
