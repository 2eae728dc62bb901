"""Stop domain model."""

from dataclasses import dataclass

from hsl_departures.domain.models.coordinate import Coordinate


@dataclass(frozen=True)
class Stop:
    """A physical transit stop, optionally carrying the user's display filters.

    A stop code can map to several directional platform IDs; ``all_stop_ids``
    lists all of them so that headsign queries cover every direction.
    """

    id: str
    name: str
    code: str
    latitude: float | None = None
    longitude: float | None = None
    vehicle_modes: frozenset[str] | None = None
    headsigns: list[str] | None = None
    all_stop_ids: list[str] | None = None
    filtered_lines: list[str] | None = None  # Exact, case-sensitive route names
    filtered_headsign_pattern: str | None = None  # Case-insensitive substring
    primary_mode: str | None = None

    @property
    def coordinate(self) -> Coordinate | None:
        """Location of the stop, if both coordinates are known."""
        if self.latitude is None or self.longitude is None:
            return None
        return Coordinate(self.latitude, self.longitude)

    @property
    def query_stop_ids(self) -> list[str]:
        """IDs to query for a complete set of headsigns."""
        return list(self.all_stop_ids) if self.all_stop_ids else [self.id]
