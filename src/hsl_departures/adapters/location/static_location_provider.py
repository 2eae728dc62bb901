"""Location provider returning a fixed, optional location."""

from hsl_departures.domain.models.coordinate import Coordinate
from hsl_departures.domain.ports.location_provider import LocationProvider


class StaticLocationProvider(LocationProvider):
    """Live location source fed explicitly, e.g. from command-line arguments."""

    def __init__(self, location: Coordinate | None = None) -> None:
        self.location = location

    def current_location(self) -> Coordinate | None:
        """Return the configured location."""
        return self.location
