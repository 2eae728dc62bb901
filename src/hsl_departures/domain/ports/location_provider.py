"""Location provider port."""

from typing import Protocol

from hsl_departures.domain.models.coordinate import Coordinate


class LocationProvider(Protocol):
    """Port for a source of the user's location."""

    def current_location(self) -> Coordinate | None:
        """Return the location, or None if this source has none."""
        ...
