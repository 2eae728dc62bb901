"""Selection of the favorite stop to display."""

import math

from hsl_departures.domain.models.coordinate import Coordinate
from hsl_departures.domain.models.stop import Stop


class ClosestStopSelector:
    """Picks one favorite stop based on proximity to the user."""

    @staticmethod
    def select(favorites: list[Stop], location: Coordinate | None = None) -> Stop:
        """Select the favorite closest to ``location``.

        Without a location the alphabetically first stop name wins. Stops
        without coordinates never beat a stop that has them; if no stop has
        coordinates the first favorite is returned. Distance ties keep the
        earlier stop.

        Raises:
            ValueError: If ``favorites`` is empty.
        """
        if not favorites:
            raise ValueError("Cannot select a stop from an empty favorites list")

        if location is None:
            return min(favorites, key=lambda stop: stop.name)

        closest = favorites[0]
        min_distance = math.inf
        for stop in favorites:
            coordinate = stop.coordinate
            if coordinate is None:
                continue
            distance = location.distance_to(coordinate)
            if distance < min_distance:
                min_distance = distance
                closest = stop

        return closest
