"""Per-stop departure filtering."""

import logging

from hsl_departures.domain.models.departure import Departure
from hsl_departures.domain.models.stop import Stop

logger = logging.getLogger(__name__)


class DepartureFilter:
    """Applies a favorite stop's line and headsign filters to departures."""

    @staticmethod
    def _headsign_pattern(stop: Stop) -> str:
        return (stop.filtered_headsign_pattern or "").strip()

    @classmethod
    def has_filters(cls, stop: Stop) -> bool:
        """True if the stop has a non-empty line or headsign filter."""
        return bool(stop.filtered_lines) or bool(cls._headsign_pattern(stop))

    @classmethod
    def matches(cls, stop: Stop, departure: Departure) -> bool:
        """Check a departure against every configured filter of the stop.

        The line filter is an exact, case-sensitive match on the route short
        name. The headsign filter is a case-insensitive substring match.
        Unconfigured filters always pass.
        """
        if stop.filtered_lines and departure.route_short_name not in stop.filtered_lines:
            return False

        pattern = cls._headsign_pattern(stop)
        if pattern and pattern.casefold() not in departure.headsign.casefold():
            return False

        return True

    @classmethod
    def apply(cls, stop: Stop, departures: list[Departure]) -> list[Departure]:
        """Return the departures that match the stop's filters, in input order."""
        if not cls.has_filters(stop):
            return list(departures)
        filtered = [d for d in departures if cls.matches(stop, d)]
        logger.debug(f"Filtered departures for {stop.name}: {len(filtered)} of {len(departures)}")
        return filtered
