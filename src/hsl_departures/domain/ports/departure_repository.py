"""Departure repository port."""

from typing import Protocol

from hsl_departures.domain.models.departure import Departure


class DepartureRepository(Protocol):
    """Port for retrieving departures of a stop.

    Implementations make no promise about ordering or about filtering out
    departures that already left.
    """

    async def fetch_departures(self, stop_id: str, max_results: int = 12) -> list[Departure]:
        """Fetch upcoming departures for a stop."""
        ...
