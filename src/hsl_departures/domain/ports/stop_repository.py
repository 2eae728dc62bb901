"""Stop repository port."""

from typing import Protocol

from hsl_departures.domain.models.stop import Stop


class StopRepository(Protocol):
    """Port for retrieving the stop directory and per-stop headsigns."""

    async def fetch_all_stops(self) -> list[Stop]:
        """Fetch every stop known to the transit API."""
        ...

    async def fetch_headsigns(self, stop_id: str) -> list[str]:
        """Fetch headsigns served from a single stop ID."""
        ...
