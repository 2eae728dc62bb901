"""Protocol for the location-keyed headsign cache."""

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from hsl_departures.domain.models.coordinate import Coordinate


class HeadsignCacheProtocol(Protocol):
    """Protocol for caching stop headsigns around previously queried locations."""

    def should_refresh(self, location: "Coordinate | None", radius: float) -> bool:
        """Check whether a fresh preload is needed for a location.

        Args:
            location: Reference location, or None if unknown.
            radius: Preload radius in metres.

        Returns:
            True if no usable cache entry exists.
        """
        ...

    def load(self, location: "Coordinate | None", radius: float) -> dict[str, list[str]] | None:
        """Load cached headsigns near a location.

        Args:
            location: Reference location, or None if unknown.
            radius: Preload radius in metres.

        Returns:
            Mapping of stop ID to headsigns, or None on a miss.
        """
        ...

    def save(
        self, stop_headsigns: dict[str, list[str]], location: "Coordinate | None", radius: float
    ) -> None:
        """Save headsigns for a location.

        Args:
            stop_headsigns: Mapping of stop ID to headsigns.
            location: Location the headsigns were loaded around.
            radius: Preload radius in metres.
        """
        ...

    def clear(self) -> None:
        """Drop all cached entries."""
        ...
