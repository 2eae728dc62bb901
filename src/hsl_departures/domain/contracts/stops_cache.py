"""Protocol for the stop directory cache."""

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from hsl_departures.domain.models.stop import Stop


class StopsCacheProtocol(Protocol):
    """Protocol for caching the full stop list."""

    def load(self) -> list["Stop"] | None:
        """Load the cached stop list.

        Returns:
            The stops, or None if absent or unreadable.
        """
        ...

    def needs_refresh(self) -> bool:
        """Check whether the cached stop list is missing or expired."""
        ...

    def save(self, stops: list["Stop"]) -> None:
        """Replace the cached stop list.

        Args:
            stops: Stops to cache.
        """
        ...
