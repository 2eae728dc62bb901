"""Favorites repository port."""

from typing import Protocol

from hsl_departures.domain.models.stop import Stop


class FavoritesRepository(Protocol):
    """Port for the user's favorite stops."""

    def get_favorites(self) -> list[Stop]:
        """Return all favorite stops (order unspecified, may be empty)."""
        ...

    def add_favorite(self, stop: Stop) -> None:
        """Add a stop unless a stop with the same ID is already a favorite."""
        ...

    def remove_favorite(self, stop: Stop) -> None:
        """Remove the favorite with the same ID as ``stop``."""
        ...

    def update_favorite(self, stop: Stop) -> None:
        """Replace the favorite with the same ID as ``stop``."""
        ...
