"""Favorites repository backed by key-value storage."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import TYPE_CHECKING

from pydantic import TypeAdapter, ValidationError

from hsl_departures.domain.models.stop import Stop
from hsl_departures.domain.ports.favorites_repository import FavoritesRepository

if TYPE_CHECKING:
    from hsl_departures.domain.ports.key_value_store import KeyValueStore

logger = logging.getLogger(__name__)

FAVORITES_KEY = "favoriteStops"

_favorites_adapter: TypeAdapter[list[Stop]] = TypeAdapter(list[Stop])


class KeyValueFavoritesRepository(FavoritesRepository):
    """Stores favorite stops as one JSON list."""

    def __init__(
        self, store: KeyValueStore, on_change: Callable[[], None] | None = None
    ) -> None:
        """Initialize the repository.

        Args:
            store: Persistence shared with the display surface.
            on_change: Called after every successful save, e.g. to reload widgets.
        """
        self._store = store
        self._on_change = on_change

    def get_favorites(self) -> list[Stop]:
        """Return all favorites, or an empty list if none or unreadable."""
        data = self._store.get(FAVORITES_KEY)
        if data is None:
            return []
        try:
            return _favorites_adapter.validate_json(data)
        except (ValidationError, ValueError) as e:
            logger.warning(f"Favorites are unreadable, treating as empty: {e}")
            return []

    def _save_favorites(self, favorites: list[Stop]) -> None:
        self._store.set(FAVORITES_KEY, _favorites_adapter.dump_json(favorites))
        logger.info(f"Saved {len(favorites)} favorites: {[s.name for s in favorites]}")
        if self._on_change is not None:
            self._on_change()

    def add_favorite(self, stop: Stop) -> None:
        """Add a stop unless one with the same ID already exists."""
        favorites = self.get_favorites()
        if any(f.id == stop.id for f in favorites):
            return
        favorites.append(stop)
        self._save_favorites(favorites)

    def remove_favorite(self, stop: Stop) -> None:
        """Remove the favorite with the same ID."""
        favorites = [f for f in self.get_favorites() if f.id != stop.id]
        self._save_favorites(favorites)

    def is_favorite(self, stop: Stop) -> bool:
        """Check whether a stop with the same ID is a favorite."""
        return any(f.id == stop.id for f in self.get_favorites())

    def toggle_favorite(self, stop: Stop) -> None:
        """Add the stop if missing, remove it otherwise."""
        if self.is_favorite(stop):
            self.remove_favorite(stop)
        else:
            self.add_favorite(stop)

    def update_favorite(self, stop: Stop) -> None:
        """Replace the favorite with the same ID, e.g. to change its filters."""
        favorites = self.get_favorites()
        for index, favorite in enumerate(favorites):
            if favorite.id == stop.id:
                favorites[index] = stop
                self._save_favorites(favorites)
                logger.info(f"Updated favorite: {stop.name}")
                return
        logger.warning(f"Tried to update non-existent favorite: {stop.name}")
