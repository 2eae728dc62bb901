"""Favorites adapters."""

from hsl_departures.adapters.favorites.kv_favorites_repository import (
    KeyValueFavoritesRepository,
)

__all__ = ["KeyValueFavoritesRepository"]
