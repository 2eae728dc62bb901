"""Tests for the key-value backed favorites repository."""

import dataclasses
from unittest.mock import MagicMock

import pytest

from hsl_departures.adapters.favorites import KeyValueFavoritesRepository
from hsl_departures.adapters.favorites.kv_favorites_repository import FAVORITES_KEY
from hsl_departures.adapters.storage import InMemoryKeyValueStore
from tests.conftest import make_stop


@pytest.fixture
def repository(store: InMemoryKeyValueStore) -> KeyValueFavoritesRepository:
    """Repository over an empty store."""
    return KeyValueFavoritesRepository(store)


def test_when_empty_then_no_favorites(repository: KeyValueFavoritesRepository) -> None:
    """Given an empty store, when listing, then no favorites."""
    assert repository.get_favorites() == []


def test_added_favorites_persist_in_order(
    repository: KeyValueFavoritesRepository, store: InMemoryKeyValueStore
) -> None:
    """Given two added stops, when a new repository reads the store, then both come back."""
    first = make_stop("HSL:1", "Erottaja", filtered_lines=["4"])
    second = make_stop("HSL:2", "Kamppi", vehicle_modes=frozenset({"BUS", "SUBWAY"}))

    repository.add_favorite(first)
    repository.add_favorite(second)

    assert KeyValueFavoritesRepository(store).get_favorites() == [first, second]


def test_adding_duplicate_id_is_ignored(repository: KeyValueFavoritesRepository) -> None:
    """Given a stop already a favorite, when adding it again, then nothing changes."""
    stop = make_stop("HSL:1")
    repository.add_favorite(stop)

    repository.add_favorite(dataclasses.replace(stop, name="Renamed"))

    assert [f.name for f in repository.get_favorites()] == ["Merisotilaantori"]


def test_remove_and_is_favorite(repository: KeyValueFavoritesRepository) -> None:
    """Given a favorite, when removing it, then it is no longer a favorite."""
    stop = make_stop("HSL:1")
    repository.add_favorite(stop)
    assert repository.is_favorite(stop)

    repository.remove_favorite(stop)

    assert not repository.is_favorite(stop)
    assert repository.get_favorites() == []


def test_toggle_adds_then_removes(repository: KeyValueFavoritesRepository) -> None:
    """Given a stop, when toggling twice, then it is added and removed again."""
    stop = make_stop("HSL:1")

    repository.toggle_favorite(stop)
    assert repository.is_favorite(stop)

    repository.toggle_favorite(stop)
    assert not repository.is_favorite(stop)


def test_update_replaces_filters(repository: KeyValueFavoritesRepository) -> None:
    """Given a favorite, when updating its filters, then the stored stop is replaced."""
    stop = make_stop("HSL:1")
    repository.add_favorite(stop)
    updated = dataclasses.replace(stop, filtered_headsign_pattern="Kamppi")

    repository.update_favorite(updated)

    assert repository.get_favorites() == [updated]


def test_update_of_missing_favorite_changes_nothing(
    repository: KeyValueFavoritesRepository,
) -> None:
    """Given no such favorite, when updating, then the list is unchanged."""
    repository.add_favorite(make_stop("HSL:1"))

    repository.update_favorite(make_stop("HSL:2", "Kamppi"))

    assert [f.id for f in repository.get_favorites()] == ["HSL:1"]


def test_corrupt_data_reads_as_empty(store: InMemoryKeyValueStore) -> None:
    """Given garbage under the favorites key, when listing, then empty without raising."""
    store.set(FAVORITES_KEY, b"not json at all")

    assert KeyValueFavoritesRepository(store).get_favorites() == []


def test_on_change_called_after_each_save(store: InMemoryKeyValueStore) -> None:
    """Given a change callback, when adding and removing, then it is called each time."""
    on_change = MagicMock()
    repository = KeyValueFavoritesRepository(store, on_change=on_change)
    stop = make_stop("HSL:1")

    repository.add_favorite(stop)
    repository.add_favorite(stop)
    repository.remove_favorite(stop)

    assert on_change.call_count == 2
