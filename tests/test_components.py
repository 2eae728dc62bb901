"""Tests for wiring the widget from configuration."""

from datetime import timedelta
from pathlib import Path
from unittest.mock import MagicMock

from hsl_departures.adapters.config import AppConfig
from hsl_departures.adapters.storage import FileKeyValueStore, InMemoryKeyValueStore
from hsl_departures.application.services import DisplayFamily
from hsl_departures.components import build_components, preload_settings, timeline_settings
from hsl_departures.domain.models import Coordinate


def test_settings_follow_configuration() -> None:
    """Given custom config values, when deriving settings, then they are carried over."""
    config = AppConfig.for_testing(
        fetched_departures=20,
        max_timeline_entries=4,
        timeline_refresh_minutes=10,
        preload_batch_pause_ms=250,
        preload_batch_size=25,
        fallback_latitude=60.2,
        fallback_longitude=24.8,
    )

    timeline = timeline_settings(config)
    preload = preload_settings(config)

    assert timeline.fetched_departures == 20
    assert timeline.max_entries == 4
    assert timeline.refresh_interval == timedelta(minutes=10)
    assert timeline.no_favorites_refresh_interval == timedelta(minutes=60)
    assert preload.batch_pause_seconds == 0.25
    assert preload.batch_size == 25
    assert preload.reference_location == Coordinate(60.2, 24.8)


def test_components_share_one_store() -> None:
    """Given an injected store, when building, then favorites and location use it."""
    store = InMemoryKeyValueStore()
    components = build_components(AppConfig.for_testing(), MagicMock(), store=store)

    components.location_store.save_location(Coordinate(60.17, 24.94))

    assert components.store is store
    assert "currentLatitude" in store.keys()
    assert components.favorites.get_favorites() == []
    assert components.timeline_provider.max_shown(DisplayFamily.SMALL) == 3


def test_default_store_lives_in_storage_dir(tmp_path: Path) -> None:
    """Given a storage directory, when building without a store, then a file store is used."""
    config = AppConfig.for_testing(storage_dir=str(tmp_path / "widget"))

    components = build_components(config, MagicMock())

    assert isinstance(components.store, FileKeyValueStore)
    assert (tmp_path / "widget").is_dir()
