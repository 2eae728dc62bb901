"""Tests for the widget CLI."""

import dataclasses
from datetime import UTC, datetime
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock

import pytest

from hsl_departures.adapters.config import AppConfig
from hsl_departures.adapters.storage import InMemoryKeyValueStore
from hsl_departures.cli import _build_parser, format_entry, run_command
from hsl_departures.components import WidgetComponents, build_components
from hsl_departures.domain.models import Coordinate, TimetableEntry, WidgetState
from tests.conftest import make_departure, make_stop

STOPS = [
    make_stop("HSL:1130446", "Merisotilaantori", code="H0401"),
    make_stop("HSL:1040601", "Kamppi", code="H1234"),
]


@pytest.fixture
def components() -> WidgetComponents:
    """Components over memory storage with a canned stop directory."""
    built = build_components(
        AppConfig.for_testing(), MagicMock(), store=InMemoryKeyValueStore()
    )
    directory = MagicMock()
    directory.get_stops = AsyncMock(return_value=STOPS)
    return dataclasses.replace(built, stop_directory=directory)


def _args(*argv: str) -> object:
    return _build_parser().parse_args(list(argv))


def test_format_entry_lists_departures_and_delay() -> None:
    """Given a normal entry with a delayed departure, when formatting, then route and delay show."""
    now = datetime.now(UTC)
    entry = TimetableEntry(
        now,
        "Merisotilaantori",
        (make_departure(5, route="4", headsign="Munkkiniemi", now=now, delay_seconds=180),),
    )

    text = format_entry(entry)

    assert "Merisotilaantori" in text
    assert "Munkkiniemi" in text
    assert "(+3 min)" in text


def test_format_entry_for_empty_states() -> None:
    """Given empty-state entries, when formatting, then an explanation is shown."""
    now = datetime.now(UTC)

    assert "No favorite stops" in format_entry(
        TimetableEntry(now, "", (), WidgetState.NO_FAVORITES)
    )
    assert "no upcoming departures" in format_entry(
        TimetableEntry(now, "Kamppi", (), WidgetState.NO_DEPARTURES)
    )


def test_parser_reads_timeline_options() -> None:
    """Given timeline options, when parsing, then family, json and location are set."""
    args = _args("timeline", "--family", "small", "--json", "--at", "60.17", "24.94")

    assert args.family == "small"
    assert args.json is True
    assert args.at == [60.17, 24.94]


@pytest.mark.asyncio
async def test_favorites_add_with_filters(
    components: WidgetComponents, capsys: pytest.CaptureFixture[str]
) -> None:
    """Given a stop code and filters, when adding, then the stop is saved with them."""
    await run_command(components, _args("favorites", "add", "H0401", "--lines", "4", "4T"))

    [favorite] = components.favorites.get_favorites()
    assert favorite.id == "HSL:1130446"
    assert favorite.filtered_lines == ["4", "4T"]
    assert "Added favorite" in capsys.readouterr().out


@pytest.mark.asyncio
async def test_favorites_add_existing_updates_filters(components: WidgetComponents) -> None:
    """Given an existing favorite, when adding it with a headsign, then its filters change."""
    await run_command(components, _args("favorites", "add", "HSL:1130446"))
    await run_command(
        components, _args("favorites", "add", "HSL:1130446", "--headsign", "Kamppi")
    )

    [favorite] = components.favorites.get_favorites()
    assert favorite.filtered_headsign_pattern == "Kamppi"


@pytest.mark.asyncio
async def test_favorites_add_unknown_stop_exits(components: WidgetComponents) -> None:
    """Given an unknown stop, when adding, then the command exits with an error."""
    with pytest.raises(SystemExit):
        await run_command(components, _args("favorites", "add", "HSL:0"))


@pytest.mark.asyncio
async def test_favorites_remove(components: WidgetComponents) -> None:
    """Given a favorite, when removing it by code, then it is gone."""
    components.favorites.add_favorite(STOPS[1])

    await run_command(components, _args("favorites", "remove", "H1234"))

    assert components.favorites.get_favorites() == []


@pytest.mark.asyncio
async def test_favorites_import_from_toml(tmp_path: Path) -> None:
    """Given a TOML file with favorites, when importing, then they become favorites."""
    path = tmp_path / "config.toml"
    path.write_text('[[favorites]]\nid = "HSL:1"\nname = "Erottaja"\n', encoding="utf-8")
    components = build_components(
        AppConfig.for_testing(config_file=str(path)), MagicMock(), store=InMemoryKeyValueStore()
    )

    await run_command(components, _args("favorites", "import"))

    assert [f.name for f in components.favorites.get_favorites()] == ["Erottaja"]


@pytest.mark.asyncio
async def test_location_set_show_clear(
    components: WidgetComponents, capsys: pytest.CaptureFixture[str]
) -> None:
    """Given location commands, when run in order, then the location is saved and forgotten."""
    await run_command(components, _args("location", "set", "60.1699", "24.9384"))
    assert components.location_store.current_location() == Coordinate(60.1699, 24.9384)

    await run_command(components, _args("location", "show"))
    assert "60.1699, 24.9384" in capsys.readouterr().out

    await run_command(components, _args("location", "clear"))
    assert components.location_store.current_location() is None


@pytest.mark.asyncio
async def test_stops_search_prints_matches(
    components: WidgetComponents, capsys: pytest.CaptureFixture[str]
) -> None:
    """Given a query, when searching stops, then matching stops are printed."""
    await run_command(components, _args("stops", "kamp"))

    out = capsys.readouterr().out
    assert "Kamppi (H1234)" in out
    assert "Merisotilaantori" not in out


@pytest.mark.asyncio
async def test_timeline_without_favorites_prints_empty_state(
    components: WidgetComponents, capsys: pytest.CaptureFixture[str]
) -> None:
    """Given no favorites, when showing the timeline, then the empty state is printed."""
    await run_command(components, _args("timeline"))

    assert "No favorite stops" in capsys.readouterr().out


@pytest.mark.asyncio
async def test_timeline_json_output(
    components: WidgetComponents, capsys: pytest.CaptureFixture[str]
) -> None:
    """Given --json, when showing the timeline, then JSON with the widget state is printed."""
    await run_command(components, _args("timeline", "--json"))

    out = capsys.readouterr().out
    assert '"state": "noFavorites"' in out
    assert '"refresh_at"' in out


@pytest.mark.asyncio
async def test_cache_clear_removes_cached_data(components: WidgetComponents) -> None:
    """Given cached stops and headsigns, when clearing caches, then both are empty."""
    components.stops_cache.save(STOPS)
    components.headsign_cache.save({"HSL:1": ["A"]}, Coordinate(60.17, 24.94), 5000)

    await run_command(components, _args("cache", "clear"))

    assert components.stops_cache.load() is None
    assert components.headsign_cache.entry_count == 0


@pytest.mark.asyncio
async def test_preload_uses_saved_location(
    components: WidgetComponents, capsys: pytest.CaptureFixture[str]
) -> None:
    """Given a saved location and a cached entry, when preloading, then cached headsigns are used."""
    location = Coordinate(60.1604, 24.9553)
    components.location_store.save_location(location)
    components.headsign_cache.save({"HSL:1130446": ["Munkkiniemi"]}, location, 5000.0)

    await run_command(components, _args("preload"))

    out = capsys.readouterr().out
    assert "Headsigns available for 1 stop(s)." in out
    assert "Cache age: 0.0 days" in out


@pytest.mark.asyncio
async def test_preload_honours_explicit_zero_radius(
    components: WidgetComponents, capsys: pytest.CaptureFixture[str]
) -> None:
    """Given --radius 0, when preloading, then the zero radius is used instead of the default."""
    location = Coordinate(60.1604, 24.9553)
    components.location_store.save_location(location)
    components.headsign_cache.save({"HSL:1130446": ["Munkkiniemi"]}, location, 0.0)

    await run_command(components, _args("preload", "--radius", "0"))

    assert "Headsigns available for 1 stop(s)." in capsys.readouterr().out
