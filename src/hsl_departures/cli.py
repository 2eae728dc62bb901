"""CLI for inspecting and configuring the HSL departures widget."""

import argparse
import asyncio
import dataclasses
import logging
import sys

import aiohttp
from pydantic import TypeAdapter

from hsl_departures.adapters.config import AppConfig, FavoritesConfigurationLoader
from hsl_departures.application.services import DisplayFamily, StopDirectoryService
from hsl_departures.components import WidgetComponents, build_components
from hsl_departures.domain.models import Coordinate, Stop, Timeline, TimetableEntry, WidgetState

logger = logging.getLogger(__name__)

_timeline_adapter: TypeAdapter[Timeline] = TypeAdapter(Timeline)


def format_entry(entry: TimetableEntry) -> str:
    """Render a timeline entry as plain text."""
    when = entry.date.astimezone().strftime("%H:%M")
    if entry.state == WidgetState.NO_FAVORITES:
        return f"[{when}] No favorite stops. Add one with 'hsl-widget favorites add'."
    if entry.state == WidgetState.NO_DEPARTURES:
        return f"[{when}] {entry.stop_name}: no upcoming departures"

    lines = [f"[{when}] {entry.stop_name}"]
    for departure in entry.departures:
        departs = departure.departure_time.astimezone().strftime("%H:%M")
        delay = f" (+{departure.delay_minutes} min)" if departure.should_show_delay else ""
        lines.append(f"  {departs}{delay}  {departure.route_short_name:>5}  {departure.headsign}")
    return "\n".join(lines)


def format_stop(stop: Stop) -> str:
    """Render a stop with its code, modes and filters."""
    parts = [f"{stop.name} ({stop.code})", f"ID: {stop.id}"]
    if stop.primary_mode:
        parts.append(f"mode: {stop.primary_mode}")
    if stop.filtered_lines:
        parts.append(f"lines: {', '.join(stop.filtered_lines)}")
    if stop.filtered_headsign_pattern:
        parts.append(f"headsign: {stop.filtered_headsign_pattern!r}")
    return "  ".join(parts)


async def show_timeline(
    components: WidgetComponents, family: DisplayFamily, format_json: bool = False
) -> None:
    """Build and print one timeline."""
    timeline = await components.timeline_provider.get_timeline(family)
    if format_json:
        print(_timeline_adapter.dump_json(timeline, indent=2).decode("utf-8"))
        return
    for entry in timeline.entries:
        print(format_entry(entry))
    print(f"\nNext refresh: {timeline.refresh_at.astimezone().strftime('%H:%M')}")


async def list_stops(components: WidgetComponents, query: str, refresh: bool = False) -> None:
    """Print the stops matching a query."""
    stops = await components.stop_directory.get_stops(force_refresh=refresh)
    matches = StopDirectoryService.search(stops, query)
    if not matches:
        print(f"No stops found for '{query}'", file=sys.stderr)
        sys.exit(1)
    print(f"\nFound {len(matches)} stop(s) matching '{query}':\n")
    for stop in matches:
        print(f"  {format_stop(stop)}")
    print(f"\n{components.stops_cache.cache_info()}")


async def preload_headsigns(
    components: WidgetComponents, radius: float, force: bool = False
) -> None:
    """Preload headsigns for stops near the saved location."""
    stops = await components.stop_directory.get_stops()
    if not stops:
        print("Stop directory is unavailable.", file=sys.stderr)
        sys.exit(1)

    location = components.location_store.current_location()
    preloader = components.preloader
    preloader.on_progress = lambda p: logger.info(p.loading_message)

    stop_headsigns = await preloader.load_or_refresh_cache(
        stops, location, radius, force_refresh=force
    )
    print(f"Headsigns available for {len(stop_headsigns)} stop(s).")
    if location is not None:
        age = components.headsign_cache.cache_age_days(location, radius)
        if age is not None:
            print(f"Cache age: {age:.1f} days")


async def add_favorite(
    components: WidgetComponents,
    stop_id: str,
    lines: list[str] | None,
    headsign: str | None,
) -> None:
    """Add a stop from the directory to the favorites, with optional filters."""
    stops = await components.stop_directory.get_stops()
    stop = StopDirectoryService.find(stops, stop_id)
    if stop is None:
        print(f"Stop {stop_id} not found.", file=sys.stderr)
        sys.exit(1)

    stop = dataclasses.replace(
        stop,
        filtered_lines=lines or None,
        filtered_headsign_pattern=headsign or None,
    )
    if components.favorites.is_favorite(stop):
        components.favorites.update_favorite(stop)
        print(f"Updated favorite: {format_stop(stop)}")
    else:
        components.favorites.add_favorite(stop)
        print(f"Added favorite: {format_stop(stop)}")


def remove_favorite(components: WidgetComponents, stop_id: str) -> None:
    """Remove a favorite by ID or stop code."""
    stop = StopDirectoryService.find(components.favorites.get_favorites(), stop_id)
    if stop is None:
        print(f"Stop {stop_id} is not a favorite.", file=sys.stderr)
        sys.exit(1)
    components.favorites.remove_favorite(stop)
    print(f"Removed favorite: {stop.name}")


def import_favorites(components: WidgetComponents) -> None:
    """Import the ``[[favorites]]`` of the configured TOML file."""
    stops = FavoritesConfigurationLoader.load(components.config)
    for stop in stops:
        if components.favorites.is_favorite(stop):
            components.favorites.update_favorite(stop)
        else:
            components.favorites.add_favorite(stop)
    print(f"Imported {len(stops)} favorite(s).")


def list_favorites(components: WidgetComponents) -> None:
    """Print the favorite stops."""
    favorites = components.favorites.get_favorites()
    if not favorites:
        print("No favorite stops.")
        return
    for stop in favorites:
        print(f"  {format_stop(stop)}")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hsl-widget",
        description="HSL Departures Widget Helper",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Find a stop
  hsl-widget stops "Merisotilaantori"

  # Add it as a favorite, showing only tram 4
  hsl-widget favorites add HSL:1130446 --lines 4

  # Save your location and show the timeline
  hsl-widget location set 60.1654 24.9638
  hsl-widget timeline --family small
        """,
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    timeline_parser = subparsers.add_parser("timeline", help="Build and show the timeline")
    timeline_parser.add_argument(
        "--family",
        choices=[f.value for f in DisplayFamily],
        default=DisplayFamily.MEDIUM.value,
        help="Display family to build for",
    )
    timeline_parser.add_argument("--json", action="store_true", help="Output as JSON")
    timeline_parser.add_argument(
        "--at",
        nargs=2,
        type=float,
        metavar=("LAT", "LON"),
        help="Use this location instead of the saved one",
    )

    stops_parser = subparsers.add_parser("stops", help="Search the stop directory")
    stops_parser.add_argument("query", nargs="?", default="", help="Stop name or code")
    stops_parser.add_argument(
        "--refresh", action="store_true", help="Fetch the directory even if cached"
    )

    preload_parser = subparsers.add_parser("preload", help="Preload nearby headsigns")
    preload_parser.add_argument("--radius", type=float, default=None, help="Radius in metres")
    preload_parser.add_argument("--force", action="store_true", help="Ignore cached headsigns")

    favorites_parser = subparsers.add_parser("favorites", help="Manage favorite stops")
    favorites_sub = favorites_parser.add_subparsers(dest="favorites_command")
    favorites_sub.add_parser("list", help="List favorites")
    add_parser = favorites_sub.add_parser("add", help="Add or update a favorite")
    add_parser.add_argument("stop_id", help="Stop ID or code (e.g., HSL:1130446 or H0401)")
    add_parser.add_argument("--lines", nargs="+", help="Only show these lines (exact match)")
    add_parser.add_argument("--headsign", help="Only show headsigns containing this text")
    remove_parser = favorites_sub.add_parser("remove", help="Remove a favorite")
    remove_parser.add_argument("stop_id", help="Stop ID or code")
    favorites_sub.add_parser("import", help="Import [[favorites]] from the TOML config file")

    location_parser = subparsers.add_parser("location", help="Manage the shared location")
    location_sub = location_parser.add_subparsers(dest="location_command")
    set_parser = location_sub.add_parser("set", help="Save a location")
    set_parser.add_argument("latitude", type=float)
    set_parser.add_argument("longitude", type=float)
    location_sub.add_parser("show", help="Show the saved location")
    location_sub.add_parser("clear", help="Forget the saved location")

    cache_parser = subparsers.add_parser("cache", help="Manage caches")
    cache_sub = cache_parser.add_subparsers(dest="cache_command")
    cache_sub.add_parser("clear", help="Clear the headsign and stop caches")
    cache_sub.add_parser("info", help="Show cache state")

    return parser


def _handle_location(components: WidgetComponents, args: argparse.Namespace) -> None:
    if args.location_command == "set":
        components.location_store.save_location(Coordinate(args.latitude, args.longitude))
        print(f"Saved location {args.latitude}, {args.longitude}")
    elif args.location_command == "clear":
        components.location_store.clear()
        print("Location cleared")
    else:
        location = components.location_store.current_location()
        if location is None:
            print("No saved location")
        else:
            print(f"Location: {location.latitude}, {location.longitude}")


def _handle_cache(components: WidgetComponents, args: argparse.Namespace) -> None:
    if args.cache_command == "clear":
        components.headsign_cache.clear()
        components.stops_cache.clear()
        print("Caches cleared")
        return
    print(f"Stops: {components.stops_cache.cache_info()}")
    print(f"Headsign locations cached: {components.headsign_cache.entry_count}")


async def run_command(components: WidgetComponents, args: argparse.Namespace) -> None:
    """Dispatch a parsed command."""
    if args.command == "timeline":
        await show_timeline(components, DisplayFamily(args.family), format_json=args.json)

    elif args.command == "stops":
        await list_stops(components, args.query, refresh=args.refresh)

    elif args.command == "preload":
        radius = (
            args.radius if args.radius is not None else components.config.preload_radius_meters
        )
        await preload_headsigns(components, radius, force=args.force)

    elif args.command == "favorites":
        if args.favorites_command == "add":
            await add_favorite(components, args.stop_id, args.lines, args.headsign)
        elif args.favorites_command == "remove":
            remove_favorite(components, args.stop_id)
        elif args.favorites_command == "import":
            import_favorites(components)
        else:
            list_favorites(components)

    elif args.command == "location":
        _handle_location(components, args)

    elif args.command == "cache":
        _handle_cache(components, args)


async def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
    )

    try:
        config = AppConfig()
        async with aiohttp.ClientSession() as session:
            at = getattr(args, "at", None)
            live_location = Coordinate(at[0], at[1]) if at else None
            components = build_components(config, session, live_location=live_location)
            await run_command(components, args)
    except KeyboardInterrupt:
        print("\nInterrupted.", file=sys.stderr)
        sys.exit(1)
    except (ValueError, FileNotFoundError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


def cli_main() -> None:
    """Synchronous entry point for the CLI command."""
    asyncio.run(main())


if __name__ == "__main__":
    cli_main()
