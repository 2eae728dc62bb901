"""Wiring of adapters and services from the app configuration."""

from dataclasses import dataclass
from datetime import timedelta

import aiohttp

from hsl_departures.adapters.api_rate_limiter import ApiRateLimiter
from hsl_departures.adapters.cache import GeoHeadsignCache, StopsDirectoryCache
from hsl_departures.adapters.config import AppConfig
from hsl_departures.adapters.digitransit_api import (
    DigitransitDepartureRepository,
    DigitransitGraphQLClient,
    DigitransitStopRepository,
)
from hsl_departures.adapters.favorites import KeyValueFavoritesRepository
from hsl_departures.adapters.location import SharedLocationStore, StaticLocationProvider
from hsl_departures.adapters.storage import FileKeyValueStore
from hsl_departures.application.services import (
    LocationResolver,
    NearbyPreloader,
    PreloadSettings,
    StopDirectoryService,
    TimelineBuilder,
    TimelineProvider,
    TimelineSettings,
)
from hsl_departures.domain.models.coordinate import Coordinate
from hsl_departures.domain.ports import KeyValueStore


@dataclass(frozen=True)
class WidgetComponents:
    """Everything the CLI and the refresh loop need, built around one store."""

    config: AppConfig
    store: KeyValueStore
    favorites: KeyValueFavoritesRepository
    location_store: SharedLocationStore
    headsign_cache: GeoHeadsignCache
    stops_cache: StopsDirectoryCache
    stop_directory: StopDirectoryService
    preloader: NearbyPreloader
    timeline_provider: TimelineProvider


def timeline_settings(config: AppConfig) -> TimelineSettings:
    """Timeline tunables from the app configuration."""
    return TimelineSettings(
        fetched_departures=config.fetched_departures,
        max_entries=config.max_timeline_entries,
        refresh_interval=timedelta(minutes=config.timeline_refresh_minutes),
        no_favorites_refresh_interval=timedelta(minutes=config.no_favorites_refresh_minutes),
    )


def preload_settings(config: AppConfig) -> PreloadSettings:
    """Preload tunables from the app configuration."""
    return PreloadSettings(
        batch_size=config.preload_batch_size,
        batch_pause_seconds=config.preload_batch_pause_ms / 1000,
        max_headsigns_per_stop=config.max_headsigns_per_stop,
        reference_location=Coordinate(config.fallback_latitude, config.fallback_longitude),
    )


def build_components(
    config: AppConfig,
    session: aiohttp.ClientSession,
    store: KeyValueStore | None = None,
    live_location: Coordinate | None = None,
) -> WidgetComponents:
    """Build the widget's object graph.

    Args:
        config: Application configuration.
        session: Shared aiohttp session for the Digitransit API.
        store: Storage override; defaults to a file store in ``config.storage_dir``.
        live_location: Location that takes precedence over the saved one.
    """
    if store is None:
        store = FileKeyValueStore(config.storage_dir)

    client = DigitransitGraphQLClient(
        session,
        api_key=config.digitransit_api_key,
        url=config.digitransit_api_url,
        language=config.accept_language,
        timeout_seconds=config.api_timeout,
        rate_limiter=ApiRateLimiter(
            "digitransit",
            min_delay_seconds=config.api_min_delay_seconds,
            max_concurrent=config.api_max_concurrent_requests,
        ),
    )
    departure_repository = DigitransitDepartureRepository(client)
    stop_repository = DigitransitStopRepository(client)

    favorites = KeyValueFavoritesRepository(store)
    location_store = SharedLocationStore(store)
    headsign_cache = GeoHeadsignCache(
        store,
        max_cached_locations=config.max_cached_locations,
        expiration=timedelta(days=config.headsign_cache_expiration_days),
        threshold_meters=config.headsign_cache_threshold_meters,
    )
    stops_cache = StopsDirectoryCache(store, expiration=timedelta(hours=config.stops_cache_hours))

    builder = TimelineBuilder(
        favorites,
        departure_repository,
        LocationResolver([StaticLocationProvider(live_location), location_store]),
        settings=timeline_settings(config),
    )

    return WidgetComponents(
        config=config,
        store=store,
        favorites=favorites,
        location_store=location_store,
        headsign_cache=headsign_cache,
        stops_cache=stops_cache,
        stop_directory=StopDirectoryService(stop_repository, stops_cache),
        preloader=NearbyPreloader(
            stop_repository, headsign_cache, settings=preload_settings(config)
        ),
        timeline_provider=TimelineProvider(
            builder,
            departures_shown=config.departures_shown,
            small_family_departures=config.small_widget_departures,
        ),
    )
