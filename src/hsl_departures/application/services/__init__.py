"""Application services (use cases) for the departures widget."""

from hsl_departures.application.services.batch_executor import BatchExecutor
from hsl_departures.application.services.closest_stop_selector import ClosestStopSelector
from hsl_departures.application.services.departure_filter import DepartureFilter
from hsl_departures.application.services.location_resolver import LocationResolver
from hsl_departures.application.services.nearby_preloader import NearbyPreloader, PreloadSettings
from hsl_departures.application.services.stop_directory_service import StopDirectoryService
from hsl_departures.application.services.timeline_builder import (
    TimelineBuilder,
    TimelineSettings,
    build_entries,
)
from hsl_departures.application.services.timeline_provider import DisplayFamily, TimelineProvider
from hsl_departures.application.services.timeline_refresher import TimelineRefresher

__all__ = [
    "BatchExecutor",
    "ClosestStopSelector",
    "DepartureFilter",
    "DisplayFamily",
    "LocationResolver",
    "NearbyPreloader",
    "PreloadSettings",
    "StopDirectoryService",
    "TimelineBuilder",
    "TimelineProvider",
    "TimelineRefresher",
    "TimelineSettings",
    "build_entries",
]
