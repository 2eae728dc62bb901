"""Location adapters."""

from hsl_departures.adapters.location.shared_location_store import SharedLocationStore
from hsl_departures.adapters.location.static_location_provider import StaticLocationProvider

__all__ = ["SharedLocationStore", "StaticLocationProvider"]
