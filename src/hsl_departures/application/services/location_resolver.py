"""Ordered fallback chain of location sources."""

import logging
from collections.abc import Sequence

from hsl_departures.domain.models.coordinate import Coordinate
from hsl_departures.domain.ports.location_provider import LocationProvider

logger = logging.getLogger(__name__)


class LocationResolver:
    """Resolves the user's location from providers tried in order.

    Typically the live location source comes first and the persisted last
    known location second. The first provider that returns a location wins.
    """

    def __init__(self, providers: Sequence[LocationProvider]) -> None:
        """Initialize with providers in priority order."""
        self._providers = list(providers)

    def resolve(self) -> Coordinate | None:
        """Return the first available location, or None."""
        for provider in self._providers:
            try:
                location = provider.current_location()
            except Exception as e:
                logger.warning(f"Location provider {type(provider).__name__} failed: {e}")
                continue
            if location is not None:
                logger.debug(
                    f"Resolved location {location.latitude}, {location.longitude} "
                    f"from {type(provider).__name__}"
                )
                return location
        logger.debug("No location available from any provider")
        return None
