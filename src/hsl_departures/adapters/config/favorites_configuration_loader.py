"""Favorite stops loader for TOML configuration."""

import logging

from hsl_departures.adapters.config.app_config import AppConfig
from hsl_departures.domain.models.stop import Stop

logger = logging.getLogger(__name__)


def _string_list(value: object) -> list[str] | None:
    if not isinstance(value, list):
        return None
    items = [str(item) for item in value if isinstance(item, (str, int))]
    return items or None


def _optional_float(value: object) -> float | None:
    if value is None:
        return None
    try:
        return float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return None


class FavoritesConfigurationLoader:
    """Builds favorite stops from ``[[favorites]]`` TOML tables."""

    @staticmethod
    def load(config: AppConfig) -> list[Stop]:
        """Load favorite stops from app config, skipping entries without an ``id``."""
        stops: list[Stop] = []

        for data in config.get_favorites_config():
            stop_id = data.get("id")
            if not stop_id:
                logger.warning(f"Skipping favorite without id: {data}")
                continue

            pattern = data.get("filtered_headsign_pattern")
            stops.append(
                Stop(
                    id=str(stop_id),
                    name=str(data.get("name", stop_id)),
                    code=str(data.get("code", "")),
                    latitude=_optional_float(data.get("latitude")),
                    longitude=_optional_float(data.get("longitude")),
                    all_stop_ids=_string_list(data.get("all_stop_ids")),
                    filtered_lines=_string_list(data.get("filtered_lines")),
                    filtered_headsign_pattern=str(pattern) if pattern else None,
                )
            )

        return stops
