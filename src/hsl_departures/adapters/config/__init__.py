"""Configuration adapters."""

from hsl_departures.adapters.config.app_config import AppConfig
from hsl_departures.adapters.config.favorites_configuration_loader import (
    FavoritesConfigurationLoader,
)

__all__ = ["AppConfig", "FavoritesConfigurationLoader"]
