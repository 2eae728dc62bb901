"""12-factor configuration adapter using environment variables and TOML config."""

from pathlib import Path
from typing import Any

try:
    import tomllib  # Python 3.11+
except ImportError:
    import tomli as tomllib  # type: ignore[no-redef]  # Fallback for older Python

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from hsl_departures.adapters.digitransit_api.constants import DIGITRANSIT_ROUTING_URL


class AppConfig(BaseSettings):
    """Application configuration following 12-factor principles."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Digitransit API configuration
    digitransit_api_url: str = Field(
        default=DIGITRANSIT_ROUTING_URL, description="Digitransit GraphQL routing endpoint"
    )
    digitransit_api_key: str | None = Field(
        default=None, description="Digitransit subscription key"
    )
    accept_language: str = Field(
        default="fi", description="Language of stop names and headsigns: 'fi', 'sv' or 'en'"
    )
    api_timeout: float = Field(default=10.0, description="Timeout for API requests in seconds")
    api_min_delay_seconds: float = Field(
        default=0.0, description="Minimum delay between API request starts in seconds"
    )
    api_max_concurrent_requests: int = Field(
        default=50, description="Maximum number of API requests in flight"
    )

    # Storage shared between the app and the display surface
    storage_dir: str = Field(
        default=".hsl-widget", description="Directory of the shared key-value storage"
    )

    # Timeline configuration
    departures_shown: int = Field(
        default=2, description="Number of departures shown per timeline entry"
    )
    small_widget_departures: int = Field(
        default=3, description="Number of departures shown on small displays"
    )
    fetched_departures: int = Field(
        default=12, description="Number of departures fetched per refresh"
    )
    max_timeline_entries: int = Field(
        default=6, description="Maximum number of entries in one timeline"
    )
    timeline_refresh_minutes: int = Field(
        default=15, description="Minutes until the timeline is rebuilt"
    )
    no_favorites_refresh_minutes: int = Field(
        default=60, description="Minutes until an empty-favorites timeline is rebuilt"
    )

    # Nearby headsign preload configuration
    preload_radius_meters: float = Field(
        default=5000.0, description="Radius of the nearby headsign preload in metres"
    )
    preload_batch_size: int = Field(
        default=50, description="Number of stops fetched concurrently per batch"
    )
    preload_batch_pause_ms: int = Field(
        default=100, description="Pause between preload batches in milliseconds"
    )
    max_headsigns_per_stop: int = Field(
        default=4, description="Maximum number of headsigns kept per stop"
    )
    fallback_latitude: float = Field(
        default=60.1699, description="Preload reference latitude when location is unknown"
    )
    fallback_longitude: float = Field(
        default=24.9384, description="Preload reference longitude when location is unknown"
    )

    # Cache configuration
    max_cached_locations: int = Field(
        default=5, description="Maximum number of locations in the headsign cache"
    )
    headsign_cache_expiration_days: int = Field(
        default=7, description="Days before cached headsigns expire"
    )
    headsign_cache_threshold_meters: float = Field(
        default=2000.0, description="Distance within which a cached location is reused"
    )
    stops_cache_hours: int = Field(
        default=24, description="Hours before the cached stop directory expires"
    )

    # Optional TOML file with [[favorites]] to import
    config_file: str | None = Field(
        default=None, description="Path to TOML configuration file with favorite stops"
    )

    @field_validator("accept_language")
    @classmethod
    def validate_accept_language(cls, v: str) -> str:
        """Validate the language is one the API translates to."""
        if v.lower() not in ("fi", "sv", "en"):
            raise ValueError("accept_language must be one of 'fi', 'sv' or 'en'")
        return v.lower()

    @field_validator(
        "departures_shown",
        "small_widget_departures",
        "fetched_departures",
        "max_timeline_entries",
        "preload_batch_size",
        "max_headsigns_per_stop",
        "max_cached_locations",
    )
    @classmethod
    def validate_positive(cls, v: int) -> int:
        """Validate counts are at least 1."""
        if v < 1:
            raise ValueError("value must be at least 1")
        return v

    @classmethod
    def for_testing(cls, **overrides: Any) -> "AppConfig":
        """Create a config that ignores any ``.env`` file in the working directory."""
        return cls(_env_file=None, **overrides)

    def _load_toml_data(self) -> dict[str, Any]:
        """Load and parse the TOML config file."""
        if not self.config_file:
            raise ValueError("config_file must be set to load favorites configuration")

        config_path = Path(self.config_file)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, "rb") as f:
            return tomllib.load(f)

    def get_favorites_config(self) -> list[dict[str, Any]]:
        """Parse and return the [[favorites]] tables of the TOML file."""
        toml_data = self._load_toml_data()
        favorites = toml_data.get("favorites", [])
        if not isinstance(favorites, list):
            raise ValueError("TOML config 'favorites' must be a list")
        return [f for f in favorites if isinstance(f, dict)]
