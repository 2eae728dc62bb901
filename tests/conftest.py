"""Shared fixtures for widget tests."""

from datetime import UTC, datetime, timedelta

import pytest

from hsl_departures.adapters.storage import InMemoryKeyValueStore
from hsl_departures.domain.models import Departure, Stop

NOW = datetime(2024, 5, 14, 8, 0, tzinfo=UTC)


class FakeClock:
    """Settable clock for cache and refresher tests."""

    def __init__(self, now: datetime = NOW) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now += delta


def make_departure(
    minutes: float,
    route: str = "4",
    headsign: str = "Munkkiniemi",
    now: datetime = NOW,
    **kwargs: object,
) -> Departure:
    """Departure ``minutes`` after ``now``."""
    return Departure(
        departure_time=now + timedelta(minutes=minutes),
        route_short_name=route,
        headsign=headsign,
        **kwargs,  # type: ignore[arg-type]
    )


def make_stop(
    stop_id: str = "HSL:1130446",
    name: str = "Merisotilaantori",
    latitude: float | None = 60.1604,
    longitude: float | None = 24.9553,
    **kwargs: object,
) -> Stop:
    """Stop with sensible defaults."""
    return Stop(
        id=stop_id,
        name=name,
        code=str(kwargs.pop("code", "H0401")),
        latitude=latitude,
        longitude=longitude,
        **kwargs,  # type: ignore[arg-type]
    )


@pytest.fixture
def clock() -> FakeClock:
    """Clock fixed at NOW."""
    return FakeClock()


@pytest.fixture
def store() -> InMemoryKeyValueStore:
    """Empty in-memory key-value store."""
    return InMemoryKeyValueStore()
