"""Departure domain model."""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from decimal import ROUND_HALF_UP, Decimal

DELAY_DISPLAY_THRESHOLD_MINUTES = 2


@dataclass(frozen=True)
class Departure:
    """Represents a single scheduled or predicted departure from a stop."""

    departure_time: datetime  # Scheduled departure, timezone-aware
    route_short_name: str
    headsign: str
    mode: str | None = None  # e.g. "BUS", "TRAM"
    delay_seconds: int = 0
    realtime_departure_time: datetime | None = None  # Defaults to departure_time + delay
    platform_code: str | None = None
    has_realtime_data: bool = False
    realtime_state: str | None = None  # e.g. "SCHEDULED", "UPDATED", "CANCELED"
    id: str = field(default_factory=lambda: str(uuid.uuid4()))

    def __post_init__(self) -> None:
        if self.realtime_departure_time is None:
            object.__setattr__(
                self,
                "realtime_departure_time",
                self.departure_time + timedelta(seconds=self.delay_seconds),
            )

    @property
    def delay_minutes(self) -> int:
        """Delay rounded to whole minutes, halves away from zero."""
        minutes = Decimal(self.delay_seconds) / 60
        return int(minutes.quantize(Decimal(1), rounding=ROUND_HALF_UP))

    @property
    def should_show_delay(self) -> bool:
        """Whether the delay is large enough to be displayed."""
        return self.delay_minutes >= DELAY_DISPLAY_THRESHOLD_MINUTES
