"""Timetable entry and timeline domain models."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from hsl_departures.domain.models.departure import Departure


class WidgetState(Enum):
    """What the display surface should render for an entry."""

    NORMAL = "normal"
    NO_FAVORITES = "noFavorites"
    NO_DEPARTURES = "noDepartures"


@dataclass(frozen=True)
class TimetableEntry:
    """A display snapshot that becomes current at ``date``."""

    date: datetime
    stop_name: str
    departures: tuple[Departure, ...]
    state: WidgetState = WidgetState.NORMAL

    @property
    def has_content(self) -> bool:
        """True when the entry has departures to show."""
        return self.state == WidgetState.NORMAL and bool(self.departures)


@dataclass(frozen=True)
class Timeline:
    """Ordered display snapshots plus the instant of the next full rebuild."""

    entries: tuple[TimetableEntry, ...]
    refresh_at: datetime

    def current_entry(self, now: datetime) -> TimetableEntry:
        """Return the last entry whose date is not after ``now``.

        Falls back to the first entry when ``now`` precedes every entry.
        """
        current = self.entries[0]
        for entry in self.entries:
            if entry.date <= now:
                current = entry
            else:
                break
        return current
