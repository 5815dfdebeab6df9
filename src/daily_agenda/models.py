"""Domain models for the daily agenda."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

MINUTES_PER_DAY = 24 * 60


@dataclass(frozen=True, order=True, slots=True)
class TimeOfDay:
    """An hour and minute within a single day."""

    hour: int
    minute: int

    def __post_init__(self) -> None:
        if not 0 <= self.hour <= 23:
            raise ValueError(f"hour out of range: {self.hour}")
        if not 0 <= self.minute <= 59:
            raise ValueError(f"minute out of range: {self.minute}")

    @classmethod
    def from_datetime(cls, moment: datetime) -> "TimeOfDay":
        return cls(moment.hour, moment.minute)

    @property
    def minute_of_day(self) -> int:
        return self.hour * 60 + self.minute

    def __str__(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}"


@dataclass(slots=True)
class Activity:
    """A named, time-boxed entry in the day's schedule."""

    name: str
    start: TimeOfDay
    end: TimeOfDay
    done: bool = False

    def __post_init__(self) -> None:
        self.name = self.name.strip()
        if not self.name:
            raise ValueError("activity name must not be empty")
        if self.start >= self.end:
            raise ValueError(
                f"activity {self.name!r} must start before it ends ({self.start}-{self.end})"
            )

    @property
    def duration_minutes(self) -> int:
        return self.end.minute_of_day - self.start.minute_of_day


class NotificationKind(enum.Enum):
    START = "start"
    ENDING_SOON = "ending_soon"


@dataclass(slots=True)
class TriggerState:
    """Remembers the minute in which a notification last fired."""

    last_fired_minute: Optional[int] = None

    def fired_in(self, minute_key: int) -> bool:
        return self.last_fired_minute == minute_key
