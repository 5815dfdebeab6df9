"""Configuration models and helpers for the daily agenda."""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import timedelta
from typing import Iterable

from .errors import InvalidActivitySpec, InvalidSpeedInput
from .models import Activity, TimeOfDay

MIN_SPEED_FACTOR = 1
MAX_SPEED_FACTOR = 30

DEFAULT_SCHEDULE: tuple[tuple[str, str, str], ...] = (
    ("Breakfast", "08:50", "09:30"),
    ("Morning walk", "09:00", "10:15"),
    ("House cleaning", "10:20", "10:55"),
    ("Lunch", "11:00", "12:00"),
    ("Afternoon nap", "13:45", "15:00"),
    ("Grocery shopping", "15:20", "15:45"),
    ("Cooking", "16:15", "17:30"),
    ("Dinner", "17:45", "18:30"),
    ("Evening reading", "19:00", "21:30"),
    ("Get medicine", "21:30", "21:45"),
)

_TIME_PATTERN = re.compile(r"([0-9]{2}):([0-9]{2})")
_ACTIVITY_PATTERN = re.compile(r"^(?P<name>[^=]+)=(?P<start>\S+)\s*-\s*(?P<end>\S+)$")


@dataclass(slots=True)
class SchedulerSettings:
    """Runtime configuration for the schedule loop."""

    speed_factor: int = 1
    tick_interval: timedelta = timedelta(milliseconds=100)
    ending_soon_threshold: timedelta = timedelta(minutes=10)
    confirm_delay: timedelta = timedelta(seconds=3)
    clear_delay: timedelta = timedelta(seconds=2)
    clear_screen: bool = True

    def __post_init__(self) -> None:
        if not MIN_SPEED_FACTOR <= self.speed_factor <= MAX_SPEED_FACTOR:
            raise ValueError(f"speed factor out of range: {self.speed_factor}")

    @property
    def threshold_minutes(self) -> int:
        return int(self.ending_soon_threshold.total_seconds() // 60)

    @classmethod
    def from_options(
        cls,
        speed_factor: int,
        interval_seconds: float = 0.1,
        threshold_minutes: int = 10,
        clear_screen: bool = True,
    ) -> "SchedulerSettings":
        # Without screen clearing there is nothing to wait for before it.
        clear_delay = timedelta(seconds=2) if clear_screen else timedelta(0)
        return cls(
            speed_factor=speed_factor,
            tick_interval=timedelta(seconds=interval_seconds),
            ending_soon_threshold=timedelta(minutes=threshold_minutes),
            clear_delay=clear_delay,
            clear_screen=clear_screen,
        )


def parse_time_of_day(value: str) -> TimeOfDay:
    """Parse a strict ``HH:MM`` string; raise ``ValueError`` otherwise."""
    match = _TIME_PATTERN.fullmatch(value)
    if not match:
        raise ValueError(f"expected HH:MM, got {value!r}")
    return TimeOfDay(int(match.group(1)), int(match.group(2)))


def parse_speed_factor(value: str) -> int:
    text = value.strip()
    # int() alone would also take "+5", "1_0" and non-ASCII digits.
    if not (text.isascii() and text.isdigit()):
        raise InvalidSpeedInput(f"not a whole number: {text!r}")
    factor = int(text)
    if not MIN_SPEED_FACTOR <= factor <= MAX_SPEED_FACTOR:
        raise InvalidSpeedInput(
            f"{factor} is outside {MIN_SPEED_FACTOR}...{MAX_SPEED_FACTOR}"
        )
    return factor


def parse_activity_spec(value: str) -> Activity:
    """Parse ``Name=HH:MM-HH:MM`` into an :class:`Activity`."""
    match = _ACTIVITY_PATTERN.match(value.strip())
    if not match:
        raise InvalidActivitySpec(f"expected Name=HH:MM-HH:MM, got {value!r}")
    try:
        return Activity(
            name=match.group("name"),
            start=parse_time_of_day(match.group("start")),
            end=parse_time_of_day(match.group("end")),
        )
    except ValueError as exc:
        raise InvalidActivitySpec(str(exc)) from exc


def default_activities() -> list[Activity]:
    return [
        Activity(name, parse_time_of_day(start), parse_time_of_day(end))
        for name, start, end in DEFAULT_SCHEDULE
    ]


def build_activities(specs: Iterable[str] | None) -> list[Activity]:
    """Return activities from CLI specs, or the default schedule when none are given."""
    specs = list(specs or [])
    if not specs:
        return default_activities()
    return [parse_activity_spec(spec) for spec in specs]
