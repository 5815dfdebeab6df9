from __future__ import annotations

import io
from datetime import datetime

import pytest

from daily_agenda.models import Activity, TimeOfDay
from daily_agenda.reporting import StatusPrinter


class FakeMonotonic:
    def __init__(self, start: float = 1000.0) -> None:
        self.value = start

    def advance(self, seconds: float) -> None:
        self.value += seconds

    def __call__(self) -> float:
        return self.value


class ScriptedPrompter:
    """Answers confirmations from a fixed script, defaulting to ``no``."""

    def __init__(self, answers: list[bool] | None = None) -> None:
        self.answers = list(answers or [])
        self.asked: list[str] = []

    def confirm(self, activity: Activity) -> bool:
        self.asked.append(activity.name)
        return self.answers.pop(0) if self.answers else False


class QueuedLines:
    def __init__(self, lines: list[str] | None = None) -> None:
        self.lines = list(lines or [])

    def poll(self) -> str | None:
        return self.lines.pop(0) if self.lines else None


def at(text: str) -> TimeOfDay:
    hour, minute = text.split(":")
    return TimeOfDay(int(hour), int(minute))


def local_timestamp(hour: int, minute: int, second: int = 0) -> float:
    return datetime(2026, 10, 18, hour, minute, second).timestamp()


@pytest.fixture
def monotonic() -> FakeMonotonic:
    return FakeMonotonic()


@pytest.fixture
def output() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def printer(output: io.StringIO) -> StatusPrinter:
    return StatusPrinter(output, clear_screen=False)


@pytest.fixture
def lunch() -> Activity:
    return Activity("Lunch", at("11:00"), at("12:00"))
