"""Human-readable console output for the scheduler."""

from __future__ import annotations

import sys
import time
from typing import Callable, Iterable, Optional, TextIO

from .models import Activity, TimeOfDay
from .window import contains

CLEAR_SEQUENCE = "\033[2J\033[H"
QUERY_FORMAT_HINT = 'Please enter a time ("now" or "HH:MM")'


class StatusPrinter:
    """Render scheduler status lines in the console."""

    def __init__(
        self,
        stream: Optional[TextIO] = None,
        *,
        clear_screen: bool = True,
        clear_delay: float = 2.0,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._stream = stream
        self.clear_screen = clear_screen
        self.clear_delay = clear_delay
        self._sleep = sleep

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout

    def line(self, text: str = "") -> None:
        print(text, file=self.stream, flush=True)

    def time_for(self, activity: Activity) -> None:
        self.line(f"Time for {activity.name}")

    def ending_soon(self, activity: Activity, minutes: int) -> None:
        self.line(f"Don't forget to do {activity.name} in {minutes} minutes!")

    def marked_done(self, activity: Activity) -> None:
        self.line(f"{activity.name} marked as done.")

    def already_done(self, activity: Activity) -> None:
        self.line(f"Chill, you've already done: {activity.name}")

    def nothing_to_do(self) -> None:
        self.line("There is no activity to do.")

    def query_format_error(self) -> None:
        self.line(QUERY_FORMAT_HINT)

    def clear(self) -> None:
        """Wait so the last message can be read, then wipe the screen."""
        if not self.clear_screen:
            return
        if self.clear_delay > 0:
            self._sleep(self.clear_delay)
        self.stream.write(CLEAR_SEQUENCE)
        self.stream.flush()

    def print_schedule(
        self, activities: Iterable[Activity], moment: Optional[TimeOfDay] = None
    ) -> None:
        self.line("Today's agenda")
        self.line("-" * 40)
        for activity in activities:
            self.line(format_activity_row(activity, moment))

    def print_query_result(self, moment: TimeOfDay, matches: list[Activity]) -> None:
        if not matches:
            self.nothing_to_do()
            return
        self.line(f"Scheduled at {moment}:")
        for activity in matches:
            status = "done" if activity.done else "scheduled"
            self.line(f"  {activity.name:<24} {status}")


def format_activity_row(activity: Activity, moment: Optional[TimeOfDay] = None) -> str:
    marker = " "
    if activity.done:
        marker = "x"
    elif moment is not None and contains(activity, moment):
        marker = ">"
    return (
        f"[{marker}] {activity.start}-{activity.end}  {activity.name:<24} "
        f"{format_minutes(activity.duration_minutes)}"
    )


def format_minutes(minutes: int) -> str:
    hours, mins = divmod(minutes, 60)
    return f"{hours:d}h{mins:02d}m"
