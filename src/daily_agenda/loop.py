"""The tick loop that drives notifications and queries."""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional, Protocol

from .clock import VirtualClock
from .config import SchedulerSettings
from .errors import InvalidQueryFormat
from .models import Activity, NotificationKind, TimeOfDay
from .prompts import parse_query
from .reporting import StatusPrinter
from .store import ActivityStore
from .triggers import TriggerTracker
from .window import is_ending_soon, is_starting

logger = logging.getLogger(__name__)


class LineSource(Protocol):
    def poll(self) -> Optional[str]: ...


class Confirmer(Protocol):
    def confirm(self, activity: Activity) -> bool: ...


class ScheduleLoop:
    """Poll the virtual clock, fire activity notifications and answer queries."""

    def __init__(
        self,
        clock: VirtualClock,
        store: ActivityStore,
        settings: SchedulerSettings,
        *,
        prompter: Confirmer,
        printer: StatusPrinter,
        lines: Optional[LineSource] = None,
        tracker: Optional[TriggerTracker] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.clock = clock
        self.store = store
        self.settings = settings
        self.tracker = tracker or TriggerTracker()
        self._prompter = prompter
        self._printer = printer
        self._lines = lines
        self._sleep = sleep

    def run(self) -> None:
        logger.info(
            "Schedule loop started at %s (speed x%d, %d activities).",
            self.clock.now().strftime("%H:%M:%S"),
            self.settings.speed_factor,
            len(self.store),
        )
        interval = self.settings.tick_interval.total_seconds()
        while not self.clock.day_finished():
            self.tick()
            self._sleep(interval)
        logger.info("Virtual day finished; schedule loop stopped.")

    def tick(self) -> list[tuple[int, NotificationKind]]:
        self.clock.advance()
        fired = self.evaluate(self.clock.time_of_day())
        self.poll_input()
        return fired

    def evaluate(self, moment: TimeOfDay) -> list[tuple[int, NotificationKind]]:
        """Fire start and ending-soon edges for every activity not yet done."""
        fired: list[tuple[int, NotificationKind]] = []
        minute_key = moment.minute_of_day
        threshold = self.settings.threshold_minutes
        for index, activity in self.store.pending():
            starting = is_starting(activity, moment)
            if self.tracker.check(index, NotificationKind.START, starting, minute_key):
                fired.append((index, NotificationKind.START))
                self._printer.time_for(activity)
                self._ask(index)
            if activity.done:
                continue
            ending = is_ending_soon(activity, moment, threshold)
            if self.tracker.check(index, NotificationKind.ENDING_SOON, ending, minute_key):
                fired.append((index, NotificationKind.ENDING_SOON))
                self._printer.ending_soon(activity, threshold)
                self._ask(index)
        return fired

    def poll_input(self) -> None:
        if self._lines is None:
            return
        line = self._lines.poll()
        if line is not None:
            self.handle_query(line)

    def handle_query(self, line: str) -> list[Activity]:
        """Report every activity scheduled at the requested time.

        Done status and trigger memory are ignored here, so repeating a query
        always reports the same activities.
        """
        try:
            requested = parse_query(line)
        except InvalidQueryFormat as exc:
            logger.info("Discarded query %r: %s", line, exc)
            self._printer.query_format_error()
            return []

        moment = requested if requested is not None else self.clock.time_of_day()
        matches = self.store.matching(moment)
        logger.debug("Query at %s matched %d activities.", moment, len(matches))
        for index, activity in matches:
            self._printer.time_for(activity)
            if activity.done:
                self._printer.already_done(activity)
                self._printer.clear()
            else:
                self._ask(index)
        if not matches:
            self._printer.nothing_to_do()
        self._printer.clear()
        return [activity for _, activity in matches]

    def _ask(self, index: int) -> None:
        activity = self.store[index]
        if self._prompter.confirm(activity):
            self.store.mark_done(index)
            self._printer.marked_done(activity)
        self._printer.clear()
