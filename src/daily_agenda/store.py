"""In-memory collection of the day's activities."""

from __future__ import annotations

import logging
from typing import Iterable, Iterator

from .models import Activity, TimeOfDay
from .window import contains

logger = logging.getLogger(__name__)


class ActivityStore:
    """Fixed, ordered list of activities and their done status."""

    def __init__(self, activities: Iterable[Activity]) -> None:
        self._activities = list(activities)

    def __len__(self) -> int:
        return len(self._activities)

    def __iter__(self) -> Iterator[Activity]:
        return iter(self._activities)

    def __getitem__(self, index: int) -> Activity:
        return self._activities[index]

    def pending(self) -> Iterator[tuple[int, Activity]]:
        for index, activity in enumerate(self._activities):
            if not activity.done:
                yield index, activity

    def mark_done(self, index: int) -> bool:
        """Mark an activity done. Returns False if it already was."""
        activity = self._activities[index]
        if activity.done:
            return False
        activity.done = True
        logger.info("Activity marked done: %s", activity.name)
        return True

    def matching(self, moment: TimeOfDay) -> list[tuple[int, Activity]]:
        """Activities whose window contains ``moment``, latest entry first."""
        return [
            (index, activity)
            for index, activity in reversed(list(enumerate(self._activities)))
            if contains(activity, moment)
        ]
