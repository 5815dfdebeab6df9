"""Edge detection for per-activity notifications."""

from __future__ import annotations

import logging

from .models import NotificationKind, TriggerState

logger = logging.getLogger(__name__)


class TriggerTracker:
    """Turn level predicates into once-per-minute notification edges.

    Each ``(activity index, kind)`` pair fires at most once while the minute
    key stays the same. A new minute key returns the pair to idle.
    """

    def __init__(self) -> None:
        self._states: dict[tuple[int, NotificationKind], TriggerState] = {}

    def check(
        self,
        activity_index: int,
        kind: NotificationKind,
        predicate: bool,
        minute_key: int,
    ) -> bool:
        state = self._states.setdefault((activity_index, kind), TriggerState())
        if not predicate or state.fired_in(minute_key):
            return False
        state.last_fired_minute = minute_key
        logger.debug(
            "Trigger fired: activity=%d kind=%s minute=%d",
            activity_index,
            kind.value,
            minute_key,
        )
        return True

    def state_for(self, activity_index: int, kind: NotificationKind) -> TriggerState:
        return self._states.get((activity_index, kind), TriggerState())

    def reset(self) -> None:
        self._states.clear()
