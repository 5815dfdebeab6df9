"""Interactive prompts and parsing of typed answers."""

from __future__ import annotations

import logging
import time
from contextlib import AbstractContextManager, nullcontext
from typing import Callable, Optional

from .config import MAX_SPEED_FACTOR, MIN_SPEED_FACTOR, parse_speed_factor, parse_time_of_day
from .errors import InvalidConfirmation, InvalidQueryFormat, InvalidSpeedInput
from .models import Activity, TimeOfDay

logger = logging.getLogger(__name__)

SPEED_PROMPT = f"How many times would you like to speed it up? ({MIN_SPEED_FACTOR}...{MAX_SPEED_FACTOR})\t"
NOW_KEYWORD = "now"


def parse_confirmation(answer: str) -> bool:
    text = answer.strip()
    if text == "yes":
        return True
    if text == "no":
        return False
    raise InvalidConfirmation(f"expected yes or no, got {text!r}")


def parse_query(line: str) -> Optional[TimeOfDay]:
    """Parse an out-of-band query.

    Returns ``None`` for ``now`` and the requested :class:`TimeOfDay` for a
    strict ``HH:MM`` line. Anything else raises :class:`InvalidQueryFormat`.
    """
    text = line.rstrip("\r\n")
    if text == NOW_KEYWORD:
        return None
    try:
        return parse_time_of_day(text)
    except ValueError as exc:
        raise InvalidQueryFormat(str(exc)) from exc


class ConsolePrompter:
    """Blocking prompts that repeat until a valid answer is typed."""

    def __init__(
        self,
        read_line: Callable[[str], str] = input,
        *,
        confirm_delay: float = 3.0,
        sleep: Callable[[float], None] = time.sleep,
        blocking: Callable[[], AbstractContextManager] = nullcontext,
    ) -> None:
        self._read_line = read_line
        self.confirm_delay = confirm_delay
        self._sleep = sleep
        self._blocking = blocking

    def ask_speed_factor(self) -> int:
        while True:
            answer = self._read_line(SPEED_PROMPT)
            try:
                return parse_speed_factor(answer)
            except InvalidSpeedInput as exc:
                logger.debug("Rejected speed factor: %s", exc)

    def confirm(self, activity: Activity) -> bool:
        """Ask whether ``activity`` is being done now."""
        with self._blocking():
            if self.confirm_delay > 0:
                self._sleep(self.confirm_delay)
            while True:
                answer = self._read_line(f"Are you doing {activity.name} now? (yes/no)\t")
                try:
                    return parse_confirmation(answer)
                except InvalidConfirmation as exc:
                    logger.debug("Rejected confirmation: %s", exc)
