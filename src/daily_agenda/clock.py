"""Virtual clock that runs faster than wall time."""

from __future__ import annotations

import logging
import threading
import time
from datetime import datetime
from typing import Callable, Optional

from .config import MAX_SPEED_FACTOR, MIN_SPEED_FACTOR
from .models import TimeOfDay

logger = logging.getLogger(__name__)


class VirtualClock:
    """Accumulates accelerated elapsed time on top of a wall-clock anchor.

    ``advance`` may be called from any thread. Elapsed time between advances
    is measured with the monotonic source so system clock adjustments do not
    leak into the virtual offset.
    """

    def __init__(
        self,
        speed_factor: int,
        *,
        wall_fn: Callable[[], float] = time.time,
        monotonic_fn: Callable[[], float] = time.monotonic,
    ) -> None:
        if not MIN_SPEED_FACTOR <= speed_factor <= MAX_SPEED_FACTOR:
            raise ValueError(f"speed factor out of range: {speed_factor}")
        self.speed_factor = speed_factor
        self._monotonic_fn = monotonic_fn
        self._anchor_wall = wall_fn()
        self._anchor_day = datetime.fromtimestamp(int(self._anchor_wall)).date()
        self._last_tick = monotonic_fn()
        self._offset = 0.0
        self._lock = threading.Lock()

    @property
    def offset(self) -> float:
        with self._lock:
            return self._offset

    def advance(self) -> float:
        """Add ``speed_factor`` times the real time since the last advance."""
        with self._lock:
            current = self._monotonic_fn()
            elapsed = max(current - self._last_tick, 0.0)
            self._last_tick = current
            increment = elapsed * self.speed_factor
            self._offset += increment
            return increment

    def now(self) -> datetime:
        """Virtual local time, truncated to whole seconds."""
        return datetime.fromtimestamp(int(self._anchor_wall + self.offset))

    def time_of_day(self) -> TimeOfDay:
        return TimeOfDay.from_datetime(self.now())

    def day_finished(self) -> bool:
        """True once the virtual time has rolled past midnight of the start day."""
        return self.now().date() > self._anchor_day


class ClockTicker:
    """Advance a :class:`VirtualClock` on a fixed interval in a daemon thread."""

    def __init__(self, clock: VirtualClock, interval: float) -> None:
        self._clock = clock
        self._interval = interval
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def start(self) -> None:
        if self.running:
            return
        self._stop_event.clear()
        thread = threading.Thread(target=self._run, name="clock-ticker", daemon=True)
        self._thread = thread
        thread.start()
        logger.debug("Clock ticker started (interval=%.3fs).", self._interval)

    def stop(self, timeout: Optional[float] = None) -> None:
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None
            logger.debug("Clock ticker stopped.")

    def __enter__(self) -> "ClockTicker":
        self.start()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.stop()

    def _run(self) -> None:
        # Sleep in an interruptible manner.
        while not self._stop_event.wait(self._interval):
            self._clock.advance()
