"""Command-line interface for the daily agenda."""

from __future__ import annotations

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import List, Optional

import typer

from .config import (
    MAX_SPEED_FACTOR,
    MIN_SPEED_FACTOR,
    SchedulerSettings,
    build_activities,
)
from .errors import InvalidActivitySpec, InvalidQueryFormat
from .models import Activity, TimeOfDay
from .paths import get_log_path
from .prompts import parse_query
from .reporting import StatusPrinter
from .store import ActivityStore

app = typer.Typer(help="Terminal agenda that reminds you of the day's activities.")

logger = logging.getLogger(__name__)

ACTIVITY_HELP = "Activity as 'Name=HH:MM-HH:MM'. Repeat to build the schedule; defaults to a built-in day."


@app.callback(no_args_is_help=True)
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logs."),
    log_file: Optional[Path] = typer.Option(
        None,
        "--log-file",
        path_type=Path,
        help="Where to write logs. Defaults to the platform log directory.",
    ),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
        filename=str(log_file or get_log_path()),
    )


def _load_activities(specs: Optional[List[str]]) -> list[Activity]:
    try:
        return build_activities(specs)
    except InvalidActivitySpec as exc:
        raise typer.BadParameter(str(exc), param_hint="--activity") from exc


@app.command()
def run(
    speed: Optional[int] = typer.Option(
        None,
        "--speed",
        min=MIN_SPEED_FACTOR,
        max=MAX_SPEED_FACTOR,
        help="Clock speed-up factor. Asked interactively when omitted.",
    ),
    interval: float = typer.Option(
        0.1,
        "--interval",
        min=0.01,
        max=5.0,
        help="Tick interval in real seconds.",
    ),
    threshold: int = typer.Option(
        10,
        "--threshold",
        min=1,
        max=120,
        help="Minutes before an activity ends to send a reminder.",
    ),
    activity: Optional[List[str]] = typer.Option(None, "--activity", "-a", help=ACTIVITY_HELP),
    clear: bool = typer.Option(
        True,
        "--clear/--no-clear",
        help="Clear the screen after each interaction.",
    ),
) -> None:
    """Run the scheduler until the virtual day ends."""
    from .clock import ClockTicker, VirtualClock
    from .loop import ScheduleLoop
    from .prompts import ConsolePrompter
    from .terminal import NonBlockingLineReader, terminal_session

    store = ActivityStore(_load_activities(activity))
    try:
        with terminal_session() as session:
            # Prompts and queries share one reader so no typed line is lost.
            reader = NonBlockingLineReader(session.fd)
            if speed is None:
                speed = ConsolePrompter(
                    reader.read_line, confirm_delay=0, blocking=session.blocking
                ).ask_speed_factor()
            settings = SchedulerSettings.from_options(
                speed_factor=speed,
                interval_seconds=interval,
                threshold_minutes=threshold,
                clear_screen=clear,
            )
            printer = StatusPrinter(
                clear_screen=settings.clear_screen,
                clear_delay=settings.clear_delay.total_seconds(),
            )
            printer.clear()

            clock = VirtualClock(settings.speed_factor)
            prompter = ConsolePrompter(
                reader.read_line,
                confirm_delay=settings.confirm_delay.total_seconds(),
                blocking=session.blocking,
            )
            loop = ScheduleLoop(
                clock,
                store,
                settings,
                prompter=prompter,
                printer=printer,
                lines=reader,
            )
            with ClockTicker(clock, settings.tick_interval.total_seconds()):
                loop.run()
    except KeyboardInterrupt:
        logger.info("Scheduler interrupted by user.")
    except EOFError:
        logger.info("Input closed; stopping scheduler.")
        raise typer.Abort() from None


@app.command()
def check(
    when: str = typer.Argument(..., help="'now' or a time as HH:MM."),
    activity: Optional[List[str]] = typer.Option(None, "--activity", "-a", help=ACTIVITY_HELP),
) -> None:
    """Print the activities scheduled at a given time."""
    try:
        requested = parse_query(when)
    except InvalidQueryFormat as exc:
        raise typer.BadParameter('expected "now" or "HH:MM"', param_hint="WHEN") from exc
    moment = requested if requested is not None else TimeOfDay.from_datetime(datetime.now())
    store = ActivityStore(_load_activities(activity))
    printer = StatusPrinter(sys.stdout, clear_screen=False)
    printer.print_query_result(moment, [item for _, item in store.matching(moment)])


@app.command()
def schedule(
    activity: Optional[List[str]] = typer.Option(None, "--activity", "-a", help=ACTIVITY_HELP),
) -> None:
    """Print the day's activities."""
    store = ActivityStore(_load_activities(activity))
    printer = StatusPrinter(sys.stdout, clear_screen=False)
    printer.print_schedule(store, TimeOfDay.from_datetime(datetime.now()))
