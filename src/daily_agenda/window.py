"""Predicates over an activity's scheduled window."""

from __future__ import annotations

from .models import Activity, TimeOfDay

DEFAULT_THRESHOLD_MINUTES = 10


def contains(activity: Activity, moment: TimeOfDay) -> bool:
    """Return True when ``moment`` lies in ``[start, end)``."""
    return activity.start.minute_of_day <= moment.minute_of_day < activity.end.minute_of_day


def is_starting(activity: Activity, moment: TimeOfDay) -> bool:
    return moment == activity.start


def remaining_minutes(activity: Activity, moment: TimeOfDay) -> int:
    return activity.end.minute_of_day - moment.minute_of_day


def is_ending_soon(
    activity: Activity,
    moment: TimeOfDay,
    threshold_minutes: int = DEFAULT_THRESHOLD_MINUTES,
) -> bool:
    """Return True only in the minute exactly ``threshold_minutes`` before the end."""
    return contains(activity, moment) and remaining_minutes(activity, moment) == threshold_minutes
