from datetime import timedelta

import pytest

from daily_agenda.config import (
    DEFAULT_SCHEDULE,
    SchedulerSettings,
    build_activities,
    default_activities,
    parse_activity_spec,
    parse_speed_factor,
    parse_time_of_day,
)
from daily_agenda.errors import InvalidActivitySpec, InvalidSpeedInput
from daily_agenda.models import TimeOfDay


def test_parse_time_of_day_is_strict() -> None:
    assert parse_time_of_day("09:05") == TimeOfDay(9, 5)
    for bad in ["9:05", "09:5", "0905", "24:00", "12:60", " 09:05", "09:05\n", "ab:cd", "١٤:٠٥"]:
        with pytest.raises(ValueError):
            parse_time_of_day(bad)


@pytest.mark.parametrize("text, expected", [("1", 1), ("30", 30), (" 12 ", 12)])
def test_parse_speed_factor_accepts_range(text: str, expected: int) -> None:
    assert parse_speed_factor(text) == expected


@pytest.mark.parametrize("text", ["0", "31", "-3", "fast", "5x", "", "2.5", "1_0", "+5", "١٠"])
def test_parse_speed_factor_rejects(text: str) -> None:
    with pytest.raises(InvalidSpeedInput):
        parse_speed_factor(text)


def test_parse_activity_spec() -> None:
    activity = parse_activity_spec("Tea break=15:00-15:20")
    assert activity.name == "Tea break"
    assert activity.start == TimeOfDay(15, 0)
    assert activity.end == TimeOfDay(15, 20)


@pytest.mark.parametrize(
    "spec", ["Tea", "=10:00-11:00", "Tea=10:00", "Tea=11:00-10:00", "Tea=1:00-2:00"]
)
def test_parse_activity_spec_rejects(spec: str) -> None:
    with pytest.raises(InvalidActivitySpec):
        parse_activity_spec(spec)


def test_default_schedule_is_used_without_specs() -> None:
    activities = build_activities(None)
    assert [a.name for a in activities] == [name for name, _, _ in DEFAULT_SCHEDULE]
    assert default_activities()[3].start == TimeOfDay(11, 0)


def test_build_activities_from_specs() -> None:
    activities = build_activities(["A=08:00-09:00", "B=09:00-09:30"])
    assert [a.name for a in activities] == ["A", "B"]


def test_settings_from_options() -> None:
    settings = SchedulerSettings.from_options(speed_factor=12, interval_seconds=0.5, threshold_minutes=5)
    assert settings.speed_factor == 12
    assert settings.tick_interval == timedelta(seconds=0.5)
    assert settings.threshold_minutes == 5
    assert settings.clear_delay == timedelta(seconds=2)


def test_settings_without_clearing_skip_clear_delay() -> None:
    settings = SchedulerSettings.from_options(speed_factor=1, clear_screen=False)
    assert settings.clear_delay == timedelta(0)
    assert settings.clear_screen is False


def test_settings_reject_speed_out_of_range() -> None:
    with pytest.raises(ValueError):
        SchedulerSettings(speed_factor=31)
