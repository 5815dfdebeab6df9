from contextlib import contextmanager

import pytest

from daily_agenda.errors import InvalidConfirmation, InvalidQueryFormat
from daily_agenda.models import Activity, TimeOfDay
from daily_agenda.prompts import ConsolePrompter, parse_confirmation, parse_query


class Answers:
    def __init__(self, *answers: str) -> None:
        self.answers = list(answers)
        self.prompts: list[str] = []

    def __call__(self, prompt: str) -> str:
        self.prompts.append(prompt)
        return self.answers.pop(0)


def test_parse_confirmation() -> None:
    assert parse_confirmation(" yes\n") is True
    assert parse_confirmation("no") is False
    for bad in ["YES", "y", "", "yes please"]:
        with pytest.raises(InvalidConfirmation):
            parse_confirmation(bad)


def test_parse_query() -> None:
    assert parse_query("now") is None
    assert parse_query("now\r\n") is None
    assert parse_query("14:05\n") == TimeOfDay(14, 5)
    for bad in ["", "Now", "  now  ", " 14:05", "2:05", "14:5", "25:00", "14:60", "14-05", "14:05:00", "١٤:٠٥"]:
        with pytest.raises(InvalidQueryFormat):
            parse_query(bad)


def test_speed_prompt_repeats_until_valid() -> None:
    answers = Answers("zero", "0", "45", "12")
    prompter = ConsolePrompter(answers, confirm_delay=0)
    assert prompter.ask_speed_factor() == 12
    assert len(answers.prompts) == 4
    assert all("(1...30)" in prompt for prompt in answers.prompts)


def test_confirm_repeats_until_yes_or_no(lunch: Activity) -> None:
    answers = Answers("maybe", "Yes", "yes")
    prompter = ConsolePrompter(answers, confirm_delay=0)
    assert prompter.confirm(lunch) is True
    assert answers.prompts[0] == "Are you doing Lunch now? (yes/no)\t"
    assert len(answers.prompts) == 3


def test_confirm_waits_and_switches_to_blocking_input(lunch: Activity) -> None:
    events: list[str] = []

    @contextmanager
    def blocking():
        events.append("enter")
        yield
        events.append("exit")

    def read_line(prompt: str) -> str:
        events.append("read")
        return "no"

    prompter = ConsolePrompter(
        read_line, confirm_delay=3.0, sleep=lambda s: events.append(f"sleep {s}"), blocking=blocking
    )
    assert prompter.confirm(lunch) is False
    assert events == ["enter", "sleep 3.0", "read", "exit"]


def test_eof_propagates(lunch: Activity) -> None:
    def closed(prompt: str) -> str:
        raise EOFError

    with pytest.raises(EOFError):
        ConsolePrompter(closed, confirm_delay=0).confirm(lunch)
