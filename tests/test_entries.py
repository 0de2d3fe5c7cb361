from __future__ import annotations

import pytest

from timetrack_hours.arguments import resolve_arguments
from timetrack_hours.entries import build_from_command, build_time_entry, entry_defaults
from timetrack_hours.models import TimeEntry
from timetrack_hours.utils import today_stamp


def test_structured_entry_command_builds_entry():
    command = resolve_arguments(
        ["--entry", "--task", "123", "--hours", "1", "--minutes", "30", "--billable", "0", "--description", "Standup"]
    )
    entry = build_from_command(command)
    assert entry == TimeEntry(
        task_id="123",
        date=today_stamp(),
        hours=1,
        minutes=30,
        description="Standup",
        billable=False,
        start_time="09:00",
    )


def test_short_forms_build_the_same_entry():
    command = resolve_arguments(["-e", "-t", "6905921", "-T", "10:15", "-H", "2", "-M", "5", "-b", "1", "-d", "20240301"])
    entry = build_from_command(command)
    assert entry.task_id == "6905921"
    assert entry.start_time == "10:15"
    assert entry.date == "20240301"
    assert (entry.hours, entry.minutes) == (2, 5)
    assert entry.billable is True


def test_defaults_apply_when_nothing_given():
    entry = build_time_entry(task_id="1")
    assert entry.hours == 0
    assert entry.minutes == 0
    assert entry.billable is True
    assert entry.date == today_stamp()
    assert entry.start_time == "09:00"
    assert entry.description == ""


@pytest.mark.parametrize(
    "hours, minutes, expected",
    [
        ("abc", "15", (0, 15)),
        ("2", "x", (2, 0)),
        ("1.5", "30", (0, 30)),
        ("-3", "-10", (0, 0)),
        ("1", "90", (2, 30)),
        (3, 0, (3, 0)),
    ],
)
def test_numbers_fall_back_to_defaults(hours, minutes, expected):
    entry = build_time_entry(task_id="1", hours=hours, minutes=minutes)
    assert (entry.hours, entry.minutes) == expected
    assert 0 <= entry.minutes <= 59


@pytest.mark.parametrize(
    "value, expected",
    [("0", False), ("1", True), ("no", False), ("yes", True), ("maybe", True), (False, False), (True, True)],
)
def test_billable_coercion(value, expected):
    assert build_time_entry(task_id="1", billable=value).billable is expected


def test_unvalidated_fields_pass_through():
    entry = build_time_entry(task_id=" abc ", date="2024-13-45", start_time="late")
    assert entry.task_id == "abc"
    assert entry.date == "2024-13-45"
    assert entry.start_time == "late"


def test_entry_defaults_follow_option_table():
    defaults = entry_defaults()
    assert defaults["start_time"] == "09:00"
    assert defaults["billable"] is True
    assert defaults["date"] == today_stamp()
