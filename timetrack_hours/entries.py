"""Builds a :class:`TimeEntry` from resolved option values."""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from .arguments import ResolvedCommand
from .models import TimeEntry
from .options import OPTIONS
from .utils import coerce_bool, coerce_int, today_stamp

logger = logging.getLogger(__name__)

DEFAULT_START_TIME = "09:00"

# option name -> TimeEntry field
ENTRY_FIELDS = {
    "task": "task_id",
    "date": "date",
    "hours": "hours",
    "minutes": "minutes",
    "description": "description",
    "billable": "billable",
    "start-time": "start_time",
}


def _text(value: Any, default: str) -> str:
    if value is None:
        return default
    return str(value)


def build_time_entry(
    task_id: Any = "",
    date: Any = None,
    hours: Any = 0,
    minutes: Any = 0,
    description: Any = "",
    billable: Any = True,
    start_time: Any = None,
) -> TimeEntry:
    """Assemble a time entry, coercing loosely typed input.

    Numbers and the billable flag are parsed from strings and fall back to
    their defaults when they cannot be parsed. Minutes beyond 59 are carried
    into hours and negative values fall back to zero. Task ids and dates are
    passed through as given; Teamwork is the judge of those.
    """

    whole_hours = coerce_int(hours, 0)
    whole_minutes = coerce_int(minutes, 0)
    if whole_hours < 0:
        whole_hours = 0
    if whole_minutes < 0:
        whole_minutes = 0
    carry, whole_minutes = divmod(whole_minutes, 60)
    whole_hours += carry

    entry = TimeEntry(
        task_id=_text(task_id, "").strip(),
        date=_text(date, "").strip() or today_stamp(),
        hours=whole_hours,
        minutes=whole_minutes,
        description=_text(description, ""),
        billable=coerce_bool(billable, True),
        start_time=_text(start_time, "").strip() or DEFAULT_START_TIME,
    )
    logger.debug("Built %s", entry)
    return entry


def entry_values(command: ResolvedCommand) -> dict[str, Any]:
    """Extract the entry-related option values of a resolved command."""
    return {field: command.value(option) for option, field in ENTRY_FIELDS.items()}


def build_from_command(command: ResolvedCommand, overrides: Optional[Mapping[str, Any]] = None) -> TimeEntry:
    values = entry_values(command)
    if overrides:
        values.update(overrides)
    return build_time_entry(**values)


def entry_defaults() -> dict[str, Any]:
    """Default entry values as declared by the option table."""
    return {field: OPTIONS[option].default_value() for option, field in ENTRY_FIELDS.items()}


__all__ = ["build_time_entry", "build_from_command", "entry_defaults", "entry_values", "DEFAULT_START_TIME"]
