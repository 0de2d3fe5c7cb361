"""Read-only reports printed from Teamwork data."""

from __future__ import annotations

import datetime as dt
from typing import Callable, Optional

from .api_client import TeamworkClient
from .models import LoggedEntry
from .schemas import UserData
from .timers import duration_to_string
from .utils import now, parse_date_stamp

Echo = Callable[[str], None]


def _minutes(total: int) -> str:
    return duration_to_string(dt.timedelta(minutes=total))


def print_time_logged(
    client: TeamworkClient,
    user_data: UserData,
    echo: Echo = print,
    current: Optional[dt.datetime] = None,
) -> None:
    current = current or now()
    entries = client.list_time_entries(current.date())
    total = sum(entry.total_minutes for entry in entries)
    echo(f"Logged {_minutes(total)} today")
    arrived = user_data.arrived
    if arrived is not None and arrived.astimezone(current.tzinfo).date() == current.date():
        since = current - arrived
        echo(f"Arrived at {arrived.astimezone(current.tzinfo):%H:%M}, {duration_to_string(since)} ago")


def print_previous_tasks(client: TeamworkClient, echo: Echo = print, today: Optional[dt.date] = None) -> None:
    """Print each task logged to since January 1st, most recent first."""

    today = today or dt.date.today()
    entries = client.list_time_entries(dt.date(today.year, 1, 1), today)
    seen: set[str] = set()
    for entry in sorted(entries, key=lambda item: item.date, reverse=True):
        if not entry.task_id or entry.task_id in seen:
            continue
        seen.add(entry.task_id)
        echo(f"{entry.task_id}: {entry.project_name} / {entry.task_name}")
    if not seen:
        echo("No tasks logged this year")


def _entry_line(entry: LoggedEntry) -> str:
    flag = "" if entry.billable else " (non-billable)"
    label = entry.task_name or entry.project_name or "-"
    text = f"{_minutes(entry.total_minutes):>8}  {label}{flag}"
    if entry.description:
        text += f": {entry.description}"
    return text


def print_date_entries(client: TeamworkClient, date_stamp: str, echo: Echo = print) -> None:
    day = parse_date_stamp(str(date_stamp))
    if day is None:
        echo(f"Cannot read date {date_stamp}, expected yyyymmdd")
        return
    entries = client.list_time_entries(day)
    if not entries:
        echo(f"No entries on {day.isoformat()}")
        return
    echo(f"Entries on {day.isoformat()}")
    for entry in entries:
        echo(_entry_line(entry))
    echo(f"{_minutes(sum(entry.total_minutes for entry in entries)):>8}  total")


__all__ = ["print_time_logged", "print_previous_tasks", "print_date_entries"]
