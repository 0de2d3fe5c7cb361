"""Data models for time entries and the Teamwork records shown in reports."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True, slots=True)
class TimeEntry:
    """A time entry ready to be submitted to Teamwork."""

    task_id: str
    date: str
    hours: int = 0
    minutes: int = 0
    description: str = ""
    billable: bool = True
    start_time: str = "09:00"

    @property
    def total_minutes(self) -> int:
        return self.hours * 60 + self.minutes


@dataclass(slots=True)
class LoggedEntry:
    """A time entry as returned by Teamwork."""

    entry_id: str
    task_id: Optional[str]
    task_name: str
    project_name: str
    date: str
    hours: int
    minutes: int
    description: str = ""
    billable: bool = True

    @property
    def total_minutes(self) -> int:
        return self.hours * 60 + self.minutes


@dataclass(slots=True)
class Project:
    project_id: str
    name: str
    company: Optional[str] = None


@dataclass(slots=True)
class Task:
    task_id: str
    name: str
    tasklist: Optional[str] = None
    completed: bool = False


__all__ = ["TimeEntry", "LoggedEntry", "Project", "Task"]
