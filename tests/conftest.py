from __future__ import annotations

import datetime as dt
from pathlib import Path
from typing import Generator, List, Optional

import pytest

from timetrack_hours.api_client import ApiError
from timetrack_hours.dispatcher import Dispatcher
from timetrack_hours.models import LoggedEntry, Project, Task, TimeEntry
from timetrack_hours.storage import UserDataStore

T0 = dt.datetime(2024, 3, 1, 9, 0, tzinfo=dt.timezone.utc)


class FakeClient:
    def __init__(self) -> None:
        self.sent: List[TimeEntry] = []
        self.entry_queries: list[tuple[dt.date, Optional[dt.date]]] = []
        self.entries: List[LoggedEntry] = []
        self.projects: List[Project] = []
        self.tasks: dict[str, List[Task]] = {}
        self.fail_with: Optional[str] = None

    def send_time_entry(self, entry: TimeEntry) -> str:
        if self.fail_with:
            raise ApiError(self.fail_with)
        self.sent.append(entry)
        return f"Logged {entry.hours}h {entry.minutes}m to task {entry.task_id}"

    def list_time_entries(self, from_date: dt.date, to_date: Optional[dt.date] = None) -> List[LoggedEntry]:
        self.entry_queries.append((from_date, to_date))
        return list(self.entries)

    def list_projects(self) -> List[Project]:
        return list(self.projects)

    def list_tasks(self, project_id: str) -> List[Task]:
        return list(self.tasks.get(project_id, []))


def make_entry(entry_id: str, task_id: Optional[str], date: str, hours: int, minutes: int, **extra) -> LoggedEntry:
    return LoggedEntry(
        entry_id=entry_id,
        task_id=task_id,
        task_name=extra.pop("task_name", f"Task {task_id}"),
        project_name=extra.pop("project_name", "Website"),
        date=date,
        hours=hours,
        minutes=minutes,
        **extra,
    )


@pytest.fixture()
def data_file(tmp_path: Path) -> Path:
    return tmp_path / "hours" / "user-data.json"


@pytest.fixture()
def store(data_file: Path) -> UserDataStore:
    return UserDataStore(data_file)


@pytest.fixture()
def fake_client() -> FakeClient:
    return FakeClient()


@pytest.fixture()
def output() -> List[str]:
    return []


@pytest.fixture()
def errors() -> List[str]:
    return []


@pytest.fixture()
def dispatcher(store: UserDataStore, fake_client: FakeClient, output: List[str], errors: List[str]) -> Generator[Dispatcher, None, None]:
    yield Dispatcher(store, lambda data: fake_client, echo=output.append, error=errors.append)
