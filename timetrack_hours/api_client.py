"""HTTP client for the Teamwork time tracking API."""

from __future__ import annotations

import datetime as dt
import logging
from typing import Any, Optional
from urllib.parse import urljoin

import requests

from .models import LoggedEntry, Project, Task, TimeEntry
from .utils import DATE_STAMP_FORMAT

logger = logging.getLogger(__name__)


class ApiError(RuntimeError):
    """Teamwork could not be reached or rejected the request."""

    def __init__(self, message: str, *, response: Optional[requests.Response] = None) -> None:
        super().__init__(message)
        self.response = response


class TeamworkClient:
    """Wraps the Teamwork calls used by the `hours` command."""

    def __init__(self, base_url: str, api_key: str, timeout: int = 15) -> None:
        if not api_key:
            raise ApiError("No Teamwork API key configured, set one with --key")
        if not base_url:
            raise ApiError("No Teamwork URL configured, set one with --url")
        self.base_url = base_url.rstrip("/") + "/"
        self.api_key = api_key
        self.timeout = timeout
        self._person_id: Optional[str] = None

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------
    def _headers(self) -> dict[str, str]:
        return {"Accept": "application/json"}

    def _request(self, method: str, path: str, **kwargs) -> Any:
        url = urljoin(self.base_url, path.lstrip("/"))
        kwargs.setdefault("timeout", self.timeout)
        kwargs.setdefault("auth", (self.api_key, "x"))
        headers = kwargs.setdefault("headers", {})
        headers.update(self._headers())
        logger.debug("%s %s", method, url)
        try:
            response = requests.request(method, url, **kwargs)
        except requests.RequestException as exc:
            raise ApiError(str(exc)) from exc

        if response.status_code >= 400:
            raise ApiError(f"Teamwork error {response.status_code}: {response.text}", response=response)

        if response.headers.get("Content-Type", "").startswith("application/json"):
            try:
                return response.json()
            except ValueError as exc:
                raise ApiError(f"Teamwork returned invalid JSON: {exc}", response=response) from exc
        return response.content

    def person_id(self) -> str:
        if self._person_id is None:
            data = self._request("GET", "/me.json") or {}
            person = data.get("person", {}) if isinstance(data, dict) else {}
            identifier = person.get("id")
            if not identifier:
                raise ApiError("Teamwork did not return the current user")
            self._person_id = str(identifier)
        return self._person_id

    # ------------------------------------------------------------------
    # Time entries
    # ------------------------------------------------------------------
    def send_time_entry(self, entry: TimeEntry) -> str:
        if not entry.task_id:
            raise ApiError("No task id given, use --task or see --tasks")
        payload = {
            "time-entry": {
                "description": entry.description,
                "person-id": self.person_id(),
                "date": entry.date,
                "time": entry.start_time,
                "hours": str(entry.hours),
                "minutes": str(entry.minutes),
                "isbillable": "1" if entry.billable else "0",
            }
        }
        data = self._request("POST", f"/tasks/{entry.task_id}/time_entries.json", json=payload) or {}
        log_id = data.get("timeLogId") if isinstance(data, dict) else None
        return (
            f"Logged {entry.hours}h {entry.minutes}m to task {entry.task_id} on {entry.date}"
            + (f" (time log {log_id})" if log_id else "")
        )

    def list_time_entries(self, from_date: dt.date, to_date: Optional[dt.date] = None) -> list[LoggedEntry]:
        params = {
            "fromdate": from_date.strftime(DATE_STAMP_FORMAT),
            "todate": (to_date or from_date).strftime(DATE_STAMP_FORMAT),
            "userId": self.person_id(),
            "sortorder": "desc",
        }
        data = self._request("GET", "/time_entries.json", params=params) or {}
        items = data.get("time-entries", []) if isinstance(data, dict) else []
        return [self._parse_entry(item) for item in items]

    # ------------------------------------------------------------------
    # Projects and tasks
    # ------------------------------------------------------------------
    def list_projects(self) -> list[Project]:
        data = self._request("GET", "/projects.json", params={"status": "ACTIVE"}) or {}
        items = data.get("projects", []) if isinstance(data, dict) else []
        return [
            Project(
                project_id=str(item.get("id", "")),
                name=item.get("name", ""),
                company=(item.get("company") or {}).get("name"),
            )
            for item in items
        ]

    def list_tasks(self, project_id: str) -> list[Task]:
        data = self._request("GET", f"/projects/{project_id}/tasks.json") or {}
        items = data.get("todo-items", []) if isinstance(data, dict) else []
        return [
            Task(
                task_id=str(item.get("id", "")),
                name=item.get("content", ""),
                tasklist=item.get("todo-list-name"),
                completed=bool(item.get("completed", False)),
            )
            for item in items
        ]

    @staticmethod
    def _parse_entry(item: dict[str, Any]) -> LoggedEntry:
        task_id = item.get("todo-item-id")
        return LoggedEntry(
            entry_id=str(item.get("id", "")),
            task_id=str(task_id) if task_id not in (None, "") else None,
            task_name=item.get("todo-item-name", ""),
            project_name=item.get("project-name", ""),
            date=TeamworkClient._parse_date(item.get("date")),
            hours=int(item.get("hours", 0) or 0),
            minutes=int(item.get("minutes", 0) or 0),
            description=item.get("description", "") or "",
            billable=str(item.get("isbillable", "1")) in {"1", "true", "True"},
        )

    @staticmethod
    def _parse_date(value: Optional[str]) -> str:
        if not value:
            return ""
        try:
            return dt.datetime.fromisoformat(value.replace("Z", "+00:00")).strftime(DATE_STAMP_FORMAT)
        except ValueError:
            return value


__all__ = ["ApiError", "TeamworkClient"]
