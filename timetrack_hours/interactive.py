"""Line oriented interactive session and question-driven time logging."""

from __future__ import annotations

import logging
import shlex
from typing import Callable, List, Optional

from .api_client import ApiError, TeamworkClient
from .entries import build_time_entry, entry_defaults
from .reports import print_date_entries, print_previous_tasks, print_time_logged
from .schemas import UserData
from .timers import TimerLedger, TimerStateError, duration_to_string
from .utils import format_timestamp, today_stamp

logger = logging.getLogger(__name__)

ROOT = "."

COMMANDS = (
    ("ls", "List projects, or the tasks of the current project"),
    ("cd <projectId>", "Enter a project; `cd ..` goes back to the project list"),
    ("log [taskId]", "Log time to a task, answering questions for each field"),
    ("tasks", "Print tasks logged to this year"),
    ("entries [yyyymmdd]", "Print entries of today or the given date"),
    ("logged", "Print time logged today"),
    ("timers", "Print all timers"),
    ("start <timer>", "Start a timer"),
    ("stop <timer>", "Stop a timer"),
    ("help", "Print this list"),
    ("exit", "Leave interactive mode"),
)


def usage(echo: Callable[[str], None] = print) -> None:
    for command, description in COMMANDS:
        echo(f"\t{command}\n\t{description}\n")


class InteractiveSession:
    """Runs commands typed by the user against Teamwork and the timer ledger.

    ``prompt`` and ``echo`` default to :func:`input` and :func:`print` so a
    session can be scripted by passing other callables.
    """

    def __init__(
        self,
        client_provider: Callable[[], TeamworkClient],
        ledger: TimerLedger,
        user_data: UserData,
        prompt: Callable[[str], str] = input,
        echo: Callable[[str], None] = print,
    ) -> None:
        self.client_provider = client_provider
        self.ledger = ledger
        self.user_data = user_data
        self.prompt = prompt
        self.echo = echo
        self.path = ROOT

    # ------------------------------------------------------------------
    # Question-driven entry
    # ------------------------------------------------------------------
    def _ask(self, question: str, default: str) -> str:
        suffix = f" [{default}]" if default != "" else ""
        answer = self.prompt(f"{question}{suffix}: ").strip()
        return answer or default

    def log_time_interactive(self, task_id: str = "") -> str:
        defaults = entry_defaults()
        try:
            task = task_id or self._ask("Task id", "")
            if not task:
                return "No task id given, nothing logged"
            date = self._ask("Date (yyyymmdd)", str(defaults["date"]))
            start_time = self._ask("Start time (HH:MM)", str(defaults["start_time"]))
            hours = self._ask("Hours", str(defaults["hours"]))
            minutes = self._ask("Minutes", str(defaults["minutes"]))
            billable = self._ask("Billable (1/0)", "1" if defaults["billable"] else "0")
            description = self._ask("Description", "")
        except (EOFError, KeyboardInterrupt):
            return "Cancelled, nothing logged"
        entry = build_time_entry(
            task_id=task,
            date=date,
            hours=hours,
            minutes=minutes,
            description=description,
            billable=billable,
            start_time=start_time,
        )
        return self.client_provider().send_time_entry(entry)

    # ------------------------------------------------------------------
    # Session loop
    # ------------------------------------------------------------------
    def interactive_mode(self, path: str = ROOT) -> str:
        self.path = path or ROOT
        self.echo("Interactive mode, type `help` for commands")
        while True:
            try:
                line = self.prompt(f"hours:{self.path}> ")
            except (EOFError, KeyboardInterrupt):
                break
            try:
                words = shlex.split(line)
            except ValueError as exc:
                self.echo(f"Error: {exc}")
                continue
            if not words:
                continue
            command, args = words[0].lower(), words[1:]
            if command in {"exit", "quit"}:
                break
            try:
                self.handle(command, args)
            except (ApiError, TimerStateError) as exc:
                self.echo(f"Error: {exc}")
        return "Bye"

    def handle(self, command: str, args: List[str]) -> None:
        first: Optional[str] = args[0] if args else None
        if command == "help":
            usage(self.echo)
        elif command == "ls":
            self._list()
        elif command == "cd":
            self._change_path(first or ROOT)
        elif command == "log":
            self.echo(self.log_time_interactive(first or ""))
        elif command == "tasks":
            print_previous_tasks(self.client_provider(), echo=self.echo)
        elif command == "entries":
            print_date_entries(self.client_provider(), first or today_stamp(), echo=self.echo)
        elif command == "logged":
            print_time_logged(self.client_provider(), self.user_data, echo=self.echo)
        elif command == "timers":
            self._list_timers()
        elif command == "start":
            timer = self.ledger.start(first or "")
            self.echo(f"Recorded start time for {first or ''} as {format_timestamp(timer.started)}.")
        elif command == "stop":
            timer = self.ledger.stop(first or "")
            self.echo(f"Timer {first or ''} stopped at {duration_to_string(timer.duration)}.")
        else:
            self.echo(f"Unknown command {command}, type `help` for commands")

    def _list(self) -> None:
        client = self.client_provider()
        if self.path == ROOT:
            for project in client.list_projects():
                company = f" ({project.company})" if project.company else ""
                self.echo(f"{project.project_id}\t{project.name}{company}")
            return
        for task in client.list_tasks(self.path):
            tasklist = f" [{task.tasklist}]" if task.tasklist else ""
            done = " (done)" if task.completed else ""
            self.echo(f"{task.task_id}\t{task.name}{tasklist}{done}")

    def _change_path(self, target: str) -> None:
        if target in {ROOT, "..", "/"}:
            self.path = ROOT
        else:
            self.path = target.strip("/")
        logger.debug("Interactive path is now %s", self.path)

    def _list_timers(self) -> None:
        if not self.user_data.timers:
            self.echo("No timers")
            return
        for timer_id, timer in sorted(self.user_data.timers.items()):
            state = f"running since {format_timestamp(timer.started)}" if timer.running else "stopped"
            self.echo(f"{timer_id}\t{duration_to_string(timer.duration)}\t{state}")


__all__ = ["InteractiveSession", "usage", "COMMANDS"]
