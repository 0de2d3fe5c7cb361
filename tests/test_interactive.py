from __future__ import annotations

from typing import Iterable, List

import pytest

from conftest import FakeClient
from timetrack_hours.interactive import InteractiveSession, usage
from timetrack_hours.models import Project, Task
from timetrack_hours.storage import UserDataStore
from timetrack_hours.timers import TimerLedger
from timetrack_hours.utils import today_stamp


def scripted(answers: Iterable[str]):
    pending = list(answers)
    asked: List[str] = []

    def prompt(question: str) -> str:
        asked.append(question)
        if not pending:
            raise EOFError
        return pending.pop(0)

    prompt.asked = asked  # type: ignore[attr-defined]
    return prompt


@pytest.fixture()
def make_session(store: UserDataStore, fake_client: FakeClient, output):
    def build(answers: Iterable[str]) -> InteractiveSession:
        return InteractiveSession(
            lambda: fake_client,
            TimerLedger(store),
            store.get(),
            prompt=scripted(answers),
            echo=output.append,
        )

    return build


def test_log_time_interactive_asks_for_remaining_fields(make_session, fake_client: FakeClient):
    session = make_session(["", "", "2", "15", "0", "Review"])
    message = session.log_time_interactive("42")
    entry = fake_client.sent[0]
    assert message == "Logged 2h 15m to task 42"
    assert entry.task_id == "42"
    assert entry.date == today_stamp()
    assert entry.start_time == "09:00"
    assert entry.billable is False
    assert entry.description == "Review"
    assert session.prompt.asked[0] == f"Date (yyyymmdd) [{today_stamp()}]: "


def test_log_time_interactive_asks_for_task_when_missing(make_session, fake_client: FakeClient):
    session = make_session(["99", "20240301", "10:00", "1", "0", "", "Call"])
    session.log_time_interactive()
    entry = fake_client.sent[0]
    assert (entry.task_id, entry.date, entry.start_time, entry.hours, entry.billable) == ("99", "20240301", "10:00", 1, True)


def test_log_time_interactive_without_task(make_session, fake_client: FakeClient):
    assert make_session([""]).log_time_interactive() == "No task id given, nothing logged"
    assert fake_client.sent == []


def test_log_time_interactive_cancelled_by_end_of_input(make_session, fake_client: FakeClient):
    assert make_session(["20240301"]).log_time_interactive("5") == "Cancelled, nothing logged"
    assert fake_client.sent == []


def test_session_navigates_projects_and_tasks(make_session, fake_client: FakeClient, output):
    fake_client.projects = [Project("1", "Website", "Acme")]
    fake_client.tasks = {"1": [Task("10", "Design", "Phase 1"), Task("11", "Launch", completed=True)]}
    session = make_session(["ls", "cd 1", "ls", "cd ..", "exit", "ls"])
    assert session.interactive_mode() == "Bye"
    assert output[1:] == ["1\tWebsite (Acme)", "10\tDesign [Phase 1]", "11\tLaunch (done)"]
    assert session.path == "."


def test_session_starts_in_given_path(make_session, fake_client: FakeClient, output):
    fake_client.tasks = {"7": [Task("70", "Support")]}
    session = make_session(["ls"])
    session.interactive_mode("7")
    assert output[-1] == "70\tSupport"


def test_session_reports_errors_and_continues(make_session, store: UserDataStore, output):
    session = make_session(["stop ghost", "start A", "start A", "bogus", 'log "unclosed', "timers"])
    session.interactive_mode()
    assert "Error: Timer ghost has never been started" in output
    assert sum(line.startswith("Recorded start time for A as ") for line in output) == 1
    assert any(line.startswith("Error: Timer A is already running") for line in output)
    assert "Unknown command bogus, type `help` for commands" in output
    assert any(line.startswith("Error: No closing quotation") for line in output)
    assert output[-1].startswith("A\t0h 0m\trunning since ")
    assert store.get().timers["A"].running


def test_help_lists_commands(make_session, output):
    make_session(["help"]).interactive_mode()
    assert "\tlog [taskId]\n\tLog time to a task, answering questions for each field\n" in output


def test_usage_prints_every_command():
    lines: List[str] = []
    usage(lines.append)
    assert len(lines) == 11
    assert lines[-1].startswith("\texit")


def interrupted_after(answers: Iterable[str]):
    pending = list(answers)

    def prompt(question: str) -> str:
        if not pending:
            raise KeyboardInterrupt
        return pending.pop(0)

    return prompt


def test_interrupt_ends_session_cleanly(store: UserDataStore, fake_client: FakeClient, output):
    session = InteractiveSession(
        lambda: fake_client, TimerLedger(store), store.get(), prompt=interrupted_after(["start A"]), echo=output.append
    )
    assert session.interactive_mode() == "Bye"
    assert store.get().timers["A"].running


def test_interrupt_cancels_question_driven_entry(store: UserDataStore, fake_client: FakeClient, output):
    session = InteractiveSession(
        lambda: fake_client, TimerLedger(store), store.get(), prompt=interrupted_after(["20240301"]), echo=output.append
    )
    assert session.log_time_interactive("5") == "Cancelled, nothing logged"
    assert fake_client.sent == []
