"""Decides which actions a resolved command triggers, and in which order."""

from __future__ import annotations

import datetime as dt
import enum
import logging
import sys
from typing import Callable, List, Optional

from . import __version__
from .api_client import ApiError, TeamworkClient
from .arguments import ResolvedCommand
from .entries import build_from_command
from .interactive import InteractiveSession, usage
from .options import OPTIONS
from .reports import print_date_entries, print_previous_tasks, print_time_logged
from .schemas import UserData
from .storage import UserDataStore
from .timers import TimerLedger, TimerStateError, duration_to_string
from .utils import format_timestamp, now, parse_clock

logger = logging.getLogger(__name__)

Echo = Callable[[str], None]


class Action(str, enum.Enum):
    HELP = "help"
    PERSIST_KEY = "key"
    PERSIST_URL = "url"
    PERSIST_ARRIVED = "arrived"
    START_TIMER = "start"
    STOP_TIMER = "stop"
    INTERACTIVE_ENTRY = "interactive-entry"
    ENTRY = "entry"
    TASKS = "tasks"
    TIME_LOGGED = "time-logged"
    VERSION = "version"
    ENTRIES = "entries"
    INTERACTIVE = "interactive"


class PrimaryAction(str, enum.Enum):
    """Mutually exclusive logging/listing actions, in priority order."""

    INTERACTIVE_ENTRY = "interactive-entry"
    ENTRY = "entry"
    TASKS = "tasks"

    @property
    def action(self) -> Action:
        return Action(self.value)


PERSISTENCE_ACTIONS = (Action.PERSIST_KEY, Action.PERSIST_URL, Action.PERSIST_ARRIVED)
TIMER_ACTIONS = (Action.START_TIMER, Action.STOP_TIMER)
INDEPENDENT_ACTIONS = (Action.TIME_LOGGED, Action.VERSION, Action.ENTRIES)

EXAMPLES = """
    hours --entry --task 6905921 --start-time "09:00" --hours 1 --minutes 30 --billable 0 --description "Friday Standup"
    Logs an hour and a half for a long Friday standup

    hours -e -t 6905921 -T "09:00" -H 1 -M 30 -b 0 -m "Friday Standup"
    Same as above but using letters instead
"""


def select_primary_action(command: ResolvedCommand) -> Optional[PrimaryAction]:
    for candidate in PrimaryAction:
        if command.provided(candidate.value):
            return candidate
    return None


def plan_actions(command: ResolvedCommand) -> List[Action]:
    """Return the actions to perform for `command`, in execution order."""

    if command.is_empty:
        return [Action.TIME_LOGGED]
    if command.provided(Action.HELP.value):
        return [Action.HELP]
    plan = [action for action in PERSISTENCE_ACTIONS + TIMER_ACTIONS if command.provided(action.value)]
    primary = select_primary_action(command)
    if primary is not None:
        plan.append(primary.action)
    plan.extend(action for action in INDEPENDENT_ACTIONS if command.provided(action.value))
    if command.provided(Action.INTERACTIVE.value):
        plan.append(Action.INTERACTIVE)
    return plan


def version_line() -> str:
    return f"hours {__version__}\n"


def print_usage(echo: Echo = print) -> None:
    echo(version_line())
    echo("OPTIONS")
    for spec in OPTIONS.values():
        hint = spec.argument or ""
        echo(f"\n\t{spec.short_flag}, {spec.long_flag} {hint}\n\t{spec.description}")
    echo("\nEXAMPLES")
    echo(EXAMPLES)
    echo("\nINTERACTIVE MODE\n")
    usage(echo)


def arrival_time(value: object, current: Optional[dt.datetime] = None) -> dt.datetime:
    """Resolve an ``--arrived`` value to a timestamp.

    ``HH:MM`` means that time today; anything else, including ``now`` and an
    unreadable time, means the current time.
    """

    current = current or now()
    if isinstance(value, dt.datetime):
        return value
    if isinstance(value, str) and value != "now":
        clock = parse_clock(value)
        if clock is not None:
            return current.replace(hour=clock.hour, minute=clock.minute, second=0, microsecond=0)
        logger.debug("Unreadable arrival time %r, using now", value)
    return current


class Dispatcher:
    """Performs the actions of a resolved command against the user's data."""

    def __init__(
        self,
        store: UserDataStore,
        client_factory: Callable[[UserData], TeamworkClient],
        echo: Echo = print,
        error: Optional[Echo] = None,
        session_factory: Optional[Callable[["Dispatcher"], InteractiveSession]] = None,
    ) -> None:
        self.store = store
        self.ledger = TimerLedger(store)
        self.client_factory = client_factory
        self.echo = echo
        self.error = error or (lambda message: print(message, file=sys.stderr))
        self.session_factory = session_factory or self._default_session
        self.failures: List[Action] = []
        self._client: Optional[TeamworkClient] = None

    @property
    def user_data(self) -> UserData:
        return self.store.get()

    def client(self) -> TeamworkClient:
        if self._client is None:
            self._client = self.client_factory(self.user_data)
        return self._client

    def _default_session(self, dispatcher: "Dispatcher") -> InteractiveSession:
        return InteractiveSession(dispatcher.client, dispatcher.ledger, dispatcher.user_data, echo=dispatcher.echo)

    def run(self, command: ResolvedCommand) -> List[Action]:
        """Execute every planned action; return the ones that failed."""

        self.failures = []
        for action in plan_actions(command):
            logger.debug("Running %s", action.value)
            try:
                self.perform(action, command)
            except (TimerStateError, ApiError) as exc:
                self.failures.append(action)
                self.error(f"Error: {exc}")
        return self.failures

    def perform(self, action: Action, command: ResolvedCommand) -> None:
        value = command.value(action.value) if action.value in command else None
        if action is Action.HELP:
            print_usage(self.echo)
        elif action is Action.PERSIST_KEY:
            self.persist_key(value)
        elif action is Action.PERSIST_URL:
            self.persist_url(value)
        elif action is Action.PERSIST_ARRIVED:
            self.persist_arrived(value)
        elif action is Action.START_TIMER:
            timer = self.ledger.start(str(value))
            self.echo(f"Recorded start time for {value} as {format_timestamp(timer.started)}.")
        elif action is Action.STOP_TIMER:
            timer = self.ledger.stop(str(value))
            self.echo(f"Timer {value} stopped at {duration_to_string(timer.duration)}.")
        elif action is Action.INTERACTIVE_ENTRY:
            self.echo(self.session_factory(self).log_time_interactive(str(value or "")))
        elif action is Action.ENTRY:
            entry = build_from_command(command)
            self.echo(self.client().send_time_entry(entry))
        elif action is Action.TASKS:
            print_previous_tasks(self.client(), echo=self.echo)
        elif action is Action.TIME_LOGGED:
            print_time_logged(self.client(), self.user_data, echo=self.echo)
        elif action is Action.VERSION:
            self.echo(version_line())
        elif action is Action.ENTRIES:
            print_date_entries(self.client(), str(command.value("date")), echo=self.echo)
        elif action is Action.INTERACTIVE:
            self.echo(self.session_factory(self).interactive_mode(str(value or ".")))

    # ------------------------------------------------------------------
    # Persistence-only actions
    # ------------------------------------------------------------------
    def persist_key(self, key: object) -> None:
        if isinstance(key, str) and key:
            self.user_data.teamwork.key = key
            self._reset_client()
            self.store.save()

    def persist_url(self, url: object) -> None:
        if isinstance(url, str) and url:
            self.user_data.teamwork.url = url
            self._reset_client()
            self.store.save()

    def persist_arrived(self, value: object) -> None:
        arrived = arrival_time(value)
        self.user_data.arrived = arrived
        self.echo(f"Marking that you arrived at {format_timestamp(arrived)}")
        self.store.save()

    def _reset_client(self) -> None:
        self._client = None


__all__ = [
    "Action",
    "Dispatcher",
    "PrimaryAction",
    "arrival_time",
    "plan_actions",
    "print_usage",
    "select_primary_action",
    "version_line",
]
