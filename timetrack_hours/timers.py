"""Named start/stop timers kept in the user data."""

from __future__ import annotations

import datetime as dt
import logging
from typing import Optional

from .schemas import TimerRecord, UserData
from .storage import UserDataStore
from .utils import now as _now

logger = logging.getLogger(__name__)


class TimerStateError(RuntimeError):
    """A timer was asked to do something its current state does not allow."""

    def __init__(self, message: str, *, timer_id: str) -> None:
        super().__init__(message)
        self.timer_id = timer_id


class TimerAlreadyRunningError(TimerStateError):
    pass


class TimerNotRunningError(TimerStateError):
    pass


class TimerNotFoundError(TimerStateError):
    pass


def duration_to_string(duration: dt.timedelta) -> str:
    """Format a duration as ``Hh Mm``, rounded down to the minute and never negative."""
    total_minutes = max(0, int(duration.total_seconds() // 60))
    hours, minutes = divmod(total_minutes, 60)
    return f"{hours}h {minutes}m"


class TimerLedger:
    """Start/stop transitions for the timers held by a :class:`UserDataStore`.

    Each timer moves between stopped and running. Stopping adds the elapsed
    interval to the accumulated duration, so a timer can be resumed any number
    of times. Every successful transition is persisted immediately; a refused
    transition leaves the stored timer untouched.
    """

    def __init__(self, store: UserDataStore) -> None:
        self.store = store

    @property
    def _data(self) -> UserData:
        return self.store.get()

    def get(self, timer_id: str) -> Optional[TimerRecord]:
        return self._data.timers.get(timer_id)

    def start(self, timer_id: str, now: Optional[dt.datetime] = None) -> TimerRecord:
        timer = self._data.timers.get(timer_id)
        if timer is not None and timer.running:
            raise TimerAlreadyRunningError(
                f"Timer {timer_id} is already running since {timer.started}", timer_id=timer_id
            )
        if timer is None:
            timer = TimerRecord()
            self._data.timers[timer_id] = timer
        timer.started = now or _now()
        self.store.save()
        logger.debug("Started timer %s at %s", timer_id, timer.started)
        return timer

    def stop(self, timer_id: str, now: Optional[dt.datetime] = None) -> TimerRecord:
        timer = self._data.timers.get(timer_id)
        if timer is None:
            raise TimerNotFoundError(f"Timer {timer_id} has never been started", timer_id=timer_id)
        if not timer.running:
            raise TimerNotRunningError(f"Timer {timer_id} is not running", timer_id=timer_id)
        elapsed = (now or _now()) - timer.started
        if elapsed < dt.timedelta(0):
            elapsed = dt.timedelta(0)
        timer.duration = timer.duration + elapsed
        timer.started = None
        self.store.save()
        logger.debug("Stopped timer %s after %s, total %s", timer_id, elapsed, timer.duration)
        return timer


__all__ = [
    "TimerAlreadyRunningError",
    "TimerLedger",
    "TimerNotFoundError",
    "TimerNotRunningError",
    "TimerStateError",
    "duration_to_string",
]
