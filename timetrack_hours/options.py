"""Declarative table of every flag the `hours` command understands."""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Tuple, Union

from .utils import now, today_stamp

OptionValue = Union[bool, str, int, dt.datetime]


@dataclass(frozen=True, slots=True)
class OptionSpec:
    """A single recognised flag.

    `argument` is the hint shown in the help text; options without one never
    take a value from the command line. Defaults that depend on the clock are
    given as `default_factory` so the table itself stays constant.
    """

    name: str
    letter: str
    argument: Optional[str]
    description: str
    default: Any = None
    default_factory: Optional[Callable[[], OptionValue]] = None

    @property
    def short_flag(self) -> str:
        return f"-{self.letter}"

    @property
    def long_flag(self) -> str:
        return f"--{self.name}"

    @property
    def takes_argument(self) -> bool:
        return self.argument is not None

    def default_value(self) -> OptionValue:
        if self.default_factory is not None:
            return self.default_factory()
        return self.default


_SPECS: Tuple[OptionSpec, ...] = (
    # help
    OptionSpec("help", "h", None, "Print this help Screen", False),
    OptionSpec("version", "v", None, "Print version info", False),
    # interactive
    OptionSpec("interactive", "i", "[path]", "Enter interactive mode. Optionally add path to start in.", "."),
    # lists of info
    OptionSpec("time-logged", "l", None, "Print time logged", False),
    OptionSpec("tasks", "p", None, "Print a list of previous entered tasks for the year", ""),
    OptionSpec("entries", "q", None, "Print entries of today or date specified", False),
    # time logging
    OptionSpec("interactive-entry", "E", "[taskId]", "Enter time through questions for specified task", ""),
    OptionSpec("entry", "e", None, "Enter time with below options", False),
    OptionSpec("billable", "b", "[0/1]", "If billable time (default 1)", True),
    OptionSpec("hours", "H", "[hours]", "Set hours to log (default 0)", 0),
    OptionSpec("minutes", "M", "[minutes]", "Set minutes to log (default 0)", 0),
    OptionSpec("date", "d", "[yyyymmdd]", "Set date to log for (default today)", default_factory=today_stamp),
    OptionSpec("description", "m", "[message]", "Set description to log (default empty)", ""),
    OptionSpec("task", "t", "[taskId]", "Set the taskId to log to (see --tasks)", ""),
    OptionSpec("start-time", "T", "[HH:MM]", "Set the start time to log (default 09:00)", "09:00"),
    # persistence
    OptionSpec("key", "k", "[key]", "Set teamwork API key to use in the future", ""),
    OptionSpec("url", "u", "[url]", "Set teamwork URL to use in the future", ""),
    OptionSpec("arrived", "a", "[HH:MM]", "Record the time as when you arrived (default to now)", default_factory=now),
    OptionSpec("start", "s", "[timer]", "Start a timer", ""),
    OptionSpec("stop", "r", "[timer]", "Stop a timer", ""),
)

OPTIONS: Dict[str, OptionSpec] = {spec.name: spec for spec in _SPECS}


def find_option(flag: str) -> Optional[OptionSpec]:
    """Look an option up by its exact `-x` or `--name` form."""
    for spec in OPTIONS.values():
        if flag in (spec.short_flag, spec.long_flag):
            return spec
    return None


__all__ = ["OptionSpec", "OptionValue", "OPTIONS", "find_option"]
