from __future__ import annotations

import datetime as dt
from typing import Any, Optional

DATE_STAMP_FORMAT = "%Y%m%d"
CLOCK_FORMAT = "%H:%M"

TRUE_WORDS = {"1", "true", "yes", "y", "on"}
FALSE_WORDS = {"0", "false", "no", "n", "off"}


def now() -> dt.datetime:
    return dt.datetime.now().astimezone()


def today_stamp(reference: Optional[dt.date] = None) -> str:
    """Return the given day (default: today) as `yyyymmdd`."""
    return (reference or dt.date.today()).strftime(DATE_STAMP_FORMAT)


def parse_date_stamp(value: str) -> Optional[dt.date]:
    try:
        return dt.datetime.strptime(value.strip(), DATE_STAMP_FORMAT).date()
    except (AttributeError, ValueError):
        return None


def parse_clock(value: str) -> Optional[dt.time]:
    """Parse an `HH:MM` wall-clock time, returning None when it does not look like one."""
    if not isinstance(value, str):
        return None
    hours, sep, minutes = value.strip().partition(":")
    if not sep:
        return None
    try:
        return dt.time(int(hours), int(minutes))
    except ValueError:
        return None


def coerce_int(value: Any, default: int) -> int:
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, int):
        return value
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        return default


def coerce_bool(value: Any, default: bool) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in TRUE_WORDS:
        return True
    if text in FALSE_WORDS:
        return False
    return default


def format_timestamp(value: Optional[dt.datetime]) -> str:
    if value is None:
        return "-"
    return value.astimezone().strftime("%Y-%m-%d %H:%M:%S")
