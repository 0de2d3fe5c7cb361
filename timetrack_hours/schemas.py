from __future__ import annotations

import datetime as dt
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class TeamworkCredentials(BaseModel):
    model_config = ConfigDict(validate_assignment=True)
    key: str = ""
    url: str = ""

    @field_validator("key", "url", mode="before")
    @classmethod
    def _strip(cls, value: Optional[str]) -> str:
        return value.strip() if isinstance(value, str) else ""


class TimerRecord(BaseModel):
    """Persisted state of one named timer."""

    started: Optional[dt.datetime] = None
    duration: dt.timedelta = Field(default_factory=dt.timedelta)

    @property
    def running(self) -> bool:
        return self.started is not None


class UserData(BaseModel):
    teamwork: TeamworkCredentials = Field(default_factory=TeamworkCredentials)
    arrived: Optional[dt.datetime] = None
    timers: Dict[str, TimerRecord] = Field(default_factory=dict)


__all__ = ["TeamworkCredentials", "TimerRecord", "UserData"]
