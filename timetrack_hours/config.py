"""Configuration for the `hours` command."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

USER_CONFIG_DIR = Path.home() / ".hours"
DEFAULT_DATA_FILE = USER_CONFIG_DIR / "user-data.json"
DEFAULT_API_TIMEOUT = 15


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_prefix="HOURS_", case_sensitive=False, extra="ignore")
    """Runtime configuration read from the environment and an optional `.env` file."""

    data_file: Path = Field(default=DEFAULT_DATA_FILE)
    api_timeout: int = DEFAULT_API_TIMEOUT
    teamwork_url: Optional[str] = None
    teamwork_key: Optional[str] = None
    log_level: str = "WARNING"

    @field_validator("data_file", mode="before")
    @classmethod
    def _expand_data_file(cls, value: str | Path) -> Path:
        return Path(value).expanduser()

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value: Optional[str]) -> str:
        if not value:
            return "WARNING"
        return str(value).strip().upper()


def load_settings() -> Settings:
    """Loads settings, honouring a per-user `.env` in `~/.hours` besides the local one."""

    env_path = USER_CONFIG_DIR / ".env"
    if env_path.exists():
        load_dotenv(env_path)
    return Settings()


__all__ = ["Settings", "load_settings", "DEFAULT_DATA_FILE"]
