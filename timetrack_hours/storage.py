"""JSON file persistence for the user's credentials, arrival time and timers."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from .schemas import UserData

logger = logging.getLogger(__name__)


class StorageError(RuntimeError):
    """The user data file exists but cannot be read back."""

    def __init__(self, message: str, *, path: Optional[Path] = None) -> None:
        super().__init__(message)
        self.path = path


class UserDataStore:
    """Loads the user data once and writes it back on demand."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self._data: Optional[UserData] = None

    def get(self) -> UserData:
        if self._data is None:
            self._data = self._load()
        return self._data

    def save(self, data: Optional[UserData] = None) -> None:
        if data is not None:
            self._data = data
        payload = self.get().model_dump_json(indent=2)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        # the data file is only ever replaced whole
        temp_path = self.path.with_name(self.path.name + ".tmp")
        try:
            temp_path.write_text(payload + "\n", encoding="utf-8")
            temp_path.replace(self.path)
        except OSError as exc:
            temp_path.unlink(missing_ok=True)
            raise StorageError(f"Cannot write {self.path}: {exc}", path=self.path) from exc
        logger.debug("Saved user data to %s", self.path)

    def _load(self) -> UserData:
        if not self.path.exists():
            logger.debug("No user data at %s, starting fresh", self.path)
            return UserData()
        try:
            raw = self.path.read_text(encoding="utf-8")
        except OSError as exc:
            raise StorageError(f"Cannot read {self.path}: {exc}", path=self.path) from exc
        if not raw.strip():
            return UserData()
        try:
            return UserData.model_validate_json(raw)
        except ValidationError as exc:
            raise StorageError(f"Invalid user data in {self.path}: {exc}", path=self.path) from exc


__all__ = ["StorageError", "UserDataStore"]
