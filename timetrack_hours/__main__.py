from __future__ import annotations

import logging
import sys
from typing import Optional, Sequence

from .api_client import TeamworkClient
from .arguments import resolve_arguments
from .config import Settings, load_settings
from .dispatcher import Dispatcher
from .schemas import UserData
from .storage import StorageError, UserDataStore


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="%(asctime)s [%(levelname)s] %(message)s",
        stream=sys.stderr,
    )


def client_factory(settings: Settings):
    def build(user_data: UserData) -> TeamworkClient:
        credentials = user_data.teamwork
        return TeamworkClient(
            credentials.url or settings.teamwork_url or "",
            credentials.key or settings.teamwork_key or "",
            timeout=settings.api_timeout,
        )

    return build


def main(argv: Optional[Sequence[str]] = None) -> int:
    settings = load_settings()
    configure_logging(settings.log_level)
    tokens = list(sys.argv[1:] if argv is None else argv)

    store = UserDataStore(settings.data_file)
    try:
        data = store.get()
        dispatcher = Dispatcher(store, client_factory(settings))
        failures = dispatcher.run(resolve_arguments(tokens))
        store.save(data)
    except StorageError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
