"""Environment driven settings shared by the CLI, API and dashboard."""

from __future__ import annotations

import logging
import os
import re
from datetime import date, datetime, time
from pathlib import Path
from typing import Callable

from .seasonal.persistence import JsonFileStore
from .seasonal.registry import ThemeRegistry, default_registry

STORAGE_ENV = "ZEMBIL_STORAGE_PATH"
THEMES_ENV = "ZEMBIL_THEMES_FILE"
LOG_LEVEL_ENV = "ZEMBIL_LOG_LEVEL"
TODAY_ENV = "ZEMBIL_TODAY"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
CLIENT_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]{1,64}$")


def get_storage_base() -> Path:
    """Return the root directory for persisted theme state."""

    env_value = os.environ.get(STORAGE_ENV)
    if env_value:
        base = Path(env_value).expanduser()
    else:
        base = Path.cwd() / "zembil_storage"
    base.mkdir(parents=True, exist_ok=True)
    return base


def get_registry() -> ThemeRegistry:
    """Return the catalogue named by ``ZEMBIL_THEMES_FILE`` or the bundled one."""

    return default_registry(os.environ.get(THEMES_ENV) or None)


def preference_store(client_id: str) -> JsonFileStore:
    """Return the JSON store holding one client's theme preferences."""

    if not CLIENT_ID_PATTERN.match(client_id):
        raise ValueError(f"Invalid client id '{client_id}'")
    return JsonFileStore(get_storage_base() / "preferences" / f"{client_id}.json")


def get_clock() -> Callable[[], datetime]:
    """Return the clock for "now"; ``ZEMBIL_TODAY`` pins it to a fixed day."""

    pinned = os.environ.get(TODAY_ENV)
    if not pinned:
        return datetime.now
    day = date.fromisoformat(pinned)
    return lambda: datetime.combine(day, time(12, 0))


def configure_logging(level: str | int | None = None) -> None:
    """Configure root logging once; ``ZEMBIL_LOG_LEVEL`` wins over the default."""

    chosen = level or os.environ.get(LOG_LEVEL_ENV) or "WARNING"
    if isinstance(chosen, str):
        chosen = chosen.upper()
    logging.basicConfig(level=chosen, format=LOG_FORMAT)
    logging.getLogger().setLevel(chosen)


__all__ = [
    "CLIENT_ID_PATTERN",
    "configure_logging",
    "get_clock",
    "get_registry",
    "get_storage_base",
    "preference_store",
]
