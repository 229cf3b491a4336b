"""Key-value stores that keep the theme choice across reloads."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Protocol, runtime_checkable

_logger = logging.getLogger(__name__)

SEASONAL_MODE_KEY = "seasonalMode"
CURRENT_THEME_KEY = "currentTheme"


@runtime_checkable
class PersistenceAdapter(Protocol):
    """Durable string key-value contract used by ``ThemeStateStore``."""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


class MemoryStore:
    """Dictionary backed store, handy for tests and throwaway sessions."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self.data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = str(value)

    def remove(self, key: str) -> None:
        self.data.pop(key, None)


class JsonFileStore:
    """Persist keys as a flat JSON object on disk.

    Every ``set``/``remove`` rewrites the file before returning. Unreadable
    or malformed files are treated as empty.
    """

    def __init__(self, path: Path | str) -> None:
        self.path = Path(path).expanduser()

    def _load(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with self.path.open("r", encoding="utf-8") as handle:
                data = json.load(handle)
        except (OSError, json.JSONDecodeError) as exc:
            _logger.warning("Ignoring unreadable theme state %s: %s", self.path, exc)
            return {}
        if not isinstance(data, dict):
            _logger.warning("Ignoring theme state %s: expected a JSON object", self.path)
            return {}
        return {str(key): str(value) for key, value in data.items() if value is not None}

    def _save(self, data: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        with tmp_path.open("w", encoding="utf-8") as handle:
            json.dump(data, handle, indent=2, ensure_ascii=False)
        tmp_path.replace(self.path)

    def get(self, key: str) -> str | None:
        return self._load().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._load()
        data[key] = str(value)
        self._save(data)

    def remove(self, key: str) -> None:
        data = self._load()
        if key in data:
            del data[key]
            self._save(data)

    def as_dict(self) -> dict[str, str]:
        return self._load()


def encode_bool(value: bool) -> str:
    return "true" if value else "false"


def decode_bool(raw: str | None) -> bool | None:
    """Decode a persisted ``"true"``/``"false"``; anything else is ``None``."""

    if raw == "true":
        return True
    if raw == "false":
        return False
    return None


__all__ = [
    "CURRENT_THEME_KEY",
    "JsonFileStore",
    "MemoryStore",
    "PersistenceAdapter",
    "SEASONAL_MODE_KEY",
    "decode_bool",
    "encode_bool",
]
