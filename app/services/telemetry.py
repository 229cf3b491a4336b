"""Opt-in telemetry for theme changes, written as JSONL."""

from __future__ import annotations

import json
import os
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterable, Mapping, MutableMapping
from uuid import uuid4

from zembil_lite.settings import get_storage_base

_LAST_EVENT: ContextVar[dict[str, Any] | None] = ContextVar(
    "telemetry_last", default=None
)
TELEMETRY_ENV = "ZEMBIL_TELEMETRY"
SESSION_KEY = "telemetry_session_id"
ENABLED_KEY = "telemetry_enabled"
LOG_FILENAME = "telemetry.jsonl"


def _env_opt_in() -> bool | None:
    value = os.getenv(TELEMETRY_ENV)
    if value is None:
        return None
    return value not in {"0", "false", "False", "no", "off"}


def ensure_session_id(session: MutableMapping[str, Any] | None = None) -> str:
    """Return a sticky UUID4 used to bucket telemetry sessions."""

    if session is None:
        return os.getenv("ZEMBIL_SESSION_ID", str(uuid4()))
    return str(session.setdefault(SESSION_KEY, str(uuid4())))


def set_opt_in(session: MutableMapping[str, Any], enabled: bool) -> None:
    """Update the opt-in flag stored in ``session``."""

    session[ENABLED_KEY] = bool(enabled)


def is_enabled(session: Mapping[str, Any] | None = None) -> bool:
    """Return whether telemetry should be recorded.

    The environment toggle wins; otherwise the session flag decides and
    telemetry stays off by default.
    """

    env_toggle = _env_opt_in()
    if env_toggle is not None:
        return env_toggle
    if session is not None:
        return bool(session.get(ENABLED_KEY, False))
    return False


def _resolve_log_path(target: Path | str | None) -> Path:
    if target is not None:
        path = Path(target)
        if path.is_dir():
            return (path / LOG_FILENAME).resolve()
        return path.resolve()
    return (get_storage_base() / LOG_FILENAME).resolve()


def _write_event(path: Path, payload: Mapping[str, Any]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("a", encoding="utf-8") as handle:
        handle.write(json.dumps(payload, ensure_ascii=False) + "\n")


def log_event(
    event: str,
    props: Mapping[str, Any] | None = None,
    *,
    session: MutableMapping[str, Any] | None = None,
    target: Path | str | None = None,
) -> None:
    """Persist a telemetry event when enabled."""

    if not is_enabled(session):
        _LAST_EVENT.set(None)
        return

    payload = {
        "ts": datetime.now(timezone.utc).isoformat(),
        "session": ensure_session_id(session),
        "event": event,
        "props": dict(props or {}),
    }
    _write_event(_resolve_log_path(target), payload)
    _LAST_EVENT.set(dict(payload))


def last_event() -> dict[str, Any] | None:
    """Return the last event recorded during this context."""

    return _LAST_EVENT.get()


def iter_events(path: Path | str) -> Iterable[dict[str, Any]]:
    path = Path(path)
    if not path.exists():
        return []
    events: list[dict[str, Any]] = []
    with path.open("r", encoding="utf-8") as handle:
        for line in handle:
            line = line.strip()
            if not line:
                continue
            try:
                events.append(json.loads(line))
            except json.JSONDecodeError:  # pragma: no cover - partial writes
                continue
    return events


def aggregate(path: Path | str) -> dict[str, Any]:
    """Count events and how often each theme ended up applied."""

    summary: dict[str, Any] = {"events": {}, "themes": {}}
    for event in iter_events(path):
        name = event.get("event", "unknown")
        props = event.get("props", {}) or {}
        summary["events"][name] = summary["events"].get(name, 0) + 1
        theme_id = props.get("theme")
        if isinstance(theme_id, str):
            summary["themes"][theme_id] = summary["themes"].get(theme_id, 0) + 1
    return summary


@contextmanager
def telemetry_session(enabled: bool = True) -> Iterator[None]:
    """Context manager to temporarily override telemetry toggle (tests)."""

    previous_env = os.getenv(TELEMETRY_ENV)
    os.environ[TELEMETRY_ENV] = "1" if enabled else "0"
    try:
        yield
    finally:
        if previous_env is None:
            os.environ.pop(TELEMETRY_ENV, None)
        else:
            os.environ[TELEMETRY_ENV] = previous_env
        _LAST_EVENT.set(None)


__all__ = [
    "aggregate",
    "ensure_session_id",
    "is_enabled",
    "iter_events",
    "last_event",
    "log_event",
    "set_opt_in",
    "telemetry_session",
]
