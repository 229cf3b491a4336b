"""State machine behaviour of ThemeStateStore."""

from __future__ import annotations

import logging
from datetime import date

import pytest
from conftest import fixed_clock
from zembil_lite.seasonal.persistence import (
    CURRENT_THEME_KEY,
    SEASONAL_MODE_KEY,
    MemoryStore,
)
from zembil_lite.seasonal.propagation import PropagationSink
from zembil_lite.seasonal.store import ThemeStateStore

JAN_20 = date(2025, 1, 20)
JULY_1 = date(2025, 7, 1)


def _store(registry, day, persisted=None, sink=None):
    persistence = MemoryStore(persisted)
    store = ThemeStateStore(registry, persistence, sink=sink, clock=fixed_clock(day))
    return store, persistence


def test_first_run_inside_window_opts_in(small_registry) -> None:
    store, persistence = _store(small_registry, JAN_20)
    state = store.initialize()
    assert state.is_seasonal_mode is True
    assert state.current_theme.id == "timkat"
    assert persistence.data[SEASONAL_MODE_KEY] == "true"
    assert CURRENT_THEME_KEY not in persistence.data


def test_first_run_outside_any_window(small_registry) -> None:
    store, persistence = _store(small_registry, JULY_1)
    state = store.initialize()
    assert state.is_seasonal_mode is False
    assert state.current_theme.id == "default"
    assert persistence.data == {}


def test_persisted_mode_is_used_verbatim(small_registry) -> None:
    store, _ = _store(
        small_registry, JAN_20, {SEASONAL_MODE_KEY: "false", CURRENT_THEME_KEY: "winter"}
    )
    state = store.initialize()
    assert state.is_seasonal_mode is False
    assert state.current_theme.id == "default"


def test_persisted_theme_wins_in_seasonal_mode(small_registry) -> None:
    store, _ = _store(
        small_registry, JULY_1, {SEASONAL_MODE_KEY: "true", CURRENT_THEME_KEY: "winter"}
    )
    state = store.initialize()
    assert state.is_seasonal_mode is True
    assert state.current_theme.id == "winter"


def test_seasonal_mode_without_saved_theme_uses_calendar(small_registry) -> None:
    store, _ = _store(small_registry, JAN_20, {SEASONAL_MODE_KEY: "true"})
    assert store.initialize().current_theme.id == "timkat"
    store, _ = _store(small_registry, JULY_1, {SEASONAL_MODE_KEY: "true"})
    assert store.initialize().current_theme.id == "default"


def test_unknown_persisted_theme_is_ignored(small_registry, caplog) -> None:
    store, _ = _store(
        small_registry, JAN_20, {SEASONAL_MODE_KEY: "true", CURRENT_THEME_KEY: "ghost"}
    )
    with caplog.at_level(logging.WARNING):
        state = store.initialize()
    assert state.current_theme.id == "timkat"
    assert "ghost" in caplog.text


def test_corrupted_mode_takes_first_run_path(small_registry) -> None:
    store, persistence = _store(small_registry, JAN_20, {SEASONAL_MODE_KEY: "yes"})
    state = store.initialize()
    assert state.is_seasonal_mode is True
    assert persistence.data[SEASONAL_MODE_KEY] == "true"

    store, persistence = _store(small_registry, JULY_1, {SEASONAL_MODE_KEY: "1"})
    assert store.initialize().is_seasonal_mode is False
    assert persistence.data[SEASONAL_MODE_KEY] == "1"


def test_set_theme_round_trip_for_every_theme(bundled_registry) -> None:
    store, persistence = _store(bundled_registry, JULY_1)
    store.initialize()
    mode = store.is_seasonal_mode
    for theme in bundled_registry:
        assert store.set_theme(theme.id) is True
        assert store.current_theme.id == theme.id
        assert persistence.data[CURRENT_THEME_KEY] == theme.id
        assert store.is_seasonal_mode == mode


def test_set_unknown_theme_is_a_noop(small_registry) -> None:
    sink = PropagationSink()
    store, persistence = _store(small_registry, JULY_1, sink=sink)
    store.initialize()
    store.set_theme("timkat")
    before = (store.snapshot(), dict(persistence.data), dict(sink.scope.variables))
    assert store.set_theme("does-not-exist") is False
    assert store.snapshot() == before[0]
    assert persistence.data == before[1]
    assert sink.scope.variables == before[2]


def test_manual_pick_keeps_mode_off(small_registry) -> None:
    store, persistence = _store(small_registry, JULY_1)
    store.initialize()
    store.set_theme("timkat")
    assert store.current_theme.id == "timkat"
    assert store.is_seasonal_mode is False
    assert persistence.data[CURRENT_THEME_KEY] == "timkat"


def test_toggle_on_without_active_window_keeps_current_theme(small_registry) -> None:
    store, persistence = _store(small_registry, JULY_1)
    store.initialize()
    store.set_theme("timkat")
    assert store.toggle_seasonal_mode() is True
    assert store.is_seasonal_mode is True
    assert store.current_theme.id == "timkat"
    assert persistence.data[SEASONAL_MODE_KEY] == "true"


def test_toggle_twice_with_active_window(small_registry) -> None:
    store, persistence = _store(small_registry, JAN_20)
    store.initialize()
    assert store.toggle_seasonal_mode() is False
    assert store.current_theme.id == "default"
    assert persistence.data[SEASONAL_MODE_KEY] == "false"
    assert store.toggle_seasonal_mode() is True
    assert store.current_theme.id == "timkat"


def test_toggle_twice_without_active_window(small_registry) -> None:
    store, _ = _store(small_registry, JULY_1)
    store.initialize()
    assert store.toggle_seasonal_mode() is True
    assert store.current_theme.id == "default"
    assert store.toggle_seasonal_mode() is False
    assert store.current_theme.id == "default"


def test_get_active_seasonal_theme_does_not_mutate(small_registry) -> None:
    store, persistence = _store(small_registry, JAN_20, {SEASONAL_MODE_KEY: "false"})
    store.initialize()
    assert store.get_active_seasonal_theme().id == "timkat"
    assert store.current_theme.id == "default"
    assert persistence.data == {SEASONAL_MODE_KEY: "false"}


def test_initialize_propagates_and_notifies(small_registry) -> None:
    sink = PropagationSink()
    store, _ = _store(small_registry, JAN_20, sink=sink)
    seen = []
    unsubscribe = store.subscribe(seen.append)
    store.initialize()
    assert sink.scope.theme_tag == "theme-timkat"
    assert [s.current_theme.id for s in seen] == ["timkat"]

    store.toggle_seasonal_mode()
    assert sink.scope.theme_tag == "theme-default"
    assert seen[-1].is_seasonal_mode is False

    unsubscribe()
    store.set_theme("winter")
    assert len(seen) == 2


def test_snapshots_are_detached(small_registry) -> None:
    store, _ = _store(small_registry, JAN_20)
    snapshot = store.initialize()
    store.toggle_seasonal_mode()
    assert snapshot.current_theme.id == "timkat"
    assert snapshot.shows_decorations is True
    assert store.snapshot().shows_decorations is False


def test_failing_subscriber_does_not_block_others(small_registry, caplog) -> None:
    store, _ = _store(small_registry, JULY_1)
    seen = []

    def broken(_state):
        raise RuntimeError("boom")

    store.subscribe(broken)
    store.subscribe(seen.append)
    with caplog.at_level(logging.ERROR):
        store.set_theme("winter")
    assert store.current_theme.id == "winter"
    assert len(seen) == 1
    assert "boom" in caplog.text


class _ReadOnlyStore(MemoryStore):
    def set(self, key: str, value: str) -> None:
        raise OSError("disk full")


def test_persistence_failure_keeps_in_memory_change(small_registry, caplog) -> None:
    store = ThemeStateStore(small_registry, _ReadOnlyStore(), clock=fixed_clock(JULY_1))
    store.initialize()
    with caplog.at_level(logging.ERROR):
        assert store.set_theme("winter") is True
    assert store.current_theme.id == "winter"
    assert "disk full" in caplog.text


@pytest.mark.parametrize("day", [JAN_20, JULY_1, date(2025, 12, 25)])
def test_mode_off_only_shows_default_or_picked(small_registry, day) -> None:
    store, _ = _store(small_registry, day)
    store.initialize()
    if store.is_seasonal_mode:
        store.toggle_seasonal_mode()
    assert store.current_theme.id == "default"
    store.set_theme("winter")
    assert store.current_theme.id == "winter"
    assert store.snapshot().shows_decorations is False
