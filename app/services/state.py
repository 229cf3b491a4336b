"""Session state helpers for the Streamlit storefront shell."""

from __future__ import annotations

import streamlit as st

from zembil_lite.seasonal.propagation import PropagationSink, render_css
from zembil_lite.seasonal.registry import ThemeDefinition
from zembil_lite.seasonal.store import ThemeState, ThemeStateStore
from zembil_lite.settings import (
    CLIENT_ID_PATTERN,
    get_clock,
    get_registry,
    preference_store,
)

from . import telemetry

DEFAULT_CLIENT = "local"
STORE_KEY = "theme_store"
STATE_KEY = "theme_state"
PICKER_KEY = "theme_picker"
MODE_TOGGLE_KEY = "seasonal_mode_toggle"
HOST_SELECTOR = ".stApp"


def _client_from_query() -> str:
    raw = st.query_params.get("client", DEFAULT_CLIENT)
    if isinstance(raw, list):  # pragma: no cover - older query param API
        raw = raw[0] if raw else DEFAULT_CLIENT
    if not CLIENT_ID_PATTERN.match(str(raw)):
        return DEFAULT_CLIENT
    return str(raw)


def ensure_session() -> None:
    """Initialise Streamlit session state with sane defaults."""

    st.session_state.setdefault("dark_mode", False)
    st.session_state.setdefault("client_id", _client_from_query())


def _remember_state(state: ThemeState) -> None:
    st.session_state[STATE_KEY] = state


def _sync_widgets(store: ThemeStateStore) -> None:
    st.session_state[PICKER_KEY] = store.current_theme.id
    st.session_state[MODE_TOGGLE_KEY] = store.is_seasonal_mode


def get_store() -> ThemeStateStore:
    """Return the session's theme store, building and initialising it once."""

    ensure_session()
    client_id = st.session_state["client_id"]
    store = st.session_state.get(STORE_KEY)
    if isinstance(store, ThemeStateStore) and st.session_state.get("store_client") == client_id:
        return store
    store = ThemeStateStore(
        get_registry(),
        preference_store(client_id),
        sink=PropagationSink(),
        clock=get_clock(),
    )
    store.subscribe(_remember_state)
    state = store.initialize()
    st.session_state[STORE_KEY] = store
    st.session_state["store_client"] = client_id
    _sync_widgets(store)
    telemetry.log_event(
        "theme.initialized",
        {"theme": state.current_theme.id, "seasonal_mode": state.is_seasonal_mode},
        session=st.session_state,
    )
    return store


def current_state() -> ThemeState:
    """Return the latest state snapshot published by the store."""

    state = st.session_state.get(STATE_KEY)
    if isinstance(state, ThemeState):
        return state
    return get_store().snapshot()


def active_seasonal_theme() -> ThemeDefinition | None:
    """Theme the calendar selects today, whatever the client picked."""

    return get_store().get_active_seasonal_theme()


def select_theme(theme_id: str) -> bool:
    """Pick ``theme_id`` for this client; unknown ids are ignored."""

    changed = get_store().set_theme(theme_id)
    if changed:
        telemetry.log_event(
            "theme.selected", {"theme": theme_id}, session=st.session_state
        )
    return changed


def toggle_seasonal_mode() -> bool:
    """Flip seasonal mode for this client and return the new value."""

    store = get_store()
    enabled = store.toggle_seasonal_mode()
    _sync_widgets(store)
    telemetry.log_event(
        "theme.mode_toggled",
        {"theme": store.current_theme.id, "seasonal_mode": enabled},
        session=st.session_state,
    )
    return enabled


def theme_css() -> str:
    """Return the CSS block for the theme currently propagated."""

    return render_css(get_store().sink.scope, host=HOST_SELECTOR)


def theme_tag() -> str | None:
    """Return the ``theme-<id>`` class currently propagated."""

    return get_store().sink.scope.theme_tag


__all__ = [
    "active_seasonal_theme",
    "current_state",
    "ensure_session",
    "get_store",
    "select_theme",
    "theme_css",
    "theme_tag",
    "toggle_seasonal_mode",
]
