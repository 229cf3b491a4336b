"""Per-client theme state backed by JSON files."""

from __future__ import annotations

from datetime import datetime
from typing import Callable

from zembil_lite.seasonal.propagation import PropagationSink, preview_gradient
from zembil_lite.seasonal.registry import ThemeDefinition
from zembil_lite.seasonal.store import ThemeStateStore
from zembil_lite.settings import get_registry, preference_store

from .models import PreferenceState, SeasonWindowInfo, ThemeInfo


def theme_info(theme: ThemeDefinition) -> ThemeInfo:
    window = None
    if theme.window is not None:
        window = SeasonWindowInfo(
            start=str(theme.window.start),
            end=str(theme.window.end),
            wraps_year=theme.window.wraps_year,
        )
    return ThemeInfo(
        id=theme.id,
        display_name=theme.display_name,
        description=theme.description,
        palette=theme.palette.as_dict(),
        decorations=list(theme.decorations),
        icons=list(theme.icons),
        window=window,
        preview=preview_gradient(theme),
    )


def open_store(
    client_id: str, clock: Callable[[], datetime] | None = None
) -> ThemeStateStore:
    """Build and initialise the store for ``client_id``."""

    store = ThemeStateStore(
        get_registry(),
        preference_store(client_id),
        sink=PropagationSink(),
        clock=clock,
    )
    store.initialize()
    return store


def preference_state(
    client_id: str, store: ThemeStateStore, *, changed: bool = True
) -> PreferenceState:
    state = store.snapshot()
    active = store.get_active_seasonal_theme()
    scope = store.sink.scope
    return PreferenceState(
        client_id=client_id,
        is_seasonal_mode=state.is_seasonal_mode,
        current_theme=theme_info(state.current_theme),
        active_seasonal_theme=active.id if active else None,
        shows_decorations=state.shows_decorations,
        css_variables=dict(scope.variables),
        theme_class=scope.theme_tag,
        changed=changed,
    )
