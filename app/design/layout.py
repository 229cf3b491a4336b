"""Layout primitives for rendering the Streamlit storefront shell."""

from __future__ import annotations

from typing import Callable

import streamlit as st

from zembil_lite.seasonal.store import ThemeState

from ..services import state, telemetry
from .components import alert, decoration_strip, seasonal_badge, theme_card, theme_root
from .theme import get_theme


def _apply_theme(theme_state: ThemeState, dark: bool) -> None:
    seasonal = theme_state.current_theme if theme_state.shows_decorations else None
    theme = get_theme(dark, seasonal)
    st.markdown(
        f"""
        <style>
        {state.theme_css()}
        body {{
            background: {theme['colors']['background']};
            color: {theme['colors']['text']};
            font-family: {theme['typography']['family']};
        }}
        .stApp header {{ background: transparent; }}
        </style>
        """,
        unsafe_allow_html=True,
    )


def _on_theme_picked() -> None:
    state.select_theme(st.session_state[state.PICKER_KEY])


def _render_theme_picker(theme_state: ThemeState) -> None:
    store = state.get_store()
    active = state.active_seasonal_theme()
    current_id = theme_state.current_theme.id
    # Widget values live in session state; the store writes them on change.
    st.session_state.setdefault(state.MODE_TOGGLE_KEY, theme_state.is_seasonal_mode)
    st.session_state.setdefault(state.PICKER_KEY, current_id)

    st.sidebar.subheader("Seasonal themes")
    st.sidebar.checkbox(
        "Seasonal mode",
        key=state.MODE_TOGGLE_KEY,
        on_change=state.toggle_seasonal_mode,
    )
    if active is not None:
        st.sidebar.caption(f"{active.display_name} is currently active")
    else:
        st.sidebar.caption("Automatically switch themes for Ethiopian celebrations")

    st.sidebar.selectbox(
        "Theme",
        options=[theme.id for theme in store.available_themes],
        format_func=lambda key: store.registry.get(key).display_name,
        key=state.PICKER_KEY,
        on_change=_on_theme_picked,
    )

    with st.sidebar.expander("Preview themes"):
        for theme in store.available_themes:
            theme_card(
                theme,
                is_current=theme.id == current_id,
                is_active_now=active is not None and theme.id == active.id,
            )


def _render_sidebar(theme_state: ThemeState) -> None:
    _render_theme_picker(theme_state)

    st.sidebar.subheader("Privacy")
    opt_in_default = telemetry.is_enabled(st.session_state)
    enabled = st.sidebar.checkbox(
        "Share anonymous theme usage",
        value=bool(opt_in_default),
        key="telemetry_toggle",
    )
    telemetry.set_opt_in(st.session_state, enabled)


def render_shell(page_fn: Callable[[ThemeState], None], *, title: str, dark: bool) -> bool:
    """Render the shared layout and execute ``page_fn`` within it.

    Returns
    -------
    bool
        ``True`` when the user requested a light/dark toggle.
    """

    state.ensure_session()
    state.get_store()
    st.session_state["dark_mode"] = dark

    theme_state = state.current_state()
    _render_sidebar(theme_state)
    _apply_theme(theme_state, dark)

    st.title(title)
    cols = st.columns([6, 2, 2])
    with cols[0]:
        theme_root(state.theme_tag())
        seasonal_badge(theme_state)
        decoration_strip(theme_state)
    with cols[1]:
        if theme_state.is_seasonal_mode and not theme_state.shows_decorations:
            alert("info", "No celebration right now")
    toggle = False
    with cols[2]:
        label = "Light mode" if dark else "Dark mode"
        if st.button(label, key="toggle_dark"):
            toggle = True
    page_fn(theme_state)
    return toggle
