"""Reusable Streamlit UI components that read the resolved seasonal theme."""

from __future__ import annotations

from typing import Any, Literal

import streamlit as st
from streamlit.delta_generator import DeltaGenerator

from zembil_lite.seasonal.propagation import preview_gradient
from zembil_lite.seasonal.registry import ThemeDefinition
from zembil_lite.seasonal.store import ThemeState

from .theme import get_theme


def card(title: str, body: Any, *, state: ThemeState, help: str | None = None) -> DeltaGenerator:
    """Render a card container styled with the current tokens.

    Parameters
    ----------
    title:
        Card title rendered in bold text.
    body:
        Body content to render. Objects are passed directly to ``st.write``.
    state:
        Theme state snapshot; seasonal colours apply only while decorations
        are showing.
    help:
        Optional tooltip text appended to the title.

    Returns
    -------
    streamlit.delta_generator.DeltaGenerator
        Container reference so callers may append extra elements if needed.
    """

    seasonal = state.current_theme if state.shows_decorations else None
    theme = get_theme(st.session_state.get("dark_mode", False), seasonal)
    container = st.container()
    with container:
        st.markdown(
            '<div style="'
            f"background:{theme['colors']['surface']};"
            f" padding:{theme['space']['md']}px;"
            f" border-radius:{theme['radii']['md']}px;"
            f" border:1px solid {theme['colors']['border']};"
            '">',
            unsafe_allow_html=True,
        )
        title_style = theme["typography"]["subtitle_size"]
        title_html = (
            "<div style='font-weight:600;font-size:" f"{title_style}'>" f"{title}</div>"
        )
        st.markdown(title_html, unsafe_allow_html=True)
        if help:
            st.caption(help)
        st.write(body)
        st.markdown("</div>", unsafe_allow_html=True)
    return container


def alert(kind: Literal["info", "success", "warn", "error"], text: str) -> None:
    """Render a semantic alert."""

    mapping = {
        "info": st.info,
        "success": st.success,
        "warn": st.warning,
        "error": st.error,
    }
    mapping.get(kind, st.info)(text)


def seasonal_badge(state: ThemeState) -> str | None:
    """Render the pill naming the seasonal theme; returns its HTML or ``None``."""

    if not state.shows_decorations:
        return None
    theme = state.current_theme
    palette = theme.palette
    trailing = "".join(f" {glyph}" for glyph in theme.icons[:2])
    html = (
        f'<span class="seasonal-badge" style="background:{palette.accent};'
        f"color:{palette.background};padding:2px 10px;border-radius:999px;"
        f'font-size:0.8rem">{theme.icon or ""} {theme.display_name}{trailing}</span>'
    )
    st.markdown(html, unsafe_allow_html=True)
    return html


def theme_root(tag: str | None) -> str | None:
    """Render the marker element carrying the propagated ``theme-<id>`` class."""

    if not tag:
        return None
    html = f'<div class="seasonal-root {tag}" data-theme="{tag}"></div>'
    st.markdown(html, unsafe_allow_html=True)
    return html


def decoration_strip(state: ThemeState, count: int = 3) -> list[str]:
    """Render up to ``count`` decoration glyphs of the current theme."""

    if not state.shows_decorations:
        return []
    glyphs = list(state.current_theme.decorations[:count])
    if glyphs:
        st.markdown(
            f'<div class="seasonal-decorations" style="font-size:1.6rem">{" ".join(glyphs)}</div>',
            unsafe_allow_html=True,
        )
    return glyphs


def theme_card(theme: ThemeDefinition, *, is_current: bool, is_active_now: bool) -> None:
    """Preview tile used by the theme picker."""

    badges = []
    if is_current:
        badges.append("✅ selected")
    if is_active_now:
        badges.append("Active Now")
    swatches = "".join(
        f'<span style="display:inline-block;width:14px;height:14px;border-radius:50%;'
        f'background:{color};border:1px solid #E5E7EB;margin-right:4px"></span>'
        for _, color in theme.palette.items()[:3]
    )
    st.markdown(
        f'<div style="height:64px;border-radius:10px;background:{preview_gradient(theme)};'
        f'display:flex;align-items:center;justify-content:center;font-size:1.5rem">'
        f'{" ".join(theme.decorations[:3])}</div>',
        unsafe_allow_html=True,
    )
    icons = " ".join(theme.icons)
    title = f"**{theme.display_name}**" + (f" {icons}" if icons else "")
    st.markdown(title + (f" · {' · '.join(badges)}" if badges else ""))
    st.caption(theme.description)
    st.markdown(swatches, unsafe_allow_html=True)


__all__ = [
    "alert",
    "card",
    "decoration_strip",
    "seasonal_badge",
    "theme_card",
    "theme_root",
]
