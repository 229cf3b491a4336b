"""Main entry point for the Streamlit storefront shell."""

from __future__ import annotations

import streamlit as st

from app.design.components import card
from app.design.layout import render_shell
from zembil_lite.seasonal.store import ThemeState

FEATURED_GIFTS: list[tuple[str, str]] = [
    ("Coffee ceremony set", "Jebena, cups and roasted Yirgacheffe beans."),
    ("Habesha scarf", "Hand-woven netela with a tibeb border."),
    ("Honey & spice basket", "Tigray white honey with mitmita and berbere."),
]


def _render_home(theme_state: ThemeState) -> None:
    st.subheader("Featured gifts")
    cols = st.columns(len(FEATURED_GIFTS))
    for col, (name, blurb) in zip(cols, FEATURED_GIFTS):
        with col:
            card(name, blurb, state=theme_state)


def main() -> None:
    st.set_page_config(page_title="goZembil", layout="wide")
    dark_mode = st.session_state.get("dark_mode", False)
    toggle = render_shell(_render_home, title="goZembil gifts", dark=dark_mode)
    if toggle:
        st.session_state["dark_mode"] = not dark_mode
        st.rerun()


if __name__ == "__main__":  # pragma: no cover - manual run
    main()
