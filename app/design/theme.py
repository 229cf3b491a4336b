"""Theme loader merging the seasonal palette into the base design tokens."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any

from app.services.themes_loader import load_theme_yaml, merge_theme, seasonal_override
from zembil_lite.seasonal.registry import ThemeDefinition

THEMES_ROOT = Path(__file__).resolve().parents[1] / "config" / "themes"


@lru_cache(maxsize=4)
def _base_theme() -> dict[str, Any]:
    return load_theme_yaml(THEMES_ROOT / "base.yaml")


@lru_cache(maxsize=4)
def _dark_overrides() -> dict[str, Any]:
    return load_theme_yaml(THEMES_ROOT / "dark.yaml")


def get_theme(
    dark: bool = False,
    seasonal: ThemeDefinition | None = None,
) -> dict[str, Any]:
    """Return the merged design tokens for the given mode.

    A non-default ``seasonal`` theme wins over dark mode for colours.
    """

    theme = dict(_base_theme())
    if dark:
        theme = merge_theme(theme, _dark_overrides())
    if seasonal is not None and not seasonal.is_default:
        theme = merge_theme(theme, seasonal_override(seasonal))
    return theme


__all__ = ["get_theme"]
