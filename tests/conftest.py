from __future__ import annotations

from datetime import date, datetime, time

import pytest
from zembil_lite.seasonal.registry import (
    MonthDay,
    Palette,
    SeasonWindow,
    ThemeDefinition,
    ThemeRegistry,
    default_registry,
)

PALETTE = Palette("#111111", "#222222", "#333333", "#444444", "#555555")


def make_theme(theme_id: str, start: str | None = None, end: str | None = None) -> ThemeDefinition:
    window = None
    if start and end:
        window = SeasonWindow(MonthDay.parse(start), MonthDay.parse(end))
    return ThemeDefinition(
        id=theme_id,
        display_name=theme_id.title(),
        description=f"{theme_id} theme",
        palette=PALETTE,
        decorations=(f"{theme_id}-glyph",),
        window=window,
    )


def fixed_clock(day: date):
    return lambda: datetime.combine(day, time(9, 30))


@pytest.fixture
def small_registry() -> ThemeRegistry:
    """default + timkat (Jan 19-21) + winter (Dec 21 -> Mar 20)."""

    return ThemeRegistry(
        (
            make_theme("default"),
            make_theme("timkat", "01-19", "01-21"),
            make_theme("winter", "12-21", "03-20"),
        )
    )


@pytest.fixture
def bundled_registry() -> ThemeRegistry:
    return default_registry()


@pytest.fixture(autouse=True)
def isolated_storage(tmp_path, monkeypatch):
    monkeypatch.setenv("ZEMBIL_STORAGE_PATH", str(tmp_path / "storage"))
    monkeypatch.delenv("ZEMBIL_TODAY", raising=False)
    monkeypatch.delenv("ZEMBIL_THEMES_FILE", raising=False)
    monkeypatch.setenv("ZEMBIL_TELEMETRY", "0")
    return tmp_path / "storage"
