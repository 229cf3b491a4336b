"""Pydantic data models for the theming API."""

from __future__ import annotations

from datetime import date
from typing import Optional

from pydantic import BaseModel, Field


class SeasonWindowInfo(BaseModel):
    """Recurring activation window rendered as ``MM-DD`` strings."""

    start: str
    end: str
    wraps_year: bool = False


class ThemeInfo(BaseModel):
    """Public description of a catalogue theme."""

    id: str
    display_name: str
    description: str
    palette: dict[str, str]
    decorations: list[str] = Field(default_factory=list)
    icons: list[str] = Field(default_factory=list)
    window: Optional[SeasonWindowInfo] = None
    preview: str


class ActiveThemeResponse(BaseModel):
    """Which theme the calendar selects on a given day."""

    on: date
    active: Optional[str] = None
    matches: list[str] = Field(default_factory=list)


class ThemeSelection(BaseModel):
    """Payload used when a client picks a theme explicitly."""

    theme_id: str


class PreferenceState(BaseModel):
    """A client's resolved theme state plus what the renderer needs."""

    client_id: str
    is_seasonal_mode: bool
    current_theme: ThemeInfo
    active_seasonal_theme: Optional[str] = None
    shows_decorations: bool
    css_variables: dict[str, str]
    theme_class: Optional[str] = None
    changed: bool = True
