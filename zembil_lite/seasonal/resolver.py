"""Date-window activation for seasonal themes."""

from __future__ import annotations

from datetime import date
from typing import Iterable

from .registry import MonthDay, SeasonWindow, ThemeDefinition


def month_day(value: date) -> MonthDay:
    """Strip the year from ``value`` (a ``date`` or ``datetime``)."""

    return MonthDay(value.month, value.day)


def window_contains(window: SeasonWindow, today: MonthDay) -> bool:
    """Return whether ``today`` falls inside ``window``.

    Windows whose end precedes their start wrap around the new year, so
    Dec 21 -> Mar 20 matches both late December and early March.
    """

    if window.wraps_year:
        return today >= window.start or today <= window.end
    return window.start <= today <= window.end


def active_themes(now: date, registry: Iterable[ThemeDefinition]) -> list[ThemeDefinition]:
    """Return every non-default theme whose window matches ``now``, in order."""

    today = month_day(now)
    return [
        theme
        for theme in registry
        if not theme.is_default
        and theme.window is not None
        and window_contains(theme.window, today)
    ]


def resolve_active(
    now: date, registry: Iterable[ThemeDefinition]
) -> ThemeDefinition | None:
    """Return the seasonal theme active on ``now`` or ``None``.

    Overlapping windows are settled by registry order: the first declared
    theme wins. That ordering is not a documented product rule.
    """

    today = month_day(now)
    for theme in registry:
        if theme.is_default or theme.window is None:
            continue
        if window_contains(theme.window, today):
            return theme
    return None


__all__ = ["active_themes", "month_day", "resolve_active", "window_contains"]
