"""Seasonal theming engine: registry, activation, state, persistence."""

from .persistence import (
    CURRENT_THEME_KEY,
    SEASONAL_MODE_KEY,
    JsonFileStore,
    MemoryStore,
    PersistenceAdapter,
)
from .propagation import PropagationSink, StyleScope, render_css, render_theme_css
from .registry import (
    DEFAULT_THEME_ID,
    MonthDay,
    Palette,
    RegistryError,
    SeasonWindow,
    ThemeDefinition,
    ThemeRegistry,
    default_registry,
    load_registry,
)
from .resolver import active_themes, resolve_active
from .store import ThemeState, ThemeStateStore

__all__ = [
    "CURRENT_THEME_KEY",
    "DEFAULT_THEME_ID",
    "JsonFileStore",
    "MemoryStore",
    "MonthDay",
    "Palette",
    "PersistenceAdapter",
    "PropagationSink",
    "RegistryError",
    "SEASONAL_MODE_KEY",
    "SeasonWindow",
    "StyleScope",
    "ThemeDefinition",
    "ThemeRegistry",
    "ThemeState",
    "ThemeStateStore",
    "active_themes",
    "default_registry",
    "load_registry",
    "render_css",
    "render_theme_css",
    "resolve_active",
]
