"""Zembil Lite package initialization."""

from .seasonal import (
    DEFAULT_THEME_ID,
    PropagationSink,
    ThemeDefinition,
    ThemeRegistry,
    ThemeState,
    ThemeStateStore,
    default_registry,
    resolve_active,
)

__version__ = "0.4.0"

__all__ = [
    "DEFAULT_THEME_ID",
    "PropagationSink",
    "ThemeDefinition",
    "ThemeRegistry",
    "ThemeState",
    "ThemeStateStore",
    "__version__",
    "default_registry",
    "resolve_active",
]
