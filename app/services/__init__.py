"""Namespace package for Zembil storefront services."""

from . import state, telemetry, themes_loader

__all__ = [
    "state",
    "telemetry",
    "themes_loader",
]
