"""Single owner of the seasonal theme state.

The store reconciles three inputs into one ``ThemeState``: what the user
persisted last time, what the calendar says (via ``resolve_active``) and what
the user does now (``set_theme`` / ``toggle_seasonal_mode``). Each mutation
persists, re-propagates and notifies subscribers before returning.

Activation is only evaluated at ``initialize`` and when seasonal mode is
switched on; a window boundary crossed while the process keeps running is
picked up at the next initialise or toggle.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Callable

from .persistence import (
    CURRENT_THEME_KEY,
    SEASONAL_MODE_KEY,
    PersistenceAdapter,
    decode_bool,
    encode_bool,
)
from .propagation import ThemeSink
from .registry import ThemeDefinition, ThemeRegistry
from .resolver import resolve_active

_logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]
Subscriber = Callable[["ThemeState"], None]


@dataclass
class ThemeState:
    """Current theme plus whether date-driven activation is allowed."""

    current_theme: ThemeDefinition
    is_seasonal_mode: bool = False

    @property
    def shows_decorations(self) -> bool:
        """Seasonal glyphs and badges only render for a non-default theme in seasonal mode."""

        return self.is_seasonal_mode and not self.current_theme.is_default


class ThemeStateStore:
    """Mediates every read and write of the process-wide ``ThemeState``."""

    def __init__(
        self,
        registry: ThemeRegistry,
        persistence: PersistenceAdapter,
        sink: ThemeSink | None = None,
        clock: Clock | None = None,
    ) -> None:
        self.registry = registry
        self.persistence = persistence
        self.sink = sink
        self.clock: Clock = clock or datetime.now
        self._state = ThemeState(current_theme=registry.default)
        self._subscribers: list[Subscriber] = []
        self._lock = threading.RLock()
        self.initialized = False

    # ------------------------------------------------------------------ reads
    @property
    def current_theme(self) -> ThemeDefinition:
        return self._state.current_theme

    @property
    def is_seasonal_mode(self) -> bool:
        return self._state.is_seasonal_mode

    @property
    def available_themes(self) -> tuple[ThemeDefinition, ...]:
        return self.registry.themes

    def snapshot(self) -> ThemeState:
        with self._lock:
            return replace(self._state)

    def get_active_seasonal_theme(self) -> ThemeDefinition | None:
        """Return the theme the calendar selects right now, without mutating."""

        return resolve_active(self.clock(), self.registry)

    # -------------------------------------------------------------- lifecycle
    def initialize(self) -> ThemeState:
        """Restore persisted choices and reconcile them with the calendar."""

        with self._lock:
            active = self.get_active_seasonal_theme()
            raw_mode = self.persistence.get(SEASONAL_MODE_KEY)
            seasonal_mode = decode_bool(raw_mode)
            if seasonal_mode is None:
                if raw_mode is not None:
                    _logger.warning("Ignoring corrupted seasonal mode %r", raw_mode)
                seasonal_mode = active is not None
                if seasonal_mode:
                    self._persist(SEASONAL_MODE_KEY, encode_bool(True))

            theme = self.registry.default
            if seasonal_mode:
                saved_id = self.persistence.get(CURRENT_THEME_KEY)
                saved = self.registry.get(saved_id)
                if saved_id is not None and saved is None:
                    _logger.warning("Ignoring unknown persisted theme %r", saved_id)
                theme = saved or active or self.registry.default

            self._state = ThemeState(current_theme=theme, is_seasonal_mode=seasonal_mode)
            self.initialized = True
            _logger.info(
                "Theme state initialised: theme=%s seasonal_mode=%s",
                theme.id,
                seasonal_mode,
            )
            return self._commit()

    # -------------------------------------------------------------- mutators
    def set_theme(self, theme_id: str) -> bool:
        """Pick ``theme_id`` explicitly; unknown ids leave the state untouched."""

        with self._lock:
            theme = self.registry.get(theme_id)
            if theme is None:
                _logger.debug("set_theme ignored unknown theme %r", theme_id)
                return False
            self._state.current_theme = theme
            self._persist(CURRENT_THEME_KEY, theme.id)
            self._commit()
            return True

    def toggle_seasonal_mode(self) -> bool:
        """Flip seasonal mode and return the new value.

        Switching on adopts the calendar's active theme when there is one and
        otherwise keeps the current theme. Switching off resets to the
        default theme.
        """

        with self._lock:
            enabled = not self._state.is_seasonal_mode
            self._state.is_seasonal_mode = enabled
            self._persist(SEASONAL_MODE_KEY, encode_bool(enabled))
            if enabled:
                active = self.get_active_seasonal_theme()
                if active is not None:
                    self._state.current_theme = active
            else:
                self._state.current_theme = self.registry.default
            self._commit()
            return enabled

    # ---------------------------------------------------------- subscriptions
    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register ``callback`` for state snapshots; returns an unsubscribe hook."""

        with self._lock:
            self._subscribers.append(callback)

        def _unsubscribe() -> None:
            with self._lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

        return _unsubscribe

    # --------------------------------------------------------------- helpers
    def _persist(self, key: str, value: str) -> None:
        try:
            self.persistence.set(key, value)
        except OSError as exc:
            _logger.error("Could not persist %s=%s: %s", key, value, exc)

    def _commit(self) -> ThemeState:
        if self.sink is not None:
            self.sink.apply(self._state.current_theme)
        snapshot = replace(self._state)
        for callback in list(self._subscribers):
            try:
                callback(snapshot)
            except Exception:
                _logger.exception("Theme subscriber %r failed", callback)
        return snapshot


__all__ = ["Clock", "Subscriber", "ThemeState", "ThemeStateStore"]
