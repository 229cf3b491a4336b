"""Push the resolved theme into the shared presentation surface."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

from .registry import PALETTE_KEYS, ThemeDefinition

VARIABLE_PREFIX = "--seasonal-"
THEME_CLASS_PREFIX = "theme-"


def variable_name(palette_key: str) -> str:
    return f"{VARIABLE_PREFIX}{palette_key}"


def theme_class(theme_id: str) -> str:
    return f"{THEME_CLASS_PREFIX}{theme_id}"


@dataclass
class StyleScope:
    """Root style scope: CSS custom properties plus the root class list."""

    variables: dict[str, str] = field(default_factory=dict)
    root_classes: list[str] = field(default_factory=list)

    @property
    def theme_tag(self) -> str | None:
        """The single ``theme-*`` class currently on the root, if any."""

        for name in self.root_classes:
            if name.startswith(THEME_CLASS_PREFIX):
                return name
        return None


class ThemeSink(Protocol):
    def apply(self, theme: ThemeDefinition) -> None: ...


class PropagationSink:
    """Write a theme's palette and tag into a ``StyleScope``.

    ``apply`` is idempotent: every call overwrites the five palette variables
    and replaces whatever ``theme-*`` class was there before, leaving
    unrelated classes alone.
    """

    def __init__(self, scope: StyleScope | None = None) -> None:
        self.scope = scope if scope is not None else StyleScope()

    def apply(self, theme: ThemeDefinition) -> None:
        for key, value in theme.palette.items():
            self.scope.variables[variable_name(key)] = value
        kept = [
            name
            for name in self.scope.root_classes
            if not name.startswith(THEME_CLASS_PREFIX)
        ]
        kept.append(theme_class(theme.id))
        self.scope.root_classes[:] = kept


def css_variables(theme: ThemeDefinition) -> dict[str, str]:
    return {variable_name(key): value for key, value in theme.palette.items()}


def render_css(scope: StyleScope, *, host: str | None = None) -> str:
    """Render ``scope`` as a ``<style>``-ready CSS block.

    ``host`` names a container selector that is themed whenever it holds an
    element carrying the theme class, for renderers that cannot tag ``body``.
    """

    lines = [":root {"]
    for key in PALETTE_KEYS:
        name = variable_name(key)
        if name in scope.variables:
            lines.append(f"  {name}: {scope.variables[name]};")
    lines.append("}")
    tag = scope.theme_tag
    if tag:
        selectors = [f"body.{tag}", f".{tag}"]
        if host:
            selectors.append(f"{host}:has(.{tag})")
        lines.append(
            f"{', '.join(selectors)} {{"
            f" background: var({variable_name('background')});"
            f" color: var({variable_name('text')}); }}"
        )
    return "\n".join(lines)


def render_theme_css(theme: ThemeDefinition) -> str:
    """Shortcut rendering a fresh scope with only ``theme`` applied."""

    sink = PropagationSink()
    sink.apply(theme)
    return render_css(sink.scope)


def preview_gradient(theme: ThemeDefinition) -> str:
    palette = theme.palette
    return f"linear-gradient(135deg, {palette.primary}, {palette.secondary})"


__all__ = [
    "PropagationSink",
    "StyleScope",
    "THEME_CLASS_PREFIX",
    "ThemeSink",
    "VARIABLE_PREFIX",
    "css_variables",
    "preview_gradient",
    "render_css",
    "render_theme_css",
    "theme_class",
    "variable_name",
]
