"""Theme catalogue: definitions, validation and YAML loading."""

from __future__ import annotations

import calendar
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from typing import Any, Iterable, Iterator, Mapping, NamedTuple, Sequence

import yaml

DEFAULT_THEME_ID = "default"
PALETTE_KEYS = ("primary", "secondary", "accent", "background", "text")
THEME_KEYS = {
    "id",
    "display_name",
    "description",
    "palette",
    "decorations",
    "icons",
    "window",
}
BUNDLED_THEMES = Path(__file__).resolve().parents[1] / "config" / "seasonal_themes.yaml"


class RegistryError(ValueError):
    """Raised when a theme catalogue breaks one of its invariants."""


class MonthDay(NamedTuple):
    """Year-independent calendar day ordered month first."""

    month: int
    day: int

    @classmethod
    def parse(cls, raw: Any) -> "MonthDay":
        """Build a ``MonthDay`` from ``"MM-DD"`` or a ``(month, day)`` pair."""

        if isinstance(raw, str):
            try:
                month_str, day_str = raw.strip().split("-", 1)
                month, day = int(month_str), int(day_str)
            except ValueError as exc:
                raise RegistryError(f"Invalid month-day '{raw}'") from exc
        elif isinstance(raw, Sequence) and len(raw) == 2:
            try:
                month, day = int(raw[0]), int(raw[1])
            except (TypeError, ValueError) as exc:
                raise RegistryError(f"Invalid month-day {raw!r}") from exc
        else:
            raise RegistryError(f"Invalid month-day {raw!r}")
        if not 1 <= month <= 12:
            raise RegistryError(f"Month out of range in {raw!r}")
        # 2000 is a leap year so Feb 29 stays a valid window edge.
        if not 1 <= day <= calendar.monthrange(2000, month)[1]:
            raise RegistryError(f"Day out of range in {raw!r}")
        return cls(month, day)

    def __str__(self) -> str:
        return f"{self.month:02d}-{self.day:02d}"


@dataclass(frozen=True, slots=True)
class SeasonWindow:
    """Recurring annual activation range, inclusive on both ends."""

    start: MonthDay
    end: MonthDay

    @property
    def wraps_year(self) -> bool:
        """``True`` when the window runs across December 31st."""

        return self.start > self.end

    def as_dict(self) -> dict[str, str]:
        return {"start": str(self.start), "end": str(self.end)}


@dataclass(frozen=True, slots=True)
class Palette:
    """The five colours every themed surface reads."""

    primary: str
    secondary: str
    accent: str
    background: str
    text: str

    def items(self) -> list[tuple[str, str]]:
        return [(key, getattr(self, key)) for key in PALETTE_KEYS]

    def as_dict(self) -> dict[str, str]:
        return dict(self.items())


@dataclass(frozen=True, slots=True)
class ThemeDefinition:
    """Immutable description of a seasonal presentation theme."""

    id: str
    display_name: str
    description: str
    palette: Palette
    decorations: tuple[str, ...] = ()
    icons: tuple[str, ...] = ()
    window: SeasonWindow | None = None

    @property
    def is_default(self) -> bool:
        return self.id == DEFAULT_THEME_ID

    @property
    def icon(self) -> str | None:
        """Representative glyph, the first decoration when there is one."""

        return self.decorations[0] if self.decorations else None

    def as_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "display_name": self.display_name,
            "description": self.description,
            "palette": self.palette.as_dict(),
            "decorations": list(self.decorations),
            "icons": list(self.icons),
            "window": self.window.as_dict() if self.window else None,
        }


@dataclass(frozen=True)
class ThemeRegistry:
    """Ordered catalogue of themes with exactly one default entry.

    Declaration order is significant: the activation resolver walks the
    registry front to back and the first theme whose window matches wins.
    """

    themes: tuple[ThemeDefinition, ...]
    _index: dict[str, ThemeDefinition] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        themes = tuple(self.themes)
        if not themes:
            raise RegistryError("Theme registry must not be empty")
        index: dict[str, ThemeDefinition] = {}
        for theme in themes:
            if theme.id in index:
                raise RegistryError(f"Duplicate theme id '{theme.id}'")
            index[theme.id] = theme
        default = index.get(DEFAULT_THEME_ID)
        if default is None:
            raise RegistryError(f"Theme registry needs a '{DEFAULT_THEME_ID}' theme")
        if default.window is not None:
            raise RegistryError("The default theme cannot have an activation window")
        object.__setattr__(self, "themes", themes)
        object.__setattr__(self, "_index", index)

    def __iter__(self) -> Iterator[ThemeDefinition]:
        return iter(self.themes)

    def __len__(self) -> int:
        return len(self.themes)

    def __contains__(self, theme_id: object) -> bool:
        return theme_id in self._index

    @property
    def default(self) -> ThemeDefinition:
        return self._index[DEFAULT_THEME_ID]

    def get(self, theme_id: str | None) -> ThemeDefinition | None:
        """Return the theme registered under ``theme_id`` or ``None``."""

        if theme_id is None:
            return None
        return self._index.get(theme_id)

    def ids(self) -> list[str]:
        return [theme.id for theme in self.themes]


def _text_tuple(value: Any, *, key: str, theme_id: str) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str) or not isinstance(value, Iterable):
        raise RegistryError(f"Theme '{theme_id}': '{key}' must be a list")
    return tuple(str(item) for item in value)


def _parse_window(raw: Any, *, theme_id: str) -> SeasonWindow | None:
    if raw is None:
        return None
    if not isinstance(raw, Mapping) or "start" not in raw or "end" not in raw:
        raise RegistryError(f"Theme '{theme_id}': window needs 'start' and 'end'")
    return SeasonWindow(MonthDay.parse(raw["start"]), MonthDay.parse(raw["end"]))


def theme_from_mapping(data: Mapping[str, Any]) -> ThemeDefinition:
    """Validate a raw catalogue entry and build its ``ThemeDefinition``."""

    unknown = set(data) - THEME_KEYS
    theme_id = str(data.get("id") or "").strip()
    if not theme_id:
        raise RegistryError("Every theme needs a non-empty 'id'")
    if unknown:
        raise RegistryError(f"Theme '{theme_id}': unknown keys {sorted(unknown)}")
    palette_raw = data.get("palette")
    if not isinstance(palette_raw, Mapping):
        raise RegistryError(f"Theme '{theme_id}': 'palette' must be a mapping")
    missing = [key for key in PALETTE_KEYS if not palette_raw.get(key)]
    if missing:
        raise RegistryError(f"Theme '{theme_id}': palette misses {missing}")
    return ThemeDefinition(
        id=theme_id,
        display_name=str(data.get("display_name") or theme_id),
        description=str(data.get("description") or ""),
        palette=Palette(**{key: str(palette_raw[key]) for key in PALETTE_KEYS}),
        decorations=_text_tuple(data.get("decorations"), key="decorations", theme_id=theme_id),
        icons=_text_tuple(data.get("icons"), key="icons", theme_id=theme_id),
        window=_parse_window(data.get("window"), theme_id=theme_id),
    )


def load_registry(path: Path | str) -> ThemeRegistry:
    """Load and validate a theme catalogue YAML file.

    Parameters
    ----------
    path
        YAML file with a top-level ``themes`` list.

    Raises
    ------
    RegistryError
        If the file content breaks a catalogue invariant.
    """

    data = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
    if not isinstance(data, Mapping):
        raise RegistryError("Theme catalogue YAML must contain a mapping")
    entries = data.get("themes")
    if not isinstance(entries, list):
        raise RegistryError("Theme catalogue needs a 'themes' list")
    themes = []
    for entry in entries:
        if not isinstance(entry, Mapping):
            raise RegistryError("Theme entries must be mappings")
        themes.append(theme_from_mapping(entry))
    return ThemeRegistry(tuple(themes))


@lru_cache(maxsize=4)
def _cached_registry(path: str) -> ThemeRegistry:
    return load_registry(Path(path))


def default_registry(path: Path | str | None = None) -> ThemeRegistry:
    """Return the bundled catalogue, or the one at ``path`` when given."""

    target = Path(path) if path is not None else BUNDLED_THEMES
    return _cached_registry(str(target.resolve()))


__all__ = [
    "BUNDLED_THEMES",
    "DEFAULT_THEME_ID",
    "MonthDay",
    "PALETTE_KEYS",
    "Palette",
    "RegistryError",
    "SeasonWindow",
    "ThemeDefinition",
    "ThemeRegistry",
    "default_registry",
    "load_registry",
    "theme_from_mapping",
]
