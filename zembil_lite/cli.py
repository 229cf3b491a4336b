"""Command line interface for the Zembil Lite theming toolkit."""

from __future__ import annotations

import argparse
import json
import subprocess
import sys
from datetime import date, datetime, time
from pathlib import Path
from typing import Iterable

from .seasonal.persistence import JsonFileStore
from .seasonal.propagation import PropagationSink, render_css, render_theme_css
from .seasonal.registry import ThemeDefinition
from .seasonal.resolver import active_themes, resolve_active
from .seasonal.store import ThemeState, ThemeStateStore
from .settings import configure_logging, get_clock, get_registry, get_storage_base

APP_ENTRY = Path(__file__).resolve().parents[1] / "app" / "streamlit_app.py"


def parse_date(raw: str) -> date:
    """Parse an ISO ``YYYY-MM-DD`` date."""

    try:
        return date.fromisoformat(raw)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Invalid date '{raw}', expected YYYY-MM-DD.") from exc


def _clock_for(day: date | None):
    if day is None:
        return get_clock()
    return lambda: datetime.combine(day, time(12, 0))


def _window_label(theme: ThemeDefinition) -> str:
    if theme.window is None:
        return "-"
    return f"{theme.window.start} -> {theme.window.end}"


def _state_payload(state: ThemeState, store: ThemeStateStore) -> dict:
    active = store.get_active_seasonal_theme()
    return {
        "current_theme": state.current_theme.id,
        "is_seasonal_mode": state.is_seasonal_mode,
        "active_seasonal_theme": active.id if active else None,
        "shows_decorations": state.shows_decorations,
    }


def _build_store(args: argparse.Namespace) -> ThemeStateStore:
    store_path = args.store or get_storage_base() / "cli_state.json"
    return ThemeStateStore(
        get_registry(),
        JsonFileStore(store_path),
        sink=PropagationSink(),
        clock=_clock_for(args.date),
    )


def cmd_themes_list(args: argparse.Namespace) -> None:
    registry = get_registry()
    if args.json:
        print(json.dumps([theme.as_dict() for theme in registry], ensure_ascii=False, indent=2))
        return
    for theme in registry:
        icon = theme.icon or " "
        print(f"{theme.id:<12} {icon} {theme.display_name:<34} {_window_label(theme)}")


def cmd_themes_active(args: argparse.Namespace) -> None:
    registry = get_registry()
    day = args.date or get_clock()().date()
    if args.all:
        matches = active_themes(day, registry)
        print(json.dumps([theme.id for theme in matches]))
        return
    theme = resolve_active(day, registry)
    print(theme.id if theme else "none")


def cmd_themes_css(args: argparse.Namespace) -> None:
    theme = get_registry().get(args.theme)
    if theme is None:
        raise SystemExit(f"Unknown theme '{args.theme}'")
    print(render_theme_css(theme))


def cmd_state_show(args: argparse.Namespace) -> None:
    store = _build_store(args)
    state = store.initialize()
    payload = _state_payload(state, store)
    if args.css:
        payload["css"] = render_css(store.sink.scope)
    print(json.dumps(payload, ensure_ascii=False, indent=2))


def cmd_state_set(args: argparse.Namespace) -> None:
    store = _build_store(args)
    store.initialize()
    if not store.set_theme(args.theme):
        print(f"Unknown theme '{args.theme}', state unchanged.", file=sys.stderr)
    print(json.dumps(_state_payload(store.snapshot(), store), indent=2))


def cmd_state_toggle(args: argparse.Namespace) -> None:
    store = _build_store(args)
    store.initialize()
    store.toggle_seasonal_mode()
    print(json.dumps(_state_payload(store.snapshot(), store), indent=2))


def cmd_api(args: argparse.Namespace) -> None:
    try:
        import uvicorn
    except ImportError as exc:  # pragma: no cover - optional dependency guard
        raise SystemExit("uvicorn is required to launch the API") from exc

    uvicorn.run(
        "server.api_main:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
    )


def cmd_ui(args: argparse.Namespace) -> None:  # pragma: no cover - spawns streamlit
    command = [sys.executable, "-m", "streamlit", "run", str(APP_ENTRY)]
    if args.port:
        command += ["--server.port", str(args.port)]
    raise SystemExit(subprocess.call(command))


def _add_state_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--store",
        type=Path,
        default=None,
        help="JSON file holding the persisted state (default: storage/cli_state.json).",
    )
    parser.add_argument(
        "--date",
        type=parse_date,
        default=None,
        help="Pretend today is this date (YYYY-MM-DD).",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Zembil Lite seasonal theme CLI")
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (default: ZEMBIL_LOG_LEVEL or WARNING).",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    parser_themes = subparsers.add_parser("themes", help="Inspect the theme catalogue")
    themes_subparsers = parser_themes.add_subparsers(dest="themes_command", required=True)

    parser_list = themes_subparsers.add_parser("list", help="List themes in registry order")
    parser_list.add_argument("--json", action="store_true", help="Emit JSON.")
    parser_list.set_defaults(func=cmd_themes_list)

    parser_active = themes_subparsers.add_parser(
        "active", help="Show the seasonal theme active on a date"
    )
    parser_active.add_argument(
        "--date", type=parse_date, default=None, help="Date to resolve (default: today)."
    )
    parser_active.add_argument(
        "--all",
        action="store_true",
        help="List every matching theme instead of the winning one.",
    )
    parser_active.set_defaults(func=cmd_themes_active)

    parser_css = themes_subparsers.add_parser("css", help="Print the CSS block for a theme")
    parser_css.add_argument("--theme", required=True, help="Theme id.")
    parser_css.set_defaults(func=cmd_themes_css)

    parser_state = subparsers.add_parser("state", help="Drive a persisted theme state")
    state_subparsers = parser_state.add_subparsers(dest="state_command", required=True)

    parser_show = state_subparsers.add_parser("show", help="Initialise and print the state")
    _add_state_options(parser_show)
    parser_show.add_argument("--css", action="store_true", help="Include the CSS block.")
    parser_show.set_defaults(func=cmd_state_show)

    parser_set = state_subparsers.add_parser("set", help="Pick a theme explicitly")
    parser_set.add_argument("theme", help="Theme id.")
    _add_state_options(parser_set)
    parser_set.set_defaults(func=cmd_state_set)

    parser_toggle = state_subparsers.add_parser("toggle", help="Flip seasonal mode")
    _add_state_options(parser_toggle)
    parser_toggle.set_defaults(func=cmd_state_toggle)

    parser_api = subparsers.add_parser("api", help="Run the FastAPI service")
    parser_api.add_argument("--host", default="0.0.0.0", help="Bind host")
    parser_api.add_argument("--port", type=int, default=8000, help="Bind port")
    parser_api.add_argument(
        "--reload",
        action="store_true",
        help="Enable auto-reload (development)",
    )
    parser_api.set_defaults(func=cmd_api)

    parser_ui = subparsers.add_parser("ui", help="Launch the Streamlit storefront shell")
    parser_ui.add_argument("--port", type=int, default=None, help="Streamlit port")
    parser_ui.set_defaults(func=cmd_ui)

    return parser


def main(argv: Iterable[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    configure_logging(args.log_level)
    args.func(args)


if __name__ == "__main__":
    main()
