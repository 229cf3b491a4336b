from __future__ import annotations

import contextlib
import io
import json
from pathlib import Path

import pytest
from zembil_lite.cli import main


def _run_cli(args: list[str]) -> str:
    buffer = io.StringIO()
    with contextlib.redirect_stdout(buffer):
        main(args)
    return buffer.getvalue()


def test_themes_list_and_active() -> None:
    listing = _run_cli(["themes", "list"])
    assert listing.splitlines()[0].startswith("default")
    assert "12-21 -> 03-20" in listing

    payload = json.loads(_run_cli(["themes", "list", "--json"]))
    assert payload[7]["id"] == "winter"

    assert _run_cli(["themes", "active", "--date", "2025-01-20"]).strip() == "timkat"
    assert _run_cli(["themes", "active", "--date", "2025-05-01"]).strip() == "none"
    overlaps = json.loads(_run_cli(["themes", "active", "--date", "2025-10-02", "--all"]))
    assert overlaps == ["meskel", "irreecha"]


def test_themes_active_uses_pinned_today(monkeypatch) -> None:
    monkeypatch.setenv("ZEMBIL_TODAY", "2025-09-12")
    assert _run_cli(["themes", "active"]).strip() == "enkutatash"


def test_themes_css_rejects_unknown_theme() -> None:
    assert "--seasonal-accent: #FF4500;" in _run_cli(["themes", "css", "--theme", "irreecha"])
    with pytest.raises(SystemExit):
        _run_cli(["themes", "css", "--theme", "nope"])


def test_bad_date_is_rejected() -> None:
    with pytest.raises(SystemExit):
        _run_cli(["themes", "active", "--date", "20-01-2025"])


def test_state_commands_share_a_store(tmp_path: Path) -> None:
    store = tmp_path / "state.json"
    common = ["--store", str(store), "--date", "2025-05-01"]

    shown = json.loads(_run_cli(["state", "show", *common]))
    assert shown["is_seasonal_mode"] is False
    assert shown["current_theme"] == "default"
    assert shown["active_seasonal_theme"] is None

    picked = json.loads(_run_cli(["state", "set", "timkat", *common]))
    assert picked["current_theme"] == "timkat"
    assert picked["is_seasonal_mode"] is False
    assert json.loads(store.read_text(encoding="utf-8"))["currentTheme"] == "timkat"

    # With seasonal mode off a reload starts from the default theme again.
    toggled = json.loads(_run_cli(["state", "toggle", *common]))
    assert toggled["is_seasonal_mode"] is True
    assert toggled["current_theme"] == "default"

    again = json.loads(_run_cli(["state", "show", "--css", *common]))
    assert again["current_theme"] == "timkat"
    assert again["shows_decorations"] is True
    assert "theme-timkat" in again["css"]


def test_state_set_unknown_theme(tmp_path: Path, capsys) -> None:
    store = tmp_path / "state.json"
    out = json.loads(_run_cli(["state", "set", "ghost", "--store", str(store), "--date", "2025-01-20"]))
    assert out["current_theme"] == "timkat"
    assert "Unknown theme 'ghost'" in capsys.readouterr().err
