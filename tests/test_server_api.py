from __future__ import annotations

from datetime import date, datetime, time

import pytest
from fastapi.testclient import TestClient
from server import api_main


def _pinned(day: date):
    return lambda: (lambda: datetime.combine(day, time(10, 0)))


@pytest.fixture
def client():
    api_main.app.dependency_overrides[api_main.get_clock] = _pinned(date(2025, 1, 20))
    with TestClient(api_main.app) as test_client:
        yield test_client
    api_main.app.dependency_overrides.clear()


def test_catalogue_endpoints(client) -> None:
    assert client.get("/health").json() == {"status": "ok"}

    themes = client.get("/themes").json()
    assert [item["id"] for item in themes][:3] == ["default", "meskel", "timkat"]
    winter = next(item for item in themes if item["id"] == "winter")
    assert winter["window"] == {"start": "12-21", "end": "03-20", "wraps_year": True}
    assert winter["preview"].startswith("linear-gradient(135deg")

    active = client.get("/themes/active").json()
    assert active == {"on": "2025-01-20", "active": "timkat", "matches": ["timkat", "winter"]}
    quiet = client.get("/themes/active", params={"on": "2025-05-01"}).json()
    assert quiet["active"] is None and quiet["matches"] == []

    css = client.get("/themes/genna/css")
    assert css.status_code == 200
    assert css.headers["content-type"].startswith("text/css")
    assert "--seasonal-primary: #DC143C;" in css.text
    assert client.get("/themes/nope/css").status_code == 404


def test_preferences_flow(client, isolated_storage) -> None:
    first = client.get("/preferences/alice").json()
    assert first["is_seasonal_mode"] is True
    assert first["current_theme"]["id"] == "timkat"
    assert first["shows_decorations"] is True
    assert first["theme_class"] == "theme-timkat"
    assert first["css_variables"]["--seasonal-primary"] == "#4A90E2"
    assert (isolated_storage / "preferences" / "alice.json").exists()

    picked = client.post("/preferences/alice/theme", json={"theme_id": "easter"}).json()
    assert picked["current_theme"]["id"] == "easter"
    assert picked["changed"] is True

    ignored = client.post("/preferences/alice/theme", json={"theme_id": "ghost"}).json()
    assert ignored["changed"] is False
    assert ignored["current_theme"]["id"] == "easter"

    off = client.post("/preferences/alice/toggle").json()
    assert off["is_seasonal_mode"] is False
    assert off["current_theme"]["id"] == "default"
    assert off["shows_decorations"] is False

    on = client.post("/preferences/alice/toggle").json()
    assert on["current_theme"]["id"] == "timkat"


def test_clients_are_isolated(client) -> None:
    client.post("/preferences/bob/toggle")
    assert client.get("/preferences/bob").json()["is_seasonal_mode"] is False
    assert client.get("/preferences/carol").json()["is_seasonal_mode"] is True


def test_invalid_client_id(client) -> None:
    assert client.get("/preferences/bad.id").status_code == 422
