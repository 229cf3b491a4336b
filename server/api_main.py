"""FastAPI application exposing the seasonal theming engine."""

from __future__ import annotations

from datetime import date, datetime
from typing import Callable

from fastapi import Depends, FastAPI, HTTPException, Path, Query, Response, status
from fastapi.middleware.cors import CORSMiddleware

from zembil_lite import __version__
from zembil_lite.seasonal.propagation import render_theme_css
from zembil_lite.seasonal.resolver import active_themes, resolve_active
from zembil_lite.settings import get_clock as settings_clock
from zembil_lite.settings import get_registry

from . import storage
from .models import ActiveThemeResponse, PreferenceState, ThemeInfo, ThemeSelection

CLIENT_ID_REGEX = r"^[A-Za-z0-9_-]{1,64}$"

app = FastAPI(title="Zembil Seasonal Theme API", version=__version__)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def get_clock() -> Callable[[], datetime]:
    """Clock used to resolve "now"; overridable through dependency_overrides."""

    return settings_clock()


@app.get("/health")
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/themes", response_model=list[ThemeInfo])
async def list_themes() -> list[ThemeInfo]:
    return [storage.theme_info(theme) for theme in get_registry()]


@app.get("/themes/active", response_model=ActiveThemeResponse)
async def active_theme(
    on: date | None = Query(None, description="Day to resolve, defaults to today"),
    clock: Callable[[], datetime] = Depends(get_clock),
) -> ActiveThemeResponse:
    day = on or clock().date()
    registry = get_registry()
    theme = resolve_active(day, registry)
    return ActiveThemeResponse(
        on=day,
        active=theme.id if theme else None,
        matches=[item.id for item in active_themes(day, registry)],
    )


@app.get("/themes/{theme_id}/css")
async def theme_css(theme_id: str) -> Response:
    theme = get_registry().get(theme_id)
    if theme is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=f"Unknown theme '{theme_id}'"
        )
    return Response(content=render_theme_css(theme), media_type="text/css")


@app.get("/preferences/{client_id}", response_model=PreferenceState)
async def read_preferences(
    client_id: str = Path(..., pattern=CLIENT_ID_REGEX),
    clock: Callable[[], datetime] = Depends(get_clock),
) -> PreferenceState:
    store = storage.open_store(client_id, clock)
    return storage.preference_state(client_id, store)


@app.post("/preferences/{client_id}/theme", response_model=PreferenceState)
async def select_theme(
    selection: ThemeSelection,
    client_id: str = Path(..., pattern=CLIENT_ID_REGEX),
    clock: Callable[[], datetime] = Depends(get_clock),
) -> PreferenceState:
    store = storage.open_store(client_id, clock)
    changed = store.set_theme(selection.theme_id)
    return storage.preference_state(client_id, store, changed=changed)


@app.post("/preferences/{client_id}/toggle", response_model=PreferenceState)
async def toggle_seasonal_mode(
    client_id: str = Path(..., pattern=CLIENT_ID_REGEX),
    clock: Callable[[], datetime] = Depends(get_clock),
) -> PreferenceState:
    store = storage.open_store(client_id, clock)
    store.toggle_seasonal_mode()
    return storage.preference_state(client_id, store)
