"""Dashboard API: settings, widget config, layout/theme and daily records."""

from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Query
from pydantic import BaseModel, Field

from Data.database import today, utcnow
from Data.store import RecordStore
from presentation.dependencies import get_store
from services import auth_service, dashboard_service

router = APIRouter()


class ApplyLayout(BaseModel):
    layout_id: str = Field(alias="layoutId", min_length=1)


class ApplyTheme(BaseModel):
    theme_id: str = Field(alias="themeId", min_length=1)


# ---- Settings ------------------------------------------------------------- #

@router.get("/settings")
async def get_settings(
    user_id: str = Depends(auth_service.get_current_user_id),
    store: RecordStore = Depends(get_store),
):
    """Get the user's settings."""
    settings = dashboard_service.get_settings(store, user_id)
    if not settings:
        raise HTTPException(status_code=404, detail="Settings not found")
    return settings


@router.patch("/settings")
async def update_settings(
    body: dict[str, Any] = Body(...),
    user_id: str = Depends(auth_service.get_current_user_id),
    store: RecordStore = Depends(get_store),
):
    """Update settings. Only provided fields are changed."""
    settings = dashboard_service.update_settings(store, user_id, body)
    if not settings:
        raise HTTPException(status_code=404, detail="Settings not found")
    return settings


# ---- Widget configuration & layouts --------------------------------------- #

@router.get("/widget-config")
async def list_widget_configs(
    user_id: str = Depends(auth_service.get_current_user_id),
    store: RecordStore = Depends(get_store),
):
    return dashboard_service.list_widget_configs(store, user_id)


@router.put("/widget-config/{widget_type}")
async def upsert_widget_config(
    widget_type: str,
    body: dict[str, Any] = Body(...),
    user_id: str = Depends(auth_service.get_current_user_id),
    store: RecordStore = Depends(get_store),
):
    """Update a widget's config, creating it if the widget has none yet."""
    return dashboard_service.upsert_widget_config(store, user_id, widget_type,
                                                  body)


@router.get("/current-layout")
async def get_current_layout(
    user_id: str = Depends(auth_service.get_current_user_id),
    store: RecordStore = Depends(get_store),
):
    return dashboard_service.get_current_layout(store, user_id)


@router.post("/apply-layout")
async def apply_layout(
    body: ApplyLayout,
    user_id: str = Depends(auth_service.get_current_user_id),
    store: RecordStore = Depends(get_store),
):
    return dashboard_service.apply_layout(store, user_id, body.layout_id)


# ---- Themes --------------------------------------------------------------- #

@router.post("/apply-theme")
async def apply_theme(
    body: ApplyTheme,
    user_id: str = Depends(auth_service.get_current_user_id),
    store: RecordStore = Depends(get_store),
):
    return dashboard_service.apply_theme(store, user_id, body.theme_id)


@router.get("/current-theme")
async def get_current_theme(
    user_id: str = Depends(auth_service.get_current_user_id),
    store: RecordStore = Depends(get_store),
):
    """Theme in effect now: an active theme schedule, else the manual choice."""
    return dashboard_service.get_current_theme(store, user_id,
                                               utcnow().astimezone())


# ---- Daily records -------------------------------------------------------- #

@router.get("/daily-summary")
async def get_daily_summary(
    date: str | None = Query(None),
    user_id: str = Depends(auth_service.get_current_user_id),
    store: RecordStore = Depends(get_store),
):
    """The day's summary (today by default), or null."""
    return dashboard_service.get_for_date(
        store, dashboard_service.DAILY_SUMMARY, user_id, date or today()
    )


@router.put("/daily-summary")
async def upsert_daily_summary(
    body: dict[str, Any] = Body(...),
    user_id: str = Depends(auth_service.get_current_user_id),
    store: RecordStore = Depends(get_store),
):
    day = body.get("date") or today()
    return dashboard_service.upsert_daily_summary(store, user_id, day, body)


@router.get("/daily-book")
async def get_daily_book(
    date: str | None = Query(None),
    user_id: str = Depends(auth_service.get_current_user_id),
    store: RecordStore = Depends(get_store),
):
    return dashboard_service.get_for_date(
        store, dashboard_service.DAILY_BOOK, user_id, date or today()
    )


@router.post("/daily-book", status_code=201)
async def create_daily_book(
    body: dict[str, Any] = Body(...),
    user_id: str = Depends(auth_service.get_current_user_id),
    store: RecordStore = Depends(get_store),
):
    return dashboard_service.create_daily_book(store, user_id, body)


@router.get("/daily-photo")
async def get_daily_photo(
    date: str | None = Query(None),
    user_id: str = Depends(auth_service.get_current_user_id),
    store: RecordStore = Depends(get_store),
):
    return dashboard_service.get_for_date(
        store, dashboard_service.DAILY_PHOTO, user_id, date or today()
    )


@router.post("/daily-photo", status_code=201)
async def create_daily_photo(
    body: dict[str, Any] = Body(...),
    user_id: str = Depends(auth_service.get_current_user_id),
    store: RecordStore = Depends(get_store),
):
    """Store the photo for its date, replacing any earlier one."""
    return dashboard_service.replace_daily_photo(store, user_id, body)
