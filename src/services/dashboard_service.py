"""
Dashboard service: per-user singletons and per-date records.

Settings, widget configuration, the applied layout/theme and the
"one record per day" widgets (summary, book, photo).
"""

from datetime import datetime

import structlog

from Data.collections import Collection, get_collection
from Data.database import utcnow_iso
from Data.store import RecordStore
from services import record_service, theme_service

logger = structlog.get_logger(__name__)

SETTINGS = get_collection("settings")
THEME_SCHEDULES = get_collection("theme-schedules")
WIDGET_CONFIG = get_collection("widget-config")
DAILY_SUMMARY = get_collection("daily-summary")
DAILY_BOOK = get_collection("daily-book")
DAILY_PHOTO = get_collection("daily-photo")

DEFAULT_LAYOUT = "comprehensive-all"


# ---- Settings ------------------------------------------------------------- #

def get_settings(store: RecordStore, user_id: str) -> dict | None:
    """Return the user's settings record, or None if never created."""
    records = store.list(SETTINGS.path, user_id)
    return records[0] if records else None


def ensure_settings(store: RecordStore, user_id: str, **initial) -> dict:
    """Return existing settings, creating them from `initial` if absent."""
    current = get_settings(store, user_id)
    if current is not None:
        return current
    return record_service.create_record(store, SETTINGS, user_id, initial)


def update_settings(store: RecordStore, user_id: str, payload) -> dict | None:
    """Partially update settings. None when the user has no settings yet."""
    current = get_settings(store, user_id)
    if current is None:
        # a malformed payload is still a 400, not a 404
        record_service.validate_payload(SETTINGS, payload, partial=True)
        return None
    return record_service.update_record(
        store, SETTINGS, user_id, current["id"], payload
    )


def get_current_layout(store: RecordStore, user_id: str) -> str:
    settings = get_settings(store, user_id)
    if not settings:
        return DEFAULT_LAYOUT
    return settings.get("currentLayout") or DEFAULT_LAYOUT


def apply_layout(store: RecordStore, user_id: str, layout_id: str) -> dict:
    """Remember the layout the user switched to."""
    current = ensure_settings(store, user_id)
    store.update(SETTINGS.path, user_id, current["id"],
                 {"currentLayout": layout_id})
    logger.info("Layout applied", user_id=user_id, layout_id=layout_id)
    return {"success": True, "layoutId": layout_id}


def get_manual_theme(store: RecordStore, user_id: str) -> str:
    settings = get_settings(store, user_id)
    return (settings or {}).get("currentTheme") or ""


def get_current_theme(store: RecordStore, user_id: str, now: datetime) -> dict:
    """Theme in effect at `now` given the user's schedules and manual choice."""
    schedules = record_service.list_records(store, THEME_SCHEDULES, user_id)
    return theme_service.resolve_theme(
        schedules, get_manual_theme(store, user_id), now
    )


def apply_theme(store: RecordStore, user_id: str, theme_id: str) -> dict:
    """Remember the manually chosen theme."""
    current = ensure_settings(store, user_id)
    store.update(SETTINGS.path, user_id, current["id"],
                 {"currentTheme": theme_id})
    logger.info("Theme applied", user_id=user_id, theme_id=theme_id)
    return {"success": True, "themeId": theme_id}


# ---- Widget configuration ------------------------------------------------- #

def list_widget_configs(store: RecordStore, user_id: str) -> list:
    """Widget configs ordered by position."""
    return record_service.list_records(store, WIDGET_CONFIG, user_id)


def upsert_widget_config(
    store: RecordStore, user_id: str, widget_type: str, payload
) -> dict:
    """Merge changes into a widget's config, creating it with defaults first."""
    existing = store.list(
        WIDGET_CONFIG.path, user_id,
        where=lambda r: r.get("widgetType") == widget_type,
    )
    if not existing:
        return record_service.create_record(
            store, WIDGET_CONFIG, user_id, {**payload, "widgetType": widget_type}
        )

    changes = record_service.validate_payload(WIDGET_CONFIG, payload,
                                              partial=True)
    changes.pop("widgetType", None)
    changes["updatedAt"] = utcnow_iso()
    updated = store.update(WIDGET_CONFIG.path, user_id, existing[0]["id"],
                           changes)
    logger.info("Widget config updated", user_id=user_id,
                widget_type=widget_type, fields=sorted(changes))
    return updated


# ---- Per-date records ----------------------------------------------------- #

def get_for_date(
    store: RecordStore, collection: Collection, user_id: str, day: str
) -> dict | None:
    """Latest record of the collection for the given date, or None."""
    records = store.list(collection.path, user_id,
                         where=lambda r: r.get("date") == day)
    return records[-1] if records else None


def upsert_daily_summary(
    store: RecordStore, user_id: str, day: str, payload
) -> dict:
    """Merge into the day's summary, creating it when missing."""
    body = {**payload, "date": day}
    existing = get_for_date(store, DAILY_SUMMARY, user_id, day)
    if existing is None:
        return record_service.create_record(store, DAILY_SUMMARY, user_id, body)
    return record_service.update_record(
        store, DAILY_SUMMARY, user_id, existing["id"], body
    )


def create_daily_book(store: RecordStore, user_id: str, payload) -> dict:
    return record_service.create_record(store, DAILY_BOOK, user_id, payload)


def replace_daily_photo(store: RecordStore, user_id: str, payload) -> dict:
    """Store the photo for its date, replacing any earlier one for that day."""
    photo = record_service.create_record(store, DAILY_PHOTO, user_id, payload)
    stale = store.list(
        DAILY_PHOTO.path, user_id,
        where=lambda r: r.get("date") == photo["date"] and r["id"] != photo["id"],
    )
    for old in stale:
        store.delete(DAILY_PHOTO.path, user_id, old["id"])
    return photo
