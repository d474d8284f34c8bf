"""
Calendar service: syncing events from connected calendars.

Providers sit behind `CalendarProvider`; the stub produces a fixed,
predictable day of events so the widget has something to show.
"""

from abc import ABC, abstractmethod
from datetime import date, datetime, time, timedelta, timezone

import structlog

from Data.collections import get_collection
from Data.database import utcnow
from Data.store import RecordStore
from services import record_service
from services.errors import RecordValidationError, UpstreamError

logger = structlog.get_logger(__name__)

CONNECTIONS = get_collection("calendar-connections")
EVENTS = get_collection("calendar-events")


class CalendarProvider(ABC):
    @abstractmethod
    async def fetch_events(self, connection: dict, day: date) -> list[dict]:
        """Events (wire-format dicts) for the connection around `day`."""


def _at(day: date, hour: int, minute: int = 0) -> str:
    return datetime.combine(day, time(hour, minute), tzinfo=timezone.utc).isoformat()


class StubCalendarProvider(CalendarProvider):
    """Three fixed events: two today, one tomorrow."""

    async def fetch_events(self, connection: dict, day: date) -> list[dict]:
        calendar_name = connection.get("accountName", "")
        tomorrow = day + timedelta(days=1)
        events = [
            {
                "title": "Team standup",
                "description": "Daily sync",
                "startTime": _at(day, 9, 30),
                "endTime": _at(day, 9, 45),
                "location": "Video call",
                "attendees": ["team@example.com"],
            },
            {
                "title": "Project review",
                "description": "",
                "startTime": _at(day, 14),
                "endTime": _at(day, 15),
                "location": "Room 2",
                "attendees": [],
            },
            {
                "title": "Lunch with Sam",
                "description": "",
                "startTime": _at(tomorrow, 12, 30),
                "endTime": _at(tomorrow, 13, 30),
                "location": "",
                "attendees": [],
            },
        ]
        for event in events:
            event["calendarName"] = calendar_name
        return events


def _mark_failed(store: RecordStore, user_id: str, connection_id: str):
    store.update(CONNECTIONS.path, user_id, connection_id,
                 {"syncStatus": "error"})
    logger.warning("Calendar sync failed", connection_id=connection_id)


async def sync_connection(
    store: RecordStore,
    provider: CalendarProvider,
    user_id: str,
    connection_id: str,
) -> dict | None:
    """
    Replace a connection's stored events with freshly fetched ones.

    Returns the updated connection, or None if the connection is unknown.
    Every fetched event is validated before stored events are touched. On
    provider failure or invalid event data the connection is marked `error`
    and an UpstreamError propagates.
    """
    connection = store.get(CONNECTIONS.path, user_id, connection_id)
    if connection is None:
        return None

    now = utcnow()
    try:
        fetched = await provider.fetch_events(connection, now.date())
    except UpstreamError:
        _mark_failed(store, user_id, connection_id)
        raise

    payloads = [
        {**event, "connectionId": connection_id,
         "provider": connection.get("provider", "")}
        for event in fetched
    ]
    try:
        for payload in payloads:
            record_service.validate_payload(EVENTS, payload)
    except RecordValidationError as exc:
        _mark_failed(store, user_id, connection_id)
        raise UpstreamError(
            "calendar", "Provider returned invalid event data"
        ) from exc

    stale = store.list(EVENTS.path, user_id,
                       where=lambda r: r.get("connectionId") == connection_id)
    for event in stale:
        store.delete(EVENTS.path, user_id, event["id"])
    for payload in payloads:
        record_service.create_record(store, EVENTS, user_id, payload)

    logger.info("Calendar synced", connection_id=connection_id,
                events=len(payloads), replaced=len(stale))
    return store.update(
        CONNECTIONS.path, user_id, connection_id,
        {
            "lastSync": now.isoformat(),
            "syncStatus": "connected",
            "isConnected": True,
            "eventsCount": len(payloads),
        },
    )
