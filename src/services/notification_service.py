"""
Notification service: unread count and bulk mark-read.

Creating, listing and deleting notifications goes through the generic
record service like every other collection.
"""

import structlog

from Data.collections import get_collection
from Data.store import RecordStore

logger = structlog.get_logger(__name__)

NOTIFICATIONS = get_collection("notifications")


def _is_unread(record: dict) -> bool:
    return not record.get("isRead")


def unread_count(store: RecordStore, user_id: str) -> int:
    """Return the number of unread notifications."""
    return len(store.list(NOTIFICATIONS.path, user_id, where=_is_unread))


def mark_read(store: RecordStore, user_id: str, notification_id: str) -> dict | None:
    """Mark a single notification as read."""
    return store.update(NOTIFICATIONS.path, user_id, notification_id,
                        {"isRead": True})


def mark_all_read(store: RecordStore, user_id: str) -> int:
    """Mark all notifications as read. Returns count updated."""
    unread = store.list(NOTIFICATIONS.path, user_id, where=_is_unread)
    for notif in unread:
        store.update(NOTIFICATIONS.path, user_id, notif["id"], {"isRead": True})
    logger.info("Notifications marked read", user_id=user_id, count=len(unread))
    return len(unread)
