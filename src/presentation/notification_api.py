"""Notification API: unread count and mark-read endpoints.

Plain list/create/update/delete come from the generic record router.
"""

from fastapi import APIRouter, Depends, HTTPException

from Data.store import RecordStore
from presentation.dependencies import get_store
from services import auth_service, notification_service

router = APIRouter()


@router.get("/unread-count")
async def unread_count(
    user_id: str = Depends(auth_service.get_current_user_id),
    store: RecordStore = Depends(get_store),
):
    """Get the number of unread notifications."""
    return {"count": notification_service.unread_count(store, user_id)}


@router.patch("/read-all")
async def mark_all_read(
    user_id: str = Depends(auth_service.get_current_user_id),
    store: RecordStore = Depends(get_store),
):
    """Mark all notifications as read."""
    count = notification_service.mark_all_read(store, user_id)
    return {"success": True, "count": count}


@router.patch("/{notification_id}/read")
async def mark_read(
    notification_id: str,
    user_id: str = Depends(auth_service.get_current_user_id),
    store: RecordStore = Depends(get_store),
):
    """Mark a notification as read."""
    notif = notification_service.mark_read(store, user_id, notification_id)
    if not notif:
        raise HTTPException(status_code=404, detail="Notification not found")
    return notif
