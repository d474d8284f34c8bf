"""Calendar API: sync a connected calendar."""

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse

from Data.store import RecordStore
from presentation.dependencies import get_calendar_provider, get_store
from services import auth_service, calendar_service
from services.calendar_service import CalendarProvider
from services.errors import UpstreamError

router = APIRouter()


@router.post("/{connection_id}/sync")
async def sync_connection(
    connection_id: str,
    user_id: str = Depends(auth_service.get_current_user_id),
    store: RecordStore = Depends(get_store),
    provider: CalendarProvider = Depends(get_calendar_provider),
):
    """Replace the connection's events with fresh ones from the provider."""
    try:
        connection = await calendar_service.sync_connection(
            store, provider, user_id, connection_id
        )
    except UpstreamError as e:
        return JSONResponse(
            status_code=500,
            content={"error": "Calendar sync failed", "message": e.message},
        )
    if not connection:
        raise HTTPException(status_code=404, detail="Calendar connection not found")
    return connection
