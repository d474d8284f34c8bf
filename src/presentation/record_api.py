"""Record API: the CRUD endpoints every collection gets."""

from typing import Any

from fastapi import APIRouter, Body, Depends, HTTPException, Request

from Data.collections import Collection
from Data.store import RecordStore
from presentation.dependencies import get_store
from services import auth_service, record_service


def build_router(collection: Collection) -> APIRouter:
    """List/create/update/delete routes for one collection."""
    router = APIRouter()
    not_found = f"{collection.label} not found"
    slug = collection.path.replace("-", "_")

    @router.get("", name=f"list_{slug}")
    async def list_records(
        request: Request,
        user_id: str = Depends(auth_service.get_current_user_id),
        store: RecordStore = Depends(get_store),
    ):
        """List records; query parameters filter where the collection supports it."""
        return record_service.list_records(
            store, collection, user_id, request.query_params
        )

    @router.post("", status_code=201, name=f"create_{slug}")
    async def create_record(
        body: dict[str, Any] = Body(...),
        user_id: str = Depends(auth_service.get_current_user_id),
        store: RecordStore = Depends(get_store),
    ):
        """Create a record."""
        return record_service.create_record(store, collection, user_id, body)

    @router.api_route("/{record_id}", methods=["PUT", "PATCH"],
                      name=f"update_{slug}")
    async def update_record(
        record_id: str,
        body: dict[str, Any] = Body(...),
        user_id: str = Depends(auth_service.get_current_user_id),
        store: RecordStore = Depends(get_store),
    ):
        """Update a record. Only provided fields are changed."""
        record = record_service.update_record(
            store, collection, user_id, record_id, body
        )
        if not record:
            raise HTTPException(status_code=404, detail=not_found)
        return record

    @router.delete("/{record_id}", name=f"delete_{slug}")
    async def delete_record(
        record_id: str,
        user_id: str = Depends(auth_service.get_current_user_id),
        store: RecordStore = Depends(get_store),
    ):
        """Delete a record."""
        if not record_service.delete_record(store, collection, user_id, record_id):
            raise HTTPException(status_code=404, detail=not_found)
        return {"success": True}

    return router
