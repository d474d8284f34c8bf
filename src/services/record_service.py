"""
Record service: CRUD operations shared by every collection.
"""

from typing import Mapping

import structlog
from pydantic import BaseModel, ValidationError

from Data.collections import Collection
from Data.database import generate_uuid, utcnow_iso
from Data.store import RecordStore
from services.errors import RecordValidationError

logger = structlog.get_logger(__name__)


def validate_payload(
    collection: Collection, payload, partial: bool = False
) -> dict:
    """
    Validate a client payload and return its wire-format fields.

    On create every default is filled in; on a partial update only the keys
    the client actually sent are returned. Server-owned keys are dropped.
    """
    schema = collection.update_schema if partial else collection.schema
    try:
        model: BaseModel = schema.model_validate(payload)
    except ValidationError as e:
        raise RecordValidationError(collection.label, _format_errors(e)) from e
    data = model.model_dump(mode="json", by_alias=True, exclude_unset=partial)
    for key in collection.reserved_fields:
        data.pop(key, None)
    return data


def list_records(
    store: RecordStore,
    collection: Collection,
    user_id: str,
    params: Mapping[str, str] | None = None,
) -> list:
    """List a user's records, applying the collection's query filters."""
    params = dict(params or {})
    for name, default in collection.defaults.items():
        if not params.get(name):
            params[name] = default()

    active = [
        (predicate, params[name])
        for name, predicate in collection.filters.items()
        if params.get(name)
    ]

    def matches(record: dict) -> bool:
        return all(predicate(record, value) for predicate, value in active)

    return store.list(
        collection.path,
        user_id,
        where=matches if active else None,
        sort_key=collection.sort_key,
        reverse=collection.descending,
    )


def get_record(
    store: RecordStore, collection: Collection, user_id: str, record_id: str
) -> dict | None:
    return store.get(collection.path, user_id, record_id)


def create_record(
    store: RecordStore, collection: Collection, user_id: str, payload
) -> dict:
    """Validate and store a new record owned by user_id."""
    data = validate_payload(collection, payload)
    record = {
        "id": generate_uuid(),
        "userId": user_id,
        **data,
        collection.timestamp_field: utcnow_iso(),
    }
    created = store.create(collection.path, record)
    logger.info("Record created", collection=collection.path,
                record_id=created["id"], user_id=user_id)
    return created


def update_record(
    store: RecordStore,
    collection: Collection,
    user_id: str,
    record_id: str,
    payload,
) -> dict | None:
    """Apply a partial update. Returns None when the record doesn't exist."""
    changes = validate_payload(collection, payload, partial=True)
    updated = store.update(collection.path, user_id, record_id, changes)
    if updated is None:
        logger.info("Record not found for update", collection=collection.path,
                    record_id=record_id)
        return None
    logger.info("Record updated", collection=collection.path,
                record_id=record_id, fields=sorted(changes))
    return updated


def delete_record(
    store: RecordStore, collection: Collection, user_id: str, record_id: str
) -> bool:
    """Delete a record. Nothing else is touched."""
    deleted = store.delete(collection.path, user_id, record_id)
    if deleted:
        logger.info("Record deleted", collection=collection.path,
                    record_id=record_id)
    return deleted


def _format_errors(error: ValidationError) -> list[dict]:
    return [
        {"loc": list(e["loc"]), "msg": e["msg"], "type": e["type"]}
        for e in error.errors(include_url=False)
    ]
