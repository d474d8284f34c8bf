"""
Record stores: where every collection's records live.

`RecordStore` is the interface the services talk to. `MemoryStore` keeps
records in nested dicts for the lifetime of the process; `SqlStore` keeps
them as JSON rows in a SQLAlchemy-managed table.
"""

import copy
from abc import ABC, abstractmethod
from typing import Any, Callable

from sqlalchemy.engine import Engine

from Data.database import init_db, make_engine, make_session_factory
from Data.models import Record

Where = Callable[[dict], bool]
SortKey = Callable[[dict], Any]


class RecordStore(ABC):
    """Collection-keyed record storage scoped by owning user."""

    @abstractmethod
    def list(
        self,
        collection: str,
        user_id: str,
        where: Where | None = None,
        sort_key: SortKey | None = None,
        reverse: bool = False,
    ) -> list[dict]:
        """Records owned by user_id, filtered and sorted (stable)."""

    @abstractmethod
    def get(self, collection: str, user_id: str, record_id: str) -> dict | None:
        pass

    @abstractmethod
    def create(self, collection: str, record: dict) -> dict:
        """Store a fully-formed record (must carry id and userId)."""

    @abstractmethod
    def update(
        self, collection: str, user_id: str, record_id: str, changes: dict
    ) -> dict | None:
        """Shallow-merge changes; id and userId are never overwritten."""

    @abstractmethod
    def delete(self, collection: str, user_id: str, record_id: str) -> bool:
        pass

    @abstractmethod
    def clear(self) -> None:
        pass


def _select(records, where, sort_key, reverse) -> list:
    if where is not None:
        records = [r for r in records if where(r)]
    if sort_key is not None:
        records = sorted(records, key=sort_key, reverse=reverse)
    return records


def _merge(existing: dict, changes: dict) -> dict:
    merged = {**existing, **changes}
    merged["id"] = existing["id"]
    merged["userId"] = existing["userId"]
    return merged


class MemoryStore(RecordStore):
    def __init__(self):
        self._collections: dict[str, dict[str, dict]] = {}

    def list(self, collection, user_id, where=None, sort_key=None,
             reverse=False):
        owned = [
            r for r in self._collections.get(collection, {}).values()
            if r.get("userId") == user_id
        ]
        return copy.deepcopy(_select(owned, where, sort_key, reverse))

    def get(self, collection, user_id, record_id):
        record = self._collections.get(collection, {}).get(record_id)
        if record is None or record.get("userId") != user_id:
            return None
        return copy.deepcopy(record)

    def create(self, collection, record):
        stored = copy.deepcopy(record)
        self._collections.setdefault(collection, {})[stored["id"]] = stored
        return copy.deepcopy(stored)

    def update(self, collection, user_id, record_id, changes):
        records = self._collections.get(collection, {})
        existing = records.get(record_id)
        if existing is None or existing.get("userId") != user_id:
            return None
        merged = _merge(existing, copy.deepcopy(changes))
        records[record_id] = merged
        return copy.deepcopy(merged)

    def delete(self, collection, user_id, record_id):
        records = self._collections.get(collection, {})
        existing = records.get(record_id)
        if existing is None or existing.get("userId") != user_id:
            return False
        del records[record_id]
        return True

    def clear(self):
        self._collections.clear()


class SqlStore(RecordStore):
    """Records as JSON rows in the `records` table; one session per call."""

    def __init__(self, engine: Engine):
        init_db(engine)
        self._session_factory = make_session_factory(engine)

    def _find(self, db, collection, user_id, record_id):
        return (
            db.query(Record)
            .filter(Record.collection == collection,
                    Record.user_id == user_id,
                    Record.id == record_id)
            .first()
        )

    def list(self, collection, user_id, where=None, sort_key=None,
             reverse=False):
        with self._session_factory() as db:
            rows = (
                db.query(Record)
                .filter(Record.collection == collection,
                        Record.user_id == user_id)
                .order_by(Record.seq)
                .all()
            )
            records = [copy.deepcopy(row.data) for row in rows]
        return _select(records, where, sort_key, reverse)

    def get(self, collection, user_id, record_id):
        with self._session_factory() as db:
            row = self._find(db, collection, user_id, record_id)
            return copy.deepcopy(row.data) if row else None

    def create(self, collection, record):
        stored = copy.deepcopy(record)
        with self._session_factory() as db:
            db.add(Record(id=stored["id"], collection=collection,
                          user_id=stored["userId"], data=stored))
            db.commit()
        return copy.deepcopy(stored)

    def update(self, collection, user_id, record_id, changes):
        with self._session_factory() as db:
            row = self._find(db, collection, user_id, record_id)
            if not row:
                return None
            merged = _merge(row.data, copy.deepcopy(changes))
            row.data = merged
            db.commit()
        return copy.deepcopy(merged)

    def delete(self, collection, user_id, record_id):
        with self._session_factory() as db:
            row = self._find(db, collection, user_id, record_id)
            if not row:
                return False
            db.delete(row)
            db.commit()
        return True

    def clear(self):
        with self._session_factory() as db:
            db.query(Record).delete()
            db.commit()


def build_store(backend: str = "memory", database_url: str | None = None) -> RecordStore:
    """Construct the configured store backend."""
    if backend == "memory":
        return MemoryStore()
    if backend == "sql":
        if not database_url:
            raise ValueError("DATABASE_URL is required for the sql store")
        return SqlStore(make_engine(database_url))
    raise ValueError(f"Unknown store backend: {backend}")
