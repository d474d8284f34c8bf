"""
Data layer: record schemas, collection registry, and record stores.
"""

from Data.database import Base, generate_uuid, utcnow, utcnow_iso, today  # noqa: F401
from Data.models import Record  # noqa: F401
from Data.store import RecordStore, MemoryStore, SqlStore, build_store  # noqa: F401
from Data.collections import (  # noqa: F401
    Collection,
    COLLECTIONS,
    get_collection,
    routed_collections,
)
