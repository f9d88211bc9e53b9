from __future__ import annotations

from functools import lru_cache

from fastapi import Depends
from sqlalchemy.orm import Session

from parishdesk.core.config import settings
from parishdesk.core.db import get_db
from parishdesk.stores.base import DocumentStore, RecordNotFoundError, StoreError
from parishdesk.stores.memory import MemoryDocumentStore
from parishdesk.stores.sql import SqlDocumentStore

__all__ = [
    "DocumentStore",
    "MemoryDocumentStore",
    "RecordNotFoundError",
    "SqlDocumentStore",
    "StoreError",
    "build_store",
    "get_store",
]


@lru_cache(maxsize=1)
def _shared_memory_store() -> MemoryDocumentStore:
    return MemoryDocumentStore()


@lru_cache(maxsize=1)
def _firebase_store() -> DocumentStore:
    from parishdesk.stores.firebase import FirebaseDocumentStore

    return FirebaseDocumentStore.from_settings(settings)


def build_store(db: Session | None = None) -> DocumentStore:
    """Return the store selected by ``STORE_BACKEND``."""

    backend = settings.STORE_BACKEND
    if backend == "memory":
        return _shared_memory_store()
    if backend == "firebase":
        return _firebase_store()
    if db is None:
        raise StoreError("The sql store backend needs a database session")
    return SqlDocumentStore(db)


def get_store(db: Session = Depends(get_db)) -> DocumentStore:
    return build_store(db)
