from typing import Iterator

from fastapi import Request

from ..db import SessionLocal
from .base import EntityStore
from .locks import KeyedLocks
from .memory import MemoryStore
from .sql import SqlStorage


def get_store(request: Request) -> Iterator[EntityStore]:
    """
    FastAPI dependency. Uses the process-local store when the app holds one,
    otherwise opens a session-backed store for the duration of the request.
    """
    store = getattr(request.app.state, "store", None)
    if store is not None:
        yield store
        return
    db = SessionLocal()
    try:
        yield SqlStorage(db, locks=request.app.state.property_locks)
    finally:
        db.close()
