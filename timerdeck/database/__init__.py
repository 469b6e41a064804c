"""Database package."""

from .db import get_session, init_db, configure_engine
from .models import StoredBlob
from .gateway import (
    PersistenceGateway,
    SqlPersistenceGateway,
    MemoryPersistenceGateway,
    DEFAULT_STORAGE_KEY,
    open_database,
)

__all__ = [
    "get_session",
    "init_db",
    "configure_engine",
    "StoredBlob",
    "PersistenceGateway",
    "SqlPersistenceGateway",
    "MemoryPersistenceGateway",
    "DEFAULT_STORAGE_KEY",
    "open_database",
]
