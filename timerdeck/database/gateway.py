"""Persistence gateways.

The store only needs two calls::

    load() -> str | None      # the saved JSON document, if any
    save(state) -> None       # overwrite it with the full state

Both raise :class:`~timerdeck.errors.PersistenceError` on failure.
"""

from __future__ import annotations

import logging
from typing import Protocol

from sqlalchemy.exc import SQLAlchemyError

from ..errors import PersistenceError
from ..state.models import AppState
from .db import configure_engine, get_session, init_db
from .models import StoredBlob

logger = logging.getLogger(__name__)

DEFAULT_STORAGE_KEY = "timerData"


def open_database(database_url: str | None = None) -> None:
    """Point the engine at *database_url* (if given) and create tables."""
    try:
        if database_url:
            configure_engine(database_url)
        init_db()
    except (SQLAlchemyError, OSError) as exc:
        raise PersistenceError(f"Could not open database: {exc}") from exc


class PersistenceGateway(Protocol):
    def load(self) -> str | None: ...

    def save(self, state: AppState) -> None: ...


class SqlPersistenceGateway:
    """Keeps the snapshot in the ``kv_store`` table."""

    def __init__(self, key: str = DEFAULT_STORAGE_KEY) -> None:
        self._key = key

    @property
    def key(self) -> str:
        return self._key

    def load(self) -> str | None:
        try:
            with get_session() as db:
                record = db.get(StoredBlob, self._key)
                return record.value if record is not None else None
        except (SQLAlchemyError, OSError) as exc:
            raise PersistenceError(f"Could not read {self._key!r}: {exc}") from exc

    def save(self, state: AppState) -> None:
        blob = state.to_json(indent=None)
        try:
            with get_session() as db:
                record = db.get(StoredBlob, self._key)
                if record is None:
                    db.add(StoredBlob(key=self._key, value=blob))
                else:
                    record.value = blob
        except (SQLAlchemyError, OSError) as exc:
            raise PersistenceError(f"Could not write {self._key!r}: {exc}") from exc
        logger.debug(f"Saved {len(blob)} bytes under {self._key!r}")


class MemoryPersistenceGateway:
    """Holds the snapshot in memory.  Handy for tests and dry runs."""

    def __init__(self, blob: str | None = None) -> None:
        self.blob = blob
        self.save_count = 0

    def load(self) -> str | None:
        return self.blob

    def save(self, state: AppState) -> None:
        self.blob = state.to_json(indent=None)
        self.save_count += 1
