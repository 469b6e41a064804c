"""SQLAlchemy ORM models for TimerDeck."""

from datetime import datetime, timezone

from sqlalchemy import Column, String, Text, DateTime
from sqlalchemy.orm import DeclarativeBase


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class StoredBlob(Base):
    """One JSON document per key.  TimerDeck keeps its whole state
    under a single key (``timerData`` by default)."""

    __tablename__ = "kv_store"

    key = Column(String(64), primary_key=True)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime, nullable=False, default=_utcnow, onupdate=_utcnow)

    def __repr__(self) -> str:
        return f"<StoredBlob key={self.key} size={len(self.value or '')}>"
