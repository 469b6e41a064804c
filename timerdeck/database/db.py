"""Database connection and session management."""

from pathlib import Path
from contextlib import contextmanager

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session as OrmSession

from .models import Base

# ── paths ────────────────────────────────────────────────────────────────────

APP_SUPPORT_DIR = Path.home() / "Library" / "Application Support" / "TimerDeck"
DB_PATH = APP_SUPPORT_DIR / "timerdeck.db"

# ── engine & session factory (created lazily) ─────────────────────────────

_engine = None
_SessionFactory = None


def _get_engine():
    global _engine
    if _engine is None:
        APP_SUPPORT_DIR.mkdir(parents=True, exist_ok=True)
        _engine = create_engine(
            f"sqlite:///{DB_PATH}",
            connect_args={"check_same_thread": False},
            echo=False,
        )
    return _engine


def _get_session_factory():
    global _SessionFactory
    if _SessionFactory is None:
        _SessionFactory = sessionmaker(bind=_get_engine(), expire_on_commit=False)
    return _SessionFactory


# ── public API ────────────────────────────────────────────────────────────


def configure_engine(url: str) -> None:
    """Override the database connection URL.  Used by tests to point at
    an in-memory SQLite database, and by ``Settings.database_url``."""
    global _engine, _SessionFactory
    _SessionFactory = None
    if _engine is not None:
        _engine.dispose()
    _engine = create_engine(
        url,
        connect_args={"check_same_thread": False},
        echo=False,
    )


def init_db() -> None:
    """Create all tables."""
    Base.metadata.create_all(_get_engine())


@contextmanager
def get_session():
    """Yield a SQLAlchemy session; commit on success, rollback on error."""
    factory = _get_session_factory()
    session: OrmSession = factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
