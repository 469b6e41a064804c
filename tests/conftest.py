"""Shared pytest fixtures for TimerDeck tests."""

import sys
import pytest

from PyQt6.QtCore import QCoreApplication

from timerdeck.database.db import configure_engine, init_db
from timerdeck.database.gateway import MemoryPersistenceGateway
from timerdeck.commands import TimerCommands
from timerdeck.state.store import TimerStore
from timerdeck.timer.engine import TickEngine

from helpers import FakeClock, RecordingAnalytics, RecordingNotifier, sequential_ids


@pytest.fixture(scope="session")
def qapp():
    """A single QCoreApplication instance shared across the entire test run."""
    app = QCoreApplication.instance() or QCoreApplication(sys.argv)
    yield app


@pytest.fixture(autouse=True)
def test_db():
    """Point every test at a fresh in-memory SQLite database."""
    configure_engine("sqlite:///:memory:")
    init_db()
    yield


@pytest.fixture
def clock():
    return FakeClock(start=1_700_000_000_000)


@pytest.fixture
def gateway():
    return MemoryPersistenceGateway()


@pytest.fixture
def store(qapp, gateway):
    """Empty store backed by an in-memory gateway."""
    return TimerStore(gateway)


@pytest.fixture
def analytics():
    return RecordingAnalytics()


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def commands(store, analytics, clock):
    return TimerCommands(
        store, analytics=analytics, clock=clock, id_factory=sequential_ids(),
    )


@pytest.fixture
def engine(store, notifier, analytics, clock):
    """TickEngine wired to the store; tests drive it with tick_once()."""
    return TickEngine(store, notifier=notifier, analytics=analytics, clock=clock)
