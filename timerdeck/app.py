"""Wiring: builds the store, tick engine and command API from settings."""

from __future__ import annotations

import logging

from PyQt6.QtCore import QObject

from .analytics import LogAnalytics, NullAnalytics
from .commands import TimerCommands
from .database.gateway import SqlPersistenceGateway, open_database
from .errors import PersistenceError
from .notifications import LogNotifier, Notifier
from .settings import Settings
from .state.store import TimerStore
from .timer.engine import TickEngine

logger = logging.getLogger(__name__)


class TimerDeckApp(QObject):
    """Owns one session: store seeded from disk, engine, commands."""

    def __init__(
        self,
        settings: Settings,
        parent: QObject | None = None,
        *,
        notifier: Notifier | None = None,
        gateway=None,
    ) -> None:
        super().__init__(parent)
        self._settings = settings

        if gateway is None:
            try:
                open_database(settings.database_url)
            except PersistenceError as exc:
                logger.warning(f"{exc}; timers will not be saved this session")
            gateway = SqlPersistenceGateway(settings.storage_key)

        analytics = LogAnalytics() if settings.analytics_enabled else NullAnalytics()
        if notifier is None:
            notifier = LogNotifier(enabled=settings.notifications_enabled)

        self.store = TimerStore(gateway, self)
        self.store.load()
        self.commands = TimerCommands(self.store, analytics=analytics)
        self.engine = TickEngine(
            self.store,
            self,
            notifier=notifier,
            analytics=analytics,
            interval_ms=settings.tick_interval_ms,
        )

    def start(self) -> None:
        self.engine.start()
        logger.info("TimerDeck session started")

    def shutdown(self) -> None:
        self.engine.stop()
        logger.info("TimerDeck session ended")
