"""Per-second tick process for TimerDeck.

Every firing of the engine's ``QTimer`` takes one snapshot of the store
and, for each running timer in insertion order:

1. checks the halfway condition against the *pre-decrement* remaining
   time (``remaining_time <= duration / 2``, real division) and
   dispatches ``TriggerHalfwayAlert`` the first time it holds;
2. dispatches ``TickTimer``, which decrements and, on reaching zero,
   completes the timer and records history in the same transition.

The engine never touches state itself; it only produces actions.  It
reads ``store.state`` fresh at every firing, so a timer deleted or paused
between firings simply drops out.  Missed firings are never replayed.
"""

from __future__ import annotations

import logging
from typing import Callable

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

from ..analytics import AnalyticsSink, track
from ..notifications import COMPLETION, HALFWAY, Notifier
from ..state.actions import TickTimer, TriggerHalfwayAlert
from ..state.models import AppState, Timer, now_ms
from ..state.selectors import format_time
from ..state.store import TimerStore

logger = logging.getLogger(__name__)

TICK_INTERVAL_MS = 1000


def halfway_due(timer: Timer) -> bool:
    """True when *timer* should fire its halfway alert this second."""
    return (
        timer.halfway_alert
        and not timer.halfway_alert_triggered
        and timer.remaining_time <= timer.duration / 2
    )


class TickEngine(QObject):
    """Drives running timers forward once per interval.

    Signals
    -------
    halfway_reached(timer: Timer)
        A running timer crossed its halfway point (fires once per run).
    timer_completed(entry: HistoryEntry)
        A tick brought a timer to zero; carries the new history entry.
    ticked(state: AppState)
        Emitted after each firing with the resulting state.
    """

    halfway_reached = pyqtSignal(object)
    timer_completed = pyqtSignal(object)
    ticked = pyqtSignal(object)

    def __init__(
        self,
        store: TimerStore,
        parent: QObject | None = None,
        *,
        notifier: Notifier | None = None,
        analytics: AnalyticsSink | None = None,
        clock: Callable[[], int] = now_ms,
        interval_ms: int = TICK_INTERVAL_MS,
    ) -> None:
        super().__init__(parent)
        self._store = store
        self._notifier = notifier
        self._analytics = analytics
        self._clock = clock

        self._qt_timer = QTimer(self)
        self._qt_timer.setInterval(interval_ms)
        self._qt_timer.timeout.connect(self._on_tick)

    # ── lifecycle ─────────────────────────────────────────────────────

    @property
    def is_active(self) -> bool:
        return self._qt_timer.isActive()

    @property
    def interval_ms(self) -> int:
        return self._qt_timer.interval()

    def start(self) -> None:
        if self._qt_timer.isActive():
            return
        logger.debug(f"Tick engine started ({self.interval_ms} ms)")
        self._qt_timer.start()

    def stop(self) -> None:
        if not self._qt_timer.isActive():
            return
        self._qt_timer.stop()
        logger.debug("Tick engine stopped")

    # ── ticking ───────────────────────────────────────────────────────

    def tick_once(self) -> AppState:
        """Advance every running timer by one second."""
        snapshot = self._store.state
        for timer in snapshot.timers:
            if timer.is_running:
                self._advance(timer)
        state = self._store.state
        self.ticked.emit(state)
        return state

    def _on_tick(self) -> None:
        self.tick_once()

    def _advance(self, timer: Timer) -> None:
        if halfway_due(timer):
            before_state = self._store.state
            state = self._store.dispatch(TriggerHalfwayAlert(timer.id))
            if state is not before_state:
                self._on_halfway(state.find(timer.id))

        before = self._store.state.find(timer.id)
        state = self._store.dispatch(TickTimer(timer.id, self._clock()))
        after = state.find(timer.id)
        if (
            before is not None
            and not before.is_completed
            and after is not None
            and after.is_completed
        ):
            self._on_completed(state)

    def _on_halfway(self, timer: Timer) -> None:
        logger.info(f"Timer {timer.name!r} is halfway done")
        self.halfway_reached.emit(timer)
        if self._notifier is not None:
            self._notifier.notify(HALFWAY, timer.name)
        track(self._analytics, "timer_halfway", {
            "timer_name": timer.name,
            "category": timer.category,
        })

    def _on_completed(self, state: AppState) -> None:
        entry = state.history[0]
        logger.info(f"Timer {entry.name!r} completed ({format_time(entry.duration)})")
        self.timer_completed.emit(entry)
        if self._notifier is not None:
            self._notifier.notify(COMPLETION, entry.name)
        track(self._analytics, "timer_completed", {
            "timer_name": entry.name,
            "category": entry.category,
            "duration": entry.duration,
        })
