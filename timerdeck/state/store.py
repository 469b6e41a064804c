"""The state container.

``TimerStore`` owns the single canonical :class:`AppState`.  Callers
never mutate it; they hand actions to :meth:`TimerStore.dispatch`, which
runs the pure reducer, swaps in the result, tells listeners, and writes
a snapshot through the persistence gateway.

Signals
-------
state_changed(state: AppState)
    Emitted after every accepted transition and after :meth:`load`.
"""

from __future__ import annotations

import logging

from PyQt6.QtCore import QObject, pyqtSignal

from ..errors import PersistenceError
from .actions import Action, LoadState
from .models import AppState, Timer
from .reducer import reduce

logger = logging.getLogger(__name__)


class TimerStore(QObject):

    state_changed = pyqtSignal(object)

    def __init__(
        self,
        gateway=None,
        parent: QObject | None = None,
        *,
        initial: AppState | None = None,
    ) -> None:
        super().__init__(parent)
        self._gateway = gateway
        self._state: AppState = initial if initial is not None else AppState.empty()

    @property
    def state(self) -> AppState:
        return self._state

    def find_timer(self, timer_id: str) -> Timer | None:
        return self._state.find(timer_id)

    # ── lifecycle ─────────────────────────────────────────────────────

    def load(self) -> AppState:
        """Seed the store from the gateway.

        A missing or unreadable snapshot leaves the empty default state.
        """
        state = AppState.empty()
        if self._gateway is not None:
            try:
                blob = self._gateway.load()
                if blob is None:
                    logger.info("No saved timer data, starting empty")
                else:
                    state = AppState.from_json(blob)
                    logger.info(
                        f"Loaded {len(state.timers)} timers, "
                        f"{len(state.history)} history entries"
                    )
            except PersistenceError as exc:
                logger.warning(f"Failed to load timer data, starting empty: {exc}")
        self._state = reduce(self._state, LoadState(state))
        self.state_changed.emit(self._state)
        return self._state

    # ── dispatch ──────────────────────────────────────────────────────

    def dispatch(self, action: Action) -> AppState:
        """Apply *action*; returns the (possibly unchanged) state."""
        new_state = reduce(self._state, action)
        if new_state is self._state:
            logger.debug(f"No-op action: {action!r}")
            return new_state

        self._state = new_state
        # Save before notifying: a listener may dispatch, and its newer
        # snapshot must be the last one written.
        self._save(new_state)
        self.state_changed.emit(new_state)
        return new_state

    def _save(self, state: AppState) -> None:
        if self._gateway is None:
            return
        try:
            self._gateway.save(state)
        except PersistenceError as exc:
            # The in-memory state stays authoritative until the next save.
            logger.warning(f"Failed to save timer data: {exc}")
