"""Command API: what presentation code calls.

Each method validates its input, then turns the user's intent into one
action on the store.  Validation failures raise
:class:`~timerdeck.errors.ValidationError` and never reach the store.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from .analytics import AnalyticsSink, track
from .errors import ValidationError
from .state.actions import (
    AddTimer, DeleteTimer, ResetTimer, StartTimer, PauseTimer,
    StartCategory, PauseCategory, ResetCategory, ClearHistory,
)
from .state.models import Timer, TimerStatus, now_ms, new_timer_id
from .state.store import TimerStore

logger = logging.getLogger(__name__)


def duration_from_parts(minutes: Any = None, seconds: Any = None) -> int:
    """Combine the add-form's minutes and seconds fields.

    Blank parts count as zero.  The result may still be zero; whether
    that is acceptable is for :meth:`TimerCommands.add_timer` to decide.
    """
    total = 0
    for field, value, scale in (("minutes", minutes, 60), ("seconds", seconds, 1)):
        if value is None or (isinstance(value, str) and not value.strip()):
            continue
        if isinstance(value, bool):
            raise ValidationError(field, f"{field.capitalize()} must be a number")
        try:
            number = int(value)
        except (TypeError, ValueError):
            raise ValidationError(field, f"{field.capitalize()} must be a number") from None
        if number < 0:
            raise ValidationError(field, f"{field.capitalize()} cannot be negative")
        total += number * scale
    return total


class TimerCommands:
    """Validated user operations over a :class:`TimerStore`."""

    def __init__(
        self,
        store: TimerStore,
        *,
        analytics: AnalyticsSink | None = None,
        clock: Callable[[], int] = now_ms,
        id_factory: Callable[[], str] = new_timer_id,
    ) -> None:
        self._store = store
        self._analytics = analytics
        self._clock = clock
        self._id_factory = id_factory

    @property
    def store(self) -> TimerStore:
        return self._store

    # ── timers ────────────────────────────────────────────────────────

    def add_timer(
        self,
        name: str,
        duration: int,
        category: str | None = None,
        *,
        new_category: str | None = None,
        halfway_alert: bool = False,
    ) -> Timer:
        """Create an idle timer.

        *new_category*, when given, wins over *category* (the form's
        "create new" option); otherwise *category* picks an existing one.
        """
        clean_name = name.strip() if isinstance(name, str) else ""
        if not clean_name:
            raise ValidationError("name", "Timer name is required")

        if isinstance(duration, bool) or not isinstance(duration, int) or duration <= 0:
            raise ValidationError("duration", "Timer duration must be greater than 0")

        chosen = new_category if new_category is not None else category
        clean_category = chosen.strip() if isinstance(chosen, str) else ""
        if not clean_category:
            raise ValidationError("category", "Category is required")

        timer = Timer(
            id=self._id_factory(),
            name=clean_name,
            duration=duration,
            remaining_time=duration,
            category=clean_category,
            status=TimerStatus.IDLE,
            created_at=self._clock(),
            halfway_alert=bool(halfway_alert),
            halfway_alert_triggered=False,
        )
        self._store.dispatch(AddTimer(timer))
        logger.info(f"Added timer {timer.name!r} ({timer.duration}s) in {timer.category!r}")
        track(self._analytics, "timer_added", {
            "timer_name": timer.name,
            "category": timer.category,
            "duration": timer.duration,
            "halfway_alert": timer.halfway_alert,
            "new_category": new_category is not None,
        })
        return timer

    def start_timer(self, timer_id: str) -> None:
        self._store.dispatch(StartTimer(timer_id))
        track(self._analytics, "timer_started", {"timer_id": timer_id})

    def pause_timer(self, timer_id: str) -> None:
        self._store.dispatch(PauseTimer(timer_id))
        track(self._analytics, "timer_paused", {"timer_id": timer_id})

    def reset_timer(self, timer_id: str) -> None:
        self._store.dispatch(ResetTimer(timer_id))
        track(self._analytics, "timer_reset", {"timer_id": timer_id})

    def delete_timer(self, timer_id: str) -> None:
        self._store.dispatch(DeleteTimer(timer_id))
        track(self._analytics, "timer_deleted", {"timer_id": timer_id})

    # ── categories ────────────────────────────────────────────────────

    def start_category(self, category: str) -> None:
        self._store.dispatch(StartCategory(category))
        track(self._analytics, "category_started", {"category": category})

    def pause_category(self, category: str) -> None:
        self._store.dispatch(PauseCategory(category))
        track(self._analytics, "category_paused", {"category": category})

    def reset_category(self, category: str) -> None:
        self._store.dispatch(ResetCategory(category))
        track(self._analytics, "category_reset", {"category": category})

    # ── history ───────────────────────────────────────────────────────

    def clear_history(self) -> None:
        self._store.dispatch(ClearHistory())
        track(self._analytics, "history_cleared")

    def export_data(self) -> str:
        """The current state as indented JSON with a stable field order."""
        state = self._store.state
        text = state.to_json(indent=2)
        track(self._analytics, "data_exported", {
            "timers": len(state.timers),
            "history": len(state.history),
        })
        return text
