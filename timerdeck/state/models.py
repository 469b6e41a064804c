"""Immutable data model for TimerDeck.

Every record is a frozen dataclass and every collection is a tuple, so a
state handed out by the store can be shared freely.  Updates go through
:func:`dataclasses.replace`.

JSON layout
-----------
Persistence and export share one document shape, with camelCase keys and
a stable field order::

    {"timers": [...], "history": [...], "categories": [...]}
"""

from __future__ import annotations

import json
import time
import uuid
from dataclasses import dataclass
from enum import Enum
from typing import Any

from ..errors import PersistenceError


class TimerStatus(Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    COMPLETED = "completed"


def now_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


def new_timer_id() -> str:
    return uuid.uuid4().hex


# ── records ───────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class Timer:
    id: str
    name: str
    duration: int
    remaining_time: int
    category: str
    status: TimerStatus = TimerStatus.IDLE
    created_at: int = 0
    halfway_alert: bool = False
    halfway_alert_triggered: bool = False

    @property
    def is_running(self) -> bool:
        return self.status == TimerStatus.RUNNING

    @property
    def is_completed(self) -> bool:
        return self.status == TimerStatus.COMPLETED

    def is_consistent(self) -> bool:
        """True when the record satisfies the timer invariants."""
        for text in (self.id, self.name, self.category):
            if not isinstance(text, str) or not text:
                return False
        for number in (self.duration, self.remaining_time, self.created_at):
            if isinstance(number, bool) or not isinstance(number, int):
                return False
        if not isinstance(self.status, TimerStatus):
            return False
        if not isinstance(self.halfway_alert, bool):
            return False
        if not isinstance(self.halfway_alert_triggered, bool):
            return False
        if self.duration <= 0:
            return False
        if not 0 <= self.remaining_time <= self.duration:
            return False
        return (self.remaining_time == 0) == self.is_completed

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "duration": self.duration,
            "remainingTime": self.remaining_time,
            "category": self.category,
            "status": self.status.value,
            "createdAt": self.created_at,
            "halfwayAlert": self.halfway_alert,
            "halfwayAlertTriggered": self.halfway_alert_triggered,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Timer:
        timer = cls(
            id=_expect(data, "id", str),
            name=_expect(data, "name", str),
            duration=_expect(data, "duration", int),
            remaining_time=_expect(data, "remainingTime", int),
            category=_expect(data, "category", str),
            status=_parse_status(_expect(data, "status", str)),
            created_at=_expect(data, "createdAt", int),
            halfway_alert=_expect(data, "halfwayAlert", bool),
            halfway_alert_triggered=_expect(data, "halfwayAlertTriggered", bool),
        )
        if not timer.is_consistent():
            raise PersistenceError(f"Inconsistent timer record: {timer.id!r}")
        return timer


@dataclass(frozen=True)
class HistoryEntry:
    """Snapshot of one completed run.  ``id`` is the timer's id."""

    id: str
    name: str
    category: str
    duration: int
    completed_at: int

    @classmethod
    def from_timer(cls, timer: Timer, completed_at: int) -> HistoryEntry:
        return cls(
            id=timer.id,
            name=timer.name,
            category=timer.category,
            duration=timer.duration,
            completed_at=completed_at,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "category": self.category,
            "duration": self.duration,
            "completedAt": self.completed_at,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> HistoryEntry:
        return cls(
            id=_expect(data, "id", str),
            name=_expect(data, "name", str),
            category=_expect(data, "category", str),
            duration=_expect(data, "duration", int),
            completed_at=_expect(data, "completedAt", int),
        )


# ── aggregate root ────────────────────────────────────────────────────────


@dataclass(frozen=True)
class AppState:
    """Timers in insertion order, history most-recent-first, categories
    in first-seen order without duplicates."""

    timers: tuple[Timer, ...] = ()
    history: tuple[HistoryEntry, ...] = ()
    categories: tuple[str, ...] = ()

    @classmethod
    def empty(cls) -> AppState:
        return cls()

    def find(self, timer_id: str) -> Timer | None:
        for timer in self.timers:
            if timer.id == timer_id:
                return timer
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "timers": [t.to_dict() for t in self.timers],
            "history": [h.to_dict() for h in self.history],
            "categories": list(self.categories),
        }

    def to_json(self, indent: int | None = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    @classmethod
    def from_dict(cls, data: Any) -> AppState:
        if not isinstance(data, dict):
            raise PersistenceError("Snapshot must be a JSON object")
        timers = tuple(Timer.from_dict(t) for t in _expect(data, "timers", list))
        history = tuple(
            HistoryEntry.from_dict(h) for h in _expect(data, "history", list)
        )
        categories: list[str] = []
        for category in _expect(data, "categories", list):
            if not isinstance(category, str):
                raise PersistenceError("Category names must be strings")
            if category not in categories:
                categories.append(category)
        for timer in timers:
            if timer.category not in categories:
                categories.append(timer.category)
        return cls(timers=timers, history=history, categories=tuple(categories))

    @classmethod
    def from_json(cls, text: str) -> AppState:
        try:
            data = json.loads(text)
        except ValueError as exc:
            raise PersistenceError(f"Snapshot is not valid JSON: {exc}") from exc
        return cls.from_dict(data)


# ── decoding helpers ──────────────────────────────────────────────────────


def _expect(data: Any, key: str, kind: type) -> Any:
    if not isinstance(data, dict) or key not in data:
        raise PersistenceError(f"Missing field {key!r}")
    value = data[key]
    # bool is a subclass of int; never accept it where a number is expected
    if kind is int and isinstance(value, bool):
        raise PersistenceError(f"Field {key!r} must be an integer")
    if not isinstance(value, kind):
        raise PersistenceError(f"Field {key!r} must be {kind.__name__}")
    return value


def _parse_status(value: str) -> TimerStatus:
    try:
        return TimerStatus(value)
    except ValueError as exc:
        raise PersistenceError(f"Unknown timer status {value!r}") from exc
