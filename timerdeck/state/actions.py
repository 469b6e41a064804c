"""Actions: the only way to describe a state change.

Both the command layer and the tick engine produce these; only
:func:`timerdeck.state.reducer.reduce` interprets them.
"""

from __future__ import annotations

from dataclasses import dataclass

from .models import AppState, Timer


class Action:
    """Marker base class for every action."""

    __slots__ = ()


@dataclass(frozen=True)
class LoadState(Action):
    state: AppState


@dataclass(frozen=True)
class AddTimer(Action):
    timer: Timer


@dataclass(frozen=True)
class UpdateTimer(Action):
    timer: Timer


@dataclass(frozen=True)
class DeleteTimer(Action):
    timer_id: str


@dataclass(frozen=True)
class CompleteTimer(Action):
    timer_id: str
    completed_at: int


@dataclass(frozen=True)
class ResetTimer(Action):
    timer_id: str


@dataclass(frozen=True)
class StartTimer(Action):
    timer_id: str


@dataclass(frozen=True)
class PauseTimer(Action):
    timer_id: str


@dataclass(frozen=True)
class TickTimer(Action):
    """One-second decrement.  ``now`` stamps the history entry if the
    tick completes the timer."""

    timer_id: str
    now: int


@dataclass(frozen=True)
class StartCategory(Action):
    category: str


@dataclass(frozen=True)
class PauseCategory(Action):
    category: str


@dataclass(frozen=True)
class ResetCategory(Action):
    category: str


@dataclass(frozen=True)
class ClearHistory(Action):
    pass


@dataclass(frozen=True)
class TriggerHalfwayAlert(Action):
    timer_id: str
