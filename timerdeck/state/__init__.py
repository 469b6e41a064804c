"""Timer state package: model, actions, reducer and store."""

from .models import AppState, HistoryEntry, Timer, TimerStatus, now_ms, new_timer_id
from .actions import (
    Action, LoadState, AddTimer, UpdateTimer, DeleteTimer, CompleteTimer,
    ResetTimer, StartTimer, PauseTimer, TickTimer, StartCategory,
    PauseCategory, ResetCategory, ClearHistory, TriggerHalfwayAlert,
)
from .reducer import reduce
from .store import TimerStore

__all__ = [
    "AppState",
    "HistoryEntry",
    "Timer",
    "TimerStatus",
    "now_ms",
    "new_timer_id",
    "Action",
    "LoadState",
    "AddTimer",
    "UpdateTimer",
    "DeleteTimer",
    "CompleteTimer",
    "ResetTimer",
    "StartTimer",
    "PauseTimer",
    "TickTimer",
    "StartCategory",
    "PauseCategory",
    "ResetCategory",
    "ClearHistory",
    "TriggerHalfwayAlert",
    "reduce",
    "TimerStore",
]
