"""The pure transition function.

``reduce(state, action)`` never raises and never mutates its input.  When
an action does not apply (unknown timer, wrong status, unknown action
type) the very same ``state`` object is returned, which lets the store
skip notification and persistence for no-ops.

Timer-level transitions
-----------------------
idle | paused → running        StartTimer / StartCategory
running → paused               PauseTimer / PauseCategory
running → completed            TickTimer reaching 0, CompleteTimer
any → idle                     ResetTimer / ResetCategory
"""

from __future__ import annotations

from dataclasses import replace
from typing import Callable

from .actions import (
    Action, LoadState, AddTimer, UpdateTimer, DeleteTimer, CompleteTimer,
    ResetTimer, StartTimer, PauseTimer, TickTimer, StartCategory,
    PauseCategory, ResetCategory, ClearHistory, TriggerHalfwayAlert,
)
from .models import AppState, HistoryEntry, Timer, TimerStatus


# ── per-timer transitions ─────────────────────────────────────────────────
# Each returns the same Timer object when nothing changes.


def _start(timer: Timer) -> Timer:
    if timer.status in (TimerStatus.COMPLETED, TimerStatus.RUNNING):
        return timer
    return replace(timer, status=TimerStatus.RUNNING)


def _pause(timer: Timer) -> Timer:
    if timer.status != TimerStatus.RUNNING:
        return timer
    return replace(timer, status=TimerStatus.PAUSED)


def _reset(timer: Timer) -> Timer:
    if (
        timer.status == TimerStatus.IDLE
        and timer.remaining_time == timer.duration
        and not timer.halfway_alert_triggered
    ):
        return timer
    return replace(
        timer,
        remaining_time=timer.duration,
        status=TimerStatus.IDLE,
        halfway_alert_triggered=False,
    )


def _trigger_halfway(timer: Timer) -> Timer:
    if timer.halfway_alert_triggered:
        return timer
    return replace(timer, halfway_alert_triggered=True)


def _complete(timer: Timer) -> Timer:
    return replace(timer, status=TimerStatus.COMPLETED, remaining_time=0)


# ── helpers ───────────────────────────────────────────────────────────────


def _map_timers(
    state: AppState,
    match: Callable[[Timer], bool],
    transition: Callable[[Timer], Timer],
) -> AppState:
    changed = False
    timers = []
    for timer in state.timers:
        new = transition(timer) if match(timer) else timer
        changed = changed or new is not timer
        timers.append(new)
    if not changed:
        return state
    return replace(state, timers=tuple(timers))


def _by_id(timer_id: str) -> Callable[[Timer], bool]:
    return lambda timer: timer.id == timer_id


def _by_category(category: str) -> Callable[[Timer], bool]:
    return lambda timer: timer.category == category


def _with_category(categories: tuple[str, ...], category: str) -> tuple[str, ...]:
    if category in categories:
        return categories
    return categories + (category,)


def _finish(state: AppState, timer: Timer, completed_at: int) -> AppState:
    """Complete *timer* and prepend its history entry in one step."""
    entry = HistoryEntry.from_timer(timer, completed_at)
    done = _complete(timer)
    return replace(
        state,
        timers=tuple(done if t.id == timer.id else t for t in state.timers),
        history=(entry,) + state.history,
    )


# ── action handlers ───────────────────────────────────────────────────────


def _load_state(state: AppState, action: LoadState) -> AppState:
    return action.state


def _add_timer(state: AppState, action: AddTimer) -> AppState:
    timer = action.timer
    if state.find(timer.id) is not None or not timer.is_consistent():
        return state
    return replace(
        state,
        timers=state.timers + (timer,),
        categories=_with_category(state.categories, timer.category),
    )


def _update_timer(state: AppState, action: UpdateTimer) -> AppState:
    timer = action.timer
    current = state.find(timer.id)
    if current is None or current == timer or not timer.is_consistent():
        return state
    timers = tuple(timer if t.id == timer.id else t for t in state.timers)
    used = {t.category for t in timers}
    categories = _with_category(state.categories, timer.category)
    return replace(
        state,
        timers=timers,
        categories=tuple(c for c in categories if c in used),
    )


def _delete_timer(state: AppState, action: DeleteTimer) -> AppState:
    if state.find(action.timer_id) is None:
        return state
    timers = tuple(t for t in state.timers if t.id != action.timer_id)
    used = {t.category for t in timers}
    return replace(
        state,
        timers=timers,
        categories=tuple(c for c in state.categories if c in used),
    )


def _complete_timer(state: AppState, action: CompleteTimer) -> AppState:
    timer = state.find(action.timer_id)
    # Completed runs are already in history; never record them twice.
    if timer is None or timer.is_completed:
        return state
    return _finish(state, timer, action.completed_at)


def _reset_timer(state: AppState, action: ResetTimer) -> AppState:
    return _map_timers(state, _by_id(action.timer_id), _reset)


def _start_timer(state: AppState, action: StartTimer) -> AppState:
    return _map_timers(state, _by_id(action.timer_id), _start)


def _pause_timer(state: AppState, action: PauseTimer) -> AppState:
    return _map_timers(state, _by_id(action.timer_id), _pause)


def _tick_timer(state: AppState, action: TickTimer) -> AppState:
    timer = state.find(action.timer_id)
    if timer is None or not timer.is_running:
        return state
    remaining = max(0, timer.remaining_time - 1)
    if remaining == 0:
        return _finish(state, timer, action.now)
    ticked = replace(timer, remaining_time=remaining)
    return replace(
        state,
        timers=tuple(ticked if t.id == timer.id else t for t in state.timers),
    )


def _start_category(state: AppState, action: StartCategory) -> AppState:
    return _map_timers(state, _by_category(action.category), _start)


def _pause_category(state: AppState, action: PauseCategory) -> AppState:
    return _map_timers(state, _by_category(action.category), _pause)


def _reset_category(state: AppState, action: ResetCategory) -> AppState:
    return _map_timers(state, _by_category(action.category), _reset)


def _clear_history(state: AppState, action: ClearHistory) -> AppState:
    if not state.history:
        return state
    return replace(state, history=())


def _trigger_halfway_alert(
    state: AppState, action: TriggerHalfwayAlert
) -> AppState:
    return _map_timers(state, _by_id(action.timer_id), _trigger_halfway)


_HANDLERS: dict[type, Callable[[AppState, Action], AppState]] = {
    LoadState: _load_state,
    AddTimer: _add_timer,
    UpdateTimer: _update_timer,
    DeleteTimer: _delete_timer,
    CompleteTimer: _complete_timer,
    ResetTimer: _reset_timer,
    StartTimer: _start_timer,
    PauseTimer: _pause_timer,
    TickTimer: _tick_timer,
    StartCategory: _start_category,
    PauseCategory: _pause_category,
    ResetCategory: _reset_category,
    ClearHistory: _clear_history,
    TriggerHalfwayAlert: _trigger_halfway_alert,
}


def reduce(state: AppState, action: Action) -> AppState:
    """Apply *action* to *state* and return the resulting state."""
    handler = _HANDLERS.get(type(action))
    if handler is None:
        return state
    return handler(state, action)
