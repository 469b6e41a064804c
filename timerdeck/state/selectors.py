"""Read-only queries over an :class:`AppState` for presentation code."""

from __future__ import annotations

from .models import AppState, Timer, TimerStatus


def format_time(seconds: int) -> str:
    """``m:ss`` with unpadded minutes, e.g. ``format_time(605) == "10:05"``."""
    seconds = max(0, seconds)
    minutes, secs = divmod(seconds, 60)
    return f"{minutes}:{secs:02d}"


def progress(timer: Timer) -> float:
    """0.0 → 1.0 progress through the timer's run."""
    if timer.duration <= 0:
        return 0.0
    elapsed = timer.duration - timer.remaining_time
    return max(0.0, min(1.0, elapsed / timer.duration))


def running_timers(state: AppState) -> list[Timer]:
    return [t for t in state.timers if t.status == TimerStatus.RUNNING]


def timers_by_category(state: AppState) -> dict[str, list[Timer]]:
    """Group timers under each known category, in category order.

    A category that has just been introduced but has no timers maps to
    an empty list.
    """
    groups: dict[str, list[Timer]] = {c: [] for c in state.categories}
    for timer in state.timers:
        groups.setdefault(timer.category, []).append(timer)
    return groups


def category_has_running(state: AppState, category: str) -> bool:
    return any(
        t.category == category and t.status == TimerStatus.RUNNING
        for t in state.timers
    )


def category_has_pending(state: AppState, category: str) -> bool:
    """True when at least one timer in *category* is not completed."""
    return any(
        t.category == category and t.status != TimerStatus.COMPLETED
        for t in state.timers
    )
