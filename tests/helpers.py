"""Shared test helpers for TimerDeck."""

from itertools import count

from timerdeck.state.models import AppState, Timer, TimerStatus


class SignalCollector:
    """Utility to capture pyqtSignal emissions into a list."""

    def __init__(self):
        self.items: list = []

    def slot(self, *args):
        self.items.append(args if len(args) > 1 else args[0] if args else None)

    def __call__(self, *args):
        self.slot(*args)

    def __len__(self):
        return len(self.items)

    def __getitem__(self, idx):
        return self.items[idx]

    @property
    def last(self):
        return self.items[-1] if self.items else None

    def clear(self):
        self.items.clear()


class FakeClock:
    """Callable returning epoch ms; advances one second per call."""

    def __init__(self, start: int = 0):
        self.now = start

    def __call__(self) -> int:
        self.now += 1000
        return self.now


class RecordingNotifier:
    def __init__(self):
        self.events: list[tuple[str, str]] = []

    def notify(self, event_kind, timer_name):
        self.events.append((event_kind, timer_name))


class RecordingAnalytics:
    def __init__(self):
        self.events: list[tuple[str, dict]] = []

    def track_event(self, event_name, params):
        self.events.append((event_name, params))

    def names(self) -> list[str]:
        return [name for name, _ in self.events]


def sequential_ids(prefix: str = "t"):
    counter = count(1)
    return lambda: f"{prefix}{next(counter)}"


def make_timer(
    timer_id: str = "t1",
    name: str = "Tea",
    duration: int = 5,
    category: str = "Kitchen",
    *,
    remaining: int | None = None,
    status: TimerStatus = TimerStatus.IDLE,
    halfway_alert: bool = False,
    triggered: bool = False,
    created_at: int = 1_000,
) -> Timer:
    if remaining is None:
        remaining = 0 if status == TimerStatus.COMPLETED else duration
    return Timer(
        id=timer_id,
        name=name,
        duration=duration,
        remaining_time=remaining,
        category=category,
        status=status,
        created_at=created_at,
        halfway_alert=halfway_alert,
        halfway_alert_triggered=triggered,
    )


def state_with(*timers: Timer) -> AppState:
    categories: list[str] = []
    for t in timers:
        if t.category not in categories:
            categories.append(t.category)
    return AppState(timers=tuple(timers), categories=tuple(categories))


def assert_invariants(state: AppState) -> None:
    """Completion invariant, range checks and category membership."""
    for t in state.timers:
        assert 0 <= t.remaining_time <= t.duration, t
        assert (t.remaining_time == 0) == (t.status == TimerStatus.COMPLETED), t
        assert t.category in state.categories, t
    assert len(set(state.categories)) == len(state.categories)
