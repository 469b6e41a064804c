"""Timer package."""

from .engine import TickEngine, TICK_INTERVAL_MS, halfway_due

__all__ = [
    "TickEngine",
    "TICK_INTERVAL_MS",
    "halfway_due",
]
