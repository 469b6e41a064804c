"""Analytics sinks.

Events are fire-and-forget: :func:`track` never lets a sink failure leak
into the caller.
"""

from __future__ import annotations

import logging
from typing import Any, Protocol

logger = logging.getLogger(__name__)


class AnalyticsSink(Protocol):
    def track_event(self, event_name: str, params: dict[str, Any]) -> None: ...


class LogAnalytics:
    """Logs every event at DEBUG level."""

    def track_event(self, event_name: str, params: dict[str, Any]) -> None:
        logger.debug(f"[Analytics] Event: {event_name} {params}")


class NullAnalytics:
    def track_event(self, event_name: str, params: dict[str, Any]) -> None:
        pass


def track(
    sink: AnalyticsSink | None,
    event_name: str,
    params: dict[str, Any] | None = None,
) -> None:
    """Send an event to *sink*, logging (not raising) on failure."""
    if sink is None:
        return
    try:
        sink.track_event(event_name, dict(params or {}))
    except Exception:
        logger.exception(f"Analytics sink failed on {event_name!r}")
