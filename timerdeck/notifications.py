"""Notification collaborators.

The tick engine calls ``notify(event_kind, timer_name)`` with
``event_kind`` one of :data:`HALFWAY` or :data:`COMPLETION`.  How (or
whether) that reaches the user is the notifier's business.
"""

from __future__ import annotations

import logging
from typing import Callable, Protocol

logger = logging.getLogger(__name__)

HALFWAY = "halfway"
COMPLETION = "completion"

_MESSAGES = {
    HALFWAY: ("Halfway Point", "You're halfway through \"{name}\"!"),
    COMPLETION: ("Timer Complete", "\"{name}\" has finished."),
}


def describe(event_kind: str, timer_name: str) -> tuple[str, str]:
    """Return a ``(title, body)`` pair for an event."""
    title, body = _MESSAGES.get(event_kind, (event_kind.title(), "{name}"))
    return title, body.format(name=timer_name)


class Notifier(Protocol):
    def notify(self, event_kind: str, timer_name: str) -> None: ...


class LogNotifier:
    """Writes notifications to the log.  Used by the headless runner."""

    def __init__(self, enabled: bool = True) -> None:
        self.enabled = enabled

    def notify(self, event_kind: str, timer_name: str) -> None:
        if not self.enabled:
            return
        title, body = describe(event_kind, timer_name)
        logger.info(f"[{title}] {body}")


class CallbackNotifier:
    """Forwards every notification to a plain callable."""

    def __init__(self, callback: Callable[[str, str], None]) -> None:
        self._callback = callback

    def notify(self, event_kind: str, timer_name: str) -> None:
        self._callback(event_kind, timer_name)
