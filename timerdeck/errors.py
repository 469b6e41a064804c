"""Error taxonomy for TimerDeck.

ValidationError   Bad command input.  Raised before the store is touched.
PersistenceError  Load or save failure.  Logged by the store, never fatal.

Actions that reference a timer or category that no longer exists are not
errors at all: the reducer resolves them as no-ops.
"""


class TimerDeckError(Exception):
    """Base class for all TimerDeck errors."""


class ValidationError(TimerDeckError):
    """A command was rejected because its input is invalid."""

    def __init__(self, field: str, message: str) -> None:
        super().__init__(message)
        self.field = field
        self.message = message


class PersistenceError(TimerDeckError):
    """The persisted snapshot could not be read or written."""
