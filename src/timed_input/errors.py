"""Exception hierarchy for timed-input.

Expected read results (end of input, timeouts, I/O failures) are reported as
outcome values, not exceptions. These exceptions cover misuse and the
helpers that turn outcomes back into exceptions for their callers.
"""

from __future__ import annotations


class TimedInputError(Exception):
    """Base exception for timed-input."""

    pass


class ConfigError(TimedInputError):
    """Raised when configuration contains an invalid value."""

    pass


class InvalidDeadlineError(TimedInputError, TypeError):
    """Raised when a deadline is not a number of seconds or a timedelta."""

    pass


class InputReadError(TimedInputError):
    """Raised by prompt helpers when the underlying read failed.

    The original exception is available as ``cause`` and is also chained.
    """

    def __init__(self, cause: BaseException) -> None:
        super().__init__(f"Failed to read input: {cause}")
        self.cause = cause
