"""timed-input: read a line of console input with a deadline."""

__version__ = "0.1.0"

from timed_input.async_reader import AsyncLineReader, read_line_with_timeout_async
from timed_input.bounded_reader import BoundedLineReader, read_line_with_timeout
from timed_input.models import (
    EndOfInput,
    Line,
    OutcomeKind,
    ReadError,
    ReadOutcome,
    ReadRequest,
    TimedOut,
)

__all__ = [
    "__version__",
    # Models
    "EndOfInput",
    "Line",
    "OutcomeKind",
    "ReadError",
    "ReadOutcome",
    "ReadRequest",
    "TimedOut",
    # Readers
    "AsyncLineReader",
    "BoundedLineReader",
    "read_line_with_timeout",
    "read_line_with_timeout_async",
]
