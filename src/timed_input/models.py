"""Data models for bounded line reads.

A ``ReadRequest`` describes a single call and a ``ReadOutcome`` reports how it
ended. Outcomes are tagged so that the three ways of not getting a line
(end of input, timeout, failure) stay distinguishable.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import timedelta
from enum import Enum
from typing import ClassVar, Union

from timed_input.errors import InvalidDeadlineError


class OutcomeKind(str, Enum):
    """Discriminator for the ReadOutcome variants."""

    LINE = "line"
    END_OF_INPUT = "end_of_input"
    TIMED_OUT = "timed_out"
    READ_ERROR = "read_error"


@dataclass(frozen=True)
class Line:
    """A line was read; its trailing terminator has been removed."""

    text: str
    kind: ClassVar[OutcomeKind] = OutcomeKind.LINE


@dataclass(frozen=True)
class EndOfInput:
    """The source was closed or exhausted before a line arrived."""

    kind: ClassVar[OutcomeKind] = OutcomeKind.END_OF_INPUT


@dataclass(frozen=True)
class TimedOut:
    """The deadline elapsed before a line arrived."""

    kind: ClassVar[OutcomeKind] = OutcomeKind.TIMED_OUT


@dataclass(frozen=True)
class ReadError:
    """The read failed for a reason other than a clean end of input."""

    cause: BaseException
    kind: ClassVar[OutcomeKind] = OutcomeKind.READ_ERROR


ReadOutcome = Union[Line, EndOfInput, TimedOut, ReadError]


@dataclass(frozen=True)
class ReadRequest:
    """Configuration for a single bounded read.

    ``deadline`` is either a number of seconds or a ``timedelta``. Zero and
    negative deadlines are accepted and mean the read times out immediately.
    """

    deadline: float | timedelta

    def __post_init__(self) -> None:
        if isinstance(self.deadline, bool) or not isinstance(
            self.deadline, (int, float, timedelta)
        ):
            raise InvalidDeadlineError(
                f"Deadline must be seconds or a timedelta, got {type(self.deadline).__name__}"
            )

    @property
    def seconds(self) -> float:
        """Deadline as float seconds."""
        if isinstance(self.deadline, timedelta):
            return self.deadline.total_seconds()
        return float(self.deadline)

    @property
    def expired(self) -> bool:
        """True when the deadline leaves no time to read."""
        return self.seconds <= 0


def strip_line_terminator(raw: str) -> str:
    """Remove exactly one trailing ``\\r\\n``, ``\\n`` or ``\\r``."""
    if raw.endswith("\r\n"):
        return raw[:-2]
    if raw.endswith(("\n", "\r")):
        return raw[:-1]
    return raw
