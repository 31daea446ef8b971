"""BoundedLineReader - read one line of input, giving up after a deadline.

The blocking read runs on a dedicated worker thread and races a timer. The
caller is never blocked for longer than the deadline. A worker that loses the
race is left running: console reads cannot be interrupted portably, so it is
orphaned and its eventual result is dropped into a queue nobody reads.
"""

from __future__ import annotations

import queue
import sys
import threading
from datetime import timedelta
from typing import IO, Any, Protocol

from timed_input.models import (
    EndOfInput,
    Line,
    ReadError,
    ReadOutcome,
    ReadRequest,
    TimedOut,
    strip_line_terminator,
)


class LineSource(Protocol):
    """Anything with a blocking ``readline()`` returning str or bytes."""

    def readline(self) -> str | bytes: ...


def read_once(source: LineSource | IO[Any], encoding: str = "utf-8") -> ReadOutcome:
    """Perform a single blocking line read and classify the result.

    Args:
        source: Stream to read from
        encoding: Encoding used when the stream returns bytes

    Returns:
        Line, EndOfInput or ReadError (never TimedOut)
    """
    try:
        raw = source.readline()
        if not raw:
            return EndOfInput()
        if isinstance(raw, bytes):
            raw = raw.decode(encoding)
        return Line(strip_line_terminator(raw))
    except EOFError:
        return EndOfInput()
    except Exception as e:
        return ReadError(e)


def _coerce_request(deadline: float | timedelta | ReadRequest) -> ReadRequest:
    if isinstance(deadline, ReadRequest):
        return deadline
    return ReadRequest(deadline)


def _start_worker(
    source: LineSource | IO[Any], encoding: str
) -> tuple[threading.Thread, queue.Queue[ReadOutcome]]:
    # One slot per call: the worker puts exactly once, so it never blocks
    # even when the caller has already given up.
    slot: queue.Queue[ReadOutcome] = queue.Queue(maxsize=1)

    def _worker() -> None:
        slot.put_nowait(read_once(source, encoding))

    worker = threading.Thread(target=_worker, name="bounded-line-reader", daemon=True)
    worker.start()
    return worker, slot


def _race(
    source: LineSource | IO[Any],
    request: ReadRequest,
    encoding: str,
) -> tuple[ReadOutcome, threading.Thread | None]:
    """Race a worker read against the deadline.

    Returns the outcome and, when the worker lost, the orphaned thread.
    """
    if request.expired:
        return TimedOut(), None

    # Waits beyond what threading can represent block until the worker answers.
    timeout = None if request.seconds >= threading.TIMEOUT_MAX else request.seconds

    worker, slot = _start_worker(source, encoding)
    try:
        return slot.get(timeout=timeout), None
    except queue.Empty:
        return TimedOut(), worker


def read_line_with_timeout(
    source: LineSource | IO[Any],
    deadline: float | timedelta | ReadRequest,
    encoding: str = "utf-8",
) -> ReadOutcome:
    """Read one line from ``source``, waiting at most ``deadline``.

    A zero or negative deadline returns TimedOut without reading.

    Args:
        source: Blocking line-oriented stream, e.g. ``sys.stdin``
        deadline: Seconds, a timedelta, or a ReadRequest
        encoding: Encoding used when the stream returns bytes

    Returns:
        Exactly one of Line, EndOfInput, TimedOut or ReadError
    """
    outcome, _ = _race(source, _coerce_request(deadline), encoding)
    return outcome


class BoundedLineReader:
    """Bounded line reads against a single source.

    Calls must be made one at a time; overlapping reads on the same source
    are not arbitrated.

    Example:
        reader = BoundedLineReader()
        outcome = reader.read(5)
        if isinstance(outcome, Line):
            print(f"Hello, {outcome.text}!")
    """

    def __init__(
        self,
        source: LineSource | IO[Any] | None = None,
        encoding: str = "utf-8",
    ) -> None:
        """Initialize the reader.

        Args:
            source: Stream to read from; ``sys.stdin`` at call time if None
            encoding: Encoding used when the stream returns bytes
        """
        self._source = source
        self.encoding = encoding
        self._orphans: list[threading.Thread] = []

    @property
    def source(self) -> LineSource | IO[Any]:
        """The stream reads are made against."""
        return self._source if self._source is not None else sys.stdin

    def _prune_orphans(self) -> None:
        self._orphans = [t for t in self._orphans if t.is_alive()]

    @property
    def orphaned_workers(self) -> int:
        """Number of timed-out workers still blocked on the source."""
        self._prune_orphans()
        return len(self._orphans)

    def read(self, deadline: float | timedelta | ReadRequest) -> ReadOutcome:
        """Read one line, waiting at most ``deadline``."""
        outcome, orphan = _race(self.source, _coerce_request(deadline), self.encoding)
        self._prune_orphans()
        if orphan is not None:
            self._orphans.append(orphan)
        return outcome
