"""AsyncLineReader - bounded line reads for asyncio callers.

The blocking read runs on its own daemon thread rather than the loop's default
executor: ``asyncio.run`` waits for the default executor on shutdown, which
would hang on a read that timed out and is still blocked.
"""

from __future__ import annotations

import asyncio
import contextlib
import sys
import threading
from datetime import timedelta
from typing import IO, Any

from timed_input.bounded_reader import LineSource, read_once
from timed_input.models import ReadOutcome, ReadRequest, TimedOut


def _deliver(future: asyncio.Future[ReadOutcome], outcome: ReadOutcome) -> None:
    # Runs on the loop; the future is already cancelled if the caller gave up.
    if not future.done():
        future.set_result(outcome)


def _spawn_reader(
    loop: asyncio.AbstractEventLoop,
    source: LineSource | IO[Any],
    encoding: str,
) -> asyncio.Future[ReadOutcome]:
    future: asyncio.Future[ReadOutcome] = loop.create_future()

    def _worker() -> None:
        outcome = read_once(source, encoding)
        # The loop may have been closed while the read was blocked.
        with contextlib.suppress(RuntimeError):
            loop.call_soon_threadsafe(_deliver, future, outcome)

    threading.Thread(target=_worker, name="async-line-reader", daemon=True).start()
    return future


async def read_line_with_timeout_async(
    source: LineSource | IO[Any],
    deadline: float | timedelta | ReadRequest,
    encoding: str = "utf-8",
) -> ReadOutcome:
    """Awaitable counterpart of ``read_line_with_timeout``.

    Args:
        source: Blocking line-oriented stream
        deadline: Seconds, a timedelta, or a ReadRequest
        encoding: Encoding used when the stream returns bytes

    Returns:
        Exactly one of Line, EndOfInput, TimedOut or ReadError

    Raises:
        asyncio.CancelledError: If the awaiting task is cancelled
    """
    request = deadline if isinstance(deadline, ReadRequest) else ReadRequest(deadline)
    if request.expired:
        return TimedOut()

    future = _spawn_reader(asyncio.get_running_loop(), source, encoding)
    try:
        return await asyncio.wait_for(future, timeout=request.seconds)
    except asyncio.TimeoutError:
        return TimedOut()


class AsyncLineReader:
    """Asynchronous bounded line reader.

    Example:
        reader = AsyncLineReader()
        outcome = await reader.read_line(10)
        if isinstance(outcome, TimedOut):
            print("Too slow")
    """

    def __init__(
        self,
        source: LineSource | IO[Any] | None = None,
        encoding: str = "utf-8",
    ) -> None:
        """Initialize the AsyncLineReader.

        Args:
            source: Stream to read from; ``sys.stdin`` at call time if None
            encoding: Encoding used when the stream returns bytes
        """
        self._source = source
        self.encoding = encoding

    async def read_line(self, deadline: float | timedelta | ReadRequest) -> ReadOutcome:
        """Read one line, waiting at most ``deadline``."""
        source = self._source if self._source is not None else sys.stdin
        return await read_line_with_timeout_async(source, deadline, self.encoding)
