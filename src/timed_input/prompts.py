"""Prompt helpers layered on top of the bounded reader.

These print the question and interpret the outcome. The bounded reader
itself never writes to the console.
"""

from __future__ import annotations

import logging
import time
from datetime import timedelta

from rich.console import Console

from timed_input.bounded_reader import BoundedLineReader
from timed_input.errors import InputReadError
from timed_input.models import Line, ReadError, ReadOutcome, ReadRequest

logger = logging.getLogger(__name__)

YES_ANSWERS = ("y", "yes")
NO_ANSWERS = ("n", "no")


def prompt(
    message: str,
    deadline: float | timedelta,
    *,
    reader: BoundedLineReader | None = None,
    console: Console | None = None,
) -> ReadOutcome:
    """Write ``message`` and read one line within ``deadline``.

    Args:
        message: Text shown before reading, without a trailing newline
        deadline: Seconds or a timedelta
        reader: Reader to use (defaults to one on stdin)
        console: Rich Console for the message

    Returns:
        The outcome of the bounded read
    """
    reader = reader or BoundedLineReader()
    console = console or Console()

    if message:
        console.print(message, end="", markup=False, highlight=False)
        console.file.flush()

    outcome = reader.read(deadline)
    logger.debug("Prompt %r finished with %s", message, outcome.kind.value)
    return outcome


def ask(
    message: str,
    deadline: float | timedelta,
    *,
    default: str | None = None,
    reader: BoundedLineReader | None = None,
    console: Console | None = None,
) -> str | None:
    """Ask for a line of text.

    Returns the line, or ``default`` if the answer is empty, input ended,
    or the deadline elapsed.

    Raises:
        InputReadError: If the read failed
    """
    outcome = prompt(message, deadline, reader=reader, console=console)

    if isinstance(outcome, ReadError):
        raise InputReadError(outcome.cause) from outcome.cause
    if isinstance(outcome, Line) and outcome.text:
        return outcome.text
    return default


def confirm(
    message: str,
    deadline: float | timedelta,
    *,
    default: bool = True,
    reader: BoundedLineReader | None = None,
    console: Console | None = None,
) -> bool:
    """Ask a yes/no question with one overall deadline.

    'y'/'yes' answers True and 'n'/'no' answers False. An empty answer, end of
    input, or an elapsed deadline returns ``default``. Any other answer asks
    again with whatever time is left.

    Raises:
        InputReadError: If the read failed
    """
    console = console or Console()
    reader = reader or BoundedLineReader()
    suffix = " [Y/n] " if default else " [y/N] "
    ends_at = time.monotonic() + ReadRequest(deadline).seconds

    while True:
        remaining = ends_at - time.monotonic()
        outcome = prompt(message + suffix, remaining, reader=reader, console=console)

        if isinstance(outcome, ReadError):
            raise InputReadError(outcome.cause) from outcome.cause
        if not isinstance(outcome, Line):
            # Finish the prompt line the user never terminated.
            console.print()
            return default

        answer = outcome.text.strip().lower()
        if not answer:
            return default
        if answer in YES_ANSWERS:
            return True
        if answer in NO_ANSWERS:
            return False

        console.print("Please answer 'y' or 'n'.", markup=False)
