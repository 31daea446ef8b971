"""timed-input CLI entry point using Typer."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

import typer
from click.core import ParameterSource
from rich.console import Console
from rich.logging import RichHandler

from timed_input import __version__
from timed_input.bounded_reader import BoundedLineReader
from timed_input.config import TimedInputConfig, load_config
from timed_input.errors import ConfigError, InputReadError
from timed_input.models import EndOfInput, Line, ReadError, TimedOut
from timed_input.prompts import ask, confirm, prompt

# Matches coreutils timeout(1)
EXIT_TIMED_OUT = 124
EXIT_END_OF_INPUT = 1
EXIT_READ_ERROR = 2

app = typer.Typer(
    name="timed-input",
    help="Read a line of console input with a deadline",
    no_args_is_help=True,
)
console = Console()
err_console = Console(stderr=True)

logger = logging.getLogger(__name__)


def _configure_logging(verbose: bool) -> None:
    """Route timed_input logs to stderr through rich."""
    package_logger = logging.getLogger("timed_input")
    package_logger.handlers.clear()
    package_logger.addHandler(
        RichHandler(console=err_console, show_time=False, show_path=False, markup=False)
    )
    package_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


def _load(config_path: Optional[Path]) -> TimedInputConfig:
    try:
        return load_config(config_path)
    except ConfigError as e:
        err_console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1) from None


def _reader(config: TimedInputConfig) -> BoundedLineReader:
    # Bind stdin at call time so test runners can swap it.
    return BoundedLineReader(sys.stdin, encoding=config.reader.encoding)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """Bounded console input."""
    _configure_logging(verbose)


@app.command()
def version() -> None:
    """Show timed-input version."""
    console.print(f"timed-input v{__version__}")


@app.command()
def read(
    timeout: Optional[float] = typer.Option(
        None, "--timeout", "-t", help="Seconds to wait (default from config)"
    ),
    message: str = typer.Option("", "--prompt", "-p", help="Text shown before reading"),
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Config file"),
) -> None:
    """Read one line from stdin and print it.

    Exits 1 on end of input, 2 on a read error and 124 on timeout.
    """
    config = _load(config_path)
    deadline = config.reader.deadline_seconds if timeout is None else timeout

    outcome = prompt(message, deadline, reader=_reader(config), console=err_console)

    if isinstance(outcome, Line):
        console.print(outcome.text, markup=False, highlight=False)
        return
    if isinstance(outcome, EndOfInput):
        logger.info("Input ended before a line was read")
        raise typer.Exit(EXIT_END_OF_INPUT)
    if isinstance(outcome, ReadError):
        err_console.print(f"[red]Error reading input: {outcome.cause}[/red]")
        raise typer.Exit(EXIT_READ_ERROR)
    if isinstance(outcome, TimedOut):
        err_console.print(f"\n[yellow]No input within {deadline:g} seconds[/yellow]")
        raise typer.Exit(EXIT_TIMED_OUT)


@app.command()
def greet(
    timeout: Optional[float] = typer.Option(
        None, "--timeout", "-t", help="Seconds to wait (default from config)"
    ),
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Config file"),
) -> None:
    """Ask for a name and say hello."""
    config = _load(config_path)
    deadline = config.reader.deadline_seconds if timeout is None else timeout

    console.print("Please enter your name:")
    try:
        name = ask(
            "",
            deadline,
            default=config.prompt.default_answer,
            reader=_reader(config),
            console=console,
        )
    except InputReadError as e:
        logger.debug("Read failed: %s", e.cause)
        console.print("An error occurred while reading input.")
        raise typer.Exit(1) from None

    if name:
        console.print(f"Hello, {name}!", markup=False)
    else:
        console.print("No input provided.")


@app.command(name="confirm")
def confirm_command(
    ctx: typer.Context,
    message: str = typer.Argument(..., help="Question to ask"),
    timeout: Optional[float] = typer.Option(
        None, "--timeout", "-t", help="Seconds to wait (default from config)"
    ),
    default: bool = typer.Option(
        True, "--default/--no-default", help="Answer used on timeout or empty input"
    ),
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="Config file"),
) -> None:
    """Ask a yes/no question. Exits 0 for yes and 1 for no."""
    config = _load(config_path)
    deadline = config.reader.deadline_seconds if timeout is None else timeout
    if ctx.get_parameter_source("default") == ParameterSource.DEFAULT:
        default = config.prompt.confirm_default

    try:
        answer = confirm(
            message, deadline, default=default, reader=_reader(config), console=console
        )
    except InputReadError as e:
        err_console.print(f"[red]Error reading input: {e.cause}[/red]")
        raise typer.Exit(EXIT_READ_ERROR) from None

    raise typer.Exit(0 if answer else 1)


if __name__ == "__main__":
    app()
