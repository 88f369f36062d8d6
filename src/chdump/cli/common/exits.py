"""Exit handling utilities for the CLI.

Only the CLI decides when a failure ends the process; the core reports
failures through exceptions and result objects.
"""

from pathlib import Path
from typing import Iterable, NoReturn

import typer

from chdump.cli.common.output import out
from chdump.core.fileutils import find_missing_directory


def die(msg: str, code: int = 1) -> NoReturn:
    """Exit with an error message and optional exit code."""
    out.error(msg)
    raise typer.Exit(code)


def warn_exit(msg: str, code: int = 0) -> NoReturn:
    """Exit with a warning message and optional exit code."""
    out.warn(msg)
    raise typer.Exit(code)


def exit_from_exc(exc: Exception, *, message: str, code: int = 1) -> NoReturn:
    """
    Print an error message and exit, chaining the original exception.

    Used for connection failures, where the driver's own error is the cause.
    """
    out.error(message)
    raise typer.Exit(code) from exc


def require_directories(paths: Iterable[Path]) -> None:
    """Exit with `<dir> not found` unless every directory exists."""
    missing = find_missing_directory(paths)
    if missing is not None:
        die(f"{missing} not found")
