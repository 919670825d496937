"""Exit handling utilities for the CLI.

Commands never terminate the process from deep inside core code. Errors
propagate up to the command, which calls one of these helpers exactly once.
"""

from typing import NoReturn

import typer

from adxops.cli.common.output import out


def ok_exit(msg: str | None = None) -> NoReturn:
    """Exit successfully with an optional informational message."""
    if msg:
        out.info(msg)
    raise typer.Exit(0)


def warn_exit(msg: str, code: int = 0) -> NoReturn:
    """Exit with a warning message and optional exit code."""
    out.warn(msg)
    raise typer.Exit(code)


def exit_from_exc(exc: Exception, *, message: str | None = None, code: int = 1) -> NoReturn:
    """Print a single error line for `exc` and exit with `code`."""
    out.error(message or str(exc))
    raise typer.Exit(code) from exc
