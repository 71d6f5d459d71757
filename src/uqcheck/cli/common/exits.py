"""Exit handling utilities for the CLI."""

from typing import NoReturn

import typer

from uqcheck.cli.common.output import out

EXIT_OK = 0
EXIT_FINDINGS = 1
EXIT_USAGE = 2


def ok_exit(msg: str | None = None) -> NoReturn:
    """Exit successfully with an optional informational message."""
    if msg:
        out.info(msg)
    raise typer.Exit(EXIT_OK)


def die(msg: str, code: int = EXIT_USAGE) -> NoReturn:
    """Exit with an error message and optional exit code."""
    out.error(msg)
    raise typer.Exit(code)


def warn_exit(msg: str, code: int = EXIT_OK) -> NoReturn:
    """Exit with a warning message and optional exit code."""
    out.warn(msg)
    raise typer.Exit(code)


def exit_from_exc(exc: Exception, *, message: str, code: int = EXIT_USAGE) -> NoReturn:
    """
    Print an error message and exit with a given code, chaining the cause.

    Keeps error exits uniform across commands.
    """
    out.error(message)
    raise typer.Exit(code) from exc
