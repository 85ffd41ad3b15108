"""Exit handling utilities for the CLI."""

from typing import NoReturn

import typer

from idxops.cli.common.output import out


def exit_from_exc(exc: Exception, *, message: str, code: int = 1) -> NoReturn:
    """
    Helper function to print an error message and exit with a given code.

    Keeps the original exception chained to the exit.
    """
    out.error(message)
    raise typer.Exit(code) from exc
