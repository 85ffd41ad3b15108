"""Logging configuration for the CLI."""

import logging

from rich.logging import RichHandler

from idxops.cli.common.output import err_console


def configure_logging(verbose: bool = False) -> None:
    """Route `idxops` loggers to stderr through rich."""
    logger = logging.getLogger("idxops")
    logger.handlers.clear()
    handler = RichHandler(console=err_console, show_path=False, markup=False)
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.propagate = False
