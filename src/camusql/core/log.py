"""Logging setup for the `camusql` logger tree."""

import logging

from rich.console import Console
from rich.logging import RichHandler

LOGGER_NAME = "camusql"


def configure_logging(verbose: bool = False, console: Console | None = None) -> logging.Logger:
    """Attach a RichHandler to the package logger; idempotent.

    WARNING and above by default, DEBUG when `verbose` is set.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)

    if not any(isinstance(handler, RichHandler) for handler in logger.handlers):
        handler = RichHandler(
            console=console or Console(stderr=True),
            show_path=False,
            rich_tracebacks=True,
        )
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)

    return logger
