"""Logging setup for the command line."""

from __future__ import annotations

import logging
import os

from rich.console import Console
from rich.logging import RichHandler

LOG_LEVEL_ENV = "METHODKIT_LOG_LEVEL"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def default_log_level() -> str:
    return os.environ.get(LOG_LEVEL_ENV, "WARNING").upper()


def configure_logging(level: str | int, console: Console | None = None) -> None:
    """Route ``methodkit`` log records through Rich on stderr."""
    logger = logging.getLogger("methodkit")
    logger.setLevel(level)
    logger.handlers.clear()

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=False,
        show_path=False,
        markup=False,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
