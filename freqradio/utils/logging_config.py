"""
Logging setup for the command-line front end.

Library modules only create module-level loggers; handlers are installed
here, once, by whoever owns the process.
"""

from __future__ import annotations

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler

FILE_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: int | str = logging.INFO, log_file: Optional[str] = None,
                  console: Console | None = None) -> None:
    """
    Set up logging with a rich console handler and optionally a file handler.

    Args:
        level: Logging level (e.g., logging.INFO, "DEBUG").
        log_file: Optional path to a file for logging output.
        console: Console to log to (defaults to stderr).
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logger = logging.getLogger()
    logger.setLevel(level)

    # Clear existing handlers to avoid duplicates
    if logger.hasHandlers():
        logger.handlers.clear()

    ch = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
        log_time_format=f"[{DATE_FORMAT}]",
    )
    ch.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    logger.addHandler(ch)

    if log_file:
        fh = logging.FileHandler(log_file)
        fh.setFormatter(logging.Formatter(fmt=FILE_FORMAT, datefmt=DATE_FORMAT))
        logger.addHandler(fh)


def get_logger(name: str, level: int = logging.INFO) -> logging.Logger:
    """Retrieve a logger with the given name and level."""
    logger = logging.getLogger(name)
    logger.setLevel(level)
    return logger
