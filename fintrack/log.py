"""Logging setup for fintrack.

Modules log through ``logging.getLogger(__name__)``; this installs a single
rich handler on the package logger so output lands on stderr next to the
rich tables printed on stdout.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

PACKAGE_LOGGER = "fintrack"


def configure_logging(level: str = "WARNING") -> logging.Logger:
    """Configure the fintrack logger.

    Args:
        level: Level name (DEBUG, INFO, WARNING, ERROR).

    Returns:
        The configured package logger.

    Raises:
        ValueError: If level is not a known level name.
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        raise ValueError(f"Unknown log level: {level}")

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(numeric_level)
    logger.handlers.clear()

    handler = RichHandler(console=Console(stderr=True), show_path=False, rich_tracebacks=True)
    handler.setFormatter(logging.Formatter("%(message)s", datefmt="[%X]"))
    logger.addHandler(handler)
    logger.propagate = False

    return logger
