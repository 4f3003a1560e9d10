"""Centralized logging configuration for yoy.

- ``configure_logging(...)``: attach a single rich handler to the package
  logger (``"yoy"``). Called once by the CLI at startup.
- ``get_logger(name)``: acquire a logger, keeping a ``NullHandler`` on the
  package logger until the application configures it.

Library modules must never attach their own handlers.
"""

import logging
import os

from rich.console import Console
from rich.logging import RichHandler

_PKG_LOGGER_NAME = "yoy"
_ENV_LEVEL = "YOY_LOG_LEVEL"
_CONFIGURED = False


def parse_level(level: int | str | None) -> int:
    """Resolve a logging level.

    Args:
        level: Level as int or name (e.g. "INFO"). None falls back to the
            YOY_LOG_LEVEL environment variable, then WARNING.

    Returns:
        Numeric logging level.
    """
    for candidate in (level, os.getenv(_ENV_LEVEL)):
        if isinstance(candidate, int):
            return candidate
        if isinstance(candidate, str):
            name = candidate.strip().upper()
            if name.isdigit():
                return int(name)
            numeric = getattr(logging, name, None)
            if isinstance(numeric, int):
                return numeric
    return logging.WARNING


def configure_logging(level: int | str | None = None) -> None:
    """Configure the package logger exactly once.

    Args:
        level: Logging level as int or level name. See ``parse_level``.
    """
    global _CONFIGURED
    if _CONFIGURED:
        return

    logger = logging.getLogger(_PKG_LOGGER_NAME)
    for h in list(logger.handlers):
        if isinstance(h, logging.NullHandler):
            logger.removeHandler(h)

    numeric = parse_level(level)
    handler = RichHandler(console=Console(stderr=True), show_path=False)
    handler.setLevel(numeric)
    handler.setFormatter(logging.Formatter("%(name)s %(message)s"))

    logger.setLevel(numeric)
    logger.addHandler(handler)
    logger.propagate = False

    _CONFIGURED = True


def get_logger(name: str) -> logging.Logger:
    """Return a logger by name, silent until ``configure_logging`` runs."""
    pkg_logger = logging.getLogger(_PKG_LOGGER_NAME)
    if not _CONFIGURED and not pkg_logger.handlers:
        pkg_logger.addHandler(logging.NullHandler())
    return logging.getLogger(name)
