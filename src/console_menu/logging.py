"""
Logging utilities for the console menu.

Provides a centralized logging configuration for the entire package.
The library never configures handlers on import; call :func:`setup_logging`
from an application (the CLI does so for ``--verbose``).
"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

# Package root logger
_root_logger = logging.getLogger("console_menu")


def setup_logging(
    level: str | int = "INFO",
    format: str | None = None,
    stream: TextIO | None = None,
    file: str | None = None,
) -> None:
    """
    Configure logging for the console menu.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL) or int
        format: Custom log format string
        stream: Output stream (defaults to stderr)
        file: Optional file path to write logs

    Example:
        from console_menu.logging import setup_logging

        # Basic setup
        setup_logging("DEBUG")

        # Keep the terminal clean while a menu is drawn
        setup_logging("DEBUG", file="menu.log")
    """
    level = _coerce_level(level)
    _root_logger.setLevel(level)
    _root_logger.handlers.clear()

    if format is None:
        format = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

    formatter = logging.Formatter(format)

    if file:
        file_handler = logging.FileHandler(file)
        file_handler.setFormatter(formatter)
        file_handler.setLevel(level)
        _root_logger.addHandler(file_handler)

    # A file-only setup skips the stream handler unless one is asked for
    if stream is not None or not file:
        stream_handler = logging.StreamHandler(stream or sys.stderr)
        stream_handler.setFormatter(formatter)
        stream_handler.setLevel(level)
        _root_logger.addHandler(stream_handler)


def _coerce_level(level: str | int) -> int:
    # Unknown names fall back to INFO
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.INFO)
    return level


def get_logger(name: str) -> logging.Logger:
    """
    Get a child logger for a submodule.

    Args:
        name: Submodule name (e.g., "engine", "tui.input")

    Returns:
        Logger instance
    """
    if name.startswith("console_menu."):
        return logging.getLogger(name)
    return logging.getLogger(f"console_menu.{name}")


def set_level(level: str | int) -> None:
    """
    Set the log level for the console menu.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL) or int
    """
    _root_logger.setLevel(_coerce_level(level))


def disable() -> None:
    """Disable all logging for the console menu."""
    for logger in _package_loggers():
        logger.disabled = True


def enable() -> None:
    """Re-enable logging for the console menu."""
    for logger in _package_loggers():
        logger.disabled = False


def _package_loggers() -> list[logging.Logger]:
    # Child records reach the root handlers even when the root is disabled
    loggers = [_root_logger]
    for name, logger in logging.Logger.manager.loggerDict.items():
        if name.startswith("console_menu.") and isinstance(logger, logging.Logger):
            loggers.append(logger)
    return loggers
