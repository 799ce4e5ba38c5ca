"""
Exceptions raised by the console menu.

All of them signal a caller contract violation and are raised before the
menu subscribes to keyboard input or writes anything to the terminal.
"""

from __future__ import annotations


class MenuError(Exception):
    """Base class for every error raised by ``console_menu``."""


class UsageError(MenuError, TypeError):
    """The items argument (or an item in it) is missing or malformed."""


class ConfigurationError(MenuError, ValueError):
    """The menu options cannot be honoured (unknown design, bad glyph string, ...)."""


class EmptyMenuError(MenuError):
    """The menu has no selectable (non-separator) item."""
