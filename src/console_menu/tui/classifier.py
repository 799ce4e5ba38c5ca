"""
Key event classification.

Maps a :class:`~console_menu.tui.keys.RawKeyEvent` onto the logical menu
commands, or onto a literal character used for hotkey matching.
Classification is a table lookup on the raw code and never raises.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from console_menu.tui.keys import (
    VK_BACKSPACE,
    VK_DELETE,
    VK_DOWN,
    VK_END,
    VK_ENTER,
    VK_ESCAPE,
    VK_F1,
    VK_HOME,
    VK_INSERT,
    VK_LEFT,
    VK_PAGE_DOWN,
    VK_PAGE_UP,
    VK_RIGHT,
    VK_TAB,
    VK_UP,
    RawKeyEvent,
)


class Command(str, Enum):
    """Logical menu commands."""

    ENTER = "enter"
    UP = "up"
    DOWN = "down"
    PAGE_UP = "page_up"
    PAGE_DOWN = "page_down"
    HOME = "home"
    END = "end"
    CANCEL = "cancel"


_COMMAND_CODES: dict[int, Command] = {
    VK_ENTER: Command.ENTER,
    VK_UP: Command.UP,
    VK_DOWN: Command.DOWN,
    VK_PAGE_UP: Command.PAGE_UP,
    VK_PAGE_DOWN: Command.PAGE_DOWN,
    VK_END: Command.END,
    VK_HOME: Command.HOME,
    VK_ESCAPE: Command.CANCEL,
}

# Symbols shown in the keypress panel
_COMMAND_LABELS: dict[Command, str] = {
    Command.ENTER: "↵",
    Command.UP: "↑",
    Command.DOWN: "↓",
    Command.PAGE_UP: "⇞",
    Command.PAGE_DOWN: "⇟",
    Command.HOME: "⇱",
    Command.END: "⇲",
    Command.CANCEL: "ESC",
}

# Codes that never produce a character
_NON_CHARACTER_LABELS: dict[int, str] = {
    VK_LEFT: "←",
    VK_RIGHT: "→",
    VK_TAB: "TAB",
    VK_BACKSPACE: "BS",
    VK_INSERT: "INS",
    VK_DELETE: "DEL",
    **{VK_F1 + n: f"F{n + 1}" for n in range(12)},
}

VK_C = ord("C")

RESERVED_CODES: frozenset[int] = frozenset({VK_ENTER, VK_ESCAPE})
"""Raw codes a custom item action may not be bound to."""


@dataclass(frozen=True)
class KeyCommand:
    """
    Result of classifying one key event.

    Exactly one of *command* / *char* is meaningful: a key that maps to a
    command has ``char == ""``; any other key carries its literal character
    (possibly empty for keys that produce none).
    """

    command: Command | None
    char: str = ""
    label: str = ""

    @property
    def is_cancel(self) -> bool:
        return self.command is Command.CANCEL


def is_cancel(event: RawKeyEvent) -> bool:
    """Escape, or Ctrl+C."""
    return event.raw_code == VK_ESCAPE or (event.ctrl and event.raw_code == VK_C)


def literal_char(event: RawKeyEvent) -> str:
    """The character a non-command key stands for, derived from its code when absent."""
    if event.char:
        return event.char
    if event.raw_code in _NON_CHARACTER_LABELS or event.raw_code <= 0:
        return ""
    try:
        return chr(event.raw_code)
    except (ValueError, OverflowError):
        return ""


def classify(event: RawKeyEvent) -> KeyCommand:
    """
    Classify a raw key event.

    Parameters
    ----------
    event:
        The key press to classify.

    Returns
    -------
    KeyCommand
        The logical command, or a literal character candidate for hotkey
        matching.
    """
    if is_cancel(event):
        return KeyCommand(Command.CANCEL, label=_COMMAND_LABELS[Command.CANCEL])

    command = _COMMAND_CODES.get(event.raw_code)
    if command is not None:
        return KeyCommand(command, label=_COMMAND_LABELS[command])

    char = literal_char(event)
    label = _NON_CHARACTER_LABELS.get(event.raw_code, char)
    return KeyCommand(None, char=char, label=label)
