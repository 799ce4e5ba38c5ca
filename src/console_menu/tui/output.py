"""
Terminal output sinks.

The menu only needs four capabilities from the terminal: write text, move
the cursor by a relative offset, clear (part of) the current line and clear
from the cursor to the end of the screen.  ``OutputSink`` names them;
``TerminalOutput`` implements them with ANSI escape sequences.
"""

from __future__ import annotations

import sys
from abc import ABC, abstractmethod
from typing import TextIO

from console_menu.tui.ansi import clear_line, clear_screen_down, move_cursor


class OutputSink(ABC):
    """Abstract terminal output capability."""

    @abstractmethod
    def write(self, text: str) -> None:
        """Write *text* at the cursor position."""
        ...

    @abstractmethod
    def move_cursor(self, dx: int, dy: int = 0) -> None:
        """Move the cursor *dx* columns right and *dy* rows down (negative = left/up)."""
        ...

    @abstractmethod
    def clear_line(self, direction: int = 0) -> None:
        """Clear left of the cursor (-1), right of it (1) or the whole line (0)."""
        ...

    @abstractmethod
    def clear_screen_down(self) -> None:
        """Clear from the cursor to the end of the screen."""
        ...

    def flush(self) -> None:
        """Push buffered output to the device.  No-op by default."""


class TerminalOutput(OutputSink):
    """
    ANSI output sink.

    Parameters
    ----------
    output:
        Writable text stream, defaults to ``sys.stdout``.
    """

    def __init__(self, output: TextIO | None = None) -> None:
        self._output: TextIO = output or sys.stdout

    @property
    def stream(self) -> TextIO:
        return self._output

    def write(self, text: str) -> None:
        self._output.write(text)

    def move_cursor(self, dx: int, dy: int = 0) -> None:
        seq = move_cursor(dx, dy)
        if seq:
            self._output.write(seq)

    def clear_line(self, direction: int = 0) -> None:
        self._output.write(clear_line(direction))

    def clear_screen_down(self) -> None:
        self._output.write(clear_screen_down())

    def flush(self) -> None:
        self._output.flush()
