"""Shared pytest fixtures for console-menu tests."""

from __future__ import annotations

import pytest

from console_menu.models import MenuContext, MenuItem
from console_menu.tui.keys import RawKeyEvent
from console_menu.tui.output import OutputSink


class RecordingOutput(OutputSink):
    """
    Output sink that simulates a terminal screen.

    Tracks the cursor as ``(col, row)`` relative to where drawing started
    and keeps the characters written to each row, so tests can check both
    what ends up on screen and where the cursor is parked.
    """

    def __init__(self) -> None:
        self.col = 0
        self.row = 0
        self.rows: list[list[str]] = []
        self.calls: list[tuple] = []

    @property
    def cursor(self) -> tuple[int, int]:
        return self.col, self.row

    def _row(self) -> list[str]:
        while len(self.rows) <= self.row:
            self.rows.append([])
        return self.rows[self.row]

    def write(self, text: str) -> None:
        self.calls.append(("write", text))
        for ch in text:
            if ch == "\n":
                self.row += 1
                self.col = 0
                continue
            row = self._row()
            while len(row) < self.col:
                row.append(" ")
            if len(row) == self.col:
                row.append(ch)
            else:
                row[self.col] = ch
            self.col += 1

    def move_cursor(self, dx: int, dy: int = 0) -> None:
        self.calls.append(("move", dx, dy))
        self.col = max(0, self.col + dx)
        self.row = max(0, self.row + dy)

    def clear_line(self, direction: int = 0) -> None:
        self.calls.append(("clear_line", direction))
        row = self._row()
        if direction == 0:
            row.clear()
        elif direction == 1:
            del row[self.col:]
        else:
            for i in range(min(self.col + 1, len(row))):
                row[i] = " "

    def clear_screen_down(self) -> None:
        self.calls.append(("clear_down",))
        row = self._row()
        del row[self.col:]
        del self.rows[self.row + 1:]

    def flush(self) -> None:
        self.calls.append(("flush",))

    @property
    def screen(self) -> list[str]:
        """Rows on screen, trailing empty rows dropped."""
        lines = ["".join(row) for row in self.rows]
        while lines and not lines[-1]:
            lines.pop()
        return lines

    def count(self, name: str) -> int:
        return sum(1 for call in self.calls if call[0] == name)


def key(code: int, char: str = "", **modifiers: bool) -> RawKeyEvent:
    """Shorthand for building key events."""
    return RawKeyEvent(raw_code=code, char=char, **modifiers)


def char_key(ch: str) -> RawKeyEvent:
    """Key event for a typed character, keyed by its uppercase code."""
    return RawKeyEvent(raw_code=ord(ch.upper()), shift=ch.isupper(), char=ch)


@pytest.fixture(autouse=True)
def default_design(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep tests independent of the caller's CONSOLE_MENU_DESIGN."""
    monkeypatch.delenv("CONSOLE_MENU_DESIGN", raising=False)


@pytest.fixture
def output() -> RecordingOutput:
    return RecordingOutput()


@pytest.fixture
def context(output: RecordingOutput) -> MenuContext:
    return MenuContext(output)


@pytest.fixture
def simple_items() -> list[MenuItem]:
    """A, separator, B (selected)."""
    return [
        MenuItem(hotkey="a", title="Alpha"),
        MenuItem.spacer(),
        MenuItem(hotkey="b", title="Bravo", selected=True),
    ]


@pytest.fixture
def many_items() -> list[MenuItem]:
    """Twelve items without separators."""
    return [MenuItem(title=f"Item {i}") for i in range(12)]
