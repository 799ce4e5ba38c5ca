"""Tests for ANSI sequences and the terminal output sink."""

from __future__ import annotations

from io import StringIO

import pytest

from console_menu.tui.ansi import clear_line, clear_screen_down, move_cursor
from console_menu.tui.output import TerminalOutput


class TestAnsi:
    """Tests for escape sequence builders."""

    def test_move_cursor(self) -> None:
        assert move_cursor(0, 0) == ""
        assert move_cursor(3, 0) == "\x1b[3C"
        assert move_cursor(-2, 0) == "\x1b[2D"
        assert move_cursor(0, -4) == "\x1b[4A"
        assert move_cursor(1, 2) == "\x1b[1C\x1b[2B"

    def test_clear_line(self) -> None:
        assert clear_line(-1) == "\x1b[1K"
        assert clear_line(0) == "\x1b[2K"
        assert clear_line(1) == "\x1b[0K"

    def test_clear_line_invalid(self) -> None:
        with pytest.raises(ValueError):
            clear_line(2)

    def test_clear_screen_down(self) -> None:
        assert clear_screen_down() == "\x1b[0J"


class TestTerminalOutput:
    """Tests for TerminalOutput."""

    def test_writes_sequences(self) -> None:
        stream = StringIO()
        out = TerminalOutput(stream)

        out.write("menu")
        out.move_cursor(-4, -1)
        out.move_cursor(0, 0)
        out.clear_line()
        out.clear_screen_down()
        out.flush()

        assert stream.getvalue() == "menu\x1b[4D\x1b[1A\x1b[2K\x1b[0J"
        assert out.stream is stream
