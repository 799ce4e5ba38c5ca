"""Tests for viewport scrolling arithmetic."""

from __future__ import annotations

import pytest

from console_menu.scroller import scroll
from console_menu.tui.classifier import Command


class TestScroll:
    """Tests for scroll()."""

    def test_paging_disabled_always_zero(self) -> None:
        assert scroll(3, 10, 0, Command.DOWN, 20) == 0
        assert scroll(0, 0, 0, None, 1) == 0

    def test_inside_viewport_keeps_offset(self) -> None:
        assert scroll(5, 7, 5, Command.DOWN, 12) == 5
        assert scroll(5, 5, 5, Command.UP, 12) == 5
        assert scroll(5, 9, 5, None, 12) == 5

    def test_arrow_down_scrolls_minimally(self) -> None:
        assert scroll(0, 5, 5, Command.DOWN, 12) == 1

    def test_arrow_up_scrolls_minimally(self) -> None:
        assert scroll(5, 4, 5, Command.UP, 12) == 4

    def test_hotkey_jump_below_reveals_at_bottom(self) -> None:
        assert scroll(0, 10, 5, None, 12) == 6

    def test_hotkey_jump_above_reveals_at_top(self) -> None:
        assert scroll(7, 2, 5, None, 12) == 2

    def test_page_down_scrolls_full_page(self) -> None:
        assert scroll(0, 5, 5, Command.PAGE_DOWN, 12) == 5

    def test_page_down_clamps_to_last_page(self) -> None:
        assert scroll(5, 10, 5, Command.PAGE_DOWN, 12) == 7

    def test_page_down_never_negative(self) -> None:
        assert scroll(0, 3, 2, Command.PAGE_DOWN, 1) == 0

    def test_page_up_scrolls_full_page(self) -> None:
        assert scroll(7, 6, 5, Command.PAGE_UP, 12) == 2

    def test_page_up_clamps_to_zero(self) -> None:
        assert scroll(3, 0, 5, Command.PAGE_UP, 12) == 0

    @pytest.mark.parametrize("command", [Command.DOWN, Command.UP, Command.END, Command.HOME, None])
    @pytest.mark.parametrize("old_offset", [0, 3, 7])
    def test_new_index_always_visible(self, command: Command | None, old_offset: int) -> None:
        for new_index in range(12):
            offset = scroll(old_offset, new_index, 5, command, 12)
            assert offset <= new_index < offset + 5
