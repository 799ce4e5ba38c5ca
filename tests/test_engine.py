"""Tests for the interactive menu engine."""

from __future__ import annotations

import asyncio

import pytest

from console_menu.config import MenuOptions
from console_menu.engine import Menu, coerce_items, show_menu
from console_menu.errors import ConfigurationError, EmptyMenuError, UsageError
from console_menu.models import MenuContext, MenuItem
from console_menu.tui.input import ScriptedKeySource
from console_menu.tui.keys import (
    VK_DOWN,
    VK_ENTER,
    VK_ESCAPE,
    VK_LEFT,
    VK_RIGHT,
    VK_UP,
)

from conftest import RecordingOutput, char_key, key


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


class TestCoerceItems:
    """Tests for item validation."""

    @pytest.mark.parametrize("items", [None, "abc", b"abc", {"title": "x"}, 42, []])
    def test_bad_collections(self, items) -> None:
        with pytest.raises(UsageError):
            coerce_items(items)

    def test_usage_error_is_type_error(self) -> None:
        with pytest.raises(TypeError):
            coerce_items(None)

    def test_bad_element(self) -> None:
        with pytest.raises(UsageError, match="Item 1"):
            coerce_items([MenuItem(title="ok"), "not an item"])

    @pytest.mark.parametrize("hotkey", ["ab", "", 5])
    def test_bad_hotkey(self, hotkey) -> None:
        with pytest.raises(UsageError):
            coerce_items([MenuItem(title="x", hotkey=hotkey)])

    @pytest.mark.parametrize("code", [VK_ENTER, VK_ESCAPE])
    def test_reserved_action_codes(self, code: int) -> None:
        with pytest.raises(UsageError, match="reserved"):
            coerce_items([MenuItem(title="x", actions={code: lambda *args: None})])

    def test_non_integer_action_code(self) -> None:
        with pytest.raises(UsageError):
            coerce_items([MenuItem(title="x", actions={"right": lambda *args: None})])

    def test_mappings_converted(self) -> None:
        items = coerce_items([{"hotkey": "a", "title": "A", "command": "go"}, {"separator": True}])
        assert isinstance(items[0], MenuItem)
        assert items[0]["command"] == "go"
        assert items[1].separator is True

    def test_tuple_accepted(self) -> None:
        assert len(coerce_items((MenuItem(title="a"),))) == 1

    def test_separator_fields_not_checked(self) -> None:
        assert coerce_items([MenuItem(separator=True, hotkey="toolong"), MenuItem(title="a")])


class TestMenuConstruction:
    """Errors are raised before any terminal I/O."""

    def test_empty_items(self, output: RecordingOutput) -> None:
        with pytest.raises(UsageError):
            Menu([], output=output)
        assert output.calls == []

    def test_only_separators(self, output: RecordingOutput) -> None:
        with pytest.raises(EmptyMenuError):
            Menu([MenuItem.spacer()], output=output)
        assert output.calls == []

    def test_unknown_design(self, output: RecordingOutput) -> None:
        with pytest.raises(ConfigurationError, match="There are 20 designs available."):
            Menu([MenuItem(title="a")], MenuOptions(design_id=21), output=output)
        assert output.calls == []

    def test_bad_design_string(self, output: RecordingOutput) -> None:
        with pytest.raises(ConfigurationError):
            Menu([MenuItem(title="a")], MenuOptions(design_string="short"), output=output)

    def test_options_mapping(self, output: RecordingOutput) -> None:
        menu = Menu([MenuItem(title="a")], {"header": "H", "page_size": 3}, output=output)
        assert menu.options.header == "H"
        assert menu.options.page_size == 3

    def test_options_mapping_empty_help(self, output: RecordingOutput) -> None:
        menu = Menu([MenuItem(title="a")], {"help_message": ""}, output=output)
        frame = menu.render()
        assert frame.lines[-1] == ""
        assert frame.height == 2

    def test_initial_state(self, simple_items: list[MenuItem], output: RecordingOutput) -> None:
        menu = Menu(simple_items, output=output)
        assert menu.state.current_index == 2
        assert menu.items == simple_items
        assert isinstance(menu.context, MenuContext)
        assert menu.glyphs.top_left == "┌"


# ---------------------------------------------------------------------------
# Interaction
# ---------------------------------------------------------------------------


class TestShowMenu:
    """End-to-end menu runs with scripted keys."""

    @pytest.mark.asyncio
    async def test_enter_returns_initial_selection(self, simple_items: list[MenuItem], output: RecordingOutput) -> None:
        source = ScriptedKeySource([key(VK_ENTER)])

        item = await show_menu(simple_items, output=output, key_source=source)

        assert item is simple_items[2]

    @pytest.mark.asyncio
    async def test_navigate_then_enter(self, simple_items: list[MenuItem], output: RecordingOutput) -> None:
        source = ScriptedKeySource([key(VK_UP), key(VK_ENTER)])

        item = await show_menu(simple_items, output=output, key_source=source)

        assert item is simple_items[0]

    @pytest.mark.asyncio
    async def test_hotkey(self, simple_items: list[MenuItem], output: RecordingOutput) -> None:
        source = ScriptedKeySource([char_key("A")])
        assert await show_menu(simple_items, output=output, key_source=source) is simple_items[0]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("event", [key(VK_ESCAPE), key(ord("C"), "c", ctrl=True)])
    async def test_cancel_returns_none(self, simple_items: list[MenuItem], output: RecordingOutput, event) -> None:
        source = ScriptedKeySource([event])
        assert await show_menu(simple_items, output=output, key_source=source) is None

    @pytest.mark.asyncio
    async def test_mapping_items_return_extra(self, output: RecordingOutput) -> None:
        items = [{"hotkey": "d", "title": "Deploy", "command": "deploy"}]
        source = ScriptedKeySource([char_key("d")])

        item = await show_menu(items, output=output, key_source=source)

        assert item["command"] == "deploy"
        assert item.to_dict() == {"hotkey": "d", "title": "Deploy", "command": "deploy"}

    @pytest.mark.asyncio
    async def test_unsubscribes_after_resolution(self, simple_items: list[MenuItem], output: RecordingOutput) -> None:
        source = ScriptedKeySource([char_key("a"), key(VK_DOWN), key(VK_ENTER)])

        item = await show_menu(simple_items, output=output, key_source=source)

        assert item is simple_items[0]
        assert source.subscriber_count == 0
        assert source.running is False
        assert source.delivered == [char_key("a")]
        assert len(source.remaining) == 2

    @pytest.mark.asyncio
    async def test_draws_in_place(self, many_items: list[MenuItem], output: RecordingOutput) -> None:
        options = MenuOptions(header="Numbers", border=True, page_size=5)
        events = [key(VK_DOWN)] * 7 + [key(VK_UP)] * 2
        menu = Menu(many_items, options, output=output, key_source=ScriptedKeySource(events))

        task = asyncio.create_task(menu.show())
        for _ in range(len(events) + 2):
            await asyncio.sleep(0)

        frame = menu.render()
        assert output.screen == frame.lines
        assert output.cursor == frame.anchor
        assert menu.state.current_index == 5
        assert menu.state.scroll_offset == 3
        assert output.count("clear_down") == 0

        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

    @pytest.mark.asyncio
    async def test_cursor_below_menu_after_choice(self, simple_items: list[MenuItem], output: RecordingOutput) -> None:
        options = MenuOptions(help_message="Help", show_keypress=True)
        menu = Menu(simple_items, options, output=output, key_source=ScriptedKeySource([key(VK_UP), key(VK_ENTER)]))

        await menu.show()

        assert output.cursor == (0, 4)
        assert output.screen == [" [a] Alpha", "          ", "  b) Bravo", "Help"]

    @pytest.mark.asyncio
    async def test_clear_on_exit(self, simple_items: list[MenuItem], output: RecordingOutput) -> None:
        options = MenuOptions(clear_on_exit=True)
        await show_menu(simple_items, options, output=output, key_source=ScriptedKeySource([key(VK_ENTER)]))

        assert output.screen == []
        assert output.cursor == (0, 0)

    @pytest.mark.asyncio
    async def test_action_mutation_redraws(self, output: RecordingOutput) -> None:
        def title(item: MenuItem, options: MenuOptions, context: MenuContext) -> str:
            return f"Count {item.extra['n']}"

        def bump(step: int):
            def action(item: MenuItem, options: MenuOptions, context: MenuContext) -> None:
                item.extra["n"] += step
            return action

        counter = MenuItem(
            hotkey="c",
            title=title,
            prevent=True,
            actions={VK_RIGHT: bump(1), VK_LEFT: bump(-1)},
            extra={"n": 0},
        )
        items = [counter, MenuItem(hotkey="q", title="Quit")]
        events = [key(VK_RIGHT), key(VK_RIGHT), key(VK_RIGHT), key(VK_LEFT), key(VK_ENTER), char_key("q")]
        options = MenuOptions(help_message="")

        item = await show_menu(items, options, output=output, key_source=ScriptedKeySource(events))

        assert item is items[1]
        assert counter.extra["n"] == 2
        assert output.screen[0] == " [c] Count 2"

    @pytest.mark.asyncio
    async def test_action_exception_propagates(self, output: RecordingOutput) -> None:
        def boom(*args) -> None:
            raise RuntimeError("action failed")

        source = ScriptedKeySource([key(VK_RIGHT), key(VK_ENTER)])
        items = [MenuItem(title="a", actions={VK_RIGHT: boom})]

        with pytest.raises(RuntimeError, match="action failed"):
            await show_menu(items, output=output, key_source=source)

        assert source.subscriber_count == 0
        assert source.running is False

    @pytest.mark.asyncio
    async def test_task_cancellation_releases_source(self, simple_items: list[MenuItem], output: RecordingOutput) -> None:
        source = ScriptedKeySource([])
        task = asyncio.create_task(show_menu(simple_items, output=output, key_source=source))
        await asyncio.sleep(0)
        assert source.subscriber_count == 1

        task.cancel()
        with pytest.raises(asyncio.CancelledError):
            await task

        assert source.subscriber_count == 0
        assert source.running is False

    @pytest.mark.asyncio
    async def test_show_once(self, simple_items: list[MenuItem], output: RecordingOutput) -> None:
        menu = Menu(simple_items, output=output, key_source=ScriptedKeySource([key(VK_ENTER)]))
        await menu.show()
        with pytest.raises(UsageError):
            await menu.show()

    @pytest.mark.asyncio
    async def test_errors_before_subscribing(self, output: RecordingOutput) -> None:
        source = ScriptedKeySource([key(VK_ENTER)])
        with pytest.raises(UsageError):
            await show_menu(None, output=output, key_source=source)
        assert source.subscriber_count == 0
        assert output.calls == []
