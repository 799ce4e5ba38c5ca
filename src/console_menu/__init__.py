"""
Console Menu - keyboard-driven single-select menus for the terminal.

Draws a list of items, lets the user move with the arrow keys or jump with
hotkeys, and resolves asynchronously to the chosen item (or ``None`` when
cancelled).

Example:
    import asyncio
    from console_menu import MenuItem, MenuOptions, show_menu

    async def main():
        item = await show_menu(
            [
                {"hotkey": "1", "title": "One"},
                {"separator": True},
                {"hotkey": "2", "title": "Two", "selected": True},
            ],
            MenuOptions(header="Test menu", border=True),
        )
        print(item.to_dict() if item else "You cancelled the menu.")

    asyncio.run(main())
"""

from console_menu.config import (
    DEFAULT_HELP_MESSAGE,
    MenuDefinition,
    MenuOptions,
    get_default_design_id,
    load_menu,
)
from console_menu.engine import Menu, show_menu
from console_menu.errors import ConfigurationError, EmptyMenuError, MenuError, UsageError
from console_menu.logging import get_logger, setup_logging
from console_menu.models import Action, MenuContext, MenuItem
from console_menu.state import SelectionStateMachine, Transition
from console_menu.tui.glyphs import DESIGN_COUNT, GlyphTable, get_glyph_table
from console_menu.tui.input import KeySource, ScriptedKeySource, TerminalKeySource
from console_menu.tui.keys import RawKeyEvent
from console_menu.tui.output import OutputSink, TerminalOutput

__version__ = "0.1.0"

__all__ = [
    # Engine
    "Menu",
    "show_menu",
    "SelectionStateMachine",
    "Transition",
    # Models
    "MenuItem",
    "MenuContext",
    "Action",
    # Config
    "MenuOptions",
    "MenuDefinition",
    "load_menu",
    "get_default_design_id",
    "DEFAULT_HELP_MESSAGE",
    # Errors
    "MenuError",
    "UsageError",
    "ConfigurationError",
    "EmptyMenuError",
    # Terminal
    "RawKeyEvent",
    "KeySource",
    "ScriptedKeySource",
    "TerminalKeySource",
    "OutputSink",
    "TerminalOutput",
    "GlyphTable",
    "get_glyph_table",
    "DESIGN_COUNT",
    # Logging
    "setup_logging",
    "get_logger",
]
