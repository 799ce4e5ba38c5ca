"""
Command-line interface for the console menu.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from io import StringIO
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.table import Table
from rich.text import Text

from console_menu.config import MenuOptions, load_menu
from console_menu.engine import show_menu
from console_menu.errors import MenuError
from console_menu.logging import setup_logging
from console_menu.models import MenuContext, MenuItem
from console_menu.tui.glyphs import DESIGN_COUNT, get_glyph_table
from console_menu.tui.keys import VK_LEFT, VK_RIGHT
from console_menu.tui.output import TerminalOutput
from console_menu.tui.renderer import render_menu

console = Console()


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Keyboard-driven console menus",
        prog="console-menu",
    )

    # Global options
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable verbose output (debug logging)",
    )
    parser.add_argument(
        "--log-file",
        help="Write logs to a file instead of stderr",
    )

    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Show command
    show_parser = subparsers.add_parser("show", help="Show a menu defined in a YAML file")
    show_parser.add_argument("file", help="Menu definition (YAML)")
    show_parser.add_argument("--design", type=int, help="Glyph design id")
    show_parser.add_argument("--page-size", type=int, help="Max visible items")
    show_parser.add_argument(
        "--keypress",
        action="store_true",
        help="Show the keypress inspection panel",
    )

    # Designs command
    designs_parser = subparsers.add_parser("designs", help="Preview the built-in glyph designs")
    designs_parser.add_argument("--id", type=int, dest="design_id", help="Preview a single design")

    # Demo command
    demo_parser = subparsers.add_parser("demo", help="Run the example menus")
    demo_parser.add_argument("--design", type=int, help="Glyph design id")

    args = parser.parse_args(argv)

    if args.verbose:
        setup_logging("DEBUG", file=args.log_file)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    try:
        if args.command == "show":
            cmd_show(args)
        elif args.command == "designs":
            cmd_designs(args)
        elif args.command == "demo":
            cmd_demo(args)
    except MenuError as e:
        console.print(f"[red]Error:[/red] {e}")
        sys.exit(1)


# ---------------------------------------------------------------------------
# show
# ---------------------------------------------------------------------------

def cmd_show(args: argparse.Namespace) -> None:
    """Run a YAML-defined menu and print the chosen item as JSON."""
    path = Path(args.file)
    if not path.is_file():
        console.print(f"[red]Error:[/red] Menu file not found: {path}")
        sys.exit(1)

    definition = load_menu(path)
    options = definition.options
    if args.design is not None:
        options.design_id = args.design
    if args.page_size is not None:
        options.page_size = args.page_size
    if args.keypress:
        options.show_keypress = True

    item = asyncio.run(show_menu(definition.items, options))
    if item is None:
        console.print("You cancelled the menu.")
        sys.exit(130)
    console.print_json(json.dumps(item.to_dict()))


# ---------------------------------------------------------------------------
# designs
# ---------------------------------------------------------------------------

def preview_design(design_id: int) -> str:
    """Render a small sample menu with design *design_id*."""
    items = [
        MenuItem(hotkey="a", title="Alpha"),
        MenuItem(hotkey="b", title="Bravo"),
        MenuItem(hotkey="c", title="Charlie"),
    ]
    options = MenuOptions(header="Header", border=True, page_size=2, help_message="", design_id=design_id)
    context = MenuContext(TerminalOutput(StringIO()))
    frame = render_menu(items, options, 1, 1, get_glyph_table(design_id), context)
    return "\n".join(frame.lines[:frame.height - 1])


def cmd_designs(args: argparse.Namespace) -> None:
    """Print a table previewing the glyph designs."""
    ids = [args.design_id] if args.design_id is not None else range(1, DESIGN_COUNT + 1)

    table = Table(title="Glyph designs")
    table.add_column("ID", style="cyan", justify="right")
    table.add_column("Glyphs", style="dim")
    table.add_column("Preview")

    for design_id in ids:
        glyphs = get_glyph_table(design_id)
        table.add_row(str(design_id), Text("\n".join(glyphs.rows)), Text(preview_design(design_id)))

    console.print(table)


# ---------------------------------------------------------------------------
# demo
# ---------------------------------------------------------------------------

def _counter_title(item: MenuItem, options: MenuOptions, context: MenuContext) -> str:
    return f"Counter: {item.extra['count']}  (Left/Right)"


def _change_counter(step: int):
    def action(item: MenuItem, options: MenuOptions, context: MenuContext) -> None:
        item.extra["count"] += step
    return action


def demo_items() -> list[MenuItem]:
    """The first-level demo menu."""
    return [
        MenuItem.spacer(),
        MenuItem(hotkey="1", title="One"),
        MenuItem(hotkey="2", title="Two", selected=True),
        MenuItem(hotkey="3", title="Three"),
        MenuItem(hotkey="4", title="Four"),
        MenuItem.spacer(),
        MenuItem(
            hotkey="+",
            title=_counter_title,
            prevent=True,
            help_message="Left/Right change the counter; it cannot be chosen.",
            actions={VK_LEFT: _change_counter(-1), VK_RIGHT: _change_counter(1)},
            extra={"count": 0},
        ),
        MenuItem(hotkey="0", title="Do something else...", extra={"cascade": True}),
        MenuItem.spacer(),
        MenuItem(hotkey="?", title="Help"),
        MenuItem(hotkey="X", title="Exit loop"),
    ]


def submenu_items() -> list[MenuItem]:
    return [
        MenuItem(hotkey=hotkey, title=f"Item {hotkey.upper()}", extra={"subitem": True})
        for hotkey in "abcdefghij"
    ]


async def run_demo(design_id: int | None = None) -> MenuItem | None:
    """Cascading demo: loops until Exit or Escape."""
    extra: dict[str, Any] = {"design_id": design_id} if design_id is not None else {}
    while True:
        item = await show_menu(demo_items(), MenuOptions(header="Test menu", border=True, **extra))
        if item is None:
            console.print("You cancelled the menu.")
            return None

        if item.get("cascade"):
            console.print(f"You chose: {json.dumps(item.to_dict())}")
            item = await show_menu(
                submenu_items(),
                MenuOptions(header="Another menu", border=True, page_size=5, **extra),
            )
            if item is None:
                console.print("You cancelled the menu.")
                continue

        console.print(f"You chose: {json.dumps(item.to_dict())}")
        if item.hotkey == "X":
            confirm = await show_menu(
                [MenuItem(title="Stay"), MenuItem(title="Exit", hotkey="X")],
                MenuOptions(**extra),
            )
            if confirm is not None and confirm.hotkey == "X":
                return confirm


def cmd_demo(args: argparse.Namespace) -> None:
    asyncio.run(run_demo(args.design))


if __name__ == "__main__":
    main()
