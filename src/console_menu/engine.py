"""
Interactive menu engine.

Example:
    from console_menu import MenuItem, MenuOptions, show_menu

    item = await show_menu(
        [
            MenuItem(hotkey="1", title="One"),
            MenuItem.spacer(),
            MenuItem(hotkey="2", title="Two", selected=True),
        ],
        MenuOptions(header="Pick a number", border=True),
    )
    if item is None:
        print("Cancelled")
"""

from __future__ import annotations

import asyncio
from collections import Counter
from collections.abc import Mapping, Sequence
from typing import Any

from console_menu.config import MenuOptions
from console_menu.errors import UsageError
from console_menu.logging import get_logger
from console_menu.models import MenuContext, MenuItem
from console_menu.state import SelectionStateMachine
from console_menu.tui.classifier import RESERVED_CODES
from console_menu.tui.glyphs import GlyphTable, resolve_glyph_table
from console_menu.tui.input import KeySource, TerminalKeySource
from console_menu.tui.keys import RawKeyEvent
from console_menu.tui.output import OutputSink, TerminalOutput
from console_menu.tui.renderer import Frame, MenuRenderer, render_menu

logger = get_logger("engine")


def coerce_items(items: Any) -> list[MenuItem]:
    """
    Validate the caller's items and turn mappings into :class:`MenuItem`.

    Raises
    ------
    UsageError
        If *items* is missing, not a sequence, empty, or holds something
        other than items or mappings.
    """
    if items is None or isinstance(items, (str, bytes, Mapping)) or not isinstance(items, Sequence):
        raise UsageError("A nonempty items sequence is required.")
    if len(items) < 1:
        raise UsageError("A nonempty items sequence is required.")

    result: list[MenuItem] = []
    for position, raw in enumerate(items):
        if isinstance(raw, MenuItem):
            item = raw
        elif isinstance(raw, Mapping):
            item = MenuItem.from_dict(raw)
        else:
            raise UsageError(
                f"Item {position} must be a MenuItem or a mapping, got {type(raw).__name__}"
            )
        if not item.separator:
            _check_item(position, item)
        result.append(item)

    hotkeys = Counter(item.hotkey for item in result if not item.separator and item.hotkey)
    for hotkey, seen in hotkeys.items():
        if seen > 1:
            logger.debug("Hotkey %r is used by %d items; the first one wins", hotkey, seen)
    return result


def _check_item(position: int, item: MenuItem) -> None:
    if item.hotkey is not None and (not isinstance(item.hotkey, str) or len(item.hotkey) != 1):
        raise UsageError(f"Item {position}: hotkey must be a single character, got {item.hotkey!r}")
    for code in item.actions:
        if isinstance(code, bool) or not isinstance(code, int):
            raise UsageError(f"Item {position}: action keys must be integer key codes, got {code!r}")
        if code in RESERVED_CODES:
            raise UsageError(f"Item {position}: key code {code} is reserved and cannot carry an action")


class Menu:
    """
    One menu invocation.

    Construction validates everything up front (items, glyph table, initial
    selection) and raises before any terminal I/O; :meth:`show` then draws
    the menu and waits for the user.  A ``Menu`` can be shown once.

    Parameters
    ----------
    items:
        Sequence of :class:`MenuItem` or mappings with the same keys.
    options:
        :class:`MenuOptions`, a mapping of option fields, or ``None``.
    output:
        Terminal sink, defaults to ANSI on ``sys.stdout``.
    key_source:
        Keyboard events, defaults to a raw-mode ``sys.stdin`` reader.
    """

    def __init__(
        self,
        items: Sequence[MenuItem | Mapping[str, Any]],
        options: MenuOptions | Mapping[str, Any] | None = None,
        *,
        output: OutputSink | None = None,
        key_source: KeySource | None = None,
    ) -> None:
        self._items = coerce_items(items)
        if options is None:
            options = MenuOptions()
        elif isinstance(options, Mapping):
            options = MenuOptions.from_dict(dict(options))
        self._options: MenuOptions = options
        self._glyphs: GlyphTable = resolve_glyph_table(options.design_id, options.design_string)
        self._state = SelectionStateMachine(self._items, options)

        self._output: OutputSink = output or TerminalOutput()
        self._key_source = key_source
        self._context = MenuContext(self._output)
        self._renderer = MenuRenderer(self._output)
        self._shown = False

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def items(self) -> list[MenuItem]:
        return list(self._items)

    @property
    def options(self) -> MenuOptions:
        return self._options

    @property
    def glyphs(self) -> GlyphTable:
        return self._glyphs

    @property
    def state(self) -> SelectionStateMachine:
        return self._state

    @property
    def context(self) -> MenuContext:
        return self._context

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def render(self, last_key: RawKeyEvent | None = None) -> Frame:
        """Render the current state without drawing it."""
        return render_menu(
            self._items,
            self._options,
            self._state.current_index,
            self._state.scroll_offset,
            self._glyphs,
            self._context,
            last_key,
        )

    # ------------------------------------------------------------------
    # Interaction
    # ------------------------------------------------------------------

    async def show(self) -> MenuItem | None:
        """
        Draw the menu and wait for a choice.

        Returns
        -------
        MenuItem | None
            The chosen item, or ``None`` if the menu was cancelled.
        """
        if self._shown:
            raise UsageError("A menu can only be shown once.")
        self._shown = True

        loop = asyncio.get_running_loop()
        result: asyncio.Future[MenuItem | None] = loop.create_future()
        source = self._key_source or TerminalKeySource()
        token: int | None = None

        logger.debug(
            "Showing menu: %d items, page_size=%d, current=%d",
            len(self._items), self._options.page_size, self._state.current_index,
        )
        self._renderer.draw(self.render())

        def release() -> None:
            nonlocal token
            if token is not None:
                source.unsubscribe(token)
                token = None
            if source.running:
                source.stop()

        def on_key(event: RawKeyEvent) -> None:
            if result.done():
                return
            try:
                transition = self._state.handle(event, self._context)
                if transition.resolved:
                    # Unsubscribe before resolving so no later key reaches this handler
                    release()
                    self._renderer.finish(clear=self._options.clear_on_exit)
                    result.set_result(transition.item)
                elif transition.redraw:
                    self._renderer.draw(self.render(event))
            except Exception as e:
                release()
                if not result.done():
                    result.set_exception(e)

        token = source.subscribe(on_key)
        try:
            source.start()
            return await result
        except BaseException:
            release()
            self._renderer.finish()
            raise
        finally:
            release()


async def show_menu(
    items: Sequence[MenuItem | Mapping[str, Any]],
    options: MenuOptions | Mapping[str, Any] | None = None,
    *,
    output: OutputSink | None = None,
    key_source: KeySource | None = None,
) -> MenuItem | None:
    """
    Display a menu and wait for the user to pick an item.

    Returns the chosen :class:`MenuItem` (mappings are converted, with
    unrecognised keys available through ``item["key"]`` / ``item.extra``),
    or ``None`` if the user cancelled with Escape or Ctrl+C.

    Raises
    ------
    UsageError, ConfigurationError, EmptyMenuError
        Before anything is drawn, if the items or options are invalid.
    """
    menu = Menu(items, options, output=output, key_source=key_source)
    return await menu.show()
