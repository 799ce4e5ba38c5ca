"""
Selection state machine.

Owns the current selection and scroll position of one menu invocation and
applies classified key events to them.  Rendering and terminal I/O live
elsewhere; custom item actions receive the ``MenuContext`` passed in.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING

from console_menu.errors import EmptyMenuError
from console_menu.logging import get_logger
from console_menu.scroller import scroll
from console_menu.tui.classifier import Command, KeyCommand, classify
from console_menu.tui.keys import RawKeyEvent

if TYPE_CHECKING:
    from console_menu.config import MenuOptions
    from console_menu.models import MenuContext, MenuItem

logger = get_logger("state")


@dataclass(frozen=True)
class Transition:
    """
    Outcome of one key event.

    Attributes
    ----------
    resolved:
        The menu is finished; no further events are processed.
    item:
        The chosen item when resolved, ``None`` when cancelled.
    redraw:
        The visible state changed (or diagnostics are on) and the menu
        should be drawn again.
    key:
        The classified key.
    """

    resolved: bool = False
    item: MenuItem | None = None
    redraw: bool = False
    key: KeyCommand | None = None

    @property
    def cancelled(self) -> bool:
        return self.resolved and self.item is None


def initial_index(items: Sequence[MenuItem]) -> int:
    """
    Index of the first item flagged ``selected``, else of the first selectable item.

    Raises
    ------
    EmptyMenuError
        If every item is a separator.
    """
    for i, item in enumerate(items):
        if item.selected and not item.separator:
            return i
    for i, item in enumerate(items):
        if not item.separator:
            return i
    raise EmptyMenuError("The menu has no selectable item.")


class SelectionStateMachine:
    """
    Tracks ``current_index`` and ``scroll_offset`` for a fixed item list.

    Invariants after every transition: the current item is never a
    separator, and with paging enabled
    ``scroll_offset <= current_index < scroll_offset + page_size``.
    The window starts at the top unless the initially selected item lies
    beyond the first page, in which case it is scrolled just enough to
    show that item.

    Parameters
    ----------
    items:
        The menu items.  The sequence is copied; the items are not.
    options:
        Menu options, shared with (and mutable by) custom actions.
    """

    def __init__(self, items: Sequence[MenuItem], options: MenuOptions) -> None:
        self._items: tuple[MenuItem, ...] = tuple(items)
        self._options = options
        self._current_index = initial_index(self._items)
        self._scroll_offset = scroll(
            0, self._current_index, options.page_size, None, len(self._items),
        )
        self._resolved = False
        self._result: MenuItem | None = None

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def items(self) -> tuple[MenuItem, ...]:
        return self._items

    @property
    def options(self) -> MenuOptions:
        return self._options

    @property
    def current_index(self) -> int:
        return self._current_index

    @property
    def scroll_offset(self) -> int:
        return self._scroll_offset

    @property
    def current_item(self) -> MenuItem:
        return self._items[self._current_index]

    @property
    def resolved(self) -> bool:
        return self._resolved

    @property
    def result(self) -> MenuItem | None:
        return self._result

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def find_hotkey(self, char: str) -> MenuItem | None:
        """First exact hotkey match, else the first case-insensitive one."""
        if not char:
            return None
        candidates = [item for item in self._items if not item.separator and item.hotkey]
        for item in candidates:
            if item.hotkey == char:
                return item
        lowered = char.lower()
        for item in candidates:
            if item.hotkey.lower() == lowered:
                return item
        return None

    def next_index(self, command: Command | None) -> int | None:
        """
        Index a navigation command moves to, or ``None`` when it does not move.

        Separators are skipped: Up/Down keep going in their own direction,
        page and Home/End jumps step back towards the current item.
        """
        items = self._items
        count = len(items)
        current = self._current_index
        page_size = self._options.page_size

        if command is Command.UP and current > 0:
            index = current - 1
            while index >= 0 and items[index].separator:
                index -= 1
        elif command is Command.DOWN and current < count - 1:
            index = current + 1
            while index < count and items[index].separator:
                index += 1
        elif command is Command.PAGE_UP and current > 0:
            index = max(0, current - page_size) if page_size else 0
            while index < count and items[index].separator:
                index += 1
        elif command is Command.PAGE_DOWN and current < count - 1:
            index = min(count - 1, current + page_size) if page_size else count - 1
            while index >= 0 and items[index].separator:
                index -= 1
        elif command is Command.HOME and current > 0:
            index = 0
            while index < count and items[index].separator:
                index += 1
        elif command is Command.END and current < count - 1:
            index = count - 1
            while index >= 0 and items[index].separator:
                index -= 1
        else:
            return None

        if not 0 <= index < count or index == current:
            return None
        return index

    # ------------------------------------------------------------------
    # Transition
    # ------------------------------------------------------------------

    def handle(self, event: RawKeyEvent, context: MenuContext) -> Transition:
        """
        Apply one key event.

        Order: the current item's custom action for the raw code runs first;
        Enter or a hotkey then resolves with a non-prevented item, and Cancel
        resolves with ``None``; otherwise navigation moves the selection.
        """
        key = classify(event)
        if self._resolved:
            logger.debug("Ignoring key after resolution: %s", key.label)
            return Transition(resolved=True, item=self._result, key=key)

        item = self.current_item
        action_invoked = False
        action = item.actions.get(event.raw_code)
        if action is not None:
            logger.debug("Running action for key %d on item %d", event.raw_code, self._current_index)
            action(item, self._options, context)
            action_invoked = True

        selection: MenuItem | None = None
        if key.command is Command.ENTER:
            selection = item
        elif not key.is_cancel:
            selection = self.find_hotkey(key.char)

        if key.is_cancel or (selection is not None and not selection.prevent):
            self._resolved = True
            self._result = None if key.is_cancel else selection
            logger.debug("Menu resolved: %s", "cancelled" if key.is_cancel else selection.hotkey or "enter")
            return Transition(resolved=True, item=self._result, key=key)

        if selection is not None:
            index = self._items.index(selection)
            new_index = index if index != self._current_index else None
        else:
            new_index = self.next_index(key.command)

        if new_index is not None:
            self._scroll_offset = scroll(
                self._scroll_offset, new_index, self._options.page_size,
                key.command, len(self._items),
            )
            self._current_index = new_index
            logger.debug(
                "Selection moved to %d (offset %d) by %s",
                new_index, self._scroll_offset, key.command or key.char,
            )
            return Transition(redraw=True, key=key)

        # Enter or a hotkey on a prevented item still redraws, as does any key with diagnostics on
        redraw = action_invoked or selection is not None or self._options.show_keypress
        return Transition(redraw=redraw, key=key)
