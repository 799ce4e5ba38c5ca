"""
Menu data models.

``MenuItem`` holds the recognised item fields plus an open-ended ``extra``
side-table for user data that passes through to the caller untouched.
``MenuContext`` is what computed titles, help messages and custom key
actions receive to reach the terminal.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Union

from console_menu.tui.output import OutputSink

if TYPE_CHECKING:
    from console_menu.config import MenuOptions

# (item, options, context) -> text
TextCallback = Callable[["MenuItem", "MenuOptions", "MenuContext"], str]
TextSource = Union[str, TextCallback]

# (item, options, context) -> None; may mutate the item or the options
Action = Callable[["MenuItem", "MenuOptions", "MenuContext"], None]


# ---------------------------------------------------------------------------
# MenuContext
# ---------------------------------------------------------------------------

class MenuContext:
    """
    Terminal access handed to item callbacks.

    Wraps the menu's :class:`OutputSink` with a few line-oriented helpers.
    Anything drawn here is overwritten by the next menu redraw unless it is
    placed below the menu.
    """

    def __init__(self, output: OutputSink) -> None:
        self._output = output

    @property
    def output(self) -> OutputSink:
        return self._output

    def write(self, text: str, clear_direction: int = 1) -> None:
        """Clear the line (right of the cursor by default), then write."""
        self._output.clear_line(clear_direction)
        self._output.write(text)

    def writeln(self, text: str = "", clear_direction: int = 0) -> None:
        self.write(text + "\n", clear_direction)

    def inscribe(self, text: str) -> None:
        """Write *text* and put the cursor back where it was."""
        lines = text.split("\n")
        self._output.write(text)
        # Multi-line text returns to column 0 of the starting row
        self._output.move_cursor(-len(lines[-1]), -(len(lines) - 1))

    def move_cursor(self, dx: int, dy: int = 0) -> None:
        self._output.move_cursor(dx, dy)

    def clear_line(self, direction: int = 0) -> None:
        self._output.clear_line(direction)

    def clear_screen_down(self) -> None:
        self._output.clear_screen_down()


# ---------------------------------------------------------------------------
# MenuItem
# ---------------------------------------------------------------------------

_ITEM_FIELDS = (
    "title",
    "hotkey",
    "selected",
    "separator",
    "help_message",
    "prevent",
    "actions",
)


@dataclass(eq=False)
class MenuItem:
    """
    A single menu entry.

    Attributes
    ----------
    title:
        Display text, or a callback ``(item, options, context) -> str``
        evaluated on every redraw.
    hotkey:
        Single character selecting the item directly.  Items without one
        show a placeholder and are reached with the arrow keys.
    selected:
        Initially highlight this item (the first flagged item wins).
    separator:
        A blank, non-selectable spacer row.  All other fields are ignored.
    help_message:
        Text (or callback) shown under the menu while this item is current,
        replacing ``MenuOptions.help_message``.
    prevent:
        Never resolve the menu with this item; useful when the item exists
        only to host custom *actions*.
    actions:
        Raw key code -> callback run when that key is pressed while this
        item is current.
    extra:
        User data carried through to the result.
    """

    title: TextSource = ""
    hotkey: str | None = None
    selected: bool = False
    separator: bool = False
    help_message: TextSource | None = None
    prevent: bool = False
    actions: dict[int, Action] = field(default_factory=dict)
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def spacer(cls, **extra: Any) -> MenuItem:
        """Create a separator item."""
        return cls(separator=True, extra=dict(extra))

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> MenuItem:
        """
        Create an item from a mapping.

        Recognised keys fill the item fields; every other key lands in
        ``extra``.
        """
        known = {k: data[k] for k in _ITEM_FIELDS if k in data}
        extra = {k: v for k, v in data.items() if k not in _ITEM_FIELDS}
        if known.get("actions") is None:
            known.pop("actions", None)
        return cls(
            title=known.get("title", ""),
            hotkey=known.get("hotkey"),
            selected=bool(known.get("selected", False)),
            separator=bool(known.get("separator", False)),
            help_message=known.get("help_message"),
            prevent=bool(known.get("prevent", False)),
            actions=dict(known.get("actions", {})),
            extra=extra,
        )

    # ------------------------------------------------------------------
    # Pass-through access
    # ------------------------------------------------------------------

    def __getitem__(self, key: str) -> Any:
        if key in _ITEM_FIELDS:
            return getattr(self, key)
        return self.extra[key]

    def __contains__(self, key: object) -> bool:
        return key in _ITEM_FIELDS or key in self.extra

    def get(self, key: str, default: Any = None) -> Any:
        try:
            return self[key]
        except KeyError:
            return default

    def to_dict(self) -> dict[str, Any]:
        """
        Flatten the item into a plain dict.

        Callable titles and help messages, and the actions map, are left
        out since they do not serialise.
        """
        if self.separator:
            return {"separator": True, **self.extra}

        data: dict[str, Any] = {}
        if not callable(self.title):
            data["title"] = self.title
        if self.hotkey is not None:
            data["hotkey"] = self.hotkey
        if self.selected:
            data["selected"] = True
        if self.help_message is not None and not callable(self.help_message):
            data["help_message"] = self.help_message
        if self.prevent:
            data["prevent"] = True
        data.update(self.extra)
        return data

    # ------------------------------------------------------------------
    # Render-time text
    # ------------------------------------------------------------------

    def resolve_title(self, options: MenuOptions, context: MenuContext) -> str:
        if callable(self.title):
            return str(self.title(self, options, context))
        return str(self.title)

    def resolve_help(self, options: MenuOptions, context: MenuContext) -> str | None:
        if self.help_message is None:
            return None
        if callable(self.help_message):
            return str(self.help_message(self, options, context))
        return str(self.help_message)
