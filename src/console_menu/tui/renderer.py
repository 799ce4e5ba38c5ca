"""
Menu rendering.

``render_menu`` turns the menu state into a :class:`Frame`: the text rows to
write plus the cursor arithmetic needed to redraw in place.  ``MenuRenderer``
writes frames to an :class:`~console_menu.tui.output.OutputSink`, moving the
cursor back over the previous frame instead of clearing the screen.

Cursor model: a frame is written starting at column 0 of its first row
(the *origin*).  Every row ends with a newline, so after writing the cursor
sits at column 0 one row below the last row.  The frame then parks the
cursor on the hotkey of the selected row (the *anchor*).
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from console_menu.logging import get_logger
from console_menu.tui.classifier import classify
from console_menu.tui.glyphs import GlyphTable
from console_menu.tui.keys import RawKeyEvent
from console_menu.tui.output import OutputSink

if TYPE_CHECKING:
    from console_menu.config import MenuOptions
    from console_menu.models import MenuContext, MenuItem

logger = get_logger("tui.renderer")

NO_HOTKEY = "*"

# Columns in front of the title: decorator, hotkey, decorator, space
TITLE_PREFIX_WIDTH = 4

_PANEL_COLUMNS: list[tuple[str, int]] = [
    ("char", 4),
    ("shift", 5),
    ("ctrl", 5),
    ("alt", 5),
    ("meta", 5),
    ("raw", 5),
]


# ---------------------------------------------------------------------------
# Frame
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Frame:
    """
    One rendered menu.

    Attributes
    ----------
    lines:
        Every row to write, keypress panel included.
    height:
        Rows of the menu proper (borders, header, items, help message).
    anchor:
        ``(column, row)`` of the selected item's hotkey, relative to the origin.
    """

    lines: list[str] = field(default_factory=list)
    height: int = 0
    anchor: tuple[int, int] = (0, 0)

    @property
    def cursor_delta(self) -> tuple[int, int]:
        """Move from the end of the written frame to the anchor."""
        col, row = self.anchor
        return col, row - len(self.lines)

    @property
    def reset_delta(self) -> tuple[int, int]:
        """Move from the anchor back to the origin."""
        col, row = self.anchor
        return -col, -row

    @property
    def exit_delta(self) -> tuple[int, int]:
        """Move from the anchor to column 0 of the row below the menu."""
        col, row = self.anchor
        return -col, self.height - row


# ---------------------------------------------------------------------------
# Pure rendering
# ---------------------------------------------------------------------------

def menu_width(header: str | None, titles: dict[int, str]) -> int:
    """Width of the content column, borders excluded."""
    width = 0
    for title in titles.values():
        width = max(width, TITLE_PREFIX_WIDTH + len(title))
    if header:
        width = max(width, len(header))
    return width


def render_menu(
    items: Sequence[MenuItem],
    options: MenuOptions,
    current_index: int,
    scroll_offset: int,
    glyphs: GlyphTable,
    context: MenuContext,
    last_key: RawKeyEvent | None = None,
) -> Frame:
    """
    Render the menu.

    Parameters
    ----------
    items:
        All menu items; only the visible window is drawn.
    options:
        Menu options.
    current_index:
        Index of the selected item (never a separator).
    scroll_offset:
        Index of the first visible item.
    glyphs:
        Border and decoration glyphs.
    context:
        Passed to computed titles and help messages.
    last_key:
        Shown in the keypress panel when ``options.show_keypress`` is set.

    Returns
    -------
    Frame
    """
    header = options.header
    border = options.border
    page_size = options.page_size
    count = len(items)

    scroll_end = min(count, scroll_offset + page_size) if page_size else count
    scrolled_up = bool(page_size) and scroll_offset > 0
    scrolled_down = bool(page_size) and scroll_end < count

    # Computed titles are evaluated once per frame, for every item
    titles = {
        i: item.resolve_title(options, context)
        for i, item in enumerate(items)
        if not item.separator
    }
    width = menu_width(header, titles)

    g = glyphs
    left = f"{g.left_vertical} " if border else " "
    right = f" {g.right_vertical}" if border else ""

    lines: list[str] = []

    # Top border
    if border:
        if scrolled_up and not header:
            lines.append(_indicator_rule(g.top_left, g.horizontal, g.scroll_up, g.top_right, width))
        else:
            lines.append(g.top_left + g.horizontal * (width + 2) + g.top_right)

    # Header row + header bottom border
    if header:
        lines.append(left + header.ljust(width) + right)
        if border:
            if scrolled_up:
                lines.append(_indicator_rule(
                    g.left_junction, g.inner_horizontal, g.scroll_up, g.right_junction, width,
                ))
            else:
                lines.append(g.left_junction + g.inner_horizontal * (width + 2) + g.right_junction)

    items_top = len(lines)

    # Visible items
    for i in range(scroll_offset, scroll_end):
        item = items[i]
        if item.separator:
            lines.append(left + " " * width + right)
            continue
        hotkey = item.hotkey or NO_HOTKEY
        before, after = g.selected if i == current_index else g.unselected
        title = titles[i]
        lines.append(
            left + before + hotkey + after + " " + title
            + " " * (width - len(title) - TITLE_PREFIX_WIDTH) + right
        )

    # Bottom border
    if border:
        if scrolled_down:
            lines.append(_indicator_rule(g.bottom_left, g.horizontal, g.scroll_down, g.bottom_right, width))
        else:
            lines.append(g.bottom_left + g.horizontal * (width + 2) + g.bottom_right)

    # Help message, one row even when empty
    current = items[current_index]
    help_text = current.resolve_help(options, context)
    if help_text is None:
        help_message = options.help_message
        help_text = help_message(current, options, context) if callable(help_message) else help_message
    lines.extend(str(help_text or "").split("\n"))

    height = len(lines)

    if options.show_keypress:
        lines.extend(render_keypress_panel(last_key))

    anchor = (len(left) + 1, items_top + current_index - scroll_offset)
    return Frame(lines=lines, height=height, anchor=anchor)


def _indicator_rule(start: str, line: str, indicator: str, end: str, width: int) -> str:
    return start + line * 2 + indicator + line * (width - 2) + end


def render_keypress_panel(key: RawKeyEvent | None) -> list[str]:
    """Fixed-width table showing the last key event, preceded by two blank rows."""
    header_cells = [name.ljust(w) for name, w in _PANEL_COLUMNS]
    header = "| " + " | ".join(header_cells) + " |"
    rule_width = len(header) - 2

    if key is not None:
        label = classify(key).label
        values = [
            label,
            str(key.shift),
            str(key.ctrl),
            str(key.alt),
            str(key.meta),
            str(key.raw_code),
        ]
        cells = [
            value.rjust(w) if name in ("char", "raw") else value.ljust(w)
            for value, (name, w) in zip(values, _PANEL_COLUMNS)
        ]
        row = "| " + " | ".join(cells) + " |"
    else:
        row = "|" + " " * rule_width + "|"

    return [
        "",
        "",
        "." + "-" * rule_width + ".",
        header,
        row,
        "'" + "-" * rule_width + "'",
    ]


# ---------------------------------------------------------------------------
# Drawing
# ---------------------------------------------------------------------------

class MenuRenderer:
    """
    In-place frame writer.

    Keeps the previously drawn frame so the next one can move the cursor
    back to the origin and overwrite it row by row.

    Parameters
    ----------
    output:
        The terminal sink.
    """

    def __init__(self, output: OutputSink) -> None:
        self._output = output
        self._frame: Frame | None = None

    @property
    def frame(self) -> Frame | None:
        """The frame currently on screen."""
        return self._frame

    def draw(self, frame: Frame) -> None:
        """Draw *frame*, replacing the previous one, and park the cursor on the anchor."""
        previous = self._frame
        out = self._output
        if previous is not None:
            out.move_cursor(*previous.reset_delta)

        for line in frame.lines:
            out.clear_line(0)
            out.write(line + "\n")

        if previous is not None and len(frame.lines) < len(previous.lines):
            out.clear_screen_down()

        out.move_cursor(*frame.cursor_delta)
        out.flush()
        self._frame = frame
        logger.debug("Drew frame: %d rows, anchor=%s", len(frame.lines), frame.anchor)

    def finish(self, clear: bool = False) -> None:
        """
        Leave the terminal in a usable state after the last frame.

        The cursor moves to the row below the menu and anything under it
        (the keypress panel) is erased.  With *clear* the menu itself is
        erased too and the cursor returns to the origin.
        """
        frame = self._frame
        if frame is None:
            return
        if clear:
            self._output.move_cursor(*frame.reset_delta)
        else:
            self._output.move_cursor(*frame.exit_delta)
        self._output.clear_screen_down()
        self._output.flush()
        self._frame = None
