"""
ANSI escape sequence utilities for terminal rendering.

Provides the relative cursor movement and line/screen clearing primitives
the menu needs to redraw itself in place.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Escape sequences
# ---------------------------------------------------------------------------

ESC = "\033"
CSI = f"{ESC}["


# ---------------------------------------------------------------------------
# Cursor movement
# ---------------------------------------------------------------------------

def cursor_up(n: int = 1) -> str:
    """Move cursor up by *n* rows."""
    return f"{CSI}{n}A"


def cursor_down(n: int = 1) -> str:
    """Move cursor down by *n* rows."""
    return f"{CSI}{n}B"


def cursor_forward(n: int = 1) -> str:
    """Move cursor right by *n* columns."""
    return f"{CSI}{n}C"


def cursor_back(n: int = 1) -> str:
    """Move cursor left by *n* columns."""
    return f"{CSI}{n}D"


def move_cursor(dx: int, dy: int) -> str:
    """
    Move the cursor by a relative offset.

    Negative *dx* moves left, negative *dy* moves up.  A zero component
    emits nothing for that axis, so ``move_cursor(0, 0) == ""``.
    """
    seq = ""
    if dx < 0:
        seq += cursor_back(-dx)
    elif dx > 0:
        seq += cursor_forward(dx)
    if dy < 0:
        seq += cursor_up(-dy)
    elif dy > 0:
        seq += cursor_down(dy)
    return seq


# ---------------------------------------------------------------------------
# Screen / line clearing
# ---------------------------------------------------------------------------

# Direction: -1 = left of the cursor, 1 = right of the cursor, 0 = whole line
_CLEAR_LINE_MODES: dict[int, int] = {-1: 1, 0: 2, 1: 0}


def clear_line(direction: int = 0) -> str:
    """Erase part or all of the current line."""
    try:
        mode = _CLEAR_LINE_MODES[direction]
    except KeyError:
        raise ValueError(f"Invalid clear direction: {direction!r}") from None
    return f"{CSI}{mode}K"


def clear_screen_down() -> str:
    """Clear from the cursor to the end of the screen."""
    return f"{CSI}0J"
