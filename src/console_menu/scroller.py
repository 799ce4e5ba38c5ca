"""Viewport scrolling arithmetic."""

from __future__ import annotations

from console_menu.tui.classifier import Command


def scroll(
    old_offset: int,
    new_index: int,
    page_size: int,
    command: Command | None,
    item_count: int,
) -> int:
    """
    Return the scroll offset that keeps *new_index* inside the viewport.

    Arrow keys and hotkeys scroll by the minimum needed to reveal the new
    selection; PageUp/PageDown scroll by a full page, clamped to the list.
    With paging disabled (``page_size == 0``) the offset is always 0.
    """
    if page_size <= 0:
        return 0

    if new_index < old_offset:
        if command is Command.PAGE_UP:
            return max(0, old_offset - page_size)
        return new_index

    if new_index >= old_offset + page_size:
        if command is Command.PAGE_DOWN:
            return max(0, min(item_count - page_size, old_offset + page_size))
        return new_index - page_size + 1

    return old_offset
