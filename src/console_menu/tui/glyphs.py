"""
Border and decoration glyph tables.

A glyph table is 25 characters read as a 5x5 grid::

    ┌──┬┐   top-left, outer horizontal, inner horizontal, top junction, top-right
    ├/\\┼┤   left junction, scroll-up indicator (2), cross, right junction
    │ )││   vertical, unselected decorator (2), vertical, vertical
    │[]││   item left vertical, selected decorator (2), vertical, item right vertical
    └\\/┴┘   bottom-left, scroll-down indicator (2), bottom junction, bottom-right

The decorators wrap the item hotkey: ``[k]`` for the selected item and
`` k)`` for the others with the first design.
"""

from __future__ import annotations

from dataclasses import dataclass

from console_menu.errors import ConfigurationError

GLYPH_COUNT = 25
TABLE_WIDTH = 5
TABLE_HEIGHT = 5


# ---------------------------------------------------------------------------
# Built-in designs
# ---------------------------------------------------------------------------

DESIGNS: list[tuple[str, str, str, str, str]] = [
    # Light box, the default
    ("┌──┬┐", r"├/\┼┤", "│ )││", "│[]││", r"└\/┴┘"),
    # ASCII
    (".--+.", r"+/\++", "| )||", "|[]||", r"'\/+'"),
    ("+--++", r"+/\++", "| )||", "|[]||", r"+\/++"),
    # Double and heavy lines
    ("╒══╤╕", r"╞/\╪╡", "│ )││", "│[]││", r"╘\/╧╛"),
    ("╔══╦╗", r"╠/\╬╣", "║ )║║", "║[]║║", r"╚\/╩╝"),
    ("┏━━┳┓", r"┣/\╋┫", "┃ )┃┃", "┃[]┃┃", r"┗\/┻┛"),
    ("┌──┬┐", r"┢/\╈┪", "│ )││", "│[]││", r"┗\/┻┛"),
    ("┼──┼┼", r"┼/\┼┼", "│ )││", "│[]││", r"┼\/┼┼"),
    ("╋━━╋╋", r"╋/\╋╋", "┃ )┃┃", "┃[]┃┃", r"╋\/╋╋"),
    # Open sides
    ("┌───┐", r"│/\ │", "│ ) │", "│[] │", r"└\/─┘"),
    ("┌  ┬┐", r"├/\┼┤", "  )  ", " []  ", r"└\/┴┘"),
    ("┌   ┐", r" /\  ", "  )  ", " []  ", r"└\/ ┘"),
    ("     ", r" /\  ", "  )  ", " []  ", r" \/  "),
    # Rules only
    (" ─── ", r" /\  ", "  )  ", " []  ", r" \/─ "),
    (" ─── ", r" /\─ ", "  )  ", " []  ", r" \/─ "),
    ("═════", r"═/\══", "  )  ", " []  ", r"═\/══"),
    ("━━━━━", r"━/\━━", "  )  ", " []  ", r"━\/━━"),
    # Verticals only
    ("     ", r"│/\││", "│ )││", "│[]││", r" \/  "),
    ("     ", r" /\┼ ", "  )│ ", " []│ ", r" \/  "),
    ("     ", r"│/\  ", "│ )  ", "│[]  ", r" \/  "),
]

DESIGN_COUNT = len(DESIGNS)


# ---------------------------------------------------------------------------
# GlyphTable
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class GlyphTable:
    """
    An immutable 25-glyph table.

    Attributes
    ----------
    glyphs:
        The glyphs in row-major order; see the module docstring for the
        position of each one.
    """

    glyphs: str

    def __post_init__(self) -> None:
        if len(self.glyphs) != GLYPH_COUNT:
            raise ConfigurationError(
                f"A design string must be exactly {GLYPH_COUNT} characters long, "
                f"got {len(self.glyphs)}."
            )

    @classmethod
    def from_string(cls, design: str) -> GlyphTable:
        """Build a table from a literal 25-character design string."""
        if not isinstance(design, str):
            raise ConfigurationError("A design string must be a str.")
        return cls(design)

    @classmethod
    def from_rows(cls, rows: tuple[str, ...] | list[str]) -> GlyphTable:
        return cls("".join(rows))

    def at(self, row: int, column: int) -> str:
        return self.glyphs[row * TABLE_WIDTH + column]

    @property
    def rows(self) -> list[str]:
        return [
            self.glyphs[i:i + TABLE_WIDTH]
            for i in range(0, GLYPH_COUNT, TABLE_WIDTH)
        ]

    # Corners --------------------------------------------------------------

    @property
    def top_left(self) -> str:
        return self.at(0, 0)

    @property
    def top_right(self) -> str:
        return self.at(0, 4)

    @property
    def bottom_left(self) -> str:
        return self.at(4, 0)

    @property
    def bottom_right(self) -> str:
        return self.at(4, 4)

    # Lines and junctions --------------------------------------------------

    @property
    def horizontal(self) -> str:
        """Top and bottom border line."""
        return self.at(0, 1)

    @property
    def inner_horizontal(self) -> str:
        """Line between the header and the items."""
        return self.at(0, 2)

    @property
    def left_junction(self) -> str:
        return self.at(1, 0)

    @property
    def right_junction(self) -> str:
        return self.at(1, 4)

    @property
    def top_junction(self) -> str:
        return self.at(0, 3)

    @property
    def cross(self) -> str:
        return self.at(1, 3)

    @property
    def bottom_junction(self) -> str:
        return self.at(4, 3)

    @property
    def left_vertical(self) -> str:
        return self.at(3, 0)

    @property
    def right_vertical(self) -> str:
        return self.at(3, 4)

    # Decorators -----------------------------------------------------------

    @property
    def scroll_up(self) -> str:
        return self.at(1, 1) + self.at(1, 2)

    @property
    def scroll_down(self) -> str:
        return self.at(4, 1) + self.at(4, 2)

    @property
    def unselected(self) -> tuple[str, str]:
        return self.at(2, 1), self.at(2, 2)

    @property
    def selected(self) -> tuple[str, str]:
        return self.at(3, 1), self.at(3, 2)


# ---------------------------------------------------------------------------
# Lookup
# ---------------------------------------------------------------------------

def get_glyph_table(design_id: int) -> GlyphTable:
    """
    Return the built-in design *design_id* (1-based).

    Raises
    ------
    ConfigurationError
        If *design_id* is outside ``[1, DESIGN_COUNT]``.
    """
    if isinstance(design_id, bool) or not isinstance(design_id, int) \
            or not 1 <= design_id <= DESIGN_COUNT:
        raise ConfigurationError(f"There are {DESIGN_COUNT} designs available.")
    return GlyphTable.from_rows(DESIGNS[design_id - 1])


def resolve_glyph_table(design_id: int = 1, design_string: str | None = None) -> GlyphTable:
    """A literal *design_string* wins over *design_id*."""
    if design_string is not None:
        return GlyphTable.from_string(design_string)
    return get_glyph_table(design_id)
