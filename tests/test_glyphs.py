"""Tests for glyph tables."""

from __future__ import annotations

import pytest

from console_menu.errors import ConfigurationError
from console_menu.tui.glyphs import (
    DESIGN_COUNT,
    DESIGNS,
    GLYPH_COUNT,
    GlyphTable,
    get_glyph_table,
    resolve_glyph_table,
)


class TestDesigns:
    """Tests for the built-in catalog."""

    def test_twenty_designs(self) -> None:
        assert DESIGN_COUNT == 20

    def test_every_design_is_five_by_five(self) -> None:
        for rows in DESIGNS:
            assert len(rows) == 5
            assert all(len(row) == 5 for row in rows)
            assert len("".join(rows)) == GLYPH_COUNT

    @pytest.mark.parametrize("design_id", [0, -1, 21, 100])
    def test_out_of_range(self, design_id: int) -> None:
        with pytest.raises(ConfigurationError, match="There are 20 designs available."):
            get_glyph_table(design_id)

    def test_configuration_error_is_value_error(self) -> None:
        with pytest.raises(ValueError):
            get_glyph_table(0)

    def test_bool_rejected(self) -> None:
        with pytest.raises(ConfigurationError):
            get_glyph_table(True)


class TestGlyphTable:
    """Tests for named glyph positions."""

    def test_default_design(self) -> None:
        table = get_glyph_table(1)
        assert table.top_left == "┌"
        assert table.top_right == "┐"
        assert table.bottom_left == "└"
        assert table.bottom_right == "┘"
        assert table.horizontal == "─"
        assert table.left_junction == "├"
        assert table.right_junction == "┤"
        assert table.left_vertical == "│"
        assert table.right_vertical == "│"
        assert table.scroll_up == "/\\"
        assert table.scroll_down == "\\/"
        assert table.selected == ("[", "]")
        assert table.unselected == (" ", ")")

    def test_rows(self) -> None:
        table = get_glyph_table(2)
        assert table.rows == list(DESIGNS[1])

    def test_from_string(self) -> None:
        table = GlyphTable.from_string("ABCDEFGHIJKLMNOPQRSTUVWXY")
        assert table.top_left == "A"
        assert table.cross == "I"
        assert table.selected == ("Q", "R")
        assert table.bottom_right == "Y"

    @pytest.mark.parametrize("design", ["", "abc", "x" * 26])
    def test_wrong_length(self, design: str) -> None:
        with pytest.raises(ConfigurationError):
            GlyphTable.from_string(design)

    def test_not_a_string(self) -> None:
        with pytest.raises(ConfigurationError):
            GlyphTable.from_string(None)  # type: ignore[arg-type]

    def test_immutable(self) -> None:
        table = get_glyph_table(1)
        with pytest.raises(AttributeError):
            table.glyphs = "x" * 25  # type: ignore[misc]


class TestResolveGlyphTable:
    """Tests for resolve_glyph_table()."""

    def test_design_string_wins(self) -> None:
        table = resolve_glyph_table(3, "ABCDEFGHIJKLMNOPQRSTUVWXY")
        assert table.top_left == "A"

    def test_design_id(self) -> None:
        assert resolve_glyph_table(5) == get_glyph_table(5)
