"""
Terminal layer for the console menu.

Key parsing and classification, key event sources, glyph tables, the
output sink and the in-place menu renderer.
"""
from __future__ import annotations

from console_menu.tui.classifier import Command, KeyCommand, classify
from console_menu.tui.glyphs import DESIGN_COUNT, DESIGNS, GlyphTable, get_glyph_table, resolve_glyph_table
from console_menu.tui.input import KeySource, ScriptedKeySource, TerminalKeySource
from console_menu.tui.keys import RawKeyEvent, decode_key, iter_key_sequences
from console_menu.tui.output import OutputSink, TerminalOutput
from console_menu.tui.renderer import Frame, MenuRenderer, render_menu

__all__ = [
    # Keys
    "RawKeyEvent",
    "decode_key",
    "iter_key_sequences",
    "Command",
    "KeyCommand",
    "classify",
    # Input / output
    "KeySource",
    "ScriptedKeySource",
    "TerminalKeySource",
    "OutputSink",
    "TerminalOutput",
    # Rendering
    "Frame",
    "MenuRenderer",
    "render_menu",
    # Glyphs
    "GlyphTable",
    "DESIGNS",
    "DESIGN_COUNT",
    "get_glyph_table",
    "resolve_glyph_table",
]
