"""Renderers consuming the parsed AST."""

from mathast.render.sexpr import render_sexpr
from mathast.render.text import GLYPHS, glyph, render_grid, render_text

__all__ = ["GLYPHS", "glyph", "render_grid", "render_sexpr", "render_text"]
