"""Unicode text rendering tests."""

from __future__ import annotations

import pytest

from mathast.core.ast import Matrix
from mathast.latex.parser import Parser
from mathast.render import glyph, render_grid, render_text


def _text(latex: str) -> str:
    return render_text(Parser(latex).parse())


@pytest.mark.parametrize(
    ("latex", "expected"),
    [
        (r"\frac{1}{x}", "1/x"),
        (r"\frac{a+b}{2}", "(a+b)/2"),
        (r"\alpha + \beta", "α+β"),
        (r"x \leq y", "x ≤ y"),
        (r"a \pm b", "a ± b"),
        (r"\sqrt{x}", "√x"),
        (r"\sqrt[3]{z}", "√[3]z"),
        ("x^{n+1}", "x^(n+1)"),
        (r"\sum_{n=1}^{\infty} n^2", "∑_(n=1)^∞ n^2"),
        (r"\sin x", "sin x"),
        (r"\sin^2 x", "sin^2 x"),
        (r"\hat{x}", "x\u0302"),
        (r"\vec{AB}", "vec(AB)"),
        (r"\mathbb{R}", "ℝ"),
        (r"\mathbb{A}", "\U0001D538"),
        (r"\begin{pmatrix} 1 & 2 \\ 3 & 4 \end{pmatrix}", "(1 2; 3 4)"),
        (r"\left| x \right|", "|x|"),
        (r"\textcolor{red}{x}", "x"),
        (r"\foo", "\\foo"),
    ],
)
def test_render_text(latex: str, expected: str) -> None:
    assert _text(latex) == expected


def test_glyph_fallback() -> None:
    assert glyph("\\infty") == "∞"
    assert glyph("alpha") == "α"
    assert glyph("zzz") == "zzz"


def test_render_grid_centers_columns() -> None:
    matrix = Parser(r"\begin{matrix} a & xy \\ abc & wxyz \end{matrix}").parse().children[0]
    assert isinstance(matrix, Matrix)
    assert render_grid(matrix).splitlines() == [" a    xy", "abc  wxyz"]


def test_render_grid_pads_short_rows() -> None:
    matrix = Parser(r"\begin{matrix} a & b \\ c \end{matrix}").parse().children[0]
    assert render_grid(matrix).splitlines() == ["a  b", "c"]


def test_render_grid_empty() -> None:
    assert render_grid(Matrix(rows=[])) == ""
