"""S-expression rendering tests."""

from __future__ import annotations

import pytest

from mathast.core.ast import Symbol
from mathast.latex.parser import Parser
from mathast.render import render_sexpr


def _sexpr(latex: str) -> str:
    return render_sexpr(Parser(latex).parse())


@pytest.mark.parametrize(
    ("latex", "expected"),
    [
        ("", "(Seq)"),
        (r"\frac{1}{x}", "(Seq (Frac 1 x))"),
        ("x^2_3", "(Seq (Sub (Sup x 2) 3))"),
        (r"\sum_{n=1}^{\infty} n^2", "(Seq (Sum (Group n = 1) (Group ∞) (Sup n 2)))"),
        (r"\lim x", "(Seq (Lim _ x))"),
        (r"\text{hello world}", '(Seq (Text "hello world"))'),
        (r"\begin{matrix} 1 & 2 \\ 3 & 4 \end{matrix}", "(Seq (Matrix:matrix (Row 1 2) (Row 3 4)))"),
        (r"\left( x \right)", '(Seq (Bracket "(" (Seq x) ")"))'),
        (r"\sin^2 x", "(Seq (Fn sin (Sup sin 2) x))"),
        (r"\alpha \leq \pm", "(Seq (Greek alpha) (Rel ≤) (Op ±))"),
        (r"\textcolor{red}{x}", "(Seq (TextColor red (Seq x)))"),
    ],
)
def test_render_sexpr(latex: str, expected: str) -> None:
    assert _sexpr(latex) == expected


def test_empty_symbol_is_quoted() -> None:
    assert render_sexpr(Symbol(value="")) == '""'


def test_unknown_type_rejected() -> None:
    with pytest.raises(TypeError):
        render_sexpr("x")  # type: ignore[arg-type]
