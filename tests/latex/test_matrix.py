"""Matrix environment parsing."""

from __future__ import annotations

from mathast.core.ast import Fraction, Group, Matrix, Symbol
from mathast.core.diagnostics import WarningCode
from mathast.latex.parser import parse_latex


def _sym(value: str) -> Symbol:
    return Symbol(value=value)


def _matrix(latex: str) -> Matrix:
    children = parse_latex(latex).ast.children
    assert len(children) == 1
    assert isinstance(children[0], Matrix)
    return children[0]


def test_two_by_two() -> None:
    result = parse_latex(r"\begin{matrix} 1 & 2 \\ 3 & 4 \end{matrix}")
    assert result.status == "ok"
    assert result.ast.children == [
        Matrix(rows=[[_sym("1"), _sym("2")], [_sym("3"), _sym("4")]], environment="matrix"),
    ]


def test_environment_name_is_kept() -> None:
    matrix = _matrix(r"\begin{pmatrix} a & b \end{pmatrix}")
    assert matrix.environment == "pmatrix"
    assert matrix.rows == [[_sym("a"), _sym("b")]]


def test_multi_node_cell_becomes_group() -> None:
    matrix = _matrix(r"\begin{bmatrix} 1 + 2 & 3 \end{bmatrix}")
    assert matrix.rows == [[Group(children=[_sym("1"), _sym("+"), _sym("2")]), _sym("3")]]


def test_empty_cell_is_empty_group() -> None:
    matrix = _matrix(r"\begin{matrix} & 1 \end{matrix}")
    assert matrix.rows == [[Group(children=[]), _sym("1")]]


def test_trailing_row_break_adds_no_row() -> None:
    matrix = _matrix(r"\begin{matrix} 1 \\ 2 \\ \end{matrix}")
    assert matrix.rows == [[_sym("1")], [_sym("2")]]


def test_newline_command_breaks_row() -> None:
    matrix = _matrix(r"\begin{matrix} 1 \newline 2 \end{matrix}")
    assert matrix.rows == [[_sym("1")], [_sym("2")]]


def test_structured_cells() -> None:
    matrix = _matrix(r"\begin{matrix} \frac{1}{2} & x \end{matrix}")
    assert matrix.rows == [[Fraction(numerator=_sym("1"), denominator=_sym("2")), _sym("x")]]


def test_empty_matrix() -> None:
    assert _matrix(r"\begin{matrix}\end{matrix}").rows == []


def test_mismatched_end() -> None:
    result = parse_latex(r"\begin{matrix} 1 \end{pmatrix}")
    assert result.ast.children == [Matrix(rows=[[_sym("1")]], environment="matrix")]
    assert [w.code for w in result.warnings] == [WarningCode.ENVIRONMENT_MISMATCH]
    assert result.warnings[0].details == {"expected": "matrix", "found": "pmatrix"}


def test_unterminated_matrix() -> None:
    result = parse_latex(r"\begin{matrix} 1 & 2")
    assert result.ast.children == [Matrix(rows=[[_sym("1"), _sym("2")]], environment="matrix")]
    assert [w.code for w in result.warnings] == [WarningCode.UNTERMINATED_GROUP]
