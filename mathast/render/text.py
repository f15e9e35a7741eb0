"""Plain Unicode rendering of a parsed AST.

Literal strings are resolved through ``GLYPHS`` first and fall back to the
string itself, so any text a parser may put in a node renders somehow.
"""

from __future__ import annotations

import re

from mathast.core.ast import (
    Accent,
    Bracket,
    Color,
    ColorBox,
    Environment,
    Font,
    Fraction,
    Function,
    Greek,
    Group,
    Integral,
    Limit,
    Macro,
    Matrix,
    Node,
    Operator,
    Product,
    Relation,
    Root,
    Sequence,
    Sqrt,
    Subscript,
    Sum,
    Superscript,
    Symbol,
    Text,
    TextColor,
)
from mathast.latex.commands import DELIMITER_COMMANDS, OPERATORS, RELATIONS, SYMBOLS

_GREEK = {
    "alpha": "α",
    "beta": "β",
    "gamma": "γ",
    "delta": "δ",
    "epsilon": "ϵ",
    "zeta": "ζ",
    "eta": "η",
    "theta": "θ",
    "iota": "ι",
    "kappa": "κ",
    "lambda": "λ",
    "mu": "μ",
    "nu": "ν",
    "xi": "ξ",
    "omicron": "ο",
    "pi": "π",
    "rho": "ρ",
    "sigma": "σ",
    "tau": "τ",
    "upsilon": "υ",
    "phi": "ϕ",
    "chi": "χ",
    "psi": "ψ",
    "omega": "ω",
    "Gamma": "Γ",
    "Delta": "Δ",
    "Theta": "Θ",
    "Lambda": "Λ",
    "Xi": "Ξ",
    "Pi": "Π",
    "Sigma": "Σ",
    "Upsilon": "Υ",
    "Phi": "Φ",
    "Psi": "Ψ",
    "Omega": "Ω",
    "varepsilon": "ε",
    "vartheta": "ϑ",
    "varphi": "φ",
}

GLYPHS: dict[str, str] = {
    **_GREEK,
    **{"\\" + name: glyph for name, glyph in _GREEK.items()},
    **{"\\" + name: glyph for name, glyph in SYMBOLS.items()},
    **{"\\" + name: glyph for name, glyph in RELATIONS.items()},
    **{"\\" + name: glyph for name, glyph in OPERATORS.items()},
    **{"\\" + name: glyph for name, glyph in DELIMITER_COMMANDS.items()},
    "sum": "∑",
    "prod": "∏",
    "int": "∫",
    "*": "∗",
}

_BIG_OPERATOR_GLYPHS = {"Sum": "∑", "Product": "∏", "Integral": "∫"}

_COMBINING_ACCENTS = {
    "hat": "\u0302",
    "widehat": "\u0302",
    "tilde": "\u0303",
    "widetilde": "\u0303",
    "bar": "\u0304",
    "overline": "\u0305",
    "breve": "\u0306",
    "dot": "\u0307",
    "ddot": "\u0308",
    "check": "\u030C",
    "underline": "\u0332",
    "vec": "\u20D7",
}

_DOUBLE_STRUCK_HOLES = {"C": "ℂ", "H": "ℍ", "N": "ℕ", "P": "ℙ", "Q": "ℚ", "R": "ℝ", "Z": "ℤ"}

_MATRIX_DELIMITERS = {
    "pmatrix": ("(", ")"),
    "bmatrix": ("[", "]"),
    "Bmatrix": ("{", "}"),
    "vmatrix": ("|", "|"),
    "Vmatrix": ("‖", "‖"),
}

_SPACES = re.compile(r" {2,}")


def glyph(text: str) -> str:
    """Exact glyph for ``text`` if one is known, else ``text`` itself."""

    return GLYPHS.get(text, text)


def _double_struck(ch: str) -> str:
    if ch in _DOUBLE_STRUCK_HOLES:
        return _DOUBLE_STRUCK_HOLES[ch]
    if "A" <= ch <= "Z":
        return chr(0x1D538 + ord(ch) - ord("A"))
    if "a" <= ch <= "z":
        return chr(0x1D552 + ord(ch) - ord("a"))
    if "0" <= ch <= "9":
        return chr(0x1D7D8 + ord(ch) - ord("0"))
    return ch


def _is_atomic(node: Node) -> bool:
    if isinstance(node, (Symbol, Greek, Text, Sqrt, Root, Bracket, Matrix)):
        return True
    if isinstance(node, (Sequence, Group)):
        return len(node.children) == 1 and _is_atomic(node.children[0])
    return False


def _wrap(node: Node) -> str:
    text = _render(node).strip()
    if _is_atomic(node):
        return text
    return f"({text})"


def _limits(lower: Node | None, upper: Node | None) -> str:
    out = ""
    if lower is not None:
        out += "_" + _wrap(lower)
    if upper is not None:
        out += "^" + _wrap(upper)
    return out


def _render(node: Node) -> str:
    if isinstance(node, Symbol):
        return glyph(node.value)
    if isinstance(node, (Sequence, Group)):
        return "".join(_render(child) for child in node.children)
    if isinstance(node, Fraction):
        return f"{_wrap(node.numerator)}/{_wrap(node.denominator)}"
    if isinstance(node, Sqrt):
        return "√" + _wrap(node.radicand)
    if isinstance(node, Root):
        return f"√[{_render(node.degree).strip()}]" + _wrap(node.radicand)
    if isinstance(node, Superscript):
        return f"{_wrap(node.base)}^{_wrap(node.exponent)}"
    if isinstance(node, Subscript):
        return f"{_wrap(node.base)}_{_wrap(node.sub)}"
    if isinstance(node, (Sum, Product, Integral)):
        head = _BIG_OPERATOR_GLYPHS[node.node] + _limits(node.lower, node.upper)
        return f"{head} {_render(node.body).strip()}"
    if isinstance(node, Limit):
        return f"lim{_limits(node.lower, None)} {_render(node.body).strip()}"
    if isinstance(node, Text):
        return node.text
    if isinstance(node, Matrix):
        left, right = _MATRIX_DELIMITERS.get(node.environment, ("[", "]"))
        rows = "; ".join(" ".join(render_text(cell) for cell in row) for row in node.rows)
        return f"{left}{rows}{right}"
    if isinstance(node, Bracket):
        left = "" if node.left == "." else glyph(node.left)
        right = "" if node.right == "." else glyph(node.right)
        return f"{left}{_render(node.content).strip()}{right}"
    if isinstance(node, Function):
        head = _render(node.scripts) if node.scripts is not None else node.name
        return f"{head} {_wrap(node.argument)}"
    if isinstance(node, Accent):
        base = _render(node.base).strip()
        mark = _COMBINING_ACCENTS.get(node.accent)
        if mark is not None and len(base) == 1:
            return base + mark
        return f"{node.accent}({base})"
    if isinstance(node, Font):
        base = _render(node.base)
        if node.style == "mathbb":
            return "".join(_double_struck(ch) for ch in base)
        return base
    if isinstance(node, Operator):
        op = glyph(node.op)
        if node.args:
            return f" {op} ".join(_wrap(arg) for arg in node.args)
        return f" {op} "
    if isinstance(node, Macro):
        args = ", ".join(_render(arg).strip() for arg in node.args)
        return f"{node.name}({args})"
    if isinstance(node, Environment):
        return _render(node.content)
    if isinstance(node, Relation):
        return f" {glyph(node.symbol)} "
    if isinstance(node, Greek):
        return glyph(node.name)
    if isinstance(node, (Color, TextColor, ColorBox)):
        return _render(node.content)

    raise TypeError(f"unsupported node type: {type(node).__name__}")


def render_text(node: Node) -> str:
    """Render ``node`` as a single line of Unicode text."""

    return _SPACES.sub(" ", _render(node)).strip()


def render_grid(matrix: Matrix) -> str:
    """Render a matrix as a text grid with centered, uniform-width columns."""

    cells = [[render_text(cell) for cell in row] for row in matrix.rows]
    if not cells:
        return ""
    n_cols = max(len(row) for row in cells)
    for row in cells:
        row.extend([""] * (n_cols - len(row)))
    widths = [max(len(row[col]) for row in cells) for col in range(n_cols)]
    lines = ["  ".join(cell.center(widths[col]) for col, cell in enumerate(row)).rstrip() for row in cells]
    return "\n".join(lines)
