"""Compact s-expression dump of a parsed AST."""

from __future__ import annotations

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

_NONE = "_"
_NEEDS_QUOTES = set(" ()\"\t\n")


def _atom(value: str) -> str:
    if not value or any(ch in _NEEDS_QUOTES for ch in value):
        escaped = value.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'
    return value


def _opt(node: Node | None) -> str:
    return _NONE if node is None else render_sexpr(node)


def _form(head: str, *parts: str) -> str:
    if not parts:
        return f"({head})"
    return f"({head} " + " ".join(parts) + ")"


def render_sexpr(node: Node) -> str:
    """Render ``node`` as a deterministic s-expression string."""

    if isinstance(node, Symbol):
        return _atom(node.value)
    if isinstance(node, Sequence):
        return _form("Seq", *(render_sexpr(child) for child in node.children))
    if isinstance(node, Group):
        return _form("Group", *(render_sexpr(child) for child in node.children))
    if isinstance(node, Fraction):
        return _form("Frac", render_sexpr(node.numerator), render_sexpr(node.denominator))
    if isinstance(node, Sqrt):
        return _form("Sqrt", render_sexpr(node.radicand))
    if isinstance(node, Root):
        return _form("Root", render_sexpr(node.degree), render_sexpr(node.radicand))
    if isinstance(node, Superscript):
        return _form("Sup", render_sexpr(node.base), render_sexpr(node.exponent))
    if isinstance(node, Subscript):
        return _form("Sub", render_sexpr(node.base), render_sexpr(node.sub))
    if isinstance(node, (Sum, Product, Integral)):
        return _form(node.node, _opt(node.lower), _opt(node.upper), render_sexpr(node.body))
    if isinstance(node, Limit):
        return _form("Lim", _opt(node.lower), render_sexpr(node.body))
    if isinstance(node, Text):
        return _form("Text", _atom(node.text))
    if isinstance(node, Matrix):
        rows = (_form("Row", *(render_sexpr(cell) for cell in row)) for row in node.rows)
        return _form(f"Matrix:{node.environment}", *rows)
    if isinstance(node, Bracket):
        return _form("Bracket", _atom(node.left), render_sexpr(node.content), _atom(node.right))
    if isinstance(node, Function):
        if node.scripts is not None:
            return _form("Fn", node.name, render_sexpr(node.scripts), render_sexpr(node.argument))
        return _form("Fn", node.name, render_sexpr(node.argument))
    if isinstance(node, Accent):
        return _form("Accent", node.accent, render_sexpr(node.base))
    if isinstance(node, Font):
        return _form("Font", node.style, render_sexpr(node.base))
    if isinstance(node, Operator):
        return _form("Op", _atom(node.op), *(render_sexpr(arg) for arg in node.args))
    if isinstance(node, Macro):
        return _form("Macro", node.name, *(render_sexpr(arg) for arg in node.args))
    if isinstance(node, Environment):
        return _form("Env", _atom(node.name), render_sexpr(node.content))
    if isinstance(node, Relation):
        return _form("Rel", _atom(node.symbol))
    if isinstance(node, Greek):
        return _form("Greek", node.name)
    if isinstance(node, (Color, TextColor, ColorBox)):
        return _form(node.node, _atom(node.color), render_sexpr(node.content))

    raise TypeError(f"unsupported node type: {type(node).__name__}")
