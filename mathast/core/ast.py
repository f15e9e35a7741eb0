"""AST node definitions for parsed LaTeX math."""

from __future__ import annotations

from collections.abc import Iterator
from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter


class _NodeModel(BaseModel):
    """Base for all nodes; nodes are immutable once built."""

    model_config = ConfigDict(frozen=True)


class Symbol(_NodeModel):
    """Atomic literal: identifier, digit run, glyph or raw command name."""

    node: Literal["Symbol"] = "Symbol"
    value: str


class Sequence(_NodeModel):
    """Top-level or group concatenation."""

    node: Literal["Sequence"] = "Sequence"
    children: list["Node"] = Field(default_factory=list)


class Group(_NodeModel):
    """Braced or bracketed sub-sequence."""

    node: Literal["Group"] = "Group"
    children: list["Node"] = Field(default_factory=list)


class Fraction(_NodeModel):
    node: Literal["Fraction"] = "Fraction"
    numerator: "Node"
    denominator: "Node"


class Sqrt(_NodeModel):
    node: Literal["Sqrt"] = "Sqrt"
    radicand: "Node"


class Root(_NodeModel):
    """Root with an explicit degree, ``\\sqrt[n]{x}``."""

    node: Literal["Root"] = "Root"
    degree: "Node"
    radicand: "Node"


class Superscript(_NodeModel):
    node: Literal["Superscript"] = "Superscript"
    base: "Node"
    exponent: "Node"


class Subscript(_NodeModel):
    node: Literal["Subscript"] = "Subscript"
    base: "Node"
    sub: "Node"


class Sum(_NodeModel):
    """Summation with optional limits."""

    node: Literal["Sum"] = "Sum"
    lower: "Node | None" = None
    upper: "Node | None" = None
    body: "Node"


class Product(_NodeModel):
    """Product with optional limits."""

    node: Literal["Product"] = "Product"
    lower: "Node | None" = None
    upper: "Node | None" = None
    body: "Node"


class Integral(_NodeModel):
    """Integral with optional bounds."""

    node: Literal["Integral"] = "Integral"
    lower: "Node | None" = None
    upper: "Node | None" = None
    body: "Node"


class Limit(_NodeModel):
    node: Literal["Limit"] = "Limit"
    lower: "Node | None" = None
    body: "Node"


class Text(_NodeModel):
    """Literal ``\\text{...}`` content."""

    node: Literal["Text"] = "Text"
    text: str


class Matrix(_NodeModel):
    """Cell grid; each row is a list of cells, one node per cell."""

    node: Literal["Matrix"] = "Matrix"
    rows: list[list["Node"]] = Field(default_factory=list)
    environment: str = "matrix"


class Bracket(_NodeModel):
    """``\\left X ... \\right Y`` delimiter pair."""

    node: Literal["Bracket"] = "Bracket"
    left: str
    content: "Node"
    right: str


class Function(_NodeModel):
    """Named one-argument function such as ``\\sin``.

    ``scripts`` holds the super/subscript chain written on the name itself
    (``\\sin^2``), built on ``Symbol(name)``.
    """

    node: Literal["Function"] = "Function"
    name: str
    argument: "Node"
    scripts: "Node | None" = None


class Accent(_NodeModel):
    node: Literal["Accent"] = "Accent"
    accent: str
    base: "Node"


class Font(_NodeModel):
    node: Literal["Font"] = "Font"
    style: str
    base: "Node"


class Operator(_NodeModel):
    """Binary or symbolic operator glyph."""

    node: Literal["Operator"] = "Operator"
    op: str
    args: list["Node"] = Field(default_factory=list)


class Macro(_NodeModel):
    """Generic multi-argument command (``\\overset``, ``\\underset``)."""

    node: Literal["Macro"] = "Macro"
    name: str
    args: list["Node"] = Field(default_factory=list)


class Environment(_NodeModel):
    """Non-matrix ``\\begin{name}...\\end{name}`` block."""

    node: Literal["Environment"] = "Environment"
    name: str
    content: "Node"


class Relation(_NodeModel):
    node: Literal["Relation"] = "Relation"
    symbol: str


class Greek(_NodeModel):
    node: Literal["Greek"] = "Greek"
    name: str


class Color(_NodeModel):
    node: Literal["Color"] = "Color"
    color: str
    content: "Node"


class TextColor(_NodeModel):
    node: Literal["TextColor"] = "TextColor"
    color: str
    content: "Node"


class ColorBox(_NodeModel):
    node: Literal["ColorBox"] = "ColorBox"
    color: str
    content: "Node"


Node = Annotated[
    Union[
        Symbol,
        Sequence,
        Group,
        Fraction,
        Sqrt,
        Root,
        Superscript,
        Subscript,
        Sum,
        Product,
        Integral,
        Limit,
        Text,
        Matrix,
        Bracket,
        Function,
        Accent,
        Font,
        Operator,
        Macro,
        Environment,
        Relation,
        Greek,
        Color,
        TextColor,
        ColorBox,
    ],
    Field(discriminator="node"),
]

NODE_TYPES: tuple[type[BaseModel], ...] = (
    Symbol,
    Sequence,
    Group,
    Fraction,
    Sqrt,
    Root,
    Superscript,
    Subscript,
    Sum,
    Product,
    Integral,
    Limit,
    Text,
    Matrix,
    Bracket,
    Function,
    Accent,
    Font,
    Operator,
    Macro,
    Environment,
    Relation,
    Greek,
    Color,
    TextColor,
    ColorBox,
)

for _model in NODE_TYPES:
    _model.model_rebuild()

_NODE_ADAPTER: TypeAdapter = TypeAdapter(Node)


def parse_node(data: dict) -> Node:
    """Parse and validate a dict into a Node."""

    return _NODE_ADAPTER.validate_python(data)


def node_to_dict(node: Node) -> dict:
    """Serialize a Node into a dict, omitting absent optional fields."""

    return node.model_dump(exclude_none=True)


def children_of(node: Node) -> list[Node]:
    """Return the direct sub-nodes of ``node`` in field order."""

    out: list[Node] = []
    for field_name in type(node).model_fields:
        value = getattr(node, field_name)
        if isinstance(value, _NodeModel):
            out.append(value)
        elif isinstance(value, list):
            for item in value:
                if isinstance(item, list):
                    out.extend(cell for cell in item if isinstance(cell, _NodeModel))
                elif isinstance(item, _NodeModel):
                    out.append(item)
    return out


def walk(node: Node) -> Iterator[Node]:
    """Yield ``node`` and every descendant, depth-first pre-order."""

    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(children_of(current)))


def placeholder(value: str = "?") -> Symbol:
    """Stand-in node for a missing required argument."""

    return Symbol(value=value)
