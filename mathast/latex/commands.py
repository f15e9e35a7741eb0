"""Command registry mapping LaTeX command names to parsing rules."""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING

from mathast.core import tokens as tok
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
    Integral,
    Limit,
    Macro,
    Node,
    Operator,
    Product,
    Relation,
    Root,
    Sequence,
    Sqrt,
    Sum,
    Symbol,
    Text,
    TextColor,
)
from mathast.core.diagnostics import WarningCode
from mathast.core.tokens import TokenKind

if TYPE_CHECKING:
    from mathast.latex.parser import Parser

CommandRule = Callable[["Parser", str], "Node | None"]

ACCENTS = ("hat", "tilde", "bar", "vec", "dot", "ddot", "breve", "check", "widehat", "widetilde", "overline", "underline")
FONTS = ("mathbf", "mathit", "mathrm", "mathbb", "mathcal", "mathsf", "mathtt", "mathfrak", "boldsymbol")
FUNCTIONS = (
    "sin", "cos", "tan", "cot", "sec", "csc", "log", "ln", "exp",
    "sinh", "cosh", "tanh", "arcsin", "arccos", "arctan", "det", "max", "min",
)
TEXT_COMMANDS = ("text", "textrm", "textbf", "mbox")
COLOR_COMMANDS = ("color", "textcolor", "colorbox")
MATRIX_ENVIRONMENTS = frozenset({"matrix", "pmatrix", "bmatrix", "Bmatrix", "vmatrix", "Vmatrix", "smallmatrix"})

GREEK_LETTERS = (
    "alpha", "beta", "gamma", "delta", "epsilon", "zeta", "eta", "theta", "iota", "kappa",
    "lambda", "mu", "nu", "xi", "omicron", "pi", "rho", "sigma", "tau", "upsilon",
    "phi", "chi", "psi", "omega",
    "Gamma", "Delta", "Theta", "Lambda", "Xi", "Pi", "Sigma", "Upsilon", "Phi", "Psi", "Omega",
    "varepsilon", "vartheta", "varphi",
)

RELATIONS = {
    "leq": "≤",
    "le": "≤",
    "geq": "≥",
    "ge": "≥",
    "lt": "<",
    "gt": ">",
    "neq": "≠",
    "approx": "≈",
    "equiv": "≡",
    "sim": "∼",
    "to": "→",
    "rightarrow": "→",
    "leftarrow": "←",
    "Rightarrow": "⇒",
    "iff": "⟺",
    "mapsto": "↦",
    "in": "∈",
    "notin": "∉",
    "subset": "⊂",
    "subseteq": "⊆",
}

OPERATORS = {
    "pm": "±",
    "mp": "∓",
    "cdot": "⋅",
    "times": "×",
    "div": "÷",
    "ast": "∗",
    "cup": "∪",
    "cap": "∩",
    "wedge": "∧",
    "vee": "∨",
}

SYMBOLS = {
    "infty": "∞",
    "partial": "∂",
    "nabla": "∇",
    "forall": "∀",
    "exists": "∃",
    "emptyset": "∅",
    "ldots": "…",
    "cdots": "⋯",
}

# Named delimiters accepted after \left and \right.
DELIMITER_COMMANDS = {
    "langle": "⟨",
    "rangle": "⟩",
    "lfloor": "⌊",
    "rfloor": "⌋",
    "lceil": "⌈",
    "rceil": "⌉",
    "vert": "|",
    "lvert": "|",
    "rvert": "|",
    "Vert": "‖",
    "lVert": "‖",
    "rVert": "‖",
}

_ENV_NAME = re.compile(r"^[A-Za-z]+\*?$")


@dataclass(frozen=True, slots=True)
class CommandSpec:
    """Parsing rule for one command name.

    ``scriptable`` marks symbol-like results that accept a trailing
    ``^``/``_`` chain (``\\alpha_i``).
    """

    name: str
    family: str
    rule: CommandRule
    scriptable: bool = False


class CommandRegistry:
    """Read-only lookup table from command name to its parsing rule."""

    def __init__(self, specs: Iterable[CommandSpec]) -> None:
        self._specs: tuple[CommandSpec, ...] = tuple(specs)
        self._by_name: dict[str, CommandSpec] = {}
        for spec in self._specs:
            if spec.name not in self._by_name:
                self._by_name[spec.name] = spec

    def lookup(self, name: str) -> CommandSpec | None:
        """Return the spec registered for ``name``, or None."""

        return self._by_name.get(name)

    def names(self) -> set[str]:
        return set(self._by_name)

    def families(self) -> set[str]:
        return {spec.family for spec in self._by_name.values()}

    def family(self, family: str) -> list[str]:
        """Command names of one family, in registration order."""

        return [name for name, spec in self._by_name.items() if spec.family == family]

    def extended(self, specs: Iterable[CommandSpec]) -> "CommandRegistry":
        """Return a new registry where ``specs`` take precedence over this one."""

        return CommandRegistry([*specs, *self._specs])

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __len__(self) -> int:
        return len(self._by_name)


def _braced_or_placeholder(parser: Parser, name: str) -> Node:
    parser.skip_whitespace()
    base = parser.parse_required_group()
    if base is None:
        parser.warn(WarningCode.MISSING_ARGUMENT, f"\\{name} expects a braced argument")
        return parser.placeholder()
    return base


def _accent(parser: Parser, name: str) -> Node:
    return Accent(accent=name, base=_braced_or_placeholder(parser, name))


def _font(parser: Parser, name: str) -> Node:
    return Font(style=name, base=_braced_or_placeholder(parser, name))


def _function(parser: Parser, name: str) -> Node:
    parser.skip_whitespace()
    head = Symbol(value=name)
    scripted = parser.parse_scripts(head)
    argument = parser.parse_argument(context=f"\\{name}")
    return Function(name=name, argument=argument, scripts=None if scripted is head else scripted)


def _frac(parser: Parser, name: str) -> Node:
    parser.skip_whitespace()
    numerator = parser.parse_required_group()
    if numerator is None:
        parser.warn(WarningCode.MISSING_ARGUMENT, f"\\{name} expects a numerator group")
        return Fraction(numerator=parser.placeholder(), denominator=parser.placeholder())
    parser.skip_whitespace()
    denominator = parser.parse_required_group()
    if denominator is None:
        parser.warn(WarningCode.MISSING_ARGUMENT, f"\\{name} expects a denominator group")
        denominator = parser.placeholder()
    return Fraction(numerator=numerator, denominator=denominator)


def _sqrt(parser: Parser, name: str) -> Node:
    parser.skip_whitespace()
    degree = parser.parse_bracket_group()
    parser.skip_whitespace()
    radicand = parser.parse_required_group()
    if radicand is None:
        parser.warn(WarningCode.MISSING_ARGUMENT, f"\\{name} expects a radicand group")
        radicand = parser.placeholder()
    if degree is not None:
        return Root(degree=degree, radicand=radicand)
    return Sqrt(radicand=radicand)


def _limits(parser: Parser, *, allow_upper: bool) -> tuple[Node | None, Node | None]:
    # Lower limit is only recognized before the upper one.
    lower = None
    upper = None
    parser.skip_whitespace()
    if parser.lookahead.is_symbol("_"):
        parser.advance()
        lower = parser.parse_argument(chain=False, context="lower limit")
        parser.skip_whitespace()
    if allow_upper and parser.lookahead.is_symbol("^"):
        parser.advance()
        upper = parser.parse_argument(chain=False, context="upper limit")
    return lower, upper


_BIG_OPERATORS = {"sum": Sum, "prod": Product, "int": Integral, "oint": Integral}


def _big_operator(parser: Parser, name: str) -> Node:
    lower, upper = _limits(parser, allow_upper=True)
    body = parser.parse_argument(context=f"\\{name} body")
    return _BIG_OPERATORS[name](lower=lower, upper=upper, body=body)


def _lim(parser: Parser, name: str) -> Node:
    lower, _ = _limits(parser, allow_upper=False)
    body = parser.parse_argument(context=f"\\{name} body")
    return Limit(lower=lower, body=body)


def _begin(parser: Parser, name: str) -> Node:
    parser.skip_whitespace()
    env = parser.read_raw_group()
    if env is None or not _ENV_NAME.match(env.strip()):
        parser.warn(WarningCode.UNEXPECTED_TOKEN, "\\begin expects an environment name")
        return Symbol(value="\\begin")
    env = env.strip()
    if env in MATRIX_ENVIRONMENTS:
        return parser.parse_matrix(env)
    content = parser.parse_sequence(until=tok.command("end"))
    parser.finish_environment(env)
    return Environment(name=env, content=content)


def _text(parser: Parser, name: str) -> Node:
    parser.skip_whitespace()
    raw = parser.read_raw_group()
    if raw is None:
        parser.warn(WarningCode.MISSING_ARGUMENT, f"\\{name} expects a braced argument")
        return Text(text="")
    return Text(text=raw)


def _read_delimiter(parser: Parser) -> str | None:
    parser.skip_whitespace()
    la = parser.lookahead
    if la.kind is TokenKind.SYMBOL:
        parser.advance()
        if la.value == "\\" and parser.lookahead.kind in (TokenKind.LEFT_BRACE, TokenKind.RIGHT_BRACE):
            # \{ and \}
            brace = "{" if parser.lookahead.kind is TokenKind.LEFT_BRACE else "}"
            parser.advance()
            return brace
        return la.value
    if la.kind is TokenKind.LEFT_BRACKET:
        parser.advance()
        return "["
    if la.kind is TokenKind.RIGHT_BRACKET:
        parser.advance()
        return "]"
    if la.kind is TokenKind.COMMAND and la.value in DELIMITER_COMMANDS:
        parser.advance()
        return DELIMITER_COMMANDS[la.value]
    return None


def _left(parser: Parser, name: str) -> Node:
    left = _read_delimiter(parser)
    if left is None:
        parser.warn(WarningCode.MISSING_ARGUMENT, "\\left expects a delimiter")
        return Symbol(value="\\left?")
    right_cmd = tok.command("right")
    children = []
    while parser.lookahead not in (tok.EOF, tok.RIGHT_BRACE, right_cmd):
        node = parser.parse_node()
        if node is not None:
            children.append(node)
    if not parser.expect(right_cmd):
        return Bracket(left=left, content=Sequence(children=children), right=".")
    right = _read_delimiter(parser)
    if right is None:
        parser.warn(WarningCode.MISSING_ARGUMENT, "\\right expects a delimiter")
        right = "."
    return Bracket(left=left, content=Sequence(children=children), right=right)


_COLOR_NODES = {"color": Color, "textcolor": TextColor, "colorbox": ColorBox}


def _color(parser: Parser, name: str) -> Node:
    node_type = _COLOR_NODES[name]
    parser.skip_whitespace()
    color = parser.read_raw_group()
    if color is None:
        parser.warn(WarningCode.MISSING_ARGUMENT, f"\\{name} expects a color name")
        return node_type(color=parser.config.placeholder, content=Sequence())
    parser.skip_whitespace()
    if parser.lookahead != tok.LEFT_BRACE:
        parser.warn(WarningCode.MISSING_ARGUMENT, f"\\{name} expects a content group")
        return node_type(color=color.strip(), content=Sequence())
    parser.advance()
    content = parser.parse_sequence(until=tok.RIGHT_BRACE)
    parser.expect(tok.RIGHT_BRACE)
    return node_type(color=color.strip(), content=content)


def _two_argument_macro(parser: Parser, name: str) -> Node:
    first = parser.parse_argument(context=f"\\{name}")
    second = parser.parse_argument(context=f"\\{name}")
    return Macro(name=name, args=[first, second])


def _relation(parser: Parser, name: str) -> Node:
    return Relation(symbol=RELATIONS[name])


def _operator(parser: Parser, name: str) -> Node:
    return Operator(op=OPERATORS[name], args=[])


def _symbol(parser: Parser, name: str) -> Node:
    return Symbol(value=SYMBOLS[name])


def _greek(parser: Parser, name: str) -> Node:
    return Greek(name=name)


def _default_specs() -> list[CommandSpec]:
    specs: list[CommandSpec] = []
    specs.extend(CommandSpec(name, "accent", _accent) for name in ACCENTS)
    specs.extend(CommandSpec(name, "font", _font) for name in FONTS)
    specs.extend(CommandSpec(name, "function", _function) for name in FUNCTIONS)
    specs.extend(CommandSpec(name, "fraction", _frac) for name in ("frac", "dfrac", "tfrac"))
    specs.append(CommandSpec("sqrt", "root", _sqrt))
    specs.extend(CommandSpec(name, "big_operator", _big_operator) for name in _BIG_OPERATORS)
    specs.append(CommandSpec("lim", "limit", _lim))
    specs.append(CommandSpec("begin", "environment", _begin))
    specs.extend(CommandSpec(name, "text", _text) for name in TEXT_COMMANDS)
    specs.append(CommandSpec("left", "delimiter", _left))
    specs.extend(CommandSpec(name, "color", _color) for name in COLOR_COMMANDS)
    specs.extend(CommandSpec(name, "macro", _two_argument_macro) for name in ("overset", "underset", "stackrel"))
    specs.extend(CommandSpec(name, "relation", _relation) for name in RELATIONS)
    specs.extend(CommandSpec(name, "operator", _operator) for name in OPERATORS)
    specs.extend(CommandSpec(name, "symbol", _symbol, scriptable=True) for name in SYMBOLS)
    specs.extend(CommandSpec(name, "greek", _greek, scriptable=True) for name in GREEK_LETTERS)
    return specs


DEFAULT_REGISTRY = CommandRegistry(_default_specs())
