"""Recursive-descent parser turning LaTeX math into an AST.

The parser always produces a ``Sequence``: malformed input degrades into
placeholder nodes and recorded warnings, never into an exception.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field

from mathast.core import tokens as tok
from mathast.core.ast import (
    Group,
    Matrix,
    Node,
    Sequence,
    Subscript,
    Superscript,
    Symbol,
    Text,
    node_to_dict,
    placeholder,
)
from mathast.core.config import ParserConfig
from mathast.core.diagnostics import NestingDepthError, ParseWarning, WarningCode
from mathast.core.tokens import Token, TokenKind
from mathast.latex.commands import DEFAULT_REGISTRY, CommandRegistry
from mathast.latex.tokenizer import Tokenizer

_CLOSERS = {TokenKind.RIGHT_BRACE, TokenKind.RIGHT_BRACKET, TokenKind.EOF}
_STOP_COMMANDS = {"right", "end"}
_OPENER_TO_CLOSER = {
    TokenKind.LEFT_BRACE: TokenKind.RIGHT_BRACE,
    TokenKind.LEFT_BRACKET: TokenKind.RIGHT_BRACKET,
}


class Parser:
    """Single-use parser over one input string with one token of lookahead."""

    def __init__(
        self,
        text: str,
        *,
        registry: CommandRegistry | None = None,
        config: ParserConfig | None = None,
    ) -> None:
        self.text = text
        self.registry = registry or DEFAULT_REGISTRY
        self.config = config or ParserConfig()
        self.warnings: list[ParseWarning] = []
        self._tokenizer = Tokenizer(text)
        self._depth = 0
        self._position = 0
        self.lookahead: Token = self._tokenizer.next_token()

    # -- cursor -----------------------------------------------------------

    @property
    def position(self) -> int:
        """Input offset where the lookahead token starts."""

        return self._position

    def advance(self) -> None:
        self._position = self._tokenizer.position
        self.lookahead = self._tokenizer.next_token()

    def at(self, token: Token) -> bool:
        return self.lookahead == token

    def expect(self, token: Token) -> bool:
        """Consume ``token`` if it is next; otherwise record a warning."""

        if self.lookahead == token:
            self.advance()
            return True
        if self.lookahead.kind is TokenKind.EOF:
            self.warn(
                WarningCode.UNTERMINATED_GROUP,
                f"expected {token} before end of input",
                expected=str(token),
            )
        else:
            self.warn(
                WarningCode.UNEXPECTED_TOKEN,
                f"expected {token}, got {self.lookahead}",
                expected=str(token),
                found=str(self.lookahead),
            )
        return False

    def skip_whitespace(self) -> None:
        while self.lookahead.kind is TokenKind.WHITESPACE:
            self.advance()

    def warn(self, code: WarningCode, message: str, **details) -> None:
        self.warnings.append(
            ParseWarning(code=code, message=message, position=self._position, details=details or None)
        )

    def placeholder(self) -> Symbol:
        return placeholder(self.config.placeholder)

    # -- grammar ----------------------------------------------------------

    def parse(self) -> Sequence:
        """Parse the whole input."""

        return self.parse_sequence()

    def parse_sequence(self, until: Token | None = None) -> Sequence:
        """Parse nodes until end of input or the ``until`` token (not consumed)."""

        nodes: list[Node] = []
        while self.lookahead.kind is not TokenKind.EOF and self.lookahead != until:
            node = self.parse_node()
            if node is not None:
                nodes.append(node)
        return Sequence(children=nodes)

    def parse_node(self, *, chain: bool = True) -> Node | None:
        """Parse one node at the lookahead; None for tokens that add nothing.

        With ``chain`` set, trailing ``^``/``_`` marks are folded into the
        node as super/subscripts.
        """

        if self.lookahead.kind is TokenKind.WHITESPACE:
            self.advance()
            return None
        if self.lookahead.kind is TokenKind.EOF:
            return None
        try:
            with self._nested():
                return self._parse_node(chain)
        except NestingDepthError as exc:
            self.warn(
                WarningCode.MAX_DEPTH_EXCEEDED,
                str(exc),
                max_depth=self.config.max_depth,
            )
            self._skip_construct()
            return self.placeholder()

    def _parse_node(self, chain: bool) -> Node | None:
        la = self.lookahead
        kind = la.kind

        if kind is TokenKind.COMMAND:
            self.advance()
            spec = self.registry.lookup(la.value)
            if spec is None:
                self.warn(WarningCode.UNKNOWN_COMMAND, f"unknown command \\{la.value}", command=la.value)
                node: Node = Symbol(value="\\" + la.value)
                return self.parse_scripts(node) if chain else node
            result = spec.rule(self, la.value)
            if result is not None and chain and spec.scriptable:
                return self.parse_scripts(result)
            return result

        if kind in _OPENER_TO_CLOSER:
            self.advance()
            closer = Token(_OPENER_TO_CLOSER[kind])
            inner = self.parse_sequence(until=closer)
            self.expect(closer)
            group = Group(children=inner.children)
            return self.parse_scripts(group) if chain else group

        if kind is TokenKind.TEXT:
            self.advance()
            node = Symbol(value=la.value)
            return self.parse_scripts(node) if chain else node

        if kind is TokenKind.SYMBOL:
            self.advance()
            return Symbol(value=la.value)

        self.warn(WarningCode.UNEXPECTED_TOKEN, f"unexpected {la}", found=str(la))
        self.advance()
        return None

    def parse_scripts(self, base: Node) -> Node:
        """Fold any ``^``/``_`` chain following ``base``, left to right."""

        wraps = 0
        while _at_script(self.lookahead):
            # Each wrap nests the base one level deeper.
            if self._depth + wraps >= self.config.max_depth:
                self.warn(
                    WarningCode.MAX_DEPTH_EXCEEDED,
                    f"script chain exceeds nesting depth {self.config.max_depth}",
                    max_depth=self.config.max_depth,
                )
                self._skip_scripts()
                return base
            if self.lookahead.is_symbol("^"):
                self.advance()
                base = Superscript(base=base, exponent=self.parse_argument(chain=False, context="superscript"))
            else:
                self.advance()
                base = Subscript(base=base, sub=self.parse_argument(chain=False, context="subscript"))
            wraps += 1
        return base

    def parse_argument(self, *, chain: bool = True, context: str = "argument") -> Node:
        """Parse one required argument node, or a placeholder when absent."""

        self.skip_whitespace()
        la = self.lookahead
        if la.kind in _CLOSERS or la.is_symbol("&") or (
            la.kind is TokenKind.COMMAND and la.value in _STOP_COMMANDS
        ):
            self.warn(WarningCode.MISSING_ARGUMENT, f"missing {context}", found=str(la))
            return self.placeholder()
        node = self.parse_node(chain=chain)
        if node is None:
            self.warn(WarningCode.MISSING_ARGUMENT, f"missing {context}")
            return self.placeholder()
        return node

    def parse_required_group(self) -> Node | None:
        """Parse ``{...}``; a single child is returned unwrapped."""

        return self._parse_delimited(tok.LEFT_BRACE, tok.RIGHT_BRACE)

    def parse_bracket_group(self) -> Node | None:
        """Parse an optional ``[...]`` argument."""

        return self._parse_delimited(tok.LEFT_BRACKET, tok.RIGHT_BRACKET)

    def _parse_delimited(self, opener: Token, closer: Token) -> Node | None:
        if self.lookahead != opener:
            return None
        self.advance()
        inner = self.parse_sequence(until=closer)
        self.expect(closer)
        if len(inner.children) == 1:
            return inner.children[0]
        return Group(children=inner.children)

    def read_raw_group(self) -> str | None:
        """Read a braced group verbatim, without building nodes.

        Commands are kept as their source text and nested braces are
        balanced. ``\\{`` and ``\\}`` are literal text. Returns None when no
        ``{`` follows.
        """

        if self.lookahead != tok.LEFT_BRACE:
            return None
        self.advance()
        parts: list[str] = []
        depth = 0
        escaped = False
        while self.lookahead.kind is not TokenKind.EOF:
            la = self.lookahead
            if escaped and la.kind in (TokenKind.LEFT_BRACE, TokenKind.RIGHT_BRACE):
                parts.append("{" if la.kind is TokenKind.LEFT_BRACE else "}")
            elif la.kind is TokenKind.RIGHT_BRACE:
                if depth == 0:
                    break
                depth -= 1
                parts.append("}")
            elif la.kind is TokenKind.LEFT_BRACE:
                depth += 1
                parts.append("{")
            elif la.kind is TokenKind.LEFT_BRACKET:
                parts.append("[")
            elif la.kind is TokenKind.RIGHT_BRACKET:
                parts.append("]")
            elif la.kind is TokenKind.WHITESPACE:
                parts.append(" ")
            elif la.kind is TokenKind.COMMAND:
                parts.append("\\" + la.value)
            else:
                parts.append(la.value)
            # A backslash escapes the next brace; "\\" escapes nothing.
            escaped = la.is_symbol("\\") and not escaped
            self.advance()
        self.expect(tok.RIGHT_BRACE)
        return "".join(parts)

    def parse_matrix(self, environment: str) -> Matrix:
        """Parse a matrix body up to and including ``\\end{environment}``."""

        end = tok.command("end")
        rows: list[list[Node]] = []
        row: list[Node] = []
        cell: list[Node] = []
        row_open = False

        while self.lookahead.kind is not TokenKind.EOF and self.lookahead != end:
            la = self.lookahead
            if la.is_symbol("&"):
                self.advance()
                row.append(_cell_node(cell))
                cell = []
                row_open = True
            elif la.is_symbol("\\"):
                self.advance()
                if self.lookahead.is_symbol("\\") or self.lookahead == tok.text("newline"):
                    self.advance()
                    if row_open or cell:
                        row.append(_cell_node(cell))
                    rows.append(row)
                    row, cell, row_open = [], [], False
            elif la.is_command("newline"):
                self.advance()
                if row_open or cell:
                    row.append(_cell_node(cell))
                rows.append(row)
                row, cell, row_open = [], [], False
            elif la.kind is TokenKind.RIGHT_BRACE:
                self.warn(WarningCode.UNEXPECTED_TOKEN, f"unexpected }} in {environment}", found=str(la))
                break
            else:
                node = self.parse_node()
                if node is not None:
                    cell.append(node)

        if row_open or cell:
            row.append(_cell_node(cell))
            rows.append(row)
        self.finish_environment(environment)
        return Matrix(rows=rows, environment=environment)

    def finish_environment(self, environment: str) -> None:
        """Consume ``\\end{environment}``, recording any mismatch."""

        if not self.expect(tok.command("end")):
            return
        self.skip_whitespace()
        name = self.read_raw_group()
        if name is None:
            self.warn(WarningCode.MISSING_ARGUMENT, f"\\end expects {{{environment}}}")
        elif name.strip() != environment:
            self.warn(
                WarningCode.ENVIRONMENT_MISMATCH,
                f"\\begin{{{environment}}} closed by \\end{{{name.strip()}}}",
                expected=environment,
                found=name.strip(),
            )

    # -- depth bound ------------------------------------------------------

    @contextmanager
    def _nested(self) -> Iterator[None]:
        if self._depth >= self.config.max_depth:
            raise NestingDepthError(depth=self.config.max_depth, position=self._position)
        self._depth += 1
        try:
            yield
        finally:
            self._depth -= 1

    def _skip_construct(self) -> None:
        """Consume the construct at the lookahead without recursing.

        A command takes its trailing brace and bracket groups along, and any
        ``^``/``_`` chain after the construct is consumed with it.
        """

        self._skip_atom()
        self._skip_scripts()

    def _skip_atom(self) -> None:
        if self.lookahead.kind is TokenKind.COMMAND:
            self.advance()
            self.skip_whitespace()
            while self.lookahead.kind in _OPENER_TO_CLOSER:
                self._skip_group()
                self.skip_whitespace()
        elif self.lookahead.kind in _OPENER_TO_CLOSER:
            self._skip_group()
        elif self.lookahead.kind is not TokenKind.EOF:
            self.advance()

    def _skip_scripts(self) -> None:
        while _at_script(self.lookahead):
            self.advance()
            self.skip_whitespace()
            if self.lookahead.kind in _CLOSERS:
                return
            self._skip_atom()

    def _skip_group(self) -> None:
        opener = self.lookahead.kind
        closer = _OPENER_TO_CLOSER[opener]
        self.advance()
        balance = 1
        while balance and self.lookahead.kind is not TokenKind.EOF:
            if self.lookahead.kind is opener:
                balance += 1
            elif self.lookahead.kind is closer:
                balance -= 1
            self.advance()


def _at_script(token: Token) -> bool:
    return token.is_symbol("^") or token.is_symbol("_")


def _cell_node(nodes: list[Node]) -> Node:
    if len(nodes) == 1:
        return nodes[0]
    return Group(children=list(nodes))


@dataclass(frozen=True)
class ParseResult:
    """Outcome of parsing one LaTeX string."""

    status: str
    raw_latex: str
    ast: Sequence
    warnings: list[ParseWarning] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "status": self.status,
            "raw_latex": self.raw_latex,
            "ast": node_to_dict(self.ast),
            "warnings": [w.model_dump(mode="json", exclude_none=True) for w in self.warnings],
        }


def parse_latex(
    latex: str,
    *,
    registry: CommandRegistry | None = None,
    config: ParserConfig | None = None,
) -> ParseResult:
    """Parse LaTeX math into an AST with collected warnings."""

    parser = Parser(latex, registry=registry, config=config)
    try:
        ast = parser.parse()
    except Exception as exc:  # noqa: BLE001 - safe fallback path
        return ParseResult(
            status="raw",
            raw_latex=latex,
            ast=Sequence(children=[Text(text=latex)]),
            warnings=[
                *parser.warnings,
                ParseWarning(
                    code=WarningCode.INTERNAL_ERROR,
                    message=f"parse failed: {exc}",
                    position=parser.position,
                ),
            ],
        )

    status = "ok" if not parser.warnings else "partial"
    return ParseResult(status=status, raw_latex=latex, ast=ast, warnings=list(parser.warnings))
