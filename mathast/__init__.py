"""Parse a LaTeX math subset into an immutable AST."""

from mathast.latex import DEFAULT_REGISTRY, ParseResult, Parser, parse_latex, tokenize

__all__ = [
    "DEFAULT_REGISTRY",
    "ParseResult",
    "Parser",
    "parse_latex",
    "tokenize",
]
