"""LaTeX math tokenizing and parsing."""

from mathast.latex.commands import DEFAULT_REGISTRY, CommandRegistry, CommandSpec
from mathast.latex.parser import ParseResult, Parser, parse_latex
from mathast.latex.tokenizer import Tokenizer, tokenize

__all__ = [
    "DEFAULT_REGISTRY",
    "CommandRegistry",
    "CommandSpec",
    "ParseResult",
    "Parser",
    "Tokenizer",
    "parse_latex",
    "tokenize",
]
