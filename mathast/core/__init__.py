"""Core mathast data model."""

from mathast.core.ast import Node, children_of, node_to_dict, parse_node, walk
from mathast.core.config import ParserConfig
from mathast.core.diagnostics import MathAstError, NestingDepthError, ParseWarning, WarningCode
from mathast.core.tokens import Token, TokenKind

__all__ = [
    "MathAstError",
    "NestingDepthError",
    "Node",
    "ParseWarning",
    "ParserConfig",
    "Token",
    "TokenKind",
    "WarningCode",
    "children_of",
    "node_to_dict",
    "parse_node",
    "walk",
]
