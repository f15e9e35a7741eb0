"""Lexical token model for the LaTeX math tokenizer."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class TokenKind(str, Enum):
    """Token category."""

    COMMAND = "command"
    SYMBOL = "symbol"
    LEFT_BRACE = "left_brace"
    RIGHT_BRACE = "right_brace"
    LEFT_BRACKET = "left_bracket"
    RIGHT_BRACKET = "right_bracket"
    WHITESPACE = "whitespace"
    TEXT = "text"
    EOF = "eof"


@dataclass(frozen=True, slots=True)
class Token:
    """One lexical unit.

    ``value`` holds the command name (without the backslash), the symbol
    character or the text run. Structural kinds carry an empty value.
    """

    kind: TokenKind
    value: str = ""

    def is_symbol(self, ch: str) -> bool:
        return self.kind is TokenKind.SYMBOL and self.value == ch

    def is_command(self, name: str) -> bool:
        return self.kind is TokenKind.COMMAND and self.value == name

    def __str__(self) -> str:
        if self.value:
            return f"{self.kind.name} {self.value}"
        return self.kind.name


LEFT_BRACE = Token(TokenKind.LEFT_BRACE)
RIGHT_BRACE = Token(TokenKind.RIGHT_BRACE)
LEFT_BRACKET = Token(TokenKind.LEFT_BRACKET)
RIGHT_BRACKET = Token(TokenKind.RIGHT_BRACKET)
WHITESPACE = Token(TokenKind.WHITESPACE)
EOF = Token(TokenKind.EOF)


def command(name: str) -> Token:
    return Token(TokenKind.COMMAND, name)


def symbol(ch: str) -> Token:
    return Token(TokenKind.SYMBOL, ch)


def text(run: str) -> Token:
    return Token(TokenKind.TEXT, run)
