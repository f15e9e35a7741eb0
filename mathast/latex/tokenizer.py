"""Pull-based LaTeX math tokenizer."""

from __future__ import annotations

from collections.abc import Iterator

from mathast.core import tokens as tok
from mathast.core.tokens import Token, TokenKind

_PUNCT = set("+-*/^_=()[]|<>.,;:!?'\"")
_STRUCTURAL = {
    "{": tok.LEFT_BRACE,
    "}": tok.RIGHT_BRACE,
    "[": tok.LEFT_BRACKET,
    "]": tok.RIGHT_BRACKET,
}


def _is_word_char(ch: str) -> bool:
    return ch.isalpha() or ch.isnumeric()


class Tokenizer:
    """Forward-only cursor producing one token per ``next_token`` call.

    Every input character is classified; the tokenizer never raises. Once the
    input is exhausted ``next_token`` keeps returning ``EOF``.
    """

    def __init__(self, text: str) -> None:
        self.text = text
        self.position = 0

    def next_token(self) -> Token:
        text = self.text
        n = len(text)
        i = self.position
        if i >= n:
            return tok.EOF

        ch = text[i]
        if ch.isspace():
            self.position = i + 1
            return tok.WHITESPACE
        if ch == "\\":
            j = i + 1
            while j < n and text[j].isalpha():
                j += 1
            self.position = j
            if j > i + 1:
                return tok.command(text[i + 1 : j])
            return tok.symbol("\\")
        if ch in _STRUCTURAL:
            self.position = i + 1
            return _STRUCTURAL[ch]
        if ch in _PUNCT:
            self.position = i + 1
            return tok.symbol(ch)
        if _is_word_char(ch):
            j = i + 1
            while j < n and _is_word_char(text[j]):
                j += 1
            self.position = j
            return tok.text(text[i:j])
        self.position = i + 1
        return tok.symbol(ch)

    def __iter__(self) -> Iterator[Token]:
        while True:
            token = self.next_token()
            if token.kind is TokenKind.EOF:
                return
            yield token


def tokenize(text: str) -> list[Token]:
    """Tokenize ``text`` fully; the final element is always ``EOF``."""

    out = list(Tokenizer(text))
    out.append(tok.EOF)
    return out
