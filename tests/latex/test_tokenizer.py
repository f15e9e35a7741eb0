"""Tokenizer classification tests."""

from __future__ import annotations

from mathast.core import tokens as tok
from mathast.core.tokens import TokenKind
from mathast.latex.tokenizer import Tokenizer, tokenize


def test_fraction_tokens() -> None:
    assert tokenize(r"\frac{1}{x}") == [
        tok.command("frac"),
        tok.LEFT_BRACE,
        tok.text("1"),
        tok.RIGHT_BRACE,
        tok.LEFT_BRACE,
        tok.text("x"),
        tok.RIGHT_BRACE,
        tok.EOF,
    ]


def test_empty_input_is_eof() -> None:
    assert tokenize("") == [tok.EOF]


def test_whitespace_is_one_token_per_character() -> None:
    assert tokenize("a  b") == [tok.text("a"), tok.WHITESPACE, tok.WHITESPACE, tok.text("b"), tok.EOF]
    assert tokenize("\t\n") == [tok.WHITESPACE, tok.WHITESPACE, tok.EOF]


def test_word_runs_mix_letters_and_digits() -> None:
    assert tokenize("x2y+10") == [tok.text("x2y"), tok.symbol("+"), tok.text("10"), tok.EOF]


def test_command_name_stops_at_non_letter() -> None:
    assert tokenize(r"\alpha2") == [tok.command("alpha"), tok.text("2"), tok.EOF]


def test_brackets_are_structural() -> None:
    kinds = [t.kind for t in tokenize("[x]")]
    assert kinds == [TokenKind.LEFT_BRACKET, TokenKind.TEXT, TokenKind.RIGHT_BRACKET, TokenKind.EOF]


def test_punctuation_is_symbol() -> None:
    tokens = tokenize("^_=|,'")
    assert [t.value for t in tokens[:-1]] == ["^", "_", "=", "|", ",", "'"]
    assert all(t.kind is TokenKind.SYMBOL for t in tokens[:-1])


def test_lone_backslash_is_symbol() -> None:
    assert tokenize("x\\") == [tok.text("x"), tok.symbol("\\"), tok.EOF]


def test_double_backslash_is_two_symbols() -> None:
    assert tokenize(r"\\") == [tok.symbol("\\"), tok.symbol("\\"), tok.EOF]
    assert tokenize(r"\\alpha") == [tok.symbol("\\"), tok.command("alpha"), tok.EOF]


def test_escaped_brace_is_backslash_then_brace() -> None:
    assert tokenize(r"\{") == [tok.symbol("\\"), tok.LEFT_BRACE, tok.EOF]


def test_unclassified_character_is_symbol() -> None:
    assert tokenize("@") == [tok.symbol("@"), tok.EOF]
    assert tokenize("\U0001F600") == [tok.symbol("\U0001F600"), tok.EOF]


def test_eof_is_sticky() -> None:
    tokenizer = Tokenizer("x")
    assert tokenizer.next_token() == tok.text("x")
    assert tokenizer.next_token() == tok.EOF
    assert tokenizer.next_token() == tok.EOF
    assert tokenizer.position == 1


def test_iteration_excludes_eof() -> None:
    assert list(Tokenizer("a b")) == [tok.text("a"), tok.WHITESPACE, tok.text("b")]


def test_token_str() -> None:
    assert str(tok.command("frac")) == "COMMAND frac"
    assert str(tok.LEFT_BRACE) == "LEFT_BRACE"
    assert str(tok.EOF) == "EOF"
