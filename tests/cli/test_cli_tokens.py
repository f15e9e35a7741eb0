"""CLI tests for mathast-tokens."""

from __future__ import annotations

import subprocess
import sys

import pytest

from mathast.cli.tokens import main


def test_cli_tokens_lists_stream(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["x^2"]) == 0
    assert capsys.readouterr().out.splitlines() == ["TEXT x", "SYMBOL ^", "TEXT 2", "EOF"]


def test_cli_tokens_subprocess() -> None:
    result = subprocess.run(
        [sys.executable, "-m", "mathast.cli.tokens", r"\frac{a}"],
        capture_output=True,
        text=True,
        check=False,
    )
    assert result.returncode == 0
    assert result.stdout.splitlines() == ["COMMAND frac", "LEFT_BRACE", "TEXT a", "RIGHT_BRACE", "EOF"]


def test_cli_tokens_without_input(capsys: pytest.CaptureFixture[str]) -> None:
    assert main([]) == 1
    assert capsys.readouterr().out.startswith("ERROR:")
