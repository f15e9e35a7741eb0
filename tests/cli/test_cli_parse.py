"""CLI tests for mathast-parse."""

from __future__ import annotations

import json
import subprocess
import sys
from pathlib import Path

import pytest

from mathast.cli.parse import main


def test_cli_parse_prints_json() -> None:
    result = subprocess.run(
        [sys.executable, "-m", "mathast.cli.parse", r"\frac{1}{x}"],
        capture_output=True,
        text=True,
        check=False,
    )
    assert result.returncode == 0
    payload = json.loads(result.stdout)
    assert payload["status"] == "ok"
    assert payload["ast"]["node"] == "Sequence"
    assert payload["ast"]["children"][0]["node"] == "Fraction"


def test_cli_parse_partial_reports_warnings(capsys: pytest.CaptureFixture[str]) -> None:
    assert main([r"\frac{1}"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["status"] == "partial"
    assert payload["warnings"][0]["code"] == "missing_argument"


def test_cli_parse_out_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    out_path = tmp_path / "out" / "ast.json"
    assert main(["x^2", "--out", str(out_path)]) == 0

    assert capsys.readouterr().out.startswith("OK: ok -> ")
    payload = json.loads(out_path.read_text(encoding="utf-8"))
    assert payload["ast"]["children"][0]["node"] == "Superscript"


def test_cli_parse_reads_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    src = tmp_path / "in.tex"
    src.write_text("\\alpha\n", encoding="utf-8")
    assert main(["--file", str(src)]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["raw_latex"] == "\\alpha"
    assert payload["ast"]["children"] == [{"node": "Greek", "name": "alpha"}]


def test_cli_parse_trace(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    trace_path = tmp_path / "trace.jsonl"
    assert main([r"\foo", "--trace", str(trace_path)]) == 0
    capsys.readouterr()

    events = [json.loads(line) for line in trace_path.read_text(encoding="utf-8").splitlines()]
    assert [e["kind"] for e in events] == ["parse", "warning"]


def test_cli_parse_max_depth(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["{{x}}", "--max-depth", "1"]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["warnings"][0]["code"] == "max_depth_exceeded"


def test_cli_parse_without_input(capsys: pytest.CaptureFixture[str]) -> None:
    assert main([]) == 1
    assert capsys.readouterr().out.startswith("ERROR:")


def test_cli_parse_missing_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["--file", str(tmp_path / "missing.tex")]) == 1
    assert "ERROR:" in capsys.readouterr().out


def test_cli_parse_long_script_chain(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["x" + "^2" * 3000]) == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["status"] == "partial"
    assert [w["code"] for w in payload["warnings"]] == ["max_depth_exceeded"]
