"""Parse LaTeX math and print the AST as JSON."""

from __future__ import annotations

import argparse
import json
from pathlib import Path

from mathast.cli.common import add_config_arguments, add_input_arguments, config_from_args, read_input
from mathast.latex.parser import ParseResult, parse_latex
from mathast.trace import TraceLogger


def _write_trace(path: str, result: ParseResult) -> None:
    """Append trace events; trace failures never fail the parse."""

    try:
        with TraceLogger(path) as logger:
            logger.record_parse(result)
    except OSError as exc:
        print(f"WARNING: trace logging failed: {exc}")


def main(argv: list[str] | None = None) -> int:
    """Run the parse CLI."""

    parser = argparse.ArgumentParser(description="Parse LaTeX math into a JSON AST.")
    add_input_arguments(parser)
    add_config_arguments(parser)
    parser.add_argument("--out", help="Write the JSON result to this path instead of stdout.")
    parser.add_argument("--trace", help="Append JSONL trace events to this path.")
    parser.add_argument("--indent", type=int, default=None, help="JSON indentation.")
    args = parser.parse_args(argv)

    try:
        latex = read_input(args)
        result = parse_latex(latex, config=config_from_args(args))
        payload = json.dumps(result.to_dict(), ensure_ascii=False, indent=args.indent)
        if args.trace:
            _write_trace(args.trace, result)
        if args.out:
            out_path = Path(args.out)
            out_path.parent.mkdir(parents=True, exist_ok=True)
            out_path.write_text(payload + "\n", encoding="utf-8")
            print(f"OK: {result.status} -> {out_path}")
            return 0
    except Exception as exc:  # noqa: BLE001 - CLI boundary
        print(f"ERROR: {exc}")
        return 1

    print(payload)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
