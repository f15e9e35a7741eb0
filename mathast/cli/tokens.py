"""Print the token stream of a LaTeX math string."""

from __future__ import annotations

import argparse

from mathast.cli.common import add_input_arguments, read_input
from mathast.latex.tokenizer import tokenize


def main(argv: list[str] | None = None) -> int:
    """Run the tokens CLI."""

    parser = argparse.ArgumentParser(description="Print LaTeX math tokens, one per line.")
    add_input_arguments(parser)
    args = parser.parse_args(argv)

    try:
        latex = read_input(args)
    except Exception as exc:  # noqa: BLE001 - CLI boundary
        print(f"ERROR: {exc}")
        return 1

    for token in tokenize(latex):
        print(token)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
