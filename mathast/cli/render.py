"""Render LaTeX math through one of the in-repo renderers."""

from __future__ import annotations

import argparse

from mathast.cli.common import add_config_arguments, add_input_arguments, config_from_args, read_input
from mathast.core.ast import Matrix
from mathast.latex.parser import parse_latex
from mathast.render import render_grid, render_sexpr, render_text

FORMATS = ("text", "sexpr", "grid")


def main(argv: list[str] | None = None) -> int:
    """Run the render CLI."""

    parser = argparse.ArgumentParser(description="Render LaTeX math as text.")
    add_input_arguments(parser)
    add_config_arguments(parser)
    parser.add_argument("--format", choices=FORMATS, default="text", help="Output format (default: text).")
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Exit with status 2 when the parse recorded warnings.",
    )
    args = parser.parse_args(argv)

    try:
        result = parse_latex(read_input(args), config=config_from_args(args))
        if args.format == "sexpr":
            output = render_sexpr(result.ast)
        elif args.format == "grid":
            matrices = [child for child in result.ast.children if isinstance(child, Matrix)]
            if not matrices:
                raise ValueError("--format grid needs a matrix environment in the input")
            output = "\n\n".join(render_grid(matrix) for matrix in matrices)
        else:
            output = render_text(result.ast)
    except Exception as exc:  # noqa: BLE001 - CLI boundary
        print(f"ERROR: {exc}")
        return 1

    print(output)
    for warning in result.warnings:
        print(f"WARNING: {warning.code.value}: {warning.message}")
    if args.strict and result.warnings:
        return 2
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
