"""Shared argument handling for the mathast CLIs."""

from __future__ import annotations

import argparse
from pathlib import Path

from mathast.core.config import ParserConfig


def add_input_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("latex", nargs="?", help="LaTeX math source.")
    parser.add_argument("--file", help="Read LaTeX source from a UTF-8 file instead.")


def add_config_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--max-depth",
        type=int,
        help="Maximum nesting depth (default: $MATHAST_MAX_DEPTH or 100).",
    )


def read_input(args: argparse.Namespace) -> str:
    """Return the LaTeX source named by ``--file`` or the positional argument."""

    if args.file and args.latex is not None:
        raise ValueError("pass either LATEX or --file, not both")
    if args.file:
        return Path(args.file).read_text(encoding="utf-8").strip()
    if args.latex is None:
        raise ValueError("no LaTeX input given")
    return args.latex


def config_from_args(args: argparse.Namespace) -> ParserConfig:
    return ParserConfig.from_env(max_depth=args.max_depth)
