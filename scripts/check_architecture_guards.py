#!/usr/bin/env python3
"""Fail when a scanner core module imports the CLI, argparse or log setup."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from desktop_scout.core.architecture_guard import check_rules


def _checkout_root() -> Path:
    return Path(__file__).resolve().parent.parent


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="check_architecture_guards",
        description="Check import boundaries of desktop_scout/core.",
    )
    parser.add_argument(
        "root",
        nargs="?",
        type=Path,
        default=None,
        help="Checkout to inspect; defaults to the one holding this script.",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    root = (args.root or _checkout_root()).resolve()
    problems = check_rules(root)
    if not problems:
        print(f"core import boundaries hold under {root}")
        return 0
    print(f"{len(problems)} import boundary problem(s):", file=sys.stderr)
    for problem in problems:
        print(f"  {problem}", file=sys.stderr)
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
