"""CLI entry-point for desktop-scout."""

from __future__ import annotations

import argparse
import logging
import os
from importlib import metadata
from pathlib import Path

from desktop_scout.core import app_config
from desktop_scout.core.app_dirs import collect_application_dirs
from desktop_scout.core.inspector import default_jobs, inspect_all
from desktop_scout.core.model import ResolutionContext
from desktop_scout.core.report import (
    format_json_report,
    format_text_report,
    select_findings,
)
from desktop_scout.core.walker import collect_files
from desktop_scout.log import logging_session

logger = logging.getLogger("desktop_scout.cli")


def _positive_int(value: str) -> int:
    try:
        parsed = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}") from None
    if parsed < 1:
        raise argparse.ArgumentTypeError("must be >= 1")
    return parsed


def _version() -> str:
    try:
        return metadata.version("desktop-scout")
    except metadata.PackageNotFoundError:
        return "0.0.0"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="desktop-scout",
        description="Detect broken/stale .desktop files by validating Exec/TryExec.",
    )
    parser.add_argument(
        "--json", action="store_true", help="print JSON output (machine readable)"
    )
    parser.add_argument(
        "--no-default",
        action="store_true",
        help="do not use default scan directories",
    )
    parser.add_argument(
        "--no-log", action="store_true", help="suppress all logging output"
    )
    parser.add_argument(
        "--include-hidden",
        action="store_true",
        help="include entries with Hidden=true or NoDisplay=true",
    )
    parser.add_argument(
        "--dir",
        dest="extra_dirs",
        action="append",
        type=Path,
        default=[],
        metavar="DIR",
        help="additional directory to scan (can be passed multiple times)",
    )
    parser.add_argument(
        "--no-common-extras",
        action="store_true",
        help="do not scan common extra dirs (Flatpak, Snap desktop exports)",
    )
    parser.add_argument(
        "--check-script-args",
        action="store_true",
        help=(
            "heuristic checks for interpreter Exec lines (python/node/bash) "
            "where the script path is an argument"
        ),
    )
    parser.add_argument(
        "--jobs",
        type=_positive_int,
        default=None,
        help=f"max concurrent inspections (default: {default_jobs()})",
    )
    parser.add_argument(
        "--all",
        dest="show_all",
        action="store_true",
        help="report every entry, not only broken ones",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="config file (default: $XDG_CONFIG_HOME/desktop-scout/config.toml)",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="enable debug logging"
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {_version()}"
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    cfg = app_config.load(args.config)

    with logging_session(
        enabled=not args.no_log,
        verbose=args.verbose,
        level=cfg.log_level,
        log_file=cfg.log_file,
    ):
        logger.info("desktop-scout started")
        logger.debug("parsed args: %s", args)

        dirs = collect_application_dirs(
            no_default=args.no_default or cfg.no_default,
            no_common_extras=args.no_common_extras or cfg.no_common_extras,
            extra_dirs=[*cfg.extra_dirs, *args.extra_dirs],
        )
        files = collect_files(dirs)
        logger.info("found %d .desktop file(s) in %d dir(s)", len(files), len(dirs))

        ctx = ResolutionContext(
            search_path=os.environ.get("PATH", ""),
            check_script_args=args.check_script_args or cfg.check_script_args,
        )
        findings = inspect_all(
            files,
            args.jobs if args.jobs is not None else cfg.jobs,
            ctx,
            include_hidden=args.include_hidden or cfg.include_hidden,
        )

        selected = select_findings(findings, show_all=args.show_all)
        if args.json:
            print(format_json_report(selected))
        else:
            print(format_text_report(selected, show_all=args.show_all))

        broken = sum(1 for f in findings if f.is_broken)
        logger.info("desktop-scout done: %d broken of %d", broken, len(findings))
    return 1 if broken else 0


if __name__ == "__main__":
    raise SystemExit(main())
