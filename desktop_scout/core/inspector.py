"""Concurrent inspection of `.desktop` files.

Every input path yields exactly one `Finding`; per-file failures become
`Broken` findings and never abort the run.
"""

from __future__ import annotations

import dataclasses
import logging
import os
import threading
from collections.abc import Iterable
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path

from .desktop_entry import parse_bool, parse_section
from .model import (
    Finding,
    ResolutionContext,
    Status,
    StatusBroken,
    StatusOk,
    StatusSkipped,
)
from .resolver import ExecCheckError, validate_exec, validate_try_exec

logger = logging.getLogger(__name__)


class GateClosedError(RuntimeError):
    """Raised when a slot is requested from a closed `InspectionGate`."""


class InspectionGate:
    """Counting gate admitting at most *limit* concurrent inspections."""

    def __init__(self, limit: int) -> None:
        if limit < 1:
            raise ValueError(f"gate limit must be >= 1, got {limit}")
        self.limit = limit
        self._slots = threading.BoundedSemaphore(limit)
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def close(self) -> None:
        self._closed = True

    def acquire(self) -> None:
        if self._closed:
            raise GateClosedError("inspection gate is closed")
        self._slots.acquire()

    def release(self) -> None:
        self._slots.release()

    def __enter__(self) -> InspectionGate:
        self.acquire()
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.release()


def default_jobs() -> int:
    """Default concurrency cap: four inspections per CPU, at least eight."""
    return max((os.cpu_count() or 1) * 4, 8)


def inspect_one(
    path: Path, ctx_template: ResolutionContext, *, include_hidden: bool = False
) -> Finding:
    """Read, parse and check one `.desktop` file."""
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning("failed to read %s: %s", path, exc)
        return Finding(
            desktop_file=path,
            status=StatusBroken(reason=f"Failed to read/parse file: {exc}"),
        )

    fields = parse_section(content)
    exec_line = fields.get("Exec")
    try_exec = fields.get("TryExec")
    path_key = fields.get("Path")
    hidden = parse_bool(fields.get("Hidden"))
    no_display = parse_bool(fields.get("NoDisplay"))

    def finding(status: Status) -> Finding:
        return Finding(
            desktop_file=path,
            name=fields.get("Name"),
            exec=exec_line,
            try_exec=try_exec,
            path_key=path_key,
            hidden=hidden,
            no_display=no_display,
            status=status,
        )

    if not include_hidden and (hidden or no_display):
        return finding(
            StatusSkipped(
                reason=(
                    "Hidden=true or NoDisplay=true "
                    "(use --include-hidden to scan these)"
                )
            )
        )

    entry_type = fields.get("Type")
    if entry_type is not None and entry_type != "Application":
        return finding(
            StatusSkipped(
                reason=f"Type={entry_type} (only Type=Application is checked)"
            )
        )

    # DBus-activated entries are started by the session bus
    if parse_bool(fields.get("DBusActivatable")) and exec_line is None:
        return finding(StatusOk(resolved_executable=None))

    ctx = dataclasses.replace(ctx_template, working_dir=path_key or None)

    if try_exec is not None:
        resolved_try_exec = validate_try_exec(try_exec, ctx)
        if resolved_try_exec is None:
            return finding(StatusBroken(reason=f"TryExec does not resolve: {try_exec}"))
        if exec_line is None:
            return finding(StatusOk(resolved_executable=resolved_try_exec))
        return finding(
            _exec_status(
                exec_line,
                ctx,
                unresolved="Exec does not resolve (even though TryExec does)",
            )
        )

    if exec_line is not None:
        return finding(_exec_status(exec_line, ctx, unresolved="Exec does not resolve"))

    return finding(StatusBroken(reason="No Exec key found (and not DBusActivatable)"))


def _exec_status(exec_line: str, ctx: ResolutionContext, *, unresolved: str) -> Status:
    try:
        resolved = validate_exec(exec_line, ctx)
    except ExecCheckError as exc:
        return StatusBroken(reason=f"Exec check failed: {exc}")
    if resolved is None:
        return StatusBroken(reason=unresolved)
    return StatusOk(resolved_executable=resolved)


def _inspect_guarded(
    gate: InspectionGate,
    path: Path,
    ctx_template: ResolutionContext,
    include_hidden: bool,
) -> Finding:
    with gate:
        try:
            return inspect_one(path, ctx_template, include_hidden=include_hidden)
        except Exception as exc:
            logger.warning("failed to inspect %s: %s", path, exc, exc_info=True)
            return Finding(
                desktop_file=path,
                status=StatusBroken(reason=f"Failed to read/parse file: {exc}"),
            )


def inspect_all(
    files: Iterable[Path],
    jobs: int | None,
    ctx_template: ResolutionContext,
    *,
    include_hidden: bool = False,
) -> list[Finding]:
    """Inspect *files* with at most *jobs* inspections in flight.

    Returns one finding per unique path, in completion order.
    """
    unique = list(dict.fromkeys(Path(p) for p in files))
    limit = jobs if jobs is not None else default_jobs()
    gate = InspectionGate(limit)
    logger.debug("inspecting %d file(s) with %d job(s)", len(unique), limit)

    findings: list[Finding] = []
    try:
        with ThreadPoolExecutor(
            max_workers=max(1, min(limit, len(unique))),
            thread_name_prefix="desktop-scout-inspect",
        ) as pool:
            futures = [
                pool.submit(_inspect_guarded, gate, path, ctx_template, include_hidden)
                for path in unique
            ]
            for future in as_completed(futures):
                findings.append(future.result())
    finally:
        gate.close()
    return findings
