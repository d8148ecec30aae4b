"""Text and JSON rendering of inspection findings."""

from __future__ import annotations

import json
from collections.abc import Iterable
from typing import Any

from .model import Finding, Status, StatusBroken, StatusOk, StatusSkipped


def status_to_dict(status: Status) -> dict[str, Any]:
    if isinstance(status, StatusOk):
        resolved = status.resolved_executable
        return {
            "kind": status.kind,
            "resolved_executable": None if resolved is None else str(resolved),
        }
    return {"kind": status.kind, "reason": status.reason}


def finding_to_dict(finding: Finding) -> dict[str, Any]:
    """Serialize a finding into the stable JSON shape."""
    return {
        "desktop_file": str(finding.desktop_file),
        "name": finding.name,
        "exec": finding.exec,
        "try_exec": finding.try_exec,
        "path_key": finding.path_key,
        "hidden": finding.hidden,
        "no_display": finding.no_display,
        "status": status_to_dict(finding.status),
    }


def select_findings(findings: Iterable[Finding], *, show_all: bool = False) -> list[Finding]:
    """Keep broken findings (or all with *show_all*), ordered by file path."""
    selected = [f for f in findings if show_all or f.is_broken]
    selected.sort(key=lambda f: f.desktop_file)
    return selected


def format_json_report(findings: Iterable[Finding]) -> str:
    return json.dumps([finding_to_dict(f) for f in findings], indent=2)


def _status_line(status: Status) -> str:
    if isinstance(status, StatusBroken):
        return f"  Reason: {status.reason}"
    if isinstance(status, StatusSkipped):
        return f"  Skipped: {status.reason}"
    if status.resolved_executable is None:
        return "  OK (no executable to resolve)"
    return f"  OK: {status.resolved_executable}"


def _finding_block(finding: Finding) -> list[str]:
    lines = [f"- {finding.desktop_file}"]
    for label, value in (
        ("Name", finding.name),
        ("Exec", finding.exec),
        ("TryExec", finding.try_exec),
        ("Path", finding.path_key),
    ):
        if value is not None:
            lines.append(f"  {label}: {value}")
    lines.append(
        f"  Hidden: {str(finding.hidden).lower()} | "
        f"NoDisplay: {str(finding.no_display).lower()}"
    )
    lines.append(_status_line(finding.status))
    return lines


def format_text_report(findings: Iterable[Finding], *, show_all: bool = False) -> str:
    """Render findings (already selected) for a terminal."""
    items = list(findings)
    broken = sum(1 for f in items if f.is_broken)
    if show_all:
        header = f".desktop entries ({len(items)}, {broken} broken):"
    elif not items:
        return "No broken desktop entries found."
    else:
        header = f"Broken .desktop entries ({len(items)}):"
    lines = [header, ""]
    for finding in items:
        lines.extend(_finding_block(finding))
        lines.append("")
    return "\n".join(lines).rstrip("\n")
