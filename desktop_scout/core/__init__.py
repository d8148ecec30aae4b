"""Scanner core public surface – re-export runtime API."""

from __future__ import annotations

from .app_dirs import collect_application_dirs
from .desktop_entry import extract_executable_token, parse_bool, parse_section
from .inspector import InspectionGate, default_jobs, inspect_all, inspect_one
from .model import (
    Finding,
    ResolutionContext,
    Status,
    StatusBroken,
    StatusOk,
    StatusSkipped,
)
from .resolver import ExecCheckError, resolve, validate_exec, validate_try_exec
from .walker import collect_files

__all__ = [
    "collect_application_dirs",
    "collect_files",
    "parse_section",
    "parse_bool",
    "extract_executable_token",
    "resolve",
    "validate_exec",
    "validate_try_exec",
    "ExecCheckError",
    "inspect_all",
    "inspect_one",
    "default_jobs",
    "InspectionGate",
    "Finding",
    "ResolutionContext",
    "Status",
    "StatusOk",
    "StatusBroken",
    "StatusSkipped",
]
