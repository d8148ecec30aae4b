"""Executable resolution for `TryExec=` and `Exec=` values.

A token containing `/` is a path: absolute paths are checked as-is,
relative ones only against the entry's `Path=` working directory. Any
other token is looked up in the search path.
"""

from __future__ import annotations

import logging
import os
import shlex
import stat
from pathlib import Path

from .desktop_entry import executable_token_index
from .model import ResolutionContext
from .script_heuristic import missing_script_reason

logger = logging.getLogger(__name__)

_EXEC_BITS = stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH


class ExecCheckError(ValueError):
    """Exec line cannot be validated (bad quoting, no executable, missing script)."""


def is_executable_file(path: Path | str) -> bool:
    """Return whether *path* is a regular file with any execute bit set."""
    try:
        st = os.stat(path)
    except (OSError, ValueError):
        return False
    if not stat.S_ISREG(st.st_mode):
        return False
    if os.name != "posix":
        # no permission-bit model; existence and file-ness only
        return True
    return bool(st.st_mode & _EXEC_BITS)


def which_in_path(command: str, search_path: str) -> Path | None:
    """Return the first executable *command* found in a `:`-separated search path."""
    for entry in search_path.split(":"):
        if not entry:
            continue
        candidate = Path(entry) / command
        if is_executable_file(candidate):
            return candidate
    return None


def resolve(
    token: str, search_path: str, working_dir: str | None = None
) -> Path | None:
    """Resolve *token* to an on-disk executable, or return None."""
    if "/" in token:
        path = Path(token)
        if path.is_absolute():
            return path if is_executable_file(path) else None
        if working_dir:
            candidate = Path(working_dir) / path
            return candidate if is_executable_file(candidate) else None
        # relative without Path= is ambiguous; treated as unresolved
        logger.debug("relative executable %r without Path=, not resolved", token)
        return None
    return which_in_path(token, search_path)


def validate_try_exec(value: str, ctx: ResolutionContext) -> Path | None:
    """Resolve a `TryExec=` value (a plain path or command, never a command line)."""
    return resolve(value, ctx.search_path, ctx.working_dir)


def validate_exec(command_line: str, ctx: ResolutionContext) -> Path | None:
    """Resolve the executable of an `Exec=` command line.

    Returns the resolved path, or None when it does not resolve or the
    executable slot only holds a field code such as `%f`. Raises
    `ExecCheckError` for unbalanced quoting, lines with no executable and,
    with `check_script_args`, interpreters whose script argument is missing.
    """
    try:
        tokens = shlex.split(command_line)
    except ValueError as exc:
        raise ExecCheckError(f"Failed to shell-split Exec: {exc}") from exc

    index = executable_token_index(tokens)
    if index is None:
        raise ExecCheckError("Could not extract executable from Exec")
    token = tokens[index]

    if token.startswith("%"):
        return None

    resolved = resolve(token, ctx.search_path, ctx.working_dir)
    if resolved is not None and ctx.check_script_args:
        reason = missing_script_reason(
            resolved, tokens, ctx.working_dir, start=index + 1
        )
        if reason is not None:
            raise ExecCheckError(reason)
    return resolved
