"""Interpreter/script heuristic for Exec lines like `python3 /opt/app/run.py`.

Only path-like script arguments of a small set of interpreters are checked;
interpreter flags are not parsed.
"""

from __future__ import annotations

import os
from collections.abc import Sequence
from pathlib import Path

INTERPRETERS = frozenset({"python", "python3", "node", "bash", "sh", "ruby", "perl"})


def is_interpreter(executable: Path) -> bool:
    return executable.name.lower() in INTERPRETERS


def script_argument(tokens: Sequence[str], *, start: int = 1) -> str | None:
    """Return the first token from *start* on that is neither a field code nor a flag."""
    for token in tokens[start:]:
        if token.startswith(("%", "-")):
            continue
        return token
    return None


def script_candidate(argument: str, working_dir: str | None) -> Path | None:
    if "/" not in argument:
        return None
    path = Path(argument)
    if path.is_absolute():
        return path
    if working_dir:
        return Path(working_dir) / path
    # relative without Path= is ambiguous; not checked
    return None


def missing_script_reason(
    resolved_exe: Path,
    tokens: Sequence[str],
    working_dir: str | None,
    *,
    start: int = 1,
) -> str | None:
    """Describe a missing script argument of an interpreter, or return None.

    *start* is the index of the first token after the interpreter itself.
    """
    if not is_interpreter(resolved_exe):
        return None
    argument = script_argument(tokens, start=start)
    if argument is None:
        return None
    candidate = script_candidate(argument, working_dir)
    if candidate is None or os.path.exists(candidate):
        return None
    return (
        f"Interpreter {resolved_exe.name.lower()} exists, "
        f"but script/path argument is missing: {candidate}"
    )
