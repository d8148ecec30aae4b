"""Minimal `.desktop` parsing helpers.

Only the `[Desktop Entry]` section is read, and only as far as needed for
executable checks. Locale-suffixed keys and list escaping are not handled.
"""

from __future__ import annotations

from collections.abc import Sequence

DESKTOP_ENTRY_HEADER = "[Desktop Entry]"

_TRUTHY = frozenset({"true", "1", "yes"})


def parse_section(
    content: str, section: str = DESKTOP_ENTRY_HEADER
) -> dict[str, str]:
    """Return the key/value pairs of *section*; never raises.

    Keys keep their case, later duplicates win, comment lines starting with
    `#` or `;` and lines without `=` are ignored.
    """
    fields: dict[str, str] = {}
    in_section = False
    for raw in content.splitlines():
        line = raw.strip()
        if not line or line.startswith(("#", ";")):
            continue
        if line.startswith("[") and line.endswith("]"):
            in_section = line == section
            continue
        if not in_section:
            continue
        key, sep, value = line.partition("=")
        if not sep:
            continue
        fields[key.strip()] = value.strip()
    return fields


def parse_bool(value: str | None) -> bool:
    """Interpret a `.desktop` boolean (`true`, `1`, `yes`; case-insensitive)."""
    if value is None:
        return False
    return value.strip().lower() in _TRUTHY


def executable_token_index(tokens: Sequence[str]) -> int | None:
    """Return the index of the executable token in a shell-split Exec line."""
    if not tokens:
        return None
    i = 0
    if tokens[0] == "env":
        i = 1
        # env options and VAR=value assignments
        while i < len(tokens) and (tokens[i].startswith("-") or "=" in tokens[i]):
            i += 1
    return i if i < len(tokens) else None


def extract_executable_token(tokens: Sequence[str]) -> str | None:
    """Return the executable token, looking past an `env ...` prefix.

    `["myapp", "arg"]` gives `"myapp"`; `["env", "FOO=1", "-i", "myapp"]`
    gives `"myapp"`; an empty list gives None.
    """
    index = executable_token_index(tokens)
    return None if index is None else tokens[index]
