"""Directories that may contain `.desktop` files.

Follows the XDG base-directory defaults plus the Flatpak and Snap export
locations. Environment and home directory are injectable for tests.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Mapping
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_DATA_DIRS = "/usr/local/share:/usr/share"
FLATPAK_USER_EXPORTS = Path("flatpak/exports/share/applications")
COMMON_EXTRA_DIRS = (
    Path("/var/lib/flatpak/exports/share/applications"),
    Path("/var/lib/snapd/desktop/applications"),
)


def data_home(environ: Mapping[str, str], home: Path | None) -> Path | None:
    """Return `$XDG_DATA_HOME`, defaulting to `~/.local/share`."""
    value = environ.get("XDG_DATA_HOME", "")
    if value and Path(value).is_absolute():
        return Path(value)
    if home is None:
        return None
    return home / ".local" / "share"


def data_dirs(environ: Mapping[str, str]) -> list[Path]:
    """Return the absolute entries of `$XDG_DATA_DIRS` (or its default)."""
    raw = environ.get("XDG_DATA_DIRS", "") or DEFAULT_DATA_DIRS
    return [Path(item) for item in raw.split(":") if item and Path(item).is_absolute()]


def _home_from(environ: Mapping[str, str]) -> Path | None:
    value = environ.get("HOME", "")
    return Path(value) if value else None


def collect_application_dirs(
    *,
    no_default: bool = False,
    no_common_extras: bool = False,
    extra_dirs: Iterable[Path | str] = (),
    environ: Mapping[str, str] | None = None,
    home: Path | None = None,
) -> list[Path]:
    """Return the sorted, unique list of directories to scan."""
    env = os.environ if environ is None else environ
    if home is None:
        home = _home_from(env)
    dirs: set[Path] = set()

    if not no_default:
        user_data = data_home(env, home)
        if user_data is not None:
            dirs.add(user_data / "applications")
            if not no_common_extras:
                dirs.add(user_data / FLATPAK_USER_EXPORTS)
        else:
            logger.debug("no XDG data home; skipping ~/.local/share candidates")

        for base in data_dirs(env):
            dirs.add(base / "applications")

        if not no_common_extras:
            dirs.update(COMMON_EXTRA_DIRS)

    dirs.update(Path(item) for item in extra_dirs)
    result = sorted(dirs)
    logger.debug("collected %d application dir(s): %s", len(result), result)
    return result
