"""Configuration loading for user-level scan and logging defaults."""

from __future__ import annotations

import logging
import os
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, replace
from functools import lru_cache
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

CONFIG_DIR_NAME = "desktop-scout"
CONFIG_FILE_NAME = "config.toml"
_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True, slots=True)
class ScoutConfig:
    """Store effective scan options and logging preferences."""

    include_hidden: bool = False
    check_script_args: bool = False
    no_default: bool = False
    no_common_extras: bool = False
    jobs: int | None = None
    extra_dirs: tuple[Path, ...] = ()
    log_level: str | None = None
    log_file: Path | None = None


def default_config_path(
    environ: Mapping[str, str] | None = None, home: Path | None = None
) -> Path | None:
    """Return `$XDG_CONFIG_HOME/desktop-scout/config.toml` (default `~/.config`).

    Returns None when neither variable is usable and no home directory exists.
    """
    env = os.environ if environ is None else environ
    value = env.get("XDG_CONFIG_HOME", "")
    if value and Path(value).is_absolute():
        base = Path(value)
    else:
        try:
            base = (home or Path.home()) / ".config"
        except RuntimeError:
            logger.debug("no home directory, using built-in defaults")
            return None
    return base / CONFIG_DIR_NAME / CONFIG_FILE_NAME


def _expand(text: str) -> Path:
    # "~" is left as-is when there is no home directory to expand it to
    path = Path(text)
    try:
        return path.expanduser()
    except RuntimeError:
        return path


def _load_toml(path: Path) -> dict[str, Any]:
    if not path.is_file():
        return {}
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, tomllib.TOMLDecodeError) as exc:
        logger.warning("ignoring config %s: %s", path, exc)
        return {}
    return data if isinstance(data, dict) else {}


def _normalize_bool(value: Any, *, default: bool) -> bool:
    return value if isinstance(value, bool) else default


def _normalize_jobs(value: Any, *, default: int | None) -> int | None:
    if isinstance(value, bool):
        return default
    try:
        parsed = int(str(value).strip())
    except (TypeError, ValueError):
        return default
    return max(1, parsed)


def _normalize_dirs(value: Any, *, default: tuple[Path, ...]) -> tuple[Path, ...]:
    if isinstance(value, str):
        candidate = [value]
    elif isinstance(value, list):
        candidate = value
    else:
        return default
    out: list[Path] = []
    seen: set[Path] = set()
    for item in candidate:
        text = str(item).strip()
        if not text:
            continue
        path = _expand(text)
        if path in seen:
            continue
        seen.add(path)
        out.append(path)
    return tuple(out)


def _normalize_level(value: Any, *, default: str | None) -> str | None:
    if not isinstance(value, str):
        return default
    level = value.strip().upper()
    return level if level in _LOG_LEVELS else default


@lru_cache(maxsize=8)
def load(path: Path | None = None) -> ScoutConfig:
    """Load configuration from *path* or the default location.

    A missing file, a malformed document or bad values keep the defaults.
    """
    cfg = ScoutConfig()
    source = path if path is not None else default_config_path()
    if source is None:
        return cfg
    data = _load_toml(source)
    if data:
        logger.debug("loaded config from %s", source)

    scan = data.get("scan", {})
    if isinstance(scan, dict):
        cfg = replace(
            cfg,
            include_hidden=_normalize_bool(
                scan.get("include_hidden"), default=cfg.include_hidden
            ),
            check_script_args=_normalize_bool(
                scan.get("check_script_args"), default=cfg.check_script_args
            ),
            no_default=_normalize_bool(scan.get("no_default"), default=cfg.no_default),
            no_common_extras=_normalize_bool(
                scan.get("no_common_extras"), default=cfg.no_common_extras
            ),
            jobs=_normalize_jobs(scan.get("jobs"), default=cfg.jobs),
            extra_dirs=_normalize_dirs(scan.get("extra_dirs"), default=cfg.extra_dirs),
        )

    log = data.get("logging", {})
    if isinstance(log, dict):
        file_value = log.get("file")
        cfg = replace(
            cfg,
            log_level=_normalize_level(log.get("level"), default=cfg.log_level),
            log_file=(
                _expand(file_value)
                if isinstance(file_value, str) and file_value.strip()
                else cfg.log_file
            ),
        )
    return cfg
