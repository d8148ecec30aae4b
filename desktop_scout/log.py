"""Process-wide logging setup for the command-line entry point.

The scanner core only emits records through module loggers; handlers are
installed here for the duration of one run and removed afterwards.
"""

from __future__ import annotations

import contextlib
import logging
import os
import sys
from collections.abc import Iterator, Mapping
from pathlib import Path

LOG_FILE_NAME = "desktop-scout.log"
LOG_ENV_VAR = "DESKTOP_SCOUT_LOG"
ROOT_LOGGER = "desktop_scout"

_CONSOLE_FORMAT = "%(levelname)s [%(threadName)s] %(message)s"
_FILE_FORMAT = "%(asctime)s %(levelname)s [%(threadName)s] %(name)s: %(message)s"


def log_filepath(
    environ: Mapping[str, str] | None = None, home: Path | None = None
) -> Path:
    """Return `$XDG_DATA_HOME/desktop-scout/desktop-scout.log`."""
    env = os.environ if environ is None else environ
    value = env.get("XDG_DATA_HOME", "")
    if value and Path(value).is_absolute():
        base = Path(value)
    else:
        base = (home or Path.home()) / ".local" / "share"
    return base / "desktop-scout" / LOG_FILE_NAME


def _resolve_level(
    verbose: bool, configured: str | None, environ: Mapping[str, str]
) -> int | None:
    if verbose:
        return logging.DEBUG
    levels = logging.getLevelNamesMapping()
    for raw in (environ.get(LOG_ENV_VAR, ""), configured or ""):
        level = levels.get(raw.strip().upper())
        if level is not None:
            return level
    return None


def _build_file_handler(path: Path, level: int) -> logging.Handler:
    path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(path, encoding="utf-8")
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(_FILE_FORMAT))
    return handler


@contextlib.contextmanager
def logging_session(
    *,
    enabled: bool = True,
    verbose: bool = False,
    level: str | None = None,
    log_file: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> Iterator[logging.Logger]:
    """Install console and file handlers for one run and remove them on exit.

    Without an explicit level the file receives INFO and the console
    WARNING. If the log file cannot be located or opened, logging
    continues on the console only.
    """
    env = os.environ if environ is None else environ
    logger = logging.getLogger(ROOT_LOGGER)
    handlers: list[logging.Handler] = []
    previous_level = logger.level
    previous_propagate = logger.propagate
    file_error: Exception | None = None

    if not enabled:
        handlers.append(logging.NullHandler())
        logger.propagate = False
    else:
        explicit = _resolve_level(verbose, level, env)
        console = logging.StreamHandler(sys.stderr)
        console.setLevel(explicit if explicit is not None else logging.WARNING)
        console.setFormatter(logging.Formatter(_CONSOLE_FORMAT))
        handlers.append(console)
        file_level = explicit if explicit is not None else logging.INFO
        try:
            path = log_file if log_file is not None else log_filepath(env)
            handlers.append(_build_file_handler(path, file_level))
        except (OSError, RuntimeError) as exc:
            # RuntimeError: no home directory to derive the default path from
            file_error = exc
        logger.setLevel(min(h.level for h in handlers))
        logger.propagate = False

    for handler in handlers:
        logger.addHandler(handler)
    if file_error is not None:
        logger.warning(
            "File logging could not be initialized. "
            "Falling back to console only: %s",
            file_error,
        )
    try:
        yield logger
    finally:
        for handler in handlers:
            logger.removeHandler(handler)
            handler.close()
        logger.setLevel(previous_level)
        logger.propagate = previous_propagate
