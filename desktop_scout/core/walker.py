"""Discovery of `.desktop` files below a set of root directories."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Iterator
from pathlib import Path

logger = logging.getLogger(__name__)

DESKTOP_EXTENSION = ".desktop"


def collect_files(
    roots: Iterable[Path | str], extension: str = DESKTOP_EXTENSION
) -> list[Path]:
    """Return sorted, de-duplicated files ending in *extension* below *roots*.

    Directories that cannot be listed are skipped. Symlinks are never
    followed nor collected, so self-referential links cannot loop.
    """
    found: set[Path] = set()
    for root in roots:
        stack = [Path(root)]
        while stack:
            directory = stack.pop()
            try:
                entries = os.scandir(directory)
            except OSError as exc:
                logger.debug("skipping %s: %s", directory, exc)
                continue
            with entries:
                for entry in _iter_entries(entries, directory):
                    try:
                        if entry.is_symlink():
                            continue
                        if entry.is_dir(follow_symlinks=False):
                            stack.append(Path(entry.path))
                        elif (
                            entry.is_file(follow_symlinks=False)
                            and Path(entry.name).suffix == extension
                        ):
                            found.add(Path(entry.path))
                    except OSError:
                        continue
    return sorted(found)


def _iter_entries(
    entries: Iterable[os.DirEntry[str]], directory: Path
) -> Iterator[os.DirEntry[str]]:
    # stop listing a directory on the first read error, keep what was seen
    iterator = iter(entries)
    while True:
        try:
            entry = next(iterator)
        except StopIteration:
            return
        except OSError as exc:
            logger.debug("stopped listing %s: %s", directory, exc)
            return
        yield entry
