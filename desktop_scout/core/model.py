"""Data model shared by the scanner core and the presentation layer."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import ClassVar, TypeAlias


@dataclass(frozen=True, slots=True)
class ResolutionContext:
    """Read-only inputs used to resolve executables for one descriptor."""

    search_path: str
    working_dir: str | None = None  # from `Path=`
    check_script_args: bool = False


@dataclass(frozen=True, slots=True)
class StatusOk:
    """Entry resolves, or legitimately has no executable (DBus activation)."""

    kind: ClassVar[str] = "ok"

    resolved_executable: Path | None = None


@dataclass(frozen=True, slots=True)
class StatusBroken:
    """Entry fails validation."""

    kind: ClassVar[str] = "broken"

    reason: str


@dataclass(frozen=True, slots=True)
class StatusSkipped:
    """Entry was intentionally not checked."""

    kind: ClassVar[str] = "skipped"

    reason: str


Status: TypeAlias = StatusOk | StatusBroken | StatusSkipped


@dataclass(frozen=True, slots=True)
class Finding:
    """Inspection outcome for a single `.desktop` file."""

    desktop_file: Path
    status: Status
    name: str | None = None
    exec: str | None = None
    try_exec: str | None = None
    path_key: str | None = None
    hidden: bool = False
    no_display: bool = False

    @property
    def is_broken(self) -> bool:
        return isinstance(self.status, StatusBroken)
