import stat
from collections.abc import Callable
from pathlib import Path

import pytest

_PERF_SAMPLES: list[tuple[str, float, float, str]] = []


def _record_perf(label: str, elapsed_ms: float, budget_ms: float, detail: str) -> None:
    _PERF_SAMPLES.append((label, elapsed_ms, budget_ms, detail))


@pytest.fixture()
def perf_recorder() -> Callable[[str, float, float, str], None]:
    return _record_perf


def pytest_terminal_summary(terminalreporter, exitstatus, config) -> None:  # type: ignore[no-untyped-def]
    if not _PERF_SAMPLES:
        return
    terminalreporter.section("Performance")
    for label, elapsed_ms, budget_ms, detail in _PERF_SAMPLES:
        suffix = f" [{detail}]" if detail else ""
        terminalreporter.line(
            f"{label}: {elapsed_ms:.1f}ms (budget {budget_ms:.1f}ms){suffix}"
        )


def _make_executable(path: Path, body: str = "#!/bin/sh\nexit 0\n") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(body, encoding="utf-8")
    path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return path


def _make_plain(path: Path, body: str = "not a program\n") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(body, encoding="utf-8")
    path.chmod(0o644)
    return path


def _write_entry(path: Path, **fields: str) -> Path:
    """Write a `[Desktop Entry]` file; keyword order is kept."""
    path.parent.mkdir(parents=True, exist_ok=True)
    lines = ["[Desktop Entry]"]
    lines.extend(f"{key}={value}" for key, value in fields.items())
    path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return path


@pytest.fixture()
def make_executable() -> Callable[..., Path]:
    return _make_executable


@pytest.fixture()
def make_plain_file() -> Callable[..., Path]:
    return _make_plain


@pytest.fixture()
def write_entry() -> Callable[..., Path]:
    return _write_entry


@pytest.fixture()
def bin_dir(tmp_path: Path) -> Path:
    """Directory holding a couple of fake programs, for use as a search path."""
    directory = tmp_path / "bin"
    _make_executable(directory / "myapp")
    _make_executable(directory / "python3")
    _make_plain(directory / "readme")
    return directory


@pytest.fixture()
def homeless(monkeypatch) -> None:
    """Make `Path.home()` fail: no HOME, no XDG overrides, no passwd entry."""
    import pwd

    for name in ("HOME", "XDG_DATA_HOME", "XDG_CONFIG_HOME"):
        monkeypatch.delenv(name, raising=False)

    def _no_entry(uid: int) -> pwd.struct_passwd:
        raise KeyError(f"getpwuid(): uid not found: {uid}")

    monkeypatch.setattr(pwd, "getpwuid", _no_entry)
