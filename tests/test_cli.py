"""Test module for the command-line entry point."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from desktop_scout.__main__ import build_parser, main
from desktop_scout.core import app_config


@pytest.fixture()
def apps(tmp_path: Path, write_entry, bin_dir: Path, monkeypatch) -> Path:
    monkeypatch.setenv("PATH", str(bin_dir))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    app_config.load.cache_clear()
    root = tmp_path / "applications"
    write_entry(root / "good.desktop", Type="Application", Name="Good", Exec="myapp %U")
    write_entry(root / "broken.desktop", Type="Application", Name="Gone", Exec="gone")
    write_entry(root / "hidden.desktop", Hidden="true", Exec="gone-too")
    write_entry(
        root / "nested" / "script.desktop", Exec="python3 /tmp/does_not_exist_ds.py"
    )
    return root


def _argv(apps: Path, tmp_path: Path, *extra: str) -> list[str]:
    return [
        "--no-default",
        "--no-common-extras",
        "--no-log",
        "--config",
        str(tmp_path / "missing.toml"),
        "--dir",
        str(apps),
        *extra,
    ]


def test_main_text_report_lists_broken(apps: Path, tmp_path: Path, capsys) -> None:
    """Verify broken entries are printed and the exit code signals them."""
    code = main(_argv(apps, tmp_path))

    out = capsys.readouterr().out
    assert code == 1
    assert "Broken .desktop entries (1):" in out
    assert str(apps / "broken.desktop") in out
    assert "Reason: Exec does not resolve" in out
    assert "hidden.desktop" not in out


def test_main_json_report_with_options(apps: Path, tmp_path: Path, capsys) -> None:
    """Verify JSON output honours --include-hidden and --check-script-args."""
    code = main(
        _argv(apps, tmp_path, "--json", "--include-hidden", "--check-script-args", "--jobs", "2")
    )

    payload = json.loads(capsys.readouterr().out)
    assert code == 1
    assert [Path(item["desktop_file"]).name for item in payload] == [
        "broken.desktop",
        "hidden.desktop",
        "script.desktop",
    ]
    assert all(item["status"]["kind"] == "broken" for item in payload)
    assert payload[1]["hidden"] is True


def test_main_success_when_nothing_broken(
    tmp_path: Path, write_entry, bin_dir: Path, monkeypatch, capsys
) -> None:
    """Verify a clean scan reports success with exit code 0."""
    monkeypatch.setenv("PATH", str(bin_dir))
    app_config.load.cache_clear()
    root = write_entry(tmp_path / "apps" / "ok.desktop", Exec="myapp").parent

    code = main(_argv(root, tmp_path))

    assert code == 0
    assert capsys.readouterr().out.strip() == "No broken desktop entries found."


def test_main_reads_config_file(apps: Path, tmp_path: Path, capsys) -> None:
    """Verify config values apply when flags are absent."""
    config = tmp_path / "scout.toml"
    config.write_text(
        f'[scan]\ninclude_hidden = true\nextra_dirs = ["{apps}"]\n', encoding="utf-8"
    )

    code = main(["--no-default", "--no-common-extras", "--no-log", "--config", str(config), "--json"])

    names = [Path(item["desktop_file"]).name for item in json.loads(capsys.readouterr().out)]
    assert code == 1
    assert names == ["broken.desktop", "hidden.desktop"]


def test_main_all_flag_includes_every_entry(apps: Path, tmp_path: Path, capsys) -> None:
    """Verify --all renders ok and skipped entries too."""
    main(_argv(apps, tmp_path, "--all", "--json"))

    kinds = sorted(item["status"]["kind"] for item in json.loads(capsys.readouterr().out))
    assert kinds == ["broken", "ok", "ok", "skipped"]


def test_main_writes_log_file(apps: Path, tmp_path: Path, capsys) -> None:
    """Verify a normal run logs to the XDG data directory."""
    argv = [a for a in _argv(apps, tmp_path) if a != "--no-log"]

    main(argv)

    log_file = tmp_path / "data" / "desktop-scout" / "desktop-scout.log"
    assert "desktop-scout started" in log_file.read_text(encoding="utf-8")


def test_main_runs_without_home_directory(
    apps: Path, tmp_path: Path, homeless, capsys
) -> None:
    """Verify a scan still completes when no home directory can be found."""
    argv = [a for a in _argv(apps, tmp_path) if a != "--no-log"]

    code = main(argv)

    captured = capsys.readouterr()
    assert code == 1
    assert "Broken .desktop entries (1):" in captured.out
    assert "Falling back to console only" in captured.err


@pytest.mark.parametrize("value", ["0", "-1", "many"])
def test_parser_rejects_bad_jobs(value: str) -> None:
    """Verify --jobs must be a positive integer."""
    with pytest.raises(SystemExit) as exc_info:
        build_parser().parse_args(["--jobs", value])

    assert exc_info.value.code == 2


def test_parser_collects_repeated_dirs() -> None:
    """Verify --dir may be given several times."""
    args = build_parser().parse_args(["--dir", "/a", "--dir", "/b"])

    assert args.extra_dirs == [Path("/a"), Path("/b")]
    assert args.jobs is None
    assert args.show_all is False
