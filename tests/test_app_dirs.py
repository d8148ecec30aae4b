"""Test module for default application directory collection."""

from __future__ import annotations

from pathlib import Path

from desktop_scout.core.app_dirs import (
    collect_application_dirs,
    data_dirs,
    data_home,
)

_HOME = Path("/home/tester")


def test_defaults_follow_xdg_fallbacks() -> None:
    """Verify unset XDG variables fall back to the standard locations."""
    dirs = collect_application_dirs(environ={}, home=_HOME)

    assert dirs == sorted(
        {
            _HOME / ".local/share/applications",
            _HOME / ".local/share/flatpak/exports/share/applications",
            Path("/usr/local/share/applications"),
            Path("/usr/share/applications"),
            Path("/var/lib/flatpak/exports/share/applications"),
            Path("/var/lib/snapd/desktop/applications"),
        }
    )


def test_xdg_variables_override_defaults() -> None:
    """Verify XDG_DATA_HOME and XDG_DATA_DIRS are honoured."""
    env = {"XDG_DATA_HOME": "/data/home", "XDG_DATA_DIRS": "/a:relative::/b"}

    dirs = collect_application_dirs(no_common_extras=True, environ=env, home=_HOME)

    assert dirs == [
        Path("/a/applications"),
        Path("/b/applications"),
        Path("/data/home/applications"),
    ]


def test_no_default_keeps_only_extra_dirs() -> None:
    """Verify --no-default leaves only explicitly requested directories."""
    dirs = collect_application_dirs(
        no_default=True,
        extra_dirs=["/opt/z", Path("/opt/a"), "/opt/z"],
        environ={},
        home=_HOME,
    )

    assert dirs == [Path("/opt/a"), Path("/opt/z")]


def test_home_is_read_from_environment() -> None:
    """Verify HOME is used when no home directory is passed."""
    dirs = collect_application_dirs(
        no_common_extras=True, environ={"HOME": "/home/env", "XDG_DATA_DIRS": "/s"}
    )

    assert Path("/home/env/.local/share/applications") in dirs


def test_missing_home_skips_user_dirs() -> None:
    """Verify no user directories are added without a home directory."""
    assert data_home({}, None) is None
    assert data_home({"XDG_DATA_HOME": "rel"}, None) is None
    dirs = collect_application_dirs(no_common_extras=True, environ={"XDG_DATA_DIRS": "/s"})

    assert dirs == [Path("/s/applications")]


def test_data_dirs_default() -> None:
    """Verify the XDG_DATA_DIRS default is used when empty."""
    assert data_dirs({"XDG_DATA_DIRS": ""}) == [
        Path("/usr/local/share"),
        Path("/usr/share"),
    ]
