"""desktop-scout – all public symbols are re-exported from .core."""

from importlib import metadata

from .core import (  # noqa: F401 – re-exports
    Finding,
    ResolutionContext,
    Status,
    collect_application_dirs,
    collect_files,
    inspect_all,
    parse_section,
    resolve,
)

try:
    __version__ = metadata.version("desktop-scout")
except metadata.PackageNotFoundError:  # editable install before first build
    __version__ = "0.0.0"
