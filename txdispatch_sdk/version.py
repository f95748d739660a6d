"""
Version lookup for the txdispatch SDK.

An installed distribution reports its own version. A source checkout has no
distribution metadata, so the version is read from the `[project]` table of
the checkout's pyproject.toml instead.
"""
import importlib.metadata
import pathlib
from typing import Optional

import tomli

DISTRIBUTION_NAME = "txdispatch-sdk"
DEFAULT_VERSION = "0.1.0"
PYPROJECT_PATH = pathlib.Path(__file__).resolve().parent.parent / "pyproject.toml"


def _pyproject_version(path: pathlib.Path) -> Optional[str]:
    try:
        project = tomli.loads(path.read_text(encoding="utf-8")).get("project", {})
    except (OSError, tomli.TOMLDecodeError):
        return None
    version = project.get("version")
    return version if isinstance(version, str) else None


def get_version(
    distribution: str = DISTRIBUTION_NAME,
    pyproject: pathlib.Path = PYPROJECT_PATH,
) -> str:
    """Installed version of `distribution`, else the checkout's, else DEFAULT_VERSION."""
    try:
        return importlib.metadata.version(distribution)
    except importlib.metadata.PackageNotFoundError:
        pass
    return _pyproject_version(pyproject) or DEFAULT_VERSION


__version__ = get_version()
