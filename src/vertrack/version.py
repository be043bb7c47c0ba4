"""Expose the vertrack package version.

The installed distribution metadata is authoritative; source checkouts read
``pyproject.toml`` so the version is declared in one place.
"""

from __future__ import annotations

import tomllib
from importlib import metadata
from pathlib import Path

PYPROJECT_PATH = Path(__file__).resolve().parents[2] / "pyproject.toml"
UNKNOWN_VERSION = "0.0.0-dev"


def _resolve_version() -> str:
    """Return the installed package version or the one declared in pyproject.toml."""

    try:
        return metadata.version("vertrack")
    except metadata.PackageNotFoundError:
        pass

    try:
        with open(PYPROJECT_PATH, "rb") as f:
            return str(tomllib.load(f)["project"]["version"])
    except (OSError, tomllib.TOMLDecodeError, KeyError):
        return UNKNOWN_VERSION


__version__ = _resolve_version()
