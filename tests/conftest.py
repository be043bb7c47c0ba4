"""Pytest configuration for test discovery and shared fixtures.

This file ensures that:
- `src/` is importable without installing the package
- loguru sinks added by one test do not leak into the next
"""

from __future__ import annotations

import sys
from collections.abc import Iterator
from pathlib import Path

import pytest

# Ensure src directory is in path for imports
repo_root = Path(__file__).parent.parent
src_path = repo_root / "src"
if str(src_path) not in sys.path:
    sys.path.insert(0, str(src_path))

from loguru import logger  # noqa: E402

from vertrack.record import VersionRecord  # noqa: E402
from vertrack.state import VersionStore  # noqa: E402
from vertrack.versioning import parse_version  # noqa: E402


@pytest.fixture(autouse=True)  # type: ignore[misc]
def _reset_loguru() -> Iterator[None]:
    logger.remove()
    yield
    logger.remove()


@pytest.fixture  # type: ignore[misc]
def store(tmp_path: Path) -> VersionStore:
    """Provide a VersionStore rooted in a temporary directory."""
    return VersionStore(tmp_path / "ver.json")


@pytest.fixture  # type: ignore[misc]
def sample_record() -> VersionRecord:
    return VersionRecord(
        name="Widget",
        version=parse_version("1.2.3"),
        version_string="alpha",
        build=7,
    )
