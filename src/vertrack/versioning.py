"""Semantic version values and the increment rules used by ``vertrack``.

Versions are :class:`semver.Version` instances, which are immutable and
ordered by semantic-version precedence. Every increment returns a new value.
"""

from __future__ import annotations

from collections.abc import Callable

import semver

from vertrack.exceptions import InvalidVersionFormat

DEFAULT_VERSION = semver.Version(major=0, minor=1, patch=0)


def parse_version(text: str) -> semver.Version:
    """Parse ``major.minor.patch[-prerelease][+metadata]`` into a version.

    A single leading ``v`` is ignored, so ``"v1.2.3"`` and ``"1.2.3"``
    parse to the same value. Whitespace is not trimmed.

    Raises:
        InvalidVersionFormat: If the text is not a full semantic version.
    """
    if not isinstance(text, str):
        raise InvalidVersionFormat(f"Version must be a string, got {type(text).__name__}")

    candidate = text[1:] if text[:1] in ("v", "V") else text

    try:
        return semver.Version.parse(candidate)
    except ValueError as exc:
        raise InvalidVersionFormat(
            f"'{text}' is not a valid semantic version (expected major.minor.patch)",
            context={"input": text, "error": str(exc)},
        ) from exc


def increment_major(version: semver.Version) -> semver.Version:
    """Return ``(major+1).0.0``; pre-release and metadata are dropped."""
    return version.bump_major()


def increment_minor(version: semver.Version) -> semver.Version:
    """Return ``major.(minor+1).0``; pre-release and metadata are dropped."""
    return version.bump_minor()


def increment_patch(version: semver.Version) -> semver.Version:
    """Return ``major.minor.(patch+1)``; pre-release and metadata are dropped."""
    return version.bump_patch()


def format_version(version: semver.Version) -> str:
    return str(version)


BUMPS: dict[str, Callable[[semver.Version], semver.Version]] = {
    "major": increment_major,
    "minor": increment_minor,
    "patch": increment_patch,
}
