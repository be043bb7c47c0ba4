"""Pydantic model for the persisted version record.

The record is what ``ver.json`` holds. It is frozen: bumping a version
builds a new record instead of reassigning a field.
"""

from __future__ import annotations

import re
from typing import Annotated, Any

import semver
from pydantic import BaseModel, ConfigDict, Field, PlainSerializer, PlainValidator, field_validator

from vertrack.exceptions import InvalidBuildNumber, InvalidVersionFormat
from vertrack.versioning import BUMPS, format_version, parse_version

_BUILD_PATTERN = re.compile(r"[0-9]+")


def _coerce_version(value: Any) -> semver.Version:
    if isinstance(value, semver.Version):
        return value
    try:
        return parse_version(value)
    except InvalidVersionFormat as exc:
        # pydantic only turns ValueError into a ValidationError
        raise ValueError(exc.message) from exc


SemanticVersion = Annotated[
    semver.Version,
    PlainValidator(_coerce_version),
    PlainSerializer(format_version, return_type=str),
]


def parse_build_number(text: str) -> int:
    """Parse a non-negative decimal build number.

    Raises:
        InvalidBuildNumber: If the text is not made of ASCII digits only.
    """
    candidate = text.strip()
    if not _BUILD_PATTERN.fullmatch(candidate):
        raise InvalidBuildNumber(
            f"'{text}' is not a valid build number (expected a non-negative integer)",
            context={"input": text},
        )
    return int(candidate)


class VersionRecord(BaseModel):
    """Project name, semantic version, free-text label and build counter.

    Attributes:
        name: Project name (non-empty)
        version: Current semantic version
        version_string: Free-text label for the version, e.g. a codename
        build: Non-negative build counter
    """

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        arbitrary_types_allowed=True,
    )

    name: str = Field(min_length=1)
    version: SemanticVersion
    version_string: str = Field(alias="versionString", min_length=1)
    build: int = Field(ge=0, strict=True)

    @field_validator("name", "version_string")
    @classmethod
    def validate_not_blank(cls, v: str) -> str:
        """Reject whitespace-only names and labels."""
        if not v.strip():
            raise ValueError("must not be blank")
        return v

    def with_version(self, version: semver.Version) -> VersionRecord:
        """Return a copy of this record carrying ``version``."""
        return self.model_copy(update={"version": version})

    def bump(self, part: str) -> VersionRecord:
        """Return a copy with the ``major``, ``minor`` or ``patch`` component incremented."""
        return self.with_version(BUMPS[part](self.version))

    def summary(self) -> str:
        return f"{self.name} - {self.version_string} v{format_version(self.version)} build {self.build}"

    def to_json(self) -> str:
        """Serialize using the on-disk key names, indented for humans."""
        return self.model_dump_json(indent=2, by_alias=True) + "\n"
