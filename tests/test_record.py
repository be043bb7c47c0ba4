"""Tests for the VersionRecord model and build-number parsing."""

from __future__ import annotations

import json

import pytest
from pydantic import ValidationError

from vertrack.exceptions import InvalidBuildNumber
from vertrack.record import VersionRecord, parse_build_number
from vertrack.versioning import parse_version


def test_summary_format(sample_record: VersionRecord) -> None:
    assert sample_record.summary() == "Widget - alpha v1.2.3 build 7"


def test_to_json_uses_on_disk_keys(sample_record: VersionRecord) -> None:
    """Given a record, when serialized, then keys match the state-file format."""
    payload = sample_record.to_json()

    assert json.loads(payload) == {
        "name": "Widget",
        "version": "1.2.3",
        "versionString": "alpha",
        "build": 7,
    }
    assert '\n  "name"' in payload
    assert payload.endswith("\n")


def test_validate_from_aliases() -> None:
    record = VersionRecord.model_validate(
        {"name": "Widget", "version": "v0.1.0", "versionString": "alpha", "build": 0}
    )
    assert record.version == parse_version("0.1.0")
    assert record.version_string == "alpha"


def test_bump_returns_new_record(sample_record: VersionRecord) -> None:
    bumped = sample_record.bump("major")

    assert bumped is not sample_record
    assert bumped.summary() == "Widget - alpha v2.0.0 build 7"
    assert sample_record.summary() == "Widget - alpha v1.2.3 build 7"


def test_record_is_frozen(sample_record: VersionRecord) -> None:
    with pytest.raises(ValidationError):
        sample_record.build = 8  # type: ignore[misc]


@pytest.mark.parametrize(  # type: ignore[misc]
    "overrides",
    [
        {"name": ""},
        {"name": "   "},
        {"versionString": ""},
        {"build": -1},
        {"build": "3"},
        {"version": "1.2"},
    ],
)
def test_invalid_fields_rejected(overrides: dict[str, object]) -> None:
    data: dict[str, object] = {"name": "Widget", "version": "1.2.3", "versionString": "alpha", "build": 0}
    data.update(overrides)
    with pytest.raises(ValidationError):
        VersionRecord.model_validate(data)


class TestParseBuildNumber:
    """Tests for parse_build_number."""

    @pytest.mark.parametrize(("text", "expected"), [("0", 0), ("42", 42), (" 7 ", 7)])  # type: ignore[misc]
    def test_valid(self, text: str, expected: int) -> None:
        assert parse_build_number(text) == expected

    @pytest.mark.parametrize("text", ["-1", "+1", "1.5", "abc", "", "٣"])  # type: ignore[misc]
    def test_invalid(self, text: str) -> None:
        with pytest.raises(InvalidBuildNumber):
            parse_build_number(text)
