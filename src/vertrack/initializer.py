"""Interactive collection of the initial version record for ``vertrack init``."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import click
from loguru import logger

from vertrack.config import InitDefaults
from vertrack.exceptions import UserCancelled
from vertrack.record import VersionRecord, parse_build_number
from vertrack.versioning import parse_version


class RecordInitializer:
    """Prompts the operator for each field of a new :class:`VersionRecord`.

    Prompts run in a fixed order with no going back: project name, starting
    version, version label, build number, then a confirmation. Required
    fields are asked again while empty; an unparseable version or build
    number ends the run with an error.

    The prompt, confirm and echo callables default to click's and can be
    replaced, e.g. with scripted answers in tests.
    """

    def __init__(
        self,
        defaults: InitDefaults | None = None,
        prompt: Callable[..., Any] | None = None,
        confirm: Callable[..., bool] | None = None,
        echo: Callable[..., None] | None = None,
    ) -> None:
        self.defaults = defaults or InitDefaults()
        self._prompt = prompt or click.prompt
        self._confirm = confirm or click.confirm
        self._echo = echo or click.echo

    def _ask(self, text: str) -> str:
        value = self._prompt(text, default="", show_default=False)
        return str(value).strip()

    def _ask_required(self, text: str) -> str:
        while True:
            value = self._ask(text)
            if value:
                return value
            self._echo("A value is required.")

    def run(self) -> VersionRecord:
        """Prompt for every field and return the confirmed record.

        Raises:
            InvalidVersionFormat: If the starting version does not parse.
            InvalidBuildNumber: If the build number is not a non-negative integer.
            UserCancelled: If the operator declines the confirmation.
        """
        name = self._ask_required("Project name (required)")

        raw_version = self._ask(f"Current version (default={self.defaults.version})")
        version = parse_version(raw_version or self.defaults.version)

        label = self._ask_required("Version name (required)")

        raw_build = self._ask(f"Current build number (default={self.defaults.build})")
        build = parse_build_number(raw_build) if raw_build else self.defaults.build

        record = VersionRecord(name=name, version=version, version_string=label, build=build)

        self._echo(record.summary())
        if not self._confirm("Is this correct?", default=True):
            logger.debug("Initialization declined by operator")
            raise UserCancelled("Aborted; nothing was written.")

        return record
