"""
vertrack exception hierarchy.

Every failure the tool can report is a subclass of :class:`VertrackError`.
Errors are raised where they are detected and handled once, in
``vertrack.main``, which prints the message and exits with the class-level
``exit_code``.

Exit codes:
- 1: I/O, parse and state-file failures
- 2: usage errors and guards (unknown command, already initialized, cancelled)
"""

from __future__ import annotations

EXIT_FAILURE = 1
EXIT_USAGE = 2


class VertrackError(Exception):
    """
    Base exception for all vertrack errors.

    Carries a human-readable message and an optional context object with
    diagnostic details (paths, offending input, the underlying OS error).

    Args:
        message (str): Text shown to the operator.
        context (object | None): Extra diagnostic data, logged but not shown.
    """

    exit_code: int = EXIT_FAILURE

    def __init__(self, message: str, context: object | None = None) -> None:
        self.message = message
        self.context = context
        super().__init__(message)

    def __str__(self) -> str:
        return self.message


class InvalidVersionFormat(VertrackError):
    """Text is not a ``major.minor.patch[-pre][+meta]`` semantic version."""


class InvalidBuildNumber(VertrackError):
    """Build number is not a non-negative decimal integer."""


class NotInitialized(VertrackError):
    """No state file exists yet."""


class CorruptState(VertrackError):
    """The state file exists but does not hold a valid version record."""


class BackupCollision(VertrackError):
    """A backup file from an earlier write is still present."""


class WriteFailed(VertrackError):
    """Writing the state file failed; the previous contents were restored if possible."""


class CleanupFailed(VertrackError):
    """The state file was saved but its backup could not be removed."""


class ConfigurationError(VertrackError):
    """Configuration file or override could not be loaded or validated."""


class AlreadyInitialized(VertrackError):
    """The state file already exists."""

    exit_code = EXIT_USAGE


class UnknownCommand(VertrackError):
    """The positional command is not one vertrack understands."""

    exit_code = EXIT_USAGE


class UserCancelled(VertrackError):
    """The operator declined the confirmation prompt."""

    exit_code = EXIT_USAGE
