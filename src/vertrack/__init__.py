"""Track a project's semantic version and build number in a local state file."""

from .record import VersionRecord
from .state import VersionStore
from .version import __version__

__all__ = [
    "VersionRecord",
    "VersionStore",
    "__version__",
]
