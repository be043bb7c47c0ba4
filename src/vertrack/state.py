"""Persistence of the version record to the local state file."""

from __future__ import annotations

import os
from pathlib import Path

from loguru import logger
from pydantic import ValidationError

from vertrack.config import StoreConfig
from vertrack.exceptions import (
    AlreadyInitialized,
    BackupCollision,
    CleanupFailed,
    CorruptState,
    NotInitialized,
    WriteFailed,
)
from vertrack.record import VersionRecord


class VersionStore:
    """Loads and saves a :class:`VersionRecord` at a fixed path.

    Saves replace the state file through a backup: the current file is
    renamed to ``<state><suffix>``, the new contents are written, and the
    backup is removed. A failed write puts the backup back in place.
    """

    def __init__(self, state_path: Path | str, backup_suffix: str = ".bak") -> None:
        self.state_path = Path(state_path)
        self.backup_path = self.state_path.with_name(self.state_path.name + backup_suffix)

    @classmethod
    def from_config(cls, config: StoreConfig) -> VersionStore:
        return cls(config.state_path, config.backup_suffix)

    def is_initialized(self) -> bool:
        """Return True when a state file is present. Not a substitute for :meth:`init_guard`."""
        return self.state_path.exists()

    def _already_initialized(self) -> AlreadyInitialized:
        return AlreadyInitialized(
            f"This project is already versioned with vertrack. "
            f"Do you have a {self.state_path.name} file here for another reason?",
            context={"path": str(self.state_path)},
        )

    def check_not_initialized(self) -> None:
        """Raise :class:`AlreadyInitialized` early if a state file is present."""
        if self.is_initialized():
            raise self._already_initialized()

    def load(self) -> VersionRecord:
        """Read the record from disk.

        Raises:
            NotInitialized: If the state file does not exist.
            CorruptState: If it cannot be read or does not hold a valid record.
        """
        try:
            text = self.state_path.read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            raise NotInitialized(
                f"Could not find {self.state_path}. Have you run `vertrack init`?",
                context={"path": str(self.state_path)},
            ) from exc
        except (OSError, UnicodeDecodeError) as exc:
            raise CorruptState(
                f"Unable to read {self.state_path}: {exc}",
                context={"path": str(self.state_path)},
            ) from exc

        try:
            record = VersionRecord.model_validate_json(text)
        except ValidationError as exc:
            raise CorruptState(
                f"Unable to parse {self.state_path}: {exc.error_count()} invalid field(s)",
                context={"path": str(self.state_path), "errors": exc.errors()},
            ) from exc

        logger.debug(f"Loaded {record.summary()!r} from {self.state_path}")
        return record

    def init_guard(self) -> None:
        """Claim the state path by exclusively creating an empty placeholder.

        Raises:
            AlreadyInitialized: If the state file already exists.
        """
        try:
            with open(self.state_path, "x", encoding="utf-8"):
                pass
        except FileExistsError as exc:
            raise self._already_initialized() from exc
        except OSError as exc:
            raise WriteFailed(
                f"Unable to create {self.state_path}: {exc}",
                context={"path": str(self.state_path)},
            ) from exc
        logger.debug(f"Created placeholder {self.state_path}")

    def release_guard(self) -> None:
        """Remove the placeholder left by :meth:`init_guard` if it is still empty."""
        try:
            if self.state_path.stat().st_size == 0:
                self.state_path.unlink()
                logger.debug(f"Removed empty placeholder {self.state_path}")
        except FileNotFoundError:
            pass
        except OSError as exc:
            logger.error(f"Failed to remove placeholder {self.state_path}: {exc}")

    def save(self, record: VersionRecord) -> None:
        """Replace the state file with ``record``.

        Raises:
            BackupCollision: If a backup file already exists.
            WriteFailed: If the backup could not be taken or the write failed.
            CleanupFailed: If the write succeeded but the backup was left behind.
        """
        payload = record.to_json()

        if self.backup_path.exists():
            raise BackupCollision(
                f"Backup file {self.backup_path} already exists; it may be left over from a "
                f"failed write. Inspect it and remove it before trying again.",
                context={"path": str(self.backup_path)},
            )

        backed_up = self._take_backup()

        try:
            self._write(payload)
        except OSError as exc:
            logger.error(f"Failed writing {self.state_path}: {exc}")
            self._restore(backed_up)
            raise WriteFailed(
                f"There was an error writing {self.state_path}: {exc}",
                context={"path": str(self.state_path), "backup": str(self.backup_path)},
            ) from exc

        if backed_up:
            try:
                self.backup_path.unlink()
            except FileNotFoundError:
                pass
            except OSError as exc:
                raise CleanupFailed(
                    f"Saved {self.state_path} but could not remove backup {self.backup_path}: {exc}",
                    context={"path": str(self.backup_path)},
                ) from exc

        logger.info(f"Saved {record.summary()!r} to {self.state_path}")

    def _take_backup(self) -> bool:
        """Move the current state file aside; False when there was nothing to move."""
        try:
            os.rename(self.state_path, self.backup_path)
        except FileNotFoundError:
            return False
        except OSError as exc:
            raise WriteFailed(
                f"Unable to create backup {self.backup_path}: {exc}",
                context={"path": str(self.backup_path)},
            ) from exc
        logger.debug(f"Backed up {self.state_path} to {self.backup_path}")
        return True

    def _write(self, payload: str) -> None:
        with open(self.state_path, "w", encoding="utf-8") as f:
            f.write(payload)
            f.flush()
            os.fsync(f.fileno())

    def _restore(self, backed_up: bool) -> None:
        """Best-effort rollback after a failed write; failures are only logged."""
        if not backed_up:
            try:
                self.state_path.unlink()
            except FileNotFoundError:
                pass
            except OSError as exc:
                logger.error(f"Could not remove partial {self.state_path}: {exc}")
            return

        try:
            os.replace(self.backup_path, self.state_path)
        except OSError as exc:
            logger.error(
                f"Could not restore backup. Does {self.backup_path} still exist? ({exc})"
            )
        else:
            logger.warning(f"Restored {self.state_path} from backup")
