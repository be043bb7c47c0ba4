"""Configuration for vertrack.

Settings come from an optional YAML file merged with ``key=value`` dotlist
overrides (the CLI turns its options into overrides), and are validated
with pydantic. Nothing is read from the environment.

Example YAML::

    store:
      directory: .
      file_name: ver.json
      backup_suffix: .bak
    defaults:
      version: 0.1.0
      build: 0
    log_level: WARNING
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from omegaconf import OmegaConf
from omegaconf.errors import OmegaConfBaseException
from pydantic import BaseModel, Field, ValidationError, field_validator

from vertrack.exceptions import ConfigurationError, InvalidVersionFormat
from vertrack.versioning import DEFAULT_VERSION, format_version, parse_version

DEFAULT_LOG_LEVEL = "WARNING"
LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


class StoreConfig(BaseModel):
    """Location of the state file.

    Attributes:
        directory: Directory holding the state file
        file_name: State file name
        backup_suffix: Appended to the state file name for the transient backup
    """

    directory: Path = Path(".")
    file_name: str = Field(default="ver.json", min_length=1)
    backup_suffix: str = Field(default=".bak", min_length=1)

    @property
    def state_path(self) -> Path:
        return self.directory / self.file_name

    @property
    def backup_path(self) -> Path:
        return self.directory / f"{self.file_name}{self.backup_suffix}"


class InitDefaults(BaseModel):
    """Values used by ``vertrack init`` when a prompt is left empty."""

    version: str = format_version(DEFAULT_VERSION)
    build: int = Field(default=0, ge=0)

    @field_validator("version")
    @classmethod
    def validate_version(cls, v: str) -> str:
        """Ensure the default version is itself a valid semantic version."""
        try:
            parse_version(v)
        except InvalidVersionFormat as exc:
            raise ValueError(exc.message) from exc
        return v


class VertrackConfig(BaseModel):
    """Top-level vertrack configuration."""

    store: StoreConfig = Field(default_factory=StoreConfig)
    defaults: InitDefaults = Field(default_factory=InitDefaults)
    log_level: str = DEFAULT_LOG_LEVEL

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log_level must be one of {LOG_LEVELS}, got {v!r}")
        return level


def load_config(
    config_path: str | Path | None = None,
    overrides: list[str] | None = None,
) -> VertrackConfig:
    """Load configuration from an optional YAML file plus dotlist overrides.

    Args:
        config_path: YAML file to read; built-in defaults are used when None
        overrides: ``key=value`` strings, e.g. ``["store.directory=/tmp/proj"]``

    Returns:
        Validated configuration object

    Raises:
        ConfigurationError: If the file is missing or unreadable, or the
            merged values fail validation.

    Example:
        >>> load_config(overrides=["defaults.build=7"]).defaults.build
        7
    """
    try:
        layers = []
        if config_path is not None:
            path = Path(config_path).expanduser()
            if not path.is_file():
                raise ConfigurationError(f"Config file not found: {path}", context={"path": str(path)})
            layers.append(OmegaConf.load(path))
        if overrides:
            layers.append(OmegaConf.from_dotlist(list(overrides)))
        merged = OmegaConf.merge(*layers) if layers else OmegaConf.create({})
        data: Any = OmegaConf.to_container(merged, resolve=True)
    except (OmegaConfBaseException, yaml.YAMLError, OSError, ValueError) as exc:
        raise ConfigurationError(f"Unable to load configuration: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigurationError("Configuration must be a mapping of settings")

    try:
        return VertrackConfig.model_validate(data)
    except ValidationError as exc:
        fields = ", ".join(".".join(str(part) for part in error["loc"]) for error in exc.errors())
        raise ConfigurationError(
            f"Invalid configuration: {exc.error_count()} invalid field(s): {fields}",
            context={"errors": exc.errors()},
        ) from exc
