"""User configuration for the storagekit command line."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from storagekit.content import put
from storagekit.directory import DEFAULT_DIRECTORY_MODE
from storagekit.metadata import DEFAULT_SAMPLE_SIZE

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "STORAGEKIT_CONFIG"
CONFIG_FILE_NAME = "config.yaml"

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class ConfigError(Exception):
    """Error loading or saving configuration."""

    pass


class StorageSettings(BaseModel):
    """Settings read from the configuration file."""

    model_config = ConfigDict(populate_by_name=True)

    directory_mode: int = Field(default=DEFAULT_DIRECTORY_MODE, alias="directoryMode")
    log_level: str = Field(default="WARNING", alias="logLevel")
    mime_sample_size: int = Field(default=DEFAULT_SAMPLE_SIZE, gt=0, alias="mimeSampleSize")

    @field_validator("directory_mode", mode="before")
    @classmethod
    def _parse_mode(cls, value: Any) -> Any:
        """Read string modes as octal ("750" means 0o750)."""
        if isinstance(value, str):
            try:
                return int(value.removeprefix("0o"), 8)
            except ValueError as e:
                raise ValueError(f"invalid octal mode: {value!r}") from e
        return value

    @field_validator("directory_mode")
    @classmethod
    def _check_mode(cls, value: int) -> int:
        if not 0 <= value <= 0o7777:
            raise ValueError(f"mode out of range: {value:o}")
        return value

    @field_validator("log_level")
    @classmethod
    def _check_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"log level must be one of {', '.join(LOG_LEVELS)}")
        return level

    def to_yaml(self) -> str:
        """Serialize to YAML, with the mode written in octal."""
        data = self.model_dump(by_alias=True)
        data["directoryMode"] = f"{self.directory_mode:o}"
        return yaml.safe_dump(data, sort_keys=False)


def default_config_path() -> Path:
    """Get the configuration file location.

    Uses $STORAGEKIT_CONFIG when set, ~/.storagekit/config.yaml otherwise.
    """
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override)
    return Path.home() / ".storagekit" / CONFIG_FILE_NAME


def load_settings(path: Path | None = None) -> StorageSettings:
    """Load settings from a YAML file.

    Args:
        path: Configuration file. Defaults to default_config_path().

    Returns:
        Parsed settings, or the defaults if the file does not exist.

    Raises:
        ConfigError: If the file is not valid YAML or holds invalid values.
    """
    config_path = path or default_config_path()
    if not config_path.exists():
        logger.debug("No configuration at %s, using defaults", config_path)
        return StorageSettings()

    try:
        data = yaml.safe_load(config_path.read_text()) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Unable to read configuration {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Configuration {config_path} must be a mapping")

    try:
        return StorageSettings.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration {config_path}: {e}") from e


def save_settings(settings: StorageSettings, path: Path | None = None) -> Path:
    """Write settings to a YAML file, creating its directory.

    Args:
        settings: Settings to save.
        path: Configuration file. Defaults to default_config_path().

    Returns:
        Path the settings were written to.

    Raises:
        ConfigError: If the file cannot be written.
    """
    config_path = path or default_config_path()
    result = put(config_path, settings.to_yaml())
    if not result:
        raise ConfigError(f"Unable to write configuration {config_path}: {result.error}")
    return config_path
