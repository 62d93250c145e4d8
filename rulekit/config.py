"""Configuration for rulekit using Pydantic models."""

import json
import logging
from enum import Enum
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

CONFIG_FILENAME = ".rulekit.json"

ActionType = Literal["create", "update", "destroy"]


class LogLevel(str, Enum):
    """Logging levels."""

    ERROR = "error"
    WARN = "warn"
    INFO = "info"
    DEBUG = "debug"


_LOG_LEVELS = {
    LogLevel.ERROR: logging.ERROR,
    LogLevel.WARN: logging.WARNING,
    LogLevel.INFO: logging.INFO,
    LogLevel.DEBUG: logging.DEBUG,
}


class ValidationDefaults(BaseModel):
    """Defaults for `rulekit.validate` entries."""

    on: list[ActionType] = Field(default_factory=lambda: ["create", "update"])
    only_when_valid: bool = Field(alias="onlyWhenValid", default=False)
    before_action: bool = Field(alias="beforeAction", default=False)

    @field_validator("on")
    @classmethod
    def validate_on(cls, v):
        if not v:
            raise ValueError("on must contain at least one action type")
        return v

    model_config = ConfigDict(populate_by_name=True, frozen=True)


class LoggingConfig(BaseModel):
    """Logging configuration section."""

    level: LogLevel = LogLevel.WARN

    model_config = ConfigDict(frozen=True)


class RulekitConfig(BaseModel):
    """Complete rulekit configuration model."""

    validation: ValidationDefaults = Field(default_factory=ValidationDefaults)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    model_config = ConfigDict(extra="forbid", frozen=True)


def load_config(config_path: str | Path | None = None) -> RulekitConfig:
    """Load configuration from file with fallback to defaults.

    Args:
        config_path: Optional path to configuration file. If None, searches
                    current directory and parents for .rulekit.json

    Returns:
        RulekitConfig: Loaded and validated configuration

    Raises:
        FileNotFoundError: If config file specified but not found
        ValueError: If configuration is invalid
    """
    if config_path is None:
        config_path = find_config_file()
        if config_path is None:
            return RulekitConfig()
    else:
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

    try:
        with open(config_path, encoding="utf-8") as f:
            config_data = json.load(f)
        return RulekitConfig(**config_data)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in config file {config_path}: {e}") from e
    except (ValidationError, TypeError) as e:
        raise ValueError(f"Failed to load config from {config_path}: {e}") from e


def find_config_file(start_dir: Path | None = None) -> Path | None:
    """Find .rulekit.json by searching up the directory tree.

    Args:
        start_dir: Directory to start search from (default: current directory)

    Returns:
        Path to config file if found, None otherwise
    """
    if start_dir is None:
        start_dir = Path.cwd()

    current = Path(start_dir).resolve()

    while True:
        config_file = current / CONFIG_FILENAME
        if config_file.exists():
            return config_file

        parent = current.parent
        if parent == current:  # Reached root directory
            break
        current = parent

    return None


def configure_logging(config: RulekitConfig) -> None:
    """Set the `rulekit` logger level from config."""
    logging.getLogger("rulekit").setLevel(_LOG_LEVELS[LogLevel(config.logging.level)])
