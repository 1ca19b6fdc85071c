"""
Pipeline settings.

Settings come from an optional YAML file; command-line flags override
individual values.
"""

from datetime import timedelta
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field, ValidationError

from impfchart.core.errors import ConfigurationError


class PipelineSettings(BaseModel):
    """
    Settings of a chart run.

    Attributes:
        recent_window_minutes: Length of the trailing window used for the
            "current" series
        insurance_only_public: Drop probes for non-public insurance classes
        input_suffix: File name suffix of capture files
        reducer: Reduction over known days values ("median" or "mean")
        log_level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: "json" or "text"
    """

    recent_window_minutes: int = Field(60, gt=0)
    insurance_only_public: bool = True
    input_suffix: str = Field(".json", min_length=1)
    reducer: Literal["median", "mean"] = "median"
    log_level: str | None = None
    log_format: Literal["json", "text"] = "json"

    @property
    def recent_window(self) -> timedelta:
        return timedelta(minutes=self.recent_window_minutes)

    def with_overrides(self, **overrides: Any) -> "PipelineSettings":
        """Copy with the given non-None values replaced."""
        values = self.model_dump()
        values.update({key: value for key, value in overrides.items() if value is not None})
        try:
            return PipelineSettings(**values)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid settings: {e}") from e

    class Config:
        extra = "forbid"
        frozen = True
        json_schema_extra = {
            "example": {
                "recent_window_minutes": 60,
                "insurance_only_public": True,
                "input_suffix": ".json",
                "reducer": "median",
                "log_level": "INFO",
                "log_format": "json"
            }
        }


class SettingsLoader:
    """
    Loads pipeline settings from a YAML file.

    Expected YAML format:
    ```yaml
    pipeline:
      recent_window_minutes: 60
      insurance_only_public: true
      reducer: median
    logging:
      level: INFO
      format: json
    ```
    """

    def __init__(self, config_path: str | Path):
        """
        Initialize the settings loader.

        Args:
            config_path: Path to the YAML configuration file

        Raises:
            ConfigurationError: If the file does not exist
        """
        self.config_path = Path(config_path)
        if not self.config_path.exists():
            raise ConfigurationError(f"Settings file not found: {config_path}")

    def load(self) -> PipelineSettings:
        """
        Load and validate settings.

        Returns:
            PipelineSettings with file values applied over the defaults

        Raises:
            ConfigurationError: If the YAML is invalid or contains unknown keys
        """
        try:
            with open(self.config_path) as f:
                config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {self.config_path}: {e}") from e

        if not isinstance(config, dict):
            raise ConfigurationError(f"Settings file {self.config_path} must contain a mapping")

        unknown = set(config) - {"pipeline", "logging"}
        if unknown:
            raise ConfigurationError(f"Unknown settings sections: {', '.join(sorted(unknown))}")

        values = dict(config.get("pipeline") or {})
        logging_section = config.get("logging") or {}
        if "level" in logging_section:
            values["log_level"] = logging_section["level"]
        if "format" in logging_section:
            values["log_format"] = logging_section["format"]

        try:
            return PipelineSettings(**values)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid settings in {self.config_path}: {e}") from e
