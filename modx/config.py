"""Configuration loading and validation using Pydantic models."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field, field_validator

_LOG_LEVELS = ("TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL")


class LoggingConfig(BaseModel):
    level: str = Field("INFO", description="Minimum level for console and file sinks.")
    log_dir: Optional[Path] = Field(
        None,
        description="Directory for rotated log files; console only when unset.",
    )

    @field_validator("level")
    @classmethod
    def _validate_level(cls, value: str) -> str:
        value = value.upper()
        if value not in _LOG_LEVELS:
            raise ValueError(f"Unsupported log level: {value}")
        return value


class HostConfig(BaseModel):
    settings: dict[str, Any] = Field(
        default_factory=dict,
        description="Global configuration exposed to modules through the registry.",
    )
    manifest: Optional[Path] = Field(
        None,
        description="Default module manifest used by the CLI when none is given.",
    )


class AppConfig(BaseModel):
    logging: LoggingConfig = LoggingConfig()
    host: HostConfig = HostConfig()


def load_config(path: Path | str) -> AppConfig:
    """Load YAML configuration from disk.

    A relative ``host.manifest`` is taken relative to the config file.
    """

    config_path = Path(path)
    with config_path.open("r", encoding="utf-8") as fh:
        data = yaml.safe_load(fh)
    config = AppConfig.model_validate(data or {})
    manifest = config.host.manifest
    if manifest is not None and not manifest.is_absolute():
        config.host.manifest = config_path.parent / manifest
    return config
