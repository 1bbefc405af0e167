# src/sourcetrust/core/config.py

import logging
import os
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

logger = logging.getLogger(__name__)

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class RegistryConfig(BaseModel):
    """
    Main configuration model for sourcetrust.
    """

    settings_file: str = Field(
        default=str(Path("config") / "trusted_sources.yaml"),
        description="YAML settings file holding the trustedSources section",
    )
    log_level: str = Field(default="INFO")

    @model_validator(mode="before")
    @classmethod
    def load_overrides_from_env(cls, v: Any) -> Any:
        """Override config values with environment variables if present."""
        if not isinstance(v, dict):
            v = {}
        else:
            v = dict(v)

        if "SOURCETRUST_SETTINGS_FILE" in os.environ:
            v["settings_file"] = os.environ["SOURCETRUST_SETTINGS_FILE"]
        if "SOURCETRUST_LOG_LEVEL" in os.environ:
            v["log_level"] = os.environ["SOURCETRUST_LOG_LEVEL"]

        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(f"log_level must be one of {', '.join(_LOG_LEVELS)}")
        return level


def load_config(config_path: Optional[Union[str, Path]] = None) -> RegistryConfig:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to config.yaml (default: ./config/config.yaml)

    Returns:
        Validated RegistryConfig instance.
    """
    if config_path is None:
        config_path = Path("config") / "config.yaml"
    else:
        config_path = Path(config_path)

    config_data = {}
    if config_path.exists():
        try:
            with open(config_path, "r", encoding="utf-8") as f:
                config_data = yaml.safe_load(f) or {}
            logger.info(f"Loaded configuration from {config_path}")
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"Failed to load config file {config_path}: {e}")
    else:
        logger.info(f"Config file not found at {config_path}, using defaults")

    # env vars override file
    config = RegistryConfig(**config_data)

    logger.debug(f"  Settings file: {config.settings_file}")
    logger.debug(f"  Log level: {config.log_level}")

    return config
