"""Configuration file support for hwe-counts."""

import logging
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

CONFIG_TABLE = "hwe_counts"

VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


@dataclass
class ScanConfig:
    """Configuration for a genotype count scan."""

    region: str | None = None
    samples: list[str] | None = None
    log_level: str = "INFO"
    progress: bool = False
    initial_buffer_samples: int = 1024


class ConfigValidationError(Exception):
    """Raised when configuration validation fails."""

    pass


def validate_config(config_dict: dict[str, Any]) -> None:
    """Validate configuration values.

    Raises:
        ConfigValidationError: If any configuration value is invalid.
    """
    if "region" in config_dict and config_dict["region"] is not None:
        region = config_dict["region"]
        if not isinstance(region, str) or not region:
            raise ConfigValidationError(f"region must be a non-empty string, got {region!r}")

    if "samples" in config_dict and config_dict["samples"] is not None:
        samples = config_dict["samples"]
        if not isinstance(samples, list) or not all(isinstance(s, str) for s in samples):
            raise ConfigValidationError("samples must be a list of sample names")
        if not samples:
            raise ConfigValidationError("samples must not be empty")

    if "initial_buffer_samples" in config_dict:
        size = config_dict["initial_buffer_samples"]
        if not isinstance(size, int) or isinstance(size, bool):
            raise ConfigValidationError(
                f"initial_buffer_samples must be an integer, got {type(size).__name__}"
            )
        if size <= 0:
            raise ConfigValidationError(f"initial_buffer_samples must be positive, got {size}")

    if "progress" in config_dict and not isinstance(config_dict["progress"], bool):
        raise ConfigValidationError(
            f"progress must be a boolean, got {type(config_dict['progress']).__name__}"
        )

    if "log_level" in config_dict:
        log_level = config_dict["log_level"]
        if not isinstance(log_level, str):
            raise ConfigValidationError(
                f"log_level must be a string, got {type(log_level).__name__}"
            )
        if log_level.upper() not in VALID_LOG_LEVELS:
            raise ConfigValidationError(
                f"log_level must be one of {VALID_LOG_LEVELS}, got '{log_level}'"
            )


def load_config(config_path: Path, overrides: dict[str, Any] | None = None) -> ScanConfig:
    """Load configuration from a TOML file.

    Args:
        config_path: Path to the TOML configuration file.
        overrides: Optional dict of values to override loaded config.

    Returns:
        ScanConfig instance with loaded values.

    Raises:
        FileNotFoundError: If the config file doesn't exist.
        ConfigValidationError: If any configuration value is invalid.
    """
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(config_path, "rb") as f:
        toml_data = tomllib.load(f)

    config_dict = toml_data.get(CONFIG_TABLE, {})

    if overrides:
        config_dict.update({k: v for k, v in overrides.items() if v is not None})

    validate_config(config_dict)

    valid_fields = {
        "region",
        "samples",
        "log_level",
        "progress",
        "initial_buffer_samples",
    }

    ignored = sorted(set(config_dict) - valid_fields)
    if ignored:
        logger.warning("Ignoring unknown configuration keys: %s", ", ".join(ignored))

    filtered_config = {k: v for k, v in config_dict.items() if k in valid_fields}
    if "log_level" in filtered_config:
        filtered_config["log_level"] = filtered_config["log_level"].upper()

    return ScanConfig(**filtered_config)
