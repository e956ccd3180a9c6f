"""
Configuration loader module for faultline.

This module provides utilities for loading and validating configuration files.
"""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from dotenv import load_dotenv
from pydantic import ValidationError

from faultline.config.models import TrackerConfig
from faultline.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

# Environment variable -> (section, key); a section of None means top level
ENV_OVERRIDES = {
    "FAULTLINE_LOG_FILENAME": (None, "log_filename"),
    "FAULTLINE_EXIT_ON_ERROR": (None, "exit_on_error"),
    "FAULTLINE_SUPPRESS_PRINTING": (None, "suppress_printing"),
    "FAULTLINE_TIMEOUT_IS_ERROR": ("timeout", "is_error"),
    "FAULTLINE_LOG_LEVEL": ("logging", "level"),
}


def _read_yaml(path: Path) -> Dict[str, Any]:
    try:
        with open(path) as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Cannot read configuration: {e}", config_file=str(path))

    if not isinstance(data, dict):
        raise ConfigurationError(
            "Configuration must be a mapping", config_file=str(path)
        )
    return data


def load_config(config_path: Optional[str] = None) -> TrackerConfig:
    """
    Load tracker configuration from file and environment variables.

    Args:
        config_path: Path to config file. If None, uses default locations.

    Returns:
        Validated configuration object.

    Raises:
        ConfigurationError: If an explicit config file doesn't exist or any
            configuration is invalid.
    """
    load_dotenv()

    if config_path and not Path(config_path).expanduser().exists():
        raise ConfigurationError(
            f"Configuration file not found: {config_path}",
            config_file=str(Path(config_path).expanduser().resolve()),
        )

    # Default config locations
    config_locations = [
        "faultline.yaml",
        "~/.config/faultline/config.yaml",
        os.environ.get("FAULTLINE_CONFIG", ""),
    ]
    if config_path:
        config_locations.insert(0, config_path)

    # Load first existing config file
    config_data: Dict[str, Any] = {}
    source: Optional[Path] = None
    for loc in config_locations:
        if not loc:
            continue
        path = Path(loc).expanduser()
        if path.exists():
            config_data = _read_yaml(path)
            source = path
            break

    # Override with environment variables
    for env_name, (section, key) in ENV_OVERRIDES.items():
        if env_name not in os.environ:
            continue
        target = config_data if section is None else config_data.setdefault(section, {})
        target[key] = os.environ[env_name]

    try:
        config = TrackerConfig(**config_data)
    except ValidationError as e:
        logger.error(f"Error validating configuration: {e}")
        raise ConfigurationError(
            f"Invalid configuration: {e}",
            config_file=str(source) if source else None,
        )

    logger.debug(f"Loaded configuration from {source or 'defaults'}")
    return config
