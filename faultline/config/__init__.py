"""
Configuration module for faultline.

This module provides configuration models and utilities for loading and validating configuration.
"""

from faultline.config.loader import load_config
from faultline.config.models import (
    DEFAULT_LOG_FILENAME,
    ClockKind,
    LoggingConfig,
    TimeoutConfig,
    TrackerConfig,
)

__all__ = [
    "DEFAULT_LOG_FILENAME",
    "ClockKind",
    "LoggingConfig",
    "TimeoutConfig",
    "TrackerConfig",
    "load_config",
]
