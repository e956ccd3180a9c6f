"""
Configuration models for faultline.

This module defines Pydantic models for configuration validation.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from faultline.threshold import UNLIMITED, to_seconds

DEFAULT_LOG_FILENAME = "error_log.txt"


class ClockKind(str, Enum):
    """Clocks the timeout watchdog can measure elapsed time with."""

    MONOTONIC = "monotonic"
    PROCESS = "process"


class LoggingConfig(BaseModel):
    """Pydantic model for logging configuration."""

    level: str = Field(default="WARNING")
    structured: bool = Field(default=True)

    @field_validator("level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate that the log level is valid."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of {valid_levels}")
        return v.upper()


class TimeoutConfig(BaseModel):
    """Pydantic model for the timeout watchdog configuration."""

    hours: Optional[float] = None
    minutes: Optional[float] = None
    seconds: Optional[float] = None
    is_error: bool = Field(default=True)
    code: int = Field(default=0)
    clock: ClockKind = Field(default=ClockKind.MONOTONIC)

    @field_validator("hours", "minutes", "seconds")
    @classmethod
    def validate_not_negative(cls, v: Optional[float]) -> Optional[float]:
        """Validate that threshold components are not negative."""
        if v is not None and v < 0:
            raise ValueError("Threshold components cannot be negative")
        return v

    @property
    def threshold_seconds(self) -> float:
        """Total threshold in seconds, unlimited when no component is set."""
        if self.hours is None and self.minutes is None and self.seconds is None:
            return UNLIMITED
        return to_seconds(self.hours or 0, self.minutes or 0, self.seconds or 0)


class TrackerConfig(BaseModel):
    """Pydantic model for the tracker configuration file."""

    log_filename: str = Field(default=DEFAULT_LOG_FILENAME)
    exit_on_error: bool = Field(default=True)
    suppress_printing: bool = Field(default=False)
    timeout: TimeoutConfig = Field(default_factory=TimeoutConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator("log_filename")
    @classmethod
    def validate_not_empty(cls, v: str) -> str:
        """Validate that the value is not empty."""
        if not v or not v.strip():
            raise ValueError("Value cannot be empty")
        return v
