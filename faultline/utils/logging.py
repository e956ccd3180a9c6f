"""
Diagnostic logging utilities for faultline.

Diagnostics go through the standard logging tree so they never mix with the
report blocks printed to standard output.
"""

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any, Dict, Optional

import structlog

# Attributes every LogRecord carries; anything else arrived through ``extra``.
_RECORD_ATTRIBUTES = set(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", None, None))
) | {"message", "asctime"}

# Frames between the caller and the stdlib logging call
_WRAPPER_MODULES = ("structlog", __name__)


class StructuredLogFormatter(logging.Formatter):
    """
    Custom formatter for structured logging in JSON format.
    """

    def format(self, record: logging.LogRecord) -> str:
        """
        Format the log record as a JSON string.

        Args:
            record: The log record to format.

        Returns:
            A JSON string representation of the log record.
        """
        log_data = {
            "timestamp": datetime.now(UTC).isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            log_data["exception"] = {
                "type": record.exc_info[0].__name__,
                "message": str(record.exc_info[1]),
            }

        # Fields passed through ``extra``
        for key, value in vars(record).items():
            if key not in _RECORD_ATTRIBUTES:
                log_data[key] = value

        return json.dumps(log_data, default=str)


def setup_logging(level: str = "WARNING", structured: bool = True) -> None:
    """
    Set up logging configuration.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        structured: Whether to use structured logging (JSON format).

    Raises:
        ValueError: If the log level is invalid.
    """
    numeric_level = getattr(logging, level.upper(), None)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Invalid log level: {level}")

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    # Remove existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    # Standard output belongs to the report blocks
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(numeric_level)

    if structured:
        formatter = StructuredLogFormatter()
    else:
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )

    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)


def _add_stacklevel(
    _: logging.Logger, __: str, event_dict: Dict[str, Any]
) -> Dict[str, Any]:
    """Make the stdlib record report the first caller outside structlog and this module."""
    depth = 0
    frame = sys._getframe(1)
    while frame is not None and frame.f_globals.get("__name__", "").startswith(
        _WRAPPER_MODULES
    ):
        depth += 1
        frame = frame.f_back
    event_dict["stacklevel"] = max(depth, 1)
    return event_dict


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """
    Get a structured logger bound to the standard logger of the given name.

    Keyword arguments given to the returned logger end up as ``extra`` fields
    on the emitted record.

    Args:
        name: Logger name.

    Returns:
        Bound logger instance.
    """
    return structlog.wrap_logger(
        logging.getLogger(name),
        processors=[
            structlog.stdlib.filter_by_level,
            _add_stacklevel,
            structlog.stdlib.render_to_log_kwargs,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
    )


def log_with_context(
    logger: structlog.stdlib.BoundLogger,
    level: str,
    message: str,
    extra: Optional[Dict[str, Any]] = None,
) -> None:
    """
    Log a message with additional context.

    Args:
        logger: Logger instance.
        level: Log level (debug, info, warning, error, critical).
        message: Log message.
        extra: Additional context to include in the log.
    """
    log_method = getattr(logger, level.lower())
    log_method(message, **(extra or {}))
