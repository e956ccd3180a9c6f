"""
Utilities module for faultline.

This module provides the diagnostic logging helpers.
"""

from faultline.utils.logging import (
    StructuredLogFormatter,
    get_logger,
    log_with_context,
    setup_logging,
)

__all__ = [
    "StructuredLogFormatter",
    "get_logger",
    "log_with_context",
    "setup_logging",
]
