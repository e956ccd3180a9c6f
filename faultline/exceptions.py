"""
Custom exception classes for faultline.

This module defines the exceptions raised by the tracker and its front ends.
"""

from typing import Optional


class FaultlineError(Exception):
    """
    Base exception class for all faultline errors.
    """

    def __init__(self, message: str, exit_code: int = 1):
        """
        Initialize the exception.

        Args:
            message: Error message.
            exit_code: Exit code to use when this exception causes program termination.
        """
        self.message = message
        self.exit_code = exit_code
        super().__init__(message)


class ConfigurationError(FaultlineError):
    """
    Exception raised for configuration-related errors.
    """

    def __init__(
        self, message: str, config_file: Optional[str] = None, exit_code: int = 2
    ):
        """
        Initialize the exception.

        Args:
            message: Error message.
            config_file: Path to the configuration file that caused the error.
            exit_code: Exit code to use when this exception causes program termination.
        """
        self.config_file = config_file
        if config_file:
            message = f"{message} (config file: {config_file})"
        super().__init__(message, exit_code)


class LogWriteError(FaultlineError):
    """
    Exception raised when an error record cannot be appended to the log file.
    """

    def __init__(
        self, message: str, log_file: Optional[str] = None, exit_code: int = 3
    ):
        """
        Initialize the exception.

        Args:
            message: Error message.
            log_file: Path to the log file that could not be written.
            exit_code: Exit code to use when this exception causes program termination.
        """
        self.log_file = log_file
        if log_file:
            message = f"{message} (log file: {log_file})"
        super().__init__(message, exit_code)


class TerminateRequested(FaultlineError):
    """
    Raised by a tracker that reported an error while exit-on-error is enabled.

    The reported code becomes the exit code. Whoever owns the process decides
    whether to actually exit with it.
    """

    def __init__(self, code: int, function_name: str = "", message: str = ""):
        self.code = code
        self.function_name = function_name
        self.error_message = message
        super().__init__(
            f"Termination requested by {function_name or '<unknown>'} with code {code}",
            exit_code=code,
        )
