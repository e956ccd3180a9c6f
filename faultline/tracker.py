"""
Error, warning and timeout tracking.

An ErrorTracker records the most recent error and the most recent warning
reported by calling code, appends every error to a log file, and keeps a
poll-based timeout watchdog. Trackers are not thread-safe; use one per thread
of control or guard access externally.
"""

import time
from typing import Any, Callable, Optional

from faultline.config.models import (
    DEFAULT_LOG_FILENAME,
    ClockKind,
    TrackerConfig,
)
from faultline.exceptions import TerminateRequested
from faultline.log_writer import (
    ERROR_HEADER,
    WARNING_HEADER,
    format_block,
)
from faultline.log_writer import log_error as append_error_record
from faultline.threshold import UNLIMITED, Threshold, from_seconds, to_seconds
from faultline.utils import get_logger

logger = get_logger(__name__)

MAX_LOG_FILENAME_BYTES = 256

# Codes at or above this value are reserved for faultline itself
META_ERROR = 900
TIMEOUT_MISUSE_CODE = META_ERROR + 10

TIMEOUT_MISUSE_MESSAGE = "Timing must be started before checking for a timeout."
TIMEOUT_MESSAGE = "Function Timeout."

# Context handed to the cleanup callback when report_error received none
PLACEHOLDER_CONTEXT = 0

CleanupCallback = Callable[["ErrorTracker", Any], None]

_CLOCKS = {
    ClockKind.MONOTONIC: time.monotonic,
    ClockKind.PROCESS: time.process_time,
}


def _truncate_utf8(value: str, limit: int) -> str:
    encoded = value.encode("utf-8")
    if len(encoded) <= limit:
        return value
    return encoded[:limit].decode("utf-8", errors="ignore")


class ErrorTracker:
    """Tracks reported errors, warnings and an elapsed-time watchdog."""

    def __init__(
        self,
        log_filename: str = DEFAULT_LOG_FILENAME,
        *,
        exit_on_error: bool = True,
        suppress_printing: bool = False,
        timeout_is_error: bool = True,
        timeout_code: int = 0,
        cleanup_callback: Optional[CleanupCallback] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        """Initialize the tracker.

        Args:
            log_filename: File error records are appended to.
            exit_on_error: Request termination after every reported error.
            suppress_printing: Keep report blocks off standard output.
            timeout_is_error: Escalate a fired watchdog as an error rather than a warning.
            timeout_code: Code reported when the watchdog fires.
            cleanup_callback: Called with the tracker and a context after each error.
            clock: Returns the current time in seconds for the watchdog.
        """
        self._log_filename = DEFAULT_LOG_FILENAME
        self.set_log_filename(log_filename)
        self._exit_on_error = exit_on_error
        self._suppress_printing = suppress_printing
        self._cleanup_callback = cleanup_callback
        self._clock = clock

        self._error_found = False
        self._error_code = 0
        self._error_message: Optional[str] = None
        self._error_function: Optional[str] = None

        self._warning_found = False
        self._warning_code = 0
        self._warning_message: Optional[str] = None
        self._warning_function: Optional[str] = None

        self._timeout_threshold = UNLIMITED
        self._timeout_is_error = timeout_is_error
        self._timeout_code = timeout_code
        self._timing_start: Optional[float] = None
        self._last_check: Optional[float] = None
        self._timeout_function: Optional[str] = None

    @classmethod
    def from_config(
        cls,
        config: TrackerConfig,
        cleanup_callback: Optional[CleanupCallback] = None,
    ) -> "ErrorTracker":
        """Create a tracker from a loaded configuration.

        Args:
            config: Validated tracker configuration.
            cleanup_callback: Optional cleanup callback to register.

        Returns:
            A tracker with the configured settings.
        """
        tracker = cls(
            config.log_filename,
            exit_on_error=config.exit_on_error,
            suppress_printing=config.suppress_printing,
            timeout_is_error=config.timeout.is_error,
            timeout_code=config.timeout.code,
            cleanup_callback=cleanup_callback,
            clock=_CLOCKS[ClockKind(config.timeout.clock)],
        )
        tracker.set_timeout_seconds(config.timeout.threshold_seconds)
        return tracker

    # Reporting

    def report_error(
        self,
        function_name: str,
        message: str,
        code: int,
        context: Any = None,
    ) -> None:
        """Report an error.

        Prints the error block, records the error (replacing any earlier one),
        appends it to the log file and runs the cleanup callback.

        Args:
            function_name: Name of the routine the error came from.
            message: Error message.
            code: Error code, also the exit code when termination is requested.
            context: Passed through to the cleanup callback unchanged.

        Raises:
            TerminateRequested: If exit-on-error is enabled. Raised last.
            LogWriteError: If the error record cannot be appended to the log file.
        """
        if not self._suppress_printing:
            print(
                format_block(ERROR_HEADER, function_name, "Error Flag", code, message)
            )

        self._error_found = True
        self._error_code = code
        self._error_message = message
        self._error_function = function_name
        logger.info("error_reported", routine=function_name, code=code)

        self.log_error(function_name, message, code)

        if self._cleanup_callback is not None:
            self._cleanup_callback(
                self, PLACEHOLDER_CONTEXT if context is None else context
            )

        if self._exit_on_error:
            raise TerminateRequested(code, function_name, message)

    def report_warning(self, function_name: str, message: str, code: int) -> None:
        """Report a warning.

        Prints the warning block and records the warning, replacing any earlier one.
        Warnings are never logged to file and never request termination.
        """
        if not self._suppress_printing:
            print(
                format_block(WARNING_HEADER, function_name, "Warning Flag", code, message)
            )

        self._warning_found = True
        self._warning_code = code
        self._warning_message = message
        self._warning_function = function_name
        logger.info("warning_reported", routine=function_name, code=code)

    def log_error(self, function_name: str, message: str, code: int) -> None:
        """Append an error record to the log file without recording it."""
        append_error_record(self._log_filename, function_name, message, code)

    # Error and warning state

    def has_error_occurred(self) -> bool:
        return self._error_found

    def has_warning_occurred(self) -> bool:
        return self._warning_found

    def has_any_occurred(self) -> bool:
        """True if an error or a warning has been reported since the last reset."""
        return self._error_found or self._warning_found

    def reset_error_status(self) -> None:
        self._error_found = False
        self._error_code = 0
        self._error_message = None
        self._error_function = None
        logger.debug("error_status_reset")

    def reset_warning_status(self) -> None:
        self._warning_found = False
        self._warning_code = 0
        self._warning_message = None
        self._warning_function = None
        logger.debug("warning_status_reset")

    def get_error_flag(self) -> int:
        return self._error_code

    def get_warning_flag(self) -> int:
        return self._warning_code

    def get_error_message(self) -> Optional[str]:
        return self._error_message

    def get_warning_message(self) -> Optional[str]:
        return self._warning_message

    def get_error_fcn_name(self) -> Optional[str]:
        return self._error_function

    def get_warning_fcn_name(self) -> Optional[str]:
        return self._warning_function

    # Timeout watchdog

    def start_timing(self) -> None:
        """Arm the watchdog from scratch at the current time."""
        self.reset_timeout()
        now = self._clock()
        self._timing_start = now
        self._last_check = now
        logger.debug("timing_started", start=now)

    def check_timeout(self, function_name: str) -> bool:
        """Poll the watchdog.

        Checking before ``start_timing`` is itself reported as an error with
        ``TIMEOUT_MISUSE_CODE``, under the name given to the previous check.

        Args:
            function_name: Name of the routine doing the polling.

        Returns:
            True if the elapsed time exceeded the threshold on this poll.

        Raises:
            TerminateRequested: If the poll reported an error while exit-on-error is enabled.
        """
        if not self.timeout_is_set():
            logger.warning("watchdog_misuse", routine=function_name)
            self.report_error(
                self._timeout_function or "",
                TIMEOUT_MISUSE_MESSAGE,
                TIMEOUT_MISUSE_CODE,
            )
            # Stays unarmed; the name is used by the next misuse report
            self._timeout_function = function_name
            return False

        self._timeout_function = function_name
        now = self._clock()
        fired = (now - self._timing_start) > self._timeout_threshold
        # Record the poll before escalating; report_error may not return
        self._last_check = now

        if fired:
            logger.info(
                "timeout_fired",
                routine=function_name,
                elapsed=now - self._timing_start,
                threshold=self._timeout_threshold,
            )
            if self._timeout_is_error:
                self.report_error(function_name, TIMEOUT_MESSAGE, self._timeout_code)
            else:
                self.report_warning(function_name, TIMEOUT_MESSAGE, self._timeout_code)
        return fired

    def timeout_is_set(self) -> bool:
        return self._timing_start is not None and self._last_check is not None

    def reset_timeout(self) -> None:
        self._timing_start = None
        self._last_check = None
        self._timeout_function = None
        logger.debug("timeout_reset")

    def get_timing_start(self) -> Optional[float]:
        return self._timing_start

    def get_last_check(self) -> Optional[float]:
        return self._last_check

    def get_timeout_fcn_name(self) -> Optional[str]:
        return self._timeout_function

    def get_timeout_threshold(self) -> Threshold:
        """Threshold as whole hours, whole minutes and remaining seconds."""
        return from_seconds(self._timeout_threshold)

    def set_timeout_threshold(
        self, hours: float = 0, minutes: float = 0, seconds: float = 0
    ) -> None:
        self._timeout_threshold = to_seconds(hours, minutes, seconds)

    def get_timeout_seconds(self) -> float:
        return self._timeout_threshold

    def set_timeout_seconds(self, seconds: float) -> None:
        self._timeout_threshold = float(seconds)

    def get_timeout_flag(self) -> int:
        return self._timeout_code

    def set_timeout_flag(self, code: int) -> None:
        self._timeout_code = code

    def get_timeout_is_error(self) -> bool:
        return self._timeout_is_error

    def set_timeout_is_error(self, value: bool) -> None:
        self._timeout_is_error = value

    # Configuration

    def get_log_filename(self) -> str:
        return self._log_filename

    def set_log_filename(self, name: str) -> None:
        """Set the log file name, silently truncated to 256 bytes."""
        self._log_filename = _truncate_utf8(name, MAX_LOG_FILENAME_BYTES)

    def get_exit_on_error(self) -> bool:
        return self._exit_on_error

    def set_exit_on_error(self, value: bool) -> None:
        self._exit_on_error = value

    def get_suppress_printing(self) -> bool:
        return self._suppress_printing

    def set_suppress_printing(self, value: bool) -> None:
        self._suppress_printing = value

    def get_clean_up_routine(self) -> Optional[CleanupCallback]:
        return self._cleanup_callback

    def set_clean_up_routine(self, callback: Optional[CleanupCallback]) -> None:
        self._cleanup_callback = callback
