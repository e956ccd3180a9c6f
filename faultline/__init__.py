"""
faultline - error, warning and timeout reporting for library and application code.
"""

__version__ = "0.1.0"

from faultline.exceptions import (  # noqa: E402
    ConfigurationError,
    FaultlineError,
    LogWriteError,
    TerminateRequested,
)
from faultline.threshold import Threshold  # noqa: E402
from faultline.tracker import (  # noqa: E402
    META_ERROR,
    TIMEOUT_MISUSE_CODE,
    ErrorTracker,
)

__all__ = [
    "META_ERROR",
    "TIMEOUT_MISUSE_CODE",
    "ConfigurationError",
    "ErrorTracker",
    "FaultlineError",
    "LogWriteError",
    "TerminateRequested",
    "Threshold",
    "__version__",
]
