"""
Process-wide convenience layer.

Code that prefers one shared tracker can use ``get_tracker``; the tracker core
does not depend on this module.
"""

import sys
from contextlib import contextmanager
from typing import Iterator, Optional

from faultline.exceptions import TerminateRequested
from faultline.tracker import ErrorTracker

_tracker: Optional[ErrorTracker] = None


def get_tracker() -> ErrorTracker:
    """Return the shared tracker, creating one with default settings on first use."""
    global _tracker
    if _tracker is None:
        _tracker = ErrorTracker()
    return _tracker


def set_tracker(tracker: ErrorTracker) -> None:
    """Replace the shared tracker."""
    global _tracker
    _tracker = tracker


def reset_tracker() -> None:
    """Discard the shared tracker; the next ``get_tracker`` call creates a new one."""
    global _tracker
    _tracker = None


@contextmanager
def terminate_on_request() -> Iterator[None]:
    """
    Exit the process when a tracker inside the block requests termination.

    Raises:
        SystemExit: With the reported error code.
    """
    try:
        yield
    except TerminateRequested as e:
        sys.stdout.flush()
        raise SystemExit(e.exit_code) from e
