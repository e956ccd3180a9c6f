"""
Timeout threshold conversions.

Thresholds are stored as a single number of seconds and exchanged as an
hours/minutes/seconds triple.
"""

import sys
from typing import NamedTuple

SECOND_WEIGHTS = (3600, 60, 1)

# Effectively "never time out".
UNLIMITED = sys.float_info.max


class Threshold(NamedTuple):
    """A duration split into whole hours, whole minutes and remaining seconds."""

    hours: float
    minutes: float
    seconds: float


def to_seconds(hours: float = 0, minutes: float = 0, seconds: float = 0) -> float:
    """
    Collapse an hours/minutes/seconds triple into total seconds.

    Args:
        hours: Hours component.
        minutes: Minutes component.
        seconds: Seconds component.

    Returns:
        Total number of seconds.
    """
    return float(sum(v * w for v, w in zip((hours, minutes, seconds), SECOND_WEIGHTS)))


def from_seconds(total: float) -> Threshold:
    """
    Decompose total seconds into whole hours, whole minutes and remaining seconds.

    Args:
        total: Duration in seconds.

    Returns:
        The decomposed threshold.
    """
    hours, remainder = divmod(total, SECOND_WEIGHTS[0])
    minutes, seconds = divmod(remainder, SECOND_WEIGHTS[1])
    return Threshold(hours, minutes, seconds)
