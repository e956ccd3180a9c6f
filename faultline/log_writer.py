"""
Error log writing and reading.

Every error record is appended to the log file with its own open/append/close
cycle. The block layout is shared with the blocks printed to standard output.
"""

import re
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Union

from faultline.exceptions import LogWriteError

ERROR_HEADER = "***** ERROR *****"
WARNING_HEADER = "***** WARNING *****"

_RECORD_RE = re.compile(
    r"^\*\*\*\*\* ERROR \*\*\*\*\*\n"
    r"(?P<stamp>[^\n]*)\n"
    r"Function: (?P<function>[^\n]*)\n"
    r"Error Flag: (?P<code>-?\d+)\n"
    r"Message:\n"
    r"(?P<message>.*?)\n\n"
    r"(?=\n\*\*\*\*\* ERROR \*\*\*\*\*\n|\Z)",
    re.MULTILINE | re.DOTALL,
)


@dataclass
class LogRecord:
    """One error record parsed back out of a log file."""

    stamp: str
    function_name: str
    code: int
    message: str


def format_timestamp(moment: datetime) -> str:
    """Format a moment as ``month/day/year; hour:minute:second`` without padding."""
    return (
        f"{moment.month}/{moment.day}/{moment.year}; "
        f"{moment.hour}:{moment.minute}:{moment.second}"
    )


def format_block(
    header: str,
    function_name: str,
    flag_label: str,
    code: int,
    message: str,
    stamp: Optional[str] = None,
) -> str:
    """
    Build a report block.

    Args:
        header: Header line, e.g. ``ERROR_HEADER``.
        function_name: Name of the routine the report came from.
        flag_label: Label for the code line (``Error Flag`` or ``Warning Flag``).
        code: Numeric code.
        message: Message text.
        stamp: Optional date/time line placed under the header.

    Returns:
        The block, starting and ending with a blank line.
    """
    lines = ["", header]
    if stamp is not None:
        lines.append(stamp)
    lines.extend(
        [
            f"Function: {function_name}",
            f"{flag_label}: {code}",
            "Message:",
            message,
            "",
        ]
    )
    return "\n".join(lines)


def log_error(
    log_file: Union[str, Path],
    function_name: str,
    message: str,
    code: int,
    moment: Optional[datetime] = None,
) -> None:
    """
    Append one error record to a log file.

    The file is created when missing and closed again before returning.

    Args:
        log_file: Path to the log file.
        function_name: Name of the routine reporting the error.
        message: Error message.
        code: Error code.
        moment: Time to stamp the record with. Defaults to now.

    Raises:
        LogWriteError: If the file cannot be opened or written.
    """
    stamp = format_timestamp(moment or datetime.now())
    block = format_block(ERROR_HEADER, function_name, "Error Flag", code, message, stamp)
    try:
        data = (block + "\n").encode("utf-8")
    except UnicodeEncodeError as e:
        raise LogWriteError(f"Cannot encode error record: {e}", log_file=str(log_file)) from e

    try:
        with open(log_file, "ab") as f:
            f.write(data)
    except OSError as e:
        raise LogWriteError(f"Failed to append error record: {e}", log_file=str(log_file)) from e


def read_records(log_file: Union[str, Path]) -> List[LogRecord]:
    """
    Parse the error records of a log file.

    Args:
        log_file: Path to the log file.

    Returns:
        Records in file order. Empty if the file does not exist.
    """
    path = Path(log_file)
    if not path.exists():
        return []

    # Carriage returns inside messages are kept as written
    with open(path, encoding="utf-8", newline="") as f:
        text = f.read()
    return [
        LogRecord(
            stamp=match.group("stamp"),
            function_name=match.group("function"),
            code=int(match.group("code")),
            message=match.group("message"),
        )
        for match in _RECORD_RE.finditer(text)
    ]
