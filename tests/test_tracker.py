"""Tests for error and warning reporting."""

from pathlib import Path
from typing import Any, List, Tuple

import pytest

from faultline.exceptions import LogWriteError, TerminateRequested
from faultline.log_writer import read_records
from faultline.threshold import UNLIMITED
from faultline.tracker import ErrorTracker


def _printed_lines(out: str) -> List[str]:
    return [line.rstrip() for line in out.splitlines()]


def test_defaults() -> None:
    """Test the settings of a new tracker."""
    tracker = ErrorTracker()

    assert tracker.get_log_filename() == "error_log.txt"
    assert tracker.get_exit_on_error() is True
    assert tracker.get_suppress_printing() is False
    assert tracker.get_timeout_is_error() is True
    assert tracker.get_timeout_flag() == 0
    assert tracker.get_timeout_seconds() == UNLIMITED
    assert tracker.get_clean_up_routine() is None
    assert not tracker.has_error_occurred()
    assert not tracker.has_warning_occurred()
    assert not tracker.has_any_occurred()
    assert tracker.get_error_message() is None
    assert tracker.get_error_fcn_name() is None
    assert tracker.get_warning_message() is None
    assert tracker.get_warning_fcn_name() is None
    assert not tracker.timeout_is_set()


@pytest.mark.parametrize(
    "function_name, message, code",
    [
        ("solve", "matrix is singular", 3),
        ("read_input", "file is empty", -1),
        ("", "", 0),
    ],
)
def test_report_warning(
    tracker: ErrorTracker, function_name: str, message: str, code: int
) -> None:
    """Test that a warning is recorded and error state is untouched."""
    tracker.report_warning(function_name, message, code)

    assert tracker.has_warning_occurred()
    assert tracker.get_warning_flag() == code
    assert tracker.get_warning_message() == message
    assert tracker.get_warning_fcn_name() == function_name
    assert not tracker.has_error_occurred()
    assert tracker.get_error_flag() == 0
    assert tracker.get_error_message() is None
    assert tracker.has_any_occurred()


def test_report_warning_does_not_log(tracker: ErrorTracker, log_path: Path) -> None:
    """Test that warnings are never written to the error log."""
    calls = []
    tracker.set_clean_up_routine(lambda t, ctx: calls.append(ctx))
    tracker.set_exit_on_error(True)

    tracker.report_warning("f", "careful", 5)

    assert not log_path.exists()
    assert calls == []


def test_report_warning_prints_block(tracker: ErrorTracker, capsys) -> None:
    """Test the warning block written to standard output."""
    tracker.set_suppress_printing(False)

    tracker.report_warning("integrate", "step size reduced", 12)

    lines = _printed_lines(capsys.readouterr().out)
    assert lines[0] == ""
    assert lines[1:6] == [
        "***** WARNING *****",
        "Function: integrate",
        "Warning Flag: 12",
        "Message:",
        "step size reduced",
    ]


def test_report_error_quiet_without_exit(
    tracker: ErrorTracker, log_path: Path, capsys
) -> None:
    """Test a suppressed, non-exiting error report."""
    tracker.report_error("f", "m", 200)

    assert capsys.readouterr().out == ""
    records = read_records(log_path)
    assert len(records) == 1
    assert records[0].function_name == "f"
    assert records[0].code == 200
    assert records[0].message == "m"
    assert tracker.has_error_occurred()
    assert tracker.get_error_flag() == 200
    assert tracker.get_error_message() == "m"
    assert tracker.get_error_fcn_name() == "f"


def test_report_error_prints_block(tracker: ErrorTracker, capsys) -> None:
    """Test the error block written to standard output."""
    tracker.set_suppress_printing(False)

    tracker.report_error("f", "m [not markup]", 200)

    lines = _printed_lines(capsys.readouterr().out)
    assert lines[0] == ""
    assert lines[1:6] == [
        "***** ERROR *****",
        "Function: f",
        "Error Flag: 200",
        "Message:",
        "m [not markup]",
    ]


def test_report_error_requests_termination(tracker: ErrorTracker, log_path: Path) -> None:
    """Test that exit-on-error ends the report with a termination request."""
    tracker.set_exit_on_error(True)

    with pytest.raises(TerminateRequested) as exc_info:
        tracker.report_error("load", "missing data", 42)

    assert exc_info.value.exit_code == 42
    assert exc_info.value.function_name == "load"
    assert tracker.get_error_flag() == 42
    assert len(read_records(log_path)) == 1


def test_cleanup_runs_after_logging_before_termination(
    tracker: ErrorTracker, log_path: Path
) -> None:
    """Test cleanup callback ordering and context pass-through."""
    seen: List[Tuple[Any, ...]] = []

    def cleanup(t: ErrorTracker, context: Any) -> None:
        seen.append((t, context, t.get_error_flag(), len(read_records(log_path))))

    tracker.set_clean_up_routine(cleanup)
    tracker.set_exit_on_error(True)
    payload = {"open_files": ["a.dat"]}

    with pytest.raises(TerminateRequested):
        tracker.report_error("f", "m", 9, context=payload)

    assert seen == [(tracker, payload, 9, 1)]
    assert seen[0][1] is payload


def test_cleanup_gets_placeholder_context(tracker: ErrorTracker) -> None:
    """Test the context given to the callback when none was supplied."""
    contexts = []
    tracker.set_clean_up_routine(lambda t, ctx: contexts.append(ctx))

    tracker.report_error("f", "m", 1)

    assert contexts == [0]


def test_cleanup_error_propagates(tracker: ErrorTracker) -> None:
    """Test that a failing cleanup callback is not swallowed."""

    def cleanup(t: ErrorTracker, context: Any) -> None:
        raise RuntimeError("cleanup failed")

    tracker.set_clean_up_routine(cleanup)

    with pytest.raises(RuntimeError, match="cleanup failed"):
        tracker.report_error("f", "m", 1)

    assert tracker.has_error_occurred()


def test_sequential_errors_overwrite(tracker: ErrorTracker, log_path: Path) -> None:
    """Test that only the latest error is remembered while both are logged."""
    tracker.report_error("first", "first message", 1)
    tracker.report_error("second", "second message", 2)

    assert tracker.get_error_flag() == 2
    assert tracker.get_error_message() == "second message"
    assert tracker.get_error_fcn_name() == "second"
    assert [r.code for r in read_records(log_path)] == [1, 2]


def test_reset_error_status(tracker: ErrorTracker) -> None:
    """Test that resetting errors leaves warnings alone."""
    tracker.report_error("f", "m", 7)
    tracker.report_warning("g", "w", 8)

    tracker.reset_error_status()

    assert not tracker.has_error_occurred()
    assert tracker.get_error_flag() == 0
    assert tracker.get_error_message() is None
    assert tracker.get_error_fcn_name() is None
    assert tracker.has_warning_occurred()
    assert tracker.get_warning_message() == "w"
    assert tracker.has_any_occurred()


def test_reset_warning_status(tracker: ErrorTracker) -> None:
    """Test that resetting warnings leaves errors alone."""
    tracker.report_error("f", "m", 7)
    tracker.report_warning("g", "w", 8)

    tracker.reset_warning_status()

    assert not tracker.has_warning_occurred()
    assert tracker.get_warning_flag() == 0
    assert tracker.get_warning_message() is None
    assert tracker.get_warning_fcn_name() is None
    assert tracker.get_error_flag() == 7

    tracker.reset_error_status()
    assert not tracker.has_any_occurred()


def test_log_error_only_appends(tracker: ErrorTracker, log_path: Path) -> None:
    """Test the standalone log operation."""
    tracker.log_error("f", "m", 3)

    assert len(read_records(log_path)) == 1
    assert not tracker.has_error_occurred()


def test_log_write_failure(tmp_path: Path) -> None:
    """Test that a failed log append surfaces as LogWriteError."""
    tracker = ErrorTracker(str(tmp_path), exit_on_error=True, suppress_printing=True)

    with pytest.raises(LogWriteError) as exc_info:
        tracker.report_error("f", "m", 1)

    assert exc_info.value.exit_code == 3
    assert isinstance(exc_info.value.__cause__, OSError)


def test_set_log_filename_truncates() -> None:
    """Test that long log file names are cut to 256 bytes."""
    tracker = ErrorTracker()
    name = "x" * 300

    tracker.set_log_filename(name)

    assert tracker.get_log_filename() == name[:256]
    assert len(tracker.get_log_filename()) == 256


def test_set_log_filename_keeps_whole_characters() -> None:
    """Test that truncation never splits a multi-byte character."""
    tracker = ErrorTracker("x" + "é" * 200)

    assert tracker.get_log_filename() == "x" + "é" * 127


def test_configuration_setters(tracker: ErrorTracker) -> None:
    """Test the plain configuration accessors."""
    tracker.set_exit_on_error(True)
    tracker.set_suppress_printing(False)
    tracker.set_timeout_is_error(False)
    tracker.set_timeout_flag(77)

    assert tracker.get_exit_on_error() is True
    assert tracker.get_suppress_printing() is False
    assert tracker.get_timeout_is_error() is False
    assert tracker.get_timeout_flag() == 77

    tracker.set_clean_up_routine(None)
    assert tracker.get_clean_up_routine() is None


def test_printed_message_is_verbatim(tracker: ErrorTracker, log_path: Path, capsys) -> None:
    """Test that tabs and control characters reach standard output unchanged."""
    tracker.set_suppress_printing(False)
    message = "col1\tcol2\rX  "

    tracker.report_error("f", message, 4)

    out = capsys.readouterr().out
    assert out == (
        "\n***** ERROR *****\nFunction: f\nError Flag: 4\nMessage:\n" + message + "\n\n"
    )
    assert read_records(log_path)[0].message == message
