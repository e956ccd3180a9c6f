"""Test fixtures for faultline."""

import logging
import os
from pathlib import Path
from typing import Generator

import pytest

from faultline.tracker import ErrorTracker


class FakeClock:
    """Clock whose time only moves when told to."""

    def __init__(self, start: float = 100.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture(autouse=True)
def isolated_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep configuration files and environment overrides from leaking into tests."""
    for name in list(os.environ):
        if name.startswith("FAULTLINE_"):
            monkeypatch.delenv(name)
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.chdir(tmp_path)


@pytest.fixture(autouse=True)
def restore_logging() -> Generator[None, None, None]:
    """Drop handlers that setup_logging attached during a test."""
    root_logger = logging.getLogger()
    handlers = root_logger.handlers[:]
    level = root_logger.level
    yield
    for handler in root_logger.handlers[:]:
        if handler not in handlers and type(handler) is logging.StreamHandler:
            root_logger.removeHandler(handler)
    root_logger.setLevel(level)


@pytest.fixture
def clock() -> FakeClock:
    """Create a controllable clock."""
    return FakeClock()


@pytest.fixture
def log_path(tmp_path: Path) -> Path:
    """Path of the error log used by the tracker fixture."""
    return tmp_path / "logs" / "error_log.txt"


@pytest.fixture
def tracker(log_path: Path, clock: FakeClock) -> ErrorTracker:
    """Create a quiet tracker that never requests termination."""
    log_path.parent.mkdir(parents=True, exist_ok=True)
    return ErrorTracker(
        str(log_path),
        exit_on_error=False,
        suppress_printing=True,
        clock=clock,
    )
