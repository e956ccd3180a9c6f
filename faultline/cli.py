"""
Main CLI entry point for faultline.

Lets shell scripts report errors and warnings through a tracker and inspect
the resulting error log.
"""

import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from faultline import __version__
from faultline.config import TrackerConfig, load_config
from faultline.exceptions import ConfigurationError, FaultlineError, TerminateRequested
from faultline.log_writer import read_records
from faultline.tracker import ErrorTracker
from faultline.utils import get_logger, log_with_context, setup_logging

logger = get_logger(__name__)

app = typer.Typer(help="faultline - report errors and warnings from scripts.")


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"faultline v{__version__}")
        raise typer.Exit()


@app.callback()
def main_callback(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit.",
    ),
) -> None:
    """faultline - report errors and warnings from scripts."""


def _load(config_path: Optional[Path]) -> TrackerConfig:
    try:
        config = load_config(str(config_path) if config_path else None)
    except ConfigurationError as e:
        typer.echo(f"Configuration error: {e.message}", err=True)
        raise typer.Exit(code=e.exit_code)

    try:
        setup_logging(level=config.logging.level, structured=config.logging.structured)
    except ValueError as e:
        # Fall back to basic logging
        typer.echo(f"Warning: Failed to set up logging: {e}", err=True)
        setup_logging(level="WARNING", structured=False)
    return config


def _build_tracker(
    config_path: Optional[Path],
    log_file: Optional[Path],
    quiet: bool,
) -> ErrorTracker:
    config = _load(config_path)
    tracker = ErrorTracker.from_config(config)
    if log_file is not None:
        tracker.set_log_filename(str(log_file))
    if quiet:
        tracker.set_suppress_printing(True)
    log_with_context(
        logger,
        "debug",
        "tracker_configured",
        {
            "log_file": tracker.get_log_filename(),
            "exit_on_error": tracker.get_exit_on_error(),
            "suppress_printing": tracker.get_suppress_printing(),
        },
    )
    return tracker


@app.command()
def error(
    function_name: str = typer.Argument(..., help="Routine the error came from"),
    message: str = typer.Argument(..., help="Error message"),
    code: int = typer.Option(1, "--code", "-c", help="Error code, used as the exit status"),
    log_file: Optional[Path] = typer.Option(
        None, "--log-file", "-l", help="Error log file (overrides configuration)"
    ),
    config_path: Optional[Path] = typer.Option(
        None, "--config", help="Path to a faultline YAML configuration file"
    ),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Do not print the error block"),
    no_exit: bool = typer.Option(
        False, "--no-exit", help="Exit with status 0 instead of the error code"
    ),
) -> None:
    """Report an error, log it and exit with its code."""
    tracker = _build_tracker(config_path, log_file, quiet)
    if no_exit:
        tracker.set_exit_on_error(False)

    try:
        tracker.report_error(function_name, message, code)
    except TerminateRequested as e:
        raise typer.Exit(code=e.exit_code)
    except FaultlineError as e:
        typer.echo(f"Error: {e.message}", err=True)
        raise typer.Exit(code=e.exit_code)


@app.command()
def warning(
    function_name: str = typer.Argument(..., help="Routine the warning came from"),
    message: str = typer.Argument(..., help="Warning message"),
    code: int = typer.Option(0, "--code", "-c", help="Warning code"),
    config_path: Optional[Path] = typer.Option(
        None, "--config", help="Path to a faultline YAML configuration file"
    ),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Do not print the warning block"),
) -> None:
    """Report a warning."""
    tracker = _build_tracker(config_path, None, quiet)
    tracker.report_warning(function_name, message, code)


@app.command()
def log(
    function_name: str = typer.Argument(..., help="Routine the error came from"),
    message: str = typer.Argument(..., help="Error message"),
    code: int = typer.Option(1, "--code", "-c", help="Error code"),
    log_file: Optional[Path] = typer.Option(
        None, "--log-file", "-l", help="Error log file (overrides configuration)"
    ),
    config_path: Optional[Path] = typer.Option(
        None, "--config", help="Path to a faultline YAML configuration file"
    ),
) -> None:
    """Append an error record to the log without reporting it."""
    tracker = _build_tracker(config_path, log_file, True)
    try:
        tracker.log_error(function_name, message, code)
    except FaultlineError as e:
        typer.echo(f"Error: {e.message}", err=True)
        raise typer.Exit(code=e.exit_code)


@app.command()
def records(
    log_file: Optional[Path] = typer.Option(
        None, "--log-file", "-l", help="Error log file (overrides configuration)"
    ),
    config_path: Optional[Path] = typer.Option(
        None, "--config", help="Path to a faultline YAML configuration file"
    ),
    last: Optional[int] = typer.Option(
        None, "--last", "-n", min=1, help="Only show the most recent N records"
    ),
) -> None:
    """Show the records of an error log."""
    path = log_file or Path(_load(config_path).log_filename)
    entries = read_records(path)
    if last is not None:
        entries = entries[-last:]

    console = Console()
    if not entries:
        console.print(f"[yellow]No error records in {path}[/yellow]")
        return

    table = Table(title=f"Error records: {path}")
    table.add_column("Time", style="cyan")
    table.add_column("Function", style="green")
    table.add_column("Flag", style="red", justify="right")
    table.add_column("Message")
    for entry in entries:
        table.add_row(entry.stamp, entry.function_name, str(entry.code), entry.message)
    console.print(table)


def main() -> None:
    """Console script entry point."""
    try:
        app()
    except KeyboardInterrupt:
        print("Operation cancelled by user", file=sys.stderr)
        sys.exit(130)  # Standard exit code for SIGINT


if __name__ == "__main__":
    main()
