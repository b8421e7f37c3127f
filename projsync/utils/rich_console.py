"""
Console Output
==============

Rich-backed console and logger shared by the CLI and the synchronizer.

Environment variables:
    PROJSYNC_LOG_LEVEL: DEBUG, INFO, WARNING, ERROR or CRITICAL (default INFO)
    PROJSYNC_DEBUG: Also log to a file (true, 1, yes)
    PROJSYNC_LOG_FILE: Log file path when debug mode is on (default projsync.log)
"""

import logging
import os
from typing import Any

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def get_console() -> Console:
    """Get the singleton rich Console."""
    if not hasattr(get_console, "_console"):
        get_console._console = Console()
    return get_console._console


def debug_enabled() -> bool:
    """Check whether file logging was requested through the environment."""
    return os.getenv("PROJSYNC_DEBUG", "").lower() in ["true", "1", "yes"]


def print_table(headers: list[str], rows: list[list[Any]], title: str | None = None):
    """Print a formatted table using Rich library.

    Args:
        headers (list[str]): Column headers for the table.
        rows (list[list[Any]]): Data rows to display in the table.
        title (str | None, optional): Title of the table. Defaults to None.
    """
    console = get_console()
    table = Table(title=title)
    for header in headers:
        table.add_column(header)
    for row in rows:
        table.add_row(*[str(cell) for cell in row])
    console.print(table)


class RichConsoleLogger(logging.Logger):
    """Logger writing through a RichHandler, plus a file handler in debug mode."""

    def __init__(self, name: str):
        super().__init__(name)

        log_level_str = os.getenv("PROJSYNC_LOG_LEVEL", "INFO").upper()
        if log_level_str not in LOG_LEVELS:
            get_console().print(
                f"Invalid log level: {log_level_str}. Using INFO.", style="bold yellow"
            )
            log_level_str = "INFO"

        self.log_level_str = log_level_str
        self.log_level = LOG_LEVELS[log_level_str]
        self.setLevel(self.log_level)

        handler = RichHandler(console=get_console(), rich_tracebacks=True, level=self.log_level)
        self.addHandler(handler)

        if debug_enabled():
            log_file = os.getenv("PROJSYNC_LOG_FILE", "projsync.log")
            try:
                file_handler = logging.FileHandler(log_file)
                file_handler.setLevel(self.log_level)
                file_formatter = logging.Formatter(
                    "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
                )
                file_handler.setFormatter(file_formatter)
                self.addHandler(file_handler)
            except OSError as e:
                self.error(f"Failed to set up file logging: {e}")

    def success(self, message: str, *args, **kwargs):
        """Log a success message at INFO level with a check mark.

        Args:
            message (str): Success message to display.
        """
        if args:
            message = message % args
        super().info(f"✔ {message}", **kwargs)


# Singleton logger instance
_console_logger = None


def get_console_logger() -> RichConsoleLogger:
    """Get a singleton instance of RichConsoleLogger with log level from environment variables.

    Returns:
        RichConsoleLogger: Configured logger instance
    """
    global _console_logger
    if _console_logger is None:
        _console_logger = RichConsoleLogger("projsync")
    return _console_logger
