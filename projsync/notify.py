"""
User Notifications
==================

Errors that leave the manifest and the file tree out of sync must reach the
user. The explorer host supplies its own notifier; ``ConsoleNotifier`` is the
default and writes through the rich console logger.
"""

from typing import Protocol

from projsync.utils.rich_console import get_console_logger


class Notifier(Protocol):
    """Anything able to show a message to the user."""

    def info(self, message: str) -> None: ...

    def warn(self, message: str) -> None: ...

    def error(self, message: str) -> None: ...


class ConsoleNotifier:
    """Notifier backed by the console logger."""

    def __init__(self, logger=None):
        self.logger = logger or get_console_logger()

    def info(self, message: str) -> None:
        self.logger.info(message)

    def warn(self, message: str) -> None:
        self.logger.warning(message)

    def error(self, message: str) -> None:
        self.logger.error(message)
