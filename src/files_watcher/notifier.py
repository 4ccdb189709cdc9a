"""Pluggable notification protocol for watch events.

Lets the scheduler and executor report what happened without depending on
how the host presents it. Replace with custom handlers for testing or
embedding.
"""

import logging
from typing import Protocol

from files_watcher.errors import CommandExecutionError
from files_watcher.models import CommandResult, FileRecord

logger = logging.getLogger(__name__)


class WatchNotifier(Protocol):
    """Protocol for watch notifications - host can provide custom implementation."""

    def file_changed(self, record: FileRecord) -> None:
        """A tick found a changed file and is triggering the command."""
        ...

    def command_succeeded(self, result: CommandResult) -> None:
        """The command exited with status 0."""
        ...

    def command_failed(self, error: CommandExecutionError) -> None:
        """The command failed to start or exited non-zero."""
        ...


class NoOpNotifier:
    """Silent notifier - default when nothing is listening."""

    def file_changed(self, record: FileRecord) -> None:
        pass

    def command_succeeded(self, result: CommandResult) -> None:
        pass

    def command_failed(self, error: CommandExecutionError) -> None:
        pass


class LoggingNotifier:
    """Implementation using stdlib logging."""

    def file_changed(self, record: FileRecord) -> None:
        logger.info(f"File {record.path} has changed")

    def command_succeeded(self, result: CommandResult) -> None:
        logger.info(f"command completed successfully in {result.duration:.2f}s")

    def command_failed(self, error: CommandExecutionError) -> None:
        logger.info("Command failed, waiting for the next change")


def safe_notify(callback, *args) -> None:
    """Call a notifier method, logging instead of raising on error."""
    try:
        callback(*args)
    except Exception as e:
        logger.exception(f"Error in notifier callback {getattr(callback, '__name__', callback)}: {e}")
