"""files-watcher: run a command whenever watched files change (polling)."""

__version__ = "0.1.0"

# Models
from files_watcher.models import CommandResult, FileRecord, WatchState, WatcherConfig

# Errors
from files_watcher.errors import (
    CommandExecutionError,
    PatternCompileError,
    TraversalError,
    WatcherError,
)

# Components
from files_watcher.collector import collect
from files_watcher.exclusion import is_excluded, validate_patterns
from files_watcher.executor import CommandExecutor
from files_watcher.notifier import LoggingNotifier, NoOpNotifier, WatchNotifier
from files_watcher.scheduler import WatchScheduler
from files_watcher.signals import listen_for_signals, subscribe_signals

__all__ = [
    "__version__",
    # Models
    "WatcherConfig",
    "FileRecord",
    "CommandResult",
    "WatchState",
    # Errors
    "WatcherError",
    "TraversalError",
    "PatternCompileError",
    "CommandExecutionError",
    # Components
    "collect",
    "is_excluded",
    "validate_patterns",
    "CommandExecutor",
    "WatchScheduler",
    "WatchNotifier",
    "NoOpNotifier",
    "LoggingNotifier",
    "subscribe_signals",
    "listen_for_signals",
]
