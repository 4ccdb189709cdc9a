"""Error types raised by the watcher."""

from collections.abc import Sequence


class WatcherError(Exception):
    """Base exception for watcher errors."""


class TraversalError(WatcherError):
    """Raised when the directory walk fails on an entry."""

    def __init__(self, path: str, cause: OSError):
        self.path = path
        self.cause = cause
        super().__init__(f"cannot walk {path}: {cause}")


class PatternCompileError(WatcherError):
    """Raised when a wildcard exclusion pattern is not a valid expression."""

    def __init__(self, pattern: str, cause: Exception):
        self.pattern = pattern
        self.cause = cause
        super().__init__(f"cannot exclude files: invalid pattern {pattern!r}: {cause}")


class CommandExecutionError(WatcherError):
    """Raised when the watched command fails to start or exits non-zero."""

    def __init__(
        self,
        command: Sequence[str],
        returncode: int | None = None,
        cause: Exception | None = None,
    ):
        self.command = list(command)
        self.returncode = returncode
        self.cause = cause

        line = " ".join(self.command)
        if cause is not None:
            reason = f"failed to start {line!r}: {cause}"
        else:
            reason = f"{line!r} exited with status {returncode}"
        super().__init__(f"error occurred processing during file watch: {reason}")
