"""Shared data models for files_watcher."""

import shlex
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path


@dataclass(frozen=True)
class WatcherConfig:
    """Immutable configuration for a polling watcher."""

    command: str
    """Command line to run when a watched file changes."""

    base_path: Path = Path(".")
    """Root directory of the walk."""

    extension: str = ".py"
    """Only files with this extension are watched."""

    excluded: tuple[str, ...] = ()
    """Exact names/paths, or wildcard patterns, to leave out."""

    frequency: float = 5.0
    """Poll interval in seconds, also the staleness window."""

    def __post_init__(self) -> None:
        # Normalize inputs before validating (frozen, so bypass __setattr__)
        object.__setattr__(self, "base_path", Path(self.base_path))
        object.__setattr__(self, "excluded", tuple(_as_iterable(self.excluded)))

        extension = self.extension.strip()
        if extension and not extension.startswith("."):
            extension = f".{extension}"
        object.__setattr__(self, "extension", extension)

        if not self.command_args:
            raise ValueError("command must not be empty")
        if not self.extension:
            raise ValueError("extension must not be empty")
        if self.frequency <= 0:
            raise ValueError(f"frequency must be positive, got {self.frequency}")

    @property
    def command_args(self) -> list[str]:
        """Command split into executable and argument tokens."""
        return shlex.split(self.command)


def _as_iterable(value: str | Iterable[str]) -> Iterable[str]:
    # A lone string is one pattern, not a sequence of characters
    if isinstance(value, str):
        return (value,)
    return value


@dataclass(frozen=True)
class FileRecord:
    """A watched file as seen by one collection pass."""

    name: str
    """Bare file name."""

    path: str
    """Path including the base path, as produced by the walk."""

    modified_at: float
    """Last modification time (POSIX timestamp)."""

    def changed_within(self, window: float, now: float) -> bool:
        """Check whether the file was modified in the trailing window.

        Args:
            window: Window length in seconds
            now: Current time (POSIX timestamp)

        Returns:
            True if modified_at is newer than now - window
        """
        return self.modified_at > now - window


@dataclass
class CommandResult:
    """Outcome of a successful command run."""

    args: list[str] = field(default_factory=list)
    returncode: int = 0
    duration: float = 0.0
    """Wall time in seconds."""


class WatchState(Enum):
    """States of the watch scheduler loop."""

    IDLE = "idle"
    COLLECTING = "collecting"
    CHECKING_FILES = "checking_files"
    TRIGGERING = "triggering"
    STOPPED = "stopped"
