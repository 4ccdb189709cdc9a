"""Serialized execution of the watched command."""

import asyncio
import logging
import shlex
import time
from collections.abc import Sequence
from pathlib import Path

from files_watcher.errors import CommandExecutionError
from files_watcher.models import CommandResult, FileRecord
from files_watcher.notifier import NoOpNotifier, WatchNotifier, safe_notify

logger = logging.getLogger(__name__)

# Queue marker telling the worker to exit
_STOP = object()


class CommandExecutor:
    """Runs the watched command, never more than one run at a time.

    Ticks hand over run requests with notify(); a single worker task takes
    them one by one. Every run, whether from the worker or a direct
    execute() call, holds the executor's lock for its whole duration.

    Usage:
        executor = CommandExecutor("make test")
        executor.start()
        executor.notify(record)
        ...
        await executor.close()
    """

    def __init__(
        self,
        command: str | Sequence[str],
        notifier: WatchNotifier | None = None,
        cwd: str | Path | None = None,
    ):
        """Initialize executor.

        Args:
            command: Command line (split with shlex) or argv list
            notifier: Optional notification handler (defaults to NoOpNotifier)
            cwd: Working directory for the command (defaults to ours)
        """
        self.args = shlex.split(command) if isinstance(command, str) else list(command)
        if not self.args:
            raise ValueError("command must not be empty")
        self.notifier = notifier or NoOpNotifier()
        self.cwd = cwd

        self._lock = asyncio.Lock()
        self._queue: asyncio.Queue = asyncio.Queue()
        self._worker: asyncio.Task | None = None

        self.succeeded = 0
        self.failed = 0

    @property
    def is_running(self) -> bool:
        """Whether a command run currently holds the lock."""
        return self._lock.locked()

    @property
    def pending(self) -> int:
        """Number of queued run requests."""
        return self._queue.qsize()

    async def execute(self, trigger: FileRecord | None = None) -> CommandResult:
        """Run the command once, waiting for the lock first.

        Standard output and error are inherited from this process.

        Args:
            trigger: File whose change caused the run, for logging

        Returns:
            CommandResult for a zero exit status

        Raises:
            CommandExecutionError: If the command cannot start or exits non-zero
        """
        async with self._lock:
            if trigger is not None:
                logger.info(f"Running {shlex.join(self.args)} ({trigger.name} changed)")
            else:
                logger.info(f"Running {shlex.join(self.args)}")

            start_time = time.perf_counter()
            try:
                process = await asyncio.create_subprocess_exec(*self.args, cwd=self.cwd)
            except (OSError, ValueError) as e:
                # ValueError: argv the OS cannot take, such as an embedded null byte
                raise CommandExecutionError(self.args, cause=e) from e

            returncode = await process.wait()
            if returncode != 0:
                raise CommandExecutionError(self.args, returncode=returncode)

            return CommandResult(
                args=list(self.args),
                returncode=returncode,
                duration=time.perf_counter() - start_time,
            )

    def start(self) -> None:
        """Start the worker task. Must be called with a running event loop."""
        if self._worker is not None and not self._worker.done():
            return
        self._worker = asyncio.create_task(self._work())

    def notify(self, trigger: FileRecord | None = None) -> None:
        """Request a run without waiting for it."""
        self._queue.put_nowait(trigger)

    async def close(self) -> None:
        """Stop the worker.

        Requests already queued run first, in order; the worker exits once
        the queue is drained.
        """
        if self._worker is None:
            return

        self._queue.put_nowait(_STOP)

        worker, self._worker = self._worker, None
        await worker

    async def _work(self) -> None:
        while True:
            trigger = await self._queue.get()
            if trigger is _STOP:
                return

            try:
                result = await self.execute(trigger)
            except CommandExecutionError as e:
                self.failed += 1
                logger.error(f"Command run failed: {e}")
                safe_notify(self.notifier.command_failed, e)
                continue

            self.succeeded += 1
            logger.debug("command completed successfully")
            safe_notify(self.notifier.command_succeeded, result)
