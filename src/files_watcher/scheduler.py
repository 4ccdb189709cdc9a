"""Polling watch loop: collect, check in parallel, trigger the command."""

import asyncio
import logging
import os
import time
from collections.abc import Callable, Sequence

from files_watcher.collector import collect
from files_watcher.errors import PatternCompileError, TraversalError
from files_watcher.exclusion import validate_patterns
from files_watcher.executor import CommandExecutor
from files_watcher.models import FileRecord, WatchState, WatcherConfig
from files_watcher.notifier import NoOpNotifier, WatchNotifier, safe_notify
from files_watcher.signals import listen_for_signals

logger = logging.getLogger(__name__)

DEFAULT_CHECK_DELAY = 0.1


class WatchScheduler:
    """Ticks every config.frequency seconds and runs the command on change.

    A file counts as changed when its modification time is newer than
    now - frequency, evaluated at check time. There is no comparison with
    an earlier snapshot, and at most one run is triggered per tick.

    Ticks are serialized: if a tick overruns its interval the missed ticks
    are dropped. Command runs happen on the executor's worker, so a slow
    command never delays detection.
    """

    def __init__(
        self,
        config: WatcherConfig,
        executor: CommandExecutor | None = None,
        notifier: WatchNotifier | None = None,
        check_delay: float = DEFAULT_CHECK_DELAY,
        exit_func: Callable[[int], object] = os._exit,
    ):
        """Initialize scheduler.

        Args:
            config: Watcher configuration
            executor: Command executor (built from config.command if omitted)
            notifier: Optional notification handler (defaults to NoOpNotifier)
            check_delay: Delay before each per-file check, in seconds
            exit_func: Called with the exit status when a signal arrives
        """
        self.config = config
        self.notifier = notifier or NoOpNotifier()
        self.executor = executor or CommandExecutor(config.command_args, notifier=self.notifier)
        self.check_delay = check_delay
        self.exit_func = exit_func
        self._state = WatchState.IDLE

    @property
    def state(self) -> WatchState:
        return self._state

    async def run(
        self,
        stop: asyncio.Event | None = None,
        signals: asyncio.Queue | None = None,
    ) -> None:
        """Tick until stop is set.

        The first tick fires one interval after the call. Setting stop only
        prevents new ticks; a running check pass or command is not aborted,
        and command runs already queued complete before this returns.

        Args:
            stop: Event ending the loop (never set: run forever)
            signals: Queue of OS signal numbers; the first one exits the process

        Raises:
            PatternCompileError: If an exclusion pattern is invalid
        """
        validate_patterns(self.config.excluded)
        stop = stop or asyncio.Event()
        loop = asyncio.get_running_loop()
        frequency = self.config.frequency

        logger.info(
            f"Starting the watcher daemon on {self.config.base_path} "
            f"(*{self.config.extension}, every {frequency}s)"
        )

        listener = None
        if signals is not None:
            listener = asyncio.create_task(listen_for_signals(signals, self.exit_func))
        self.executor.start()

        next_tick = loop.time() + frequency
        try:
            while not await self._wait_for_stop(stop, next_tick - loop.time()):
                await self.tick()

                next_tick += frequency
                now = loop.time()
                if next_tick <= now:
                    missed = int((now - next_tick) // frequency) + 1
                    logger.debug(f"Tick overran the interval, dropping {missed} tick(s)")
                    next_tick += missed * frequency
        finally:
            self._state = WatchState.STOPPED
            if listener is not None:
                listener.cancel()
            await self.executor.close()
            logger.info("Watcher stopped")

    @staticmethod
    async def _wait_for_stop(stop: asyncio.Event, timeout: float) -> bool:
        """Return True if stop was set before timeout elapsed."""
        if stop.is_set():
            return True
        try:
            await asyncio.wait_for(stop.wait(), timeout=max(timeout, 0))
        except asyncio.TimeoutError:
            return False
        return True

    async def tick(self) -> FileRecord | None:
        """Run one collect-and-check cycle.

        Returns:
            The changed file that triggered the command, or None
        """
        self._state = WatchState.COLLECTING
        try:
            records = await asyncio.to_thread(collect, self.config)
        except (TraversalError, PatternCompileError) as e:
            logger.error(f"Collection failed, retrying next tick: {e}")
            self._state = WatchState.IDLE
            return None
        except Exception as e:
            logger.exception(f"Unexpected collection error, retrying next tick: {e}")
            self._state = WatchState.IDLE
            return None

        self._state = WatchState.CHECKING_FILES
        changed = await self.check_files(records)
        if changed is None:
            self._state = WatchState.IDLE
            return None

        self._state = WatchState.TRIGGERING
        logger.debug(f"Change detected in {changed.path}, notifying executor")
        safe_notify(self.notifier.file_changed, changed)
        self.executor.notify(changed)
        self._state = WatchState.IDLE
        return changed

    async def check_files(self, records: Sequence[FileRecord]) -> FileRecord | None:
        """Check all records concurrently and return the first changed one.

        Checks still in flight when a change is found are cancelled.
        """
        if not records:
            return None

        tasks = [asyncio.create_task(self._check(record)) for record in records]
        try:
            for next_done in asyncio.as_completed(tasks):
                record = await next_done
                if record is not None:
                    return record
            return None
        finally:
            for task in tasks:
                task.cancel()

    async def _check(self, record: FileRecord) -> FileRecord | None:
        await asyncio.sleep(self.check_delay)
        if record.changed_within(self.config.frequency, time.time()):
            return record
        return None
