"""OS signal subscription and the abrupt-exit listener."""

import asyncio
import logging
import os
import signal
from collections.abc import Callable, Iterable

logger = logging.getLogger(__name__)

DEFAULT_SIGNALS = tuple(
    sig
    for sig in (
        signal.SIGINT,
        signal.SIGTERM,
        getattr(signal, "SIGHUP", None),  # not on Windows
    )
    if sig is not None
)


def subscribe_signals(
    loop: asyncio.AbstractEventLoop,
    signals: Iterable[int] = DEFAULT_SIGNALS,
) -> asyncio.Queue:
    """Route OS signals into a queue.

    Args:
        loop: Running event loop to register handlers on
        signals: Signal numbers to subscribe to

    Returns:
        Queue receiving the number of each delivered signal
    """
    queue: asyncio.Queue = asyncio.Queue()
    for sig in signals:
        loop.add_signal_handler(sig, queue.put_nowait, sig)
    return queue


async def listen_for_signals(
    queue: asyncio.Queue,
    exit_func: Callable[[int], object] = os._exit,
) -> None:
    """Wait for the first signal and exit the process immediately.

    Nothing in flight (command run, file checks) is waited for. The exit
    status is 128 + signal number.
    """
    signum = await queue.get()
    try:
        name = signal.Signals(signum).name
    except ValueError:
        name = str(signum)

    logger.warning(f"You interrupted me ({name}), exiting now")
    for handler in logging.getLogger().handlers:
        handler.flush()
    exit_func(128 + signum)
