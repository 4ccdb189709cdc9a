"""CLI entry point for files-watcher: builds the config and runs the watch loop."""

import argparse
import asyncio
import logging
import sys

from files_watcher import __version__
from files_watcher.errors import PatternCompileError
from files_watcher.exclusion import validate_patterns
from files_watcher.models import WatcherConfig
from files_watcher.notifier import LoggingNotifier
from files_watcher.scheduler import DEFAULT_CHECK_DELAY, WatchScheduler
from files_watcher.signals import subscribe_signals

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Returns:
        Parsed arguments namespace
    """
    parser = argparse.ArgumentParser(
        prog="files-watcher",
        description="Run a command whenever watched files change.",
        epilog="Examples:\n"
        '  files-watcher -c "pytest -q"                   # Watch *.py under .\n'
        '  files-watcher -d src -e .go -c "go build ./..." # Watch Go sources\n'
        '  files-watcher -c make -x "build/*" -x conf.py  # With exclusions',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "-c",
        "--command",
        required=True,
        help="Command to run when a watched file changes",
    )
    parser.add_argument(
        "-d",
        "--dir",
        default=".",
        help="Base directory to watch (default: .)",
    )
    parser.add_argument(
        "-e",
        "--ext",
        default=".py",
        help="Extension of watched files (default: .py)",
    )
    parser.add_argument(
        "-x",
        "--exclude",
        action="append",
        default=[],
        help="File name, path or wildcard expression to exclude (repeatable)",
    )
    parser.add_argument(
        "-f",
        "--frequency",
        type=float,
        default=5.0,
        help="Polling interval in seconds (default: 5)",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="Stop starting new polls after this many seconds",
    )
    parser.add_argument(
        "--check-delay",
        type=float,
        default=DEFAULT_CHECK_DELAY,
        help=argparse.SUPPRESS,
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )

    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> WatcherConfig:
    """Build a WatcherConfig from parsed arguments.

    Raises:
        ValueError: If an option value is invalid
        PatternCompileError: If an exclusion pattern is invalid
    """
    config = WatcherConfig(
        command=args.command,
        base_path=args.dir,
        extension=args.ext,
        excluded=tuple(args.exclude),
        frequency=args.frequency,
    )
    validate_patterns(config.excluded)
    return config


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        format=LOG_FORMAT,
        stream=sys.stderr,
        level=logging.DEBUG if verbose else logging.INFO,
    )
    logging.getLogger("watchdog").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)


async def watch(
    config: WatcherConfig,
    timeout: float | None = None,
    check_delay: float = DEFAULT_CHECK_DELAY,
) -> None:
    """Run the watcher with OS signal handling until timeout (or forever)."""
    loop = asyncio.get_running_loop()
    stop = asyncio.Event()
    if timeout is not None:
        loop.call_later(timeout, stop.set)

    scheduler = WatchScheduler(config, notifier=LoggingNotifier(), check_delay=check_delay)
    await scheduler.run(stop=stop, signals=subscribe_signals(loop))


def main(argv: list[str] | None = None) -> None:
    """
    Main entry point for files-watcher CLI.

    Handles:
    - Argument parsing and config validation
    - Logging setup
    - Running the watch loop
    - Error handling and exit codes
    """
    args = parse_args(argv)

    try:
        config = build_config(args)
    except (ValueError, PatternCompileError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    configure_logging(args.verbose)

    try:
        asyncio.run(watch(config, timeout=args.timeout, check_delay=args.check_delay))
    except KeyboardInterrupt:
        sys.exit(130)


if __name__ == "__main__":
    main()
