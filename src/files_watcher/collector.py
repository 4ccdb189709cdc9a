"""File collection: one polling snapshot of the watched files."""

import logging
import os
from pathlib import Path

from watchdog.utils.dirsnapshot import DirectorySnapshot

from files_watcher.errors import TraversalError
from files_watcher.exclusion import is_excluded
from files_watcher.models import FileRecord, WatcherConfig

logger = logging.getLogger(__name__)

GIT_PREFIX = ".git"


def _is_git_path(base: str, path: str) -> bool:
    return os.path.relpath(path, base).startswith(GIT_PREFIX)


def _walk_order(path: str) -> tuple[str, ...]:
    # Sorting by components gives lexical depth-first order
    return Path(path).parts


def collect(config: WatcherConfig) -> list[FileRecord]:
    """Collect the watched files under config.base_path.

    Directories, anything under .git, and files with another extension are
    skipped. Exclusion patterns are applied when configured.

    Args:
        config: Watcher configuration

    Returns:
        Fresh list of FileRecord in lexical depth-first order

    Raises:
        TraversalError: If the base path cannot be read, or a directory
            cannot be listed while exclusions are configured
        PatternCompileError: If an exclusion pattern is invalid
    """
    base = os.path.normpath(str(config.base_path))
    tolerate_errors = not config.excluded

    def listdir(directory: str) -> list[os.DirEntry]:
        if directory != base and _is_git_path(base, directory):
            return []
        try:
            with os.scandir(directory) as entries:
                return list(entries)
        except OSError as e:
            if tolerate_errors:
                logger.warning(f"Skipping unreadable directory {directory}: {e}")
                return []
            raise TraversalError(directory, e) from e

    try:
        # lstat: symlinked directories are not followed, so link cycles end
        snapshot = DirectorySnapshot(base, recursive=True, stat=os.lstat, listdir=listdir)
    except OSError as e:
        raise TraversalError(base, e) from e

    records: list[FileRecord] = []
    for path in sorted(snapshot.paths, key=_walk_order):
        if snapshot.isdir(path) or _is_git_path(base, path):
            continue
        if os.path.splitext(path)[1] != config.extension:
            continue

        name = os.path.basename(path)
        clean_path = os.path.normpath(path)
        if config.excluded and is_excluded(clean_path, name, config.excluded):
            logger.debug(f"Excluded {clean_path}")
            continue

        records.append(FileRecord(name=name, path=clean_path, modified_at=snapshot.mtime(path)))

    logger.debug(f"Collected {len(records)} file(s) under {base}")
    return records
