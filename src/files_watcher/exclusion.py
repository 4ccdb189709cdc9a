"""Exclusion matching for collected files.

A pattern is either exact (compared to the bare file name and to the full
path) or, when it contains a wildcard, a regular expression searched in the
full path. Patterns are tried in order and the first match wins.
"""

import re
from collections.abc import Iterable
from functools import lru_cache

from files_watcher.errors import PatternCompileError

WILDCARD = "*"


def is_wildcard(pattern: str) -> bool:
    """Return True if pattern is matched as an expression rather than exactly."""
    return WILDCARD in pattern


@lru_cache(maxsize=256)
def _compile(pattern: str) -> re.Pattern[str]:
    try:
        return re.compile(pattern)
    except re.error as e:
        raise PatternCompileError(pattern, e) from e


def is_excluded(path: str, file_name: str, patterns: Iterable[str]) -> bool:
    """Decide whether a file is excluded.

    Args:
        path: File path as produced by the walk
        file_name: Bare file name
        patterns: Exclusion patterns, evaluated in order

    Returns:
        True if any pattern matches

    Raises:
        PatternCompileError: If a wildcard pattern is not a valid expression
    """
    for pattern in patterns:
        if is_wildcard(pattern):
            if _compile(pattern).search(path):
                return True
        elif file_name == pattern or path == pattern:
            return True
    return False


def validate_patterns(patterns: Iterable[str]) -> None:
    """Compile every wildcard pattern up front.

    Raises:
        PatternCompileError: For the first invalid pattern
    """
    for pattern in patterns:
        if is_wildcard(pattern):
            _compile(pattern)
