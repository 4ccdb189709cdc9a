"""Pytest configuration and fixtures."""

import asyncio
import os
import sys
import time
from pathlib import Path

import pytest

# Add src directory to Python path for imports
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))


def touch(path: Path, age: float = 0.0) -> Path:
    """Create path (and parents) with a modification time `age` seconds ago."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.touch()
    stamp = time.time() - age
    os.utime(path, (stamp, stamp))
    return path


@pytest.fixture
def basepath(tmp_path, monkeypatch):
    """Create fixtures/basepath under a temporary working directory.

    Layout (all files last modified an hour ago):
        fixtures/basepath/test.go
        fixtures/basepath/test1.go
        fixtures/basepath/notes.txt
        fixtures/basepath/subdir1/test.go
        fixtures/basepath/subdir2/test2.go
        fixtures/basepath/.git/hooks/hook.go
    """
    monkeypatch.chdir(tmp_path)
    root = Path("fixtures/basepath")
    for rel in (
        "test.go",
        "test1.go",
        "notes.txt",
        "subdir1/test.go",
        "subdir2/test2.go",
        ".git/hooks/hook.go",
    ):
        touch(root / rel, age=3600)
    return root


class StubExecutor:
    """Records run requests instead of running anything."""

    def __init__(self):
        self.notified = []
        self.started = False
        self.closed = False

    def start(self):
        self.started = True

    def notify(self, trigger=None):
        self.notified.append(trigger)

    async def close(self):
        self.closed = True


class RecordingNotifier:
    """Collects notifier events for assertions."""

    def __init__(self):
        self.changed = []
        self.succeeded = []
        self.failed = []

    def file_changed(self, record):
        self.changed.append(record)

    def command_succeeded(self, result):
        self.succeeded.append(result)

    def command_failed(self, error):
        self.failed.append(error)


@pytest.fixture
def stub_executor():
    return StubExecutor()


@pytest.fixture
def notifier():
    return RecordingNotifier()


def python_command(code: str, *args: str) -> list[str]:
    """argv running `code` with the current interpreter."""
    return [sys.executable, "-c", code, *args]


async def wait_until(predicate, timeout: float = 5.0, interval: float = 0.02) -> None:
    """Poll predicate until it is true or fail after timeout seconds."""
    deadline = time.monotonic() + timeout
    while not predicate():
        if time.monotonic() > deadline:
            raise AssertionError("condition not met before timeout")
        await asyncio.sleep(interval)
