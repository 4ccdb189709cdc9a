"""Tests for files_watcher.models."""

import dataclasses
from pathlib import Path

import pytest

from files_watcher.models import FileRecord, WatcherConfig


class TestWatcherConfig:
    def test_defaults(self):
        config = WatcherConfig(command="make")
        assert config.base_path == Path(".")
        assert config.extension == ".py"
        assert config.excluded == ()
        assert config.frequency == 5.0

    def test_command_args_respects_quotes(self):
        config = WatcherConfig(command='echo "Hello world"')
        assert config.command_args == ["echo", "Hello world"]

    def test_extension_without_dot_is_normalized(self):
        assert WatcherConfig(command="make", extension="go").extension == ".go"

    def test_excluded_frozen_into_tuple(self):
        config = WatcherConfig(command="make", excluded=["a.go", "b/*"])
        assert config.excluded == ("a.go", "b/*")

    def test_single_excluded_string_is_one_pattern(self):
        config = WatcherConfig(command="make", excluded="vendor/*")
        assert config.excluded == ("vendor/*",)

    def test_base_path_coerced_to_path(self):
        assert WatcherConfig(command="make", base_path="src").base_path == Path("src")

    @pytest.mark.parametrize("frequency", [0, -1])
    def test_frequency_must_be_positive(self, frequency):
        with pytest.raises(ValueError, match="frequency"):
            WatcherConfig(command="make", frequency=frequency)

    def test_empty_command_rejected(self):
        with pytest.raises(ValueError, match="command"):
            WatcherConfig(command="   ")

    def test_empty_extension_rejected(self):
        with pytest.raises(ValueError, match="extension"):
            WatcherConfig(command="make", extension="")

    def test_immutable(self):
        config = WatcherConfig(command="make")
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.frequency = 1


class TestFileRecord:
    def test_changed_within_window(self):
        record = FileRecord(name="a.go", path="a.go", modified_at=99.0)
        assert record.changed_within(3, now=100.0) is True

    def test_outside_window(self):
        record = FileRecord(name="a.go", path="a.go", modified_at=90.0)
        assert record.changed_within(3, now=100.0) is False

    def test_window_boundary_is_not_changed(self):
        record = FileRecord(name="a.go", path="a.go", modified_at=97.0)
        assert record.changed_within(3, now=100.0) is False
