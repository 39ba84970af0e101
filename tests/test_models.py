"""Tests for models and exceptions."""

from pathlib import Path

import pytest

from src.tailer.models import CursorState, ErrorKind, MonitorState, WatcherStatus
from src.tailer.exceptions import (
    FileLostError,
    FileOpenError,
    FileReadError,
    TailerError,
    WatchError,
)


class TestWatcherStatus:
    """Tests for WatcherStatus dataclass."""

    def _status(self, **kwargs):
        values = dict(
            path=Path("/var/log/app.log"),
            state=CursorState.ACTIVE,
            initial_mtime_ns=100,
            last_mtime_ns=200,
            read_offset=42,
            prior_read_offset=10,
        )
        values.update(kwargs)
        return WatcherStatus(**values)

    def test_pull_mode_defaults(self):
        status = self._status()
        assert status.monitor_state is None
        assert status.poll_interval is None
        assert status.push_mode is False
        assert status.is_lost is False

    def test_lost(self):
        status = self._status(state=CursorState.LOST)
        assert status.is_lost is True

    def test_to_dict(self):
        status = self._status(monitor_state=MonitorState.RUNNING, poll_interval=1.0)
        data = status.to_dict()
        assert data == {
            "path": "/var/log/app.log",
            "state": "active",
            "initial_mtime_ns": 100,
            "last_mtime_ns": 200,
            "read_offset": 42,
            "prior_read_offset": 10,
            "monitor_state": "running",
            "poll_interval": 1.0,
        }

    def test_frozen(self):
        status = self._status()
        with pytest.raises(AttributeError):
            status.read_offset = 0


class TestErrors:
    """Tests for the structured error values."""

    def test_lost_error(self):
        error = FileLostError(Path("/tmp/gone.log"))
        assert error.kind is ErrorKind.LOST
        assert error.path == Path("/tmp/gone.log")
        assert str(error) == "File /tmp/gone.log is no longer accessible"
        assert isinstance(error, WatchError)
        assert isinstance(error, TailerError)

    def test_open_error(self):
        error = FileOpenError(Path("/tmp/x.log"), "Permission denied")
        assert error.kind is ErrorKind.OPEN
        assert "Permission denied" in str(error)

    def test_read_error_carries_partial(self):
        error = FileReadError(Path("/tmp/x.log"), b"abc", "Input/output error")
        assert error.kind is ErrorKind.READ
        assert error.partial == b"abc"
        assert "3 byte(s)" in str(error)

    def test_kinds_distinct(self):
        kinds = {FileLostError.kind, FileOpenError.kind, FileReadError.kind}
        assert len(kinds) == 3
