"""Public entry point for tailing a single file."""

import logging
from dataclasses import replace
from pathlib import Path
from typing import Optional

from .config import WatcherConfig
from .cursor import FileCursor
from .exceptions import WatchError, WatcherModeError
from .models import WatcherStatus
from .monitor import ChannelMonitor
from .queue import SlotQueue


logger = logging.getLogger(__name__)


class Watcher:
    """
    Tails one file by polling its modification time.

    In pull mode the caller drives everything through was_modified() and
    get_new_bytes(). Passing a poll interval selects push mode: a background
    thread is started right away and new bytes arrive on ``byte_queue``,
    errors on ``error_queue``. Pull calls are refused in push mode because
    the background thread owns the read offset.

    Example:
        with Watcher("/var/log/app.log", poll_interval=1) as watcher:
            for data in watcher.byte_queue:
                sys.stdout.buffer.write(data)
    """

    def __init__(
        self,
        path: Path,
        poll_interval: Optional[float] = None,
        config: Optional[WatcherConfig] = None,
    ):
        """
        Initialize the watcher.

        Args:
            path: File to tail
            poll_interval: Seconds between polls in push mode (overrides config.poll_interval)
            config: Watcher configuration

        Raises:
            FileOpenError: If the file cannot be stat'ed
            ValueError: If poll_interval is not a positive number
        """
        self.config = config or WatcherConfig()
        if poll_interval is not None:
            self.config = replace(self.config, poll_interval=poll_interval)

        self._cursor = FileCursor(Path(path), chunk_size=self.config.chunk_size)
        self._monitor: Optional[ChannelMonitor] = None

        if self.config.push_mode:
            self._monitor = ChannelMonitor(
                self._cursor,
                self.config.poll_interval,
                join_timeout=self.config.join_timeout,
            )
            self._monitor.start()
        else:
            logger.debug(f"Watching {self._cursor.path} in pull mode")

    @property
    def path(self) -> Path:
        return self._cursor.path

    @property
    def poll_interval(self) -> Optional[float]:
        return self.config.poll_interval

    @property
    def push_mode(self) -> bool:
        return self._monitor is not None

    @property
    def byte_queue(self) -> Optional[SlotQueue[bytes]]:
        """Delivered byte sequences, None in pull mode."""
        return self._monitor.byte_queue if self._monitor else None

    @property
    def error_queue(self) -> Optional[SlotQueue[WatchError]]:
        """Delivered errors, None in pull mode."""
        return self._monitor.error_queue if self._monitor else None

    def was_modified(self) -> bool:
        """
        Report whether the file changed since the last check.

        Raises:
            FileLostError: If the file can no longer be stat'ed
            WatcherModeError: In push mode
        """
        self._require_pull_mode("was_modified")
        return self._cursor.was_modified()

    def get_new_bytes(self) -> bytes:
        """
        Return bytes appended since the last call, b"" if none.

        Raises:
            FileLostError: If the file can no longer be stat'ed
            FileOpenError: If the file cannot be opened
            FileReadError: If a read fails part way
            WatcherModeError: In push mode
        """
        self._require_pull_mode("get_new_bytes")
        return self._cursor.get_new_bytes()

    def status(self) -> WatcherStatus:
        """Snapshot offsets, timestamps and mode."""
        snapshot = self._cursor.status()
        if self._monitor is None:
            return snapshot
        return replace(
            snapshot,
            monitor_state=self._monitor.state,
            poll_interval=self.config.poll_interval,
        )

    def stop(self) -> None:
        """Stop the background thread. No-op in pull mode."""
        if self._monitor is not None:
            self._monitor.stop()

    def _require_pull_mode(self, operation: str) -> None:
        if self._monitor is not None:
            raise WatcherModeError(
                f"{operation}() is not available in push mode; read byte_queue instead"
            )

    def __repr__(self) -> str:
        mode = f"push, every {self.config.poll_interval}s" if self.push_mode else "pull"
        return f"Watcher({str(self.path)!r}, {mode})"

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.stop()
        return False
