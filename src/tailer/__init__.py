"""
File Tailer Package

Incrementally tails a single file by polling its modification time and
returning only the bytes appended since the previous read.

Features:
- Stat-based change detection (no content hashing)
- Byte-offset bookkeeping, each byte delivered exactly once
- Pull mode: caller-driven was_modified() / get_new_bytes()
- Push mode: background polling thread with single-slot queues for backpressure
- Sticky lost-file state once the file becomes inaccessible
"""

from .models import (
    ErrorKind,
    CursorState,
    MonitorState,
    WatcherStatus,
)

from .config import WatcherConfig, DEFAULT_CHUNK_SIZE

from .exceptions import (
    TailerError,
    WatchError,
    FileLostError,
    FileOpenError,
    FileReadError,
    WatcherModeError,
    QueueError,
    QueueClosedError,
    QueueEmptyError,
    QueueFullError,
)

from .queue import SlotQueue
from .cursor import FileCursor
from .monitor import ChannelMonitor
from .watcher import Watcher


__all__ = [
    # Models
    "ErrorKind",
    "CursorState",
    "MonitorState",
    "WatcherStatus",
    # Config
    "WatcherConfig",
    "DEFAULT_CHUNK_SIZE",
    # Exceptions
    "TailerError",
    "WatchError",
    "FileLostError",
    "FileOpenError",
    "FileReadError",
    "WatcherModeError",
    "QueueError",
    "QueueClosedError",
    "QueueEmptyError",
    "QueueFullError",
    # Components
    "SlotQueue",
    "FileCursor",
    "ChannelMonitor",
    # Entry point
    "Watcher",
]

__version__ = "0.1.0"
