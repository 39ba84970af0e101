"""Data models for the tailer package."""

from dataclasses import dataclass, asdict
from enum import Enum
from pathlib import Path
from typing import Optional


class ErrorKind(Enum):
    """Kinds of failures a watcher can report."""
    LOST = "lost"
    OPEN = "open"
    READ = "read"


class CursorState(Enum):
    """Lifecycle of a file cursor. LOST is terminal."""
    ACTIVE = "active"
    LOST = "lost"


class MonitorState(Enum):
    """States of the background delivery thread."""
    IDLE = "idle"
    RUNNING = "running"
    LOST = "lost"
    STOPPED = "stopped"


@dataclass(frozen=True)
class WatcherStatus:
    """
    Point-in-time snapshot of a watcher's bookkeeping.
    
    Attributes:
        path: The watched file
        state: Cursor state (ACTIVE or LOST)
        initial_mtime_ns: Modification time captured at construction
        last_mtime_ns: Most recently observed modification time
        read_offset: Number of bytes handed to the caller so far
        prior_read_offset: Offset before the most recent chunk was consumed
        monitor_state: Background thread state, None in pull mode
        poll_interval: Seconds between background polls, None in pull mode
    """
    path: Path
    state: CursorState
    initial_mtime_ns: int
    last_mtime_ns: int
    read_offset: int
    prior_read_offset: int
    monitor_state: Optional[MonitorState] = None
    poll_interval: Optional[float] = None

    @property
    def is_lost(self) -> bool:
        return self.state is CursorState.LOST

    @property
    def push_mode(self) -> bool:
        return self.monitor_state is not None

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        data = asdict(self)
        data["path"] = str(self.path)
        data["state"] = self.state.value
        data["monitor_state"] = self.monitor_state.value if self.monitor_state else None
        return data
