"""Custom exceptions for the tailer package."""

from pathlib import Path
from typing import Optional

from .models import ErrorKind


class TailerError(Exception):
    """Base exception for all tailer errors."""
    pass


class WatchError(TailerError):
    """
    Error tied to the watched file.
    
    Attributes:
        kind: What went wrong, so callers can branch without matching messages
        path: The watched file
    """

    kind: Optional[ErrorKind] = None

    def __init__(self, path: Path, message: str):
        super().__init__(message)
        self.path = Path(path)


class FileLostError(WatchError):
    """The watched file can no longer be stat'ed. Sticky for the watcher's lifetime."""

    kind = ErrorKind.LOST

    def __init__(self, path: Path):
        super().__init__(path, f"File {path} is no longer accessible")


class FileOpenError(WatchError):
    """The watched file could not be stat'ed at construction or opened for reading."""

    kind = ErrorKind.OPEN

    def __init__(self, path: Path, reason: str = ""):
        message = f"Unable to open {path}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(path, message)


class FileReadError(WatchError):
    """
    A read failed part way through a delta.
    
    The bytes consumed before the failure are already counted in the read
    offset and are carried in ``partial``.
    """

    kind = ErrorKind.READ

    def __init__(self, path: Path, partial: bytes = b"", reason: str = ""):
        message = f"Read from {path} failed after {len(partial)} byte(s)"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(path, message)
        self.partial = partial


class WatcherModeError(TailerError):
    """Operation is not available in the watcher's current mode."""
    pass


class QueueError(TailerError):
    """Error related to a delivery queue."""
    pass


class QueueClosedError(QueueError):
    """Queue has been closed."""
    pass


class QueueEmptyError(QueueError):
    """No item arrived before the timeout expired."""
    pass


class QueueFullError(QueueError):
    """The slot stayed occupied past the put timeout."""
    pass
