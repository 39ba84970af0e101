"""Stat-based change detection and offset bookkeeping for one file."""

import logging
import os
import threading
from pathlib import Path
from typing import List

from .config import DEFAULT_CHUNK_SIZE
from .exceptions import FileLostError, FileOpenError, FileReadError
from .models import CursorState, WatcherStatus


logger = logging.getLogger(__name__)


class FileCursor:
    """
    Incremental reader for a single file.

    Tracks the last seen modification time and how many bytes have been
    handed out, so each read returns only what was appended since the
    previous one. Once the file cannot be stat'ed the cursor is LOST and
    every later call raises FileLostError.
    """

    def __init__(self, path: Path, chunk_size: int = DEFAULT_CHUNK_SIZE):
        """
        Initialize the cursor.

        Args:
            path: File to tail
            chunk_size: Buffer size for delta reads

        Raises:
            FileOpenError: If the file cannot be stat'ed
        """
        self.path = Path(path)
        self.chunk_size = chunk_size
        try:
            stat = os.stat(self.path)
        except OSError as e:
            raise FileOpenError(self.path, e.strerror or str(e)) from e

        self.initial_mtime_ns = stat.st_mtime_ns
        self.last_mtime_ns = stat.st_mtime_ns
        self.read_offset = 0
        self.prior_read_offset = 0
        self.state = CursorState.ACTIVE
        self._lock = threading.Lock()

    @property
    def is_lost(self) -> bool:
        return self.state is CursorState.LOST

    def was_modified(self) -> bool:
        """
        Check whether the file's modification time has advanced.

        Returns:
            True if the on-disk mtime is later than any seen before

        Raises:
            FileLostError: If the file can no longer be stat'ed
        """
        with self._lock:
            return self._was_modified()

    def read_delta(self) -> bytes:
        """
        Read everything from the current offset to end of file.

        Returns:
            The bytes appended since the previous read

        Raises:
            FileLostError: If the cursor is already lost
            FileOpenError: If the file cannot be opened
            FileReadError: If a read fails part way; carries the partial bytes
        """
        with self._lock:
            if self.is_lost:
                raise FileLostError(self.path)
            return self._read_delta()

    def get_new_bytes(self) -> bytes:
        """
        Return bytes appended since the last call.

        The first call reads the whole file even when it has not been
        modified since the cursor was created.

        Returns:
            New bytes, or b"" if nothing changed
        """
        with self._lock:
            modified = self._was_modified()
            if not modified and self.read_offset != 0:
                return b""
            return self._read_delta()

    def status(self) -> WatcherStatus:
        """Snapshot the cursor's bookkeeping."""
        with self._lock:
            return WatcherStatus(
                path=self.path,
                state=self.state,
                initial_mtime_ns=self.initial_mtime_ns,
                last_mtime_ns=self.last_mtime_ns,
                read_offset=self.read_offset,
                prior_read_offset=self.prior_read_offset,
            )

    def _was_modified(self) -> bool:
        if self.is_lost:
            raise FileLostError(self.path)
        try:
            mtime_ns = os.stat(self.path).st_mtime_ns
        except OSError as e:
            self.state = CursorState.LOST
            logger.info(f"Lost access to {self.path}: {e}")
            raise FileLostError(self.path) from e

        if mtime_ns > max(self.initial_mtime_ns, self.last_mtime_ns):
            self.last_mtime_ns = mtime_ns
            return True
        return False

    def _read_delta(self) -> bytes:
        try:
            handle = open(self.path, "rb")
        except OSError as e:
            logger.warning(f"Failed to open {self.path}: {e}")
            raise FileOpenError(self.path, e.strerror or str(e)) from e

        chunks: List[bytes] = []
        with handle:
            if self.read_offset > 0:
                try:
                    handle.seek(self.read_offset)
                except OSError as e:
                    raise FileReadError(self.path, b"", e.strerror or str(e)) from e
            while True:
                try:
                    chunk = handle.read(self.chunk_size)
                except OSError as e:
                    partial = b"".join(chunks)
                    logger.warning(f"Read from {self.path} failed at offset {self.read_offset}: {e}")
                    raise FileReadError(self.path, partial, e.strerror or str(e)) from e
                if not chunk:
                    break
                self.prior_read_offset = self.read_offset
                self.read_offset += len(chunk)
                chunks.append(chunk)

        data = b"".join(chunks)
        if data:
            logger.debug(f"Read {len(data)} byte(s) from {self.path}, offset now {self.read_offset}")
        return data
