"""Background thread that polls a cursor and delivers through slot queues."""

import logging
import threading
from typing import Optional

from .cursor import FileCursor
from .exceptions import (
    FileLostError,
    QueueClosedError,
    WatchError,
    WatcherModeError,
)
from .models import MonitorState
from .queue import SlotQueue


logger = logging.getLogger(__name__)


class ChannelMonitor:
    """
    Push-mode driver for a FileCursor.

    Every ``poll_interval`` seconds the cursor is asked for new bytes.
    Non-empty deltas go to ``byte_queue``. An error goes to ``error_queue``
    followed by a ``byte_queue`` delivery of whatever bytes it carried (b""
    unless a read failed part way), so a consumer reading only
    ``byte_queue`` still wakes up. A lost file is reported again on every
    tick until stop() is called.

    The monitor thread is the only writer to the cursor while it runs.
    """

    def __init__(
        self,
        cursor: FileCursor,
        poll_interval: float,
        join_timeout: float = 2.0,
    ):
        """
        Initialize the monitor.

        Args:
            cursor: Cursor to poll
            poll_interval: Seconds between polls
            join_timeout: Seconds to wait for the thread in stop()
        """
        self.cursor = cursor
        self.poll_interval = poll_interval
        self.join_timeout = join_timeout
        self.byte_queue: SlotQueue[bytes] = SlotQueue("byte_queue")
        self.error_queue: SlotQueue[WatchError] = SlotQueue("error_queue")

        self._state = MonitorState.IDLE
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None
        self._lock = threading.Lock()

    @property
    def state(self) -> MonitorState:
        return self._state

    @property
    def is_running(self) -> bool:
        return self._state in (MonitorState.RUNNING, MonitorState.LOST)

    def start(self) -> None:
        """
        Start the polling thread.

        Raises:
            WatcherModeError: If the monitor was already started
        """
        with self._lock:
            if self._state is not MonitorState.IDLE:
                raise WatcherModeError(f"Monitor for {self.cursor.path} already started")
            self._state = MonitorState.RUNNING

        self._thread = threading.Thread(
            target=self._poll_loop,
            name=f"ChannelMonitor[{self.cursor.path.name}]",
            daemon=True,
        )
        self._thread.start()
        logger.info(f"Monitoring {self.cursor.path} every {self.poll_interval}s")

    def stop(self) -> None:
        """
        Stop the polling thread.

        Closes both queues, which wakes a thread blocked on delivery and any
        consumer waiting on an empty queue. An item already in a slot can
        still be taken.
        """
        with self._lock:
            if self._state is MonitorState.STOPPED:
                return
            self._state = MonitorState.STOPPED

        self._stop_event.set()
        self.byte_queue.close()
        self.error_queue.close()

        thread = self._thread
        if thread is not None and thread.is_alive() and thread is not threading.current_thread():
            thread.join(timeout=self.join_timeout)
            if thread.is_alive():
                logger.warning(f"Monitor thread for {self.cursor.path} did not exit in {self.join_timeout}s")
        logger.info(f"Stopped monitoring {self.cursor.path}")

    def _poll_loop(self) -> None:
        """Worker loop that ticks until stopped."""
        logger.debug(f"Poll loop started for {self.cursor.path}")

        while not self._stop_event.wait(timeout=self.poll_interval):
            try:
                data = self.cursor.get_new_bytes()
            except WatchError as e:
                if isinstance(e, FileLostError):
                    self._mark_lost()
                partial = getattr(e, "partial", b"")
                if not self._deliver(self.error_queue, e):
                    break
                if not self._deliver(self.byte_queue, partial):
                    break
                continue

            if data and not self._deliver(self.byte_queue, data):
                break

        logger.debug(f"Poll loop exited for {self.cursor.path}")

    def _deliver(self, queue: SlotQueue, item) -> bool:
        """Put an item, blocking until the slot frees. False once stopped."""
        if self._stop_event.is_set():
            return False
        try:
            queue.put(item)
        except QueueClosedError:
            return False
        return True

    def _mark_lost(self) -> None:
        with self._lock:
            if self._state is MonitorState.RUNNING:
                self._state = MonitorState.LOST
                logger.info(f"{self.cursor.path} lost, reporting on every tick")
