"""Single-slot blocking queue used for push-mode delivery."""

import threading
import time
from typing import Generic, Iterator, Optional, TypeVar

from .exceptions import QueueClosedError, QueueEmptyError, QueueFullError


T = TypeVar("T")


class SlotQueue(Generic[T]):
    """
    FIFO queue with a capacity of exactly one item.
    
    A producer blocks in put() until the previous item has been taken, which
    throttles the producer to the consumer's pace. Closing the queue wakes
    every blocked producer and consumer.
    
    Features:
    - Blocking put/get with optional timeouts
    - Close semantics for clean shutdown
    - Thread-safe operations
    """

    def __init__(self, name: str = "queue"):
        """
        Initialize the queue.
        
        Args:
            name: Label used in error messages and logs
        """
        self.name = name
        self._cond = threading.Condition(threading.Lock())
        self._item: Optional[T] = None
        self._has_item = False
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    def put(self, item: T, timeout: Optional[float] = None) -> None:
        """
        Place an item in the slot, waiting for it to be free.
        
        Args:
            item: Item to deliver
            timeout: Maximum seconds to wait, None waits indefinitely
            
        Raises:
            QueueClosedError: If the queue is or becomes closed
            QueueFullError: If the slot stays occupied past the timeout
        """
        deadline = None if timeout is None else time.monotonic() + timeout
        with self._cond:
            while self._has_item and not self._closed:
                remaining = None if deadline is None else deadline - time.monotonic()
                if remaining is not None and remaining <= 0:
                    raise QueueFullError(f"{self.name} is full")
                self._cond.wait(remaining)
            if self._closed:
                raise QueueClosedError(f"{self.name} is closed")
            self._item = item
            self._has_item = True
            self._cond.notify_all()

    def get(self, timeout: Optional[float] = None) -> T:
        """
        Take the pending item, waiting for one to arrive.
        
        An item placed before close() is still returned.
        
        Args:
            timeout: Maximum seconds to wait, None waits indefinitely
            
        Returns:
            The delivered item
            
        Raises:
            QueueEmptyError: If nothing arrives before the timeout
            QueueClosedError: If the queue is closed and empty
        """
        deadline = None if timeout is None else time.monotonic() + timeout
        with self._cond:
            while not self._has_item:
                if self._closed:
                    raise QueueClosedError(f"{self.name} is closed")
                remaining = None if deadline is None else deadline - time.monotonic()
                if remaining is not None and remaining <= 0:
                    raise QueueEmptyError(f"{self.name} is empty")
                self._cond.wait(remaining)
            item = self._item
            self._item = None
            self._has_item = False
            self._cond.notify_all()
            return item

    def get_nowait(self) -> T:
        """Take the pending item without waiting."""
        return self.get(timeout=0)

    def empty(self) -> bool:
        with self._cond:
            return not self._has_item

    def full(self) -> bool:
        with self._cond:
            return self._has_item

    def __len__(self) -> int:
        with self._cond:
            return 1 if self._has_item else 0

    def close(self) -> None:
        """Close the queue and wake all waiters."""
        with self._cond:
            if self._closed:
                return
            self._closed = True
            self._cond.notify_all()

    def __iter__(self) -> Iterator[T]:
        """Yield items until the queue is closed and drained."""
        while True:
            try:
                yield self.get()
            except QueueClosedError:
                return

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
