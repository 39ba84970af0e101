"""Configuration for the tailer package."""

import os
from dataclasses import dataclass
from typing import Optional


DEFAULT_CHUNK_SIZE = 32 * 1024


@dataclass
class WatcherConfig:
    """
    Configuration options for a file watcher.
    
    Attributes:
        poll_interval: Seconds between background polls. None selects pull-only mode.
        chunk_size: Buffer size used when reading a delta
        join_timeout: Seconds to wait for the background thread on stop
    """
    poll_interval: Optional[float] = None
    chunk_size: int = DEFAULT_CHUNK_SIZE
    join_timeout: float = 2.0

    def __post_init__(self):
        if self.poll_interval is not None:
            if isinstance(self.poll_interval, bool) or not isinstance(self.poll_interval, (int, float)):
                raise ValueError(f"poll_interval must be a number of seconds: {self.poll_interval!r}")
            if self.poll_interval <= 0:
                raise ValueError(f"poll_interval must be positive: {self.poll_interval}")
        if self.chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive: {self.chunk_size}")
        if self.join_timeout < 0:
            raise ValueError(f"join_timeout must not be negative: {self.join_timeout}")

    @property
    def push_mode(self) -> bool:
        """Whether a background monitor delivers bytes through queues."""
        return self.poll_interval is not None

    @classmethod
    def from_env(cls, prefix: str = "TAILER_", **overrides) -> "WatcherConfig":
        """
        Build a config from environment variables.
        
        Reads ``<prefix>POLL_INTERVAL`` and ``<prefix>CHUNK_SIZE``. Keyword
        overrides take precedence over the environment.
        
        Args:
            prefix: Environment variable prefix
            **overrides: Explicit field values
            
        Returns:
            A validated WatcherConfig
        """
        values = {}
        interval = os.environ.get(f"{prefix}POLL_INTERVAL")
        if interval:
            values["poll_interval"] = float(interval)
        chunk_size = os.environ.get(f"{prefix}CHUNK_SIZE")
        if chunk_size:
            values["chunk_size"] = int(chunk_size)
        values.update(overrides)
        return cls(**values)
