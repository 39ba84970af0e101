"""Shared fixtures for tailer tests."""

import os
from pathlib import Path

import pytest


def append_bytes(path: Path, data: bytes) -> None:
    """Append data and make sure the file's mtime strictly advances."""
    before = os.stat(path).st_mtime_ns
    with open(path, "ab") as f:
        f.write(data)
    after = os.stat(path).st_mtime_ns
    if after <= before:
        os.utime(path, ns=(after, before + 1_000_000))


@pytest.fixture
def append():
    return append_bytes


@pytest.fixture
def log_file(tmp_path):
    path = tmp_path / "app.log"
    path.write_bytes(b"")
    return path


class FlakyHandle:
    """File handle stand-in that returns one chunk then fails."""

    def __init__(self, chunk: bytes):
        self.chunk = chunk
        self.reads = 0
        self.seeked_to = None

    def seek(self, offset):
        self.seeked_to = offset

    def read(self, size=-1):
        self.reads += 1
        if self.reads == 1:
            return self.chunk
        raise OSError(5, "Input/output error")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        return False


@pytest.fixture
def flaky_open(monkeypatch):
    """Make the cursor's open() yield a handle that fails after one chunk."""
    handles = []

    def install(chunk: bytes = b"partial"):
        def fake_open(path, mode="r", *args, **kwargs):
            handle = FlakyHandle(chunk)
            handles.append(handle)
            return handle

        monkeypatch.setattr("src.tailer.cursor.open", fake_open, raising=False)
        return handles

    return install
