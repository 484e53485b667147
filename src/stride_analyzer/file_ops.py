"""
Safe file operations for Stride Analyzer.

Provides size-limited, deadline-bounded line reading. Works from worker
threads, so time limits are checked between lines instead of with signals.
"""

import time
from collections.abc import Generator
from pathlib import Path
from typing import Optional

from .exceptions import FileAccessError

# Bytes inspected when sniffing for binary content
SNIFF_BYTES = 8192

# Lines read between deadline checks
_DEADLINE_CHECK_INTERVAL = 256


class Deadline:
    """A monotonic-clock deadline; ``None`` seconds means no limit."""

    def __init__(self, seconds: Optional[float]):
        self.seconds = seconds
        self._expires_at = None if seconds is None else time.monotonic() + seconds

    @property
    def expired(self) -> bool:
        return self._expires_at is not None and time.monotonic() >= self._expires_at

    def remaining(self) -> Optional[float]:
        """Seconds left, floored at 0, or None for no limit."""
        if self._expires_at is None:
            return None
        return max(0.0, self._expires_at - time.monotonic())


def is_binary(filepath: Path) -> bool:
    """Check for a NUL byte in the first block of the file.

    Raises:
        FileAccessError: If the file cannot be opened
    """
    try:
        with open(filepath, "rb") as f:
            return b"\x00" in f.read(SNIFF_BYTES)
    except OSError as e:
        raise FileAccessError(filepath, f"OS error: {e}")


def safe_iter_lines(
    filepath: Path,
    max_bytes: Optional[int] = None,
    timeout_seconds: Optional[float] = None,
    encoding: str = "utf-8",
) -> Generator[str, None, None]:
    """
    Yield the physical lines of a text file without line terminators.

    The file handle is held only while the generator runs and is closed on
    every exit path, including errors raised here and ``close()`` from the
    consumer.

    Args:
        filepath: File to read
        max_bytes: Reject files larger than this (None = unlimited)
        timeout_seconds: Abandon reading after this long (None = unlimited)
        encoding: Text encoding, decoded strictly

    Yields:
        One line at a time

    Raises:
        FileAccessError: If the file is too large, binary, undecodable,
            unreadable, or the deadline passes
    """
    try:
        size = filepath.stat().st_size
    except OSError as e:
        raise FileAccessError(filepath, f"OS error: {e}")

    if max_bytes is not None and size > max_bytes:
        raise FileAccessError(filepath, f"File size {size} exceeds limit {max_bytes}")

    if is_binary(filepath):
        raise FileAccessError(filepath, "Binary content")

    deadline = Deadline(timeout_seconds)
    try:
        with open(filepath, encoding=encoding, errors="strict", newline=None) as f:
            for count, line in enumerate(f, start=1):
                if count % _DEADLINE_CHECK_INTERVAL == 0 and deadline.expired:
                    raise FileAccessError(
                        filepath, f"Read operation timed out after {timeout_seconds}s"
                    )
                yield line.rstrip("\r\n")
    except UnicodeDecodeError as e:
        raise FileAccessError(filepath, f"Encoding error: {e}")
    except OSError as e:
        raise FileAccessError(filepath, f"OS error: {e}")
