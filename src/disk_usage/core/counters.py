"""Thread-safe aggregate counters for directory traversal.

This module provides the shared counter state mutated by both traversal
strategies:
- Folder, file and byte counters, each guarded by its own lock
- Independent atomic increments callable from many worker threads
- Explicit reset between runs (never implicit)
- Immutable snapshots for the reporting step

Counters carry no cross-counter ordering: the file and byte updates for one
file are two separate atomic operations.
"""

import threading

from disk_usage.types.models import UsageSnapshot


class _AtomicCounter:
    """Single integer guarded by a lock."""

    __slots__ = ("_lock", "_value")

    def __init__(self) -> None:
        self._value: int = 0
        self._lock: threading.Lock = threading.Lock()

    def add(self, amount: int = 1) -> None:
        with self._lock:
            self._value += amount

    def set(self, value: int) -> None:
        with self._lock:
            self._value = value

    @property
    def value(self) -> int:
        with self._lock:
            return self._value


class CounterState:
    """Folder, file and byte totals shared by a traversal.

    Created once per program run and passed to the walker explicitly. All
    mutating operations are atomic, so concurrent traversal tasks need no
    external locking.

    Example:
        >>> state = CounterState()
        >>> state.increment_folder()
        >>> state.increment_file()
        >>> state.add_bytes(250)
        >>> state.snapshot()
        UsageSnapshot(folders=1, files=1, bytes=250)
    """

    def __init__(self) -> None:
        self._folders: _AtomicCounter = _AtomicCounter()
        self._files: _AtomicCounter = _AtomicCounter()
        self._bytes: _AtomicCounter = _AtomicCounter()

    def reset(self) -> None:
        """Set all three counters back to zero.

        Must only be called while no traversal is in flight; a reset racing
        with concurrent increments is not guarded against.
        """
        self._bytes.set(0)
        self._files.set(0)
        self._folders.set(0)

    def increment_folder(self) -> None:
        self._folders.add()

    def increment_file(self) -> None:
        self._files.add()

    def add_bytes(self, amount: int) -> None:
        """Add a file's byte length to the byte counter.

        Args:
            amount: Number of bytes (must be non-negative)

        Raises:
            ValueError: If amount is negative
        """
        if amount < 0:
            msg = "amount must be non-negative"
            raise ValueError(msg)
        self._bytes.add(amount)

    @property
    def folder_count(self) -> int:
        return self._folders.value

    @property
    def file_count(self) -> int:
        return self._files.value

    @property
    def byte_count(self) -> int:
        return self._bytes.value

    def snapshot(self) -> UsageSnapshot:
        """Return the current totals.

        Only meaningful once a traversal call has returned; while tasks are
        still running the three values may be mutually inconsistent.

        Returns:
            Immutable (folders, files, bytes) snapshot
        """
        return UsageSnapshot(
            folders=self.folder_count,
            files=self.file_count,
            bytes=self.byte_count,
        )

    def __repr__(self) -> str:
        return (
            f"CounterState(folders={self.folder_count}, files={self.file_count}, "
            f"bytes={self.byte_count})"
        )
