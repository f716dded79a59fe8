"""Data models for disk-usage application.

This module defines immutable dataclasses and enums used throughout the
application for type-safe data transfer between components.
"""

from collections.abc import Iterator
from dataclasses import dataclass
from enum import StrEnum


class TraversalMode(StrEnum):
    """Traversal strategy selected by the caller.

    ``BOTH`` is a runner-level composition (parallel, reset, sequential) and
    is never handed to the walker itself.
    """

    SEQUENTIAL = "sequential"
    PARALLEL = "parallel"
    BOTH = "both"

    @property
    def label(self) -> str:
        """Capitalized name used in report headings."""
        return self.value.capitalize()


@dataclass(frozen=True, slots=True)
class UsageSnapshot:
    """Point-in-time copy of the three traversal counters.

    Unpacks as ``folders, files, bytes_ = snapshot``.
    """

    folders: int
    files: int
    bytes: int

    def __iter__(self) -> Iterator[int]:
        yield self.folders
        yield self.files
        yield self.bytes


@dataclass(frozen=True, slots=True)
class RunResult:
    """Outcome of one timed traversal run."""

    mode: TraversalMode
    snapshot: UsageSnapshot
    elapsed_seconds: float


@dataclass(frozen=True, slots=True)
class DirectoryListing:
    """Immediate children of a single directory.

    Files and subdirectories keep the order reported by the filesystem.
    """

    files: tuple[str, ...] = ()
    directories: tuple[str, ...] = ()
