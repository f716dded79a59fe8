"""Traversal engine, counter state and configuration."""

from disk_usage.core.counters import CounterState
from disk_usage.core.filesystem import LocalFileSystem
from disk_usage.core.traversal import DiskUsageWalker, TraversalError

__all__ = [
    "CounterState",
    "DiskUsageWalker",
    "LocalFileSystem",
    "TraversalError",
]
