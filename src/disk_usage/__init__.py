"""Disk Usage - Summarize folder, file and byte counts of a directory tree.

This package walks a directory tree either sequentially or with one
concurrent task per directory and reports the totals together with the
elapsed time of each traversal.
"""

from disk_usage.core.counters import CounterState
from disk_usage.core.traversal import DiskUsageWalker, TraversalError
from disk_usage.types.models import TraversalMode, UsageSnapshot

__all__ = [
    "CounterState",
    "DiskUsageWalker",
    "TraversalError",
    "TraversalMode",
    "UsageSnapshot",
]
