"""Type definitions and protocols for disk-usage application.

This package provides:
- Data models (immutable dataclasses)
- Protocol definitions (structural subtyping interfaces)
- Type aliases (PEP 695 syntax)
"""

from disk_usage.types.aliases import (
    RawConfig,
    StrPath,
)
from disk_usage.types.models import (
    DirectoryListing,
    RunResult,
    TraversalMode,
    UsageSnapshot,
)
from disk_usage.types.protocols import (
    FileSystem,
)

__all__ = [
    # Type aliases
    "RawConfig",
    "StrPath",
    # Data models
    "DirectoryListing",
    "RunResult",
    "TraversalMode",
    "UsageSnapshot",
    # Protocols
    "FileSystem",
]
