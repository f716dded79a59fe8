"""Shared utility modules for common operations.

This package provides:
- Pure, stateless formatting functions for the traversal summary
- Logging setup with run-label tracking
"""

from disk_usage.utils.formatting import (
    format_count,
    format_directory_header,
    format_elapsed,
    format_report,
    format_size,
)

__all__ = [
    "format_count",
    "format_directory_header",
    "format_elapsed",
    "format_report",
    "format_size",
]
