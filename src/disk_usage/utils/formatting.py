"""Pure formatting utilities for the traversal summary.

This module provides stateless formatting functions for converting raw
counter values and timings into the human-readable report. All functions are
pure with no side effects.
"""

import os
from typing import Final

from disk_usage.types.aliases import StrPath
from disk_usage.types.models import TraversalMode, UsageSnapshot

# Binary units (1024-based), largest first
_SIZE_UNITS: Final[tuple[tuple[str, int], ...]] = (
    ("TB", 1024**4),
    ("GB", 1024**3),
    ("MB", 1024**2),
    ("KB", 1024),
)

# Decimal places used for elapsed seconds
ELAPSED_PRECISION: Final[int] = 7


def format_size(bytes: int, *, precision: int = 1) -> str:
    """Convert bytes to human-readable size format.

    Uses binary units (1024-based). Terabyte values show one decimal place and
    the whole gigabyte count; smaller units are truncated to whole numbers.

    Args:
        bytes: Number of bytes to format (must be non-negative)
        precision: Number of decimal places for TB display (default: 1)

    Returns:
        Human-readable string representation of the size

    Raises:
        ValueError: If bytes is negative

    Examples:
        >>> format_size(512)
        '512 Bytes'
        >>> format_size(5242880)
        '5 MB'
        >>> format_size(2748779069440)
        '2.5 TB (2560 GB)'
    """
    if bytes < 0:
        msg = "bytes must be non-negative"
        raise ValueError(msg)

    for unit, factor in _SIZE_UNITS:
        if bytes < factor:
            continue
        if unit == "TB":
            total_gb = bytes // 1024**3
            return f"{total_gb / 1024:.{precision}f} TB ({total_gb} GB)"
        return f"{bytes // factor} {unit}"

    return f"{bytes} Bytes"


def format_count(value: int) -> str:
    """Format an integer count with thousands separators ('1,234,567')."""
    return f"{value:,}"


def format_elapsed(seconds: float) -> str:
    """Format elapsed wall-clock seconds with high precision.

    Args:
        seconds: Elapsed time in seconds (must be non-negative)

    Returns:
        Seconds with seven decimal places and an 's' suffix

    Raises:
        ValueError: If seconds is negative

    Examples:
        >>> format_elapsed(0.5)
        '0.5000000s'
        >>> format_elapsed(1234.5)
        '1,234.5000000s'
    """
    if seconds < 0:
        msg = "seconds must be non-negative"
        raise ValueError(msg)
    return f"{seconds:,.{ELAPSED_PRECISION}f}s"


def format_directory_header(path: StrPath) -> str:
    """Return the heading printed once before any summary."""
    return f"Directory: '{os.path.abspath(path)}':"


def format_report(
    snapshot: UsageSnapshot,
    elapsed_seconds: float,
    mode: TraversalMode,
    *,
    human_readable: bool = False,
) -> str:
    """Format the two-line summary for one completed traversal.

    Args:
        snapshot: Counter values read after the traversal returned
        elapsed_seconds: Wall-clock duration measured around the traversal
        mode: Strategy that produced the snapshot
        human_readable: Append a binary-unit size after the byte count

    Returns:
        Summary text without a trailing newline

    Examples:
        >>> print(format_report(UsageSnapshot(3, 2, 15), 0.25, TraversalMode.PARALLEL))
        Parallel Calculated in: 0.2500000s
        3 folders, 2 files, 15 bytes
    """
    timing_line = f"{mode.label} Calculated in: {format_elapsed(elapsed_seconds)}"
    counts_line = (
        f"{format_count(snapshot.folders)} folders, "
        f"{format_count(snapshot.files)} files, "
        f"{format_count(snapshot.bytes)} bytes"
    )
    if human_readable:
        counts_line += f" ({format_size(snapshot.bytes)})"
    return f"{timing_line}\n{counts_line}"
