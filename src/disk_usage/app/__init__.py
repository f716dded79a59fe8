"""Application module for disk-usage."""

from __future__ import annotations

from disk_usage.app.cli import cli
from disk_usage.app.runner import ApplicationRunner

__all__ = [
    "cli",
    "ApplicationRunner",
]
