"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import logging
from collections.abc import Generator
from pathlib import Path

import pytest

from disk_usage.core.counters import CounterState
from disk_usage.core.traversal import DiskUsageWalker
from tests.fixtures.filesystem_fixtures import SAMPLE_TREE, build_tree


@pytest.fixture
def counters() -> CounterState:
    """Provide a fresh counter state."""
    return CounterState()


@pytest.fixture
def walker(counters: CounterState) -> DiskUsageWalker:
    """Provide a walker over the local filesystem bound to ``counters``."""
    return DiskUsageWalker(counters)


@pytest.fixture
def sample_tree(tmp_path: Path) -> Path:
    """Create SAMPLE_TREE on disk and return its root."""
    root = tmp_path / "sample"
    root.mkdir()
    build_tree(root, SAMPLE_TREE)
    return root


@pytest.fixture(autouse=True)
def reset_root_logger() -> Generator[None, None, None]:
    """Restore root logger handlers and level changed by configure_logging."""
    root_logger = logging.getLogger()
    handlers = list(root_logger.handlers)
    level = root_logger.level
    yield
    root_logger.handlers[:] = handlers
    root_logger.setLevel(level)
