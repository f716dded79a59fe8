"""Directory tree traversal with sequential and parallel strategies.

This module provides the traversal engine that feeds ``CounterState``:
- Sequential depth-first walk running entirely in the calling thread
- Parallel walk spawning one asyncio task per directory, with the blocking
  listing work offloaded to the default thread pool via asyncio.to_thread
- A single structured join (nested asyncio.TaskGroup) over the whole tree
- Uniform listing failure policy: access-denied is swallowed, every other
  error aborts the traversal

Both strategies produce identical totals for the same tree; only timing and
scheduling differ.
"""

import asyncio
import logging
import os
from collections.abc import Iterable, Iterator

from disk_usage.core.counters import CounterState
from disk_usage.core.filesystem import LocalFileSystem
from disk_usage.types.aliases import StrPath
from disk_usage.types.models import TraversalMode
from disk_usage.types.protocols import FileSystem

logger = logging.getLogger(__name__)


class TraversalError(Exception):
    """Raised when a parallel traversal is aborted by one or more errors.

    Every failure collected from the concurrent tasks is kept in ``errors``;
    the original exception (group) is chained as ``__cause__``.
    """

    def __init__(self, root: str, errors: list[BaseException]) -> None:
        self.root: str = root
        self.errors: list[BaseException] = errors
        details = "; ".join(f"{type(error).__name__}: {error}" for error in errors)
        super().__init__(f"Traversal of {root} failed with {len(errors)} error(s): {details}")


class DiskUsageWalker:
    """Walks a directory tree and accumulates totals into a ``CounterState``.

    The counter state is injected, never global: the caller owns it, reads it
    with ``snapshot()`` after a walk returns, and resets it between runs.
    """

    def __init__(
        self,
        counters: CounterState,
        filesystem: FileSystem | None = None,
    ) -> None:
        """Initialize the walker.

        Args:
            counters: Shared counter state mutated by every walk
            filesystem: Listing capability (defaults to the local disk)
        """
        self.counters: CounterState = counters
        self.filesystem: FileSystem = filesystem or LocalFileSystem()

    def walk(self, path: StrPath, mode: TraversalMode) -> None:
        """Run a single traversal with the given strategy.

        Args:
            path: Root directory
            mode: SEQUENTIAL or PARALLEL

        Raises:
            ValueError: If mode is BOTH (a runner-level composition)
        """
        match mode:
            case TraversalMode.SEQUENTIAL:
                self.walk_sequential(path)
            case TraversalMode.PARALLEL:
                self.walk_parallel(path)
            case _:
                msg = f"Walker cannot run composite mode: {mode}"
                raise ValueError(msg)

    def walk_sequential(self, path: StrPath) -> None:
        """Walk the tree depth-first in the calling thread.

        Subdirectories are visited in listing order, each subtree completed
        before its next sibling. An explicit stack replaces recursion so
        tree depth is not bounded by the interpreter recursion limit.

        Args:
            path: Root directory (validated by the caller)

        Raises:
            OSError: On any listing error other than access-denied, or any
                file size query error
        """
        stack: list[str] = [os.fspath(path)]
        while stack:
            current = stack.pop()
            subdirectories = self._count_directory(current)
            stack.extend(reversed(subdirectories))

    def walk_parallel(self, path: StrPath) -> None:
        """Walk the tree with one concurrent task per directory.

        Blocks until every task spawned for the subtree has finished. Must
        not be called from a running event loop; use
        ``walk_parallel_async`` there.

        Args:
            path: Root directory (validated by the caller)

        Raises:
            TraversalError: If any task hit a non-swallowed error
        """
        asyncio.run(self.walk_parallel_async(path))

    async def walk_parallel_async(self, path: StrPath) -> None:
        """Awaitable form of ``walk_parallel``.

        Args:
            path: Root directory (validated by the caller)

        Raises:
            TraversalError: If any task hit a non-swallowed error
        """
        root = os.fspath(path)
        try:
            await self._walk_task(root)
        except Exception as exc:
            errors = list(_flatten_exceptions([exc]))
            logger.debug(
                "Parallel traversal aborted",
                extra={"path": root, "error_count": len(errors)},
            )
            raise TraversalError(root, errors) from exc

    async def _walk_task(self, path: str) -> None:
        subdirectories = await asyncio.to_thread(self._count_directory, path)
        if not subdirectories:
            return

        # Children join here; a failing child cancels its siblings and the
        # error propagates up through every enclosing group.
        async with asyncio.TaskGroup() as task_group:
            for subdirectory in subdirectories:
                _ = task_group.create_task(self._walk_task(subdirectory))

    def _count_directory(self, path: str) -> tuple[str, ...]:
        """Count one directory and its immediate files.

        Returns:
            Immediate subdirectories still to be walked
        """
        self.counters.increment_folder()

        try:
            listing = self.filesystem.list_directory(path)
        except PermissionError:
            logger.debug(
                "Access denied listing directory, treating as empty",
                extra={"path": path},
            )
            return ()

        for file_path in listing.files:
            self.counters.increment_file()
            self.counters.add_bytes(self.filesystem.file_size(file_path))

        return listing.directories


def _flatten_exceptions(exceptions: Iterable[BaseException]) -> Iterator[BaseException]:
    """Yield leaf exceptions from a (possibly nested) exception group hierarchy."""
    for exc in exceptions:
        if isinstance(exc, BaseExceptionGroup):
            yield from _flatten_exceptions(exc.exceptions)
        else:
            yield exc
