"""Application runner for disk-usage."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from pathlib import Path

import click

from disk_usage.core.config import MainConfig
from disk_usage.core.counters import CounterState
from disk_usage.core.filesystem import LocalFileSystem
from disk_usage.core.traversal import DiskUsageWalker
from disk_usage.types.models import RunResult, TraversalMode
from disk_usage.utils.formatting import format_directory_header, format_report
from disk_usage.utils.logging import log_with_context, run_label

logger = logging.getLogger(__name__)


class ApplicationRunner:
    """Times traversal runs and prints their summaries.

    ``BOTH`` runs the parallel walk, resets the shared counters, then runs
    the sequential walk, timing each independently. A failed run prints no
    summary; the error propagates to the caller.
    """

    def __init__(
        self,
        path: Path,
        mode: TraversalMode,
        config: MainConfig | None = None,
        echo: Callable[[str], None] = click.echo,
    ) -> None:
        """Initialize the application runner.

        Args:
            path: Root directory, already validated by the caller
            mode: Traversal mode to run
            config: Application configuration (defaults when omitted)
            echo: Output function receiving each printed block
        """
        self.path: Path = path
        self.mode: TraversalMode = mode
        self.config: MainConfig = config or MainConfig()
        self.echo: Callable[[str], None] = echo
        self.counters: CounterState = CounterState()
        self.walker: DiskUsageWalker = DiskUsageWalker(
            self.counters,
            LocalFileSystem(follow_symlinks=self.config.traversal.follow_symlinks),
        )

    def run(self) -> list[RunResult]:
        """Run the selected mode(s) and print a summary after each run.

        Returns:
            One result per executed run, in execution order

        Raises:
            OSError: If a sequential traversal fails
            TraversalError: If a parallel traversal fails
        """
        self.echo(format_directory_header(self.path))

        if self.mode is TraversalMode.BOTH:
            modes = (TraversalMode.PARALLEL, TraversalMode.SEQUENTIAL)
        else:
            modes = (self.mode,)

        results: list[RunResult] = []
        for mode in modes:
            # Every run starts from zero, including repeated calls to run()
            self.counters.reset()
            result = self.run_once(mode)
            self.echo(
                format_report(
                    result.snapshot,
                    result.elapsed_seconds,
                    result.mode,
                    human_readable=self.config.output.human_readable,
                )
            )
            results.append(result)

        return results

    def run_once(self, mode: TraversalMode) -> RunResult:
        """Time a single traversal and capture the counter snapshot.

        Args:
            mode: SEQUENTIAL or PARALLEL

        Returns:
            Snapshot and elapsed time of the run
        """
        with run_label(mode.value):
            log_with_context(logger, logging.INFO, "Traversal started", extra={"path": str(self.path)})

            start = time.perf_counter()
            try:
                self.walker.walk(self.path, mode)
            except Exception:
                # Reported to the user by the caller; full trace only at DEBUG
                logger.debug("Traversal failed", exc_info=True, extra={"path": str(self.path)})
                raise
            elapsed = time.perf_counter() - start

            snapshot = self.counters.snapshot()
            log_with_context(
                logger,
                logging.INFO,
                "Traversal finished",
                extra={
                    "folders": snapshot.folders,
                    "files": snapshot.files,
                    "bytes": snapshot.bytes,
                    "elapsed_seconds": elapsed,
                },
            )

        return RunResult(mode=mode, snapshot=snapshot, elapsed_seconds=elapsed)
