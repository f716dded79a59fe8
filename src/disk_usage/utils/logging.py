"""Logging infrastructure with run-label tracking.

This module provides the logging setup for the disk-usage application:
console output on stderr (stdout is reserved for the summary), and a run
label stored in a ContextVar so every record emitted during a timed run,
including records from parallel traversal tasks and their worker threads,
names the strategy that produced it.
"""

import contextvars
import logging
import sys
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from typing import Final, TextIO

from typing_extensions import override

# Run label context variable
# Copied into asyncio tasks and asyncio.to_thread workers automatically
run_label_var: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "run_label",
    default=None,
)

DEFAULT_LOG_FORMAT: Final[str] = "%(asctime)s - %(name)s - %(levelname)s - [%(run_label)s] - %(message)s"


class RunLabelFilter(logging.Filter):
    """Logging filter that adds the current run label to log records."""

    @override
    def filter(self, record: logging.LogRecord) -> bool:
        """Add run label to log record from ContextVar.

        Args:
            record: Log record to enhance with the run label

        Returns:
            True to allow the record to be logged
        """
        run_label = run_label_var.get()
        record.run_label = run_label if run_label is not None else "-"
        return True


def configure_logging(
    *,
    log_level: str = "WARNING",
    enable_console: bool = True,
    stream: TextIO | None = None,
) -> None:
    """Configure application logging.

    Replaces any handlers on the root logger so repeated calls (for example
    from tests invoking the CLI several times) do not duplicate output.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        enable_console: Enable the console handler
        stream: Console stream (defaults to sys.stderr)

    Example:
        >>> configure_logging(log_level="DEBUG")
        >>> logger = logging.getLogger(__name__)
        >>> with run_label("parallel"):
        ...     logger.info("Traversal started")
    """
    root_logger = logging.getLogger()

    level = getattr(logging, log_level.upper(), logging.WARNING)
    root_logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    root_logger.handlers.clear()

    if enable_console:
        console_handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
        console_handler.setFormatter(logging.Formatter(DEFAULT_LOG_FORMAT))
        console_handler.addFilter(RunLabelFilter())
        root_logger.addHandler(console_handler)


def get_run_label() -> str | None:
    """Get the current run label from context."""
    return run_label_var.get()


@contextmanager
def run_label(label: str) -> Iterator[None]:
    """Set the run label for the duration of the block.

    Args:
        label: Label attached to every record logged inside the block

    Yields:
        None
    """
    token = run_label_var.set(label)
    try:
        yield
    finally:
        run_label_var.reset(token)


def log_with_context(
    logger: logging.Logger,
    level: int,
    message: str,
    *,
    extra: Mapping[str, object] | None = None,
) -> None:
    """Log a message with additional context fields.

    Args:
        logger: Logger instance to use
        level: Logging level (e.g., logging.INFO)
        message: Log message
        extra: Additional context fields to include in log

    Example:
        >>> log_with_context(
        ...     logger,
        ...     logging.INFO,
        ...     "Traversal finished",
        ...     extra={"folders": 12, "elapsed_seconds": 0.04},
        ... )
    """
    context = dict(extra) if extra else {}

    label = get_run_label()
    if label:
        context["mode"] = label

    logger.log(level, message, extra=context)
