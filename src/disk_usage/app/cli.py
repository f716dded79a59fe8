"""Command-line interface for disk-usage."""

from __future__ import annotations

from pathlib import Path
from typing import Final, NoReturn

from typing_extensions import override

import click

from disk_usage.app.runner import ApplicationRunner
from disk_usage.core.config import VALID_LOG_LEVELS, ConfigurationError, load_config
from disk_usage.core.traversal import TraversalError
from disk_usage.types.models import TraversalMode
from disk_usage.utils.logging import configure_logging

# Exit codes
EXIT_SUCCESS: Final[int] = 0
EXIT_USAGE: Final[int] = 1
EXIT_MISSING_DIRECTORY: Final[int] = 2
EXIT_UNKNOWN_FLAG: Final[int] = 3
EXIT_TRAVERSAL_ERROR: Final[int] = 4
EXIT_CONFIG_ERROR: Final[int] = 5

USAGE_MESSAGE: Final[str] = (
    "Usage: du [-s] [-p] [-b] <path>\n"
    "Summarize disk usage of the set of FILES, recursively for directories.\n"
    "You MUST specify one of the parameters, -s, -p, or -b\n"
    "-s\tRun in single threaded mode\n"
    "-p\tRun in parallel mode (uses all available processors)\n"
    "-b\tRun in both parallel and single threaded mode.\n"
    "\tRuns parallel followed by sequential mode"
)


class DiskUsageCommand(click.Command):
    """Command that answers every parse error with the du usage text.

    Unrecognized flags exit with EXIT_UNKNOWN_FLAG; any other usage error
    (extra arguments, bad option values) exits with EXIT_USAGE.
    """

    @override
    def parse_args(self, ctx: click.Context, args: list[str]) -> list[str]:
        try:
            return super().parse_args(ctx, args)
        except click.UsageError as exc:
            click.echo(f"Error: {exc.format_message()}", err=True)
            usage_exit(ctx, EXIT_UNKNOWN_FLAG if isinstance(exc, click.NoSuchOption) else EXIT_USAGE)


def validate_log_level(
    ctx: click.Context,  # pyright: ignore[reportUnusedParameter] # required by Click callback signature
    param: click.Parameter,  # pyright: ignore[reportUnusedParameter] # required by Click callback signature
    value: str | None,
) -> str | None:
    """Validate and normalize log level.

    Args:
        ctx: Click context (required by Click callback signature)
        param: Click parameter (required by Click callback signature)
        value: Log level value to validate

    Returns:
        Normalized log level (uppercase)

    Raises:
        click.BadParameter: If validation fails
    """
    if value is None:
        return value

    normalized_value = value.upper().strip()
    if normalized_value not in VALID_LOG_LEVELS:
        raise click.BadParameter(
            f'Invalid log level "{value}". Valid options: {", ".join(sorted(VALID_LOG_LEVELS))}'
        )

    return normalized_value


def select_mode(sequential: bool, parallel: bool, both: bool) -> TraversalMode | None:
    """Return the single selected mode, or None unless exactly one flag is set."""
    selected = [
        mode
        for flag, mode in (
            (sequential, TraversalMode.SEQUENTIAL),
            (parallel, TraversalMode.PARALLEL),
            (both, TraversalMode.BOTH),
        )
        if flag
    ]
    return selected[0] if len(selected) == 1 else None


def usage_exit(ctx: click.Context, exit_code: int) -> NoReturn:
    click.echo(USAGE_MESSAGE)
    ctx.exit(exit_code)


@click.command(cls=DiskUsageCommand)
@click.option("-s", "--sequential", is_flag=True, help="Run in single threaded mode")
@click.option("-p", "--parallel", is_flag=True, help="Run in parallel mode (one task per directory)")
@click.option("-b", "--both", is_flag=True, help="Run parallel mode followed by sequential mode")
@click.option(
    "--human-readable",
    "-H",
    is_flag=True,
    help="Append a KB/MB/GB/TB size after the byte count",
)
@click.option(
    "--config",
    "-c",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="YAML configuration file (defaults to $DU_CONFIG when set)",
)
@click.option(
    "--log-level",
    "-l",
    type=str,
    default=None,
    callback=validate_log_level,
    help="Logging verbosity level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
)
@click.argument("path", type=click.Path(path_type=Path), required=False)
@click.version_option(package_name="disk-usage", prog_name="du")
@click.pass_context
def cli(
    ctx: click.Context,
    sequential: bool,
    parallel: bool,
    both: bool,
    human_readable: bool,
    config: Path | None,
    log_level: str | None,
    path: Path | None,
) -> None:
    """Summarize disk usage of a directory tree.

    Counts folders, files and bytes below PATH and reports how long the
    traversal took.

    Examples:

        # Single threaded traversal
        du -s /var/log

        # One concurrent task per directory
        du -p ~/projects

        # Parallel then sequential, timing each
        du -b --human-readable /srv
    """
    mode = select_mode(sequential, parallel, both)
    if mode is None or path is None:
        usage_exit(ctx, EXIT_USAGE)

    if not path.is_dir():
        usage_exit(ctx, EXIT_MISSING_DIRECTORY)

    try:
        app_config = load_config(config)
        if log_level is not None:
            app_config.logging.level = log_level
    except ConfigurationError as exc:
        click.echo(f"Configuration error:\n{exc}", err=True)
        ctx.exit(EXIT_CONFIG_ERROR)

    if human_readable:
        app_config.output.human_readable = True

    configure_logging(log_level=app_config.logging.level)

    runner = ApplicationRunner(path=path, mode=mode, config=app_config)
    try:
        _ = runner.run()
    except (OSError, TraversalError) as exc:
        click.echo(f"Error: {exc}", err=True)
        ctx.exit(EXIT_TRAVERSAL_ERROR)
