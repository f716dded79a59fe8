"""Application entry point for disk-usage.

Allows running the CLI as ``python -m disk_usage``; the installed ``du``
console script points here as well.
"""

from disk_usage.app.cli import cli

__all__ = ["main"]


def main() -> None:
    """Run the ``du`` command.

    Exit Codes:
        0: Success
        1: Missing mode flag or path, extra arguments, bad option values
        2: Path is not an existing directory
        3: Unrecognized flag
        4: Traversal aborted by a filesystem error
        5: Configuration error
    """
    cli(prog_name="du")


if __name__ == "__main__":
    main()
