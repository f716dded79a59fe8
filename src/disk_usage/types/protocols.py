"""Protocol definitions for component interfaces.

This module defines structural subtyping protocols that establish
contracts for core application components without requiring inheritance.
"""

from typing import Protocol, runtime_checkable

from disk_usage.types.models import DirectoryListing


@runtime_checkable
class FileSystem(Protocol):
    """Protocol for the directory-listing capability consumed by the walker.

    Implementations report access-denied listings by raising
    ``PermissionError``; every other failure is some other ``OSError``.
    """

    def list_directory(self, path: str) -> DirectoryListing:
        """List the immediate files and subdirectories of a directory.

        Args:
            path: Directory to enumerate

        Returns:
            Listing of child file paths and child directory paths

        Raises:
            PermissionError: If the process may not enumerate the directory
            OSError: For any other enumeration failure
        """
        ...

    def file_size(self, path: str) -> int:
        """Return the byte length of a single file.

        Args:
            path: File path previously returned by ``list_directory``

        Returns:
            Non-negative size in bytes

        Raises:
            OSError: If the file cannot be queried (e.g. it vanished)
        """
        ...
