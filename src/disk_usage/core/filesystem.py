"""Local filesystem access for directory traversal."""

from __future__ import annotations

import os

from disk_usage.types.models import DirectoryListing


class LocalFileSystem:
    """Directory listing and file size queries against the local disk.

    Entries are classified from ``os.scandir`` results:
    - Regular files are reported as files
    - Directories are reported as subdirectories
    - Sockets, pipes and device nodes are ignored

    Symlinks are skipped unless ``follow_symlinks`` is set, in which case
    they are classified by their target. Following symlinks performs no
    loop detection.
    """

    def __init__(self, follow_symlinks: bool = False) -> None:
        """Initialize the filesystem adapter.

        Args:
            follow_symlinks: Whether symlinks are classified by their target
        """
        self.follow_symlinks: bool = follow_symlinks

    def list_directory(self, path: str) -> DirectoryListing:
        """List the immediate files and subdirectories of ``path``.

        Args:
            path: Directory to enumerate

        Returns:
            Listing in the order reported by the operating system

        Raises:
            PermissionError: If the directory cannot be enumerated
            OSError: For any other enumeration failure
        """
        files: list[str] = []
        directories: list[str] = []

        with os.scandir(path) as entries:
            for entry in entries:
                if entry.is_symlink() and not self.follow_symlinks:
                    continue
                # Dangling symlinks report False for both checks
                if entry.is_dir():
                    directories.append(entry.path)
                elif entry.is_file():
                    files.append(entry.path)

        return DirectoryListing(files=tuple(files), directories=tuple(directories))

    def file_size(self, path: str) -> int:
        """Return the apparent size of a file in bytes.

        Args:
            path: File path

        Returns:
            Size in bytes

        Raises:
            OSError: If the file cannot be queried
        """
        return os.stat(path, follow_symlinks=self.follow_symlinks).st_size
