"""File utility functions."""

import os
from pathlib import Path
from typing import Iterable, Iterator, Tuple


class FileHelper:
    """Helper class for file operations."""

    @staticmethod
    def format_file_size(size_bytes: int) -> str:
        """Format file size in human readable format.

        Args:
            size_bytes: Size in bytes

        Returns:
            Formatted size string
        """
        if size_bytes == 0:
            return "0 B"

        size_names = ["B", "KB", "MB", "GB", "TB", "PB"]
        i = 0

        while size_bytes >= 1024 and i < len(size_names) - 1:
            size_bytes /= 1024.0
            i += 1

        return f"{size_bytes:.1f} {size_names[i]}"

    @staticmethod
    def is_excluded_file(file_name: str, excluded_suffixes: Iterable[str],
                         excluded_names: Iterable[str]) -> bool:
        """Check if a file is desktop metadata that shouldn't count toward a folder's size.

        Args:
            file_name: Bare file name
            excluded_suffixes: Endings such as '.ini'
            excluded_names: Exact names such as 'Thumbs.db'

        Returns:
            True if the file should be ignored
        """
        file_name_lower = file_name.lower()

        if any(file_name_lower.endswith(suffix.lower()) for suffix in excluded_suffixes):
            return True

        return file_name_lower in {name.lower() for name in excluded_names}

    @staticmethod
    def iter_file_sizes(directory: Path, recursive: bool = False) -> Iterator[Tuple[str, int]]:
        """Yield (file name, size in bytes) for regular files below a directory.

        Args:
            directory: Directory to scan
            recursive: Descend into every subdirectory when True

        Raises:
            OSError: If the directory or any subdirectory can't be read
        """
        if not recursive:
            with os.scandir(directory) as entries:
                for entry in entries:
                    if entry.is_file():
                        yield entry.name, entry.stat().st_size
            return

        def _raise(error: OSError):
            raise error

        for root, _dirs, files in os.walk(directory, onerror=_raise):
            for name in files:
                file_path = os.path.join(root, name)
                if os.path.isfile(file_path):
                    yield name, os.path.getsize(file_path)
