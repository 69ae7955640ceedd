"""Source folder size check that keeps an empty or unmounted source from wiping the destination."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional, Union

from ..config.settings import BYTES_IN_KB, DEFAULT_THRESHOLD_KB
from ..errors import ConfigurationError
from ..utils.file_utils import FileHelper

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SizeVerdict:
    """Outcome of a size check."""
    passed: bool
    size_kb: int
    recursive: bool = False

    def __bool__(self) -> bool:
        return self.passed


class SizeGuard:
    """Decide whether a source folder is big enough to sync from.

    The folder's own files are measured first. Only when they don't exceed
    the threshold is the whole tree walked.
    """

    def __init__(self, threshold_kb: int = DEFAULT_THRESHOLD_KB,
                 excluded_suffixes: Iterable[str] = (".ini",),
                 excluded_names: Iterable[str] = ("Thumbs.db",)):
        self.threshold_kb = threshold_kb
        self.excluded_suffixes = tuple(excluded_suffixes)
        self.excluded_names = tuple(excluded_names)

    def verify(self, path: Optional[Union[str, Path]]) -> SizeVerdict:
        """Check a folder against the size threshold.

        Args:
            path: Folder to measure; None fails the check

        Returns:
            Verdict with the measured size in KB

        Raises:
            ConfigurationError: If the folder is missing or can't be read
        """
        if path is None:
            logger.warning("No source folder given, refusing to sync")
            return SizeVerdict(passed=False, size_kb=0)

        directory = Path(path)
        if not directory.is_dir():
            raise ConfigurationError(f"Source folder not found: {directory}")

        size_kb = self.directory_size_kb(directory, recursive=False)
        logger.debug(f"{directory} holds {size_kb} KB at the top level")
        if size_kb > self.threshold_kb:
            return SizeVerdict(passed=True, size_kb=size_kb)

        size_kb = self.directory_size_kb(directory, recursive=True)
        logger.debug(f"{directory} holds {size_kb} KB in total")
        return SizeVerdict(passed=size_kb > self.threshold_kb, size_kb=size_kb, recursive=True)

    def directory_size_kb(self, directory: Path, recursive: bool) -> int:
        """Total size of the non-excluded files in KB (integer division)."""
        try:
            total_bytes = sum(
                size
                for name, size in FileHelper.iter_file_sizes(directory, recursive=recursive)
                if not FileHelper.is_excluded_file(name, self.excluded_suffixes, self.excluded_names)
            )
        except OSError as e:
            raise ConfigurationError(f"Could not measure {directory}: {e}") from e

        return total_bytes // BYTES_IN_KB
