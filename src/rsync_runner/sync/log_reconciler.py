"""Move deletion records from the tool's transfer log into a clean log."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union

logger = logging.getLogger(__name__)

DELETION_MARKER = "deleting"

# Undecodable bytes in file names survive the round trip
LOG_ENCODING = "utf-8"
LOG_ERRORS = "surrogateescape"


@dataclass(frozen=True)
class ReconcileResult:
    """Outcome of one reconciliation pass."""
    success: bool
    lines_retained: int = 0
    error: Optional[str] = None

    def __bool__(self) -> bool:
        return self.success


class LogReconciler:
    """Keep only deletion lines from the tool log and empty it afterwards."""

    def __init__(self, marker: str = DELETION_MARKER):
        self.marker = marker.lower()

    def is_retained(self, line: str) -> bool:
        return self.marker in line.lower()

    def read_retained_lines(self, tool_log_path: Path) -> List[str]:
        """Read the whole tool log and return the matching lines in order."""
        with open(tool_log_path, 'r', encoding=LOG_ENCODING, errors=LOG_ERRORS, newline='') as f:
            return [
                line.rstrip('\r\n')
                for line in f
                if self.is_retained(line)
            ]

    def reconcile(self, tool_log_path: Union[str, Path],
                  clean_log_path: Union[str, Path]) -> ReconcileResult:
        """Append deletion lines to the clean log and truncate the tool log.

        The tool log is fully read and closed before it is reopened for
        truncation. A failure before the append leaves both files untouched;
        a failure between append and truncate leaves the lines to be
        appended again by the next run.

        Args:
            tool_log_path: Transfer log written by the tool
            clean_log_path: Append-only log of deletions (created if absent)

        Returns:
            Result carrying the number of retained lines, or the I/O error
        """
        tool_log_path = Path(tool_log_path)
        clean_log_path = Path(clean_log_path)

        try:
            keep_lines = self.read_retained_lines(tool_log_path)

            with open(clean_log_path, 'a', encoding=LOG_ENCODING, errors=LOG_ERRORS) as clean_log:
                for line in keep_lines:
                    clean_log.write(line + '\n')

            # Opening for writing is enough to empty the file
            with open(tool_log_path, 'w', encoding=LOG_ENCODING):
                pass

        except OSError as e:
            logger.error(f"The following error occurred while cleaning up logs: {e}")
            return ReconcileResult(success=False, error=str(e))

        logger.info(f"Moved {len(keep_lines)} deletion records from {tool_log_path} to {clean_log_path}")
        return ReconcileResult(success=True, lines_retained=len(keep_lines))
