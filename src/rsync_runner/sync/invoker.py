"""Launch the synchronization tool and report how it exited."""

import logging
import shlex
import subprocess
import sys
from dataclasses import dataclass
from typing import List, Union

from ..errors import LaunchError

logger = logging.getLogger(__name__)

TOOL_SUCCESS_CODE = 0


@dataclass(frozen=True)
class InvocationResult:
    """Exit status of one tool run."""
    exit_code: int

    @property
    def success(self) -> bool:
        return self.exit_code == TOOL_SUCCESS_CODE


class SyncInvoker:
    """Runs the tool in the foreground, sharing this process's console."""

    def __init__(self, platform: str = sys.platform):
        self.platform = platform

    def build_command(self, executable_path: str, flags: str, to_arg: str,
                      from_arg: str) -> Union[str, List[str]]:
        """Assemble `<exe> <flags> "<from>" "<to>"`.

        On Windows the command line is handed to the process verbatim, the
        same way the tool would see it from a shell. Elsewhere the flags are
        split shell-style and each path stays a single argument.

        Raises:
            ValueError: If the flags text has unbalanced quotes
        """
        if self.platform == 'win32':
            return f'{subprocess.list2cmdline([executable_path])} {flags} "{from_arg}" "{to_arg}"'
        return [executable_path, *shlex.split(flags), from_arg, to_arg]

    def run(self, executable_path: str, flags: str, to_arg: str, from_arg: str) -> int:
        """Start the tool and block until it exits.

        Args:
            executable_path: Tool executable
            flags: Raw flag text, passed through unchecked
            to_arg: Destination argument for the tool
            from_arg: Source argument for the tool

        Returns:
            The tool's exit code, unmodified

        Raises:
            LaunchError: If the tool could not be started
        """
        try:
            command = self.build_command(executable_path, flags, to_arg, from_arg)
            logger.debug(f"Launching: {command}")
            with subprocess.Popen(command) as process:
                exit_code = process.wait()
        except (OSError, ValueError) as e:
            logger.error(f"The following error occurred when launching {executable_path}: {e}")
            raise LaunchError(f"Could not launch {executable_path}: {e}",
                              executable=executable_path) from e

        logger.info(f"{executable_path} exited with code {exit_code}")
        return exit_code

    def invoke(self, executable_path: str, flags: str, to_arg: str, from_arg: str) -> InvocationResult:
        """Same as run(), wrapped in an InvocationResult."""
        return InvocationResult(self.run(executable_path, flags, to_arg, from_arg))
