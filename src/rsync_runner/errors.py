"""Exception hierarchy for the rsync runner."""

from typing import Optional


class RunnerError(Exception):
    """Base class for all runner failures."""


class ConfigurationError(RunnerError):
    """Arguments, options or the source directory are unusable."""


class GuardFailure(RunnerError):
    """The source directory is below the size threshold."""


class LaunchError(RunnerError):
    """The synchronization tool could not be started."""

    def __init__(self, message: str, executable: Optional[str] = None):
        super().__init__(message)
        self.executable = executable


class AbnormalExitError(RunnerError):
    """The synchronization tool exited with a non-zero status."""

    def __init__(self, message: str, exit_code: int):
        super().__init__(message)
        self.exit_code = exit_code


class LogIOError(RunnerError):
    """Reading, appending or truncating a log file failed."""
