"""Run the size check, the tool and the log cleanup in order."""

import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional

from ..config.settings import BYTES_IN_KB, InvocationSettings, RunnerOptions
from ..errors import AbnormalExitError, GuardFailure, LaunchError, LogIOError, RunnerError
from ..guard.size_guard import SizeGuard
from ..utils.console import APP_TITLE
from ..utils.file_utils import FileHelper
from ..utils.logging import TimedOperation
from .invoker import SyncInvoker
from .log_reconciler import LogReconciler

logger = logging.getLogger(__name__)

SUCCESS_CODE = 0
ERROR_CODE = 1


class RunStage(str, Enum):
    """States of a single run."""
    START = "start"
    SIZE_CHECK = "size_check"
    SYNCING = "syncing"
    LOG_CLEANUP = "log_cleanup"
    DONE = "done"
    FAILED = "failed"


@dataclass
class RunStatus:
    """Terminal outcome of a run."""
    stage: RunStage
    failed_stage: Optional[RunStage] = None
    reason: Optional[str] = None
    error: Optional[RunnerError] = None
    history: List[RunStage] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return self.stage == RunStage.DONE

    @property
    def exit_code(self) -> int:
        return SUCCESS_CODE if self.success else ERROR_CODE

    def raise_for_status(self):
        """Raise the failure's error, if the run failed."""
        if self.error is not None:
            raise self.error


class Orchestrator:
    """Moves one run through Start, SizeCheck, Syncing, LogCleanup and Done.

    The first failing stage ends the run in Failed; nothing is retried.
    """

    def __init__(self, settings: InvocationSettings, options: Optional[RunnerOptions] = None,
                 guard: Optional[SizeGuard] = None, invoker: Optional[SyncInvoker] = None,
                 reconciler: Optional[LogReconciler] = None, presenter=None,
                 sleep: Callable[[float], None] = time.sleep):
        self.settings = settings
        self.options = options or RunnerOptions()
        self.guard = guard or SizeGuard(
            threshold_kb=self.options.threshold_kb,
            excluded_suffixes=self.options.excluded_suffixes,
            excluded_names=self.options.excluded_names,
        )
        self.invoker = invoker or SyncInvoker()
        self.reconciler = reconciler or LogReconciler(marker=self.options.deletion_marker)
        self.presenter = presenter
        self.sleep = sleep
        self.stage = RunStage.START
        self.history: List[RunStage] = [RunStage.START]

    def _enter(self, stage: RunStage):
        logger.debug(f"{self.stage.value} -> {stage.value}")
        self.stage = stage
        self.history.append(stage)

    def _fail(self, reason: str, message: str, error: RunnerError) -> RunStatus:
        failed_stage = self.stage
        self._enter(RunStage.FAILED)
        logger.error(f"Run failed during {failed_stage.value}: {reason}")
        if self.presenter is not None:
            self.presenter.failure(message)
        return RunStatus(stage=RunStage.FAILED, failed_stage=failed_stage, reason=reason,
                         error=error, history=list(self.history))

    def _report(self, message: str):
        logger.info(message)
        if self.presenter is not None:
            self.presenter.info(message)

    def run(self) -> RunStatus:
        """Execute the run to a terminal state.

        Raises:
            ConfigurationError: If the source folder can't be measured
        """
        settings = self.settings
        if self.presenter is not None:
            self.presenter.set_title(f"{settings.sync_from_path} - {APP_TITLE}")

        self._enter(RunStage.SIZE_CHECK)
        verdict = self.guard.verify(settings.sync_from_path)
        if not verdict:
            threshold = FileHelper.format_file_size(self.options.threshold_kb * BYTES_IN_KB)
            reason = "folder too small"
            return self._fail(
                reason,
                f"*** Warning: The folder is ~< {threshold} ***",
                GuardFailure(f"{settings.sync_from_path} is {verdict.size_kb} KB, "
                             f"not more than {self.options.threshold_kb} KB"),
            )

        self._enter(RunStage.SYNCING)
        try:
            with TimedOperation(logger, "sync"):
                result = self.invoker.invoke(
                    settings.tool_executable_path, settings.tool_flags,
                    settings.to_path, settings.from_path,
                )
        except LaunchError as e:
            return self._fail("tool could not be launched",
                              f"*** The following error occurred when launching rsync: ***\n{e}", e)

        if not result.success:
            return self._fail(
                "tool exited abnormally",
                f"*** rsync exited abnormally (exit code {result.exit_code}) ***",
                AbnormalExitError(f"{settings.tool_executable_path} exited with code "
                                  f"{result.exit_code}", exit_code=result.exit_code),
            )

        self._report("--- Copy Complete ---")

        if settings.reconcile_logs:
            self._enter(RunStage.LOG_CLEANUP)
            # Give the tool time to release its log file; not a guarantee
            self.sleep(self.options.log_settle_seconds)

            with TimedOperation(logger, "log cleanup"):
                cleanup = self.reconciler.reconcile(settings.tool_log_path, settings.clean_log_path)
            if not cleanup:
                return self._fail("log cleanup failed", "*** Log cleanup failed ***",
                                  LogIOError(cleanup.error or "log cleanup failed"))

            self._report("--- Log Cleanup Complete ---")

        self._enter(RunStage.DONE)
        return RunStatus(stage=RunStage.DONE, history=list(self.history))
