"""Sync pipeline: tool invocation, log cleanup and the run sequence."""

from .invoker import InvocationResult, SyncInvoker
from .log_reconciler import LogReconciler, ReconcileResult
from .orchestrator import Orchestrator, RunStage, RunStatus

__all__ = [
    "InvocationResult",
    "SyncInvoker",
    "LogReconciler",
    "ReconcileResult",
    "Orchestrator",
    "RunStage",
    "RunStatus",
]
