"""
rsync runner

A guarded launcher for rsync. Refuses to sync from a source folder that looks
empty or unmounted, runs rsync, and moves the deletion records out of rsync's
transfer log into a clean, human-readable log.
"""

__version__ = "1.0.0"
__author__ = "rsync runner"
__description__ = "Guarded rsync launcher with deletion log cleanup"

from .config.settings import InvocationSettings, RunnerOptions
from .sync.orchestrator import Orchestrator, RunStage, RunStatus

__all__ = ["InvocationSettings", "RunnerOptions", "Orchestrator", "RunStage", "RunStatus"]
