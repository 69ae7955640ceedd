"""Configuration management for the rsync runner."""

from .settings import InvocationSettings, RunnerOptions

__all__ = ["InvocationSettings", "RunnerOptions"]
