"""Utility functions and helpers."""

from .console import ConsolePresenter
from .file_utils import FileHelper
from .logging import setup_logging

__all__ = ["setup_logging", "ConsolePresenter", "FileHelper"]
