"""Pre-flight checks run before the synchronization tool."""

from .size_guard import SizeGuard, SizeVerdict

__all__ = ["SizeGuard", "SizeVerdict"]
