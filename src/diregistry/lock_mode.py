from __future__ import annotations

from enum import Enum


class LockMode(Enum):
    """Select locking behavior for singleton memoization.

    Use these values for the registry-level ``lock_mode`` default or for a
    single ``Registration.as_singleton(lock_mode=...)`` call.
    """

    THREAD = "thread"
    """Guard the cached value with a ``threading.RLock``; the factory runs at most once."""

    NONE = "none"
    """Disable locking; concurrent first calls may each run the factory and the last write wins."""
