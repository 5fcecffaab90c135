"""Shared pytest fixtures for diregistry tests."""

import pytest

from diregistry.lock_mode import LockMode
from diregistry.registry import Registry


@pytest.fixture()
def registry() -> Registry:
    """Default registry with thread-locked singletons."""
    return Registry()


@pytest.fixture()
def registry_unlocked() -> Registry:
    """Registry whose singletons are memoized without locking."""
    return Registry(lock_mode=LockMode.NONE)
