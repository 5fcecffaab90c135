"""Pytest fixtures for tests that wire objects through a ``Registry``.

Enable with ``pytest_plugins = ["diregistry.integrations.pytest_plugin"]``.
"""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from diregistry.registry import Registry


@pytest.fixture()
def diregistry_registry() -> Iterator[Registry]:
    """Create a per-test registry and clear it on teardown.

    The fixture is function-scoped, so registrations are isolated between
    tests unless users override fixture scope explicitly. Override the fixture
    to pre-register fakes for a whole module.

    Yields:
        A new, empty ``Registry``.

    """
    registry = Registry()
    yield registry
    registry.clear_registrations()
