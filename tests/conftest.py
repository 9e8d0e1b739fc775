"""Pytest configuration."""

import pytest

from lazyreg import Registry, create_registry


@pytest.fixture
def registry() -> Registry:
    """Return a fresh, empty registry."""
    return create_registry()


@pytest.fixture
def locked_registry() -> Registry:
    """Return a fresh registry guarded by a lock."""
    return create_registry(name="locked", thread_safe=True)
