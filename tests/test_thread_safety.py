"""Tests for registries configured with thread_safe=True."""

import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from lazyreg import AlreadyBoundError

from tests.values import Item

WORKERS = 8


def _run_together(func, count=WORKERS):
    """Run ``func(index)`` on ``count`` threads released at the same moment."""
    barrier = threading.Barrier(count)

    def task(index):
        barrier.wait()
        return func(index)

    with ThreadPoolExecutor(max_workers=count) as pool:
        futures = [pool.submit(task, i) for i in range(count)]
    return futures


def test_concurrent_get_or_create_yields_one_reference(locked_registry):
    """All threads receive the same reference for a key."""
    futures = _run_together(lambda _: locked_registry.get_or_create("a"))
    references = {id(future.result()) for future in futures}
    assert len(references) == 1
    assert locked_registry.keys() == {"a"}


@pytest.mark.parametrize("requested_first", [False, True], ids=["immediate", "lazy"])
def test_concurrent_register_binds_once(locked_registry, requested_first):
    """Exactly one of several competing registrations wins."""
    pending = locked_registry.get_or_create("a") if requested_first else None
    items = [Item(str(i)) for i in range(WORKERS)]

    futures = _run_together(lambda i: locked_registry.register("a", items[i]))

    winners = [future.result() for future in futures if future.exception() is None]
    losers = [future.exception() for future in futures if future.exception() is not None]
    assert len(winners) == 1
    assert len(losers) == WORKERS - 1
    assert all(isinstance(error, AlreadyBoundError) for error in losers)

    bound = locked_registry.get_or_create("a")
    assert bound.get() in items
    assert all(error.existing is bound.get() for error in losers)
    if pending is not None:
        assert bound is pending
        assert pending.bound()


def test_concurrent_distinct_keys(locked_registry):
    """Registrations for different keys do not interfere."""
    _run_together(lambda i: locked_registry.register(f"key-{i}", Item()))
    assert locked_registry.keys() == {f"key-{i}" for i in range(WORKERS)}
    assert locked_registry.unbound_keys() == frozenset()
