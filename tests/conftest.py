"""
Shared pytest fixtures for the queue tests.

Every queue gets its own Allocator so live allocation counts and injected
failures never leak between tests.
"""

import pytest

from allocator import Allocator
from queueLL import Queue


@pytest.fixture
def allocator():
    return Allocator(fail_probability=0, seed=0)


@pytest.fixture
def queue(allocator):
    q = Queue(allocator=allocator)
    yield q
    q.free()


@pytest.fixture
def make_queue(allocator):
    """Build a queue filled from the tail with the given strings"""

    def _make(values, **kwargs):
        q = Queue(allocator=allocator, **kwargs)
        for value in values:
            assert q.insert_tail(value)
        return q

    return _make
