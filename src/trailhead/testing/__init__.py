"""Test utilities for trailhead.

Provides an in-memory location store that satisfies the ``LocationStore``
contract::

    from trailhead.testing import MemoryLocationStore
"""

from trailhead.testing.memory import MemoryLocationStore, Transition

__all__ = [
    "MemoryLocationStore",
    "Transition",
]
