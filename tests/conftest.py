"""Shared fixtures: an in-memory location store and a coordinator over it."""

import pytest

from trailhead.history.coordinator import HistoryCoordinator
from trailhead.testing import MemoryLocationStore


@pytest.fixture
def store() -> MemoryLocationStore:
    return MemoryLocationStore("/")


@pytest.fixture
def history(store: MemoryLocationStore) -> HistoryCoordinator:
    return HistoryCoordinator(store)
