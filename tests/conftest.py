"""
Pytest Configuration and Fixtures
"""

import pytest

from statesugar.kernel.binding import StateBinder
from statesugar.kernel.state import StateStore


@pytest.fixture
def store() -> StateStore:
    """Returns a batching StateStore with a small nested state."""
    return StateStore({
        "a": {"x": 0, "y": 0},
        "b": 0,
        "c": 0,
        "todos": ["read", "write"],
    })

@pytest.fixture
def immediate_store() -> StateStore:
    """Returns a StateStore that merges every commit right away."""
    return StateStore({"a": 0, "b": 0, "c": 0}, batched=False)

@pytest.fixture
def binder() -> StateBinder:
    """Returns a fresh StateBinder with an empty cache."""
    return StateBinder()
