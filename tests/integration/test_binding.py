"""
Integration Test: Bound Updates against Stateful Hosts
"""

import pytest
from structlog.testing import capture_logs

from statesugar.kernel.binding import Batch, StateBinder
from statesugar.kernel.state import StateStore
from statesugar.protocol.errors import InvalidOperationError, InvalidPathError


def test_multi_path_batch(binder, immediate_store):
    result = binder.update(immediate_store, "set", Batch({"a": 1, "b": 2}))

    assert result == {"a": 1, "b": 2}
    assert immediate_store.state == {"a": 1, "b": 2, "c": 0}


def test_multi_path_batch_commits_one_fragment(binder, store):
    binder.update(store, "set", Batch({"b": 1, "c": 2}))
    assert store.pending_states == [{"b": 1, "c": 2}]


def test_single_path_returns_value(binder, immediate_store):
    assert binder.update(immediate_store, "set", "a", 5) == 5
    assert immediate_store.state["a"] == 5


def test_nested_path_returns_new_property_value(binder, store):
    result = binder.update(store, "set", "a.x", 1)

    assert result == {"x": 1, "y": 0}
    assert store.pending_states == [{"a": {"x": 1, "y": 0}}]
    # committed state untouched until flush
    assert store.state["a"] == {"x": 0, "y": 0}


def test_same_tick_calls_see_pending_state(binder, store):
    binder.update(store, "set", "a.x", 1)
    result = binder.update(store, "set", "a.y", 2)

    assert result == {"x": 1, "y": 2}
    store.flush()
    assert store.state["a"] == {"x": 1, "y": 2}


def test_same_tick_push_accumulates(binder, store):
    binder.update(store, "push", "todos", "test")
    binder.update(store, "push", "todos", "ship")
    store.flush()
    assert store.state["todos"] == ["read", "write", "test", "ship"]


def test_cache_lifecycle(binder, store):
    binder.update(store, "set", "b", 1)
    assert not binder.has_pending(store)

    binder.update(store, "set", "c", 1)
    assert binder.has_pending(store)

    store.flush()
    binder.update(store, "set", "b", 2)
    assert not binder.has_pending(store)


def test_caches_are_per_host(binder):
    first = StateStore({"n": {"v": 0}})
    second = StateStore({"n": {"v": 0}})

    binder.update(first, "set", "n.v", 1)
    assert binder.update(second, "set", "n.w", 2) == {"v": 0, "w": 2}
    assert binder.update(first, "set", "n.w", 2) == {"v": 1, "w": 2}


def test_forget(binder, store):
    binder.update(store, "set", "b", 1)
    binder.update(store, "set", "c", 1)
    binder.forget(store)
    assert not binder.has_pending(store)


def test_batch_paths_on_same_property_build_on_each_other(binder, store):
    result = binder.update(store, "set", Batch({"a.x": 1, "a.y": 2}))
    assert result == {"x": 1, "y": 2}


def test_batch_fast_path_then_nested_path(binder, store):
    result = binder.update(store, "set", Batch({"a": {"x": 5}, "a.y": 6}))
    assert result == {"x": 5, "y": 6}


def test_batch_shares_operation(binder):
    host = StateStore({"l1": [1], "l2": [2]})
    result = binder.update(host, "push", Batch({"l1": 10, "l2": 20}))
    assert result == {"l1": [1, 10], "l2": [2, 20]}


def test_splice_removes_value_from_property(binder, store):
    assert binder.update(store, "splice", "todos", "read") == ["write"]
    assert binder.update(store, "splice", "todos", "missing") == ["write"]


def test_nested_batch_expands_under_its_key(binder, store):
    result = binder.update(store, "set", Batch({"a": Batch({"x": 3, "y": 4}), "b": 9}))
    assert result == {"a": {"x": 3, "y": 4}, "b": 9}


def test_plain_mapping_value_is_literal(binder, store):
    # A plain dict is a value, never a set of sub-updates
    result = binder.update(store, "set", "a", {"x.y": 1})
    assert result == {"x.y": 1}


def test_plain_mapping_as_path_is_rejected(binder, store):
    with pytest.raises(InvalidPathError):
        binder.update(store, "set", {"a": 1, "b": 2})
    assert store.pending_states == []


def test_bound_update_does_not_mutate_committed_state(binder, immediate_store):
    committed = immediate_store.state
    binder.update(immediate_store, "set", Batch({"a": 1, "b": 2}))
    assert committed == {"a": 0, "b": 0, "c": 0}


def test_unknown_operation_is_not_committed(binder, store):
    with pytest.raises(InvalidOperationError):
        binder.update(store, "merge", "a", {})
    assert store.pending_states == []


def test_non_host_is_rejected(binder):
    with pytest.raises(TypeError):
        binder.update({"state": {}}, "set", "a", 1)


class RecordingHost:
    """Host that applies commits immediately and exposes no queue."""

    def __init__(self):
        self.state = {"count": 0, "items": []}
        self.commits = []

    def commit(self, fragment):
        self.commits.append(fragment)
        self.state = {**self.state, **fragment}


def test_host_without_pending_queue():
    binder = StateBinder()
    host = RecordingHost()

    binder.update(host, "push", "items", "x")
    binder.update(host, "push", "items", "y")

    assert host.state["items"] == ["x", "y"]
    assert host.commits == [{"items": ["x"]}, {"items": ["x", "y"]}]
    assert not binder.has_pending(host)


def test_fast_path_and_dollar_keys(binder):
    host = StateStore({"$meta": {"rev": 1}, "title": "draft"})
    result = binder.update(host, "set", Batch({"$meta.rev": 2, "title": "final"}))
    assert result == {"$meta": {"rev": 2}, "title": "final"}


def test_fast_path_is_logged(binder, store):
    with capture_logs() as logs:
        binder.update(store, "set", Batch({"b": 1, "a.x": 2}))

    fast = [entry for entry in logs if entry["event"] == "state.fast_path"]
    assert [entry["prop"] for entry in fast] == ["b"]
    commit = next(entry for entry in logs if entry["event"] == "state.commit")
    assert commit["props"] == ["b", "a"]
