"""
State Binding (Kernel)

Applies shorthand updates to the state of a stateful host and commits the
result. Consecutive calls made before the host merges its pending commits
see the cumulative effect of those commits through a per-host cache.
"""

from typing import Any

from statesugar.infra.logging import get_logger
from statesugar.kernel.update import apply_immutable
from statesugar.protocol.commands import Operation, to_operation
from statesugar.protocol.interfaces import StatefulHost
from statesugar.protocol.path import DEFAULT_DELIMITERS, PathLike, destructure, normalize

logger = get_logger("statesugar.binding")


class Batch(dict):
    """
    Explicit multi-path update request: Batch({'a.b': 1, 'c': [2]}).

    Only Batch instances are expanded. A plain dict passed as a value is
    always the literal value to write. A Batch nested as a value is expanded
    beneath its key: Batch({'a': Batch({'x': 1})}) updates 'a.x'.
    """


class StateBinder:
    """
    Applies bound updates and owns the pending-state cache of each host.
    """

    def __init__(self, delimiters: str = DEFAULT_DELIMITERS):
        self.delimiters = delimiters
        # Cache of last known state, keyed by host identity
        self._cache: dict[int, dict[str, Any]] = {}

    def has_pending(self, host: StatefulHost) -> bool:
        return id(host) in self._cache

    def forget(self, host: StatefulHost) -> None:
        self._cache.pop(id(host), None)

    def _last_state(self, host: StatefulHost) -> dict[str, Any]:
        """
        Committed state plus every fragment still waiting in the host queue.
        The returned dict is owned by the binder and safe to write to.
        """
        pending = getattr(host, "pending_states", None)
        key = id(host)

        if pending:
            cached = dict(host.state)
            for fragment in pending:
                cached.update(fragment)
            self._cache[key] = cached
            logger.debug("state.cache.refresh", host=type(host).__name__, pending=len(pending))
            return cached

        if self._cache.pop(key, None) is not None:
            logger.debug("state.cache.drop", host=type(host).__name__)
        return dict(host.state)

    def update(
        self,
        host: StatefulHost,
        operation: Operation | str,
        path: PathLike | Batch,
        value: Any = None,
    ) -> Any:
        """
        Update host state and commit the changed top-level properties.

        Returns the new value of the property when exactly one was updated,
        otherwise a dict of every updated property to its new value.
        """
        if not isinstance(host, StatefulHost):
            raise TypeError(f"{type(host).__name__} does not implement the stateful host protocol")

        operation = to_operation(operation)
        last_state = self._last_state(host)
        next_state: dict[str, Any] = {}

        def update_next_state(path: Any, value: Any) -> None:
            if isinstance(path, Batch):
                for key, sub_value in path.items():
                    update_next_state(key, sub_value)
                return

            if isinstance(value, Batch):
                prefix = normalize(path, self.delimiters)
                for key, sub_value in value.items():
                    update_next_state(prefix + normalize(key, self.delimiters), sub_value)
                return

            prop, remain_path = destructure(path, self.delimiters)
            if remain_path is None and operation is Operation.SET:
                # Whole property replaced; nothing to update immutably
                next_state[prop] = value
                logger.debug("state.fast_path", prop=prop)
                return

            # Earlier writes in this call are the freshest base for prop
            if prop in next_state:
                last_state[prop] = next_state[prop]
            next_state[prop] = apply_immutable(
                last_state.get(prop), operation, remain_path, value, self.delimiters
            )

        update_next_state(path, value)
        host.commit(next_state)
        logger.debug(
            "state.commit",
            host=type(host).__name__,
            operation=operation.value,
            props=list(next_state),
        )

        if len(next_state) == 1:
            return next(iter(next_state.values()))
        return dict(next_state)
