"""
State Management (Kernel)
"""

from typing import Any

from statesugar.infra.logging import get_logger

logger = get_logger("statesugar.state")


class StateStore:
    """
    In-memory stateful host.
    Commits are queued in 'pending_states' until flush() merges them, the way
    a UI component batches state changes until the end of a tick.
    """

    def __init__(self, initial: dict[str, Any] | None = None, batched: bool = True):
        self._state: dict[str, Any] = dict(initial or {})
        self._pending: list[dict[str, Any]] = []
        self.batched = batched

    @property
    def state(self) -> dict[str, Any]:
        return self._state

    @property
    def pending_states(self) -> list[dict[str, Any]]:
        return list(self._pending)

    def commit(self, fragment: dict[str, Any]) -> None:
        """
        Queue a fragment, or merge it right away when not batched.
        """
        if self.batched:
            self._pending.append(dict(fragment))
            return
        self._state = {**self._state, **fragment}

    def flush(self) -> dict[str, Any]:
        """
        Merge every pending fragment into state, in commit order.
        """
        if not self._pending:
            return self._state

        next_state = dict(self._state)
        for fragment in self._pending:
            next_state.update(fragment)
        logger.debug("state.flush", fragments=len(self._pending), props=sorted(map(str, next_state)))
        self._pending.clear()
        self._state = next_state
        return self._state
