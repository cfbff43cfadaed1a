"""
Host Protocols for statesugar.
Adhering to the "Protocol-First" design principle using typing.Protocol.
"""

from collections.abc import Mapping, Sequence
from typing import Any, Protocol, runtime_checkable

# ----------------------------------------------------------------------
# Host Protocol
# ----------------------------------------------------------------------

@runtime_checkable
class StatefulHost(Protocol):
    """
    Protocol for any object whose state can be updated in bound mode.
    """
    @property
    def state(self) -> Mapping[str, Any]:
        """
        The currently committed state.
        """
        ...

    def commit(self, fragment: dict[str, Any]) -> None:
        """
        Schedule the fragment to be merged into the host state.
        """
        ...


@runtime_checkable
class BatchingHost(StatefulHost, Protocol):
    """
    Extended Protocol for hosts that queue commits before applying them.

    Fragments in ``pending_states`` are in commit order and have not yet been
    merged into ``state``. Hosts that apply commits immediately need not
    implement this protocol.
    """
    @property
    def pending_states(self) -> Sequence[Mapping[str, Any]]:
        ...
