"""
statesugar SDK: Main Entrypoints

Usage:
    new_data = apply_pure(data, "push", "todos", {"title": "write docs"})

    store = StateStore({"todos": []})
    apply_bound(store, "push", "todos", {"title": "write docs"})
    apply_bound(store, "set", Batch({"filter": "done", "page": 1}))
"""

from collections.abc import Callable
from typing import Any

from statesugar.config.settings import UpdaterConfig
from statesugar.infra.logging import configure_logging
from statesugar.kernel.binding import Batch, StateBinder
from statesugar.kernel.update import free_update
from statesugar.protocol.commands import Operation
from statesugar.protocol.interfaces import StatefulHost
from statesugar.protocol.path import PathLike

_default_binder = StateBinder()


def apply_pure(
    source: Any,
    operation: Operation | str,
    path: PathLike = None,
    value: Any = None,
) -> Any:
    """
    Return an updated copy of source. Nothing is committed anywhere.
    """
    return free_update(source, operation, path, value)


def apply_bound(
    host: StatefulHost,
    operation: Operation | str,
    path: PathLike | Batch,
    value: Any = None,
) -> Any:
    """
    Update the state of host and commit the changed properties.
    """
    return _default_binder.update(host, operation, path, value)


class Updater:
    """
    The High-Level Updater Object.
    Holds its own configuration and pending-state cache.

    Usage:
        updater = Updater(UpdaterConfig(delimiters="/"))
        updater.pure(data, "set", "a/b", 1)
        update = updater.bind(store)
        update("set", "a/b", 1)
    """

    def __init__(self, config: UpdaterConfig | None = None, setup_logging: bool = False):
        self.config = config or UpdaterConfig()
        self.binder = StateBinder(delimiters=self.config.delimiters)
        if setup_logging:
            configure_logging(self.config.log_level, json_format=self.config.json_logs)

    def pure(
        self,
        source: Any,
        operation: Operation | str,
        path: PathLike = None,
        value: Any = None,
    ) -> Any:
        return free_update(source, operation, path, value, self.config.delimiters)

    def bound(
        self,
        host: StatefulHost,
        operation: Operation | str,
        path: PathLike | Batch,
        value: Any = None,
    ) -> Any:
        return self.binder.update(host, operation, path, value)

    def bind(self, host: StatefulHost) -> Callable[..., Any]:
        """
        Return an update function bound to one host:
        update(operation, path_or_batch, value=None)
        """
        if not isinstance(host, StatefulHost):
            raise TypeError(f"{type(host).__name__} does not implement the stateful host protocol")

        def update(operation: Operation | str, path: PathLike | Batch, value: Any = None) -> Any:
            return self.binder.update(host, operation, path, value)

        return update
