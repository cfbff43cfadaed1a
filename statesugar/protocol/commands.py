"""
Update Command Protocol

Translates a shorthand (operation, path, value) triple into a nested command
tree understood by the patch applier:

    ('set', ['a', 'b'], 1)  =>  {'a': {'b': {'$set': 1}}}
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from enum import Enum
from typing import Any

from statesugar.protocol.errors import InvalidOperationError

SET = "$set"
PUSH = "$push"
SPLICE = "$splice"

COMMAND_KEYS = frozenset({SET, PUSH, SPLICE})


class Operation(str, Enum):
    """Shorthand update operations."""
    SET = "set"
    PUSH = "push"
    SPLICE = "splice"


@dataclass(frozen=True)
class ValueIndex:
    """
    Splice start resolved against the target sequence: the index of the first
    element that is (or equals) ``value``.
    """
    value: Any

    def resolve(self, target: Sequence[Any]) -> int | None:
        for index, item in enumerate(target):
            if item is self.value or item == self.value:
                return index
        return None


def _set(value: Any) -> dict[str, Any]:
    return {SET: value}


def _push(value: Any) -> dict[str, Any]:
    return {PUSH: [value]}


def _splice(value: Any) -> dict[str, Any]:
    # Removes the first element equal to value, not the element at index value.
    return {SPLICE: [[ValueIndex(value), 1]]}


_BUILDERS: dict[Operation, Callable[[Any], dict[str, Any]]] = {
    Operation.SET: _set,
    Operation.PUSH: _push,
    Operation.SPLICE: _splice,
}


def to_operation(operation: Operation | str) -> Operation:
    try:
        return Operation(operation)
    except ValueError:
        raise InvalidOperationError(operation) from None


def build_leaf_command(operation: Operation | str, value: Any) -> dict[str, Any]:
    """
    Build the primitive command for an operation.

    set    => {'$set': value}
    push   => {'$push': [value]}
    splice => {'$splice': [[ValueIndex(value), 1]]}
    """
    return _BUILDERS[to_operation(operation)](value)


def build_command_tree(
    operation: Operation | str,
    path: Sequence[Any] | None,
    value: Any,
) -> dict[str, Any]:
    """
    Wrap the leaf command in one single-key mapping per path key.

    ['a', 'b'] with {'$set': 1} => {'a': {'b': {'$set': 1}}}
    """
    tree = build_leaf_command(operation, value)
    for key in reversed(path or ()):
        tree = {key: tree}
    return tree


def is_command(node: Any) -> bool:
    return isinstance(node, dict) and any(key in COMMAND_KEYS for key in node)
