"""
Immutable Update (Kernel)
Resolves a shorthand (operation, path, value) triple and applies it.
"""

from typing import Any

from statesugar.kernel import applier
from statesugar.protocol.commands import Operation, build_command_tree
from statesugar.protocol.path import DEFAULT_DELIMITERS, PathLike, normalize


def get_command_tree(
    operation: Operation | str,
    path: PathLike,
    value: Any,
    delimiters: str = DEFAULT_DELIMITERS,
) -> dict[str, Any]:
    """
    Build the command tree for a shorthand update without applying it.

    ('push', 'a.b', 1) => {'a': {'b': {'$push': [1]}}}
    """
    return build_command_tree(operation, normalize(path, delimiters), value)


def apply_immutable(
    source: Any,
    operation: Operation | str,
    path: PathLike,
    value: Any,
    delimiters: str = DEFAULT_DELIMITERS,
) -> Any:
    """
    Return a new value with the update applied at path.
    The source is never mutated; subtrees off the path are shared.
    """
    tree = get_command_tree(operation, path, value, delimiters)
    return applier.apply(source, tree)


def free_update(
    source: Any,
    operation: Operation | str,
    path: PathLike = None,
    value: Any = None,
    delimiters: str = DEFAULT_DELIMITERS,
) -> Any:
    """
    Pure update. Without a path the root itself is the target.
    """
    return apply_immutable(source, operation, path, value, delimiters)
