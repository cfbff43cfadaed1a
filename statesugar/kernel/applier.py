"""
Immutable Patch Applier (Kernel)

Applies a command tree to a value and returns a new value. Only containers on
the addressed path are copied; every other subtree is shared by reference
with the source.

Supported commands:
- $set: replace the whole value
- $push: append items to a sequence
- $splice: list of [start, delete_count, *items]; start is an int (negative
  counts from the end) or a ValueIndex resolved against the target

Any other key, '$'-prefixed or not, is a key to descend into.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

from statesugar.protocol.commands import PUSH, SET, SPLICE, ValueIndex, is_command
from statesugar.protocol.errors import PatchApplyError
from statesugar.protocol.path import format_path

_INDEX_RE = re.compile(r"-?[0-9]+")


def _is_sequence(value: Any) -> bool:
    return isinstance(value, list | tuple)


def _where(trail: list[Any]) -> str:
    return format_path(trail) or "<root>"


def _coerce_index(key: Any, target: Any) -> Any:
    """Interpret integer strings as indices only when descending into a sequence."""
    if _is_sequence(target) and isinstance(key, str) and _INDEX_RE.fullmatch(key):
        return int(key)
    return key


def _rebuild(target: list | tuple, items: list) -> list | tuple:
    return items if isinstance(target, list) else type(target)(items)


def _apply_push(target: Any, items: Any, trail: list[Any]) -> Any:
    if not _is_sequence(target):
        raise PatchApplyError(
            f"$push target at {_where(trail)} must be a sequence, got {type(target).__name__}"
        )
    if not items:
        return target
    return _rebuild(target, [*target, *items])


def _apply_splice(target: Any, splices: Any, trail: list[Any]) -> Any:
    if not _is_sequence(target):
        raise PatchApplyError(
            f"$splice target at {_where(trail)} must be a sequence, got {type(target).__name__}"
        )

    result = list(target)
    changed = False
    for args in splices:
        if not _is_sequence(args) or not args:
            raise PatchApplyError(f"Invalid $splice arguments at {_where(trail)}: {args!r}")
        start, *rest = args
        if isinstance(start, ValueIndex):
            start = start.resolve(result)
            if start is None:
                # Nothing equal to the value; leave the sequence as is
                continue
        if not isinstance(start, int):
            raise PatchApplyError(f"Invalid $splice start at {_where(trail)}: {start!r}")
        if start < 0:
            start = max(len(result) + start, 0)
        delete_count = rest[0] if rest else len(result) - start
        items = rest[1:]
        result[start:start + delete_count] = items
        changed = True

    return _rebuild(target, result) if changed else target


def _apply_command(target: Any, command: dict[Any, Any], trail: list[Any]) -> Any:
    if len(command) != 1:
        keys = ", ".join(map(str, command))
        raise PatchApplyError(f"Expected exactly one command at {_where(trail)}, got: {keys}")

    if SET in command:
        return command[SET]
    if PUSH in command:
        return _apply_push(target, command[PUSH], trail)
    return _apply_splice(target, command[SPLICE], trail)


def _apply_nested(target: Any, tree: Mapping[Any, Any], trail: list[Any]) -> Any:
    if isinstance(target, Mapping):
        updated = None
        for key, subtree in tree.items():
            current = target.get(key)
            if current is None and key not in target and not is_command(subtree):
                raise PatchApplyError(f"Cannot descend into missing key at {_where([*trail, key])}")
            value = _apply(current, subtree, [*trail, key])
            if value is current and key in target:
                continue
            if updated is None:
                updated = dict(target)
            updated[key] = value
        return target if updated is None else updated

    if _is_sequence(target):
        items = None
        for raw_key, subtree in tree.items():
            key = _coerce_index(raw_key, target)
            if not isinstance(key, int):
                raise PatchApplyError(
                    f"Expected sequence index at {_where(trail)}, got {raw_key!r}"
                )
            try:
                current = target[key]
            except IndexError:
                raise PatchApplyError(
                    f"Sequence index out of range at {_where([*trail, key])}"
                ) from None
            value = _apply(current, subtree, [*trail, key])
            if value is current:
                continue
            if items is None:
                items = list(target)
            items[key] = value
        return target if items is None else _rebuild(target, items)

    raise PatchApplyError(f"Cannot descend into {type(target).__name__} value at {_where(trail)}")


def _apply(source: Any, tree: Any, trail: list[Any]) -> Any:
    if is_command(tree):
        return _apply_command(source, tree, trail)
    if not isinstance(tree, Mapping):
        raise PatchApplyError(
            f"Command tree node at {_where(trail)} must be a mapping, got {type(tree).__name__}"
        )
    return _apply_nested(source, tree, trail)


def apply(source: Any, tree: Mapping[Any, Any]) -> Any:
    """
    Apply a command tree to source without mutating it.
    """
    return _apply(source, tree, [])
