"""
Path Resolution Protocol

A path locates a nested position inside a tree-shaped value. It can be given as
a delimited string ('a.b[0].c') or as an ordered sequence of keys
(['a', 'b', 0, 'c']). An absent path addresses the root.
"""

from __future__ import annotations

import re
from collections.abc import Mapping, Sequence
from functools import lru_cache
from typing import Any

from statesugar.protocol.errors import InvalidPathError

DEFAULT_DELIMITERS = ".[]"

Key = str | int
PathLike = str | Sequence[Key] | Key | None


@lru_cache(maxsize=16)
def _splitter(delimiters: str) -> re.Pattern[str]:
    if not delimiters:
        raise ValueError("At least one path delimiter is required")
    return re.compile(f"[{re.escape(delimiters)}]+")


def normalize(path: PathLike, delimiters: str = DEFAULT_DELIMITERS) -> list[Key]:
    """
    Normalize a path into an ordered list of keys.

    'a.b[c]' => ['a', 'b', 'c']
    ['a', 'b', 'c'] => ['a', 'b', 'c']
    None => []
    """
    if path is None:
        return []
    if isinstance(path, str):
        return [token for token in _splitter(delimiters).split(path) if token]
    if isinstance(path, Mapping):
        raise InvalidPathError(
            "A mapping is not a path; wrap multi-path updates in Batch(...)"
        )
    if isinstance(path, Sequence):
        return list(path)
    # A bare key (e.g. a list index) is a single-key path
    return [path]


def destructure(
    path: PathLike, delimiters: str = DEFAULT_DELIMITERS
) -> tuple[Key, list[Key] | None]:
    """
    Split a path into its first key and the remaining path.

    'a.b.c' => ('a', ['b', 'c'])
    'a' => ('a', None)
    """
    keys = normalize(path, delimiters)
    if not keys:
        raise InvalidPathError("Cannot destructure an empty path")
    first, *rest = keys
    return first, (rest or None)


def format_path(keys: Sequence[Any] | None) -> str:
    """Render keys in dotted form, e.g. ['a', 0, 'b'] => 'a[0].b'."""
    out = ""
    for key in keys or ():
        if isinstance(key, int):
            out += f"[{key}]"
        else:
            out += f".{key}" if out else str(key)
    return out
