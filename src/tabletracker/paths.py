"""Paths into a tracked structure, and bulk updates addressed by path.

A path is a tuple of keys leading from the tracked root to a value, e.g.
``("inventory", 3, "count")``. Tuples are immutable, so extending a path with
`extend_path` always produces a fresh object and a path handed to a callback
can never be altered by someone else afterwards.
"""

import collections.abc
from typing import Any, Hashable, Iterable, MutableMapping, Optional, Sequence, Tuple

from . import logger
from .exceptions import InvalidPathError, NotATableError
from .values import is_table

# A location relative to the tracked root.
Path = Tuple[Hashable, ...]


def to_path(keys: Optional[Iterable[Hashable]]) -> Path:
    """Freezes `keys` into a path. `None` gives the empty (root) path.

    Raises:
        InvalidPathError: If `keys` is a string or bytes (which would be taken
            apart character by character) or is not iterable at all.
    """
    if keys is None:
        return ()
    if isinstance(keys, (str, bytes)) or not isinstance(keys, collections.abc.Iterable):
        raise InvalidPathError(
            f"a path must be an iterable of keys, got {type(keys).__name__}"
        )
    return tuple(keys)


def extend_path(base: Path, key: Hashable) -> Path:
    """Returns a new path: `base` followed by `key`."""
    return base + (key,)


def deep_update(table: Any, path: Sequence[Hashable], new_value: Any) -> None:
    """Stores `new_value` at `path` inside `table`, creating levels as needed.

    Walks `table` along every key of `path` except the last. Whenever the value
    at a step is not a table (missing, or a scalar), it is replaced with a new
    empty ``dict`` before descending. Finally the unwrapped `new_value` is
    stored under the last key (``None`` removes that key).

    This writes straight into raw storage. When `table` is a tracked table the
    update is applied to the dictionary it wraps, and **no change callback is
    fired**, for the final key or for any level created on the way. Use normal
    item assignment through the tracked view when you want notifications.

    Args:
        table: A plain table or a `TrackedTable`.
        path: A non-empty sequence of keys.
        new_value: The value to store. Tracked views are unwrapped first, so
            only plain data ends up in storage.

    Raises:
        NotATableError: If `table` is neither a table nor a tracked table.
        InvalidPathError: If `path` is not a non-empty sequence (a string is
            rejected, since it would be taken apart character by character).

    Example:
        >>> data = {"a": 1}
        >>> deep_update(data, ["a", "b", "c"], 5)
        >>> data
        {'a': {'b': {'c': 5}}}
    """
    # Imported here to avoid a circular import with tracked_table.
    from .tracked_table import is_tracked, raw_of, unwrap

    current: MutableMapping[Hashable, Any]
    if is_tracked(table):
        current = raw_of(table)
    elif is_table(table):
        current = table
    else:
        raise NotATableError("deep_update", table)

    if isinstance(path, (str, bytes)) or not isinstance(path, Sequence):
        raise InvalidPathError(
            f"deep_update expects a sequence of keys as the path, got {type(path).__name__}"
        )
    if len(path) == 0:
        raise InvalidPathError("deep_update expects a non-empty path")

    for key in path[:-1]:
        if not is_table(current.get(key)):
            current[key] = {}
        current = current[key]

    last_key = path[-1]
    raw_value = unwrap(new_value)
    if raw_value is None:
        current.pop(last_key, None)
    else:
        current[last_key] = raw_value
    logger.debug(f"deep_update stored a value at {tuple(path)!r} without notification")
