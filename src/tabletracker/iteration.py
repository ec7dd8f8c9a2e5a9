"""Traversal helpers for tracked tables.

A `TrackedTable` intercepts single-key reads and writes, not whole-table
enumeration, so iterating it needs these helpers:

*   `pairs(view)` visits every key of the underlying dict.
*   `ipairs(view)` visits ``1, 2, 3, ...`` and stops at the first missing index.

Both read keys from the raw dict, and whenever the value under a key is a
nested table they yield it by indexing the *original view* (``view[key]``), so
the caller always gets a correctly pathed `TrackedTable` and never a raw
sub-dict.
"""

from typing import Any, Hashable, Iterator, Tuple

from .tracked_table import TrackedTable, raw_of, require_tracked
from .values import is_table


def pairs(table: Any) -> Iterator[Tuple[Hashable, Any]]:
    """Iterates over ``(key, value)`` for every key of a tracked table.

    Keys come in the dict's own order. The set of keys is taken when the
    iteration starts; a key removed during the loop (for example by assigning
    ``None`` to it) is skipped, and keys added during the loop are not visited.

    Raises:
        NotTrackedError: Immediately, if `table` is not a `TrackedTable`.

    Example:
        >>> for key, value in tabletracker.pairs(state):
        ...     print(key, value)
    """
    view = require_tracked(table, "pairs")
    return _iter_pairs(view)


def _iter_pairs(view: TrackedTable) -> Iterator[Tuple[Hashable, Any]]:
    inner = raw_of(view)
    for key in list(inner):
        if key not in inner:
            continue
        value = inner[key]
        if is_table(value):
            # Wrap sub-tables so iteration is consistent with indexing.
            value = view[key]
        yield key, value


def ipairs(table: Any) -> Iterator[Tuple[int, Any]]:
    """Iterates over ``(index, value)`` for ``index = 1, 2, 3, ...``.

    Stops at the first index that has no value, even if higher integer keys
    exist. The table is re-read at every step, so writes made during the loop
    are seen.

    Raises:
        NotTrackedError: Immediately, if `table` is not a `TrackedTable`.
    """
    view = require_tracked(table, "ipairs")
    return _iter_ipairs(view)


def _iter_ipairs(view: TrackedTable) -> Iterator[Tuple[int, Any]]:
    inner = raw_of(view)
    index = 1
    while True:
        value = inner.get(index)
        if value is None:
            return
        if is_table(value):
            value = view[index]
        yield index, value
        index += 1
