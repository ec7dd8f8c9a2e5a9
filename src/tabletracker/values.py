"""Helpers for working with plain (untracked) table values.

This module knows nothing about tracking. It answers three questions the rest
of the library keeps asking:

*   Is this value a table, i.e. something a tracked view should descend into?
    (`is_table`)
*   Would storing `new` over `old` actually change anything? (`same_value`)
*   How do I take an independent, read-only snapshot of a table?
    (`deep_copy`, `deep_freeze`, `FrozenTable`)

Lists, sets and tuples are not tables (a tracked view does not descend into
them), but they are still copied element by element wherever a table is
copied, so no mutable leaf is ever shared between a copy and its source.

Note:
    None of these functions detect reference cycles. A table that contains
    itself (directly or indirectly) makes `deep_copy`/`deep_freeze` recurse
    until Python raises `RecursionError`.
"""

import collections.abc # Used for checking mapping, sequence and set types
import numbers
from typing import Any, Callable, Dict, Hashable, Mapping, NoReturn

from .exceptions import FrozenTableError, NotATableError


def is_table(value: Any) -> bool:
    """Returns True if `value` is a table (any `collections.abc.Mapping`).

    A tracked view is deliberately *not* a Mapping, so this never reports a
    `TrackedTable` as a table; use `tabletracker.is_tracked()` for that.
    """
    return isinstance(value, collections.abc.Mapping)


def same_value(old: Any, new: Any) -> bool:
    """Decides whether writing `new` over `old` would be a no-op.

    Tables are compared by identity only: a structurally equal but distinct
    table is a change. Numbers compare by value, so ``1.0`` is the same as
    ``1``, but a ``bool`` is only ever the same as another ``bool`` (``True``
    over ``1`` is a change). Any other values must have the same type and
    compare equal.
    """
    if old is new:
        return True
    if is_table(old) or is_table(new):
        return False
    if isinstance(old, bool) or isinstance(new, bool):
        if type(old) is not type(new):
            return False
    elif isinstance(old, numbers.Number) and isinstance(new, numbers.Number):
        pass # 1 and 1.0 are the same number
    elif type(old) is not type(new):
        return False
    try:
        return bool(old == new)
    except (TypeError, ValueError):
        # Objects with array-like __eq__ results cannot be reduced to a bool.
        return False


def copy_collection(value: Any, copy_item: Callable[[Any], Any]) -> Any:
    """Copies a list, set or tuple leaf, passing each element through `copy_item`.

    Mutable sequences come back as a plain ``list``, mutable sets as a plain
    ``set``; tuples and frozensets keep their type. A ``bytearray`` is copied.
    Anything else (strings, numbers, arbitrary objects) is returned unchanged.
    """
    if isinstance(value, (str, bytes)):
        return value
    if isinstance(value, bytearray):
        return bytearray(value)
    if type(value) is tuple:
        return tuple(copy_item(item) for item in value)
    if isinstance(value, collections.abc.MutableSequence):
        return [copy_item(item) for item in value]
    if isinstance(value, frozenset):
        return frozenset(copy_item(item) for item in value)
    if isinstance(value, collections.abc.MutableSet):
        return {copy_item(item) for item in value}
    return value


def freeze_collection(value: Any, freeze_item: Callable[[Any], Any]) -> Any:
    """Returns a read-only equivalent of a list, set or tuple leaf.

    Sequences become ``tuple``, sets become ``frozenset`` and a ``bytearray``
    becomes ``bytes``; every element goes through `freeze_item`. Anything else
    is returned unchanged.
    """
    if isinstance(value, (str, bytes)):
        return value
    if isinstance(value, bytearray):
        return bytes(value)
    if type(value) is tuple or isinstance(value, collections.abc.MutableSequence):
        return tuple(freeze_item(item) for item in value)
    if isinstance(value, (frozenset, collections.abc.MutableSet)):
        return frozenset(freeze_item(item) for item in value)
    return value


class FrozenTable(dict):
    """A dictionary that refuses every modification.

    Returned (nested) by `tabletracker.get_raw()`. Reading works exactly like a
    normal ``dict``, and it compares equal to a ``dict`` with the same contents,
    but any attempt to change it raises `FrozenTableError`.
    """

    def _refuse(self, action: str, key: Any = None) -> NoReturn:
        raise FrozenTableError(f"Cannot {action} a frozen table snapshot", key=key)

    def __setitem__(self, key, value):
        self._refuse("assign to", key)

    def __delitem__(self, key):
        self._refuse("delete from", key)

    def __ior__(self, other):
        self._refuse("update")

    def update(self, *args, **kwargs):
        self._refuse("update")

    def pop(self, key, *args):
        self._refuse("pop from", key)

    def popitem(self):
        self._refuse("pop from")

    def clear(self):
        self._refuse("clear")

    def setdefault(self, key, default=None):
        self._refuse("setdefault on", key)

    def __repr__(self) -> str:
        return f"FrozenTable({dict.__repr__(self)})"


def deep_copy(table: Mapping[Hashable, Any]) -> Dict[Hashable, Any]:
    """Returns a structural clone of `table` as plain nested dicts.

    Every nested table is copied too, and so is every list, set or tuple
    leaf, so the result shares no mutable container with the input. Other
    leaves are shared as-is.

    Raises:
        NotATableError: If `table` is not a mapping.
    """
    if not is_table(table):
        raise NotATableError("deep_copy", table)
    return {key: _deep_copy_value(value) for key, value in table.items()}


def _deep_copy_value(value: Any) -> Any:
    if is_table(value):
        return deep_copy(value)
    return copy_collection(value, _deep_copy_value)


def deep_freeze(table: Mapping[Hashable, Any]) -> FrozenTable:
    """Returns `table` rebuilt as nested `FrozenTable` objects.

    A Python ``dict`` cannot be made read-only in place, so the frozen result
    is a new object. List leaves become tuples and set leaves become
    frozensets, so nothing reachable from the result can be modified. Apply
    this to an already independent copy (see `deep_copy`); freezing never
    touches live tracked storage.

    Raises:
        NotATableError: If `table` is not a mapping.
    """
    if not is_table(table):
        raise NotATableError("deep_freeze", table)
    return FrozenTable((key, _deep_freeze_value(value)) for key, value in table.items())


def _deep_freeze_value(value: Any) -> Any:
    if is_table(value):
        return deep_freeze(value)
    return freeze_collection(value, _deep_freeze_value)
