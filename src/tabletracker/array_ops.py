"""List-style helpers for tracked tables keyed ``1, 2, 3, ...``.

A tracked table has no separate list type. An "array" is simply a table whose
keys are the integers ``1..n``. These helpers mirror the usual list operations
and perform every change as an ordinary write through the tracked view, so
each slot that changes produces its own change notification.

Length semantics:
    `length` counts **all** keys of the underlying dict, not just the
    contiguous integer prefix. `insert` and `remove` use this count as the
    array length when deciding which slots to shift. Keep arrays free of extra
    non-integer keys if you use these helpers.

Shifting is not atomic:
    `insert` and `remove` move elements one slot at a time. A callback that
    fires in the middle of a shift sees the table half-shifted (some slots
    already moved, the rest not yet). Callbacks that need a consistent view
    should wait for the operation to return.
"""

from typing import Any, Optional

from . import logger
from .exceptions import InvalidPositionError, MissingValueError, PositionOutOfBoundsError
from .tracked_table import TrackedTable, raw_of, require_tracked
from .values import same_value


def length(table: Any) -> int:
    """Returns the number of keys in a tracked table's underlying dict.

    Raises:
        NotTrackedError: If `table` is not a `TrackedTable`.
    """
    return len(raw_of(require_tracked(table, "length")))


def find(table: Any, value: Any) -> Optional[int]:
    """Returns the first index ``i >= 1`` whose value matches `value`.

    Scans ``1, 2, 3, ...`` and stops at the first missing index. Scalars match
    when they are of the same type and equal; tables match only by identity.
    A tracked view is matched against the dict it wraps, so
    ``find(t, t[2])`` returns ``2`` when slot 2 holds a table.

    Returns:
        Optional[int]: The index, or `None` if there is no match.

    Raises:
        NotTrackedError: If `table` is not a `TrackedTable`.
        MissingValueError: If `value` is `None`.
    """
    view = require_tracked(table, "find")
    if value is None:
        raise MissingValueError("find")
    if isinstance(value, TrackedTable):
        value = raw_of(value)

    inner = raw_of(view)
    index = 1
    while True:
        current = inner.get(index)
        if current is None:
            return None
        if same_value(current, value):
            return index
        index += 1


def clear(table: Any) -> None:
    """Removes every key, one tracked write per key.

    Each removal notifies the callback with the old value and ``None`` as the
    new value.

    Raises:
        NotTrackedError: If `table` is not a `TrackedTable`.
    """
    view = require_tracked(table, "clear")
    for key in list(raw_of(view)):
        view[key] = None


def insert(table: Any, *args: Any) -> None:
    """Inserts a value into an array-style tracked table.

    Two call shapes, like Lua's ``table.insert``:

    *   ``insert(t, value)`` appends `value` at ``length(t) + 1``.
    *   ``insert(t, pos, value)`` inserts `value` at `pos`. Every element at
        index ``>= pos`` is first moved up one slot, starting from the top so
        nothing is overwritten before it has been moved.

    Every moved slot and the final slot each produce one change notification
    (unless the move does not change the stored value), in that order.

    Args:
        table: The tracked table.
        *args: Either ``(value,)`` or ``(pos, value)``. `pos` must be an
            integer in ``[1, length(t) + 1]``.

    Raises:
        NotTrackedError: If `table` is not a `TrackedTable`.
        TypeError: If called with no value or with more than two extra arguments.
        MissingValueError: If the value to insert is `None`.
        InvalidPositionError: If `pos` is not an integer.
        PositionOutOfBoundsError: If `pos` is outside ``[1, length(t) + 1]``.

    Example:
        >>> t = tabletracker.track({1: 10, 2: 20, 3: 30}, on_change)
        >>> tabletracker.insert(t, 2, 99)
        >>> [v for _, v in tabletracker.ipairs(t)]
        [10, 99, 20, 30]
    """
    view = require_tracked(table, "insert")
    n = length(view)

    if len(args) == 1:
        pos, value = n + 1, args[0]
    elif len(args) == 2:
        pos, value = args
    else:
        raise TypeError(f"insert expects 1 or 2 arguments after the table, got {len(args)}")

    if value is None:
        raise MissingValueError("insert")
    _check_position("insert", pos)
    if not 1 <= pos <= n + 1:
        raise PositionOutOfBoundsError("insert", pos, n)

    logger.debug(f"insert at {pos} into {view.path!r} (length {n})")
    # Shift only if not appending.
    for index in range(n, pos - 1, -1):
        view[index + 1] = view[index]

    view[pos] = value


def remove(table: Any, pos: Optional[int] = None) -> Any:
    """Removes and returns the value at `pos` of an array-style tracked table.

    Every element after `pos` moves down one slot (lowest index first), and the
    now-duplicated last slot is cleared. Each changed slot produces one change
    notification.

    Args:
        table: The tracked table.
        pos: The index to remove, in ``[1, length(t)]``. Defaults to
            ``length(t)`` (the last element).

    Returns:
        Any: The raw value that was at `pos`. If it was a table, the original
        dict is returned; it is no longer part of the tracked structure.

    Raises:
        NotTrackedError: If `table` is not a `TrackedTable`.
        InvalidPositionError: If `pos` is not an integer.
        PositionOutOfBoundsError: If `pos` is outside ``[1, length(t)]``
            (including any `pos` on an empty table).
    """
    view = require_tracked(table, "remove")
    n = length(view)
    if pos is None:
        pos = n

    _check_position("remove", pos)
    if not 1 <= pos <= n:
        raise PositionOutOfBoundsError("remove", pos, n)

    logger.debug(f"remove at {pos} from {view.path!r} (length {n})")
    old_value = raw_of(view).get(pos)

    # Shift elements down.
    for index in range(pos, n):
        view[index] = view[index + 1]

    view[n] = None # remove the duplicated last slot
    return old_value


def _check_position(operation: str, pos: Any) -> None:
    if isinstance(pos, bool) or not isinstance(pos, int):
        raise InvalidPositionError(operation, pos)
