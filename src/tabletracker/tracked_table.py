"""Provides the TrackedTable class, a live change-reporting view of a nested dict.

This module contains `track()`, the entry point of the library, and the
`TrackedTable` class it returns.

How it works:

1.  Wrap your data: `state = tabletracker.track({"a": {"b": 1}}, on_change)`
2.  Read through the view: `state["a"]` is *another* `TrackedTable`, one level
    deeper, whose path is ``("a",)``. Plain values (numbers, strings, ...)
    come back unchanged.
3.  Write through the view: `state["a"]["b"] = 2` stores ``2`` in the raw dict
    and then calls ``on_change(("a", "b"), 1, 2, <the raw {"b": ...} dict>)``.

Key Properties:

*   Views are created lazily, one per read, and never cached. Two reads of
    ``state["a"]`` give two distinct `TrackedTable` objects; both point at the
    same underlying dict and report through the same callback.
*   Only plain data is ever stored. Assigning a tracked view (or any nested
    table) stores a fresh unwrapped copy of it, never the view itself.
*   A write that does not change anything is ignored: no mutation and no
    callback. That covers an equal scalar, and removing a key that is not
    there. A table is always stored as a fresh copy, so writing any table
    (even the one already stored) counts as a change.
*   Callbacks run synchronously, before the assignment returns. A callback that
    writes to the tracked structure re-enters this code on the same call stack.

Note on Limitations:

*   Changes made directly to the raw dict (bypassing the view) are not seen.
*   `unwrap()` and `get_raw()` walk the whole structure without cycle
    detection; a dict that contains itself ends in `RecursionError`.
*   There is no locking. Using one tracked structure from several threads at
    once must be serialized by the caller.
"""

from typing import Any, Callable, Hashable, Iterable, MutableMapping, NamedTuple, Optional

from . import logger
from .config import get_tracked_label
from .exceptions import CallbackNotCallableError, NotATableError, NotTrackedError
from .paths import Path, extend_path, to_path
from .values import FrozenTable, copy_collection, deep_copy, deep_freeze, is_table, same_value

# Type Alias for clarity: the function `track()` calls after every real change.
# It receives (path, old_value, new_value, container).
ChangeCallback = Callable[[Path, Any, Any, MutableMapping[Hashable, Any]], None]


class Change(NamedTuple):
    """A single change notification, as delivered to the change callback.

    The callback receives these four fields as positional arguments, in order.

    Attributes:
        path (Path): Keys from the tracked root down to the key that changed.
        old_value (Any): The raw value stored before the write (``None`` if the
            key was absent).
        new_value (Any): The raw (unwrapped) value stored now (``None`` if the
            key was removed).
        container (MutableMapping): The raw dict that directly holds the key.
    """
    path: Path
    old_value: Any
    new_value: Any
    container: MutableMapping[Hashable, Any]


class TrackedTable:
    """A view of one dict inside a tracked structure.

    Instances are created by `tabletracker.track()` and by reading a nested
    table through another `TrackedTable`; you should not need to construct
    them yourself.

    Supported operations:

    *   ``view[key]`` / ``view.get(key)``: read. Missing keys give ``None``.
        Nested tables come back as new `TrackedTable` views.
    *   ``view[key] = value`` / ``view.set(key, value)``: write and notify.
        Assigning ``None`` removes the key.
    *   ``del view[key]``: same as assigning ``None``.
    *   ``key in view``, ``len(view)`` (the number of keys, see
        `tabletracker.length`).

    A bare ``for`` loop over a view is not supported; use
    `tabletracker.pairs()` or `tabletracker.ipairs()` so nested values come
    back as properly pathed views.
    """
    # --- Internal Attributes ---
    # Names of the attributes the view keeps on itself. Anything else assigned
    # as an attribute is rejected so it is not mistaken for a tracked write.
    _tracked_internal_attrs = ('_raw', '_path', '_on_change')

    def __init__(self, raw: MutableMapping[Hashable, Any], on_change: ChangeCallback, path: Path = ()):
        """Binds a view to `raw`.

        Args:
            raw: The raw dict this view reads from and writes to.
            on_change: The callback shared by every view of the structure.
            path: Keys from the tracked root down to `raw`.
        """
        self._raw: MutableMapping[Hashable, Any] = raw
        self._on_change: ChangeCallback = on_change
        self._path: Path = path

    # --- Reading ---

    def __getitem__(self, key: Hashable) -> Any:
        """Reads `key` from the raw dict.

        Plain values are returned as they are. A nested table is returned as a
        new `TrackedTable` whose path is this view's path plus `key`. Reading
        never changes the data and never calls the callback.
        """
        return self._wrap(self._raw.get(key), extend_path(self._path, key))

    def get(self, key: Hashable) -> Any:
        """Method form of ``view[key]``."""
        return self[key]

    def _wrap(self, inner: Any, path: Path) -> Any:
        if not is_table(inner):
            # Plain values, and views someone stored by hand, come back untouched.
            return inner
        return TrackedTable(inner, self._on_change, path)

    # --- Writing ---

    def __setitem__(self, key: Hashable, value: Any):
        """Stores `value` under `key` and reports the change.

        `value` is unwrapped first, so a tracked view (or any table, list or
        set) is stored as an independent plain copy. Writing ``None`` removes
        the key (even one the dict held ``None`` under) and is a no-op only
        when the key is absent. Any other write is a no-op when the stored
        scalar is the same (see `tabletracker.values.same_value`); a table is
        always a fresh copy, so it always counts as a change. Otherwise the raw
        dict is updated and the callback is called with
        ``(path + (key,), old_value, new_value, raw_dict)`` before this method
        returns. Exceptions raised by the callback propagate to the caller; the
        new value is already stored at that point.
        """
        old_value = self._raw.get(key)
        raw_value = unwrap(value)

        # Avoid firing if nothing changes. A removal only depends on whether
        # the key is present, since the dict may hold None under it.
        if raw_value is None:
            unchanged = key not in self._raw
        else:
            unchanged = same_value(old_value, raw_value)
        if unchanged:
            logger.debug(f"Ignored no-op write at {extend_path(self._path, key)!r}")
            return

        if raw_value is None:
            del self._raw[key]
        else:
            self._raw[key] = raw_value
        self._notify(Change(extend_path(self._path, key), old_value, raw_value, self._raw))

    def __delitem__(self, key: Hashable):
        """Removes `key`; equivalent to ``view[key] = None``."""
        self[key] = None

    def set(self, key: Hashable, value: Any):
        """Method form of ``view[key] = value``."""
        self[key] = value

    def _notify(self, change: Change):
        """Delivers one change to the callback."""
        # Values are left out of the message: they can be arbitrarily large tables.
        logger.debug(f"Notifying change at {change.path!r}")
        self._on_change(*change)

    # --- Introspection ---

    @property
    def path(self) -> Path:
        """The keys leading from the tracked root to this view (read-only)."""
        return self._path

    def __contains__(self, key: Hashable) -> bool:
        return key in self._raw

    def __len__(self) -> int:
        """Total number of keys in the raw dict (see `tabletracker.length`)."""
        return len(self._raw)

    def __iter__(self):
        raise TypeError(
            "TrackedTable does not support direct iteration; "
            "use tabletracker.pairs() or tabletracker.ipairs()"
        )

    def __setattr__(self, name: str, value: Any):
        """Allows only the view's own internal attributes to be set.

        Raises:
            AttributeError: For any other attribute name. Use item assignment
                (``view["name"] = value``) to change tracked data.
        """
        if name in TrackedTable._tracked_internal_attrs:
            object.__setattr__(self, name, value)
        else:
            raise AttributeError(
                f"Cannot set attribute '{name}' on a TrackedTable; "
                f"use item assignment (view[{name!r}] = ...) instead"
            )

    def __repr__(self) -> str:
        """Returns the configured placeholder label, never the contents."""
        return get_tracked_label()

    def __str__(self) -> str:
        return get_tracked_label()


# --- Module-level API ---

def track(raw: Any, on_change: ChangeCallback, path: Optional[Iterable[Hashable]] = None) -> TrackedTable:
    """Starts tracking `raw` and returns a `TrackedTable` view of it.

    Args:
        raw: The dict to observe. It is used in place (not copied); changes
            made through the returned view are made to this very dict.
        on_change: Called as ``on_change(path, old_value, new_value, container)``
            after every write that actually changes something, anywhere in
            the structure.
        path: Optional path of `raw` itself. Defaults to the empty path, i.e.
            `raw` is the root. Reported paths start with these keys.

    Returns:
        TrackedTable: The root view. If `raw` is already a `TrackedTable` it is
        returned unchanged, so tracking twice never stacks views.

    Raises:
        CallbackNotCallableError: If `on_change` is not callable.
        NotATableError: If `raw` is neither a table nor a tracked table.
        InvalidPathError: If `path` is a string or is not iterable.

    Example:
        >>> changes = []
        >>> state = tabletracker.track({"hp": 10}, lambda *c: changes.append(c))
        >>> state["hp"] = 7
        >>> changes[0][:3]
        (('hp',), 10, 7)
    """
    if not callable(on_change):
        raise CallbackNotCallableError(on_change)
    # If it's already a view created by us, return it (avoid double-wrap).
    if isinstance(raw, TrackedTable):
        return raw
    if not is_table(raw):
        raise NotATableError("track", raw)

    logger.debug(f"Tracking a table of {len(raw)} keys at path {to_path(path)!r}")
    return TrackedTable(raw, on_change, to_path(path))


def is_tracked(value: Any) -> bool:
    """Returns True if `value` is a `TrackedTable` view."""
    return isinstance(value, TrackedTable)


def require_tracked(value: Any, operation: str) -> TrackedTable:
    """Returns `value` if it is a tracked table, otherwise raises `NotTrackedError`."""
    if not isinstance(value, TrackedTable):
        raise NotTrackedError(operation, value)
    return value


def raw_of(table: TrackedTable) -> MutableMapping[Hashable, Any]:
    """Returns the live raw dict behind a view. For use inside the library."""
    return require_tracked(table, "raw_of")._raw


def get_path(table: Any) -> Path:
    """Returns the path of a tracked view.

    Raises:
        NotTrackedError: If `table` is not a `TrackedTable`.
    """
    return require_tracked(table, "get_path").path


def unwrap(value: Any) -> Any:
    """Returns `value` as plain data, with no tracked views anywhere inside.

    Scalars are returned unchanged. Lists, sets and tuples are copied with
    each element unwrapped. For a table (or a tracked view, which is replaced
    by the dict it wraps) a brand-new ``dict`` is built and every value is
    unwrapped recursively. The result shares no mutable container with the
    input, so it also works as a general structural clone.

    Note:
        There is no cycle detection; a self-containing dict ends in
        `RecursionError`.
    """
    if isinstance(value, TrackedTable):
        value = value._raw # grab the raw inner dict
    elif not is_table(value):
        return copy_collection(value, unwrap)

    return {key: unwrap(sub) for key, sub in value.items()}


def get_raw(table: Any) -> FrozenTable:
    """Returns a deep-frozen copy of the data behind a tracked view.

    The snapshot is independent: later writes through the view do not show up
    in it, and it cannot be modified (any attempt raises `FrozenTableError`),
    so it is safe to keep around.

    Raises:
        NotTrackedError: If `table` is not a `TrackedTable`.
    """
    view = require_tracked(table, "get_raw")
    return deep_freeze(deep_copy(view._raw))
