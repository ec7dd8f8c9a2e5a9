"""Custom exceptions for the TableTracker library.

Every error the library raises on purpose derives from `TableTrackerError`, so
callers can catch the whole family in one place. Each concrete error also
inherits the closest builtin exception (`TypeError`, `ValueError`,
`IndexError`), so code that already handles those generic types keeps working.

All of these are raised immediately at the call site that broke a
precondition. The library never retries, clamps, or silently coerces.
"""

from typing import Any, Optional


class TableTrackerError(Exception):
    """Base class for all errors specific to the TableTracker library.

    Catching this exception is a way to handle any error explicitly raised by
    TableTracker itself, distinguishing it from general Python errors or errors
    raised inside your own change callback.
    """
    pass


class NotATableError(TableTrackerError, TypeError):
    """Raised when an operation needs a table (a mapping) but got something else.

    Attributes:
        operation (str): Name of the function that rejected the value.
        value (Any): The offending value.
    """
    def __init__(self, operation: str, value: Any):
        self.operation = operation
        self.value = value
        super().__init__(
            f"{operation} expects a table (mapping), got {type(value).__name__}"
        )


class CallbackNotCallableError(TableTrackerError, TypeError):
    """Raised when `track()` is given a change callback that cannot be called."""
    def __init__(self, callback: Any):
        self.callback = callback
        super().__init__(
            f"track expects a callable change callback, got {type(callback).__name__}"
        )


class NotTrackedError(TableTrackerError, TypeError):
    """Raised when a tracked-table-only helper receives a plain value.

    Helpers such as `pairs`, `insert` or `get_raw` only work on the object
    returned by `tabletracker.track()`. Passing the raw dictionary instead is
    almost always a bug, so it fails loudly rather than doing nothing.

    Attributes:
        operation (str): Name of the helper that was called.
    """
    def __init__(self, operation: str, value: Any = None):
        self.operation = operation
        self.value = value
        super().__init__(
            f"{operation} expects a tracked table, got {type(value).__name__}"
        )


class InvalidPathError(TableTrackerError, ValueError):
    """Raised when `deep_update()` is given an empty or non-sequence path."""
    pass


class MissingValueError(TableTrackerError, ValueError):
    """Raised when ``None`` is passed where a real value is required.

    ``None`` means "absent" to a tracked table, so searching for it or
    inserting it has no meaning.
    """
    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"{operation} expects a non-None value")


class InvalidPositionError(TableTrackerError, TypeError):
    """Raised when an array position is not an integer (``bool`` is rejected too)."""
    def __init__(self, operation: str, position: Any):
        self.operation = operation
        self.position = position
        super().__init__(
            f"bad argument to '{operation}' (integer position expected, got {type(position).__name__})"
        )


class PositionOutOfBoundsError(TableTrackerError, IndexError):
    """Raised when `insert()` or `remove()` is given a position outside its valid range.

    Valid ranges are ``1 <= pos <= length + 1`` for `insert` and
    ``1 <= pos <= length`` for `remove`.

    Attributes:
        operation (str): ``"insert"`` or ``"remove"``.
        position (int): The position that was requested.
        length (int): The table length at the time of the call.
    """
    def __init__(self, operation: str, position: int, length: int):
        self.operation = operation
        self.position = position
        self.length = length
        super().__init__(
            f"bad argument to '{operation}' (position {position} out of bounds for length {length})"
        )


class FrozenTableError(TableTrackerError, TypeError):
    """Raised on any attempt to modify a snapshot returned by `get_raw()`.

    Attributes:
        key (Optional[Any]): The key involved in the attempted mutation, if any.
    """
    def __init__(self, message: str, key: Optional[Any] = None):
        super().__init__(message)
        self.key = key
