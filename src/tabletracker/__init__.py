"""TableTracker Python Library (`tabletracker-py`).

TableTracker lets you **watch a nested dictionary change**. You hand it a plain
``dict`` (which may contain more dicts, to any depth) together with a callback,
and it gives you back a tracked view of that data. Every write made through the
view, no matter how deep, calls your callback exactly once with:

*   the full path from the root to the key that changed,
*   the value that was there before,
*   the value that is there now, and
*   the raw dictionary that directly holds the key.

Getting Started:

    1.  **Install:** `pip install tabletracker-py`.
    2.  **Import:** `import tabletracker`.
    3.  **Track:** `state = tabletracker.track({"player": {"hp": 10}}, on_change)`.
    4.  **Mutate through the view:** `state["player"]["hp"] = 7` calls
        `on_change(("player", "hp"), 10, 7, <the player dict>)`.
    5.  **Iterate with the helpers:** use `tabletracker.pairs(state)` and
        `tabletracker.ipairs(state)` instead of a bare `for` loop, and the array
        helpers (`insert`, `remove`, `find`, `clear`, `length`) for list-like
        tables keyed ``1, 2, 3, ...``.

Like a Lua table, a tracked table treats ``None`` as "no value": reading a
missing key gives ``None`` and assigning ``None`` removes the key.
"""

import logging

# --- Version ---
from ._version import __version__

# --- Logging Setup ---
# Configure a logger for the 'tabletracker' package.
# By default, it uses a NullHandler, so applications using this library
# must configure their own logging if they wish to see TableTracker logs.
# Example application setup:
# import logging
# logging.basicConfig(level=logging.DEBUG)
# logging.getLogger("tabletracker").setLevel(logging.DEBUG)
logger = logging.getLogger("tabletracker")
if not logger.hasHandlers():
    logger.addHandler(logging.NullHandler())

# --- Configuration ---
from .config import get_tracked_label, set_tracked_label

# --- Exceptions ---
from .exceptions import (
    TableTrackerError,          # Base class for every error raised by the library.
    NotATableError,             # A table was required but something else was given.
    CallbackNotCallableError,   # The change callback passed to track() is not callable.
    NotTrackedError,            # A tracked table was required but a plain value was given.
    InvalidPathError,           # deep_update() was given an empty or malformed path.
    MissingValueError,          # None was given where a real value is required.
    InvalidPositionError,       # insert()/remove() position is not an integer.
    PositionOutOfBoundsError,   # insert()/remove() position is outside the valid range.
    FrozenTableError,           # Attempted mutation of a get_raw() snapshot.
)

# --- Plain value helpers ---
from .values import FrozenTable, deep_copy, deep_freeze, is_table
from .paths import Path, deep_update

# --- The tracked table itself ---
from .tracked_table import (
    Change,
    ChangeCallback,
    TrackedTable,
    track,
    is_tracked,
    get_path,
    get_raw,
    unwrap,
)

# --- Traversal and array helpers ---
from .iteration import pairs, ipairs
from .array_ops import length, find, clear, insert, remove


__all__ = [
    # Version
    '__version__',

    # Logger (for users who might want to configure it)
    'logger',

    # Configuration
    'get_tracked_label',
    'set_tracked_label',

    # Tracking
    'track',
    'TrackedTable',
    'Change',
    'ChangeCallback',
    'is_tracked',
    'get_path',
    'get_raw',
    'unwrap',

    # Values and paths
    'Path',
    'FrozenTable',
    'is_table',
    'deep_copy',
    'deep_freeze',
    'deep_update',

    # Traversal
    'pairs',
    'ipairs',

    # Array helpers
    'length',
    'find',
    'clear',
    'insert',
    'remove',

    # Error Classes
    'TableTrackerError',
    'NotATableError',
    'CallbackNotCallableError',
    'NotTrackedError',
    'InvalidPathError',
    'MissingValueError',
    'InvalidPositionError',
    'PositionOutOfBoundsError',
    'FrozenTableError',
]
