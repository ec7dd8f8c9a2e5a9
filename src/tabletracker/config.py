"""Process-wide settings for the TableTracker library.

Currently this holds a single setting: the placeholder label a tracked table
shows when it is printed. Tracked tables never render their contents, so that
logs and tracebacks do not leak (possibly large) nested data; the label is what
you see instead.
"""

from typing import Optional

DEFAULT_TRACKED_LABEL = "[TrackedTable]"

# --- User-defined label Management ---

# This global variable stores the label if the user explicitly sets one
# using tabletracker.set_tracked_label(). If None, DEFAULT_TRACKED_LABEL is used.
_user_tracked_label: Optional[str] = None


def get_tracked_label() -> str:
    """Returns the text that `repr()`/`str()` of a tracked table produces.

    Returns:
        str: The user-set label, or `DEFAULT_TRACKED_LABEL` if none was set.
    """
    if _user_tracked_label is None:
        return DEFAULT_TRACKED_LABEL
    return _user_tracked_label


def set_tracked_label(label: Optional[str]) -> None:
    """Sets or clears the placeholder label used when printing tracked tables.

    Args:
        label (Optional[str]): The new label (e.g., "<state>"). If `None`, any
            previously set label is cleared and the default is used again.

    Raises:
        ValueError: If `label` is not `None` and is not a non-empty string.

    Example:
        >>> tabletracker.set_tracked_label("<game state>")
        >>> print(tabletracker.track({}, on_change))
        <game state>
    """
    global _user_tracked_label
    if label is not None:
        if not isinstance(label, str) or not label:
            raise ValueError(
                "Invalid label provided to tabletracker.set_tracked_label(). "
                "Label must be a non-empty string or None."
            )
    _user_tracked_label = label
