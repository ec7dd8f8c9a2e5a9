"""Stores the version number for the TableTracker Python library.

This module simply defines the `__version__` constant, which contains the
current version string for the `tabletracker-py` package. This is used during
package building and by the Sphinx configuration.
"""

# The single source of truth for the package version.
__version__ = "0.1.0"
