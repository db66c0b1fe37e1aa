"""Extension layer — component discovery strategies via pluggy.

Discovery: entry_points (pip-installed) via pluggy setuptools entrypoints.
INVARIANT: A strategy that fails to load is a warning, never an error.
"""

from archmodel.plugins.hookspecs import hookimpl
from archmodel.plugins.manager import PluginManager

__all__ = ["PluginManager", "hookimpl"]
