"""Typed access to persisted key-value preference scopes.

Modules are intentionally lightweight and do not touch the filesystem on
import; stores are opened explicitly through :mod:`typed_prefs.scopes`.
"""

from .preferences import Preferences
from .values import Long, PrefKind

__all__ = [
    "Long",
    "PrefKind",
    "Preferences",
    "__version__",
]

__version__ = "0.1.0"
