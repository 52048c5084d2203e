"""
Lazily loaded, TTL-expiring value cells.

A cell defers calling its loader until the value is first read, keeps the
result for a time-to-live and reloads on the first read after expiry. The
set and map variants reconcile reloaded data into the container they already
hold, so references handed out earlier stay live.
"""

from .__version__ import __version__
from .config import LazyLoadSettings, LoaderConfig, normalize_ttl
from .errors import LoadError
from .loaded_map import LazyLoadedMap
from .loaded_set import LazyLoadedSet
from .loader import LazyLoader, LoaderState
from .pool import LazyLoaderPool
from .value import LazyLoadedValue

__all__ = [
    "__version__",
    "LazyLoader",
    "LazyLoadedMap",
    "LazyLoadedSet",
    "LazyLoadedValue",
    "LazyLoaderPool",
    "LazyLoadSettings",
    "LoadError",
    "LoaderConfig",
    "LoaderState",
    "normalize_ttl",
]
