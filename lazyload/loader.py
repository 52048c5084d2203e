"""Generic lazily loaded, TTL-expiring value cell.

A :class:`LazyLoader` defers calling its loader function until the value is
first requested, keeps the result for a configurable time-to-live and calls
the loader again on the first access after the value has expired. Nothing
refreshes in the background: expiry is only noticed when someone asks.

Every read and write of the cell state goes through a single per-instance
re-entrant lock, and the loader runs while that lock is held. Concurrent
callers of an expired cell therefore block until one of them has finished
loading, and the loader runs at most once for the whole group.

Subclasses customize behavior through four hooks:

- ``prepopulate()``: initial value, also used by ``unload()``
- ``apply_data(new_data)``: how a freshly loaded value is stored
- ``report_load_error(exc)``: notified before a load failure is raised
- ``on_expiration()``: notified when the cell is expired
"""

from __future__ import annotations

import logging
import math
import threading
import time
from datetime import timedelta
from enum import Enum
from typing import Callable, Generic, Optional, TypeVar

from .config import LoaderConfig, TTLLike, normalize_ttl
from .errors import LoadError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class LoaderState(Enum):
    """Lifecycle states of a lazy loader."""

    UNLOADED = "unloaded"  # Never loaded, expired manually, or a non-stale load failed
    FRESH = "fresh"  # Loaded and within its TTL
    STALE = "stale"  # Loaded but past its TTL; reloads on next access


class LazyLoader(Generic[T]):
    """Lazily loaded value with optional time-to-live.

    Parameters
    ----------
    loader: Callable[[], T]
        Zero-argument function producing the value. May raise.
    ttl: TTLLike
        ``timedelta`` or seconds the value stays fresh after a successful
        load. ``None`` loads once and never expires on its own.
    name: Optional[str]
        Label used in log records and errors. Defaults to the class name.
    clock: Callable[[], float]
        Monotonic clock in seconds. Defaults to ``time.monotonic``.
    """

    def __init__(
        self,
        loader: Callable[[], T],
        ttl: TTLLike = None,
        *,
        name: Optional[str] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.name = name or type(self).__name__
        self._loader = loader
        self._ttl = normalize_ttl(ttl)
        self._clock = clock
        self._expiration: Optional[float] = None
        self._lock = threading.RLock()
        self._data: T = self.prepopulate()

    @classmethod
    def from_config(cls, loader: Callable[[], T], config: LoaderConfig, **kwargs):
        """Build a loader from a :class:`LoaderConfig`."""
        return cls(loader, config.ttl, name=config.name, **kwargs)

    @property
    def ttl(self) -> Optional[timedelta]:
        """Configured time-to-live, or ``None`` for no expiry."""
        return self._ttl

    @property
    def state(self) -> LoaderState:
        """Current lifecycle state."""
        with self._lock:
            if self._expiration is None:
                return LoaderState.UNLOADED
            if self.is_expired():
                return LoaderState.STALE
            return LoaderState.FRESH

    # -- hooks -------------------------------------------------------------

    def prepopulate(self) -> T:
        """Return the value held before the first load and after ``unload()``."""
        return None  # type: ignore[return-value]

    def apply_data(self, new_data: T) -> None:
        """Store a freshly loaded value. Replaces the current one by default."""
        self._data = new_data

    def report_load_error(self, exc: Exception) -> None:
        """Called with the loader's exception before ``LoadError`` is raised."""

    def on_expiration(self) -> None:
        """Called whenever the cell is expired."""

    # -- operations --------------------------------------------------------

    def load(self, forceful: bool = False) -> None:
        """Call the loader if the value is expired, or always when ``forceful``.

        Raises
        ------
        LoadError
            If the loader (or ``apply_data``) raised. The previously loaded
            value is kept. A stale cell stays stale; any other cell is left
            unloaded. Either way the next access retries.
        """
        with self._lock:
            if not (forceful or self.is_expired()):
                return

            was_stale = self._expiration is not None and self.is_expired()
            started = self._clock()
            try:
                self.apply_data(self._loader())
            except Exception as exc:
                if not was_stale:
                    self._expiration = None
                logger.warning(
                    "lazy_loader.load_failed",
                    extra={"loader": self.name, "error": str(exc)},
                    exc_info=True,
                )
                self.report_load_error(exc)
                raise LoadError(self.name, exc) from exc

            self.renew()
            logger.debug(
                "lazy_loader.loaded",
                extra={
                    "loader": self.name,
                    "forceful": forceful,
                    "duration_ms": round((self._clock() - started) * 1000, 3),
                },
            )

    def value(self) -> T:
        """Return the loaded value, loading it first if it is expired."""
        with self._lock:
            self.load(False)
            return self._data

    def expire(self) -> None:
        """Mark the value as unloaded without discarding it."""
        with self._lock:
            self._expiration = None
            self.on_expiration()
        logger.debug("lazy_loader.expired", extra={"loader": self.name})

    def unload(self) -> None:
        """Reset the value to ``prepopulate()`` and expire the cell."""
        with self._lock:
            self._data = self.prepopulate()
            self.expire()

    def renew(self) -> None:
        """Restart the TTL window from now without calling the loader."""
        with self._lock:
            if self._ttl is None:
                self._expiration = math.inf
            else:
                self._expiration = self._clock() + self._ttl.total_seconds()

    def is_loaded(self) -> bool:
        """Return True once a load has succeeded and the cell was not expired."""
        with self._lock:
            return self._expiration is not None

    def is_expired(self) -> bool:
        """Return True if the next access would call the loader.

        Read without the lock: another thread may reload the cell right after
        this returns.
        """
        expiration = self._expiration
        return expiration is None or expiration <= self._clock()

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(name={self.name!r}, ttl={self._ttl!r}, "
            f"state={self.state.value})"
        )
