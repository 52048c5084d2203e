"""Keyed family of lazy loaders backed by an LRU cache.

A :class:`LazyLoaderPool` turns a one-argument loader ``loader(key)`` into
one lazily loaded cell per key. Cells are kept in a
:class:`cachetools.LRUCache`, so the pool stays bounded and the
least-recently-used cell is dropped when it is full. Each cell keeps its own
TTL window and lock, which means slow loads for one key do not block reads
of another.
"""

from __future__ import annotations

import functools
import logging
import threading
import time
from collections.abc import Hashable
from typing import Callable, Generic, Optional, Type, TypeVar

from cachetools import LRUCache  # type: ignore[import-untyped]

from .config import LazyLoadSettings, TTLLike, normalize_ttl
from .loader import LazyLoader
from .value import LazyLoadedValue

logger = logging.getLogger(__name__)

K = TypeVar("K", bound=Hashable)
V = TypeVar("V")


class LazyLoaderPool(Generic[K, V]):
    """Bounded pool of per-key lazy loaders.

    Parameters
    ----------
    loader: Callable[[K], V]
        Function producing the value for a key. May raise.
    ttl: TTLLike
        TTL applied to every cell in the pool.
    maxsize: int
        Maximum number of cells retained.
    cell_class: Type[LazyLoader]
        Cell type created for each key. Defaults to :class:`LazyLoadedValue`.
    name: Optional[str]
        Prefix for the cell names used in log records.
    """

    def __init__(
        self,
        loader: Callable[[K], V],
        ttl: TTLLike = None,
        *,
        maxsize: int = 1024,
        cell_class: Type[LazyLoader] = LazyLoadedValue,
        name: Optional[str] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.name = name or type(self).__name__
        self._loader = loader
        self._ttl = normalize_ttl(ttl)
        self._cell_class = cell_class
        self._clock = clock
        self._cells: LRUCache[K, LazyLoader[V]] = LRUCache(maxsize=maxsize)
        self._lock = threading.Lock()

    @classmethod
    def from_settings(
        cls, loader: Callable[[K], V], settings: LazyLoadSettings, **kwargs
    ) -> "LazyLoaderPool[K, V]":
        """Build a pool using the default TTL and size from ``settings``."""
        return cls(
            loader,
            settings.default_ttl_seconds,
            maxsize=settings.pool_maxsize,
            **kwargs,
        )

    @property
    def maxsize(self) -> int:
        return int(self._cells.maxsize)

    def cell(self, key: K) -> LazyLoader[V]:
        """Return the cell for ``key``, creating it (unloaded) if needed."""
        with self._lock:
            cell = self._cells.get(key)
            if cell is None:
                cell = self._cell_class(
                    functools.partial(self._loader, key),
                    self._ttl,
                    name=f"{self.name}[{key!r}]",
                    clock=self._clock,
                )
                self._cells[key] = cell
                logger.debug(
                    "lazy_loader_pool.cell_created",
                    extra={"pool": self.name, "size": len(self._cells)},
                )
            return cell

    def get(self, key: K) -> V:
        """Return the value for ``key``, loading it if expired.

        Raises
        ------
        LoadError
            If the loader failed for this key.
        """
        return self.cell(key).value()

    def expire(self, key: K) -> None:
        """Expire the cell for ``key`` if the pool holds one."""
        with self._lock:
            cell = self._cells.get(key)
        if cell is not None:
            cell.expire()

    def expire_all(self) -> None:
        """Expire every cell currently held."""
        with self._lock:
            cells = list(self._cells.values())
        for cell in cells:
            cell.expire()

    def discard(self, key: K) -> None:
        """Drop the cell for ``key`` together with its value."""
        with self._lock:
            self._cells.pop(key, None)

    def __contains__(self, key: object) -> bool:
        with self._lock:
            return key in self._cells

    def __len__(self) -> int:
        with self._lock:
            return len(self._cells)
