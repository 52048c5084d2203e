"""Lazily loaded mapping reconciled in place on every reload."""

from __future__ import annotations

from collections.abc import Hashable
from typing import Dict, Iterator, Mapping, Optional, TypeVar

from .loader import LazyLoader

K = TypeVar("K", bound=Hashable)
T = TypeVar("T")


class LazyLoadedMap(LazyLoader[Dict[K, T]]):
    """Key to value mapping whose contents come from a loader function.

    The held ``dict`` keeps its identity across reloads: keys missing from
    the new data are deleted and every new pair is assigned, overwriting
    existing entries. Individual values are replaced, not merged.

    Iteration yields the mapping's values, not its keys. Iterators walk the
    keys present when they were created and read each value as they reach
    it, so they survive a reload: keys removed since are skipped, keys added
    since are not visited, and retained keys yield their current value.
    """

    def prepopulate(self) -> Dict[K, T]:
        return {}

    def apply_data(self, new_data: Mapping[K, T]) -> None:
        """Make the held dict equal to ``new_data`` without replacing it."""
        for key in [k for k in self._data if k not in new_data]:
            del self._data[key]
        self._data.update(new_data)

    def map(self) -> Dict[K, T]:
        """Return the live dict, loading it first if it is expired."""
        return self.value()

    def __iter__(self) -> Iterator[T]:
        return self._iter_values()

    def stream(self) -> Iterator[T]:
        """Return an iterator over the values of the live dict."""
        return self._iter_values()

    def get(self, key: K, default: Optional[T] = None) -> Optional[T]:
        """Return the value for ``key`` after loading, or ``default``."""
        return self.map().get(key, default)

    def _iter_values(self) -> Iterator[T]:
        with self._lock:
            data = self.map()
            keys = list(data)

        def values() -> Iterator[T]:
            for key in keys:
                with self._lock:
                    if key not in data:
                        continue
                    value = data[key]
                yield value

        return values()
