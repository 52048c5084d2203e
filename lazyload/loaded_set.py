"""Lazily loaded set reconciled in place on every reload."""

from __future__ import annotations

from typing import AbstractSet, Iterator, Set, TypeVar

from .loader import LazyLoader

T = TypeVar("T")


class LazyLoadedSet(LazyLoader[Set[T]]):
    """Set whose contents come from a loader function.

    The cell owns one ``set`` for its whole lifetime (until ``unload()``).
    Reloads update that set instead of replacing it, so a reference obtained
    from ``values()`` keeps observing the current contents. Callers that need
    a snapshot should copy it.

    Iterators over the set are Python's own set iterators: a reload that
    changes the set's size makes an iterator created before it raise
    ``RuntimeError`` on its next step. Iterate over a copy to read across
    reloads.
    """

    def prepopulate(self) -> Set[T]:
        return set()

    def apply_data(self, new_data: AbstractSet[T]) -> None:
        """Make the held set equal to ``new_data`` without replacing it."""
        items = new_data if isinstance(new_data, (set, frozenset)) else set(new_data)
        self._data.difference_update(self._data - items)
        self._data.update(items - self._data)

    def values(self) -> Set[T]:
        """Return the live set, loading it first if it is expired."""
        return self.value()

    def __iter__(self) -> Iterator[T]:
        return iter(self.values())

    def stream(self) -> Iterator[T]:
        """Return an iterator over the elements of the live set."""
        return iter(self.values())

    def __contains__(self, item: object) -> bool:
        return item in self.values()
