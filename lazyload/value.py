"""Scalar lazy loader: each successful load replaces the held value."""

from __future__ import annotations

from typing import TypeVar

from .loader import LazyLoader

T = TypeVar("T")


class LazyLoadedValue(LazyLoader[T]):
    """Lazily loaded scalar (string, number, immutable record, ...).

    Holds ``None`` until the first successful load.
    """
