"""Error types raised by lazy loaders."""

from __future__ import annotations

from typing import Optional


class LoadError(Exception):
    """Raised when a loader function fails during a triggered load.

    The original exception is available both as ``__cause__`` (the error is
    raised ``from`` it) and as the ``cause`` attribute.

    Attributes
    ----------
    loader_name: str
        Name of the cell whose loader failed.
    cause: Optional[BaseException]
        Exception raised by the loader function.
    """

    def __init__(self, loader_name: str, cause: Optional[BaseException] = None):
        self.loader_name = loader_name
        self.cause = cause
        detail = f": {cause!r}" if cause is not None else ""
        super().__init__(f"Loader '{loader_name}' failed{detail}")
