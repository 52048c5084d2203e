"""Pytest configuration for test suite.

Ensures the project root is on ``sys.path`` so imports like
``import lazyload`` resolve correctly regardless of the working directory
pytest chooses, and provides a controllable backend and clock for loaders.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest


def _ensure_project_root_on_syspath() -> None:
    project_root = Path(__file__).resolve().parents[1]
    project_root_str = str(project_root)
    if project_root_str not in sys.path:
        # Prepend to prefer local sources over site-packages
        sys.path.insert(0, project_root_str)


_ensure_project_root_on_syspath()


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class Backend:
    """Switchable data source standing in for a database or API.

    ``use(name)`` selects which named data set the loader returns next;
    ``calls`` counts loader invocations.
    """

    def __init__(self, datasets: dict) -> None:
        self.datasets = datasets
        self.current = None
        self.calls = 0
        self.error = None

    def use(self, name: str) -> None:
        self.current = self.datasets[name]

    def fail_with(self, error: Exception) -> None:
        self.error = error

    def load(self):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.current


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def string_sets() -> Backend:
    return Backend(
        {
            "A": {"A", "B", "C"},
            "D": {"D", "E"},
            "F": {"F", "G", "H", "I"},
            "empty": set(),
        }
    )


@pytest.fixture
def string_maps() -> Backend:
    return Backend(
        {
            "A": {0: "A", 1: "B", 2: "C"},
            "D": {0: "D", 1: "E"},
            "F": {0: "F", 1: "G", 2: "H", 3: "I"},
        }
    )


@pytest.fixture
def strings() -> Backend:
    return Backend({"A": "alpha", "D": "delta", "F": "foxtrot"})
