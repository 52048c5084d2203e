"""
Tests for the lazily loaded set and its in-place reconciliation.
"""

import time
from datetime import timedelta

import pytest

from lazyload import LazyLoadedSet


def test_creation_does_not_load(string_sets):
    """Test the set is not loaded automatically."""
    string_sets.use("empty")
    cell = LazyLoadedSet(string_sets.load)
    assert not cell.is_loaded()
    assert string_sets.calls == 0


def test_prepopulated_with_empty_set(string_sets):
    """Test the held value is a real empty set before loading."""
    cell = LazyLoadedSet(string_sets.load)
    assert cell._data == set()


def test_creation_with_ttl():
    """Test the set expires once the TTL has passed."""
    cell = LazyLoadedSet(lambda: {"A", "B"}, timedelta(milliseconds=300))
    assert not cell.is_loaded()

    cell.value()
    assert not cell.is_expired()

    time.sleep(0.35)
    assert cell.is_expired()


def test_loading(string_sets):
    """Test the first access loads the backend contents."""
    string_sets.use("A")
    cell = LazyLoadedSet(string_sets.load)
    assert not cell.is_loaded()

    assert cell.values() == string_sets.datasets["A"]
    assert cell.is_loaded()


def test_loading_with_changed_backend(string_sets):
    """Test the cached set ignores backend changes until expired."""
    string_sets.use("A")
    cell = LazyLoadedSet(string_sets.load)
    assert cell.values() == string_sets.datasets["A"]

    string_sets.use("D")
    assert cell.values() != string_sets.datasets["D"]

    cell.expire()
    assert cell.values() == string_sets.datasets["D"]


def test_expiration_and_renew(string_sets):
    """Test renew() revives the cached set without reloading it."""
    string_sets.use("A")
    cell = LazyLoadedSet(string_sets.load)
    original = set(cell.values())

    assert not cell.is_expired()
    cell.expire()
    assert cell.is_expired()

    string_sets.use("D")
    cell.renew()
    assert not cell.is_expired()
    assert cell.values() == original


def test_identity_preserved_across_reloads(string_sets):
    """Test a reload updates the same set object in place."""
    string_sets.use("A")
    cell = LazyLoadedSet(string_sets.load)
    held = cell.values()

    string_sets.use("F")
    cell.load(forceful=True)
    assert cell.values() is held
    assert held == {"F", "G", "H", "I"}


def test_reconcile_same_set_is_noop(string_sets):
    """Test loading identical contents twice leaves the set unchanged."""
    string_sets.use("A")
    cell = LazyLoadedSet(string_sets.load)
    held = cell.values()

    cell.load(forceful=True)
    assert cell.values() is held
    assert held == {"A", "B", "C"}


def test_reconcile_overlapping_set():
    """Test reconciliation removes missing and adds new elements."""
    cell = LazyLoadedSet(lambda: set())
    cell._data.update({1, 2, 3})
    held = cell._data

    cell.apply_data({2, 3, 4})
    assert held == {2, 3, 4}
    assert cell._data is held


def test_reconcile_with_empty_clears(string_sets):
    """Test reconciling against an empty set clears the container."""
    string_sets.use("A")
    cell = LazyLoadedSet(string_sets.load)
    held = cell.values()

    string_sets.use("empty")
    cell.expire()
    assert cell.values() is held
    assert held == set()


def test_apply_data_accepts_iterables():
    """Test frozensets and other iterables reconcile like sets."""
    cell = LazyLoadedSet(lambda: frozenset({"x", "y"}))
    assert cell.values() == {"x", "y"}

    cell.apply_data(["y", "z", "z"])
    assert cell._data == {"y", "z"}


def test_unload_replaces_container(string_sets):
    """Test unload() starts over with a fresh empty set."""
    string_sets.use("A")
    cell = LazyLoadedSet(string_sets.load)
    held = cell.values()

    cell.unload()
    assert not cell.is_loaded()
    assert cell._data == set()
    assert cell._data is not held


def test_iteration_and_stream(string_sets):
    """Test iteration and stream views load and walk the live set."""
    string_sets.use("D")
    cell = LazyLoadedSet(string_sets.load)
    assert sorted(cell) == ["D", "E"]
    assert string_sets.calls == 1

    stream = cell.stream()
    assert sorted(s.lower() for s in stream) == ["d", "e"]
    # Both views are restartable
    assert sorted(cell) == ["D", "E"]
    assert sorted(cell.stream()) == ["D", "E"]
    assert string_sets.calls == 1


def test_contains(string_sets):
    """Test membership checks load the set first."""
    string_sets.use("A")
    cell = LazyLoadedSet(string_sets.load)
    assert "B" in cell
    assert "Z" not in cell
    assert string_sets.calls == 1


def test_iterator_across_resizing_reload_fails_fast():
    """Test set iterators follow Python's rules when the set is resized."""
    data = {"current": {"A", "B", "C"}}
    cell = LazyLoadedSet(lambda: data["current"])
    it = iter(cell)
    next(it)

    data["current"] = {"A"}
    cell.load(forceful=True)
    with pytest.raises(RuntimeError):
        list(it)


def test_copy_iterates_across_reload():
    """Test iterating a copy is unaffected by a reload."""
    data = {"current": {"A", "B", "C"}}
    cell = LazyLoadedSet(lambda: data["current"])
    snapshot = iter(set(cell.values()))

    data["current"] = {"D"}
    cell.load(forceful=True)
    assert sorted(snapshot) == ["A", "B", "C"]
    assert cell.values() == {"D"}
