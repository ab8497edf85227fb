from __future__ import annotations

import re

import pytest

from pydiverse.pairdict import Hashed, Pair, PairDict, Scan, UnhashableKeyError
from pydiverse.pairdict._internal.backend.hashed import HashedStore
from pydiverse.pairdict._internal.backend.scan import ScanStore
from pydiverse.pairdict._internal.backend.store import PairStore, without
from pydiverse.pairdict._internal.tree.pair import PAIR_KEYS
from tests.fixtures.backend import skip_backends, with_backends
from tests.util import assert_invariants


class Point:
    """Supports `==` but not `hash`."""

    __hash__ = None

    def __init__(self, x, y):
        self.x, self.y = x, y

    def __eq__(self, other):
        return isinstance(other, Point) and (self.x, self.y) == (other.x, other.y)


@with_backends("scan")
def test_scan_accepts_unhashable_keys(backend):
    pd = PairDict(
        [(Point(0, 0), "origin"), (Point(1, 0), "east"), (Point(0, 0), "zero")],
        backend=backend,
    )
    assert len(pd) == 2
    assert pd.right_of(Point(0, 0)) == "origin"
    assert pd.left_of("east") == Point(1, 0)
    assert pd.remove_left(Point(1, 0)).lefts() == [Point(0, 0)]
    assert pd == PairDict(reversed(pd.to_list()), backend=backend)
    assert_invariants(pd)


@with_backends("scan")
def test_scan_list_keys(backend):
    pd = PairDict([([1, 2], "a"), ([1, 2], "b"), ([3], "c")], backend=backend)
    assert pd.right_of([1, 2]) == "a"
    assert pd.rights() == ["c", "a"]


@skip_backends("scan")
def test_hashed_rejects_unhashable_keys(backend):
    with pytest.raises(UnhashableKeyError, match=re.escape("backend=Scan()")):
        PairDict([(Point(0, 0), "origin")], backend=backend)
    with pytest.raises(TypeError, match="right key of type `list`"):
        PairDict([("a", [1])], backend=backend)
    with pytest.raises(UnhashableKeyError):
        PairDict([("a", 1)], backend=backend).insert(([1], 2))


@skip_backends("scan")
def test_hashed_lookup_of_unhashable_key_misses(backend):
    pd = PairDict([("a", 1)], backend=backend)
    assert pd.access([1]) is None
    assert pd.left_of({"x": 1}) is None
    assert pd.remove_left([1]) is pd
    assert ([1], 1) not in pd


def test_keys_not_equal_to_themselves(backend):
    nan = float("nan")
    pd = PairDict([(nan, "x"), (1, "y")], backend=backend)

    kept = pd.filter(lambda p: p.left == 1)
    assert kept.to_list() == [Pair(1, "y")]
    assert len(kept) == 1
    assert pd.remove_right("x").to_list() == [Pair(1, "y")]

    first, rest = pd.flip().decompose()
    assert first == Pair("y", 1)
    assert len(rest) == 1

    _, rest = PairDict([(1, "y"), (nan, "x")], backend=backend).decompose()
    assert rest.to_list() == [Pair(1, "y")]
    assert len(rest) == 1


def test_store_selection():
    assert isinstance(PairStore.from_backend(None, PAIR_KEYS), HashedStore)
    assert isinstance(PairStore.from_backend(Hashed(), PAIR_KEYS), HashedStore)
    assert isinstance(PairStore.from_backend(Scan(), PAIR_KEYS), ScanStore)


def test_store_sizes(backend):
    pd = PairDict([(i, -i - 1) for i in range(50)], backend=backend)
    assert len(pd) == 50
    pd = pd.remove_left(10).remove_right(-20).remove_left(1000)
    assert len(pd) == 48
    assert len(pd.to_list()) == 48
    _, rest = pd.decompose()
    assert len(rest) == 47


def test_structural_sharing(backend):
    base = PairDict([(i, str(i)) for i in range(5)], backend=backend)
    grown = base.insert((5, "5"))
    # prepending keeps the old pairs as the shared tail
    assert all(a is b for a, b in zip(grown.to_list()[1:], base.to_list()))


def test_without():
    a, b, c = Pair(1, "a"), Pair(2, "b"), Pair(3, "c")
    store = ScanStore.empty(PAIR_KEYS).prepend(a).prepend(b).prepend(c)
    shortened = without(store.items, b)
    assert list(shortened) == [c, a]
    assert shortened.rest is store.items.rest.rest
    assert without(store.items, Pair(2, "b")) is store.items


def test_hashed_indices_stay_in_sync():
    pd = PairDict([(i, str(i)) for i in range(20)])
    pd = pd.filter(lambda p: p.left % 3 != 0).remove_right("4")
    store = pd._store
    assert set(store.by_left.keys()) == set(pd.lefts())
    assert set(store.by_right.keys()) == set(pd.rights())
    assert all(store.by_left[p.left] is p for p in pd)
