from __future__ import annotations

from collections import OrderedDict

import pytest

from pydiverse.pairdict import Pair, PairDict
from pydiverse.pairdict.common import *


def test_to_dict(backend):
    pd = PairDict([("a", "A"), ("b", "B")], backend=backend)
    d = pd.to_dict()
    assert d == {"a": "A", "b": "B"}
    assert list(d) == ["b", "a"]
    assert pd >> export(Dict()) == d


def test_to_dict_is_lossless(backend):
    pd = PairDict([(i, i * i) for i in range(10)], backend=backend)
    assert len(pd.to_dict()) == len(pd)
    assert PairDict.from_dict(pd.to_dict(), backend=backend) == pd


def test_from_dict(backend):
    pd = PairDict.from_dict({"a": 1, "b": 2}, backend=backend)
    assert pd.to_list() == [Pair("b", 2), Pair("a", 1)]
    assert pd.left_of(2) == "b"


def test_from_dict_first_wins_on_values(backend):
    pd = PairDict.from_dict(OrderedDict([("x", 0), ("y", 0), ("z", 1)]), backend=backend)
    assert pd.to_dict() == {"z": 1, "x": 0}


def test_from_dict_pair_builder(backend):
    pd = PairDict.from_dict(
        {"lower": "a", "upper": "A"},
        lambda k, v: Pair(v, k),
        backend=backend,
    )
    assert pd.right_of("A") == "upper"
    assert pd.left_of("lower") == "a"


def test_from_dict_invalid():
    with pytest.raises(TypeError, match="parameter `mapping`"):
        PairDict.from_dict([("a", 1)])
    with pytest.raises(TypeError, match="parameter `pair_builder`"):
        PairDict.from_dict({"a": 1}, "pair")


def test_export_list(backend):
    pd = PairDict([(1, "one")], backend=backend)
    assert pd >> export(List()) == [Pair(1, "one")]
    assert pd >> export(ListOfDicts()) == [{"left": 1, "right": "one"}]
    with pytest.raises(TypeError, match="parameter `target`"):
        pd >> export("polars")
