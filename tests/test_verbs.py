from __future__ import annotations

import pytest

from pydiverse.pairdict import Pair, PairDict
from pydiverse.pairdict._internal.pipe.pipeable import Pipeable, inverse_partial
from pydiverse.pairdict.extended import *
from tests.util import assert_equal


@pytest.fixture
def casing(backend):
    return PairDict([("a", "A"), ("b", "B")], backend=backend)


class TestVerbs:
    def test_insert(self, casing):
        result = casing >> insert(("c", "C"), ("c", "D"), ("d", "A"))
        assert_equal(result, [("a", "A"), ("b", "B"), ("c", "C")])

    def test_remove(self, casing):
        assert casing >> remove_left("a", "x") >> export(Dict()) == {"b": "B"}
        assert casing >> remove_right("B") >> export(Dict()) == {"a": "A"}
        assert len(casing >> remove("a", by=lambda p: p.left.lower())) == 1

    def test_remove_round_trip(self, backend):
        pd = PairDict(backend=backend) >> insert(("(", ")")) >> remove_left("(")
        assert pd == PairDict(backend=backend)

    def test_chained_pipeable(self, casing):
        upper_first = flip() >> filter(lambda p: p.left != "A")
        assert isinstance(upper_first, Pipeable)
        assert casing >> upper_first >> export(List()) == [Pair("B", "b")]

    def test_lambda_in_pipe(self, casing):
        assert casing >> (lambda pd: len(pd)) == 2
        assert casing >> (lambda pd: insert(("z", "Z"))) >> export(Dict()) == {
            "z": "Z",
            "b": "B",
            "a": "A",
        }

    def test_invalid_pipe(self, casing):
        with pytest.raises(TypeError, match="invalid type"):
            casing >> 3
        with pytest.raises(TypeError, match="one parameter"):
            casing >> (lambda a, b: a)
        with pytest.raises(TypeError, match="cannot chain"):
            flip() >> 3

    def test_custom_verb(self, casing):
        @verb
        def shift(pd: PairDict, offset: int) -> PairDict:
            return pd >> map(lambda p: Pair(chr(ord(p.left) + offset), p.right))

        assert casing >> shift(2) >> export(Dict()) == {"c": "A", "d": "B"}

    def test_originals_untouched(self, casing):
        before = casing.to_list()
        _ = casing >> insert(("c", "C")) >> remove_left("a") >> flip()
        assert casing.to_list() == before


class TestDispatchers:
    def test_inverse_partial(self):
        def x(a, b, c):
            return (a, b, c)

        assert inverse_partial(x, 1, 2)(0) == (0, 1, 2)
        assert inverse_partial(x, 1, c=2)(0, c=3) == (0, 1, 3)

    def test_verb_returns_pipeable(self):
        assert isinstance(insert(("a", "b")), Pipeable)
