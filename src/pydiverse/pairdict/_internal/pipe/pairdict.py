# Copyright (c) QuantCo and pydiverse contributors 2025-2025
# SPDX-License-Identifier: BSD-3-Clause

from __future__ import annotations

import functools
import inspect
from collections.abc import Callable, Iterable, Iterator, Mapping
from typing import Any, Generic, Literal, TypeVar

import structlog

from pydiverse.pairdict._internal import errors
from pydiverse.pairdict._internal.backend.store import PairStore
from pydiverse.pairdict._internal.backend.targets import Backend, Hashed
from pydiverse.pairdict._internal.pipe.pipeable import Pipeable
from pydiverse.pairdict._internal.tree.pair import PAIR_KEYS, Keys, Pair, as_pair

L = TypeVar("L")
R = TypeVar("R")
A = TypeVar("A")

Side = Literal["left", "right"]

logger = structlog.get_logger(__name__)


class PairDict(Generic[L, R]):
    """
    A collection of pairs that can be searched by their left or by their right key.

    No left key and no right key occurs twice in a pair dict. Inserting a pair whose
    left or right key is already taken leaves the pair dict unchanged, so the first
    pair placed at a key always wins.

    A pair dict is an immutable value. All methods that add or remove pairs return a
    new pair dict and leave the original untouched.
    """

    __slots__ = ["_store"]

    def __init__(
        self,
        pairs: Iterable[Pair[L, R] | tuple[L, R]] = (),
        *,
        keys: Keys | None = None,
        backend: Backend | None = None,
    ):
        """
        Creates a new pair dict by inserting `pairs` from first to last.

        :param pairs:
            The pairs to insert. Plain 2-tuples are converted to `Pair`. If a later
            pair shares its left or right key with an earlier one, the later pair is
            dropped.

        :param keys:
            The key projections. By default the `left` and `right` fields of a `Pair`
            are the keys. Pass custom `Keys` to use arbitrary records as pairs.

        :param backend:
            The storage backend, either `Hashed()` (the default, requires hashable
            keys) or `Scan()` (keys only need to support `==`).

        Examples
        --------
        >>> d = PairDict([("a", "A"), ("b", "B"), ("b", "C")])
        >>> d
        PairDict([Pair('b', 'B'), Pair('a', 'A')])
        >>> d.access("b").right
        'B'
        >>> d.access("A", by="right").left
        'a'
        """

        errors.check_arg_type(Keys | None, "PairDict.__init__", "keys", keys)
        errors.check_arg_type(Backend | None, "PairDict.__init__", "backend", backend)
        if isinstance(pairs, PairDict | Mapping | str):
            raise TypeError(
                f"`PairDict.__init__` expects an iterable of pairs, found "
                f"`{type(pairs).__name__}` instead\n"
                "hint: Use `PairDict.from_dict` to build a pair dict from a mapping."
            )

        store = PairStore.from_backend(backend, PAIR_KEYS if keys is None else keys)
        for pair in pairs:
            store = insert_into(store, pair)
        object.__setattr__(self, "_store", store)

    @classmethod
    def _from_store(cls, store: PairStore) -> PairDict:
        pd = object.__new__(cls)
        object.__setattr__(pd, "_store", store)
        return pd

    @classmethod
    def empty(
        cls, keys: Keys | None = None, backend: Backend | None = None
    ) -> PairDict:
        return cls((), keys=keys, backend=backend)

    @classmethod
    def from_list(
        cls,
        pairs: Iterable[Pair[L, R] | tuple[L, R]],
        *,
        keys: Keys | None = None,
        backend: Backend | None = None,
    ) -> PairDict[L, R]:
        return cls(pairs, keys=keys, backend=backend)

    @classmethod
    def from_dict(
        cls,
        mapping: Mapping,
        pair_builder: Callable[[Any, Any], Any] | None = None,
        *,
        keys: Keys | None = None,
        backend: Backend | None = None,
    ) -> PairDict:
        """
        Builds a pair dict from the items of a one-directional mapping.

        Every `(key, value)` item is passed to `pair_builder` (`Pair` by default) and
        inserted in the iteration order of the mapping. Since the keys of a mapping
        are unique, only equal values can cause items to be dropped, in which case
        the item that comes first in the mapping wins.

        >>> PairDict.from_dict({"a": 1, "b": 1}).to_dict()
        {'a': 1}
        """

        errors.check_arg_type(Mapping, "PairDict.from_dict", "mapping", mapping)
        if pair_builder is None:
            pair_builder = Pair
        else:
            errors.check_callable("PairDict.from_dict", "pair_builder", pair_builder)
        return cls(
            (pair_builder(k, v) for k, v in mapping.items()), keys=keys, backend=backend
        )

    @classmethod
    def decode(
        cls,
        data: Any,
        pair_decoder: Callable[[Any], Any] | None = None,
        *,
        keys: Keys | None = None,
        backend: Backend | None = None,
    ) -> PairDict:
        """
        Rebuilds a pair dict from a sequence of encoded pair records.

        :param data:
            A list of records as produced by `encode`, or a polars data frame whose
            rows are the records.

        :param pair_decoder:
            Turns one record into a pair. Defaults to `pair_decoder()`, which accepts
            mappings with the fields `left` and `right` as well as 2-element lists.

        :raises DecodeError:
            If `data` is not a sequence or one of its records cannot be decoded. The
            error message names the index and field where decoding failed.
        """

        from pydiverse.pairdict._internal.codec import records

        return cls.from_list(
            records.decode_records(data, pair_decoder), keys=keys, backend=backend
        )

    @classmethod
    def from_json(
        cls,
        text: str | bytes,
        pair_decoder: Callable[[Any], Any] | None = None,
        *,
        keys: Keys | None = None,
        backend: Backend | None = None,
    ) -> PairDict:
        from pydiverse.pairdict._internal.codec import records

        return cls.decode(
            records.parse_json(text), pair_decoder, keys=keys, backend=backend
        )

    @property
    def projections(self) -> Keys:
        return self._store.keys

    @property
    def backend(self) -> Backend:
        return self._store.backend()

    def insert(self, pair: Pair[L, R] | tuple[L, R]) -> PairDict[L, R]:
        """
        Adds `pair` as the most recent pair.

        If the left key or the right key of `pair` is already used by another pair,
        the pair dict is returned unchanged.

        >>> PairDict([("a", "A")]).insert(("a", "B")) == PairDict([("a", "A")])
        True
        """

        store = insert_into(self._store, pair)
        if store is self._store:
            return self
        return PairDict._from_store(store)

    def access(self, key: Any, by: Side | Callable[[Any], Any] = "left") -> Any | None:
        """
        Returns the pair whose key selected by `by` equals `key`, or `None`.

        `by` is ``"left"``, ``"right"`` or any function mapping a pair to a key. For
        an arbitrary function several pairs may match, in which case the most recent
        one is returned.
        """

        if isinstance(by, str):
            errors.check_literal_type(["left", "right"], "PairDict.access", "by", by)
            return self._store.find(by, key)
        errors.check_callable("PairDict.access", "by", by)
        return self._store.find_by(by, key)

    def right_of(self, left: L) -> R | None:
        pair = self._store.find("left", left)
        return None if pair is None else self.projections.right(pair)

    def left_of(self, right: R) -> L | None:
        pair = self._store.find("right", right)
        return None if pair is None else self.projections.left(pair)

    def decompose(self) -> tuple[Any, PairDict[L, R]] | None:
        """
        Splits off the most recent pair.

        Returns `None` for an empty pair dict, otherwise a tuple of the most recent
        pair and a pair dict holding all other pairs.
        """

        if len(self._store) == 0:
            return None
        return self._store.first(), PairDict._from_store(self._store.rest())

    def fold(self, combine: Callable[[A, Any], A], initial: A) -> A:
        """
        Reduces the pairs from the most recent to the least recent one.

        >>> PairDict([(1, "x"), (2, "y")]).fold(lambda acc, p: acc + [p.left], [])
        [2, 1]
        """

        errors.check_callable("PairDict.fold", "combine", combine)
        return functools.reduce(combine, self._store, initial)

    def remove(self, key: Any, by: Side | Callable[[Any], Any]) -> PairDict[L, R]:
        """
        Removes every pair whose key selected by `by` equals `key`.

        With ``"left"`` or ``"right"`` at most one pair is removed. With an arbitrary
        function this acts like a filter over all matching pairs.
        """

        if isinstance(by, str):
            errors.check_literal_type(["left", "right"], "PairDict.remove", "by", by)
            pair = self._store.find(by, key)
            if pair is None:
                return self
            return PairDict._from_store(self._store.discard(pair))

        errors.check_callable("PairDict.remove", "by", by)
        store = self._store.discard_by(by, key)
        if store is self._store:
            return self
        return PairDict._from_store(store)

    def remove_left(self, left: L) -> PairDict[L, R]:
        return self.remove(left, "left")

    def remove_right(self, right: R) -> PairDict[L, R]:
        return self.remove(right, "right")

    def filter(self, predicate: Callable[[Any], bool]) -> PairDict[L, R]:
        errors.check_callable("PairDict.filter", "predicate", predicate)
        store = self._store
        for pair in self._store:
            if not predicate(pair):
                store = store.discard(pair)
        if store is self._store:
            return self
        return PairDict._from_store(store)

    def equal(self, other: PairDict) -> bool:
        """
        Checks whether both pair dicts hold the same pairs, in any order.

        The pairs of `other` are taken apart from the most recent one. Each is
        looked up by its left key in what remains of `self`, and the match is removed
        before the next pair is looked up.
        """

        errors.check_arg_type(PairDict, "PairDict.equal", "other", other)
        if len(self) != len(other):
            return False

        remaining = self._store
        for pair in other._store:
            match = remaining.find("left", other.projections.left(pair))
            if match is None:
                return False
            if remaining.keys.right(match) != other.projections.right(pair):
                return False
            remaining = remaining.discard(match)
        return len(remaining) == 0

    def union(self, to_insert: PairDict) -> PairDict[L, R]:
        """
        Inserts all pairs of `to_insert` into this pair dict.

        The pairs already in `self` win every conflict. The pairs of `to_insert` are
        inserted from its most recent to its least recent pair.

        >>> ops = PairDict([("-", "negate"), ("∧", "and")])
        >>> PairDict([("-", "minus")]).union(ops).right_of("-")
        'minus'
        """

        errors.check_arg_type(PairDict, "PairDict.union", "to_insert", to_insert)
        store = self._store
        for pair in to_insert._store:
            store = insert_into(store, pair)
        if store is self._store:
            return self
        return PairDict._from_store(store)

    def map(
        self, transform: Callable[[Any], Any], keys: Keys | None = None
    ) -> PairDict:
        """
        Applies `transform` to every pair and inserts the results into a new pair dict.

        The pairs are processed from the most recent to the least recent one. When two
        results share a left or right key, only the first processed one is kept, so
        the result can hold fewer pairs than the source.

        :param keys:
            The key projections of the result, `PAIR_KEYS` by default.
        """

        errors.check_callable("PairDict.map", "transform", transform)
        errors.check_arg_type(Keys | None, "PairDict.map", "keys", keys)
        store = PairStore.from_backend(
            self._store.backend(), PAIR_KEYS if keys is None else keys
        )
        for pair in self._store:
            store = insert_into(store, transform(pair), event="pair coalesced by map")
        return PairDict._from_store(store)

    def flip(self) -> PairDict:
        """
        Swaps the roles of left and right, keeping the order of the pairs.

        Plain pairs are swapped, records with custom keys keep their shape and get the
        two key projections exchanged.
        """

        keys = self.projections
        if keys.is_pair_keys():
            flipped = [pair.swap() for pair in self._store]
        else:
            keys = keys.swap()
            flipped = list(self._store)

        store = PairStore.from_backend(self._store.backend(), keys)
        for pair in reversed(flipped):
            store = store.prepend(pair)
        return PairDict._from_store(store)

    def to_dict(self) -> dict:
        """
        Returns a dict from left keys to right keys in traversal order.
        """

        left, right = self.projections.left, self.projections.right
        return {left(pair): right(pair) for pair in self._store}

    def to_list(self) -> list:
        return list(self._store)

    def lefts(self) -> list[L]:
        return [self.projections.left(pair) for pair in self._store]

    def rights(self) -> list[R]:
        return [self.projections.right(pair) for pair in self._store]

    def encode(self, pair_encoder: Callable[[Any], Any] | None = None) -> list:
        """
        Encodes the pairs as a list of records, most recent pair first.

        :param pair_encoder:
            Turns one pair into a record. Defaults to `pair_encoder(keys=...)` with the
            key projections of this pair dict, which produces
            ``{"left": ..., "right": ...}`` from the two keys.

        The result can be read back with `PairDict.decode`. The decoded pair dict is
        equal to this one.
        """

        from pydiverse.pairdict._internal.codec import records

        return records.encode_records(self._store, pair_encoder, self.projections)

    def to_json(self, pair_encoder: Callable[[Any], Any] | None = None, **kwargs) -> str:
        from pydiverse.pairdict._internal.codec import records

        return records.dump_json(self.encode(pair_encoder), **kwargs)

    def __len__(self) -> int:
        return len(self._store)

    def __bool__(self) -> bool:
        return len(self._store) > 0

    def __iter__(self) -> Iterator[Any]:
        return iter(self._store)

    def __contains__(self, pair: Any) -> bool:
        keys = self.projections
        if keys.is_pair_keys():
            if not (isinstance(pair, tuple) and len(pair) == 2):
                return False
            pair = as_pair(pair, keys)

        try:
            left, right = keys.left(pair), keys.right(pair)
        except (AttributeError, KeyError, IndexError, TypeError):
            # not a record the key projections can read
            return False
        match = self._store.find("left", left)
        return match is not None and keys.right(match) == right

    def __eq__(self, other) -> bool:
        if not isinstance(other, PairDict):
            return NotImplemented
        return self.equal(other)

    __hash__ = None

    def __setattr__(self, name, value):
        raise AttributeError(
            f"cannot assign to attribute `{name}` of `PairDict`\n"
            "hint: A pair dict is immutable. Methods like `insert` return a new pair "
            "dict."
        )

    def __delattr__(self, name):
        raise AttributeError(f"cannot delete attribute `{name}` of `PairDict`")

    def __reduce__(self):
        oldest_first = list(reversed(self.to_list()))
        return _restore, (oldest_first, self.projections, self.backend)

    def __rshift__(self, rhs) -> Any:
        """
        The pipe operator for chaining verbs.
        """

        if isinstance(rhs, Pipeable):
            return rhs(self)
        if isinstance(rhs, Callable):
            num_params = len(inspect.signature(rhs).parameters)
            if num_params != 1:
                raise TypeError(
                    "only functions with one parameter can be used in a pipe, got "
                    f"function with {num_params} parameters."
                )
            res = rhs(self)
            return self >> res if isinstance(res, Pipeable) else res

        raise TypeError(
            f"found instance of invalid type `{type(rhs)}` in the pipe. \n"
            "hint: You can use a verb or a Callable taking a single argument in a "
            "pipe. If you use a Callable, it will receive the current pair dict and "
            "may return a verb or any other value."
        )

    def __repr__(self) -> str:
        args = "[" + ", ".join(repr(pair) for pair in self._store) + "]"
        if not self.projections.is_pair_keys():
            args += f", keys={self.projections!r}"
        if not isinstance(self.backend, Hashed):
            args += f", backend={self.backend!r}"
        return f"PairDict({args})"

    def _repr_pretty_(self, p, cycle):
        p.text(repr(self) if not cycle else "...")


def insert_into(
    store: PairStore, pair: Any, *, event: str = "insert rejected"
) -> PairStore:
    item = as_pair(pair, store.keys)
    side = store.conflict(item)
    if side is None:
        return store.prepend(item)

    logger.debug(
        event,
        side=side,
        pair=item,
        existing=store.find(side, store.keys.select(side)(item)),
    )
    return store


def _restore(pairs: list, keys: Keys, backend: Backend) -> PairDict:
    return PairDict(pairs, keys=keys, backend=backend)
