# Copyright (c) QuantCo and pydiverse contributors 2025-2025
# SPDX-License-Identifier: BSD-3-Clause

from __future__ import annotations

import dataclasses
from collections.abc import Callable, Hashable
from typing import Any, Generic, NamedTuple, TypeVar

L = TypeVar("L")
R = TypeVar("R")


class Pair(NamedTuple, Generic[L, R]):
    left: L
    right: R

    def __repr__(self) -> str:
        return f"Pair({self.left!r}, {self.right!r})"

    def swap(self) -> Pair[R, L]:
        return Pair(self.right, self.left)


def left_of(pair: Pair) -> Any:
    return pair.left


def right_of(pair: Pair) -> Any:
    return pair.right


@dataclasses.dataclass(frozen=True, slots=True)
class Keys:
    """
    The two key projections of a pair dict.

    `left` and `right` extract the keys that must be unique among all pairs in a
    collection. For plain `Pair` values these are the two fields; for richer records
    any two pure functions may be used, in which case the remaining fields of the
    record are carried along but play no role in deduplication or lookup.

    Examples
    --------
    >>> Person = namedtuple("Person", ["name", "email", "age"])
    >>> keys = Keys(lambda p: p.name, lambda p: p.email)
    >>> d = PairDict.from_list([Person("ann", "ann@x.org", 31)], keys=keys)
    >>> d.access("ann@x.org", by="right").age
    31
    """

    left: Callable[[Any], Any]
    right: Callable[[Any], Any]

    def swap(self) -> Keys:
        return Keys(self.right, self.left)

    def select(self, by: str | Callable[[Any], Any]) -> Callable[[Any], Any]:
        if by == "left":
            return self.left
        if by == "right":
            return self.right
        return by

    def is_pair_keys(self) -> bool:
        return self == PAIR_KEYS

    def __repr__(self) -> str:
        if self.is_pair_keys():
            return "PAIR_KEYS"
        return f"Keys(left={_fn_name(self.left)}, right={_fn_name(self.right)})"


PAIR_KEYS = Keys(left_of, right_of)


def as_pair(item: Any, keys: Keys) -> Any:
    # Only plain pair dicts coerce tuples, custom keys get the records unchanged.
    if keys.is_pair_keys() and not isinstance(item, Pair):
        if not isinstance(item, tuple) or len(item) != 2:
            raise TypeError(
                "a pair must be a `Pair` or a tuple of length 2, found "
                f"`{type(item).__name__}` instead"
            )
        return Pair(*item)
    return item


def is_hashable(key: Any) -> bool:
    if not isinstance(key, Hashable):
        return False
    try:
        hash(key)
    except TypeError:
        return False
    return True


def _fn_name(fn: Callable) -> str:
    return getattr(fn, "__qualname__", None) or repr(fn)
