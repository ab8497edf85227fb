# Copyright (c) QuantCo and pydiverse contributors 2025-2025
# SPDX-License-Identifier: BSD-3-Clause

from __future__ import annotations

from collections.abc import Iterator
from typing import Any, Literal

from pyrsistent import PList, PMap, plist, pmap

from pydiverse.pairdict._internal.backend.store import PairStore, without
from pydiverse.pairdict._internal.backend.targets import Hashed
from pydiverse.pairdict._internal.errors import UnhashableKeyError
from pydiverse.pairdict._internal.tree.pair import Keys, is_hashable


class HashedStore(PairStore):
    """
    Keeps one hash map per side next to the traversal order.

    The maps always hold exactly the pairs in `order`, so a lookup in either map
    answers the same question as a scan of `order` would. Unhashable keys are
    rejected when a pair is prepended; looking one up is a miss.
    """

    __slots__ = ["by_left", "by_right", "order"]

    def __init__(self, keys: Keys, by_left: PMap, by_right: PMap, order: PList):
        self.keys = keys
        self.by_left = by_left
        self.by_right = by_right
        self.order = order

    @classmethod
    def empty(cls, keys: Keys) -> HashedStore:
        return cls(keys, pmap(), pmap(), plist())

    def backend(self) -> Hashed:
        return Hashed()

    def __iter__(self) -> Iterator[Any]:
        return iter(self.order)

    def __len__(self) -> int:
        return len(self.by_left)

    def first(self) -> Any:
        return self.order.first

    def rest(self) -> HashedStore:
        return self._unlink(self.order.first, self.order.rest)

    def find(self, side: Literal["left", "right"], key: Any) -> Any | None:
        # an unhashable key is never stored here
        if not is_hashable(key):
            return None
        index = self.by_left if side == "left" else self.by_right
        return index.get(key)

    def prepend(self, item: Any) -> HashedStore:
        left, right = self.keys.left(item), self.keys.right(item)
        check_hashable("left", left)
        check_hashable("right", right)
        return HashedStore(
            self.keys,
            self.by_left.set(left, item),
            self.by_right.set(right, item),
            self.order.cons(item),
        )

    def discard(self, item: Any) -> HashedStore:
        order = without(self.order, item)
        if order is self.order:
            return self
        return self._unlink(item, order)

    def _unlink(self, item: Any, order: PList) -> HashedStore:
        left, right = self.keys.left(item), self.keys.right(item)
        if self.by_left.get(left) is item and self.by_right.get(right) is item:
            return HashedStore(
                self.keys,
                self.by_left.discard(left),
                self.by_right.discard(right),
                order,
            )

        # Keys that are not equal to themselves (e.g. NaN) cannot be looked up, so
        # the maps are rebuilt from the remaining pairs.
        by_left, by_right = pmap(), pmap()
        for pair in order:
            by_left = by_left.set(self.keys.left(pair), pair)
            by_right = by_right.set(self.keys.right(pair), pair)
        return HashedStore(self.keys, by_left, by_right, order)


def check_hashable(side: str, key: Any):
    if not is_hashable(key):
        raise UnhashableKeyError(
            f"{side} key of type `{type(key).__name__}` cannot be used with the "
            "`Hashed` backend\n"
            "hint: Keys that only support `==` can be stored with `backend=Scan()`."
        )
