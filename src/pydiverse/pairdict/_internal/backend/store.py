# Copyright (c) QuantCo and pydiverse contributors 2025-2025
# SPDX-License-Identifier: BSD-3-Clause

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import Any, Literal

from pyrsistent import PList

from pydiverse.pairdict._internal.backend.targets import Backend, Hashed, Scan
from pydiverse.pairdict._internal.tree.pair import Keys


class PairStore:
    """
    Persistent storage of the pairs of a `PairDict`.

    A store never changes after construction. Every modifying method returns a new
    store that shares as much structure as possible with the old one. Stores do not
    enforce the uniqueness of left and right keys themselves: `PairDict` only calls
    `prepend` after `conflict` has confirmed that the pair is new on both sides.
    """

    __slots__ = ["keys"]

    keys: Keys

    @classmethod
    def empty(cls, keys: Keys) -> PairStore:
        raise NotImplementedError()

    @staticmethod
    def from_backend(backend: Backend | None, keys: Keys) -> PairStore:
        from pydiverse.pairdict._internal.backend.hashed import HashedStore
        from pydiverse.pairdict._internal.backend.scan import ScanStore

        if backend is None or isinstance(backend, Hashed):
            return HashedStore.empty(keys)
        if isinstance(backend, Scan):
            return ScanStore.empty(keys)
        raise AssertionError

    def backend(self) -> Backend:
        raise NotImplementedError()

    def __iter__(self) -> Iterator[Any]:
        raise NotImplementedError()

    def __len__(self) -> int:
        raise NotImplementedError()

    def first(self) -> Any:
        raise NotImplementedError()

    def rest(self) -> PairStore:
        raise NotImplementedError()

    def find(self, side: Literal["left", "right"], key: Any) -> Any | None:
        raise NotImplementedError()

    def find_by(self, projection: Callable[[Any], Any], key: Any) -> Any | None:
        return next((item for item in self if projection(item) == key), None)

    def conflict(self, item: Any) -> Literal["left", "right"] | None:
        if self.find("left", self.keys.left(item)) is not None:
            return "left"
        if self.find("right", self.keys.right(item)) is not None:
            return "right"
        return None

    def prepend(self, item: Any) -> PairStore:
        raise NotImplementedError()

    def discard(self, item: Any) -> PairStore:
        raise NotImplementedError()

    def discard_by(self, projection: Callable[[Any], Any], key: Any) -> PairStore:
        store = self
        for item in self:
            if projection(item) == key:
                store = store.discard(item)
        return store


def without(items: PList, item: Any) -> PList:
    """
    Returns `items` without the element that is identical to `item`.

    Only the prefix in front of the removed element is copied, the tail after it is
    shared with `items`.
    """

    prefix = []
    rest = items
    while rest:
        if rest.first is item:
            tail = rest.rest
            for x in reversed(prefix):
                tail = tail.cons(x)
            return tail
        prefix.append(rest.first)
        rest = rest.rest
    return items
