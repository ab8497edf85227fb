# Copyright (c) QuantCo and pydiverse contributors 2025-2025
# SPDX-License-Identifier: BSD-3-Clause

from __future__ import annotations

from collections.abc import Iterator
from typing import Any, Literal

from pyrsistent import PList, plist

from pydiverse.pairdict._internal.backend.store import PairStore, without
from pydiverse.pairdict._internal.backend.targets import Scan
from pydiverse.pairdict._internal.tree.pair import Keys


class ScanStore(PairStore):
    __slots__ = ["items", "size"]

    def __init__(self, keys: Keys, items: PList, size: int):
        self.keys = keys
        self.items = items
        self.size = size

    @classmethod
    def empty(cls, keys: Keys) -> ScanStore:
        return cls(keys, plist(), 0)

    def backend(self) -> Scan:
        return Scan()

    def __iter__(self) -> Iterator[Any]:
        return iter(self.items)

    def __len__(self) -> int:
        return self.size

    def first(self) -> Any:
        return self.items.first

    def rest(self) -> ScanStore:
        return ScanStore(self.keys, self.items.rest, self.size - 1)

    def find(self, side: Literal["left", "right"], key: Any) -> Any | None:
        return self.find_by(self.keys.select(side), key)

    def prepend(self, item: Any) -> ScanStore:
        return ScanStore(self.keys, self.items.cons(item), self.size + 1)

    def discard(self, item: Any) -> ScanStore:
        items = without(self.items, item)
        if items is self.items:
            return self
        return ScanStore(self.keys, items, self.size - 1)

    def discard_by(self, projection, key: Any) -> ScanStore:
        kept = [item for item in self.items if projection(item) != key]
        if len(kept) == self.size:
            return self
        return ScanStore(self.keys, plist(kept), len(kept))
