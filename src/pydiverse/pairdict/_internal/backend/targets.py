# Copyright (c) QuantCo and pydiverse contributors 2025-2025
# SPDX-License-Identifier: BSD-3-Clause

# This module defines the config classes provided to the user to choose the storage
# backend of a pair dict and the format of an export.


class Backend:
    def __eq__(self, other) -> bool:
        return type(self) is type(other)

    def __hash__(self) -> int:
        return hash(type(self))

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class Hashed(Backend):
    """
    Two synchronized persistent hash maps (left key -> pair, right key -> pair).

    Lookups by left or right key take O(1) on average. All keys must be hashable.
    """


class Scan(Backend):
    """
    A single persistent linked list that is scanned on every lookup.

    Lookups take O(n), but keys only need to support `==`.
    """


class Target: ...


class Polars(Target):
    def __init__(self, *, lazy: bool = False) -> None:
        self.lazy = lazy


class Dict(Target): ...


class List(Target): ...


class ListOfDicts(Target): ...
