# Copyright (c) QuantCo and pydiverse contributors 2025-2025
# SPDX-License-Identifier: BSD-3-Clause

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import polars as pl

from pydiverse.pairdict._internal import errors
from pydiverse.pairdict._internal.backend.targets import (
    Dict,
    List,
    ListOfDicts,
    Polars,
    Target,
)
from pydiverse.pairdict._internal.pipe.pairdict import PairDict, Side
from pydiverse.pairdict._internal.pipe.pipeable import verb
from pydiverse.pairdict._internal.tree.pair import Keys

__all__ = [
    "insert",
    "remove",
    "remove_left",
    "remove_right",
    "union",
    "flip",
    "export",
]


@verb
def insert(pd: PairDict, *pairs: Any) -> PairDict:
    """
    Inserts the pairs one after another, skipping every pair whose left or right key
    is already taken.

    Examples
    --------
    >>> PairDict() >> insert(("a", "A"), ("b", "B"), ("b", "C")) >> export(Dict())
    {'b': 'B', 'a': 'A'}
    """

    for pair in pairs:
        pd = pd.insert(pair)
    return pd


@verb
def remove(pd: PairDict, key: Any, by: Side | Callable[[Any], Any]) -> PairDict:
    return pd.remove(key, by)


@verb
def remove_left(pd: PairDict, *lefts: Any) -> PairDict:
    for left in lefts:
        pd = pd.remove_left(left)
    return pd


@verb
def remove_right(pd: PairDict, *rights: Any) -> PairDict:
    for right in rights:
        pd = pd.remove_right(right)
    return pd


@verb
def union(preferred: PairDict, to_insert: PairDict) -> PairDict:
    """
    Inserts the pairs of `to_insert` into the piped pair dict, which wins every
    conflict.

    Examples
    --------
    >>> logic = PairDict([("∧", "and"), ("∨", "or"), ("-", "negate")])
    >>> arithmetic = PairDict([("+", "plus"), ("-", "minus")])
    >>> (arithmetic >> union(logic)).right_of("-")
    'minus'
    """

    return preferred.union(to_insert)


@verb
def map(pd: PairDict, transform: Callable[[Any], Any], keys: Keys | None = None):
    return pd.map(transform, keys)


@verb
def filter(pd: PairDict, predicate: Callable[[Any], bool]) -> PairDict:
    return pd.filter(predicate)


@verb
def flip(pd: PairDict) -> PairDict:
    return pd.flip()


@verb
def export(pd: PairDict, target: Target) -> Any:
    """
    Converts the pair dict to another data structure.

    :param target:
        ``Polars()`` gives a data frame with the columns ``left`` and ``right``
        (``Polars(lazy=True)`` a lazy frame), ``Dict()`` a dict from left to right
        keys, ``ListOfDicts()`` the encoded records and ``List()`` the pairs. All
        of them list the most recent pair first.
    """

    errors.check_arg_type(Target, "export", "target", target)

    if isinstance(target, Polars):
        keys = pd.projections
        df = pl.DataFrame(
            {
                "left": [keys.left(pair) for pair in pd],
                "right": [keys.right(pair) for pair in pd],
            },
            strict=False,
        )
        return df.lazy() if target.lazy else df
    if isinstance(target, Dict):
        return pd.to_dict()
    if isinstance(target, ListOfDicts):
        return pd.encode()
    if isinstance(target, List):
        return list(pd)

    raise AssertionError
