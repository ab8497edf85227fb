# Copyright (c) QuantCo and pydiverse contributors 2025-2025
# SPDX-License-Identifier: BSD-3-Clause

# Conversion between pairs and their external form: an ordered sequence of records,
# each record holding the encoded left and right value. Records are mappings with
# one entry per field or, when decoding, positional 2-element sequences.

from __future__ import annotations

import json
from collections.abc import Callable, Iterable, Mapping, Sequence
from typing import Any

import polars as pl
import structlog

from pydiverse.pairdict._internal.errors import DecodeError, type_name
from pydiverse.pairdict._internal.tree.pair import PAIR_KEYS, Keys, Pair

logger = structlog.get_logger(__name__)

FIELD_NAMES = ("left", "right")


def _identity(x: Any) -> Any:
    return x


def pair_encoder(
    left: Callable[[Any], Any] | None = None,
    right: Callable[[Any], Any] | None = None,
    *,
    names: tuple[str, str] = FIELD_NAMES,
    keys: Keys = PAIR_KEYS,
) -> Callable[[Any], dict[str, Any]]:
    """
    Builds a function that encodes a pair as a record.

    :param left:
        Encoder for the left value. The value is passed through unchanged by default.

    :param right:
        Encoder for the right value.

    :param names:
        The field names of the record.

    :param keys:
        The key projections reading the left and right value from a pair. Records
        with custom `Keys` are encoded by their two keys only.

    >>> encode = pair_encoder(right=str, names=("char", "code"))
    >>> encode(Pair("a", 97))
    {'char': 'a', 'code': '97'}
    """

    left = _identity if left is None else left
    right = _identity if right is None else right
    left_name, right_name = names

    def encode(pair: Any) -> dict[str, Any]:
        return {
            left_name: left(keys.left(pair)),
            right_name: right(keys.right(pair)),
        }

    return encode


def pair_decoder(
    left: Callable[[Any], Any] | None = None,
    right: Callable[[Any], Any] | None = None,
    *,
    names: tuple[str, str] = FIELD_NAMES,
) -> Callable[[Any], Pair]:
    """
    Builds a function that decodes a record into a `Pair`.

    A record is either a mapping containing both field names or a sequence of length
    two. The field decoders may raise `DecodeError`, `ValueError` or `TypeError` to
    reject a value; the error is reported as a `DecodeError` naming the field.
    """

    left = _identity if left is None else left
    right = _identity if right is None else right

    def decode(record: Any) -> Pair:
        if isinstance(record, Mapping):
            missing = [name for name in names if name not in record]
            if missing:
                found = ", ".join(f"`{k}`" for k in record) or "no fields"
                raise DecodeError(
                    f"expected a record with field `{missing[0]}`, found {found} "
                    "instead"
                )
            raw = (record[names[0]], record[names[1]])
        elif isinstance(record, Sequence) and not isinstance(record, str | bytes):
            if len(record) != 2:
                raise DecodeError(
                    f"expected a record with 2 elements, found {len(record)} instead"
                )
            raw = (record[0], record[1])
        else:
            raise DecodeError(
                "expected a record (mapping or 2-element sequence), found "
                f"`{type(record).__name__}` instead"
            )

        return Pair(
            _decode_field(left, raw[0], names[0]),
            _decode_field(right, raw[1], names[1]),
        )

    return decode


def _decode_field(decoder: Callable[[Any], Any], value: Any, name: str) -> Any:
    try:
        return decoder(value)
    except DecodeError as e:
        raise e.at(f"field `{name}`") from e
    except (ValueError, TypeError) as e:
        raise DecodeError(str(e), (f"field `{name}`",)) from e


def typed(*types: type) -> Callable[[Any], Any]:
    """
    Builds a field decoder that accepts values of the given types unchanged.

    >>> pair_decoder(left=typed(str), right=typed(int))({"left": "a", "right": "b"})
    Traceback (most recent call last):
    ...
    DecodeError: at field `right`: expected `int`, found `str` instead
    """

    if not types:
        raise TypeError("`typed` requires at least one type")

    def check(value: Any) -> Any:
        # bool is a subclass of int, but `true` is not a valid integer field
        if isinstance(value, bool) and bool not in types:
            valid = False
        else:
            valid = isinstance(value, types)
        if not valid:
            raise DecodeError(
                f"expected `{type_name(types)}`, found `{type(value).__name__}` "
                "instead"
            )
        return value

    return check


def encode_records(
    pairs: Iterable[Any],
    encoder: Callable[[Any], Any] | None = None,
    keys: Keys = PAIR_KEYS,
) -> list[Any]:
    encode = pair_encoder(keys=keys) if encoder is None else encoder
    return [encode(pair) for pair in pairs]


def decode_records(
    data: Any, decoder: Callable[[Any], Any] | None = None
) -> list[Any]:
    decode = pair_decoder() if decoder is None else decoder

    if isinstance(data, pl.DataFrame):
        data = data.rows(named=True)
    elif isinstance(data, pl.LazyFrame):
        data = data.collect().rows(named=True)

    if not isinstance(data, Sequence) or isinstance(data, str | bytes):
        raise DecodeError(
            f"expected a list of pair records, found `{type(data).__name__}` instead"
        )

    pairs = []
    for index, record in enumerate(data):
        try:
            pairs.append(decode(record))
        except DecodeError as e:
            raise e.at(f"index {index}") from e

    logger.debug("decoded pair records", records=len(pairs))
    return pairs


def dump_json(records: list[Any], **kwargs) -> str:
    kwargs.setdefault("ensure_ascii", False)
    return json.dumps(records, **kwargs)


def parse_json(text: str | bytes) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise DecodeError(
            f"expected valid JSON, found error `{e.msg}` at line {e.lineno} column "
            f"{e.colno}"
        ) from e
