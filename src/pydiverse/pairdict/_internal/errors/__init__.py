# Copyright (c) QuantCo and pydiverse contributors 2025-2025
# SPDX-License-Identifier: BSD-3-Clause

from __future__ import annotations

import typing
from typing import Any


class DecodeError(ValueError):
    """
    Raised when external data does not have the shape of a sequence of pair records.

    The error remembers where in the data it occurred (e.g. ``index 3``, ``field
    `left```), so that nested decoders can prepend their own location when the error
    propagates outwards.
    """

    def __init__(self, message: str, path: tuple[str, ...] = ()):
        self.message = message
        self.path = tuple(path)
        super().__init__(str(self))

    def at(self, *location: str) -> DecodeError:
        return DecodeError(self.message, location + self.path)

    def __str__(self) -> str:
        if not self.path:
            return self.message
        return "at " + ", ".join(self.path) + ": " + self.message


class UnhashableKeyError(TypeError):
    """
    Signals a key that cannot be stored in a hash based backend.
    """


# Our error message format: The first line is in lowercase letters, without a dot at
# the end. More detail is given in the following lines in normal english sentences.
# To give advice to to the user, we write `hint: ...`.


def type_name(expected_type: type | tuple[type, ...]) -> str:
    if isinstance(expected_type, tuple):
        return " | ".join(type_name(t) for t in expected_type)
    type_args = typing.get_args(expected_type)
    return (
        expected_type.__name__
        if not type_args
        else " | ".join(t.__name__ for t in type_args)
    )


def check_arg_type(
    expected_type: type,
    fn: str,
    param_name: str,
    arg: Any,
):
    if not isinstance(arg, expected_type):
        raise TypeError(
            f"argument for parameter `{param_name}` of `{fn}` must have type "
            f"`{type_name(expected_type)}`, found `{type(arg).__name__}` instead"
        )


def check_callable(fn: str, param_name: str, arg: Any):
    if not callable(arg):
        raise TypeError(
            f"argument for parameter `{param_name}` of `{fn}` must be callable, found "
            f"`{type(arg).__name__}` instead"
        )


def check_literal_type(allowed_vals: list[Any], fn: str, param_name: str, arg: Any):
    if arg not in allowed_vals:
        raise TypeError(
            f"argument `{arg}` not allowed for parameter `{param_name}` of `{fn}`, "
            "must be one of " + ", ".join(repr(val) for val in allowed_vals)
        )
