# Copyright (c) QuantCo and pydiverse contributors 2025-2025
# SPDX-License-Identifier: BSD-3-Clause

# ruff: noqa: A004

from ._internal.pipe.verbs import filter, map
from .common import *  # noqa: F403
from .common import __all__ as __common

__all__ = __common + [
    "filter",
    "map",
]
