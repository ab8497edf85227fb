# Copyright (c) QuantCo and pydiverse contributors 2025-2025
# SPDX-License-Identifier: BSD-3-Clause

from ._internal.backend.targets import (
    Backend,
    Dict,
    Hashed,
    List,
    ListOfDicts,
    Polars,
    Scan,
    Target,
)

__all__ = [
    "Backend",
    "Hashed",
    "Scan",
    "Target",
    "Polars",
    "Dict",
    "List",
    "ListOfDicts",
]
