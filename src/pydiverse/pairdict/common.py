# Copyright (c) QuantCo and pydiverse contributors 2025-2025
# SPDX-License-Identifier: BSD-3-Clause

from ._internal.backend.targets import (
    Dict,
    Hashed,
    List,
    ListOfDicts,
    Polars,
    Scan,
)
from ._internal.pipe.pipeable import verb
from ._internal.pipe.verbs import (
    export,
    flip,
    insert,
    remove,
    remove_left,
    remove_right,
    union,
)

__all__ = [
    "Hashed",
    "Scan",
    "Polars",
    "Dict",
    "List",
    "ListOfDicts",
    "verb",
    "insert",
    "remove",
    "remove_left",
    "remove_right",
    "union",
    "flip",
    "export",
]
