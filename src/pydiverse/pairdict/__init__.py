# Copyright (c) QuantCo and pydiverse contributors 2025-2025
# SPDX-License-Identifier: BSD-3-Clause

from ._internal.codec.records import pair_decoder, pair_encoder, typed
from ._internal.pipe.pairdict import PairDict
from ._internal.tree.pair import PAIR_KEYS, Keys, Pair
from ._internal.util.structlog import setup_logging
from .common import *
from .common import __all__ as __common
from .errors import *
from .errors import __all__ as __errors
from .targets import Backend, Target
from .version import __version__

__all__ = (
    [
        "__version__",
        "PairDict",
        "Pair",
        "Keys",
        "PAIR_KEYS",
        "Backend",
        "Target",
        "pair_encoder",
        "pair_decoder",
        "typed",
        "setup_logging",
    ]
    + __common
    + __errors
)
