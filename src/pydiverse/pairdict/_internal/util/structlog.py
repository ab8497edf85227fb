# Copyright (c) QuantCo and pydiverse contributors 2025-2025
# SPDX-License-Identifier: BSD-3-Clause

from __future__ import annotations

import logging
import sys
from typing import TextIO

import structlog


def setup_logging(
    log_level: int = logging.INFO,
    log_stream: TextIO = sys.stderr,
    *,
    timestamps: bool = True,
):
    """
    Configures structlog and the standard logging module for pairdict events.

    Debug events (rejected inserts, coalesced pairs during `map`) are only rendered
    when `log_level` is `logging.DEBUG`.
    """

    logging.basicConfig(
        stream=log_stream,
        format="%(message)s",
        level=log_level,
    )

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
    ]
    if timestamps:
        processors.append(structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S.%f"))
    processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        logger_factory=structlog.PrintLoggerFactory(log_stream),
        cache_logger_on_first_use=False,
    )
