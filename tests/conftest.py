# Copyright (c) QuantCo and pydiverse contributors 2025-2025
# SPDX-License-Identifier: BSD-3-Clause
import logging

import pytest

from pydiverse.pairdict import setup_logging
from tests.fixtures.backend import BACKENDS, flatten

# Setup


def pytest_configure(config: pytest.Config):
    config.addinivalue_line(
        "markers", "backends(*names): run the test only with the given backends"
    )
    config.addinivalue_line(
        "markers", "skip_backends(*names): don't run the test with the given backends"
    )


def pytest_generate_tests(metafunc: pytest.Metafunc):
    if "backend" not in metafunc.fixturenames:
        return

    names = list(BACKENDS)
    if marker := metafunc.definition.get_closest_marker("backends"):
        names = list(flatten(marker.args))
    if marker := metafunc.definition.get_closest_marker("skip_backends"):
        skipped = set(flatten(marker.args))
        names = [name for name in names if name not in skipped]

    metafunc.parametrize("backend", [BACKENDS[name] for name in names], ids=names)


setup_logging(log_level=logging.INFO)
