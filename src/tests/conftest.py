"""
Shared fixtures for the sofia test suite.
"""

import logging

import pandas as pd
import pytest


@pytest.fixture
def timeseries():
    """Two stocks over two years with ratios for method 'm'.

    Expected codes::

        stock year  bbmsy ffmsy  cat3 cat4
        A     2000  1.5   0.5    1    1
        A     2001  0.7   1.2    3    4
        B     2000  1.0   1.3    2    2
        B     2001  0.9   0.8    2    3
    """
    return pd.DataFrame(
        {
            "stock": ["A", "A", "B", "B"],
            "year": [2000, 2001, 2000, 2001],
            "bbmsy.m": [1.5, 0.7, 1.0, 0.9],
            "ffmsy.m": [0.5, 1.2, 1.3, 0.8],
        }
    )


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Undo any handler/propagation changes made by configure_logging."""
    yield
    logger = logging.getLogger("sofia")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
