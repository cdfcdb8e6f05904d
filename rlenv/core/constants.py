"""Core constants used throughout the ``rlenv`` package."""

from __future__ import annotations

from typing import Tuple

import numpy as np

PACKAGE_NAME = "rlenv"
PACKAGE_VERSION = "0.1.0"

# Space dtypes
SUPPORTED_FLOAT_DTYPES: Tuple[np.dtype, ...] = (
    np.dtype(np.float16),
    np.dtype(np.float32),
    np.dtype(np.float64),
)
SUPPORTED_INT_DTYPES: Tuple[np.dtype, ...] = (
    np.dtype(np.int8),
    np.dtype(np.int16),
    np.dtype(np.int32),
    np.dtype(np.int64),
    np.dtype(np.uint8),
    np.dtype(np.uint16),
    np.dtype(np.uint32),
    np.dtype(np.uint64),
)
SUPPORTED_DTYPES = SUPPORTED_FLOAT_DTYPES + SUPPORTED_INT_DTYPES

DEFAULT_BOX_DTYPE = np.dtype(np.float32)
DISCRETE_DTYPE = np.dtype(np.int64)
DEFAULT_MULTI_DISCRETE_DTYPE = np.dtype(np.int64)
MULTI_BINARY_DTYPE = np.dtype(np.int8)

# Seeding
SEED_MIN_VALUE = 0
SEED_MAX_VALUE = 2**63 - 1

# Wrappers
DEFAULT_STATS_KEY = "episode"
DEFAULT_STATS_BUFFER_LENGTH = 100
AUTORESET_REWARD = 0.0

# Registration
ENV_ID_PATTERN = r"^(?:(?P<namespace>[\w:.-]+)/)?(?P<name>[\w:.-]+?)-v(?P<version>\d+)$"

__all__ = [
    "PACKAGE_NAME",
    "PACKAGE_VERSION",
    "SUPPORTED_FLOAT_DTYPES",
    "SUPPORTED_INT_DTYPES",
    "SUPPORTED_DTYPES",
    "DEFAULT_BOX_DTYPE",
    "DISCRETE_DTYPE",
    "DEFAULT_MULTI_DISCRETE_DTYPE",
    "MULTI_BINARY_DTYPE",
    "SEED_MIN_VALUE",
    "SEED_MAX_VALUE",
    "DEFAULT_STATS_KEY",
    "DEFAULT_STATS_BUFFER_LENGTH",
    "AUTORESET_REWARD",
    "ENV_ID_PATTERN",
]
