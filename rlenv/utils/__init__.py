"""
Utility layer: exception hierarchy, seeding helpers and the env checker.

``env_checker`` depends on the env and space modules, so it is imported
from its own module (``rlenv.utils.env_checker``) rather than here.
"""

from .exceptions import (
    ConfigurationError,
    ErrorSeverity,
    IncompatibleSpaceError,
    NameNotFound,
    ResetNeeded,
    RLEnvError,
    StateError,
    StatisticsKeyCollisionError,
    ValidationError,
    format_error_details,
)
from .seeding import np_random, spawn_seeds, validate_seed

__all__ = [
    "RLEnvError",
    "ErrorSeverity",
    "ValidationError",
    "StateError",
    "ResetNeeded",
    "ConfigurationError",
    "StatisticsKeyCollisionError",
    "IncompatibleSpaceError",
    "NameNotFound",
    "format_error_details",
    "np_random",
    "spawn_seeds",
    "validate_seed",
]
