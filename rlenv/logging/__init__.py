"""
Logging entry point for rlenv.

Library modules obtain a namespaced standard-library logger through
:func:`get_logger` and never configure handlers themselves. Applications
opt in to output with :func:`configure_logging` /
:func:`configure_development_logging`, or route everything to loguru with
:func:`rlenv.logging.loguru_bootstrap.setup_logging`.
"""

import logging

from .core import (
    DEFAULT_LOG_FORMAT,
    DEVELOPMENT_LOG_FORMAT,
    LOGGER_NAME_PREFIX,
    ComponentType,
    ConsoleFormatter,
    LogLevel,
    configure_development_logging,
    configure_logging,
    get_component_logger,
    get_logger,
)

# Library default: stay silent unless the application configures logging
logging.getLogger(LOGGER_NAME_PREFIX).addHandler(logging.NullHandler())

__all__ = [
    "DEFAULT_LOG_FORMAT",
    "DEVELOPMENT_LOG_FORMAT",
    "LOGGER_NAME_PREFIX",
    "ComponentType",
    "ConsoleFormatter",
    "LogLevel",
    "configure_development_logging",
    "configure_logging",
    "get_component_logger",
    "get_logger",
]
