"""Optional loguru sink for rlenv's stdlib loggers."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

from .core import LOGGER_NAME_PREFIX

try:
    from loguru import logger as _logger  # type: ignore
except ImportError:  # pragma: no cover
    _logger = None  # type: ignore

LOGURU_FORMAT = (
    "<green>{time:HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | "
    "<cyan>{extra[logger_name]}</cyan> - <level>{message}</level>"
)


class InterceptHandler(logging.Handler):
    """Redirect stdlib logging records to loguru, keeping the stdlib logger name."""

    def emit(
        self, record: logging.LogRecord
    ) -> None:  # pragma: no cover - thin wrapper
        if _logger is None:
            return
        try:
            level = _logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1
        _logger.bind(logger_name=record.name).opt(
            depth=depth, exception=record.exc_info
        ).log(level, record.getMessage())


def setup_logging(
    *,
    level: str = "INFO",
    console: bool = True,
    file_path: Optional[str | Path] = None,
    rotation: Optional[str | int] = None,
    retention: Optional[str | int] = None,
    serialize: bool = False,
) -> None:
    """Send every ``rlenv.*`` log record to loguru sinks.

    - Adds a console sink (stderr) and an optional rotating file sink
    - Only the ``rlenv`` logger hierarchy is bridged; other libraries'
      logging configuration is left alone
    """
    if _logger is None:
        raise ImportError(
            "loguru is not installed. Install with 'pip install -e .[ops]'"
        )

    _logger.remove()
    _logger.configure(extra={"logger_name": LOGGER_NAME_PREFIX})
    lvl = level.upper()
    if console:
        _logger.add(
            sys.stderr,
            level=lvl,
            format=LOGURU_FORMAT,
            backtrace=False,
            diagnose=False,
            serialize=serialize,
        )
    if file_path:
        _logger.add(
            str(file_path),
            level=lvl,
            rotation=rotation,
            retention=retention,
            backtrace=False,
            diagnose=False,
            serialize=serialize,
        )
    bridge_rlenv_loggers(level=lvl)


def bridge_rlenv_loggers(level: str = "INFO") -> logging.Logger:
    """Attach an InterceptHandler to the ``rlenv`` root logger."""
    root = logging.getLogger(LOGGER_NAME_PREFIX)
    root.handlers = [InterceptHandler()]
    root.setLevel(getattr(logging, level, logging.INFO))
    root.propagate = False
    for name in list(logging.Logger.manager.loggerDict.keys()):
        if name.startswith(f"{LOGGER_NAME_PREFIX}."):
            logging.getLogger(name).handlers = []
            logging.getLogger(name).propagate = True
    return root


def get_logger():  # pragma: no cover - trivial accessor
    """Return the configured loguru logger instance.

    Raises
    ------
    ImportError
        If loguru is not installed/available.
    """
    if _logger is None:
        raise ImportError("loguru is not installed.")
    return _logger
