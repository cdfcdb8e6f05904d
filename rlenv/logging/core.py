"""Lean logging helpers for rlenv."""

from __future__ import annotations

import logging
import os
import sys
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

LOGGER_NAME_PREFIX = "rlenv"

DEFAULT_LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"
DEVELOPMENT_LOG_FORMAT = (
    "%(asctime)s - %(levelname)s - %(name)s:%(lineno)d - %(message)s"
)
DEFAULT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

COLOR_CODES: Dict[str, str] = {
    "RESET": "\033[0m",
    "DEBUG": "\033[94m",
    "INFO": "\033[92m",
    "WARNING": "\033[93m",
    "ERROR": "\033[91m",
    "CRITICAL": "\033[91m",
}


class LogLevel(Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

    def to_logging_level(self) -> int:
        return logging.getLevelName(self.value)

    @classmethod
    def from_string(cls, level_string: str) -> "LogLevel":
        return cls(level_string.upper())


class ComponentType(Enum):
    SPACES = "SPACES"
    ENVIRONMENT = "ENVIRONMENT"
    WRAPPERS = "WRAPPERS"
    REGISTRATION = "REGISTRATION"
    UTILS = "UTILS"


def detect_color_support() -> bool:
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("FORCE_COLOR"):
        return True
    stream = sys.stderr
    isatty = getattr(stream, "isatty", None)
    return bool(isatty() if callable(isatty) else False)


class ConsoleFormatter(logging.Formatter):
    """Formatter that colors the level name for terminal output."""

    def format(self, record: logging.LogRecord) -> str:
        text = super().format(record)
        color = COLOR_CODES.get(record.levelname)
        if not color:
            return text
        return text.replace(
            record.levelname, f"{color}{record.levelname}{COLOR_CODES['RESET']}", 1
        )


def _resolve_log_level(level: Any) -> int:
    if isinstance(level, LogLevel):
        return level.to_logging_level()
    if isinstance(level, int):
        return level
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        return resolved if isinstance(resolved, int) else logging.INFO
    return logging.INFO


def _normalize_logger_name(name: str, component_type: ComponentType) -> str:
    if not name:
        return f"{LOGGER_NAME_PREFIX}.{component_type.value.lower()}"
    if name == LOGGER_NAME_PREFIX or name.startswith(f"{LOGGER_NAME_PREFIX}."):
        return name
    if "." in name:
        return f"{LOGGER_NAME_PREFIX}.{name}"
    return f"{LOGGER_NAME_PREFIX}.{component_type.value.lower()}.{name}"


def configure_logging(
    *,
    log_level: Any = "INFO",
    enable_console_logging: bool = True,
    enable_file_logging: bool = False,
    log_file_path: Optional[str | Path] = None,
    enable_color_output: bool = True,
    log_format: Optional[str] = None,
    datefmt: str = DEFAULT_DATE_FORMAT,
    force: bool = True,
) -> Dict[str, Any]:
    level = _resolve_log_level(log_level)
    handlers = []

    if enable_console_logging:
        formatter_cls = (
            ConsoleFormatter
            if enable_color_output and detect_color_support()
            else logging.Formatter
        )
        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(
            formatter_cls(fmt=log_format or DEFAULT_LOG_FORMAT, datefmt=datefmt)
        )
        handlers.append(console_handler)

    log_path = None
    if enable_file_logging:
        path = (
            Path(log_file_path) if log_file_path else Path(f"{LOGGER_NAME_PREFIX}.log")
        )
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(
            logging.Formatter(fmt=log_format or DEFAULT_LOG_FORMAT, datefmt=datefmt)
        )
        handlers.append(file_handler)
        log_path = str(path)

    if not handlers:
        handlers.append(logging.NullHandler())

    logging.basicConfig(level=level, handlers=handlers, force=force)

    return {
        "status": "configured",
        "log_level": logging.getLevelName(level),
        "console_output": enable_console_logging,
        "color_output": enable_color_output,
        "file_output": bool(log_path),
        "file_path": log_path,
    }


def configure_development_logging(
    enable_color_console: bool = True,
    log_to_file: bool = False,
    development_log_level: str = "DEBUG",
) -> Dict[str, Any]:
    result = configure_logging(
        log_level=development_log_level,
        enable_console_logging=True,
        enable_file_logging=log_to_file,
        enable_color_output=enable_color_console,
        log_format=DEVELOPMENT_LOG_FORMAT,
    )
    result.update(
        {
            "status": "success",
            "log_level": development_log_level,
            "color_console": enable_color_console,
            "file_logging": log_to_file,
        }
    )
    return result


def get_logger(
    name: str,
    component_type: ComponentType = ComponentType.UTILS,
    logger_config: Optional[Dict[str, Any]] = None,
) -> logging.Logger:
    logger_name = _normalize_logger_name(name, component_type)
    logger = logging.getLogger(logger_name)
    if logger_config and "level" in logger_config:
        logger.setLevel(_resolve_log_level(logger_config["level"]))
    return logger


def get_component_logger(
    name: str,
    component_type: ComponentType = ComponentType.UTILS,
    logger_config: Optional[Dict[str, Any]] = None,
) -> logging.Logger:
    return get_logger(name, component_type=component_type, logger_config=logger_config)
