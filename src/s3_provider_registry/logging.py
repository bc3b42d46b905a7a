"""Logging utilities for the provider registry.

This module provides standardized logging functionality for registry operations.
The library never installs handlers; applications (and the CLI) decide where
records go.
"""

import logging
from enum import Enum
from typing import Any, Callable, Dict, Optional

# Type for log callback functions
LogCallback = Callable[[int, str, Dict[str, Any]], None]

ROOT_LOGGER_NAME = "s3_provider_registry"

_callback: Optional[LogCallback] = None


class LogLevel(int, Enum):
    """Log levels for the registry."""

    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR
    CRITICAL = logging.CRITICAL


class LogEvent(str, Enum):
    """Event types for registry logging."""

    REGISTRY = "registry"
    PROVIDER = "provider"
    ENDPOINT_RESOLUTION = "endpoint_resolution"
    DATA_LOAD = "data_load"
    SETTINGS = "settings"


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return the package logger or one of its children.

    Args:
        name: Child logger name. Fully qualified module names under the
            package are accepted as-is.

    Returns:
        Logger instance
    """
    if not name or name == ROOT_LOGGER_NAME:
        return logging.getLogger(ROOT_LOGGER_NAME)
    if name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def set_log_callback(callback: Optional[LogCallback]) -> None:
    """Register a callback receiving ``(level, event, data)`` for every event.

    Pass ``None`` to remove a previously registered callback.
    """
    global _callback
    _callback = callback


def _log(
    callback: LogCallback,
    level: LogLevel,
    event: LogEvent,
    data: Dict[str, Any],
) -> None:
    """Log an event with the provided callback.

    Args:
        callback: Function to call with the log data
        level: Severity level
        event: Event type
        data: Dictionary of event data
    """
    try:
        callback(level, event.value, data)
    except Exception as e:
        # Fallback to standard logging if callback fails
        logging.getLogger(ROOT_LOGGER_NAME).error(
            f"Logging callback failed with error: {e}. Original log: "
            f"level={level}, event={event.value}, data={data}"
        )


def _emit(level: LogLevel, event: LogEvent, message: str, data: Dict[str, Any]) -> None:
    logger = get_logger()
    if logger.isEnabledFor(level):
        logger.log(level, message, extra={"event": event.value, "data": data})
    if _callback is not None:
        _log(_callback, level, event, {"message": message, **data})


def log_debug(event: LogEvent, message: str, **data: Any) -> None:
    """Log a debug-level registry event."""
    _emit(LogLevel.DEBUG, event, message, data)


def log_info(event: LogEvent, message: str, **data: Any) -> None:
    """Log an info-level registry event."""
    _emit(LogLevel.INFO, event, message, data)


def log_warning(event: LogEvent, message: str, **data: Any) -> None:
    """Log a warning-level registry event."""
    _emit(LogLevel.WARNING, event, message, data)


def log_error(event: LogEvent, message: str, **data: Any) -> None:
    """Log an error-level registry event."""
    _emit(LogLevel.ERROR, event, message, data)
