"""Logging utilities for the pricing client.

This module provides standardized logging functionality for fetch and cache
operations. Nothing is emitted unless the host application configures a
handler for the ``ai_pricing`` logger.
"""

import logging
from enum import Enum
from typing import Any

PACKAGE_LOGGER = "ai_pricing"

logging.getLogger(PACKAGE_LOGGER).addHandler(logging.NullHandler())


class LogLevel(int, Enum):
    """Log levels for the pricing client."""

    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR
    CRITICAL = logging.CRITICAL


class LogEvent(str, Enum):
    """Event types for pricing client logging."""

    PRICING_FETCH = "pricing_fetch"
    PRICING_CACHE = "pricing_cache"
    PRICING_DECODE = "pricing_decode"
    PRICING_CONFIG = "pricing_config"

    def __str__(self) -> str:
        return self.value


def get_logger(name: str) -> logging.Logger:
    """Return a logger nested under the package namespace.

    Args:
        name: Module or component name, e.g. ``__name__`` or ``"cache"``

    Returns:
        The configured logger
    """
    if name == PACKAGE_LOGGER or name.startswith(PACKAGE_LOGGER + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{PACKAGE_LOGGER}.{name}")


_event_logger = get_logger("events")


def _log(level: LogLevel, event: LogEvent, message: str, **data: Any) -> None:
    """Log an event with structured data attached.

    Args:
        level: Severity level
        event: Event type
        message: Human readable message
        **data: Additional key/value context
    """
    if not _event_logger.isEnabledFor(level):
        return
    if data:
        details = ", ".join(f"{key}={value}" for key, value in sorted(data.items()))
        _event_logger.log(level, f"[{event}] {message} ({details})", extra={"event": str(event), "data": data})
    else:
        _event_logger.log(level, f"[{event}] {message}", extra={"event": str(event), "data": {}})


def log_debug(event: LogEvent, message: str, **data: Any) -> None:
    """Log a debug-level event."""
    _log(LogLevel.DEBUG, event, message, **data)


def log_info(event: LogEvent, message: str, **data: Any) -> None:
    """Log an info-level event."""
    _log(LogLevel.INFO, event, message, **data)


def log_warning(event: LogEvent, message: str, **data: Any) -> None:
    """Log a warning-level event."""
    _log(LogLevel.WARNING, event, message, **data)


def log_error(event: LogEvent, message: str, **data: Any) -> None:
    """Log an error-level event."""
    _log(LogLevel.ERROR, event, message, **data)
