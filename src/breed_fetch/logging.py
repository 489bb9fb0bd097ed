"""Standardized logging for the breed-fetch client."""

import logging
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Dict, Optional

# Type alias for log callback function
LogCallback = Callable[[int, str, Dict[str, Any]], None]

# Create module logger
logger = logging.getLogger(__name__)


class LogLevel(Enum):
    """Standard log levels."""

    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR


class LogEvent(Enum):
    """Standard event types for structured logging."""

    # Error events
    ERROR = "error"

    # Request lifecycle events
    REQUEST_START = "request_start"
    RESPONSE_CHUNK = "response_chunk"
    REQUEST_COMPLETE = "request_complete"

    # Output events
    FILE_WRITE = "file_write"


def _log(
    on_log: Optional[LogCallback],
    level: LogLevel,
    event: LogEvent,
    details: Dict[str, Any],
    *,
    extra: Optional[Dict[str, Any]] = None,
) -> None:
    """Unified logging with structured data.

    Args:
        on_log: Optional callback for external logging
        level: Log level from LogLevel enum
        event: Event type from LogEvent enum
        details: Event-specific details
        extra: Optional additional context
    """
    if on_log:  # Only log if callback is provided
        data = {
            "event": event.value,
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "source": "breed_fetch",
            **details,
        }
        if extra:
            data.update(extra)
        on_log(level.value, event.value, data)


def _log_error(
    on_log: Optional[LogCallback],
    error: Exception,
    *,
    url: Optional[str] = None,
) -> None:
    """Log a failure with its type so callers can tell classes apart."""
    details: Dict[str, Any] = {
        "error": str(error),
        "error_type": type(error).__name__,
    }
    if url:
        details["url"] = url
    _log(on_log, LogLevel.ERROR, LogEvent.ERROR, details)


def logger_callback(target: logging.Logger) -> LogCallback:
    """Build an ``on_log`` callback that forwards events to a stdlib logger."""

    def _forward(level: int, message: str, data: Dict[str, Any]) -> None:
        target.log(level, "%s %s", message, data)

    return _forward
