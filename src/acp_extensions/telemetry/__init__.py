"""
Telemetry module for acp-extensions.

Provides structured, session-aware logging.
"""

from acp_extensions.telemetry.logger import (
    AcpLogger,
    JsonFormatter,
    LogContext,
    LogLevel,
    TextFormatter,
    clear_log_context,
    get_log_context,
    get_logger,
    session_log_context,
    set_log_context,
)

__all__ = [
    "AcpLogger",
    "JsonFormatter",
    "LogContext",
    "LogLevel",
    "TextFormatter",
    "clear_log_context",
    "get_log_context",
    "get_logger",
    "session_log_context",
    "set_log_context",
]
