"""
Structured logging for acp-extensions.

Package loggers write keyword fields next to the message and pick up the
current session's ``LogContext``, so negotiation and custom method logs of
one ACP session can be correlated.
"""

from __future__ import annotations

import json
import logging
import sys
import time
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, ClassVar

_log_context: ContextVar[LogContext | None] = ContextVar("acp_log_context", default=None)


class LogLevel(str, Enum):
    """Log levels."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

    def to_logging_level(self) -> int:
        """Convert to standard logging level."""
        return getattr(logging, self.value)


@dataclass(frozen=True)
class LogContext:
    """Session-scoped logging context.

    Attributes:
        session_id: ACP session identifier
        extra: Additional context fields
    """

    session_id: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        result: dict[str, Any] = {}
        if self.session_id:
            result["session_id"] = self.session_id
        result.update(self.extra)
        return result

    def with_extra(self, **kwargs: Any) -> LogContext:
        """Create new context with additional fields."""
        return replace(self, extra={**self.extra, **kwargs})


def get_log_context() -> LogContext:
    """Get the current logging context."""
    return _log_context.get() or LogContext()


def set_log_context(context: LogContext) -> None:
    """Set the logging context for the current async context."""
    _log_context.set(context)


def clear_log_context() -> None:
    _log_context.set(None)


@contextmanager
def session_log_context(session_id: str, **extra: Any) -> Iterator[LogContext]:
    """Bind *session_id* to every log record written inside the block.

    The previous context is restored on exit, also when the block raises.
    """
    context = LogContext(session_id=session_id, extra={**get_log_context().extra, **extra})
    token = _log_context.set(context)
    try:
        yield context
    finally:
        _log_context.reset(token)


def _record_fields(record: logging.LogRecord) -> dict[str, Any]:
    return dict(getattr(record, "fields", None) or {})


class JsonFormatter(logging.Formatter):
    """One JSON object per record."""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = time.strftime("%Y-%m-%dT%H:%M:%S", time.gmtime(record.created))
        data: dict[str, Any] = {
            "timestamp": f"{timestamp}.{int(record.msecs):03d}Z",
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        if context := get_log_context().to_dict():
            data["context"] = context
        data.update(_record_fields(record))
        if record.exc_info:
            data["exception"] = self.formatException(record.exc_info)
        return json.dumps(data, default=str)


class TextFormatter(logging.Formatter):
    """``time | level | logger | message | key=value ...``"""

    def __init__(self) -> None:
        super().__init__(
            fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        fields = {**get_log_context().to_dict(), **_record_fields(record)}
        if not fields:
            return line
        return line + " | " + " ".join(f"{k}={v}" for k, v in fields.items())


_FORMATTERS: dict[str, type[logging.Formatter]] = {
    "json": JsonFormatter,
    "text": TextFormatter,
}


class AcpLogger:
    """Logger with keyword-field structured logging.

    Example:
        >>> logger = get_logger("acp_extensions.routing")
        >>> logger.debug("Resolved custom capabilities", active=["ask_user_question"])
    """

    _loggers: ClassVar[dict[str, logging.Logger]] = {}
    _level: ClassVar[LogLevel] = LogLevel.INFO
    _handler: ClassVar[logging.Handler | None] = None

    @classmethod
    def configure(
        cls,
        level: LogLevel = LogLevel.INFO,
        format: str = "text",
        stream: Any = None,
    ) -> None:
        """Configure all package loggers.

        Args:
            level: Log level
            format: Output format ('json' or 'text')
            stream: Output stream (default: stderr)
        """
        cls._level = level
        cls._handler = logging.StreamHandler(stream or sys.stderr)
        cls._handler.setFormatter(_FORMATTERS.get(format, TextFormatter)())
        for logger in cls._loggers.values():
            cls._attach(logger)

    @classmethod
    def _attach(cls, logger: logging.Logger) -> None:
        logger.setLevel(cls._level.to_logging_level())
        logger.handlers.clear()
        if cls._handler is not None:
            logger.addHandler(cls._handler)
        else:
            handler = logging.StreamHandler(sys.stderr)
            handler.setFormatter(TextFormatter())
            logger.addHandler(handler)
        logger.propagate = False

    @classmethod
    def get_logger(cls, name: str) -> AcpLogger:
        """Get or create the package logger called *name*."""
        if name not in cls._loggers:
            logger = logging.getLogger(name)
            cls._attach(logger)
            cls._loggers[name] = logger
        return cls(cls._loggers[name])

    def __init__(self, logger: logging.Logger) -> None:
        self._logger = logger

    @property
    def name(self) -> str:
        return self._logger.name

    def _log(self, level: int, msg: str, fields: dict[str, Any]) -> None:
        self._logger.log(level, msg, extra={"fields": fields} if fields else None)

    def debug(self, msg: str, **kwargs: Any) -> None:
        self._log(logging.DEBUG, msg, kwargs)

    def info(self, msg: str, **kwargs: Any) -> None:
        self._log(logging.INFO, msg, kwargs)


def get_logger(name: str) -> AcpLogger:
    """Get a package logger."""
    return AcpLogger.get_logger(name)
