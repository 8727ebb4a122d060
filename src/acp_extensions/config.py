"""
Environment configuration for acp-extensions.

Reads:
- ACP_EXT_REGISTRY_FILE: YAML/JSON file with extra capability definitions
- ACP_EXT_LOG_LEVEL: DEBUG, INFO, WARNING, ERROR or CRITICAL
- ACP_EXT_LOG_FORMAT: text or json
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from acp_extensions.errors import ConfigError
from acp_extensions.telemetry import AcpLogger, LogLevel

_LOG_FORMATS = ("text", "json")


def registry_file_from_env() -> Path | None:
    """Read only ACP_EXT_REGISTRY_FILE; the log variables are not consulted."""
    value = os.getenv("ACP_EXT_REGISTRY_FILE")
    return Path(value) if value else None


@dataclass(frozen=True)
class ExtensionConfig:
    """Process-level configuration.

    Attributes:
        registry_file: Extra registry definitions appended to the built-in table
        log_level: Log level for package loggers
        log_format: 'text' or 'json'
    """

    registry_file: Path | None = None
    log_level: LogLevel = LogLevel.INFO
    log_format: str = "text"

    @classmethod
    def from_env(cls) -> ExtensionConfig:
        """Create configuration from environment variables."""
        level_str = os.getenv("ACP_EXT_LOG_LEVEL", "INFO").upper()
        try:
            log_level = LogLevel(level_str)
        except ValueError:
            raise ConfigError(
                f"Unknown log level {level_str!r}",
                variable="ACP_EXT_LOG_LEVEL",
                value=level_str,
            ).with_hint(
                "Use one of " + ", ".join(lvl.value for lvl in LogLevel)
            ) from None

        log_format = os.getenv("ACP_EXT_LOG_FORMAT", "text").lower()
        if log_format not in _LOG_FORMATS:
            raise ConfigError(
                f"Unknown log format {log_format!r}",
                variable="ACP_EXT_LOG_FORMAT",
                value=log_format,
            ).with_hint("Use 'text' or 'json'")

        return cls(
            registry_file=registry_file_from_env(),
            log_level=log_level,
            log_format=log_format,
        )

    def apply_logging(self) -> None:
        """Configure package loggers from this config."""
        AcpLogger.configure(level=self.log_level, format=self.log_format)
