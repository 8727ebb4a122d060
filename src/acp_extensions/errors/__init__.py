"""错误体系：提供结构化错误类型。

Error hierarchy for acp-extensions.
"""

from acp_extensions.errors.base import (
    AcpExtensionError,
    CapabilityNotActiveError,
    ConfigError,
    ErrorContext,
    RegistryError,
    SchemaViolationError,
)

__all__ = [
    "AcpExtensionError",
    "CapabilityNotActiveError",
    "ConfigError",
    "ErrorContext",
    "RegistryError",
    "SchemaViolationError",
]
