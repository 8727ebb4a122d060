"""错误基类：提供分层错误体系和结构化错误上下文。

Base error classes for acp-extensions.

Provides a layered error hierarchy:
- AcpExtensionError: Base class for all package errors
- SchemaViolationError: Capability payload failed its schema contract
- RegistryError: Invalid or colliding capability definitions
- CapabilityNotActiveError: Custom method used without negotiated support
- ConfigError: Invalid environment configuration

A capability that is absent or malformed in the client's document is never
an error; it resolves to "not active".
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from acp_extensions.schemas.violations import SchemaViolation, ViolationCode


@dataclass
class ErrorContext:
    """Structured error context for diagnostics.

    Provides actionable information for debugging and error handling.
    """

    field_path: str | None = None
    """Path to the problematic field (e.g., 'questions[0].header')"""

    details: dict[str, Any] = field(default_factory=dict)
    """Additional details about the error"""

    source: str | None = None
    """Error source (e.g., 'schema', 'registry', 'config')"""

    hint: str | None = None
    """Actionable hint for resolving the error"""

    def __str__(self) -> str:
        parts = []
        if self.source:
            parts.append(f"[{self.source}]")
        if self.field_path:
            parts.append(f"at '{self.field_path}'")
        if self.hint:
            parts.append(f"(hint: {self.hint})")
        return " ".join(parts)


class AcpExtensionError(Exception):
    """Base class for all acp-extensions errors.

    Attributes:
        message: Human-readable error message
        context: Optional structured error context
    """

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
    ) -> None:
        self.message = message
        self.context = context or ErrorContext()
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the full error message."""
        ctx_str = str(self.context)
        if ctx_str:
            return f"{self.message} {ctx_str}"
        return self.message

    def with_hint(self, hint: str) -> AcpExtensionError:
        """Add a hint to this error."""
        self.context.hint = hint
        return self


class SchemaViolationError(AcpExtensionError):
    """A capability payload violated its schema.

    Raised when:
    - An AskUserQuestion request breaks a count or length constraint
    - A required field is missing or has the wrong type
    - A response does not line up with the request it answers

    The whole payload is rejected; ``violations`` lists every failed
    constraint, not just the first one.
    """

    def __init__(
        self,
        message: str,
        violations: list[SchemaViolation],
        context: ErrorContext | None = None,
        *,
        schema: str | None = None,
    ) -> None:
        ctx = context or ErrorContext(source="schema")
        if schema:
            ctx.details["schema"] = schema
        ctx.details["violations"] = [v.to_dict() for v in violations]
        if len(violations) == 1:
            ctx.field_path = violations[0].field_path
        super().__init__(message, ctx)
        self.violations = violations
        self.schema = schema

    def codes(self) -> list[ViolationCode]:
        """Return the violation codes, in the order they were found."""
        return [v.code for v in self.violations]

    def has(self, code: ViolationCode) -> bool:
        """Check whether *code* is among the violations."""
        return any(v.code == code for v in self.violations)


class RegistryError(AcpExtensionError):
    """Invalid capability registry definition.

    Raised when:
    - A definition has an empty path, tool, or method
    - Two definitions share an id or path
    - A registry file cannot be read or parsed
    """

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
        *,
        capability_id: str | None = None,
        registry_path: str | None = None,
    ) -> None:
        ctx = context or ErrorContext(source="registry")
        if capability_id:
            ctx.details["capability_id"] = capability_id
        if registry_path:
            ctx.details["registry_path"] = registry_path
        super().__init__(message, ctx)
        self.capability_id = capability_id
        self.registry_path = registry_path


class CapabilityNotActiveError(AcpExtensionError):
    """A custom method was invoked for a capability the client did not advertise."""

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
        *,
        capability_id: str | None = None,
        method: str | None = None,
    ) -> None:
        ctx = context or ErrorContext(source="capabilities")
        if capability_id:
            ctx.details["capability_id"] = capability_id
        if method:
            ctx.details["method"] = method
        super().__init__(message, ctx)
        self.capability_id = capability_id
        self.method = method


class ConfigError(AcpExtensionError):
    """Invalid configuration value read from the environment."""

    def __init__(
        self,
        message: str,
        context: ErrorContext | None = None,
        *,
        variable: str | None = None,
        value: str | None = None,
    ) -> None:
        ctx = context or ErrorContext(source="config")
        if variable:
            ctx.field_path = variable
        if value is not None:
            ctx.details["value"] = value
        super().__init__(message, ctx)
        self.variable = variable
        self.value = value
