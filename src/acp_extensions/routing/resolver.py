"""
Tool routing from negotiated custom capabilities.

Turns the client's capability document into the tool allow/deny lists the
agent runtime applies for a session.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from acp_extensions.capabilities.definition import CapabilityDefinition, CapabilityId
from acp_extensions.capabilities.extract import has_custom_capability
from acp_extensions.registry import CapabilityRegistry, get_registry
from acp_extensions.telemetry import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class ActiveCapabilitiesResult:
    """Active custom capabilities and their tool configuration.

    All three sequences follow registry order. ``disallowed_tools`` keeps
    duplicates when two capabilities disable the same built-in.

    Attributes:
        allowed_tools: Qualified ACP tools to add to allowedTools
        disallowed_tools: Built-in tools to add to disallowedTools
        active: Active capability definitions
    """

    allowed_tools: tuple[str, ...] = field(default_factory=tuple)
    disallowed_tools: tuple[str, ...] = field(default_factory=tuple)
    active: tuple[CapabilityDefinition, ...] = field(default_factory=tuple)

    def __bool__(self) -> bool:
        return bool(self.active)

    def is_active(self, ident: CapabilityId | str) -> bool:
        """Check whether the capability with *ident* is active."""
        key = ident.value if isinstance(ident, CapabilityId) else ident
        return any(d.id == key for d in self.active)

    def get(self, ident: CapabilityId | str) -> CapabilityDefinition | None:
        """Get the active definition with *ident*, if any."""
        key = ident.value if isinstance(ident, CapabilityId) else ident
        return next((d for d in self.active if d.id == key), None)

    def apply_to(
        self,
        allowed_tools: Sequence[str] = (),
        disallowed_tools: Sequence[str] = (),
    ) -> tuple[list[str], list[str]]:
        """Append this result to a session's existing allow/deny lists."""
        return (
            [*allowed_tools, *self.allowed_tools],
            [*disallowed_tools, *self.disallowed_tools],
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to wire-style dict."""
        return {
            "allowedTools": list(self.allowed_tools),
            "disallowedTools": list(self.disallowed_tools),
            "active": [d.to_dict() for d in self.active],
        }


def get_active_custom_capabilities(
    client_capabilities: Any,
    registry: CapabilityRegistry | None = None,
) -> ActiveCapabilitiesResult:
    """Get active custom capabilities and their tool configurations.

    Args:
        client_capabilities: Client capabilities from initialize (may be None)
        registry: Registry to resolve against (default: process registry)

    Returns:
        ActiveCapabilitiesResult, empty if nothing is advertised.
    """
    registry = registry if registry is not None else get_registry()

    allowed_tools: list[str] = []
    disallowed_tools: list[str] = []
    active: list[CapabilityDefinition] = []

    for cap in registry:
        if has_custom_capability(client_capabilities, cap.path):
            allowed_tools.append(cap.qualified_tool)
            disallowed_tools.extend(cap.disable_built_in)
            active.append(cap)

    logger.debug(
        "Resolved custom capabilities",
        active=[d.id for d in active],
        allowed_tools=allowed_tools,
        disallowed_tools=disallowed_tools,
    )

    return ActiveCapabilitiesResult(
        allowed_tools=tuple(allowed_tools),
        disallowed_tools=tuple(disallowed_tools),
        active=tuple(active),
    )
