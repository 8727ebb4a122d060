"""Custom capability definitions.

A definition is pure data: where the client's flag lives, which ACP tool it
unlocks, which built-in tools that tool replaces and which custom method the
client must implement.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from acp_extensions.errors import RegistryError
from acp_extensions.protocol.namespace import get_custom_method_name, qualify_tool_name

PATH_SEPARATOR = "."


class CapabilityId(str, Enum):
    """Stable identifiers of built-in custom capabilities.

    Values are never reused or renamed once released.
    """

    ASK_USER_QUESTION = "ask_user_question"


@dataclass(frozen=True)
class CapabilityDefinition:
    """Definition of a custom capability.

    Attributes:
        id: Stable identifier (a ``CapabilityId`` value for built-ins)
        path: Flag path within ``_meta["claude-acp"]``, e.g. ``"ui.askUserQuestion"``
        tool: ACP tool name, unqualified (becomes ``mcp__acp__<tool>``)
        method: Custom ACP method name, without prefix
        disable_built_in: Built-in tools to disable while active
    """

    id: str
    path: str
    tool: str
    method: str
    disable_built_in: tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        # Enum members hash by name, so keep ids as plain strings.
        ident = self.id.value if isinstance(self.id, Enum) else self.id
        object.__setattr__(self, "id", str(ident))
        object.__setattr__(self, "disable_built_in", tuple(self.disable_built_in))

        if not self.id:
            raise RegistryError("Capability id must not be empty")
        for name in ("path", "tool", "method"):
            if not getattr(self, name):
                raise RegistryError(
                    f"Capability {name} must not be empty", capability_id=self.id
                )
        if any(not part for part in self.path.split(PATH_SEPARATOR)):
            raise RegistryError(
                f"Capability path {self.path!r} has an empty segment",
                capability_id=self.id,
            )

    @property
    def segments(self) -> tuple[str, ...]:
        """Path split into its keys."""
        return tuple(self.path.split(PATH_SEPARATOR))

    @property
    def qualified_tool(self) -> str:
        """Tool name as seen by the agent runtime."""
        return qualify_tool_name(self.tool)

    @property
    def method_name(self) -> str:
        """Full custom method name on the wire."""
        return get_custom_method_name(self.method)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CapabilityDefinition:
        """Create from a registry file entry (wire field names)."""
        missing = [k for k in ("id", "path", "tool", "method") if k not in data]
        if missing:
            raise RegistryError(
                f"Capability entry is missing {', '.join(missing)}",
                capability_id=data.get("id"),
            )
        disable = data.get("disableBuiltIn", [])
        if isinstance(disable, str) or not isinstance(disable, Iterable):
            raise RegistryError(
                "disableBuiltIn must be a list of tool names",
                capability_id=data.get("id"),
            )
        return cls(
            id=str(data["id"]),
            path=str(data["path"]),
            tool=str(data["tool"]),
            disable_built_in=tuple(str(t) for t in disable),
            method=str(data["method"]),
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to registry file format."""
        return {
            "id": self.id,
            "path": self.path,
            "tool": self.tool,
            "disableBuiltIn": list(self.disable_built_in),
            "method": self.method,
        }
