"""
Reserved names for Claude ACP custom capabilities.

Custom capabilities follow the ACP extensibility rules:

1. They are advertised in ``clientCapabilities._meta["claude-acp"]``
2. Their methods are prefixed with ``_claude-acp/``
3. Their tools are exposed as ``mcp__acp__<Tool>`` and replace the
   built-in tool of the same base name
"""

from __future__ import annotations

META_KEY = "_meta"
"""Top-level key reserved by ACP for implementation-specific data."""

CUSTOM_CAPABILITY_NAMESPACE = "claude-acp"
"""Namespace key inside ``_meta`` holding the custom capability flags."""

CUSTOM_METHOD_PREFIX = f"_{CUSTOM_CAPABILITY_NAMESPACE}"
"""Prefix for custom ACP methods (non-standard methods must start with '_')."""

ACP_TOOL_PREFIX = "mcp__acp__"
"""Prefix of tools served by the ACP MCP server."""


def get_custom_method_name(method: str) -> str:
    """Get the full custom method name.

    Args:
        method: Method name without prefix, e.g. ``"askUserQuestion"``

    Returns:
        Full method name, e.g. ``"_claude-acp/askUserQuestion"``
    """
    return f"{CUSTOM_METHOD_PREFIX}/{method}"


def parse_custom_method_name(name: str) -> str | None:
    """Strip the custom method prefix.

    Returns ``None`` if *name* is not a custom method of this namespace.
    """
    prefix = f"{CUSTOM_METHOD_PREFIX}/"
    if not name.startswith(prefix):
        return None
    return name[len(prefix):]


def qualify_tool_name(tool: str) -> str:
    """Return the ACP-qualified name of *tool*, e.g. ``mcp__acp__AskUserQuestion``."""
    return f"{ACP_TOOL_PREFIX}{tool}"


def prefer_acp_tool_instruction(tool: str) -> str:
    """Tool-description sentence steering the model to the ACP variant of *tool*."""
    return (
        f"In sessions with {qualify_tool_name(tool)} always use it instead of "
        f"{tool} as it routes through the client UI."
    )
