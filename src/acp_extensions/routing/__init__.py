"""
Tool routing for custom capabilities.

Example:
    >>> from acp_extensions.routing import get_active_custom_capabilities
    >>>
    >>> caps = {"_meta": {"claude-acp": {"ui": {"askUserQuestion": True}}}}
    >>> result = get_active_custom_capabilities(caps)
    >>> result.allowed_tools
    ('mcp__acp__AskUserQuestion',)
    >>> result.disallowed_tools
    ('AskUserQuestion',)
"""

from acp_extensions.routing.resolver import (
    ActiveCapabilitiesResult,
    get_active_custom_capabilities,
)

__all__ = [
    "ActiveCapabilitiesResult",
    "get_active_custom_capabilities",
]
