"""
ACP protocol surface used by custom capabilities.

Reserved namespace constants, method/tool naming, and the client
capability model.
"""

from acp_extensions.protocol.client_capabilities import (
    ClientCapabilities,
    FileSystemCapability,
)
from acp_extensions.protocol.namespace import (
    ACP_TOOL_PREFIX,
    CUSTOM_CAPABILITY_NAMESPACE,
    CUSTOM_METHOD_PREFIX,
    META_KEY,
    get_custom_method_name,
    parse_custom_method_name,
    prefer_acp_tool_instruction,
    qualify_tool_name,
)

__all__ = [
    "ACP_TOOL_PREFIX",
    "CUSTOM_CAPABILITY_NAMESPACE",
    "CUSTOM_METHOD_PREFIX",
    "ClientCapabilities",
    "FileSystemCapability",
    "META_KEY",
    "get_custom_method_name",
    "parse_custom_method_name",
    "prefer_acp_tool_instruction",
    "qualify_tool_name",
]
