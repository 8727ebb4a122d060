"""Claude ACP 自定义能力：在 ACP 协议之上协商命名空间化的扩展能力。

acp-extensions: namespaced custom capabilities for the Agent Client Protocol.

Clients advertise extra UI affordances in ``clientCapabilities._meta["claude-acp"]``;
the agent resolves them against a declarative registry into tool allow/deny
lists and calls them through ``_claude-acp/<method>`` extension methods.
"""
from __future__ import annotations

from acp_extensions.capabilities import (
    CapabilityDefinition,
    CapabilityId,
    get_custom_capabilities,
    has_custom_capability,
)
from acp_extensions.config import ExtensionConfig
from acp_extensions.errors import (
    AcpExtensionError,
    CapabilityNotActiveError,
    ConfigError,
    RegistryError,
    SchemaViolationError,
)
from acp_extensions.ext import AskUserQuestionBridge, ExtMethodSender
from acp_extensions.protocol import (
    CUSTOM_CAPABILITY_NAMESPACE,
    CUSTOM_METHOD_PREFIX,
    ClientCapabilities,
    get_custom_method_name,
    parse_custom_method_name,
    prefer_acp_tool_instruction,
    qualify_tool_name,
)
from acp_extensions.registry import (
    CUSTOM_CAPABILITY_REGISTRY,
    CapabilityRegistry,
    get_registry,
    init_registry,
    set_registry,
)
from acp_extensions.routing import (
    ActiveCapabilitiesResult,
    get_active_custom_capabilities,
)
from acp_extensions.schemas import (
    AskUserQuestionInput,
    AskUserQuestionOption,
    AskUserQuestionQuestion,
    AskUserQuestionRequest,
    AskUserQuestionResponse,
    SchemaViolation,
    ViolationCode,
    validate_ask_user_question_input,
)

__version__ = "0.3.0"

__all__ = [
    # Routing
    "ActiveCapabilitiesResult",
    "get_active_custom_capabilities",
    # Errors
    "AcpExtensionError",
    "CapabilityNotActiveError",
    "ConfigError",
    "RegistryError",
    "SchemaViolationError",
    # Bridges
    "AskUserQuestionBridge",
    "ExtMethodSender",
    # Schemas
    "AskUserQuestionInput",
    "AskUserQuestionOption",
    "AskUserQuestionQuestion",
    "AskUserQuestionRequest",
    "AskUserQuestionResponse",
    "SchemaViolation",
    "ViolationCode",
    "validate_ask_user_question_input",
    # Registry
    "CUSTOM_CAPABILITY_REGISTRY",
    "CapabilityDefinition",
    "CapabilityId",
    "CapabilityRegistry",
    "get_registry",
    "init_registry",
    "set_registry",
    # Protocol
    "CUSTOM_CAPABILITY_NAMESPACE",
    "CUSTOM_METHOD_PREFIX",
    "ClientCapabilities",
    "get_custom_method_name",
    "parse_custom_method_name",
    "prefer_acp_tool_instruction",
    "qualify_tool_name",
    # Capabilities
    "get_custom_capabilities",
    "has_custom_capability",
    # Config
    "ExtensionConfig",
    # Version
    "__version__",
]
