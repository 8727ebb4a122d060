"""自定义能力 — 定义与检测。

Custom capability definitions and capability-document lookups.
"""

from acp_extensions.capabilities.definition import (
    PATH_SEPARATOR,
    CapabilityDefinition,
    CapabilityId,
)
from acp_extensions.capabilities.extract import (
    get_custom_capabilities,
    has_custom_capability,
)

__all__ = [
    "CapabilityDefinition",
    "CapabilityId",
    "PATH_SEPARATOR",
    "get_custom_capabilities",
    "has_custom_capability",
]
