"""
Reading custom capabilities out of the client's capability document.

Absence is the normal case for clients that predate the extension, so
nothing here raises: every malformed or missing piece reads as "not
advertised".
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from acp_extensions.capabilities.definition import PATH_SEPARATOR
from acp_extensions.protocol.namespace import CUSTOM_CAPABILITY_NAMESPACE, META_KEY


def _get_meta(client_capabilities: Any) -> Any:
    if client_capabilities is None:
        return None
    if isinstance(client_capabilities, Mapping):
        return client_capabilities.get(META_KEY)
    # pydantic models (ours and the ACP SDK's) expose ``_meta`` as field_meta
    for attr in ("field_meta", "meta"):
        meta = getattr(client_capabilities, attr, None)
        if meta is not None:
            return meta
    return None


def get_custom_capabilities(client_capabilities: Any) -> Mapping[str, Any] | None:
    """Get custom capabilities from ``clientCapabilities._meta``.

    Args:
        client_capabilities: Wire dict, ``ClientCapabilities`` model, or None

    Returns:
        The ``_meta["claude-acp"]`` mapping, or None if not advertised.
    """
    meta = _get_meta(client_capabilities)
    if not isinstance(meta, Mapping):
        return None
    custom = meta.get(CUSTOM_CAPABILITY_NAMESPACE)
    if not isinstance(custom, Mapping):
        return None
    return custom


def has_custom_capability(client_capabilities: Any, path: str) -> bool:
    """Check if a specific custom capability is enabled.

    Only a literal ``True`` at the end of the path counts; ``"true"``, ``1``
    or a nested object do not.

    Args:
        client_capabilities: Client capabilities from initialize
        path: Dot-notation path, e.g. ``"ui.askUserQuestion"``
    """
    current: Any = get_custom_capabilities(client_capabilities)
    if current is None:
        return False

    for part in path.split(PATH_SEPARATOR):
        if not isinstance(current, Mapping):
            return False
        current = current.get(part)

    return current is True
