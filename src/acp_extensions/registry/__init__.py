"""能力注册表 — 声明式的自定义能力定义表。

Custom capability registry.

An ordered, immutable table of ``CapabilityDefinition`` records. Adding a
capability means appending a record; extraction, checking and routing never
special-case an entry. Order matters: routing output follows registry order.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import Any, overload

import yaml

from acp_extensions.capabilities.definition import CapabilityDefinition, CapabilityId
from acp_extensions.config import ExtensionConfig, registry_file_from_env
from acp_extensions.errors import RegistryError
from acp_extensions.protocol.namespace import ACP_TOOL_PREFIX
from acp_extensions.telemetry import get_logger

logger = get_logger(__name__)


def _key(ident: CapabilityId | str) -> str:
    return ident.value if isinstance(ident, CapabilityId) else str(ident)


class CapabilityRegistry:
    """Append-only, ordered table of custom capabilities.

    Usage::

        registry = CUSTOM_CAPABILITY_REGISTRY.extend([
            CapabilityDefinition(
                id="todo_write",
                path="ui.todoWrite",
                tool="TodoWrite",
                disable_built_in=("TodoWrite",),
                method="todoWrite",
            ),
        ])
        registry.get("todo_write").method_name  # "_claude-acp/todoWrite"
    """

    def __init__(self, definitions: Iterable[CapabilityDefinition] = ()) -> None:
        defs = tuple(definitions)
        by_id: dict[str, CapabilityDefinition] = {}
        by_path: dict[str, CapabilityDefinition] = {}
        for definition in defs:
            if definition.id in by_id:
                raise RegistryError(
                    f"Duplicate capability id {definition.id!r}",
                    capability_id=definition.id,
                )
            if definition.path in by_path:
                raise RegistryError(
                    f"Capability path {definition.path!r} is already registered "
                    f"by {by_path[definition.path].id!r}",
                    capability_id=definition.id,
                )
            by_id[definition.id] = definition
            by_path[definition.path] = definition

        self._definitions = defs
        self._by_id = by_id
        self._by_path = by_path

    # ---- sequence protocol ---------------------------------------------

    def __iter__(self) -> Iterator[CapabilityDefinition]:
        return iter(self._definitions)

    def __len__(self) -> int:
        return len(self._definitions)

    @overload
    def __getitem__(self, index: int) -> CapabilityDefinition: ...

    @overload
    def __getitem__(self, index: slice) -> tuple[CapabilityDefinition, ...]: ...

    def __getitem__(
        self, index: int | slice
    ) -> CapabilityDefinition | tuple[CapabilityDefinition, ...]:
        return self._definitions[index]

    def __contains__(self, item: object) -> bool:
        if isinstance(item, CapabilityDefinition):
            return self._by_id.get(item.id) == item
        if isinstance(item, str):
            return _key(item) in self._by_id
        return False

    def __repr__(self) -> str:
        return f"CapabilityRegistry({[d.id for d in self._definitions]!r})"

    # ---- lookups -------------------------------------------------------

    def get(self, ident: CapabilityId | str) -> CapabilityDefinition | None:
        """Look up a definition by id."""
        return self._by_id.get(_key(ident))

    def by_path(self, path: str) -> CapabilityDefinition | None:
        """Look up a definition by its flag path."""
        return self._by_path.get(path)

    def by_method(self, method: str) -> CapabilityDefinition | None:
        """Look up a definition by bare custom method name."""
        return next((d for d in self._definitions if d.method == method), None)

    def by_tool(self, tool: str) -> CapabilityDefinition | None:
        """Look up a definition by tool name, qualified or not."""
        if tool.startswith(ACP_TOOL_PREFIX):
            tool = tool[len(ACP_TOOL_PREFIX):]
        return next((d for d in self._definitions if d.tool == tool), None)

    def ids(self) -> tuple[str, ...]:
        """Ids in registry order."""
        return tuple(d.id for d in self._definitions)

    # ---- growth --------------------------------------------------------

    def extend(self, definitions: Iterable[CapabilityDefinition]) -> CapabilityRegistry:
        """Return a new registry with *definitions* appended.

        Existing entries keep their position; collisions raise RegistryError.
        """
        return CapabilityRegistry(self._definitions + tuple(definitions))

    # ---- serialization -------------------------------------------------

    @classmethod
    def from_dicts(cls, items: Iterable[dict[str, Any]]) -> CapabilityRegistry:
        """Build a registry from registry-file entries."""
        return cls(CapabilityDefinition.from_dict(item) for item in items)

    @classmethod
    def from_file(cls, path: str | Path) -> CapabilityRegistry:
        """Load definitions from a YAML or JSON file.

        The file holds either a list of entries or a mapping with a
        ``capabilities`` list.
        """
        path = Path(path)
        try:
            content = path.read_text(encoding="utf-8")
        except OSError as e:
            raise RegistryError(
                f"Cannot read registry file: {e}", registry_path=str(path)
            ) from e

        try:
            if path.suffix == ".json":
                data = json.loads(content)
            else:
                data = yaml.safe_load(content)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise RegistryError(
                f"Invalid registry file: {e}", registry_path=str(path)
            ) from e

        if isinstance(data, dict):
            data = data.get("capabilities")
        if not isinstance(data, list) or not all(isinstance(i, dict) for i in data):
            raise RegistryError(
                "Registry file must contain a list of capability entries",
                registry_path=str(path),
            )
        return cls.from_dicts(data)

    def to_dicts(self) -> list[dict[str, Any]]:
        """Convert to registry-file entries."""
        return [d.to_dict() for d in self._definitions]


CUSTOM_CAPABILITY_REGISTRY = CapabilityRegistry(
    [
        CapabilityDefinition(
            id=CapabilityId.ASK_USER_QUESTION,
            path="ui.askUserQuestion",
            tool="AskUserQuestion",
            disable_built_in=("AskUserQuestion",),
            method="askUserQuestion",
        ),
    ]
)
"""Built-in custom capabilities."""


_global_registry: CapabilityRegistry | None = None


def build_registry(config: ExtensionConfig | None = None) -> CapabilityRegistry:
    """Build the process registry: built-ins plus the configured registry file.

    Without *config* only ``ACP_EXT_REGISTRY_FILE`` is read.

    Raises:
        RegistryError: The registry file is unreadable or malformed
    """
    registry_file = config.registry_file if config is not None else registry_file_from_env()
    registry = CUSTOM_CAPABILITY_REGISTRY
    if registry_file is not None:
        extra = CapabilityRegistry.from_file(registry_file)
        registry = registry.extend(extra)
        logger.debug(
            "Loaded extra capabilities",
            registry_file=str(registry_file),
            ids=list(extra.ids()),
        )
    return registry


def init_registry(config: ExtensionConfig | None = None) -> CapabilityRegistry:
    """Build the process registry once at host startup and install it.

    Errors surface here, never from capability resolution.
    """
    registry = build_registry(config)
    set_registry(registry)
    return registry


def get_registry() -> CapabilityRegistry:
    """Get the process-wide registry (the built-ins until one is installed)."""
    return _global_registry if _global_registry is not None else CUSTOM_CAPABILITY_REGISTRY


def set_registry(registry: CapabilityRegistry | None) -> None:
    """Replace the process-wide registry (None restores the built-ins)."""
    global _global_registry
    _global_registry = registry


__all__ = [
    "CUSTOM_CAPABILITY_REGISTRY",
    "CapabilityRegistry",
    "build_registry",
    "get_registry",
    "init_registry",
    "set_registry",
]
