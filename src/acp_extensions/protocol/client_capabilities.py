"""
Client capability types sent during ACP ``initialize``.

Only the fields this package reads are modelled; anything else the client
sends is kept as extra data.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class FileSystemCapability(BaseModel):
    """File system operations the client supports."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    read_text_file: bool = Field(default=False, alias="readTextFile")
    write_text_file: bool = Field(default=False, alias="writeTextFile")


class ClientCapabilities(BaseModel):
    """Capabilities declared by the client.

    ``_meta`` cannot be a pydantic field name, so it is exposed as
    ``field_meta`` and read/written under its wire alias.

    Example:
        >>> caps = ClientCapabilities.model_validate(
        ...     {"_meta": {"claude-acp": {"ui": {"askUserQuestion": True}}}}
        ... )
        >>> caps.field_meta["claude-acp"]["ui"]["askUserQuestion"]
        True
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    fs: FileSystemCapability = Field(default_factory=FileSystemCapability)
    terminal: bool = False
    field_meta: dict[str, Any] | None = Field(default=None, alias="_meta")

    def to_wire(self) -> dict[str, Any]:
        """Serialize with wire field names."""
        return self.model_dump(by_alias=True, exclude_none=True)
