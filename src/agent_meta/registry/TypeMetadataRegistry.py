"""TypeMetadataRegistry - process-wide side table of class-level agent metadata.

Decorators write here while a class is being defined; an agent runtime reads
here later. Keys are (owning class, MetadataKey). Entries are created lazily on
first write and never removed. Lookups use the declaring class only, so a
subclass does not see its parent's model, prompts, output schema or tools.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from agent_meta.errors import ConfigurationError
from agent_meta.registry.MetadataKey import MetadataKey

if TYPE_CHECKING:
    from agent_meta.prompt.PromptProvider import PromptProvider
    from agent_meta.schema.Validator import Validator
    from agent_meta.tool.ToolDescriptor import ToolDescriptor

logger = logging.getLogger("agent_meta.registry")


def _owner_name(owner: type) -> str:
    return getattr(owner, "__qualname__", repr(owner))


class TypeMetadataRegistry:
    """Storage for (class, MetadataKey) -> value.

    SYSTEM_PROMPTS and TOOLS hold lists that grow through append/prepend; every
    other key holds a single value that set() overwrites. List reads return
    tuples, so a caller can never mutate the stored order.

    Usage:
        registry = TypeMetadataRegistry()
        registry.set(MyAgent, MetadataKey.MODEL, "claude-sonnet")
        registry.get_model(MyAgent)  # "claude-sonnet"
    """

    _entries: dict[type, dict[MetadataKey, Any]]

    def __init__(self) -> None:
        self._entries = {}

    def _slot(self, owner: type) -> dict[MetadataKey, Any]:
        if not isinstance(owner, type):
            raise ConfigurationError(
                f"Metadata can only be attached to classes, got {type(owner).__name__}"
            )
        return self._entries.setdefault(owner, {})

    def _list_slot(self, owner: type, key: MetadataKey) -> list[Any]:
        if not key.is_list:
            raise ConfigurationError(f"{key.name} does not hold a list")
        return self._slot(owner).setdefault(key, [])

    def set(self, owner: type, key: MetadataKey, value: Any) -> None:
        if key.is_list:
            raise ConfigurationError(
                f"{key.name} is a list; use append() or prepend() instead of set()"
            )
        self._slot(owner)[key] = value
        logger.debug("%s.%s set", _owner_name(owner), key.value)

    def get(self, owner: type, key: MetadataKey, default: Any = None) -> Any:
        """Read a value. Missing entries return the default, never raise."""
        value = self._entries.get(owner, {}).get(key, default)
        if key.is_list and isinstance(value, list):
            return tuple(value)
        return value

    def has(self, owner: type, key: MetadataKey) -> bool:
        return key in self._entries.get(owner, {})

    def append(self, owner: type, key: MetadataKey, item: Any) -> None:
        self._list_slot(owner, key).append(item)
        logger.debug("%s.%s += %r", _owner_name(owner), key.value, item)

    def prepend(self, owner: type, key: MetadataKey, item: Any) -> None:
        self._list_slot(owner, key).insert(0, item)
        logger.debug("%s.%s prepended %r", _owner_name(owner), key.value, item)

    def owners(self, key: MetadataKey) -> list[type]:
        """List the classes that have an entry for key, in registration order."""
        return [owner for owner, slot in self._entries.items() if key in slot]

    # Typed accessors read by the agent runtime

    def get_model(self, owner: type) -> str | None:
        return self.get(owner, MetadataKey.MODEL)

    def get_system_prompts(self, owner: type) -> tuple[PromptProvider, ...]:
        return self.get(owner, MetadataKey.SYSTEM_PROMPTS, ())

    def get_output_schema(self, owner: type) -> Validator[Any] | None:
        return self.get(owner, MetadataKey.OUTPUT_SCHEMA)

    def get_tools(self, owner: type) -> tuple[ToolDescriptor, ...]:
        return self.get(owner, MetadataKey.TOOLS, ())

    def is_schema(self, shape: Any) -> bool:
        return isinstance(shape, type) and self.has(shape, MetadataKey.SCHEMA)


registry = TypeMetadataRegistry()
"""Default registry used by the decorators."""
