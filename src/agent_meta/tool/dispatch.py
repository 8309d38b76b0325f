"""Tool lookup and invocation for an agent runtime.

A runtime receives tool calls from a model as (name, payload) pairs. These helpers
find the registered tool and call its validating method on the agent instance.
"""

from __future__ import annotations

import inspect
from typing import Any

from agent_meta.registry.TypeMetadataRegistry import TypeMetadataRegistry, registry
from agent_meta.tool.ToolDescriptor import ToolDescriptor, ToolMetadata


def get_tool(
    owner: type, name: str, registry: TypeMetadataRegistry = registry
) -> ToolDescriptor | None:
    """Find a tool by name. If the name was registered more than once, the last one wins."""
    for descriptor in reversed(registry.get_tools(owner)):
        if descriptor.name == name:
            return descriptor
    return None


def tool_metadata(
    owner: type, registry: TypeMetadataRegistry = registry
) -> list[ToolMetadata]:
    """Metadata (no methods) for every tool of owner, in registration order."""
    return [t.to_metadata() for t in registry.get_tools(owner)]


async def invoke_tool(
    instance: Any,
    name: str,
    payload: Any,
    registry: TypeMetadataRegistry = registry,
) -> Any:
    """Call a tool on an agent instance with the payload as its first argument.

    The payload is validated by the tool's wrapper before the method runs.
    Coroutine results are awaited.

    Raises:
        KeyError: If the tool is not registered on type(instance)
        StructuredValidationError: If payload does not match the tool's schema
    """
    descriptor = get_tool(type(instance), name, registry)
    if descriptor is None:
        raise KeyError(f"Tool '{name}' is not registered on {type(instance).__qualname__}")

    method = getattr(instance, descriptor.method_name)
    result = method(payload)
    if inspect.isawaitable(result):
        result = await result
    return result
