from __future__ import annotations

import asyncio
from collections.abc import Sequence
from typing import Any

from agent_meta.config import get_settings
from agent_meta.prompt.PromptProvider import PromptProvider
from agent_meta.registry.TypeMetadataRegistry import TypeMetadataRegistry, registry


async def resolve_providers(
    providers: Sequence[PromptProvider], instance: Any, concurrent: bool | None = None
) -> list[str]:
    """Await each provider against instance, keeping the providers' order.

    With concurrent=True the providers run together under asyncio.gather; the
    result order is the same. Defaults to Settings.concurrent_prompts.
    """
    if concurrent is None:
        concurrent = get_settings().concurrent_prompts
    if concurrent:
        return list(await asyncio.gather(*(p.bind(instance)() for p in providers)))
    return [await p.bind(instance)() for p in providers]


async def resolve_system_prompts(
    instance: Any,
    concurrent: bool | None = None,
    registry: TypeMetadataRegistry = registry,
) -> list[str]:
    """Resolve every system prompt of type(instance) against instance.

    Raises:
        ContractViolationError: If a prompt method does not return a string
    """
    providers = registry.get_system_prompts(type(instance))
    return await resolve_providers(providers, instance, concurrent)


def join_prompts(prompts: Sequence[str], separator: str | None = None) -> str:
    if separator is None:
        separator = get_settings().prompt_separator
    return separator.join(prompts)


async def render_system_prompt(
    instance: Any,
    separator: str | None = None,
    concurrent: bool | None = None,
    registry: TypeMetadataRegistry = registry,
) -> str:
    """Resolve the system prompts and join them with separator (default from Settings)."""
    prompts = await resolve_system_prompts(instance, concurrent, registry)
    return join_prompts(prompts, separator)
