"""AgentDefinition - everything an agent runtime reads from an agent class.

Decorators write metadata while the class is defined; a runtime reads it back here
to plan a model call: which model, which system prompts, which tools, and how to
validate the final answer.

Usage:
    definition = AgentDefinition.of(Writer)
    definition.model              # "claude-sonnet-4-5"
    await definition.render_system_prompt(writer)
    [t.to_metadata() for t in definition.tools]
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from agent_meta.errors import ConfigurationError
from agent_meta.prompt.PromptProvider import PromptProvider
from agent_meta.prompt.resolve import join_prompts, resolve_providers
from agent_meta.registry.TypeMetadataRegistry import TypeMetadataRegistry, registry
from agent_meta.schema.Validator import Validator
from agent_meta.tool.ToolDescriptor import ToolDescriptor


def get_model(owner: type, registry: TypeMetadataRegistry = registry) -> str | None:
    return registry.get_model(owner)


def get_system_prompts(
    owner: type, registry: TypeMetadataRegistry = registry
) -> tuple[PromptProvider, ...]:
    return registry.get_system_prompts(owner)


def get_output_schema(
    owner: type, registry: TypeMetadataRegistry = registry
) -> Validator[Any] | None:
    return registry.get_output_schema(owner)


def get_tools(
    owner: type, registry: TypeMetadataRegistry = registry
) -> tuple[ToolDescriptor, ...]:
    return registry.get_tools(owner)


@dataclass(frozen=True)
class AgentDefinition:
    """Snapshot of an agent class's metadata.

    Attributes:
        owner: The agent class
        model: Model identifier, or None if the class has no @model
        system_prompts: Prompt providers in resolution order
        output_schema: Validator for the final answer, or None
        tools: Registered tools in registration order
    """

    owner: type
    model: str | None
    system_prompts: tuple[PromptProvider, ...]
    output_schema: Validator[Any] | None
    tools: tuple[ToolDescriptor, ...]

    @classmethod
    def of(cls, owner: type, registry: TypeMetadataRegistry = registry) -> AgentDefinition:
        return cls(
            owner=owner,
            model=registry.get_model(owner),
            system_prompts=registry.get_system_prompts(owner),
            output_schema=registry.get_output_schema(owner),
            tools=registry.get_tools(owner),
        )

    def require_model(self) -> str:
        if self.model is None:
            raise ConfigurationError(f"{self.owner.__qualname__} has no @model")
        return self.model

    def _check_instance(self, instance: Any) -> None:
        if not isinstance(instance, self.owner):
            raise TypeError(
                f"Expected an instance of {self.owner.__qualname__}, "
                f"got {type(instance).__name__}"
            )

    async def resolve_system_prompts(
        self, instance: Any, concurrent: bool | None = None
    ) -> list[str]:
        self._check_instance(instance)
        return await resolve_providers(self.system_prompts, instance, concurrent)

    async def render_system_prompt(
        self,
        instance: Any,
        separator: str | None = None,
        concurrent: bool | None = None,
    ) -> str:
        prompts = await self.resolve_system_prompts(instance, concurrent)
        return join_prompts(prompts, separator)

    def parse_output(self, value: Any) -> Any:
        """Validate a produced value against the output schema.

        Raises:
            ConfigurationError: If the class has no @output schema
            StructuredValidationError: If value does not match
        """
        if self.output_schema is None:
            raise ConfigurationError(f"{self.owner.__qualname__} has no @output schema")
        return self.output_schema.parse(value)
