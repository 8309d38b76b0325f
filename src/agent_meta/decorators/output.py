from __future__ import annotations

from collections.abc import Callable
from typing import Any

from agent_meta.errors import ConfigurationError
from agent_meta.registry.MetadataKey import MetadataKey
from agent_meta.registry.TypeMetadataRegistry import TypeMetadataRegistry, registry
from agent_meta.schema.SchemaSource import resolve_validator, schema_source
from agent_meta.schema.Validator import Validator


def bind_output_schema(
    owner: type, schema_or_shape: Any, registry: TypeMetadataRegistry = registry
) -> Validator[Any]:
    """Bind the output schema of an agent class, replacing any previous one.

    Args:
        owner: The agent class
        schema_or_shape: A Validator, a JSON schema dict, or a @schema class

    Returns:
        The stored validator

    Raises:
        ConfigurationError: If schema_or_shape cannot be turned into a validator
    """
    validator = resolve_validator(schema_source(schema_or_shape), registry)
    registry.set(owner, MetadataKey.OUTPUT_SCHEMA, validator)
    return validator


def output[C: type](
    schema_or_shape: Any, registry: TypeMetadataRegistry = registry
) -> Callable[[C], C]:
    """Class decorator defining the structured output of an agent.

    Usage:
        @output(Answer)  # Answer is a @schema class
        class Solver: ...
    """

    def decorator(cls: C) -> C:
        bind_output_schema(cls, schema_or_shape, registry)
        return cls

    return decorator


def parse_output(
    owner: type, value: Any, registry: TypeMetadataRegistry = registry
) -> Any:
    """Validate a produced value against the class's output schema.

    Raises:
        ConfigurationError: If the class has no output schema
        StructuredValidationError: If value does not match the schema
    """
    validator = registry.get_output_schema(owner)
    if validator is None:
        raise ConfigurationError(f"{owner.__qualname__} has no @output schema")
    return validator.parse(value)
