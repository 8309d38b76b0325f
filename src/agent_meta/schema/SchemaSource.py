"""SchemaSource - where a tool or output schema comes from.

Decorators accept either a ready validator or a data-shape class. The argument is
classified once, at registration, into one of two variants and resolved to a
Validator right away.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from agent_meta.errors import ConfigurationError
from agent_meta.registry.TypeMetadataRegistry import TypeMetadataRegistry, registry
from agent_meta.schema.derive import derive_validator
from agent_meta.schema.Validator import JsonSchemaValidator, Validator


@dataclass(frozen=True)
class ExplicitValidator:
    """The caller supplied a validator; it is used as is."""

    validator: Validator[Any]


@dataclass(frozen=True)
class DerivableShape:
    """The caller supplied a @schema class; a validator is derived from it."""

    shape: type


type SchemaSource = ExplicitValidator | DerivableShape


def schema_source(value: Any) -> SchemaSource:
    """Classify a decorator's schema argument.

    - Validator instances are explicit.
    - dicts are treated as JSON schemas and wrapped in JsonSchemaValidator.
    - classes are shapes to derive from.

    Raises:
        ConfigurationError: If value is none of the above, or a dict that is not a
            valid JSON schema
    """
    if isinstance(value, type):
        return DerivableShape(value)
    if isinstance(value, dict):
        return ExplicitValidator(JsonSchemaValidator(value))
    if isinstance(value, Validator):
        return ExplicitValidator(value)
    raise ConfigurationError(
        f"Expected a validator, a JSON schema dict or a @schema class, "
        f"got {type(value).__name__}"
    )


def resolve_validator(
    source: SchemaSource, registry: TypeMetadataRegistry = registry
) -> Validator[Any]:
    match source:
        case ExplicitValidator(validator=validator):
            return validator
        case DerivableShape(shape=shape):
            return derive_validator(shape, registry)
