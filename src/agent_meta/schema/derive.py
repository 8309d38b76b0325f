"""Schema derivation - turning annotated data-shape classes into validators.

A data shape is a class whose annotated fields describe a tool's parameters or
an agent's output. Mark it with @schema so it can be used implicitly (as the
first parameter annotation of a @tool method) or passed to @tool / @output.

Example:
    @schema(description="Look up a record")
    class LookupParams(BaseModel):
        id: int

    validator = derive_validator(LookupParams)
    validator.parse({"id": 5})  # LookupParams(id=5)
"""

from __future__ import annotations

import dataclasses
import inspect
from collections.abc import Callable
from typing import Any, is_typeddict, overload

import pydantic

from agent_meta.errors import SchemaDerivationError
from agent_meta.registry.MetadataKey import MetadataKey
from agent_meta.registry.TypeMetadataRegistry import TypeMetadataRegistry, registry
from agent_meta.schema.Validator import ModelValidator


def _as_shape[T](cls: type[T]) -> type[T]:
    if isinstance(cls, type) and issubclass(cls, pydantic.BaseModel):
        return cls
    if dataclasses.is_dataclass(cls) or is_typeddict(cls):
        return cls
    if not inspect.get_annotations(cls):
        raise SchemaDerivationError(
            f"@schema class {cls.__qualname__} declares no annotated fields"
        )
    return dataclasses.dataclass(cls)


@overload
def schema[T](cls: type[T], /) -> type[T]: ...


@overload
def schema[T](
    *, description: str | None = None, registry: TypeMetadataRegistry = registry
) -> Callable[[type[T]], type[T]]: ...


def schema[T](
    cls: type[T] | None = None,
    /,
    *,
    description: str | None = None,
    registry: TypeMetadataRegistry = registry,
) -> type[T] | Callable[[type[T]], type[T]]:
    """Class decorator marking a data-shape class as schema-derivable.

    Accepts pydantic models, dataclasses and TypedDicts as they are. A plain class
    with annotated fields is turned into a dataclass.

    Can be used with or without arguments:
        @schema
        class A(BaseModel): ...

        @schema(description="What A is for")
        class B: ...
    """

    def decorator(target: type[T]) -> type[T]:
        if not isinstance(target, type):
            raise SchemaDerivationError(
                f"@schema can only be applied to classes, not {target!r}"
            )
        shape = _as_shape(target)
        registry.set(shape, MetadataKey.SCHEMA, description)
        return shape

    if cls is not None:
        return decorator(cls)
    return decorator


def derive_validator[T](
    shape: type[T], registry: TypeMetadataRegistry = registry
) -> ModelValidator[T]:
    """Build a validator for a class marked with @schema.

    Raises:
        SchemaDerivationError: If the class is not marked with @schema or pydantic
            cannot build a schema for its fields
    """
    if not registry.is_schema(shape):
        name = getattr(shape, "__qualname__", repr(shape))
        raise SchemaDerivationError(
            f"{name} is not a schema class; decorate it with @schema"
        )
    description: Any = registry.get(shape, MetadataKey.SCHEMA)
    return ModelValidator(shape, description=description)
