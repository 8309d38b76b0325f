"""@tool - expose an agent method as a schema-validated tool.

Usage with an explicit schema (validator, JSON schema dict, or @schema class):

    class Librarian:
        @tool("Look up a record", {"type": "object", "properties": {"id": {"type": "integer"}}})
        def lookup(self, params): ...

Usage with the schema taken from the first parameter's annotation:

    @schema
    class LookupParams(BaseModel):
        id: int

    class Librarian:
        @tool("Look up a record")
        async def lookup(self, params: LookupParams) -> str: ...

The decorated method is replaced by a wrapper that validates its first argument
before the method body runs. Invalid input raises StructuredValidationError and
the method is never called.
"""

from __future__ import annotations

import functools
import inspect
import logging
import types
import typing
from collections.abc import Callable
from typing import Any

from agent_meta.config import Settings, get_settings
from agent_meta.errors import ConfigurationError
from agent_meta.registry.MetadataKey import MetadataKey
from agent_meta.registry.TypeMetadataRegistry import TypeMetadataRegistry, registry
from agent_meta.schema.derive import derive_validator
from agent_meta.schema.SchemaSource import resolve_validator, schema_source
from agent_meta.schema.Validator import Validator
from agent_meta.tool.ToolDescriptor import ToolDescriptor

logger = logging.getLogger("agent_meta.tool")


def _first_parameter(func: Callable[..., Any]) -> inspect.Parameter | None:
    """The first parameter after self, if it can be passed positionally or by name."""
    params = list(inspect.signature(func).parameters.values())[1:]
    if not params:
        return None
    first = params[0]
    if first.kind in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD):
        return None
    return first


def _require_first_parameter(func: Callable[..., Any]) -> inspect.Parameter:
    first = _first_parameter(func)
    if first is None:
        raise ConfigurationError(
            f"@tool decorator on {func.__qualname__} requires at least one parameter "
            f"or an explicit schema."
        )
    return first


def _first_parameter_type(
    func: Callable[..., Any], first: inspect.Parameter, owner: type | None = None
) -> Any:
    """Evaluate the annotation of the first parameter only.

    Other annotations (the return type in particular) may name classes that do not
    exist yet and are never evaluated. The owning class is visible by its name.
    """
    annotation = func.__annotations__.get(first.name)
    if not isinstance(annotation, str):
        return annotation
    localns: dict[str, Any] = {owner.__name__: owner} if owner is not None else {}
    holder = types.SimpleNamespace(__annotations__={first.name: annotation})
    try:
        return typing.get_type_hints(holder, func.__globals__, localns)[first.name]
    except NameError as e:
        raise ConfigurationError(
            f"@tool decorator on {func.__qualname__} could not resolve the annotation "
            f"of '{first.name}': {e}"
        ) from e


def resolve_tool_schema(
    func: Callable[..., Any],
    schema: Any = None,
    registry: TypeMetadataRegistry = registry,
    owner: type | None = None,
) -> Validator[Any]:
    """Find the parameter validator for a tool method.

    Priority: explicit validator or JSON schema dict, then explicit @schema class,
    then the annotation of the method's first parameter after self.

    Raises:
        ConfigurationError: If no schema is given and the first parameter is missing,
            unannotated, or annotated with a class that is not a @schema class
    """
    if schema is not None:
        return resolve_validator(schema_source(schema), registry)

    first = _require_first_parameter(func)
    param_type = _first_parameter_type(func, first, owner)
    if not registry.is_schema(param_type):
        raise ConfigurationError(
            f"@tool decorator on {func.__qualname__} requires an explicit schema or a "
            f"parameter class decorated with @schema."
        )
    return derive_validator(param_type, registry)


def validating_wrapper(
    func: Callable[..., Any], parameter_schema: Validator[Any]
) -> Callable[..., Any]:
    """Wrap func so its first argument after self is parsed before func runs.

    The original arguments are passed through unchanged, and coroutine functions
    stay coroutine functions.
    """
    first = _first_parameter(func)
    first_name = first.name if first is not None else None

    def check(args: tuple[Any, ...], kwargs: dict[str, Any]) -> None:
        if args:
            value = args[0]
        elif first_name is not None:
            value = kwargs.get(first_name)
        else:
            value = None
        if value is not None:
            parameter_schema.parse(value)

    if inspect.iscoroutinefunction(func):

        @functools.wraps(func)
        async def async_wrapper(self: Any, *args: Any, **kwargs: Any) -> Any:
            check(args, kwargs)
            return await func(self, *args, **kwargs)

        return async_wrapper

    @functools.wraps(func)
    def wrapper(self: Any, *args: Any, **kwargs: Any) -> Any:
        check(args, kwargs)
        return func(self, *args, **kwargs)

    return wrapper


def _register_descriptor(
    owner: type,
    descriptor: ToolDescriptor,
    registry: TypeMetadataRegistry,
    settings: Settings,
) -> None:
    existing = [t for t in registry.get_tools(owner) if t.name == descriptor.name]
    if existing:
        if settings.duplicate_tools == "reject":
            raise ConfigurationError(
                f"Tool '{descriptor.name}' is already registered on {owner.__qualname__}"
            )
        logger.warning(
            "Tool %r registered twice on %s; the last one wins",
            descriptor.name,
            owner.__qualname__,
        )
    registry.append(owner, MetadataKey.TOOLS, descriptor)


class ToolMethod:
    """Descriptor returned by @tool.

    Holds the original method and its validating wrapper. Attribute access returns
    the wrapper bound to the instance, so every call through the method name is
    validated. The ToolDescriptor is registered when the owning class is created.

    An explicit schema is resolved at decoration time. A schema taken from the first
    parameter's annotation is resolved in __set_name__, once the owning class exists,
    so the annotation may name that class.
    """

    def __init__(
        self,
        func: Callable[..., Any],
        description: str,
        schema: Any = None,
        name: str | None = None,
        registry: TypeMetadataRegistry = registry,
        settings: Settings | None = None,
    ) -> None:
        if isinstance(func, ToolMethod):
            raise ConfigurationError(
                f"{func.func.__qualname__} is already a tool; @tool cannot be "
                f"applied twice"
            )
        if not inspect.isfunction(func):
            raise ConfigurationError(f"@tool can only be applied to methods, not {func!r}")
        if not isinstance(description, str):
            raise ConfigurationError(
                f"@tool on {func.__qualname__} needs a description string first"
            )
        self.func = func
        self.description = description
        self.tool_name = name
        self.registry = registry
        self.settings = settings
        self.parameter_schema: Validator[Any] | None = None
        self.wrapper: Callable[..., Any] | None = None
        if schema is not None:
            self._install_schema(resolve_tool_schema(func, schema, registry))
        else:
            _require_first_parameter(func)
        self.__doc__ = func.__doc__

    def _install_schema(self, parameter_schema: Validator[Any]) -> None:
        self.parameter_schema = parameter_schema
        self.wrapper = validating_wrapper(self.func, parameter_schema)

    def __set_name__(self, owner: type, name: str) -> None:
        if self.parameter_schema is None:
            self._install_schema(
                resolve_tool_schema(self.func, None, self.registry, owner)
            )
        self.owner = owner
        self.method_name = name
        self.descriptor = ToolDescriptor(
            name=self.tool_name or name,
            description=self.description,
            parameter_schema=self.parameter_schema,
            method_name=name,
        )
        _register_descriptor(
            owner, self.descriptor, self.registry, self.settings or get_settings()
        )

    def __get__(self, instance: Any, owner: type | None = None) -> Any:
        if self.wrapper is None:
            raise ConfigurationError(
                f"Tool {self.func.__qualname__} is not attached to a class yet"
            )
        return self.wrapper.__get__(instance, owner)


def tool(
    description: str,
    schema: Any = None,
    *,
    name: str | None = None,
    registry: TypeMetadataRegistry = registry,
    settings: Settings | None = None,
) -> Callable[[Callable[..., Any]], ToolMethod]:
    """Method decorator marking a method as a tool.

    Args:
        description: What the tool does (shown to the model)
        schema: Optional Validator, JSON schema dict, or @schema class. When omitted
            the first parameter's annotation must be a @schema class.
        name: Tool name override (defaults to the method name)
        registry: Registry to write to
        settings: Overrides the process settings (duplicate tool policy)

    Raises:
        ConfigurationError: At class definition time, if no schema can be found
    """

    def decorator(func: Callable[..., Any]) -> ToolMethod:
        return ToolMethod(func, description, schema, name, registry, settings)

    return decorator


def register_tool(
    owner: type,
    method_name: str,
    description: str,
    schema: Any = None,
    *,
    name: str | None = None,
    registry: TypeMetadataRegistry = registry,
    settings: Settings | None = None,
) -> ToolMethod:
    """Register an existing method of a class as a tool.

    Builder-style counterpart of @tool for classes that are already defined. The
    method is replaced on owner by a ToolMethod.

    Raises:
        ConfigurationError: If the method does not exist, is already a tool, or no
            schema can be found
    """
    try:
        attr = inspect.getattr_static(owner, method_name)
    except AttributeError as e:
        raise ConfigurationError(
            f"{owner.__qualname__} has no method '{method_name}'"
        ) from e
    tool_method = ToolMethod(attr, description, schema, name, registry, settings)
    tool_method.__set_name__(owner, method_name)
    setattr(owner, method_name, tool_method)
    return tool_method
