from __future__ import annotations

from collections.abc import Callable

from agent_meta.errors import ConfigurationError
from agent_meta.registry.MetadataKey import MetadataKey
from agent_meta.registry.TypeMetadataRegistry import TypeMetadataRegistry, registry


def associate_model(
    owner: type, model_identifier: str, registry: TypeMetadataRegistry = registry
) -> None:
    """Bind a model identifier to a class, replacing any previous one.

    The identifier is passed through to the runtime untouched.

    Raises:
        ConfigurationError: If model_identifier is not a non-empty string
    """
    if not isinstance(model_identifier, str) or not model_identifier:
        raise ConfigurationError(
            f"@model on {getattr(owner, '__qualname__', owner)!s} needs a non-empty "
            f"model identifier string, got {model_identifier!r}"
        )
    registry.set(owner, MetadataKey.MODEL, model_identifier)


def model[C: type](
    model_identifier: str, registry: TypeMetadataRegistry = registry
) -> Callable[[C], C]:
    """Class decorator associating a model identifier with an agent class.

    Usage:
        @model("claude-sonnet-4-5")
        class Writer: ...
    """

    def decorator(cls: C) -> C:
        associate_model(cls, model_identifier, registry)
        return cls

    return decorator
