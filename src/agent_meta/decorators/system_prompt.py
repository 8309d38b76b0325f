"""@system_prompt - declare system prompts on a class and its methods.

Usage:
    @system_prompt("Be terse.")
    class Writer:
        @system_prompt
        def context(self) -> str:
            return f"Today is {self.today}"

Method prompts register in class-body order when the class is created; the class
prompt is applied afterwards and goes to the front. Stacked class decorators read
top-down, because decorators apply bottom-up and each one prepends:

    @system_prompt("first")
    @system_prompt("second")
    class Writer: ...   # ["first", "second", <method prompts>]
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, overload

from agent_meta.errors import ConfigurationError
from agent_meta.prompt.PromptProvider import MethodPromptProvider, StaticPromptProvider
from agent_meta.registry.MetadataKey import MetadataKey
from agent_meta.registry.TypeMetadataRegistry import TypeMetadataRegistry, registry


def add_class_prompt(
    owner: type, text: str, registry: TypeMetadataRegistry = registry
) -> None:
    """Insert a static prompt at the front of the class's system prompts."""
    if not isinstance(text, str):
        raise ConfigurationError(
            f"Class system prompt for {owner.__qualname__} must be a string, "
            f"got {type(text).__name__}"
        )
    registry.prepend(owner, MetadataKey.SYSTEM_PROMPTS, StaticPromptProvider(text))


def add_method_prompt(
    owner: type, method: Callable[..., Any], registry: TypeMetadataRegistry = registry
) -> None:
    """Append a prompt produced by calling method on the instance."""
    if not callable(method):
        raise ConfigurationError(
            f"@system_prompt must be applied to methods, not to {method!r} "
            f"on {owner.__qualname__}"
        )
    registry.append(owner, MetadataKey.SYSTEM_PROMPTS, MethodPromptProvider(method))


class PromptMethod:
    """Descriptor returned by @system_prompt on a method.

    Registers the method as a prompt provider when the owning class is created and
    otherwise behaves like the plain method.
    """

    def __init__(
        self, method: Callable[..., Any], registry: TypeMetadataRegistry = registry
    ) -> None:
        if not callable(method):
            raise ConfigurationError(
                f"@system_prompt must be applied to methods, not to {method!r}"
            )
        self.method = method
        self.registry = registry
        self.__doc__ = getattr(method, "__doc__", None)

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name
        add_method_prompt(owner, self.method, self.registry)

    def __get__(self, instance: Any, owner: type | None = None) -> Any:
        get = getattr(self.method, "__get__", None)
        if get is None:
            return self.method
        return get(instance, owner)


@overload
def system_prompt[C: type](
    prompt: str, /, *, registry: TypeMetadataRegistry = registry
) -> Callable[[C], C]: ...


@overload
def system_prompt(
    prompt: Callable[..., Any], /, *, registry: TypeMetadataRegistry = registry
) -> PromptMethod: ...


@overload
def system_prompt(
    *, registry: TypeMetadataRegistry = registry
) -> Callable[[Callable[..., Any]], PromptMethod]: ...


def system_prompt(
    prompt: Any = None, /, *, registry: TypeMetadataRegistry = registry
) -> Any:
    """Declare a system prompt.

    - @system_prompt("text") on a class adds a static prompt in front.
    - @system_prompt or @system_prompt() on a method adds a dynamic prompt; the
      method must return a str (or an awaitable of one).

    Raises:
        ConfigurationError: If used bare on a class or applied to a non-callable
    """
    if isinstance(prompt, str):

        def class_decorator[C: type](cls: C) -> C:
            if not isinstance(cls, type):
                raise ConfigurationError(
                    "@system_prompt('...') must be applied to a class; use a bare "
                    "@system_prompt on methods"
                )
            add_class_prompt(cls, prompt, registry)
            return cls

        return class_decorator

    if prompt is None:

        def method_decorator(method: Callable[..., Any]) -> PromptMethod:
            return PromptMethod(method, registry)

        return method_decorator

    if isinstance(prompt, type):
        raise ConfigurationError(
            f"@system_prompt on class {prompt.__qualname__} needs the prompt text: "
            f"@system_prompt('...')"
        )
    return PromptMethod(prompt, registry)
