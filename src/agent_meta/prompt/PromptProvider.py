"""PromptProvider - lazily produces one system prompt fragment for an instance.

Providers are stored on the class (shared by all instances) and resolved against
a live instance when the agent runtime builds its system prompt.
"""

from __future__ import annotations

import inspect
from collections.abc import Callable, Coroutine
from typing import Any

from agent_meta.errors import ContractViolationError


type BoundPrompt = Callable[[], Coroutine[Any, Any, str]]
"""Zero-argument coroutine function returned by PromptProvider.bind()."""


class PromptProvider:
    """Base class for prompt providers.

    Subclasses implement resolve(); bind() turns a provider into the zero-argument
    callable the runtime awaits.
    """

    origin: str

    async def resolve(self, instance: Any) -> str:
        raise NotImplementedError

    def bind(self, instance: Any) -> BoundPrompt:
        async def bound() -> str:
            return await self.resolve(instance)

        return bound


class StaticPromptProvider(PromptProvider):
    """Constant text declared on the class."""

    origin = "class"

    def __init__(self, text: str) -> None:
        self.text = text

    async def resolve(self, instance: Any) -> str:
        return self.text

    def __repr__(self) -> str:
        return f"StaticPromptProvider({self.text!r})"


class MethodPromptProvider(PromptProvider):
    """Calls a method on the instance; the method may be sync or async.

    Raises ContractViolationError at resolution time if the method does not
    return a string.
    """

    origin = "method"

    def __init__(self, method: Callable[..., Any]) -> None:
        self.method = method
        self.name = getattr(method, "__name__", repr(method))

    async def resolve(self, instance: Any) -> str:
        get = getattr(self.method, "__get__", None)
        if get is not None:
            result = get(instance, type(instance))()
        else:
            result = self.method(instance)
        if inspect.isawaitable(result):
            result = await result
        if not isinstance(result, str):
            raise ContractViolationError(
                f"Method '{self.name}' decorated with @system_prompt must return a "
                f"string, got {type(result).__name__}"
            )
        return result

    def __repr__(self) -> str:
        return f"MethodPromptProvider({self.name})"
