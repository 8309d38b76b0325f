"""Tests for tool lookup, metadata export and invocation."""

from __future__ import annotations

import pytest
from pydantic import BaseModel

from agent_meta.config import Settings
from agent_meta.decorators.tool import tool
from agent_meta.errors import StructuredValidationError
from agent_meta.schema.derive import schema
from agent_meta.tool.dispatch import get_tool, invoke_tool, tool_metadata
from agent_meta.tool.ToolDescriptor import ToolMetadata


@schema(description="Arguments for add")
class AddParams(BaseModel):
    a: int
    b: int


class Calculator:
    def __init__(self) -> None:
        self.calls = 0

    @tool("Add two numbers")
    def add(self, params: AddParams) -> int:
        self.calls += 1
        return params["a"] + params["b"]

    @tool("Echo text", {"type": "string"})
    async def echo(self, text: str) -> str:
        self.calls += 1
        return text


class TestGetTool:
    """Tests for get_tool."""

    def test_found(self) -> None:
        """A registered tool is found by name."""
        descriptor = get_tool(Calculator, "add")
        assert descriptor is not None
        assert descriptor.description == "Add two numbers"

    def test_missing(self) -> None:
        """An unknown name returns None."""
        assert get_tool(Calculator, "subtract") is None

    def test_last_registered_wins(self) -> None:
        """When duplicates are allowed, lookup returns the last one."""
        allow = Settings(duplicate_tools="allow")

        class Agent:
            @tool("first", {"type": "object"}, name="act", settings=allow)
            def first(self, payload: dict) -> str:
                return "first"

            @tool("second", {"type": "object"}, name="act", settings=allow)
            def second(self, payload: dict) -> str:
                return "second"

        descriptor = get_tool(Agent, "act")
        assert descriptor is not None
        assert descriptor.method_name == "second"


class TestToolMetadata:
    """Tests for tool_metadata."""

    def test_metadata_in_order(self) -> None:
        """Metadata is exported for each tool in registration order."""
        metadata = tool_metadata(Calculator)

        assert [m.name for m in metadata] == ["add", "echo"]
        assert all(isinstance(m, ToolMetadata) for m in metadata)
        assert metadata[0].payload_json_schema["description"] == "Arguments for add"
        assert metadata[1].payload_json_schema == {"type": "string"}


class TestInvokeTool:
    """Tests for invoke_tool."""

    @pytest.mark.asyncio
    async def test_sync_tool(self) -> None:
        """Sync tools return their result."""
        calc = Calculator()
        assert await invoke_tool(calc, "add", {"a": 2, "b": 3}) == 5
        assert calc.calls == 1

    @pytest.mark.asyncio
    async def test_async_tool(self) -> None:
        """Async tools are awaited."""
        assert await invoke_tool(Calculator(), "echo", "hello") == "hello"

    @pytest.mark.asyncio
    async def test_invalid_payload(self) -> None:
        """Invalid payloads raise and the method does not run."""
        calc = Calculator()

        with pytest.raises(StructuredValidationError):
            await invoke_tool(calc, "add", {"a": "two", "b": 3})

        assert calc.calls == 0

    @pytest.mark.asyncio
    async def test_unknown_tool(self) -> None:
        """Unknown tool names raise KeyError."""
        with pytest.raises(KeyError, match="subtract"):
            await invoke_tool(Calculator(), "subtract", {})
