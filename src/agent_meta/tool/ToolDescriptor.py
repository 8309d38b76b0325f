"""ToolDescriptor - a registered tool on an agent class.

Descriptors live in the class's TOOLS list. They hold what a runtime needs to
advertise the tool and to validate its input; the validating method itself is
looked up on the instance by method_name.

to_metadata() gives the model-facing view (ToolMetadata): name, description and
the parameter schema rendered as JSON schema, with no validator or method attached.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from agent_meta.schema.Validator import Validator
from agent_meta.util.json_utils import JSONSchema


@dataclass(frozen=True)
class ToolMetadata:
    """What a model request carries for one tool, produced by ToolDescriptor.to_metadata.

    Attributes:
        name: Tool name the model calls (the name= override, if any)
        description: Description from @tool
        payload_json_schema: JSON schema of the first argument, taken from the validator
    """

    name: str
    description: str
    payload_json_schema: JSONSchema


@dataclass(frozen=True)
class ToolDescriptor:
    """A tool registered on an agent class.

    Attributes:
        name: Tool name (the method name)
        description: Human-readable description shown to the model
        parameter_schema: Validator applied to the tool's first argument
        method_name: Attribute name of the wrapped method on the owning class
    """

    name: str
    description: str
    parameter_schema: Validator[Any]
    method_name: str

    def to_metadata(self) -> ToolMetadata:
        """Extract tool metadata (without the validator or method) for a model request."""
        return ToolMetadata(
            name=self.name,
            description=self.description,
            payload_json_schema=JSONSchema(self.parameter_schema.json_schema()),
        )

    def to_json_schema(self) -> dict[str, Any]:
        """Export as {"name", "description", "parameters"}."""
        return {
            "name": self.name,
            "description": self.description,
            "parameters": self.parameter_schema.json_schema(),
        }
