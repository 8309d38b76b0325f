"""Validators - objects that parse a value against a schema or raise.

Two implementations cover the two ways a schema reaches a decorator:

- JsonSchemaValidator wraps an explicit JSON schema (validated with jsonschema).
- ModelValidator wraps a data-shape class (validated with pydantic).

Both raise StructuredValidationError so callers catch a single error type no
matter which library did the checking.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

import jsonschema
import pydantic

from agent_meta.errors import SchemaDerivationError, StructuredValidationError
from agent_meta.util.json_utils import JSONSchema


@runtime_checkable
class Validator[T](Protocol):
    """Anything with parse() and json_schema() can guard a tool or an output."""

    def parse(self, value: Any) -> T:
        """Return the validated value or raise StructuredValidationError."""
        ...

    def json_schema(self) -> dict[str, Any]:
        """JSON schema describing accepted values (sent to the model)."""
        ...


class JsonSchemaValidator:
    """Validator for an explicit JSON schema.

    parse() returns the value unchanged; it only checks it.

    Example:
        validator = JsonSchemaValidator({
            "type": "object",
            "properties": {"id": {"type": "integer"}},
            "required": ["id"],
        })
        validator.parse({"id": 5})
    """

    schema: JSONSchema

    def __init__(self, schema: dict[str, Any], title: str = "value") -> None:
        self.schema = schema if isinstance(schema, JSONSchema) else JSONSchema(schema)
        self.title = title
        self._validator = jsonschema.Draft202012Validator(self.schema)

    def parse(self, value: Any) -> Any:
        errors = sorted(self._validator.iter_errors(value), key=lambda e: list(e.path))
        if errors:
            raise StructuredValidationError.from_jsonschema(errors, self.title)
        return value

    def json_schema(self) -> dict[str, Any]:
        return dict(self.schema)

    def __repr__(self) -> str:
        return f"JsonSchemaValidator({dict(self.schema)!r})"


class ModelValidator[T]:
    """Validator derived from a data-shape class through a pydantic TypeAdapter.

    parse() returns the validated value: a model instance for BaseModel and
    dataclass shapes, a dict for TypedDict shapes.
    """

    shape: type[T]
    description: str | None

    def __init__(self, shape: type[T], description: str | None = None) -> None:
        self.shape = shape
        self.description = description
        try:
            self._adapter: pydantic.TypeAdapter[T] = pydantic.TypeAdapter(shape)
        except pydantic.PydanticUserError as e:
            raise SchemaDerivationError(
                f"Cannot build a validator for {shape.__qualname__}: {e}"
            ) from e

    def parse(self, value: Any) -> T:
        try:
            return self._adapter.validate_python(value)
        except pydantic.ValidationError as e:
            raise StructuredValidationError.from_pydantic(e, self.shape.__name__) from e

    def json_schema(self) -> dict[str, Any]:
        schema = self._adapter.json_schema()
        if self.description and "description" not in schema:
            schema["description"] = self.description
        return schema

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ModelValidator):
            return NotImplemented
        return self.shape is other.shape and self.description == other.description

    def __hash__(self) -> int:
        return hash((self.shape, self.description))

    def __repr__(self) -> str:
        return f"ModelValidator({self.shape.__qualname__})"
