from __future__ import annotations

from typing import Any, TypeGuard

import jsonschema

from agent_meta.errors import ConfigurationError


type JSONPyPrimitive = str | int | float | bool | None
"""Python primitives that convert to JSON without special treatment."""

type JSONPyDict = dict[str, JSONPyValue]

type JSONPyList = list[JSONPyValue]

type JSONPyValue = JSONPyPrimitive | JSONPyDict | JSONPyList


def is_py_json(val: Any) -> TypeGuard[JSONPyValue]:
    """Check if a value is JSON-compatible."""
    if val is None or isinstance(val, (str, int, float, bool)):
        return True
    if isinstance(val, dict):
        return all(isinstance(k, str) and is_py_json(v) for k, v in val.items())
    if isinstance(val, list):
        return all(is_py_json(item) for item in val)
    return False


class JSONSchema(dict[str, JSONPyValue]):
    """A validated JSON Schema dictionary.

    Validates against the Draft 2020-12 meta-schema so a malformed schema is
    rejected when a tool or output is registered, not when it is first used.
    """

    def __new__(cls, data: Any) -> JSONSchema:
        if not isinstance(data, dict):
            raise ConfigurationError("JSONSchema must be a dict")
        try:
            jsonschema.Draft202012Validator.check_schema(data)
        except jsonschema.SchemaError as e:
            raise ConfigurationError(f"Invalid JSON Schema: {e.message}") from e
        if not is_py_json(data):
            raise ConfigurationError("JSONSchema must only contain JSON values")
        return super().__new__(cls, data)

    def __reduce__(self) -> tuple[type[JSONSchema], tuple[dict[str, Any]]]:
        """Support pickling and deepcopy."""
        return (JSONSchema, (dict(self),))
