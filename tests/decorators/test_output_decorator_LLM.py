"""Tests for @output, bind_output_schema and parse_output."""

from __future__ import annotations

import pytest
from pydantic import BaseModel

from agent_meta.decorators.output import bind_output_schema, output, parse_output
from agent_meta.errors import (
    ConfigurationError,
    SchemaDerivationError,
    StructuredValidationError,
)
from agent_meta.registry.TypeMetadataRegistry import TypeMetadataRegistry, registry
from agent_meta.schema.derive import schema
from agent_meta.schema.Validator import JsonSchemaValidator, ModelValidator


@schema
class Answer(BaseModel):
    text: str
    confidence: float


@schema
class Summary(BaseModel):
    bullets: list[str]


class Unmarked(BaseModel):
    text: str


class TestOutputDecorator:
    """Tests for binding output schemas."""

    def test_shape_is_derived(self) -> None:
        """A @schema class is turned into a validator."""

        @output(Answer)
        class Solver:
            pass

        assert registry.get_output_schema(Solver) == ModelValidator(Answer)

    def test_validator_stored_verbatim(self) -> None:
        """An explicit validator is stored as is."""
        validator = JsonSchemaValidator({"type": "string"})

        @output(validator)
        class Solver:
            pass

        assert registry.get_output_schema(Solver) is validator

    def test_json_schema_dict(self) -> None:
        """A dict is wrapped in JsonSchemaValidator."""

        @output({"type": "string"})
        class Solver:
            pass

        assert isinstance(registry.get_output_schema(Solver), JsonSchemaValidator)

    def test_second_binding_overwrites(self) -> None:
        """Binding twice keeps only the second schema."""
        local = TypeMetadataRegistry()

        @schema(registry=local)
        class First(BaseModel):
            a: int

        @schema(registry=local)
        class Second(BaseModel):
            b: int

        class Solver:
            pass

        bind_output_schema(Solver, First, local)
        bind_output_schema(Solver, Second, local)

        assert local.get_output_schema(Solver) == ModelValidator(Second)

    def test_unmarked_shape_raises(self) -> None:
        """Shapes without @schema are rejected when the class is defined."""
        with pytest.raises(SchemaDerivationError):

            @output(Unmarked)
            class Solver:
                pass


class TestParseOutput:
    """Tests for parse_output."""

    def test_valid_output(self) -> None:
        """A valid value is parsed into the shape."""

        @output(Summary)
        class Summarizer:
            pass

        assert parse_output(Summarizer, {"bullets": ["a"]}) == Summary(bullets=["a"])

    def test_invalid_output_raises(self) -> None:
        """An invalid value raises StructuredValidationError."""

        @output(Answer)
        class Solver:
            pass

        with pytest.raises(StructuredValidationError) as exc_info:
            parse_output(Solver, {"text": "x", "confidence": "high"})

        assert exc_info.value.issues[0].path == ("confidence",)

    def test_no_schema_raises(self) -> None:
        """Parsing without an output schema is a configuration error."""

        class Solver:
            pass

        with pytest.raises(ConfigurationError, match="no @output schema"):
            parse_output(Solver, {})
