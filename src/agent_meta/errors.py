"""Error taxonomy for agent metadata registration and validation.

ConfigurationError is raised while a class is being defined (bad decorator use,
missing schema). ContractViolationError is raised when a prompt method breaks its
return contract. StructuredValidationError is raised when a value fails a schema
and carries one FieldIssue per failing field.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import jsonschema
    import pydantic


class AgentMetaError(Exception):
    """Base class for all agent_meta errors."""


class ConfigurationError(AgentMetaError, TypeError):
    """A decorator or registration call was used incorrectly."""


class SchemaDerivationError(ConfigurationError):
    """A data-shape class could not be turned into a validator."""


class ContractViolationError(AgentMetaError, TypeError):
    """A prompt method returned something other than a string."""


@dataclass(frozen=True)
class FieldIssue:
    """One failing field in a validated value.

    Attributes:
        path: Location of the field, outermost first (keys and list indices)
        message: Human-readable reason
        kind: Machine-readable error kind (pydantic error type or jsonschema keyword)
    """

    path: tuple[str | int, ...]
    message: str
    kind: str = ""

    @property
    def location(self) -> str:
        return ".".join(str(p) for p in self.path) or "<root>"


class StructuredValidationError(AgentMetaError, ValueError):
    """A value failed schema validation.

    Attributes:
        issues: Field-level diagnostics, in the order the validator reported them
    """

    issues: tuple[FieldIssue, ...]

    def __init__(self, issues: Iterable[FieldIssue], title: str = "value") -> None:
        self.issues = tuple(issues)
        self.title = title
        lines = [f"  {issue.location}: {issue.message}" for issue in self.issues]
        super().__init__(
            f"{len(self.issues)} validation error(s) for {title}\n" + "\n".join(lines)
        )

    @classmethod
    def from_pydantic(
        cls, error: pydantic.ValidationError, title: str | None = None
    ) -> StructuredValidationError:
        issues = [
            FieldIssue(path=tuple(e["loc"]), message=e["msg"], kind=e["type"])
            for e in error.errors()
        ]
        return cls(issues, title or error.title)

    @classmethod
    def from_jsonschema(
        cls, errors: Iterable[jsonschema.ValidationError], title: str = "value"
    ) -> StructuredValidationError:
        issues = [
            FieldIssue(
                path=tuple(e.absolute_path),
                message=e.message,
                kind=str(e.validator),
            )
            for e in errors
        ]
        return cls(issues, title)
