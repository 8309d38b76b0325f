from __future__ import annotations

from enum import Enum


class MetadataKey(Enum):
    """Concepts that can be attached to a class."""

    MODEL = "model"
    """Opaque model identifier (str)."""

    SYSTEM_PROMPTS = "system_prompts"
    """Ordered list of PromptProvider."""

    OUTPUT_SCHEMA = "output_schema"
    """Validator for the final produced value."""

    TOOLS = "tools"
    """Ordered list of ToolDescriptor."""

    SCHEMA = "schema"
    """Flag marking a data-shape class usable as a tool parameter or output."""

    @property
    def is_list(self) -> bool:
        return self in (MetadataKey.SYSTEM_PROMPTS, MetadataKey.TOOLS)
