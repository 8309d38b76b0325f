"""Tests for TypeMetadataRegistry."""

from __future__ import annotations

import pytest

from agent_meta.errors import ConfigurationError
from agent_meta.registry.MetadataKey import MetadataKey
from agent_meta.registry.TypeMetadataRegistry import TypeMetadataRegistry


class Owner:
    pass


class OtherOwner:
    pass


class TestSetAndGet:
    """Tests for single-valued keys."""

    def test_get_missing_returns_none(self) -> None:
        """Reading an absent key returns None instead of raising."""
        registry = TypeMetadataRegistry()
        assert registry.get(Owner, MetadataKey.MODEL) is None
        assert registry.get_model(Owner) is None
        assert registry.get_output_schema(Owner) is None

    def test_get_missing_with_default(self) -> None:
        """An explicit default is returned for an absent key."""
        registry = TypeMetadataRegistry()
        assert registry.get(Owner, MetadataKey.MODEL, "fallback") == "fallback"

    def test_set_then_get(self) -> None:
        """set() stores a value per (class, key)."""
        registry = TypeMetadataRegistry()
        registry.set(Owner, MetadataKey.MODEL, "model-a")

        assert registry.get_model(Owner) == "model-a"
        assert registry.get_model(OtherOwner) is None

    def test_set_overwrites(self) -> None:
        """A second set() replaces the first value."""
        registry = TypeMetadataRegistry()
        registry.set(Owner, MetadataKey.MODEL, "model-a")
        registry.set(Owner, MetadataKey.MODEL, "model-b")

        assert registry.get_model(Owner) == "model-b"

    def test_has(self) -> None:
        """has() reports whether an entry exists, even if its value is None."""
        registry = TypeMetadataRegistry()
        assert registry.has(Owner, MetadataKey.SCHEMA) is False

        registry.set(Owner, MetadataKey.SCHEMA, None)

        assert registry.has(Owner, MetadataKey.SCHEMA) is True
        assert registry.is_schema(Owner) is True

    def test_set_on_list_key_raises(self) -> None:
        """List-valued keys cannot be set wholesale."""
        registry = TypeMetadataRegistry()
        with pytest.raises(ConfigurationError, match="append"):
            registry.set(Owner, MetadataKey.TOOLS, [])

    def test_non_class_owner_raises(self) -> None:
        """Metadata attaches to classes only."""
        registry = TypeMetadataRegistry()
        with pytest.raises(ConfigurationError, match="classes"):
            registry.set(Owner(), MetadataKey.MODEL, "x")  # type: ignore[arg-type]


class TestListKeys:
    """Tests for SYSTEM_PROMPTS and TOOLS."""

    def test_append_keeps_order(self) -> None:
        """Items are returned in append order."""
        registry = TypeMetadataRegistry()
        registry.append(Owner, MetadataKey.TOOLS, "a")
        registry.append(Owner, MetadataKey.TOOLS, "b")

        assert registry.get_tools(Owner) == ("a", "b")

    def test_prepend_goes_first(self) -> None:
        """prepend() inserts at the front."""
        registry = TypeMetadataRegistry()
        registry.append(Owner, MetadataKey.SYSTEM_PROMPTS, "method")
        registry.prepend(Owner, MetadataKey.SYSTEM_PROMPTS, "class")

        assert registry.get_system_prompts(Owner) == ("class", "method")

    def test_missing_list_is_empty_tuple(self) -> None:
        """Absent lists read as empty tuples."""
        registry = TypeMetadataRegistry()
        assert registry.get_tools(Owner) == ()
        assert registry.get_system_prompts(Owner) == ()

    def test_reads_are_snapshots(self) -> None:
        """Returned lists are tuples that later appends do not change."""
        registry = TypeMetadataRegistry()
        registry.append(Owner, MetadataKey.TOOLS, "a")
        before = registry.get_tools(Owner)

        registry.append(Owner, MetadataKey.TOOLS, "b")

        assert before == ("a",)
        assert isinstance(before, tuple)

    def test_append_on_single_key_raises(self) -> None:
        """Single-valued keys cannot be appended to."""
        registry = TypeMetadataRegistry()
        with pytest.raises(ConfigurationError, match="does not hold a list"):
            registry.append(Owner, MetadataKey.MODEL, "x")


class TestOwnership:
    """Tests for per-class scoping."""

    def test_subclass_does_not_inherit(self) -> None:
        """Lookups use the declaring class only."""

        class Child(Owner):
            pass

        registry = TypeMetadataRegistry()
        registry.set(Owner, MetadataKey.MODEL, "parent-model")
        registry.append(Owner, MetadataKey.TOOLS, "parent-tool")

        assert registry.get_model(Child) is None
        assert registry.get_tools(Child) == ()

    def test_owners(self) -> None:
        """owners() lists classes with an entry for a key."""
        registry = TypeMetadataRegistry()
        registry.set(Owner, MetadataKey.MODEL, "a")
        registry.append(OtherOwner, MetadataKey.TOOLS, "t")

        assert registry.owners(MetadataKey.MODEL) == [Owner]
        assert registry.owners(MetadataKey.TOOLS) == [OtherOwner]

    def test_is_schema_ignores_non_classes(self) -> None:
        """is_schema() is False for values that are not classes."""
        registry = TypeMetadataRegistry()
        assert registry.is_schema(None) is False
        assert registry.is_schema("Owner") is False


class TestMetadataKey:
    """Tests for MetadataKey."""

    def test_list_keys(self) -> None:
        """Only SYSTEM_PROMPTS and TOOLS are list-valued."""
        assert {k for k in MetadataKey if k.is_list} == {
            MetadataKey.SYSTEM_PROMPTS,
            MetadataKey.TOOLS,
        }
