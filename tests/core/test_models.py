"""
Tests for pipegraph/core/models.py - identifiers, kinds and components.
"""

import pytest
from enum import Enum


class Names(Enum):
    LOGS = "logs"
    NUMBERED = 7


class TestCanonicalName:
    """Tests for identifier normalization."""

    def test_plain_string(self):
        from pipegraph.core.models import canonical_name
        assert canonical_name("foo") == "foo"

    def test_keyword_spelling(self):
        from pipegraph.core.models import canonical_name
        assert canonical_name(":foo") == "foo"

    def test_only_one_colon_stripped(self):
        from pipegraph.core.models import canonical_name
        assert canonical_name("::foo") == ":foo"

    def test_enum_string_value(self):
        from pipegraph.core.models import canonical_name
        assert canonical_name(Names.LOGS) == "logs"

    def test_enum_non_string_value_uses_name(self):
        from pipegraph.core.models import canonical_name
        assert canonical_name(Names.NUMBERED) == "NUMBERED"

    def test_rejects_other_types(self):
        from pipegraph.core.models import canonical_name
        with pytest.raises(TypeError):
            canonical_name(42)

    def test_rejects_empty(self):
        from pipegraph.core.models import canonical_name
        with pytest.raises(ValueError):
            canonical_name("")
        with pytest.raises(ValueError):
            canonical_name(":")

    def test_canonical_names_deduplicates(self):
        from pipegraph.core.models import canonical_names
        assert canonical_names(["foo", ":foo", Names.LOGS]) == frozenset({"foo", "logs"})

    def test_canonical_names_single_string(self):
        from pipegraph.core.models import canonical_names
        assert canonical_names("foo") == frozenset({"foo"})


class TestComponentKind:
    """Tests for ComponentKind ordering and sections."""

    def test_order(self):
        from pipegraph.core.models import ComponentKind
        assert ComponentKind.SOURCE.order < ComponentKind.TRANSFORM.order < ComponentKind.SINK.order

    def test_sections(self):
        from pipegraph.core.models import ComponentKind
        assert ComponentKind.SOURCE.section == "sources"
        assert ComponentKind.TRANSFORM.section == "transforms"
        assert ComponentKind.SINK.section == "sinks"

    def test_ordered(self):
        from pipegraph.core.models import ComponentKind
        assert ComponentKind.ordered() == [
            ComponentKind.SOURCE,
            ComponentKind.TRANSFORM,
            ComponentKind.SINK,
        ]

    def test_from_string(self):
        from pipegraph.core.models import ComponentKind
        assert ComponentKind("sink") is ComponentKind.SINK


class TestComponent:
    """Tests for Component."""

    def test_defaults(self):
        from pipegraph.core.models import Component, ComponentKind
        component = Component(kind="source")
        assert component.kind is ComponentKind.SOURCE
        assert component.inputs == frozenset()
        assert component.config == {}

    def test_inputs_canonicalized(self):
        from pipegraph.core.models import Component
        component = Component(kind="sink", inputs=[":a", "b", "a"])
        assert component.inputs == frozenset({"a", "b"})

    def test_none_config_is_empty(self):
        from pipegraph.core.models import Component
        assert Component(kind="transform", config=None).config == {}

    def test_non_string_config_keys(self):
        from pipegraph.core.models import Component
        component = Component(kind="source", config={404: "not_found", "type": "file"})
        assert component.config == {404: "not_found", "type": "file"}

    def test_frozen(self):
        from pydantic import ValidationError
        from pipegraph.core.models import Component
        component = Component(kind="sink")
        with pytest.raises(ValidationError):
            component.kind = "source"

    def test_invalid_kind(self):
        from pydantic import ValidationError
        from pipegraph.core.models import Component
        with pytest.raises(ValidationError):
            Component(kind="router")

    def test_with_inputs_returns_copy(self):
        from pipegraph.core.models import Component
        component = Component(kind="sink", inputs=["a"])
        updated = component.with_inputs(["b", ":c"])
        assert updated.inputs == frozenset({"b", "c"})
        assert component.inputs == frozenset({"a"})

    def test_sorted_inputs(self):
        from pipegraph.core.models import Component
        component = Component(kind="sink", inputs=["zeta", "alpha", "mid"])
        assert component.sorted_inputs() == ["alpha", "mid", "zeta"]
