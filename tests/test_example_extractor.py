"""Tests for example value extraction."""
from __future__ import annotations

import copy

import pytest

from json_schema_resolver.config import ResolverSettings
from json_schema_resolver.errors import MissingSchemaError, SchemaCycleError
from json_schema_resolver.example_extractor import (
    extract,
    get_example_from_item,
    map_properties_to_examples,
)


class TestExtractArguments:
    def test_missing_component_raises(self):
        with pytest.raises(MissingSchemaError, match="No schema received"):
            extract(None)

    def test_missing_component_is_value_error(self):
        with pytest.raises(ValueError):
            extract(False)

    def test_empty_mapping_is_accepted(self):
        """An empty schema has nothing to show but is not an error."""
        assert extract({}) is None


class TestLeaves:
    def test_example_wins_over_default(self):
        assert extract({"type": "string", "example": "x", "default": "d"}) == "x"

    def test_default_used_without_example(self):
        assert extract({"type": "string", "default": "d"}) == "d"

    def test_falsy_scalar_example_kept(self):
        assert extract({"type": "number", "example": 0}) == 0
        assert extract({"type": "boolean", "example": False}) is False

    def test_no_example_yields_none(self):
        assert extract({"type": "string"}) is None

    def test_non_mapping_component_is_unknown(self):
        assert extract("string") == "unknown"
        assert get_example_from_item(True) == "unknown"


class TestComposition:
    def test_one_of_uses_first_alternative(self):
        schema = {"oneOf": [{"type": "string", "example": "x"}, {"type": "number", "example": 1}]}
        assert extract(schema) == "x"

    def test_any_of_uses_first_alternative(self):
        schema = {"anyOf": [{"type": "number", "example": 1}, {"type": "string", "example": "x"}]}
        assert extract(schema) == 1

    def test_all_of_merges_members(self):
        schema = {
            "allOf": [
                {"properties": {"a": {"example": 1}}},
                {"properties": {"b": {"example": 2}}},
            ]
        }
        assert extract(schema) == {"a": 1, "b": 2}

    def test_all_of_later_member_overwrites(self):
        schema = {
            "allOf": [
                {"properties": {"a": {"example": 1}}},
                {"properties": {"a": {"example": 9}}},
            ]
        }
        assert extract(schema) == {"a": 9}

    def test_closed_all_of_member_replaces_accumulated(self):
        schema = {
            "allOf": [
                {"properties": {"a": {"example": 1}}},
                {"additionalProperties": False, "properties": {"c": {"example": 3}}},
            ]
        }
        assert extract(schema) == {"c": 3}

    def test_empty_composition_falls_back_to_properties(self):
        schema = {"allOf": [{"type": "object"}], "properties": {"a": {"example": 1}}}
        assert extract(schema) == {"a": 1}


class TestArrays:
    def test_array_has_single_element(self):
        schema = {"type": "array", "items": {"type": "string", "example": "a"}}
        assert extract(schema) == ["a"]

    def test_array_of_objects(self):
        schema = {"type": "array", "items": {"properties": {"n": {"example": 1}}}}
        assert extract(schema) == [{"n": 1}]

    def test_array_without_items_uses_literal_example(self):
        assert extract({"type": "array", "example": [1, 2]}) == [1, 2]

    def test_array_property_with_item_example(self):
        schema = {"properties": {"tags": {"type": "array", "items": {"type": "string", "example": "t"}}}}
        assert extract(schema) == {"tags": ["t"]}

    def test_array_property_with_object_items(self):
        schema = {"properties": {"rows": {"type": "array", "items": {"properties": {"n": {"example": 1}}}}}}
        assert extract(schema) == {"rows": [{"n": 1}]}


class TestExclusive:
    def test_keeps_first_member_of_group(self):
        schema = {
            "properties": {"a": {"example": 1}, "b": {"example": 2}, "c": {"example": 3}},
            "exclusive": [["a", "b"]],
        }
        assert extract(schema) == {"a": 1, "c": 3}

    def test_applies_after_all_of_merge(self):
        schema = {
            "allOf": [{"properties": {"a": {"example": 1}}}, {"properties": {"b": {"example": 2}}}],
            "exclusive": [["a", "b"]],
        }
        assert extract(schema) == {"a": 1}

    def test_nested_property_exclusive(self):
        schema = {
            "properties": {
                "auth": {
                    "properties": {"token": {"example": "t"}, "password": {"example": "p"}},
                    "exclusive": [["token", "password"]],
                }
            }
        }
        assert extract(schema) == {"auth": {"token": "t"}}


class TestScopes:
    def test_self_reference_resolves_against_root(self):
        root = {"properties": {"name": {"example": "n"}}}
        assert extract({"rel": "self"}, root) == {"name": "n"}

    def test_nested_id_extracts_own_properties(self):
        root = {"properties": {"a": {"example": 1}}}
        schema = {
            "properties": {
                "nested": {"id": "inner", "properties": {"b": {"example": 2}}},
                "parent": {"allOf": [{"rel": "self"}]},
            }
        }
        assert extract(schema, root) == {"nested": {"b": 2}, "parent": {"a": 1}}

    def test_self_reference_inside_own_scope_is_a_cycle(self):
        schema = {"id": "outer", "properties": {"me": {"rel": "self"}}}
        with pytest.raises(SchemaCycleError, match="schema cycle detected"):
            extract(schema)

    def test_depth_guard(self):
        schema = {"properties": {"a": {"properties": {"b": {"properties": {"c": {"properties": {"d": {"example": 1}}}}}}}}}
        with pytest.raises(SchemaCycleError, match="maximum depth"):
            extract(schema, settings=ResolverSettings(max_depth=3))


class TestAdditionalProperties:
    schema = {
        "properties": {"a": {"example": 1}},
        "additionalProperties": {"extra": {"example": 2}},
    }

    def test_excluded_by_default(self):
        assert extract(self.schema, settings=ResolverSettings(include_additional_properties=False)) == {"a": 1}

    def test_included_by_generator_flag(self):
        schema = dict(self.schema, generator={"includeAdditionalProperties": True})
        assert extract(schema) == {"a": 1, "extra": 2}

    def test_included_by_options(self):
        assert extract(self.schema, options={"includeAdditionalProperties": True}) == {"a": 1, "extra": 2}


class TestMapPropertiesToExamples:
    def test_id_property_is_lowercased(self):
        assert map_properties_to_examples({"ID": {"example": 7}}) == {"id": 7}

    def test_private_and_dunder_properties_skipped(self):
        props = {
            "__meta": {"example": 1},
            "secret": {"private": True, "example": 2},
            "shown": {"example": 3},
        }
        assert map_properties_to_examples(props) == {"shown": 3}

    def test_properties_without_example_omitted(self):
        props = {"a": {"type": "string"}, "b": {"example": "x"}}
        assert map_properties_to_examples(props) == {"b": "x"}

    def test_one_of_property(self):
        props = {"value": {"oneOf": [{"example": "x"}, {"example": 1}]}}
        assert map_properties_to_examples(props) == {"value": "x"}

    def test_declared_properties_win_over_one_of(self):
        props = {
            "card": {
                "type": "object",
                "properties": {"number": {"example": "4111"}, "token": {"example": "tok"}},
                "oneOf": [{"properties": {"number": {"example": "4111"}}}, {"required": ["token"]}],
            }
        }
        assert map_properties_to_examples(props) == {"card": {"number": "4111", "token": "tok"}}

    def test_declared_properties_win_over_all_of(self):
        props = {
            "card": {
                "properties": {"number": {"example": "4111"}},
                "allOf": [{"properties": {"brand": {"example": "visa"}}}],
            }
        }
        assert map_properties_to_examples(props) == {"card": {"number": "4111"}}

    def test_non_mapping_props(self):
        assert map_properties_to_examples(None) == {}


class TestPurity:
    def test_input_not_mutated(self):
        schema = {
            "allOf": [
                {"properties": {"a": {"example": 1}, "b": {"example": 2}}},
                {"properties": {"c": {"example": 3}}},
            ],
            "exclusive": [["a", "b"]],
        }
        before = copy.deepcopy(schema)
        extract(schema)
        assert schema == before

    def test_repeated_calls_agree(self):
        schema = {"oneOf": [{"properties": {"a": {"example": 1}}}, {"properties": {"b": {"example": 2}}}]}
        assert extract(schema) == extract(schema) == {"a": 1}
