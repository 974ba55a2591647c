"""Tests for document format detection and dispatch."""

import copy

import pytest

from tokenbridge.core.errors import UnrecognizedFormat
from tokenbridge.core.format_detection import (
    FORMAT_STRATEGIES,
    FormatKind,
    convert_to_raw,
    detect_format,
)

LEAF = {"type": "color", "values": {"light": "#ffffff", "dark": "#000000"}}


def w3c_token(light: str, dark: str) -> dict:
    return {
        "$value": light,
        "$extensions": {"com.figma": {"modes": {"light": light, "dark": dark}}},
    }


FIXTURES = {
    FormatKind.RAW_VARIABLE_EXPORT: {
        "collections": [
            {"id": "c1", "name": "Theme", "modes": [{"modeId": "m1", "name": "light"}]}
        ],
        "variables": [
            {
                "id": "v1",
                "name": "blue/1",
                "variableCollectionId": "c1",
                "resolvedType": "COLOR",
                "valuesByMode": {"m1": "#0000ff"},
            }
        ],
    },
    FormatKind.SPACING_GENERATION_COLLECTIONS: {
        "collections": [
            {
                "name": "Generated Spacing",
                "modes": ["default"],
                "variables": {"spacing": {"1": {"type": "float", "values": {"default": 4}}}},
            }
        ]
    },
    FormatKind.COLOR_GENERATION_COLLECTIONS: {
        "collections": [
            {
                "name": "Generated Colors",
                "modes": ["light", "dark"],
                "variables": {"solid": {"blue": {"1": LEAF}, "background": LEAF}},
            }
        ]
    },
    FormatKind.W3C_TOKEN_COLLECTION: {
        "collections": {
            "$extensions": {"com.figma": {"modes": ["light", "dark"]}},
            "colors": {
                "$type": "color",
                "blue": {"1": w3c_token("#0000ff", "#000080")},
            },
        }
    },
    FormatKind.LEGACY_COLLECTIONS_OBJECT: {
        "collections": {
            "name": "Theme",
            "modes": ["light", "dark"],
            "variables": {"solid": {"blue": {"1": LEAF}}},
        }
    },
    FormatKind.SIMPLE_COLLECTIONS_ARRAY: {
        "collections": [
            {
                "name": "Theme",
                "modes": ["Light", "Dark"],
                "variables": {"blue": {"1": LEAF}},
            }
        ]
    },
}


class TestDetectFormat:
    def test_strategy_order(self) -> None:
        assert [kind for kind, _, _ in FORMAT_STRATEGIES] == [
            FormatKind.RAW_VARIABLE_EXPORT,
            FormatKind.SPACING_GENERATION_COLLECTIONS,
            FormatKind.COLOR_GENERATION_COLLECTIONS,
            FormatKind.W3C_TOKEN_COLLECTION,
            FormatKind.LEGACY_COLLECTIONS_OBJECT,
            FormatKind.SIMPLE_COLLECTIONS_ARRAY,
        ]

    @pytest.mark.parametrize("kind", list(FIXTURES))
    def test_canonical_fixture(self, kind: FormatKind) -> None:
        assert detect_format(FIXTURES[kind]) == kind

    @pytest.mark.parametrize(
        "data",
        [
            {},
            None,
            {"name": "not variables", "items": [1, 2, 3]},
            {"collections": []},
            {"collections": "Theme"},
            [1, 2, 3],
        ],
    )
    def test_unrecognized(self, data) -> None:
        assert detect_format(data) == FormatKind.UNRECOGNIZED

    def test_raw_requires_complete_variables(self) -> None:
        data = copy.deepcopy(FIXTURES[FormatKind.RAW_VARIABLE_EXPORT])
        del data["variables"][0]["valuesByMode"]
        assert detect_format(data) == FormatKind.UNRECOGNIZED

    def test_version_fields_ignored(self) -> None:
        data = {"version": "2.0", "metadata": {"x": 1}, **FIXTURES[FormatKind.SIMPLE_COLLECTIONS_ARRAY]}
        assert detect_format(data) == FormatKind.SIMPLE_COLLECTIONS_ARRAY

    def test_legacy_spacing_object(self) -> None:
        data = {
            "collections": {
                "name": "Spacing",
                "modes": ["default"],
                "variables": {"spacing-px": {"1": {"type": "string", "values": {"default": "4px"}}}},
            }
        }
        assert detect_format(data) == FormatKind.SPACING_GENERATION_COLLECTIONS


class TestConvertToRaw:
    def test_unrecognized_raises(self) -> None:
        with pytest.raises(UnrecognizedFormat):
            convert_to_raw({"foo": "bar"})

    def test_explicit_kind_must_match(self) -> None:
        with pytest.raises(UnrecognizedFormat, match="does not match"):
            convert_to_raw(FIXTURES[FormatKind.SIMPLE_COLLECTIONS_ARRAY], FormatKind.W3C_TOKEN_COLLECTION)

    def test_unknown_kind_raises(self) -> None:
        with pytest.raises(UnrecognizedFormat):
            convert_to_raw(FIXTURES[FormatKind.SIMPLE_COLLECTIONS_ARRAY], "yaml")

    def test_explicit_less_specific_kind(self) -> None:
        data = FIXTURES[FormatKind.COLOR_GENERATION_COLLECTIONS]
        result = convert_to_raw(data, "simpleCollectionsArray")
        assert result.kind == FormatKind.SIMPLE_COLLECTIONS_ARRAY
        assert "solid/blue/1" in {v.name for v in result.raw.variables}

    @pytest.mark.parametrize("kind", list(FIXTURES))
    def test_inputs_not_mutated(self, kind: FormatKind) -> None:
        data = copy.deepcopy(FIXTURES[kind])
        convert_to_raw(data)
        assert data == FIXTURES[kind]

    def test_raw_attaches_collection(self) -> None:
        result = convert_to_raw(FIXTURES[FormatKind.RAW_VARIABLE_EXPORT])
        assert result.kind == FormatKind.RAW_VARIABLE_EXPORT
        [variable] = result.raw.variables
        assert variable.collection is not None
        assert variable.collection.name == "Theme"

    def test_raw_invalid_variable_skipped(self) -> None:
        data = copy.deepcopy(FIXTURES[FormatKind.RAW_VARIABLE_EXPORT])
        data["variables"].append({"id": "v2", "name": "broken", "valuesByMode": {}})
        result = convert_to_raw(data)
        assert len(result.raw.variables) == 1
        assert result.skipped_count == 1
        assert result.skipped[0].path == "broken"

    def test_color_generation_flattens_solid(self) -> None:
        result = convert_to_raw(FIXTURES[FormatKind.COLOR_GENERATION_COLLECTIONS])
        assert [v.name for v in result.raw.variables] == ["blue/1", "background"]

    def test_legacy_keeps_solid_prefix(self) -> None:
        result = convert_to_raw(FIXTURES[FormatKind.LEGACY_COLLECTIONS_OBJECT])
        assert [v.name for v in result.raw.variables] == ["solid/blue/1"]

    def test_w3c(self) -> None:
        result = convert_to_raw(FIXTURES[FormatKind.W3C_TOKEN_COLLECTION])
        [collection] = result.raw.collections
        assert collection.name == "Generated Colors"
        assert [m.name for m in collection.modes] == ["light", "dark"]
        [variable] = result.raw.variables
        assert variable.name == "blue/1"
        assert variable.resolved_type == "COLOR"
        assert variable.values_by_mode == {"mode-0": "#0000ff", "mode-1": "#000080"}

    def test_w3c_default_modes(self) -> None:
        data = copy.deepcopy(FIXTURES[FormatKind.W3C_TOKEN_COLLECTION])
        data["collections"]["$extensions"] = {"com.figma": {}}
        result = convert_to_raw(data)
        assert [m.name for m in result.raw.collections[0].modes] == ["light", "dark"]

    def test_w3c_extensions_must_be_object(self) -> None:
        data = {"collections": {"$extensions": ["com.figma"], "colors": {"$type": "color"}}}
        assert detect_format(data) == FormatKind.UNRECOGNIZED
        with pytest.raises(UnrecognizedFormat):
            convert_to_raw(data)
        with pytest.raises(UnrecognizedFormat, match="does not match"):
            convert_to_raw(data, FormatKind.W3C_TOKEN_COLLECTION)

    def test_w3c_token_with_bad_extension_skipped(self) -> None:
        data = copy.deepcopy(FIXTURES[FormatKind.W3C_TOKEN_COLLECTION])
        data["collections"]["colors"]["blue"]["2"] = {
            "$value": "#fff",
            "$extensions": {"com.figma": True},
        }
        result = convert_to_raw(data)
        assert [v.name for v in result.raw.variables] == ["blue/1"]
        assert result.skipped_count == 1
        assert result.skipped[0].path == "blue/2"
        assert "com.figma" in result.skipped[0].reason

    def test_simple_lowercases_modes(self) -> None:
        result = convert_to_raw(FIXTURES[FormatKind.SIMPLE_COLLECTIONS_ARRAY])
        [variable] = result.raw.variables
        assert variable.values_by_mode == {"mode-0": "#ffffff", "mode-1": "#000000"}
