"""Tests for spacing scale generation and serialization."""

import pytest
from pydantic import ValidationError

from tokenbridge.core.format_detection import FormatKind, convert_to_raw, detect_format
from tokenbridge.core.ir import OutputFormat, SpacingExportConfig
from tokenbridge.core.spacing import (
    convert_spacing,
    format_rem,
    generate_flat_spacing,
    generate_nested_spacing,
    generate_spacing_collections,
    generate_spacing_files,
    generate_spacing_system,
    generate_spacing_tokens,
    generate_tailwind_spacing,
)


@pytest.fixture
def spacing():
    return generate_spacing_system({"4": 16, "1": 4, "half": 2, "2": 6.4}, multiplier=4)


class TestGeneration:
    def test_sorted_ascending(self, spacing) -> None:
        assert list(spacing.values) == ["half", "1", "2", "4"]

    def test_px_and_rem_strings(self, spacing) -> None:
        assert spacing.px_values == {"half": "2px", "1": "4px", "2": "6.4px", "4": "16px"}
        assert spacing.rem_values == {
            "half": "0.125rem",
            "1": "0.25rem",
            "2": "0.4rem",
            "4": "1rem",
        }

    @pytest.mark.parametrize(
        "value,expected", [(0, "0rem"), (160, "10rem"), (1, "0.0625rem"), (24, "1.5rem")]
    )
    def test_format_rem(self, value: float, expected: str) -> None:
        assert format_rem(value) == expected

    def test_custom_rem_base(self) -> None:
        system = generate_spacing_system({"1": 10}, multiplier=10, rem_base=10)
        assert system.rem_values == {"1": "1rem"}
        assert system.rem_base == 10

    def test_negative_rejected(self) -> None:
        with pytest.raises(ValidationError):
            generate_spacing_system({"1": -4}, multiplier=4)


class TestFormats:
    def test_flat(self, spacing) -> None:
        flat = generate_flat_spacing(spacing)
        assert flat["spacing-1"] == 4
        assert flat["spacing-1-px"] == "4px"
        assert flat["spacing-1-rem"] == "0.25rem"

    def test_flat_without_units(self, spacing) -> None:
        config = SpacingExportConfig(include_px=False, include_rem=False)
        assert set(generate_flat_spacing(spacing, config)) == {
            "spacing-half",
            "spacing-1",
            "spacing-2",
            "spacing-4",
        }

    def test_nested(self, spacing) -> None:
        nested = generate_nested_spacing(spacing)["spacing"]
        assert nested["multiplier"] == 4
        assert set(nested["values"]) == {"raw", "px", "rem"}

    def test_tokens(self, spacing) -> None:
        tokens = generate_spacing_tokens(spacing)["spacing"]
        assert tokens["4"] == {"$type": "dimension", "$value": "16px"}
        assert tokens["4-rem"] == {"$type": "dimension", "$value": "1rem"}

    def test_tailwind_prefers_px(self, spacing) -> None:
        assert generate_tailwind_spacing(spacing)["theme"]["spacing"]["4"] == "16px"

    def test_tailwind_rem_only(self, spacing) -> None:
        config = SpacingExportConfig(include_px=False)
        assert generate_tailwind_spacing(spacing, config)["theme"]["spacing"]["4"] == "1rem"

    def test_collections(self, spacing) -> None:
        [collection] = generate_spacing_collections(spacing)["collections"]
        assert collection["name"] == "Generated Spacing"
        assert collection["modes"] == ["default"]
        assert collection["variables"]["spacing"]["1"] == {
            "type": "float",
            "values": {"default": 4},
        }
        assert collection["variables"]["spacing-rem"]["4"]["type"] == "string"

    def test_convert_spacing_dispatch(self, spacing) -> None:
        assert convert_spacing(spacing, OutputFormat.FLAT) == generate_flat_spacing(spacing)

    def test_files(self, spacing) -> None:
        files = generate_spacing_files(spacing, SpacingExportConfig(file_prefix="space"))
        assert sorted(files) == [
            "space-collections.json",
            "space-flat.json",
            "space-nested.json",
            "space-tailwind.json",
            "space-tokens.json",
        ]


class TestSpacingImport:
    def test_collections_detected_and_converted(self, spacing) -> None:
        document = generate_spacing_collections(spacing)
        assert detect_format(document) == FormatKind.SPACING_GENERATION_COLLECTIONS

        result = convert_to_raw(document)
        names = {v.name for v in result.raw.variables}
        assert {"spacing/1", "spacing-px/1", "spacing-rem/half"} <= names
        assert len(result.raw.variables) == 12
        [collection] = result.raw.collections
        assert [m.name for m in collection.modes] == ["default"]
