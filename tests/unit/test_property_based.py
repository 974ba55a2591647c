"""
Property-based tests using Hypothesis.

These tests verify invariants across a wide range of inputs,
replacing the need for exhaustive example-based tests.
"""

import copy

from hypothesis import given, settings
from hypothesis import strategies as st

from tokenbridge.core.color_codec import color_to_hex, hex_to_color, normalize_color_value
from tokenbridge.core.errors import InvalidColorFormat, TokenBridgeError
from tokenbridge.core.format_detection import FormatKind, convert_to_raw, detect_format

HEX_DIGITS = "0123456789abcdefABCDEF"

# Keys the detectors and converters look at, mixed with arbitrary text.
DOCUMENT_KEYS = st.sampled_from(
    [
        "collections",
        "variables",
        "name",
        "modes",
        "type",
        "values",
        "id",
        "valuesByMode",
        "variableCollectionId",
        "resolvedType",
        "modeId",
        "solid",
        "spacing",
        "spacing-px",
        "colors",
        "$type",
        "$value",
        "$extensions",
        "com.figma",
        "__ROOT__",
        "light",
        "dark",
        "r",
        "g",
        "b",
        "a",
    ]
) | st.text(max_size=8)

JSON_SCALARS = (
    st.none()
    | st.booleans()
    | st.integers(min_value=-(2**53), max_value=2**53)
    | st.floats(allow_nan=False, allow_infinity=False)
    | st.text(max_size=12)
    | st.sampled_from(["color", "COLOR", "float", "#fff", "#0000ff80", "Light"])
)

json_values = st.recursive(
    JSON_SCALARS,
    lambda children: st.lists(children, max_size=4)
    | st.dictionaries(DOCUMENT_KEYS, children, max_size=5),
    max_leaves=40,
)

documents = json_values | st.fixed_dictionaries(
    {"collections": json_values},
    optional={"variables": json_values, "version": json_values},
)


def _hex(digits: int) -> st.SearchStrategy[str]:
    return st.text(alphabet=HEX_DIGITS, min_size=digits, max_size=digits)


# =============================================================================
# Color Codec Property Tests
# =============================================================================


class TestColorCodecProperties:
    """Property-based tests for hex <-> channel conversion."""

    @given(_hex(6))
    @settings(max_examples=300)
    def test_six_digit_round_trip(self, digits: str) -> None:
        """Invariant: #rrggbb -> channels -> hex is the lower-case input."""
        value = f"#{digits}"
        assert color_to_hex(hex_to_color(value)) == value.lower()

    @given(_hex(6), st.integers(min_value=0, max_value=254))
    @settings(max_examples=300)
    def test_translucent_eight_digit_round_trip(self, digits: str, alpha: int) -> None:
        """Invariant: #rrggbbaa with aa != ff round-trips unchanged."""
        value = f"#{digits}{alpha:02x}".lower()
        assert color_to_hex(hex_to_color(value)) == value

    @given(
        st.sampled_from([3, 6, 8]).flatmap(_hex),
        st.booleans(),
    )
    @settings(max_examples=200)
    def test_channels_in_unit_range(self, digits: str, with_hash: bool) -> None:
        """Invariant: every decoded channel lies in [0, 1]; alpha only for 8 digits."""
        color = hex_to_color(f"#{digits}" if with_hash else digits)
        assert set(color) == ({"r", "g", "b", "a"} if len(digits) == 8 else {"r", "g", "b"})
        assert all(0.0 <= channel <= 1.0 for channel in color.values())

    @given(st.text(max_size=12))
    @settings(max_examples=200)
    def test_hex_to_color_only_raises_invalid_format(self, text: str) -> None:
        """Invariant: bad input raises InvalidColorFormat and nothing else."""
        try:
            hex_to_color(text)
        except InvalidColorFormat:
            pass

    @given(json_values)
    @settings(max_examples=200)
    def test_normalized_value_is_valid_hex(self, value) -> None:
        """Invariant: import normalization always yields a decodable color."""
        hex_to_color(normalize_color_value(value, name="token"))


# =============================================================================
# Format Detection Property Tests
# =============================================================================


class TestFormatDetectionProperties:
    """Property-based tests for detection and conversion of arbitrary JSON."""

    @given(documents)
    @settings(max_examples=300, deadline=None)
    def test_conversion_never_crashes(self, data) -> None:
        """Invariant: convert_to_raw returns or raises a TokenBridgeError."""
        kind = detect_format(data)
        try:
            result = convert_to_raw(data)
        except TokenBridgeError:
            assert kind == FormatKind.UNRECOGNIZED
        else:
            assert result.kind == kind
            assert result.variable_count == len(result.raw.variables)

    @given(documents)
    @settings(max_examples=200, deadline=None)
    def test_inputs_never_mutated(self, data) -> None:
        """Invariant: detection and conversion leave the document untouched."""
        snapshot = copy.deepcopy(data)
        detect_format(data)
        try:
            convert_to_raw(data)
        except TokenBridgeError:
            pass
        assert data == snapshot

    @given(documents)
    @settings(max_examples=200, deadline=None)
    def test_imported_colors_are_hex(self, data) -> None:
        """Invariant: every COLOR value produced by a collections import decodes."""
        if detect_format(data) in (FormatKind.UNRECOGNIZED, FormatKind.RAW_VARIABLE_EXPORT):
            return
        for variable in convert_to_raw(data).raw.variables:
            if variable.is_color:
                for value in variable.values_by_mode.values():
                    hex_to_color(value)
