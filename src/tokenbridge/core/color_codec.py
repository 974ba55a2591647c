"""
Hex <-> normalized-channel color conversion.

The host tool stores colors as ``{r, g, b[, a]}`` with channels in [0, 1];
every JSON shape this package reads or writes stores hex strings.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from typing import Any

from .errors import InvalidColorFormat

logger = logging.getLogger(__name__)

_HEX_RE = re.compile(r"^[0-9a-f]+$")

# Import-time fallback for undecodable values.
FALLBACK_COLOR: dict[str, float] = {"r": 0.5, "g": 0.5, "b": 0.5}


def _clamp(value: float) -> float:
    return max(0.0, min(1.0, value))


def hex_to_color(value: str) -> dict[str, float]:
    """Parse a hex color into normalized channels.

    Args:
        value: ``#rgb``, ``#rrggbb`` or ``#rrggbbaa``; case-insensitive,
            ``#`` optional.

    Returns:
        ``{"r", "g", "b"}`` plus ``"a"`` for 8-digit input, each in [0, 1].

    Raises:
        InvalidColorFormat: On any other length or non-hex characters.
    """
    if not isinstance(value, str):
        raise InvalidColorFormat(f"Expected a hex string, got {type(value).__name__}")

    digits = value.strip().removeprefix("#").lower()
    if not digits or not _HEX_RE.match(digits):
        raise InvalidColorFormat(f"Invalid hex characters in: {value!r}")

    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    elif len(digits) not in (6, 8):
        raise InvalidColorFormat(f"Invalid hex length: {len(digits)} characters in {value!r}")

    channels = [int(digits[i : i + 2], 16) / 255 for i in range(0, len(digits), 2)]
    color = {
        "r": _clamp(channels[0]),
        "g": _clamp(channels[1]),
        "b": _clamp(channels[2]),
    }
    if len(channels) == 4:
        color["a"] = _clamp(channels[3])
    return color


def _to_byte(channel: float) -> str:
    # Half-up rounding, the same as the host's own exporter.
    byte = int(_clamp(float(channel)) * 255 + 0.5)
    return f"{byte:02x}"


def color_to_hex(color: Mapping[str, Any]) -> str:
    """Render normalized channels as a lowercase hex string.

    The alpha byte is appended only when ``a`` is present and not 1, so
    opaque colors stay in the 6-digit form most CSS consumers expect.

    Args:
        color: Mapping with ``r``, ``g``, ``b`` and optional ``a``.

    Returns:
        ``#rrggbb`` or ``#rrggbbaa``.

    Raises:
        InvalidColorFormat: If a channel is missing or not a number.
    """
    try:
        hex_value = "#" + "".join(_to_byte(color[channel]) for channel in ("r", "g", "b"))
        alpha = color.get("a")
        if alpha is not None and alpha != 1:
            hex_value += _to_byte(alpha)
    except (KeyError, TypeError, ValueError) as e:
        raise InvalidColorFormat(f"Invalid color channels {color!r}: {e}") from e
    return hex_value


def _is_channel_mapping(value: Any) -> bool:
    return isinstance(value, Mapping) and all(
        isinstance(value.get(channel), int | float) for channel in ("r", "g", "b")
    )


def decode_color(value: Any, *, name: str | None = None) -> dict[str, float]:
    """Decode a stored color value for the host tool.

    Never raises: undecodable values are logged and replaced by neutral
    gray so one bad token does not block a whole import.

    Args:
        value: Hex string or ``{r, g, b[, a]}`` mapping.
        name: Variable name, used in the log message.

    Returns:
        Normalized channels.
    """
    if _is_channel_mapping(value):
        color = {channel: _clamp(float(value[channel])) for channel in ("r", "g", "b")}
        if isinstance(value.get("a"), int | float):
            color["a"] = _clamp(float(value["a"]))
        return color

    try:
        return hex_to_color(value)
    except InvalidColorFormat as e:
        logger.warning("Failed to convert color %s (%s); using gray fallback", name or value, e)
        return dict(FALLBACK_COLOR)


def encode_color(value: Any) -> str:
    """Encode a host color value as hex.

    Channel mappings are rendered with :func:`color_to_hex`; strings pass
    through unchanged.
    """
    if _is_channel_mapping(value):
        return color_to_hex(value)
    if isinstance(value, str):
        return value
    raise InvalidColorFormat(f"Unsupported color value {value!r}")


def normalize_color_value(value: Any, *, name: str | None = None) -> str:
    """Validate an encoded color value on import.

    Valid hex strings are returned as written; channel mappings are
    encoded; anything else becomes the hex of the gray fallback.
    """
    if isinstance(value, str):
        try:
            hex_to_color(value)
            return value
        except InvalidColorFormat:
            pass
    return color_to_hex(decode_color(value, name=name))
