"""
Color system IR types.

A ColorSystem is produced by an external scale generator (one 12-step
accent ramp per named color, plus a shared gray ramp, surfaces and
overlays) and consumed read-only by the serialization formatters.

JSON keys are camelCase (``accentScale``); Python attributes are
snake_case (``accent_scale``). Either spelling is accepted on input.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

SCALE_STEPS = 12

# Names used by the shared families in flat/nested/tokens/tailwind output.
RESERVED_COLOR_NAMES: frozenset[str] = frozenset({"gray", "overlay", "background"})

Scale = Annotated[list[str], Field(min_length=SCALE_STEPS, max_length=SCALE_STEPS)]


class ColorMode(StrEnum):
    """Appearance a scale belongs to."""

    LIGHT = "light"
    DARK = "dark"


class Overlays(BaseModel):
    """Black and white translucent overlay ramps."""

    model_config = ConfigDict(frozen=True)

    black: Scale = Field(description="12-step black overlay ramp")
    white: Scale = Field(description="12-step white overlay ramp")


class ColorScale(BaseModel):
    """
    All generated ramps for one named color in one appearance.

    Index ``i`` of every scale is step ``i + 1``.
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    accent_scale: Scale
    accent_scale_alpha: Scale
    accent_scale_wide_gamut: Scale
    accent_scale_alpha_wide_gamut: Scale
    accent_contrast: str
    accent_surface: str
    accent_surface_wide_gamut: str

    gray_scale: Scale
    gray_scale_alpha: Scale
    gray_scale_wide_gamut: Scale
    gray_scale_alpha_wide_gamut: Scale
    gray_surface: str
    gray_surface_wide_gamut: str

    background: str
    overlays: Overlays


class ColorSystem(BaseModel):
    """
    Complete generated color system.

    Example:
        ColorSystem(
            color_names=["blue"],
            light={"blue": ColorScale(...)},
            dark={"blue": ColorScale(...)},
        )
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    color_names: list[str] = Field(description="Ordered, unique color names")
    light: dict[str, ColorScale] = Field(default_factory=dict)
    dark: dict[str, ColorScale] = Field(default_factory=dict)
    metadata: dict[str, Any] = Field(default_factory=dict)

    @field_validator("color_names")
    @classmethod
    def validate_color_names(cls, v: list[str]) -> list[str]:
        """Reject duplicates and names that clash with the shared families."""
        seen: set[str] = set()
        for name in v:
            if name in seen:
                raise ValueError(f"Duplicate color name '{name}'")
            if name in RESERVED_COLOR_NAMES:
                raise ValueError(f"Color name '{name}' is reserved")
            seen.add(name)
        return v

    @model_validator(mode="after")
    def validate_has_scales(self) -> ColorSystem:
        if self.color_names and not any(
            name in self.light or name in self.dark for name in self.color_names
        ):
            raise ValueError("None of colorNames has a scale in light or dark")
        return self

    def scales(self, mode: ColorMode | str) -> dict[str, ColorScale]:
        """Get the name -> scale map for one appearance."""
        return self.light if ColorMode(mode) == ColorMode.LIGHT else self.dark

    def base_scale(self, mode: ColorMode | str) -> ColorScale | None:
        """Scale that carries the shared gray, overlay and background values.

        The first entry of ``color_names`` present in the mode wins.
        """
        scales = self.scales(mode)
        for name in self.color_names:
            if name in scales:
                return scales[name]
        return None
