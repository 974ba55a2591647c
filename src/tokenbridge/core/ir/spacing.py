"""
Spacing system IR types.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt, model_validator
from pydantic.alias_generators import to_camel


class SpacingDefinitions(BaseModel):
    """
    Input of the spacing generator: ``{spacing: {name: px}, multiplier, remValue}``.

    Sizes must be JSON numbers; numeric strings such as ``"4"`` are rejected.
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    spacing: dict[str, StrictInt | StrictFloat] = Field(description="Spacing name -> size in px")
    multiplier: float = Field(default=4, gt=0)
    rem_value: float | None = Field(default=None, gt=0, description="Root font size override")


class SpacingSystem(BaseModel):
    """
    Generated spacing scale.

    ``values`` is ordered by ascending size; ``px_values`` and
    ``rem_values`` hold the rendered CSS strings for the same names.

    Example:
        SpacingSystem(
            values={"1": 4, "2": 8},
            px_values={"1": "4px", "2": "8px"},
            rem_values={"1": "0.25rem", "2": "0.5rem"},
            multiplier=4,
        )
    """

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    values: dict[str, float] = Field(description="Spacing name -> size in px")
    px_values: dict[str, str] = Field(default_factory=dict)
    rem_values: dict[str, str] = Field(default_factory=dict)
    multiplier: float = Field(gt=0, description="Base multiplier of the scale")
    rem_base: float = Field(default=16, gt=0, description="Root font size for rem values")

    @model_validator(mode="after")
    def validate_values(self) -> SpacingSystem:
        if not self.values:
            raise ValueError("Spacing definitions cannot be empty")
        for name, value in self.values.items():
            if value < 0:
                raise ValueError(f"Invalid spacing value for '{name}': must be non-negative")
        return self
