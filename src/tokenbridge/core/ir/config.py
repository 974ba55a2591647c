"""
Export configuration types for the color and spacing formatters.
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class OutputFormat(StrEnum):
    """JSON shapes the formatters can produce."""

    FLAT = "flat"
    NESTED = "nested"
    TOKENS = "tokens"
    TAILWIND = "tailwind"
    COLLECTIONS = "collections"


# Formats that render one appearance at a time.
PER_MODE_FORMATS: frozenset[OutputFormat] = frozenset(
    {OutputFormat.FLAT, OutputFormat.NESTED, OutputFormat.TOKENS}
)

ALL_FORMATS: tuple[OutputFormat, ...] = tuple(OutputFormat)


class ColorExportConfig(BaseModel):
    """Options for serializing a ColorSystem."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    include_alpha: bool = Field(default=True, description="Emit alpha ramps")
    include_wide_gamut: bool = Field(default=True, description="Emit Display P3 ramps")
    include_gray_scale: bool = Field(default=True, description="Emit the shared gray ramp")
    include_overlays: bool = Field(default=True, description="Emit black/white overlay ramps")
    include_metadata: bool = Field(default=True, description="Write a metadata file")
    collection_name: str = Field(default="Generated Colors")
    ungroup_background_variable: bool = Field(
        default=False, description="Place background under __ROOT__ instead of solid"
    )
    root_variables: list[str] = Field(
        default_factory=list, description="Variables promoted to the root group"
    )
    pretty_print: bool = True
    file_prefix: str = "colors"
    formats: list[OutputFormat] = Field(default_factory=lambda: list(ALL_FORMATS))
    include_css: bool = Field(default=False, description="Also write CSS stylesheets")
    css_prefix: str = Field(default="--color", description="Custom property prefix")

    def is_root_variable(self, name: str) -> bool:
        if name == "background" and self.ungroup_background_variable:
            return True
        return name in self.root_variables


class SpacingExportConfig(BaseModel):
    """Options for serializing a SpacingSystem."""

    model_config = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)

    include_px: bool = True
    include_rem: bool = True
    rem_base: float = Field(default=16, gt=0)
    collection_name: str = Field(default="Generated Spacing")
    pretty_print: bool = True
    file_prefix: str = "spacing"
    formats: list[OutputFormat] = Field(default_factory=lambda: list(ALL_FORMATS))
    include_css: bool = Field(default=False, description="Also write CSS stylesheets")
    css_prefix: str = Field(default="--spacing", description="Custom property prefix")
