"""
tokenbridge intermediate representation (IR) types.

Types are organized into submodules and re-exported here.
"""

from .colors import (
    RESERVED_COLOR_NAMES,
    SCALE_STEPS,
    ColorMode,
    ColorScale,
    ColorSystem,
    Overlays,
)
from .config import (
    ALL_FORMATS,
    PER_MODE_FORMATS,
    ColorExportConfig,
    OutputFormat,
    SpacingExportConfig,
)
from .spacing import SpacingDefinitions, SpacingSystem
from .variables import (
    ROOT_GROUP,
    SOLID_CATEGORY,
    Group,
    Leaf,
    Mode,
    RawCollection,
    RawExport,
    RawVariable,
    TreeNode,
)

__all__ = [
    # Colors
    "SCALE_STEPS",
    "RESERVED_COLOR_NAMES",
    "ColorMode",
    "ColorScale",
    "ColorSystem",
    "Overlays",
    # Spacing
    "SpacingDefinitions",
    "SpacingSystem",
    # Config
    "ALL_FORMATS",
    "PER_MODE_FORMATS",
    "OutputFormat",
    "ColorExportConfig",
    "SpacingExportConfig",
    # Variables
    "ROOT_GROUP",
    "SOLID_CATEGORY",
    "Mode",
    "RawCollection",
    "RawVariable",
    "RawExport",
    "Leaf",
    "Group",
    "TreeNode",
]
