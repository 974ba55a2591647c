"""
Spacing scale generation and serialization.

A spacing scale is a set of named pixel sizes. Generation sorts them and
renders the px and rem strings; the formatters mirror the color formats
(flat, nested, tokens, tailwind, collections).
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from .css import generate_spacing_css_files
from .ir.config import OutputFormat, SpacingExportConfig
from .ir.spacing import SpacingSystem
from .ir.variables import Group, Leaf

logger = logging.getLogger(__name__)

SPACING_GROUP = "spacing"
SPACING_PX_GROUP = "spacing-px"
SPACING_REM_GROUP = "spacing-rem"

DEFAULT_MODE = "default"


def _format_number(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def format_px(value: float) -> str:
    return f"{_format_number(value)}px"


def format_rem(value: float, rem_base: float = 16) -> str:
    """Render a px size as rem with at most four decimals."""
    rem = f"{value / rem_base:.4f}".rstrip("0").rstrip(".")
    return f"{rem}rem"


def generate_spacing_system(
    definitions: Mapping[str, float],
    multiplier: float,
    rem_base: float = 16,
) -> SpacingSystem:
    """Build a SpacingSystem from name -> px definitions.

    Entries are ordered by ascending size.

    Args:
        definitions: Spacing name -> size in px.
        multiplier: Base multiplier the sizes were derived from.
        rem_base: Root font size used for rem values.

    Returns:
        Validated SpacingSystem.

    Raises:
        pydantic.ValidationError: On empty or negative definitions, or a
            non-positive multiplier or rem base.
    """
    entries = sorted(definitions.items(), key=lambda item: item[1])
    values = {name: value for name, value in entries}
    logger.debug("Generating spacing scale with %d values", len(values))
    return SpacingSystem(
        values=values,
        px_values={name: format_px(value) for name, value in entries},
        rem_values={name: format_rem(value, rem_base) for name, value in entries},
        multiplier=multiplier,
        rem_base=rem_base,
    )


def _config(config: SpacingExportConfig | None) -> SpacingExportConfig:
    return config if config is not None else SpacingExportConfig()


def generate_flat_spacing(
    system: SpacingSystem, config: SpacingExportConfig | None = None
) -> dict[str, Any]:
    cfg = _config(config)
    result: dict[str, Any] = {f"spacing-{name}": value for name, value in system.values.items()}
    if cfg.include_px:
        result.update({f"spacing-{name}-px": px for name, px in system.px_values.items()})
    if cfg.include_rem:
        result.update({f"spacing-{name}-rem": rem for name, rem in system.rem_values.items()})
    return result


def generate_nested_spacing(
    system: SpacingSystem, config: SpacingExportConfig | None = None
) -> dict[str, Any]:
    cfg = _config(config)
    values: dict[str, Any] = {"raw": dict(system.values)}
    if cfg.include_px:
        values["px"] = dict(system.px_values)
    if cfg.include_rem:
        values["rem"] = dict(system.rem_values)
    return {"spacing": {"multiplier": system.multiplier, "values": values}}


def generate_spacing_tokens(
    system: SpacingSystem, config: SpacingExportConfig | None = None
) -> dict[str, Any]:
    """Dimension tokens, one per size plus a ``{name}-rem`` variant."""
    cfg = _config(config)
    tokens: dict[str, Any] = {}
    for name, value in system.values.items():
        tokens[name] = {
            "$type": "dimension",
            "$value": system.px_values.get(name) or format_px(value),
        }
        if cfg.include_rem:
            tokens[f"{name}-rem"] = {"$type": "dimension", "$value": system.rem_values[name]}
    return {"spacing": tokens}


def generate_tailwind_spacing(
    system: SpacingSystem, config: SpacingExportConfig | None = None
) -> dict[str, Any]:
    """Tailwind ``theme.spacing``; px wins when both units are enabled."""
    cfg = _config(config)
    use_rem = cfg.include_rem and not cfg.include_px
    source = system.rem_values if use_rem else system.px_values
    spacing = {name: source[name] for name in system.values}
    return {"theme": {"spacing": spacing}}


def build_spacing_tree(system: SpacingSystem, config: SpacingExportConfig | None = None) -> Group:
    cfg = _config(config)
    groups: dict[str, Any] = {
        SPACING_GROUP: Group(
            children={
                name: Leaf(type="float", values={DEFAULT_MODE: value})
                for name, value in system.values.items()
            }
        )
    }
    if cfg.include_px:
        groups[SPACING_PX_GROUP] = Group(
            children={
                name: Leaf(type="string", values={DEFAULT_MODE: px})
                for name, px in system.px_values.items()
            }
        )
    if cfg.include_rem:
        groups[SPACING_REM_GROUP] = Group(
            children={
                name: Leaf(type="string", values={DEFAULT_MODE: rem})
                for name, rem in system.rem_values.items()
            }
        )
    return Group(children=groups)


def generate_spacing_collections(
    system: SpacingSystem, config: SpacingExportConfig | None = None
) -> dict[str, Any]:
    """Collections document with a single ``default`` mode."""
    cfg = _config(config)
    return {
        "collections": [
            {
                "name": cfg.collection_name,
                "modes": [DEFAULT_MODE],
                "variables": build_spacing_tree(system, cfg).to_dict(),
            }
        ]
    }


SPACING_RENDERERS = {
    OutputFormat.FLAT: generate_flat_spacing,
    OutputFormat.NESTED: generate_nested_spacing,
    OutputFormat.TOKENS: generate_spacing_tokens,
    OutputFormat.TAILWIND: generate_tailwind_spacing,
    OutputFormat.COLLECTIONS: generate_spacing_collections,
}


def convert_spacing(
    system: SpacingSystem,
    target_format: OutputFormat | str,
    config: SpacingExportConfig | None = None,
) -> dict[str, Any]:
    """Render a SpacingSystem in one output format.

    Raises:
        ValueError: Unknown format.
    """
    return SPACING_RENDERERS[OutputFormat(target_format)](system, config)


def generate_spacing_files(
    system: SpacingSystem, config: SpacingExportConfig | None = None
) -> dict[str, Any]:
    """Map ``{prefix}-{format}.json`` file names to payloads.

    With ``include_css`` the stylesheets of
    :func:`generate_spacing_css_files` are added as strings.
    """
    cfg = _config(config)
    files: dict[str, Any] = {
        f"{cfg.file_prefix}-{fmt}.json": convert_spacing(system, fmt, cfg)
        for fmt in SPACING_RENDERERS
        if fmt in cfg.formats
    }
    if cfg.include_css:
        files.update(generate_spacing_css_files(system, cfg))
    return files
