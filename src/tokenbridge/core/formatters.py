"""
Color system serialization.

Renders a ColorSystem into the JSON shapes offered for download:

- flat: one key per token (``blue-1``, ``blue-a1``, ``gray-p3-12`` ...)
- nested: one object per color with its ramps as arrays
- tokens: design-token objects (``{"value": ..., "type": "color"}``)
- tailwind: a ``theme.extend.colors`` block (light mode only)
- collections: the collections document consumed by the variable importer

The gray ramp, overlays and background are shared by every color, so they
are emitted once rather than per color.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import Any

from .css import generate_color_css_files
from .ir.colors import SCALE_STEPS, ColorMode, ColorScale, ColorSystem
from .ir.config import ALL_FORMATS, PER_MODE_FORMATS, ColorExportConfig, OutputFormat
from .ir.spacing import SpacingSystem
from .ir.variables import ROOT_GROUP, Group, Leaf
from .spacing import convert_spacing

logger = logging.getLogger(__name__)

MODES: tuple[str, ...] = (ColorMode.LIGHT.value, ColorMode.DARK.value)

# Tailwind DEFAULT points at step 9.
DEFAULT_STEP_INDEX = 8


def _config(config: ColorExportConfig | None) -> ColorExportConfig:
    return config if config is not None else ColorExportConfig()


def _present_colors(system: ColorSystem, scales: dict[str, ColorScale]) -> list[str]:
    names = []
    for name in system.color_names:
        if name in scales:
            names.append(name)
        else:
            logger.debug("Color %s has no scale in this mode; skipping", name)
    return names


def _steps(prefix: str, scale: list[str]) -> dict[str, str]:
    return {f"{prefix}{index}": color for index, color in enumerate(scale, start=1)}


def _token(value: str) -> dict[str, str]:
    return {"value": value, "type": "color"}


def _token_steps(scale: list[str]) -> dict[str, dict[str, str]]:
    return {str(index): _token(color) for index, color in enumerate(scale, start=1)}


# =============================================================================
# Flat
# =============================================================================


def generate_flat(
    system: ColorSystem,
    mode: ColorMode | str,
    config: ColorExportConfig | None = None,
) -> dict[str, str]:
    """Generate the flat format: every token at the top level.

    Args:
        system: Generated color system.
        mode: ``"light"`` or ``"dark"``.
        config: Export options.

    Returns:
        Dict of token key -> hex value.
    """
    cfg = _config(config)
    scales = system.scales(mode)
    wide_alpha = cfg.include_alpha and cfg.include_wide_gamut
    result: dict[str, str] = {}

    for name in _present_colors(system, scales):
        scale = scales[name]
        result.update(_steps(f"{name}-", scale.accent_scale))
        if cfg.include_alpha:
            result.update(_steps(f"{name}-a", scale.accent_scale_alpha))
        if cfg.include_wide_gamut:
            result.update(_steps(f"{name}-p3-", scale.accent_scale_wide_gamut))
        if wide_alpha:
            result.update(_steps(f"{name}-p3-a", scale.accent_scale_alpha_wide_gamut))

        result[f"{name}-contrast"] = scale.accent_contrast
        result[f"{name}-surface"] = scale.accent_surface
        if cfg.include_wide_gamut:
            result[f"{name}-surface-p3"] = scale.accent_surface_wide_gamut

    base = system.base_scale(mode)
    if base is None:
        return result

    if cfg.include_gray_scale:
        result.update(_steps("gray-", base.gray_scale))
        if cfg.include_alpha:
            result.update(_steps("gray-a", base.gray_scale_alpha))
        if cfg.include_wide_gamut:
            result.update(_steps("gray-p3-", base.gray_scale_wide_gamut))
        if wide_alpha:
            result.update(_steps("gray-p3-a", base.gray_scale_alpha_wide_gamut))
        result["gray-surface"] = base.gray_surface
        if cfg.include_wide_gamut:
            result["gray-surface-p3"] = base.gray_surface_wide_gamut

    if cfg.include_overlays:
        result.update(_steps("overlay-black-", base.overlays.black))
        result.update(_steps("overlay-white-", base.overlays.white))

    result["background"] = base.background
    return result


# =============================================================================
# Nested
# =============================================================================


def generate_nested(
    system: ColorSystem,
    mode: ColorMode | str,
    config: ColorExportConfig | None = None,
) -> dict[str, Any]:
    """Generate the nested format: one group per color, ramps as arrays."""
    cfg = _config(config)
    scales = system.scales(mode)
    wide_alpha = cfg.include_alpha and cfg.include_wide_gamut
    result: dict[str, Any] = {}

    for name in _present_colors(system, scales):
        scale = scales[name]
        group: dict[str, Any] = {"scale": list(scale.accent_scale)}
        if cfg.include_alpha:
            group["alpha"] = list(scale.accent_scale_alpha)
        if cfg.include_wide_gamut:
            group["p3"] = list(scale.accent_scale_wide_gamut)
        if wide_alpha:
            group["p3Alpha"] = list(scale.accent_scale_alpha_wide_gamut)
        group["contrast"] = scale.accent_contrast
        group["surface"] = scale.accent_surface
        if cfg.include_wide_gamut:
            group["surfaceP3"] = scale.accent_surface_wide_gamut
        result[name] = group

    base = system.base_scale(mode)
    if base is None:
        return result

    if cfg.include_gray_scale:
        gray: dict[str, Any] = {"scale": list(base.gray_scale)}
        if cfg.include_alpha:
            gray["alpha"] = list(base.gray_scale_alpha)
        if cfg.include_wide_gamut:
            gray["p3"] = list(base.gray_scale_wide_gamut)
        if wide_alpha:
            gray["p3Alpha"] = list(base.gray_scale_alpha_wide_gamut)
        gray["surface"] = base.gray_surface
        if cfg.include_wide_gamut:
            gray["surfaceP3"] = base.gray_surface_wide_gamut
        result["gray"] = gray

    if cfg.include_overlays:
        result["overlay"] = {
            "black": list(base.overlays.black),
            "white": list(base.overlays.white),
        }

    result["background"] = base.background
    return result


# =============================================================================
# Design tokens
# =============================================================================


def generate_tokens(
    system: ColorSystem,
    mode: ColorMode | str,
    config: ColorExportConfig | None = None,
) -> dict[str, Any]:
    """Generate design-token JSON: ``color.{name}.{step} = {value, type}``."""
    cfg = _config(config)
    scales = system.scales(mode)
    wide_alpha = cfg.include_alpha and cfg.include_wide_gamut
    colors: dict[str, Any] = {}

    for name in _present_colors(system, scales):
        scale = scales[name]
        group: dict[str, Any] = _token_steps(scale.accent_scale)
        if cfg.include_alpha:
            group["alpha"] = _token_steps(scale.accent_scale_alpha)
        if cfg.include_wide_gamut:
            group["p3"] = _token_steps(scale.accent_scale_wide_gamut)
        if wide_alpha:
            group["p3Alpha"] = _token_steps(scale.accent_scale_alpha_wide_gamut)
        group["contrast"] = _token(scale.accent_contrast)
        group["surface"] = _token(scale.accent_surface)
        if cfg.include_wide_gamut:
            group["surfaceP3"] = _token(scale.accent_surface_wide_gamut)
        colors[name] = group

    base = system.base_scale(mode)
    if base is not None:
        if cfg.include_gray_scale:
            gray: dict[str, Any] = _token_steps(base.gray_scale)
            if cfg.include_alpha:
                gray["alpha"] = _token_steps(base.gray_scale_alpha)
            if cfg.include_wide_gamut:
                gray["p3"] = _token_steps(base.gray_scale_wide_gamut)
            if wide_alpha:
                gray["p3Alpha"] = _token_steps(base.gray_scale_alpha_wide_gamut)
            gray["surface"] = _token(base.gray_surface)
            if cfg.include_wide_gamut:
                gray["surfaceP3"] = _token(base.gray_surface_wide_gamut)
            colors["gray"] = gray

        if cfg.include_overlays:
            colors["overlay"] = {
                "black": _token_steps(base.overlays.black),
                "white": _token_steps(base.overlays.white),
            }

        colors["background"] = _token(base.background)

    return {"color": colors}


# =============================================================================
# Tailwind
# =============================================================================


def _tailwind_scale(scale: list[str]) -> dict[str, str]:
    group = _steps("", scale)
    group["DEFAULT"] = scale[DEFAULT_STEP_INDEX]
    return group


def generate_tailwind(
    system: ColorSystem,
    config: ColorExportConfig | None = None,
) -> dict[str, Any]:
    """Generate a Tailwind ``theme.extend.colors`` block.

    Tailwind has no native dark mode for color values, so only the light
    scales are embedded.
    """
    cfg = _config(config)
    scales = system.light
    colors: dict[str, Any] = {}

    for name in _present_colors(system, scales):
        scale = scales[name]
        group = _tailwind_scale(scale.accent_scale)
        group["contrast"] = scale.accent_contrast
        group["surface"] = scale.accent_surface
        colors[name] = group

    base = system.base_scale(ColorMode.LIGHT)
    if base is not None:
        if cfg.include_gray_scale:
            gray = _tailwind_scale(base.gray_scale)
            gray["surface"] = base.gray_surface
            colors["gray"] = gray
        if cfg.include_overlays:
            colors["overlay"] = {
                "black": _tailwind_scale(base.overlays.black),
                "white": _tailwind_scale(base.overlays.white),
            }
        colors["background"] = base.background

    return {"theme": {"extend": {"colors": colors}}}


# =============================================================================
# Collections
# =============================================================================


def _mode_leaf(light: str, dark: str) -> Leaf:
    return Leaf(type="color", values={"light": light, "dark": dark})


def _ramp_group(light: list[str], dark: list[str]) -> Group:
    children = {
        str(step): _mode_leaf(light[step - 1], dark[step - 1])
        for step in range(1, SCALE_STEPS + 1)
    }
    return Group(children=children)


def build_collection_tree(
    system: ColorSystem,
    config: ColorExportConfig | None = None,
) -> Group:
    """Build the variable tree of the generated collection.

    Categories: ``solid`` (accent ramps and gray), ``alpha`` (alpha ramps
    and gray alpha), ``overlays`` (black and white). ``background`` is a
    direct leaf of ``solid`` unless it is configured as a root variable.
    """
    cfg = _config(config)
    names = [n for n in system.color_names if n in system.light and n in system.dark]

    solid: dict[str, Any] = {}
    alpha: dict[str, Any] = {}
    for name in names:
        light, dark = system.light[name], system.dark[name]
        solid[name] = _ramp_group(light.accent_scale, dark.accent_scale)
        if cfg.include_alpha:
            alpha[name] = _ramp_group(light.accent_scale_alpha, dark.accent_scale_alpha)

    categories: dict[str, Any] = {}
    root: dict[str, Any] = {}
    light_base = system.base_scale(ColorMode.LIGHT)
    dark_base = system.base_scale(ColorMode.DARK)

    if light_base is not None and dark_base is not None:
        if cfg.include_gray_scale:
            solid["gray"] = _ramp_group(light_base.gray_scale, dark_base.gray_scale)
            if cfg.include_alpha:
                alpha["gray"] = _ramp_group(light_base.gray_scale_alpha, dark_base.gray_scale_alpha)

        background = _mode_leaf(light_base.background, dark_base.background)
        if cfg.is_root_variable("background"):
            root["background"] = background
        else:
            solid["background"] = background

    categories["solid"] = Group(children=solid)
    if cfg.include_alpha:
        categories["alpha"] = Group(children=alpha)
    if cfg.include_overlays and light_base is not None and dark_base is not None:
        categories["overlays"] = Group(
            children={
                "black": _ramp_group(light_base.overlays.black, dark_base.overlays.black),
                "white": _ramp_group(light_base.overlays.white, dark_base.overlays.white),
            }
        )
    if root:
        categories[ROOT_GROUP] = Group(children=root)

    return Group(children=categories)


def generate_collections(
    system: ColorSystem,
    config: ColorExportConfig | None = None,
) -> dict[str, Any]:
    """Generate the collections document for the variable importer.

    Returns:
        ``{"collections": [{"name", "modes", "variables"}]}``
    """
    cfg = _config(config)
    tree = build_collection_tree(system, cfg)
    return {
        "collections": [
            {
                "name": cfg.collection_name,
                "modes": list(MODES),
                "variables": tree.to_dict(),
            }
        ]
    }


# =============================================================================
# Metadata and dispatch
# =============================================================================


def generate_metadata(
    system: ColorSystem,
    config: ColorExportConfig | None = None,
) -> dict[str, Any]:
    """Describe a generation run. Carries a timestamp, so not deterministic."""
    cfg = _config(config)
    generated_at = system.metadata.get("generatedAt") or datetime.now(UTC).isoformat()
    return {
        "generatedAt": generated_at,
        "totalColors": len(system.color_names),
        "colorNames": list(system.color_names),
        "modes": list(MODES),
        "formats": [str(fmt) for fmt in cfg.formats],
        "config": {
            "includeAlpha": cfg.include_alpha,
            "includeWideGamut": cfg.include_wide_gamut,
            "includeGrayScale": cfg.include_gray_scale,
            "includeOverlays": cfg.include_overlays,
            "collectionName": cfg.collection_name,
        },
        "systemMetadata": dict(system.metadata),
    }


def convert_from_system(
    system: ColorSystem | SpacingSystem,
    target_format: OutputFormat | str,
    config: Any = None,
    mode: ColorMode | str | None = None,
) -> dict[str, Any]:
    """Render a generated system in one output format.

    Args:
        system: ColorSystem, or SpacingSystem (dispatched to the spacing
            formatter).
        target_format: One of :class:`OutputFormat`.
        config: ColorExportConfig or SpacingExportConfig.
        mode: Required for flat, nested and tokens color output.

    Raises:
        ValueError: Unknown format, or missing mode for a per-mode format.
    """
    if isinstance(system, SpacingSystem):
        return convert_spacing(system, target_format, config)

    fmt = OutputFormat(target_format)
    if fmt in PER_MODE_FORMATS:
        if mode is None:
            raise ValueError(f"Mode is required for {fmt} format")
        renderers = {
            OutputFormat.FLAT: generate_flat,
            OutputFormat.NESTED: generate_nested,
            OutputFormat.TOKENS: generate_tokens,
        }
        return renderers[fmt](system, mode, config)
    if fmt == OutputFormat.TAILWIND:
        return generate_tailwind(system, config)
    return generate_collections(system, config)


def generate_files(
    system: ColorSystem,
    config: ColorExportConfig | None = None,
) -> dict[str, Any]:
    """Map download file names to their payloads.

    Per-mode formats produce ``{prefix}-{format}-{mode}.json``; tailwind and
    collections produce ``{prefix}-{format}.json``. With ``include_css`` the
    stylesheets of :func:`generate_color_css_files` are added as strings.
    """
    cfg = _config(config)
    files: dict[str, Any] = {}
    for fmt in ALL_FORMATS:
        if fmt not in cfg.formats:
            continue
        if fmt in PER_MODE_FORMATS:
            for mode in MODES:
                files[f"{cfg.file_prefix}-{fmt}-{mode}.json"] = convert_from_system(
                    system, fmt, cfg, mode
                )
        else:
            files[f"{cfg.file_prefix}-{fmt}.json"] = convert_from_system(system, fmt, cfg)

    if cfg.include_metadata:
        files[f"{cfg.file_prefix}-metadata.json"] = generate_metadata(system, cfg)
    if cfg.include_css:
        files.update(generate_color_css_files(system, cfg))
    return files
