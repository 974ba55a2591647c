"""
CSS generator for color and spacing systems.

Renders CSS custom properties and utility classes. Light values go in
``:root``; dark values go in ``:root`` inside a ``prefers-color-scheme``
media query.

Color stylesheets come in four variants:

- full: every enabled ramp plus contrast and surface colors
- clean: the ramps without contrast and surface colors
- hexa: hex solid and alpha ramps only
- p3: wide-gamut ramps under the plain step names
"""

from __future__ import annotations

import textwrap
from collections.abc import Callable
from enum import StrEnum

from .ir.colors import SCALE_STEPS, ColorMode, ColorScale, ColorSystem
from .ir.config import ColorExportConfig, SpacingExportConfig
from .ir.spacing import SpacingSystem

DARK_MEDIA_QUERY = "@media (prefers-color-scheme: dark)"


class ColorCSSVariant(StrEnum):
    """Subsets of a color system rendered as separate stylesheets."""

    FULL = "full"
    CLEAN = "clean"
    HEXA = "hexa"
    P3 = "p3"


class SpacingCSSVariant(StrEnum):
    """Units rendered into a spacing stylesheet."""

    FULL = "full"
    PX = "px"
    REM = "rem"


VARIANT_DESCRIPTIONS = {
    ColorCSSVariant.FULL: "Complete color system with all variants",
    ColorCSSVariant.CLEAN: "Color ramps without contrast and surface colors",
    ColorCSSVariant.HEXA: "HEXA solid and alpha colors only",
    ColorCSSVariant.P3: "P3 solid and alpha colors only",
}

COLOR_UTILITIES = (
    ("bg", "background-color"),
    ("text", "color"),
    ("border", "border-color"),
)

SPACING_UTILITIES: dict[str, tuple[tuple[str, tuple[str, ...]], ...]] = {
    "Margin": (
        ("m", ("margin",)),
        ("mx", ("margin-left", "margin-right")),
        ("my", ("margin-top", "margin-bottom")),
        ("mt", ("margin-top",)),
        ("mr", ("margin-right",)),
        ("mb", ("margin-bottom",)),
        ("ml", ("margin-left",)),
    ),
    "Padding": (
        ("p", ("padding",)),
        ("px", ("padding-left", "padding-right")),
        ("py", ("padding-top", "padding-bottom")),
        ("pt", ("padding-top",)),
        ("pr", ("padding-right",)),
        ("pb", ("padding-bottom",)),
        ("pl", ("padding-left",)),
    ),
    "Gap": (
        ("gap", ("gap",)),
        ("gap-x", ("column-gap",)),
        ("gap-y", ("row-gap",)),
    ),
}


def _block(selector: str, body: str) -> str:
    """Wrap declaration lines in ``selector { ... }``, indenting them."""
    return f"{selector} {{\n{textwrap.indent(body, '  ')}}}\n"


def _flag(value: bool) -> str:
    return "true" if value else "false"


def _is_hex(color: str) -> bool:
    return color.startswith("#")


def _ramp_lines(
    prefix: str,
    scale: list[str],
    keep: Callable[[str], bool] | None = None,
) -> list[str]:
    return [
        f"{prefix}{step}: {color};"
        for step, color in enumerate(scale, start=1)
        if keep is None or keep(color)
    ]


# =============================================================================
# Colors
# =============================================================================


def _accent_lines(
    name: str,
    scale: ColorScale,
    cfg: ColorExportConfig,
    variant: ColorCSSVariant,
) -> list[str]:
    prefix = f"{cfg.css_prefix}-{name}"

    if variant == ColorCSSVariant.HEXA:
        lines = _ramp_lines(f"{prefix}-", scale.accent_scale, _is_hex)
        if cfg.include_alpha:
            lines += _ramp_lines(f"{prefix}-a", scale.accent_scale_alpha, _is_hex)
        return lines

    if variant == ColorCSSVariant.P3:
        lines = _ramp_lines(f"{prefix}-", scale.accent_scale_wide_gamut)
        if cfg.include_alpha:
            lines += _ramp_lines(f"{prefix}-a", scale.accent_scale_alpha_wide_gamut)
        return lines

    lines = _ramp_lines(f"{prefix}-", scale.accent_scale)
    if cfg.include_alpha:
        lines += _ramp_lines(f"{prefix}-a", scale.accent_scale_alpha)
    if cfg.include_wide_gamut:
        lines += _ramp_lines(f"{prefix}-p3-", scale.accent_scale_wide_gamut)
    if cfg.include_alpha and cfg.include_wide_gamut:
        lines += _ramp_lines(f"{prefix}-p3-a", scale.accent_scale_alpha_wide_gamut)

    if variant == ColorCSSVariant.FULL:
        lines.append(f"{prefix}-contrast: {scale.accent_contrast};")
        lines.append(f"{prefix}-surface: {scale.accent_surface};")
        if cfg.include_wide_gamut:
            lines.append(f"{prefix}-surface-p3: {scale.accent_surface_wide_gamut};")
    return lines


def _gray_lines(base: ColorScale, cfg: ColorExportConfig, variant: ColorCSSVariant) -> list[str]:
    prefix = f"{cfg.css_prefix}-gray"

    if variant == ColorCSSVariant.HEXA:
        lines = _ramp_lines(f"{prefix}-", base.gray_scale, _is_hex)
        if cfg.include_alpha:
            lines += _ramp_lines(f"{prefix}-a", base.gray_scale_alpha, _is_hex)
        return lines

    if variant == ColorCSSVariant.P3:
        lines = _ramp_lines(f"{prefix}-", base.gray_scale_wide_gamut)
        if cfg.include_alpha:
            lines += _ramp_lines(f"{prefix}-a", base.gray_scale_alpha_wide_gamut)
        return lines

    lines = _ramp_lines(f"{prefix}-", base.gray_scale)
    if cfg.include_alpha:
        lines += _ramp_lines(f"{prefix}-a", base.gray_scale_alpha)
    if cfg.include_wide_gamut:
        lines += _ramp_lines(f"{prefix}-p3-", base.gray_scale_wide_gamut)
    if cfg.include_alpha and cfg.include_wide_gamut:
        lines += _ramp_lines(f"{prefix}-p3-a", base.gray_scale_alpha_wide_gamut)

    if variant == ColorCSSVariant.FULL:
        lines.append(f"{prefix}-surface: {base.gray_surface};")
        if cfg.include_wide_gamut:
            lines.append(f"{prefix}-surface-p3: {base.gray_surface_wide_gamut};")
    return lines


def generate_color_css(
    system: ColorSystem,
    mode: ColorMode | str,
    config: ColorExportConfig | None = None,
    variant: ColorCSSVariant | str = ColorCSSVariant.FULL,
) -> str:
    """
    Generate custom property declarations for one appearance.

    The gray ramp, overlays and background are emitted once, from the
    first color present in the mode. The p3 variant has no overlays.

    Args:
        system: Generated color system.
        mode: ``"light"`` or ``"dark"``.
        config: Export options; ``css_prefix`` names the properties.
        variant: Which subset of the system to render.

    Returns:
        Declaration lines, without a surrounding selector.
    """
    cfg = config if config is not None else ColorExportConfig()
    variant = ColorCSSVariant(variant)
    mode = ColorMode(mode)
    scales = system.scales(mode)
    lines: list[str] = []

    if variant == ColorCSSVariant.FULL:
        lines.append(f"/* Generated color scales - {mode} mode */")
        lines.append("")

    for name in system.color_names:
        scale = scales.get(name)
        if scale is None:
            continue
        lines.append(f"/* {name.upper()} - {mode} mode */")
        lines.extend(_accent_lines(name, scale, cfg, variant))
        lines.append("")

    base = system.base_scale(mode)
    if base is None:
        return "\n".join(lines) + "\n"

    if cfg.include_gray_scale:
        lines.append("/* Universal gray colors */")
        lines.extend(_gray_lines(base, cfg, variant))
        lines.append("")

    if cfg.include_overlays and variant != ColorCSSVariant.P3:
        lines.append("/* Universal overlays */")
        lines.extend(_ramp_lines(f"{cfg.css_prefix}-overlay-black-", base.overlays.black))
        lines.extend(_ramp_lines(f"{cfg.css_prefix}-overlay-white-", base.overlays.white))
        lines.append("")

    lines.append(f"{cfg.css_prefix}-background: {base.background};")
    return "\n".join(lines) + "\n"


def generate_color_utilities(system: ColorSystem, config: ColorExportConfig | None = None) -> str:
    """Background, text and border classes for every step of every color."""
    cfg = config if config is not None else ColorExportConfig()
    lines = ["/* Utility classes for color scales */", ""]
    for name in system.color_names:
        for class_prefix, css_property in COLOR_UTILITIES:
            for step in range(1, SCALE_STEPS + 1):
                suffixes = [str(step), f"a{step}"] if cfg.include_alpha else [str(step)]
                for suffix in suffixes:
                    lines.append(
                        f".{class_prefix}-{name}-{suffix} "
                        f"{{ {css_property}: var({cfg.css_prefix}-{name}-{suffix}); }}"
                    )
        lines.append("")
    return "\n".join(lines)


def _combined(light: str, dark: str, variant: ColorCSSVariant, cfg: ColorExportConfig) -> str:
    return "\n".join(
        [
            f"/* Auto-generated color scales - {VARIANT_DESCRIPTIONS[variant]} */",
            f"/* Generated with: alpha={_flag(cfg.include_alpha)}, "
            f"wideGamut={_flag(cfg.include_wide_gamut)}, "
            f"grayScale={_flag(cfg.include_gray_scale)}, "
            f"overlays={_flag(cfg.include_overlays)} */",
            "",
            "/* Light mode (default) */",
            light,
            "/* Dark mode (automatic based on system preference) */",
            dark,
        ]
    )


def generate_color_css_files(
    system: ColorSystem,
    config: ColorExportConfig | None = None,
) -> dict[str, str]:
    """
    Map stylesheet file names to their contents.

    Every variant produces ``{prefix}-{variant}-light.css``,
    ``{prefix}-{variant}-dark.css`` and ``{prefix}-{variant}-combined.css``;
    utility classes go in ``{prefix}-utilities.css``.
    """
    cfg = config if config is not None else ColorExportConfig()
    files: dict[str, str] = {}
    for variant in ColorCSSVariant:
        light = _block(":root", generate_color_css(system, ColorMode.LIGHT, cfg, variant))
        dark = _block(
            DARK_MEDIA_QUERY,
            _block(":root", generate_color_css(system, ColorMode.DARK, cfg, variant)),
        )
        stem = f"{cfg.file_prefix}-{variant}"
        files[f"{stem}-light.css"] = light
        files[f"{stem}-dark.css"] = dark
        files[f"{stem}-combined.css"] = _combined(light, dark, variant, cfg)
    files[f"{cfg.file_prefix}-utilities.css"] = generate_color_utilities(system, cfg)
    return files


# =============================================================================
# Spacing
# =============================================================================


def _format_multiplier(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else str(value)


def generate_spacing_css(
    system: SpacingSystem,
    config: SpacingExportConfig | None = None,
    variant: SpacingCSSVariant | str = SpacingCSSVariant.FULL,
) -> str:
    """
    Generate spacing custom property declarations.

    The full variant writes ``{prefix}-{name}`` in px and
    ``{prefix}-{name}-rem`` in rem; px and rem write ``{prefix}-{name}`` in
    that unit only.
    """
    cfg = config if config is not None else SpacingExportConfig()
    variant = SpacingCSSVariant(variant)
    prefix = cfg.css_prefix
    lines = [
        "/* Spacing scale */",
        f"/* Base multiplier: {_format_multiplier(system.multiplier)} */",
        f"/* Total values: {len(system.values)} */",
    ]

    px = [(name, system.px_values[name]) for name in system.values if name in system.px_values]
    rem = [(name, system.rem_values[name]) for name in system.values if name in system.rem_values]

    if variant == SpacingCSSVariant.PX:
        lines.extend(f"{prefix}-{name}: {value};" for name, value in px)
    elif variant == SpacingCSSVariant.REM:
        lines.extend(f"{prefix}-{name}: {value};" for name, value in rem)
    else:
        if cfg.include_px:
            lines += ["", "/* Pixel values */"]
            lines.extend(f"{prefix}-{name}: {value};" for name, value in px)
        if cfg.include_rem:
            lines += ["", "/* REM values */"]
            lines.extend(f"{prefix}-{name}-rem: {value};" for name, value in rem)
    return "\n".join(lines) + "\n"


def generate_spacing_utilities(
    system: SpacingSystem,
    config: SpacingExportConfig | None = None,
) -> str:
    """
    Margin, padding and gap classes for every spacing value.

    Values are px, or rem when px output is disabled.
    """
    cfg = config if config is not None else SpacingExportConfig()
    source = system.rem_values if cfg.include_rem and not cfg.include_px else system.px_values
    lines = ["/* Spacing utility classes */"]
    for section, utilities in SPACING_UTILITIES.items():
        lines += ["", f"/* {section} utilities */"]
        for name in system.values:
            if name not in source:
                continue
            value = source[name]
            for class_prefix, css_properties in utilities:
                declarations = " ".join(f"{prop}: {value};" for prop in css_properties)
                lines.append(f".{class_prefix}-{name} {{ {declarations} }}")
    return "\n".join(lines) + "\n"


def generate_spacing_css_files(
    system: SpacingSystem,
    config: SpacingExportConfig | None = None,
) -> dict[str, str]:
    """Map ``{prefix}.css``, ``{prefix}-px.css``, ``{prefix}-rem.css`` and
    ``{prefix}-utilities.css`` to their contents."""
    cfg = config if config is not None else SpacingExportConfig()
    files = {
        f"{cfg.file_prefix}.css": _block(":root", generate_spacing_css(system, cfg)),
    }
    for variant in (SpacingCSSVariant.PX, SpacingCSSVariant.REM):
        files[f"{cfg.file_prefix}-{variant}.css"] = _block(
            ":root", generate_spacing_css(system, cfg, variant)
        )
    files[f"{cfg.file_prefix}-utilities.css"] = generate_spacing_utilities(system, cfg)
    return files
