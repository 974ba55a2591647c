"""Shared pytest fixtures for tokenbridge tests."""

from collections.abc import Callable
from pathlib import Path

import pytest

from tokenbridge.core.ir import ColorScale, ColorSystem

COLOR_TAGS = {"blue": 0x10, "red": 0x20, "green": 0x30}

# Second byte of every generated hex: identifies the ramp (+0x80 in dark mode).
RAMP_TAGS = {
    "accent_scale": 0x01,
    "accent_scale_alpha": 0x02,
    "accent_scale_wide_gamut": 0x03,
    "accent_scale_alpha_wide_gamut": 0x04,
    "gray_scale": 0x05,
    "gray_scale_alpha": 0x06,
    "gray_scale_wide_gamut": 0x07,
    "gray_scale_alpha_wide_gamut": 0x08,
    "black": 0x09,
    "white": 0x0A,
}


def _ramp_value(color: str, ramp: str, step: int, mode: str = "light") -> str:
    """Hex value the fixture scales hold for ``ramp`` at ``step`` (1-based)."""
    mode_tag = 0x80 if mode == "dark" else 0x00
    return f"#{COLOR_TAGS[color]:02x}{RAMP_TAGS[ramp] + mode_tag:02x}{step:02x}"


def _make_scale(color: str, mode: str = "light") -> ColorScale:
    def ramp(name: str) -> list[str]:
        return [_ramp_value(color, name, step, mode) for step in range(1, 13)]

    tag = COLOR_TAGS[color]
    return ColorScale(
        accent_scale=ramp("accent_scale"),
        accent_scale_alpha=ramp("accent_scale_alpha"),
        accent_scale_wide_gamut=ramp("accent_scale_wide_gamut"),
        accent_scale_alpha_wide_gamut=ramp("accent_scale_alpha_wide_gamut"),
        accent_contrast="#ffffff",
        accent_surface=f"#{tag:02x}c0c0",
        accent_surface_wide_gamut=f"#{tag:02x}c1c1",
        gray_scale=ramp("gray_scale"),
        gray_scale_alpha=ramp("gray_scale_alpha"),
        gray_scale_wide_gamut=ramp("gray_scale_wide_gamut"),
        gray_scale_alpha_wide_gamut=ramp("gray_scale_alpha_wide_gamut"),
        gray_surface=f"#{tag:02x}d0d0",
        gray_surface_wide_gamut=f"#{tag:02x}d1d1",
        background="#ffffff" if mode == "light" else "#111111",
        overlays={"black": ramp("black"), "white": ramp("white")},
    )


@pytest.fixture
def make_scale() -> Callable[..., ColorScale]:
    """Return a factory building one ColorScale: ``make_scale("blue", "dark")``."""
    return _make_scale


@pytest.fixture
def ramp_value() -> Callable[..., str]:
    """Return the lookup for fixture hex values: ``ramp_value("blue", "gray_scale", 3)``."""
    return _ramp_value


@pytest.fixture
def make_system() -> Callable[..., ColorSystem]:
    """Return a factory building a ColorSystem for the given color names."""

    def factory(*names: str, dark: bool = True) -> ColorSystem:
        names = names or ("blue",)
        return ColorSystem(
            color_names=list(names),
            light={name: _make_scale(name, "light") for name in names},
            dark={name: _make_scale(name, "dark") for name in names} if dark else {},
            metadata={"generatedAt": "2024-01-01T00:00:00Z"},
        )

    return factory


@pytest.fixture
def color_system(make_system) -> ColorSystem:
    """Two-color system with both modes."""
    return make_system("blue", "red")


@pytest.fixture
def raw_export_data() -> dict:
    """Live host state: one color collection, one number collection."""
    return {
        "collections": [
            {
                "id": "VariableCollectionId:1",
                "name": "Theme",
                "modes": [
                    {"modeId": "1:0", "name": "Light"},
                    {"modeId": "1:1", "name": "Dark"},
                ],
            },
            {
                "id": "VariableCollectionId:2",
                "name": "Layout",
                "modes": [{"modeId": "2:0", "name": "Default"}],
            },
        ],
        "variables": [
            {
                "id": "VariableID:1",
                "name": "blue/1",
                "variableCollectionId": "VariableCollectionId:1",
                "resolvedType": "COLOR",
                "valuesByMode": {
                    "1:0": {"r": 0, "g": 0, "b": 1},
                    "1:1": {"r": 0, "g": 0, "b": 0.5, "a": 0.5},
                },
            },
            {
                "id": "VariableID:2",
                "name": "background",
                "variableCollectionId": "VariableCollectionId:1",
                "resolvedType": "COLOR",
                "valuesByMode": {
                    "1:0": {"r": 1, "g": 1, "b": 1},
                    "1:1": {"r": 0, "g": 0, "b": 0},
                },
            },
            {
                "id": "VariableID:3",
                "name": "space-4",
                "variableCollectionId": "VariableCollectionId:2",
                "resolvedType": "FLOAT",
                "valuesByMode": {"2:0": 16.0},
            },
            {
                "id": "VariableID:4",
                "name": "orphan",
                "variableCollectionId": "VariableCollectionId:99",
                "resolvedType": "STRING",
                "valuesByMode": {},
            },
        ],
    }


@pytest.fixture
def fixtures_dir(tmp_path: Path) -> Path:
    """Scratch directory for JSON inputs written by a test."""
    path = tmp_path / "fixtures"
    path.mkdir()
    return path
