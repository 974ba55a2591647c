"""
Export commands: render generated color and spacing systems to files.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import typer
from pydantic import BaseModel, ValidationError

from tokenbridge.core.formatters import generate_files
from tokenbridge.core.ir import ColorSystem, OutputFormat, SpacingDefinitions
from tokenbridge.core.spacing import generate_spacing_files, generate_spacing_system
from tokenbridge.core.writer import write_files

from .common import fail, load_json_file, load_manifest_or_exit

export_app = typer.Typer(help="Render generated color and spacing systems to JSON and CSS files")


def _with_overrides(config: BaseModel, **overrides: Any) -> Any:
    """Apply CLI options that were actually given on top of manifest values."""
    update = {key: value for key, value in overrides.items() if value is not None}
    if not update:
        return config
    try:
        return config.model_validate({**config.model_dump(), **update})
    except ValidationError as e:
        raise fail(str(e))


def _report(paths: list[Path]) -> None:
    for path in paths:
        typer.echo(f"  {path}")
    typer.echo(f"Wrote {len(paths)} files")


@export_app.command("colors")
def export_colors(
    file: Path = typer.Argument(..., help="Generated color system (JSON)"),
    output_dir: Path = typer.Option(Path("."), "--output", "-o", help="Output directory"),
    formats: list[OutputFormat] | None = typer.Option(
        None, "--format", "-f", help="Format to write (repeatable, default: all)"
    ),
    collection_name: str | None = typer.Option(None, "--collection-name"),
    prefix: str | None = typer.Option(None, "--prefix", help="File name prefix"),
    css: bool | None = typer.Option(
        None, "--css/--no-css", help="Also write CSS custom properties and utility classes"
    ),
    manifest: Path | None = typer.Option(None, "--manifest", "-m", help="Path to tokenbridge.toml"),
) -> None:
    """
    Write a color system in every configured format.
    """
    try:
        system = ColorSystem.model_validate(load_json_file(file))
    except ValidationError as e:
        raise fail(f"Invalid color system in {file}:\n{e}")

    config = _with_overrides(
        load_manifest_or_exit(manifest).colors,
        formats=formats or None,
        collection_name=collection_name,
        file_prefix=prefix,
        include_css=css,
    )
    paths = write_files(generate_files(system, config), output_dir, config.pretty_print)
    _report(paths)


@export_app.command("spacing")
def export_spacing(
    file: Path = typer.Argument(
        ..., help="Spacing definitions: {spacing: {name: px}, multiplier, remValue}"
    ),
    output_dir: Path = typer.Option(Path("."), "--output", "-o", help="Output directory"),
    formats: list[OutputFormat] | None = typer.Option(
        None, "--format", "-f", help="Format to write (repeatable, default: all)"
    ),
    prefix: str | None = typer.Option(None, "--prefix", help="File name prefix"),
    css: bool | None = typer.Option(
        None, "--css/--no-css", help="Also write CSS custom properties and utility classes"
    ),
    manifest: Path | None = typer.Option(None, "--manifest", "-m", help="Path to tokenbridge.toml"),
) -> None:
    """
    Generate a spacing scale and write it in every configured format.
    """
    try:
        definitions = SpacingDefinitions.model_validate(load_json_file(file))
    except ValidationError as e:
        raise fail(f"Invalid spacing definitions in {file}:\n{e}")

    config = _with_overrides(
        load_manifest_or_exit(manifest).spacing,
        formats=formats or None,
        file_prefix=prefix,
        rem_base=definitions.rem_value,
        include_css=css,
    )

    try:
        system = generate_spacing_system(
            definitions.spacing, definitions.multiplier, rem_base=config.rem_base
        )
    except ValidationError as e:
        raise fail(f"Invalid spacing definitions in {file}:\n{e}")

    paths = write_files(generate_spacing_files(system, config), output_dir, config.pretty_print)
    _report(paths)
