"""
Commands that read variable documents: detect, import, collections, inspect.
"""

from __future__ import annotations

from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from tokenbridge.core.collection_tree import ConversionResult, export_collections, export_raw
from tokenbridge.core.errors import MissingMode, UnrecognizedFormat
from tokenbridge.core.format_detection import FormatKind, convert_to_raw, detect_format
from tokenbridge.core.ir import RawExport

from .common import emit_json, fail, load_json_file, load_manifest_or_exit

console = Console()


def _convert(path: Path, kind: str | None) -> ConversionResult:
    data = load_json_file(path)
    try:
        return convert_to_raw(data, kind)
    except UnrecognizedFormat as e:
        raise fail(str(e))


def detect_command(
    file: Path = typer.Argument(..., help="JSON document to examine"),
) -> None:
    """
    Print the format of a variables document.
    """
    kind = detect_format(load_json_file(file))
    if kind == FormatKind.UNRECOGNIZED:
        typer.echo(f"{file}: {kind}", err=True)
        raise typer.Exit(code=1)
    typer.echo(str(kind))


def import_command(
    file: Path = typer.Argument(..., help="Collections or raw document"),
    output: Path | None = typer.Option(
        None, "--output", "-o", help="Write the raw export here (default: stdout)"
    ),
    kind: str | None = typer.Option(None, "--kind", "-k", help="Force a format instead of detecting"),
    strict: bool = typer.Option(
        False, "--strict", help="Fail when a variable lacks a value for a mode"
    ),
    manifest: Path | None = typer.Option(None, "--manifest", "-m", help="Path to tokenbridge.toml"),
) -> None:
    """
    Convert any supported document into the raw variable format.
    """
    config = load_manifest_or_exit(manifest).import_config
    result = _convert(file, kind or config.kind)

    if strict or config.strict:
        try:
            result.raise_for_missing_modes()
        except MissingMode as e:
            raise fail(str(e))

    emit_json(result.raw.to_json(), output)
    if result.skipped_count:
        typer.echo(f"Skipped {result.skipped_count} malformed entries", err=True)


def collections_command(
    file: Path = typer.Argument(..., help="Raw export of live variables"),
    output: Path | None = typer.Option(None, "--output", "-o", help="Output file (default: stdout)"),
    colors_only: bool = typer.Option(False, "--colors-only", help="Export COLOR variables only"),
    flat: bool = typer.Option(
        False, "--flat", help="Put every variable in one 'colors' group under its full name"
    ),
    raw: bool = typer.Option(False, "--raw", help="Emit the normalized raw export instead"),
) -> None:
    """
    Export live variables as a collections document.
    """
    try:
        live = RawExport.model_validate(load_json_file(file))
    except ValidationError as e:
        raise fail(f"{file} is not a raw variable export: {e.error_count()} errors")

    if raw:
        emit_json(export_raw(live.collections, live.variables).to_json(), output)
        return

    document = export_collections(
        live.collections,
        live.variables,
        include_all_types=not colors_only,
        preserve_structure=not flat,
    )
    emit_json(document, output)


def inspect_command(
    file: Path = typer.Argument(..., help="Document to inspect"),
    kind: str | None = typer.Option(None, "--kind", "-k", help="Force a format instead of detecting"),
) -> None:
    """
    Summarize the collections a document would import.
    """
    result = _convert(file, kind)

    table = Table(
        title=f"{file.name} ({result.kind})",
        caption=f"{result.variable_count} variables in {len(result.raw.collections)} collections",
    )
    table.add_column("Collection")
    table.add_column("Modes")
    table.add_column("Variables", justify="right")
    table.add_column("Colors", justify="right")

    for collection in result.raw.collections:
        variables = result.raw.variables_in(collection.id)
        table.add_row(
            collection.name,
            ", ".join(mode.name for mode in collection.modes),
            str(len(variables)),
            str(sum(1 for v in variables if v.is_color)),
        )

    console.print(table)
    if result.skipped:
        console.print(f"[yellow]Skipped {result.skipped_count} entries[/yellow]")
        for node in result.skipped:
            console.print(f"  - {node.path}: {node.reason}")
    if result.missing_modes:
        console.print(f"[yellow]{len(result.missing_modes)} missing mode values[/yellow]")
