"""Shared CLI helpers."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import typer
from pydantic import ValidationError

from tokenbridge.core.manifest import ProjectManifest, resolve_manifest
from tokenbridge.core.writer import dump_json, write_json

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format=LOG_FORMAT)


def fail(message: str) -> typer.Exit:
    """Print an error to stderr and return the exit to raise."""
    typer.echo(f"Error: {message}", err=True)
    return typer.Exit(code=1)


def load_json_file(path: Path) -> Any:
    """Read a JSON document, exiting with code 1 if it cannot be parsed."""
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError:
        raise fail(f"File not found: {path}")
    except json.JSONDecodeError as e:
        raise fail(f"Invalid JSON in {path}: {e}")


def load_manifest_or_exit(manifest: Path | None) -> ProjectManifest:
    try:
        return resolve_manifest(manifest)
    except (FileNotFoundError, ValueError, ValidationError) as e:
        raise fail(str(e))


def emit_json(payload: Any, output: Path | None, pretty: bool = True) -> None:
    """Write a payload to ``output`` or print it to stdout."""
    if output is None:
        typer.echo(dump_json(payload, pretty))
        return
    write_json(payload, output, pretty)
    typer.echo(f"Wrote {output}", err=True)
