"""
Project configuration loaded from ``tokenbridge.toml``.

Example::

    [colors]
    include_wide_gamut = false
    collection_name = "Brand Colors"
    root_variables = ["background"]

    [spacing]
    rem_base = 10

    [import]
    strict = true
"""

import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from pydantic import BaseModel

from .ir.config import ColorExportConfig, SpacingExportConfig

logger = logging.getLogger(__name__)

MANIFEST_FILENAME = "tokenbridge.toml"


@dataclass
class ImportConfig:
    """Defaults for the ``import`` command."""

    kind: str | None = None  # force a format instead of detecting it
    strict: bool = False  # fail on missing mode values


@dataclass
class ProjectManifest:
    colors: ColorExportConfig = field(default_factory=ColorExportConfig)
    spacing: SpacingExportConfig = field(default_factory=SpacingExportConfig)
    import_config: ImportConfig = field(default_factory=ImportConfig)
    path: Path | None = None


def _known_keys(model: type[BaseModel], data: dict[str, Any], table: str) -> dict[str, Any]:
    known = {}
    for key, value in data.items():
        if key in model.model_fields:
            known[key] = value
        else:
            logger.debug("Ignoring unknown key [%s].%s", table, key)
    return known


def load_manifest(path: Path) -> ProjectManifest:
    """Read a manifest file.

    Raises:
        tomllib.TOMLDecodeError: Invalid TOML.
        pydantic.ValidationError: Invalid option values.
    """
    data = tomllib.loads(path.read_text(encoding="utf-8"))

    colors_data = data.get("colors", {})
    spacing_data = data.get("spacing", {})
    import_data = data.get("import", {})

    return ProjectManifest(
        colors=ColorExportConfig(**_known_keys(ColorExportConfig, colors_data, "colors")),
        spacing=SpacingExportConfig(**_known_keys(SpacingExportConfig, spacing_data, "spacing")),
        import_config=ImportConfig(
            kind=import_data.get("kind"),
            strict=import_data.get("strict", False),
        ),
        path=path,
    )


def resolve_manifest(path: Path | None = None, search_dir: Path | None = None) -> ProjectManifest:
    """Load an explicit manifest, or ``tokenbridge.toml`` from ``search_dir``.

    A missing default manifest gives the built-in defaults; a missing
    explicit one raises FileNotFoundError.
    """
    if path is not None:
        if not path.exists():
            raise FileNotFoundError(f"Manifest not found: {path}")
        return load_manifest(path)

    candidate = (search_dir or Path.cwd()) / MANIFEST_FILENAME
    if candidate.exists():
        logger.debug("Using manifest %s", candidate)
        return load_manifest(candidate)
    return ProjectManifest()
