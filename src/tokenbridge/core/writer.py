"""
File output for generated payloads.

JSON payloads are serialized; string payloads (CSS) are written as-is.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)


def dump_json(payload: Any, pretty: bool = True) -> str:
    """Serialize a payload. Key order is preserved so output is deterministic."""
    return json.dumps(payload, indent=2 if pretty else None, ensure_ascii=False)


def write_text(content: str, output_path: Path) -> Path:
    """Write a text file, creating parent directories."""
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(content, encoding="utf-8")
    logger.debug("Wrote %s", output_path)
    return output_path


def write_json(payload: Any, output_path: Path, pretty: bool = True) -> Path:
    """Write one payload, creating parent directories.

    Returns:
        Path to the written file.
    """
    return write_text(dump_json(payload, pretty) + "\n", output_path)


def write_files(
    files: Mapping[str, Any],
    output_dir: Path,
    pretty: bool = True,
) -> list[Path]:
    """Write ``{filename: payload}`` into a directory.

    Args:
        files: File name -> JSON payload, or stylesheet text.
        output_dir: Target directory (created if missing).
        pretty: Indent JSON output.

    Returns:
        Written paths, in the order of ``files``.
    """
    paths = []
    for name, payload in files.items():
        path = output_dir / name
        if isinstance(payload, str):
            paths.append(write_text(payload, path))
        else:
            paths.append(write_json(payload, path, pretty))
    return paths
