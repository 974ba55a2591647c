"""
tokenbridge - design-token format conversion.

Serializes generated color and spacing scales into CSS, JSON, Tailwind
and collections documents, and converts collections documents to and from
the raw variable form of a design tool.
"""

from __future__ import annotations

import re
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _metadata_version
from pathlib import Path as _Path

from .core import ir
from .core.errors import (
    InvalidColorFormat,
    MalformedCollectionTree,
    MissingMode,
    TokenBridgeError,
    UnrecognizedFormat,
)
from .core.format_detection import FormatKind, convert_to_raw, detect_format
from .core.formatters import convert_from_system


def _get_version() -> str:
    """Get version from pyproject.toml (editable) or importlib.metadata (installed)."""
    pyproject = _Path(__file__).parent.parent.parent / "pyproject.toml"
    if pyproject.exists():
        content = pyproject.read_text()
        if match := re.search(r'^version\s*=\s*["\']([^"\']+)["\']', content, re.MULTILINE):
            return match.group(1)

    try:
        return _metadata_version("tokenbridge")
    except PackageNotFoundError:
        return "0.0.0"


__version__ = _get_version()

__all__ = [
    "__version__",
    "ir",
    "FormatKind",
    "detect_format",
    "convert_to_raw",
    "convert_from_system",
    "TokenBridgeError",
    "InvalidColorFormat",
    "UnrecognizedFormat",
    "MalformedCollectionTree",
    "MissingMode",
]
