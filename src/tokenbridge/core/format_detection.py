"""
Detection and dispatch of uploaded variable documents.

Each supported shape is one entry of ``FORMAT_STRATEGIES``: a structural
predicate and the converter that turns a matching document into the raw
form. Entries are ordered most specific first and the first match wins.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from enum import StrEnum
from typing import Any

from pydantic import ValidationError

from .collection_tree import ConversionResult, SkippedNode, collections_to_raw
from .errors import UnrecognizedFormat
from .ir.colors import ColorMode
from .ir.variables import RawCollection, RawExport, RawVariable

logger = logging.getLogger(__name__)


class FormatKind(StrEnum):
    """Document shapes the importer understands."""

    RAW_VARIABLE_EXPORT = "rawVariableExport"
    SPACING_GENERATION_COLLECTIONS = "spacingGenerationCollections"
    COLOR_GENERATION_COLLECTIONS = "colorGenerationCollections"
    W3C_TOKEN_COLLECTION = "w3cTokenCollection"
    LEGACY_COLLECTIONS_OBJECT = "legacyCollectionsObject"
    SIMPLE_COLLECTIONS_ARRAY = "simpleCollectionsArray"
    UNRECOGNIZED = "unrecognized"


COLOR_MODES: tuple[str, ...] = (ColorMode.LIGHT.value, ColorMode.DARK.value)
SPACING_GROUPS = ("spacing", "spacing-px", "spacing-rem")
W3C_COLLECTION_NAME = "Generated Colors"
W3C_EXTENSION = "com.figma"


def _collections(data: Any) -> Any:
    if not isinstance(data, Mapping):
        return None
    return data.get("collections")


def _is_collection_object(value: Any) -> bool:
    return (
        isinstance(value, Mapping)
        and isinstance(value.get("name"), str)
        and isinstance(value.get("modes"), list)
        and isinstance(value.get("variables"), Mapping)
    )


def _has_spacing_groups(collection: Any) -> bool:
    if not isinstance(collection, Mapping):
        return False
    variables = collection.get("variables")
    return isinstance(variables, Mapping) and any(group in variables for group in SPACING_GROUPS)


# =============================================================================
# Predicates
# =============================================================================


def is_raw_variable_export(data: Any) -> bool:
    if not isinstance(_collections(data), list):
        return False
    variables = data.get("variables")
    return isinstance(variables, list) and all(
        isinstance(v, Mapping) and bool(v.get("id")) and bool(v.get("name")) and "valuesByMode" in v
        for v in variables
    )


def is_spacing_generation_collections(data: Any) -> bool:
    collections = _collections(data)
    if isinstance(collections, list):
        return any(_has_spacing_groups(c) for c in collections)
    return _is_collection_object(collections) and _has_spacing_groups(collections)


def is_color_generation_collections(data: Any) -> bool:
    collections = _collections(data)
    if not isinstance(collections, list):
        return False
    return any(
        isinstance(c, Mapping)
        and isinstance(c.get("variables"), Mapping)
        and isinstance(c["variables"].get("solid"), Mapping)
        for c in collections
    )


def is_w3c_token_collection(data: Any) -> bool:
    collections = _collections(data)
    if not isinstance(collections, Mapping):
        return False
    if not isinstance(collections.get("$extensions"), Mapping):
        return False
    colors = collections.get("colors")
    return isinstance(colors, Mapping) and colors.get("$type") == "color"


def is_legacy_collections_object(data: Any) -> bool:
    return _is_collection_object(_collections(data))


def is_simple_collections_array(data: Any) -> bool:
    collections = _collections(data)
    return (
        isinstance(collections, list)
        and len(collections) > 0
        and _is_collection_object(collections[0])
    )


# =============================================================================
# Converters
# =============================================================================


def convert_raw_variable_export(data: Mapping[str, Any]) -> ConversionResult:
    """Validate a raw export, attaching collection references where absent."""
    skipped: list[SkippedNode] = []
    collections: list[RawCollection] = []
    for index, entry in enumerate(data["collections"]):
        try:
            collections.append(RawCollection.model_validate(entry))
        except ValidationError as e:
            logger.warning("Skipping invalid collection %d: %s", index, e.error_count())
            skipped.append(SkippedNode(path=f"collections[{index}]", reason=str(e)))

    by_id = {collection.id: collection for collection in collections}
    variables: list[RawVariable] = []
    for index, entry in enumerate(data["variables"]):
        try:
            variable = RawVariable.model_validate(entry)
        except ValidationError as e:
            logger.warning("Skipping invalid variable %s", entry.get("name", index))
            skipped.append(SkippedNode(path=str(entry.get("name", index)), reason=str(e)))
            continue
        if variable.collection is None and variable.collection_id in by_id:
            variable = variable.model_copy(update={"collection": by_id[variable.collection_id]})
        variables.append(variable)

    return ConversionResult(
        raw=RawExport(collections=collections, variables=variables),
        skipped=skipped,
    )


def _collection_list(data: Mapping[str, Any]) -> list[Any]:
    collections = data["collections"]
    return list(collections) if isinstance(collections, list) else [collections]


def convert_spacing_generation_collections(data: Mapping[str, Any]) -> ConversionResult:
    return collections_to_raw(_collection_list(data), default_modes=("default",))


def convert_color_generation_collections(data: Mapping[str, Any]) -> ConversionResult:
    return collections_to_raw(data["collections"], flatten_solid=True, default_modes=COLOR_MODES)


def _w3c_tree(
    node: Mapping[str, Any],
    skipped: list[SkippedNode],
    path: str = "",
) -> dict[str, Any]:
    """Rewrite W3C-style ``$value`` tokens as collections-form leaves.

    Tokens whose host extension is not an object are appended to
    ``skipped`` and left out of the tree.
    """
    tree: dict[str, Any] = {}
    for key, value in node.items():
        if key == "$type" or not isinstance(value, Mapping):
            continue
        token_path = f"{path}/{key}" if path else key
        extensions = value.get("$extensions")
        if value.get("$value") and isinstance(extensions, Mapping) and W3C_EXTENSION in extensions:
            extension = extensions[W3C_EXTENSION]
            if not isinstance(extension, Mapping):
                logger.warning("Skipping token %s: '%s' is not an object", token_path, W3C_EXTENSION)
                skipped.append(
                    SkippedNode(path=token_path, reason=f"'{W3C_EXTENSION}' extension is not an object")
                )
                continue
            modes = extension.get("modes")
            tree[key] = {"type": "color", "values": dict(modes) if isinstance(modes, Mapping) else {}}
        else:
            tree[key] = _w3c_tree(value, skipped, token_path)
    return tree


def convert_w3c_token_collection(data: Mapping[str, Any]) -> ConversionResult:
    """Convert a single W3C-style token collection with host mode extensions."""
    collection = data["collections"]
    extension = collection["$extensions"].get(W3C_EXTENSION)
    modes = extension.get("modes") if isinstance(extension, Mapping) else None
    if not isinstance(modes, list) or not modes:
        modes = list(COLOR_MODES)

    skipped: list[SkippedNode] = []
    source = {
        "name": W3C_COLLECTION_NAME,
        "modes": modes,
        "variables": _w3c_tree(collection["colors"], skipped),
    }
    result = collections_to_raw([source], default_modes=COLOR_MODES)
    result.skipped[:0] = skipped
    return result


def convert_legacy_collections_object(data: Mapping[str, Any]) -> ConversionResult:
    return collections_to_raw([data["collections"]], default_modes=COLOR_MODES)


def convert_simple_collections_array(data: Mapping[str, Any]) -> ConversionResult:
    return collections_to_raw(data["collections"], default_modes=("default",))


Predicate = Callable[[Any], bool]
Converter = Callable[[Mapping[str, Any]], ConversionResult]

FORMAT_STRATEGIES: tuple[tuple[FormatKind, Predicate, Converter], ...] = (
    (FormatKind.RAW_VARIABLE_EXPORT, is_raw_variable_export, convert_raw_variable_export),
    (
        FormatKind.SPACING_GENERATION_COLLECTIONS,
        is_spacing_generation_collections,
        convert_spacing_generation_collections,
    ),
    (
        FormatKind.COLOR_GENERATION_COLLECTIONS,
        is_color_generation_collections,
        convert_color_generation_collections,
    ),
    (FormatKind.W3C_TOKEN_COLLECTION, is_w3c_token_collection, convert_w3c_token_collection),
    (
        FormatKind.LEGACY_COLLECTIONS_OBJECT,
        is_legacy_collections_object,
        convert_legacy_collections_object,
    ),
    (
        FormatKind.SIMPLE_COLLECTIONS_ARRAY,
        is_simple_collections_array,
        convert_simple_collections_array,
    ),
)


# =============================================================================
# Entry points
# =============================================================================


def detect_format(data: Any) -> FormatKind:
    """Identify the shape of a document.

    Returns:
        The first matching kind, or ``FormatKind.UNRECOGNIZED``.
    """
    for kind, predicate, _ in FORMAT_STRATEGIES:
        if predicate(data):
            return kind
    return FormatKind.UNRECOGNIZED


def _strategy(kind: FormatKind) -> tuple[Predicate, Converter]:
    for candidate, predicate, converter in FORMAT_STRATEGIES:
        if candidate == kind:
            return predicate, converter
    raise UnrecognizedFormat(f"No converter for format '{kind}'")


def convert_to_raw(data: Any, kind: FormatKind | str | None = None) -> ConversionResult:
    """Convert any supported document into the raw form.

    Args:
        data: Parsed JSON document.
        kind: Format to convert from; detected when omitted.

    Returns:
        ConversionResult tagged with the format it was converted from.

    Raises:
        UnrecognizedFormat: Nothing matches, or ``kind`` does not fit the
            document.
    """
    if kind is None:
        kind = detect_format(data)
        if kind == FormatKind.UNRECOGNIZED:
            raise UnrecognizedFormat(
                "Unrecognized variables format: expected a raw export or a collections document"
            )
    else:
        try:
            kind = FormatKind(kind)
        except ValueError as e:
            raise UnrecognizedFormat(f"Unknown format '{kind}'") from e

    predicate, converter = _strategy(kind)
    if not predicate(data):
        raise UnrecognizedFormat(f"Document does not match format '{kind}'")

    logger.info("Converting %s document", kind)
    result = converter(data)
    result.kind = kind
    if result.skipped:
        logger.warning("Skipped %d entries while converting %s", result.skipped_count, kind)
    return result
