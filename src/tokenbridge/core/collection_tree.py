"""
Conversion between live host variables and the collections JSON form.

Export walks the host's flat collection/variable lists and groups each
variable under the first segment of its name. Import parses a collections
tree into ``Leaf``/``Group`` nodes and flattens it back into the raw form
the host importer consumes.

Name splitting is lossy: ``blue-1`` and ``blue/1`` both export as
``blue -> 1`` and both import as ``blue/1``.
"""

from __future__ import annotations

import logging
import re
import uuid
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from .color_codec import encode_color, normalize_color_value
from .errors import InvalidColorFormat, MalformedCollectionTree, MissingMode, make_tree_error
from .ir.variables import (
    ROOT_GROUP,
    SOLID_CATEGORY,
    Group,
    Leaf,
    Mode,
    RawCollection,
    RawExport,
    RawVariable,
    TreeNode,
)

logger = logging.getLogger(__name__)

# Checked in order; the first kind present in a name wins.
NAME_SEPARATORS = ("/", "-", ".")

DEFAULT_COLLECTION_NAME = "Imported Collection"
UNSTRUCTURED_GROUP = "colors"


@dataclass(frozen=True)
class SkippedNode:
    """A tree node or raw entry dropped during conversion."""

    path: str
    reason: str


@dataclass
class ConversionResult:
    """Outcome of converting a document into the raw form.

    Attributes:
        raw: Collections and variables ready for the host importer
        kind: Detected (or requested) format of the source document
        skipped: Nodes that could not be converted
        missing_modes: ``(variable name, mode name)`` pairs with no value
    """

    raw: RawExport
    kind: str | None = None
    skipped: list[SkippedNode] = field(default_factory=list)
    missing_modes: list[tuple[str, str]] = field(default_factory=list)

    @property
    def skipped_count(self) -> int:
        return len(self.skipped)

    @property
    def variable_count(self) -> int:
        return len(self.raw.variables)

    def raise_for_missing_modes(self) -> None:
        """Raise MissingMode if any variable lacks a value for a mode."""
        if not self.missing_modes:
            return
        name, mode = self.missing_modes[0]
        extra = len(self.missing_modes) - 1
        message = f"Variable '{name}' has no value for mode '{mode}'"
        if extra:
            message += f" (and {extra} more)"
        raise MissingMode(message)


# =============================================================================
# Export: live state -> collections JSON
# =============================================================================


def split_variable_name(name: str, preserve_structure: bool = True) -> tuple[str, str]:
    """Split a variable name into ``(group, name)``.

    The first separator kind present in the name is used, and the name is
    split once on it. Names without a separator go under ``__ROOT__``.

    Examples:
        >>> split_variable_name("blue/1")
        ('blue', '1')
        >>> split_variable_name("blue-a-1")
        ('blue', 'a-1')
        >>> split_variable_name("background")
        ('__ROOT__', 'background')
    """
    if not preserve_structure:
        return UNSTRUCTURED_GROUP, name
    for separator in NAME_SEPARATORS:
        if separator in name:
            group, rest = name.split(separator, 1)
            return group, rest
    return ROOT_GROUP, name


def stringify_value(value: Any) -> str:
    """Encode a non-color value for the collections form."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _encode_value(variable: RawVariable, value: Any, mode_name: str) -> str | None:
    if not variable.is_color:
        return stringify_value(value)
    try:
        return encode_color(value)
    except InvalidColorFormat as e:
        logger.warning("Skipping %s value of %s: %s", mode_name, variable.name, e)
        return None


def _index_collections(collections: Sequence[RawCollection]) -> dict[str, RawCollection]:
    return {collection.id: collection for collection in collections}


def export_collections(
    collections: Sequence[RawCollection],
    variables: Sequence[RawVariable],
    include_all_types: bool = True,
    preserve_structure: bool = True,
) -> dict[str, Any]:
    """Export live host variables as a collections document.

    Args:
        collections: Host collections with their modes.
        variables: Host variables; values keyed by mode id.
        include_all_types: If False, only COLOR variables are exported.
        preserve_structure: If False, every variable goes in one ``colors``
            group under its full name.

    Returns:
        ``{"collections": [{"name", "modes", "variables"}]}``. Collections
        with no exported variable are omitted.
    """
    by_id = _index_collections(collections)
    grouped: dict[str, list[RawVariable]] = {collection.id: [] for collection in collections}

    for variable in variables:
        if variable.collection_id not in by_id:
            logger.debug(
                "Variable %s references unknown collection %s; skipping",
                variable.name,
                variable.collection_id,
            )
            continue
        if not include_all_types and not variable.is_color:
            continue
        grouped[variable.collection_id].append(variable)

    output = []
    for collection in collections:
        members = grouped[collection.id]
        if not members:
            continue

        groups: dict[str, dict[str, Any]] = {}
        for variable in members:
            group_name, leaf_name = split_variable_name(variable.name, preserve_structure)
            values: dict[str, str] = {}
            for mode in collection.modes:
                if mode.mode_id not in variable.values_by_mode:
                    continue
                raw_value = variable.values_by_mode[mode.mode_id]
                if raw_value is None:
                    continue
                encoded = _encode_value(variable, raw_value, mode.name)
                if encoded is not None:
                    values[mode.name] = encoded
            leaf = Leaf(type=variable.resolved_type.lower(), values=values)
            groups.setdefault(group_name, {})[leaf_name] = leaf.to_dict()

        output.append(
            {
                "name": collection.name,
                "modes": [mode.name for mode in collection.modes],
                "variables": groups,
            }
        )
        logger.debug("Exported %d variables from %s", len(members), collection.name)

    return {"collections": output}


def export_raw(
    collections: Sequence[RawCollection],
    variables: Sequence[RawVariable],
) -> RawExport:
    """Export live host variables in the raw form.

    Each variable carries a copy of its collection, and COLOR values are
    encoded as hex. Variables of unknown collections are dropped.
    """
    by_id = _index_collections(collections)
    exported = []
    for variable in variables:
        collection = by_id.get(variable.collection_id)
        if collection is None:
            logger.debug("Variable %s has no collection; skipping", variable.name)
            continue

        values: dict[str, Any] = {}
        for mode in collection.modes:
            if mode.mode_id not in variable.values_by_mode:
                continue
            value = variable.values_by_mode[mode.mode_id]
            if variable.is_color:
                try:
                    value = encode_color(value)
                except InvalidColorFormat as e:
                    logger.warning("Failed to export %s in %s: %s", variable.name, mode.name, e)
                    continue
            values[mode.mode_id] = value

        exported.append(
            variable.model_copy(update={"values_by_mode": values, "collection": collection})
        )
    return RawExport(collections=list(collections), variables=exported)


# =============================================================================
# Import: collections JSON -> raw
# =============================================================================


def _join(path: str, key: str) -> str:
    return f"{path}/{key}" if path else key


def parse_node(
    node: Any,
    path: str,
    skipped: list[SkippedNode],
    collection: str | None = None,
) -> TreeNode:
    """Classify one node of a collections tree.

    A mapping with both ``type`` and ``values`` is a Leaf, a mapping with
    neither is a Group.

    Raises:
        MalformedCollectionTree: If the node itself cannot be classified.
            Malformed descendants are appended to ``skipped`` instead.
    """
    if not isinstance(node, Mapping):
        raise make_tree_error(f"Expected an object, got {type(node).__name__}", path, collection)

    has_type = "type" in node
    has_values = "values" in node
    if has_type and has_values:
        if not isinstance(node["values"], Mapping):
            raise make_tree_error("Leaf 'values' must be an object", path, collection)
        return Leaf(type=str(node["type"]), values=dict(node["values"]))
    if has_type or has_values:
        missing = "values" if has_type else "type"
        raise make_tree_error(f"Node has no '{missing}'", path, collection)

    return parse_tree(node, path, skipped, collection)


def parse_tree(
    mapping: Mapping[str, Any],
    path: str = "",
    skipped: list[SkippedNode] | None = None,
    collection: str | None = None,
) -> Group:
    """Parse a ``variables`` mapping into a Group, skipping malformed nodes."""
    if skipped is None:
        skipped = []
    children: dict[str, TreeNode] = {}
    for key, child in mapping.items():
        child_path = _join(path, str(key))
        try:
            children[str(key)] = parse_node(child, child_path, skipped, collection)
        except MalformedCollectionTree as e:
            logger.warning("Skipping node: %s", e)
            skipped.append(SkippedNode(path=child_path, reason=e.message))
    return Group(children=children)


def iter_leaves(
    tree: Group,
    flatten_solid: bool = False,
) -> Iterator[tuple[str, Leaf]]:
    """Yield ``(variable name, leaf)`` for every leaf of a collection tree.

    ``__ROOT__`` adds no segment. Direct leaves of ``solid`` keep a bare
    name; deeper ``solid`` groups keep the ``solid`` segment unless
    ``flatten_solid`` is set.
    """
    for key, node in tree.children.items():
        if key == ROOT_GROUP:
            prefix = ""
        elif key == SOLID_CATEGORY and isinstance(node, Group):
            for sub_key, sub_node in node.children.items():
                if isinstance(sub_node, Leaf):
                    yield sub_key, sub_node
                else:
                    sub_prefix = sub_key if flatten_solid else _join(SOLID_CATEGORY, sub_key)
                    yield from _walk(sub_node, sub_prefix)
            continue
        else:
            prefix = key

        if isinstance(node, Leaf):
            yield key, node
        else:
            yield from _walk(node, prefix)


def _walk(group: Group, prefix: str) -> Iterator[tuple[str, Leaf]]:
    for key, node in group.children.items():
        name = _join(prefix, key)
        if isinstance(node, Leaf):
            yield name, node
        else:
            yield from _walk(node, name)


def new_collection_id() -> str:
    return f"collection-{uuid.uuid4().hex[:12]}"


def new_variable_id(name: str) -> str:
    slug = re.sub(r"[/\s]", "-", name)
    return f"{slug}-{uuid.uuid4().hex[:8]}"


def _collection_modes(source: Mapping[str, Any], default_modes: Sequence[str]) -> list[Mode]:
    names = source.get("modes")
    if not isinstance(names, list) or not names:
        names = list(default_modes)
    return [Mode(mode_id=f"mode-{index}", name=str(name).lower()) for index, name in enumerate(names)]


def collections_to_raw(
    collections: Sequence[Any],
    *,
    flatten_solid: bool = False,
    default_modes: Sequence[str] = ("default",),
) -> ConversionResult:
    """Convert collections-form entries into the raw form.

    Conversion is best-effort: malformed nodes are skipped, missing mode
    values are omitted, and both are reported on the result.

    Args:
        collections: ``{"name", "modes", "variables"}`` mappings.
        flatten_solid: Drop the ``solid`` segment from nested solid groups.
        default_modes: Modes for collections that list none.

    Returns:
        ConversionResult with fresh collection, mode and variable ids.
    """
    result = ConversionResult(raw=RawExport())
    raw_collections: list[RawCollection] = []
    raw_variables: list[RawVariable] = []

    for index, source in enumerate(collections):
        if not isinstance(source, Mapping):
            result.skipped.append(
                SkippedNode(path=f"collections[{index}]", reason="Collection is not an object")
            )
            continue

        name = source.get("name") or DEFAULT_COLLECTION_NAME
        collection = RawCollection(
            id=new_collection_id(),
            name=str(name),
            modes=_collection_modes(source, default_modes),
        )
        raw_collections.append(collection)

        variables = source.get("variables", {})
        if not isinstance(variables, Mapping):
            result.skipped.append(SkippedNode(path=collection.name, reason="'variables' is not an object"))
            continue

        tree = parse_tree(variables, skipped=result.skipped, collection=collection.name)
        for variable_name, leaf in iter_leaves(tree, flatten_solid=flatten_solid):
            raw_variables.append(_leaf_to_variable(variable_name, leaf, collection, result))

        logger.debug(
            "Converted collection %s: %d variables", collection.name, tree.leaf_count()
        )

    result.raw = RawExport(collections=raw_collections, variables=raw_variables)
    return result


def _leaf_to_variable(
    name: str,
    leaf: Leaf,
    collection: RawCollection,
    result: ConversionResult,
) -> RawVariable:
    values = {str(mode_name).lower(): value for mode_name, value in leaf.values.items()}
    resolved_type = leaf.type.upper()

    values_by_mode: dict[str, Any] = {}
    for mode in collection.modes:
        if mode.name not in values:
            result.missing_modes.append((name, mode.name))
            continue
        value = values[mode.name]
        if resolved_type == "COLOR":
            value = normalize_color_value(value, name=name)
        values_by_mode[mode.mode_id] = value

    return RawVariable(
        id=new_variable_id(name),
        name=name,
        collection_id=collection.id,
        resolved_type=resolved_type,
        values_by_mode=values_by_mode,
        collection=collection,
    )
