"""
Host-tool variable IR types.

Two representations of the same variables:

- the *raw* form the host tool's API produces and consumes: flat lists of
  collections and variables, values keyed by mode id;
- the *collections* form: a per-collection tree of ``Leaf`` and ``Group``
  nodes, values keyed by mode name.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

# Group key whose children are emitted and parsed with no path prefix.
ROOT_GROUP = "__ROOT__"

# Category whose direct leaves keep their bare name.
SOLID_CATEGORY = "solid"

_RAW_CONFIG = ConfigDict(frozen=True, alias_generator=to_camel, populate_by_name=True)


# =============================================================================
# Raw form
# =============================================================================


class Mode(BaseModel):
    """A named value axis within a collection."""

    model_config = _RAW_CONFIG

    mode_id: str
    name: str


class RawCollection(BaseModel):
    """A host collection with its ordered modes."""

    model_config = _RAW_CONFIG

    id: str
    name: str
    modes: list[Mode] = Field(default_factory=list)


class RawVariable(BaseModel):
    """
    A host variable.

    ``collection`` is a denormalized copy of the owning collection so a
    single record is self-describing.
    """

    model_config = _RAW_CONFIG

    id: str
    name: str
    collection_id: str = Field(
        validation_alias=AliasChoices("collectionId", "variableCollectionId", "collection_id"),
    )
    resolved_type: str
    values_by_mode: dict[str, Any] = Field(default_factory=dict)
    collection: RawCollection | None = None

    @field_validator("resolved_type")
    @classmethod
    def normalize_resolved_type(cls, v: str) -> str:
        """Host types are upper-case (COLOR, FLOAT, STRING, BOOLEAN)."""
        return v.upper()

    @property
    def is_color(self) -> bool:
        return self.resolved_type == "COLOR"


class RawExport(BaseModel):
    """Flat collection and variable lists, as the host API consumes them."""

    model_config = _RAW_CONFIG

    collections: list[RawCollection] = Field(default_factory=list)
    variables: list[RawVariable] = Field(default_factory=list)

    def to_json(self) -> dict[str, Any]:
        """Serialize with camelCase keys."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    def variables_in(self, collection_id: str) -> list[RawVariable]:
        return [v for v in self.variables if v.collection_id == collection_id]


# =============================================================================
# Collections form
# =============================================================================


@dataclass(frozen=True)
class Leaf:
    """A variable: one encoded value per mode name."""

    type: str
    values: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type, "values": dict(self.values)}


@dataclass(frozen=True)
class Group:
    """A named level of nesting in a variable tree."""

    children: dict[str, TreeNode] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {key: child.to_dict() for key, child in self.children.items()}

    def leaf_count(self) -> int:
        """Count leaves at any depth."""
        total = 0
        for child in self.children.values():
            total += 1 if isinstance(child, Leaf) else child.leaf_count()
        return total


TreeNode = Union[Leaf, Group]
