"""
Error types for token serialization, format detection and tree conversion.
"""

from dataclasses import dataclass
from typing import Optional


class TokenBridgeError(Exception):
    """Base exception for all tokenbridge errors."""

    def __init__(self, message: str, context: Optional["NodeContext"] = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}: {self.message}"
        return self.message


class InvalidColorFormat(TokenBridgeError):
    """
    Raised when a color string is not a valid hex color.

    Examples:
    - Wrong length (anything but 3, 6 or 8 hex digits)
    - Non-hex characters
    - Non-string input
    """

    pass


class UnrecognizedFormat(TokenBridgeError):
    """
    Raised when uploaded JSON matches none of the known shapes.

    Fatal for the whole document: no partial conversion is attempted.
    """

    pass


class MalformedCollectionTree(TokenBridgeError):
    """
    Raised when a collections-JSON node cannot be classified.

    Examples:
    - A node owning ``type`` but not ``values`` (or the reverse)
    - A leaf whose ``values`` is not a mapping
    - A non-object value where a node is expected
    """

    pass


class MissingMode(TokenBridgeError):
    """
    Raised when a leaf has no value for one of its collection's modes.

    Tolerated during conversion; only raised on request via
    ``ConversionResult.raise_for_missing_modes``.
    """

    pass


@dataclass
class NodeContext:
    """
    Location of a node inside a collections document.

    Attributes:
        path: Slash-joined path of the node (e.g. ``solid/blue/1``)
        collection: Optional name of the collection owning the node
    """

    path: str
    collection: str | None = None

    def format(self) -> str:
        """
        Format the location as a human-readable string.

        Returns:
            Formatted string like: "solid/blue/1 in collection 'Generated Colors'"
        """
        location = self.path or "<root>"
        if self.collection:
            location += f" in collection '{self.collection}'"
        return location


def make_tree_error(
    message: str,
    path: str,
    collection: str | None = None,
) -> MalformedCollectionTree:
    """
    Helper to create a MalformedCollectionTree with context.

    Args:
        message: Error description
        path: Path of the offending node
        collection: Optional collection name

    Returns:
        MalformedCollectionTree with context attached
    """
    return MalformedCollectionTree(message, NodeContext(path=path, collection=collection))
