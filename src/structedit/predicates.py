#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/structedit/predicates.py
"""Predicates over nodes, selections and content fit.

Kinds can be given as ``NodeType`` objects or as node type names, alone or in
a list. The helpers here are the only place that interprets that spelling.
"""

from __future__ import annotations

from collections.abc import Sequence
from enum import Enum, auto
from typing import TYPE_CHECKING, Union

from prosemirror.model import Fragment, Node, NodeType, ResolvedPos

from structedit.constants import PARAGRAPH_TYPE_NAME

if TYPE_CHECKING:
    from structedit.state import Selection

Kind = Union[str, NodeType]
KindSpec = Union[Kind, Sequence[Kind]]
Content = Union[Node, Fragment]


class NodeShape(Enum):
    """Structural shape of a node, as far as deleting it is concerned."""

    TEXT = auto()
    ATOM = auto()
    HOLLOW = auto()
    CONTAINER = auto()


def normalize_kinds(kinds: KindSpec) -> list[Kind]:
    """Return ``kinds`` as a list of kinds."""
    if isinstance(kinds, (str, NodeType)):
        return [kinds]
    return list(kinds)


def _kind_matches(kind: Kind, node_type: NodeType) -> bool:
    if isinstance(kind, str):
        return node_type.name == kind
    return kind is node_type


def matches_kind(node: Node | None, kinds: KindSpec) -> bool:
    """Check whether ``node`` is of one of the given kinds.

    Parameters
    ----------
    node : Node or None
        Node to test; None never matches
    kinds : str, NodeType or list of them
        Accepted kinds

    Returns
    -------
    bool
        True if the node's type is among ``kinds``

    """
    if node is None:
        return False
    return any(_kind_matches(kind, node.type) for kind in normalize_kinds(kinds))


def is_node_selection(selection: Selection) -> bool:
    """Check whether ``selection`` selects a whole node."""
    from structedit.state import NodeSelection

    return isinstance(selection, NodeSelection)


def is_node_empty(node: Node | None) -> bool:
    """Check whether a node holds no content other than empty children.

    Leaf nodes are never empty; they are content themselves.
    """
    if node is None:
        return True
    if node.is_leaf:
        return False
    if node.content.size == 0:
        return True
    if node.inline_content:
        return False
    return all(is_node_empty(child) for child in node.content.content)


def is_empty_paragraph(node: Node | None) -> bool:
    """Check whether ``node`` is a paragraph without content."""
    return node is None or (node.type.name == PARAGRAPH_TYPE_NAME and node.content.size == 0)


def node_shape(node: Node) -> NodeShape:
    """Classify ``node`` by the shape of its span.

    Returns
    -------
    NodeShape
        TEXT for text nodes, ATOM for leaves and atoms, HOLLOW for containers
        whose only child is empty, CONTAINER otherwise

    """
    if node.is_text:
        return NodeShape.TEXT
    if node.is_atom or node.is_leaf:
        return NodeShape.ATOM
    if node.child_count == 1 and is_node_empty(node.child(0)):
        return NodeShape.HOLLOW
    return NodeShape.CONTAINER


def as_fragment(content: Content) -> Fragment:
    """Convert insertable content to a fragment.

    Raises
    ------
    TypeError
        If ``content`` is neither a Node nor a Fragment

    """
    if isinstance(content, Fragment):
        return content
    if isinstance(content, Node):
        return Fragment.from_(content)
    raise TypeError(f"Expected a Node or Fragment, got {type(content).__name__}")


def can_insert(resolved: ResolvedPos, content: Content) -> bool:
    """Check whether ``content`` may be inserted at ``resolved``.

    The test is made against the content rules of the position's parent, at
    the child index the position points to.
    """
    index = resolved.index()
    return resolved.parent.can_replace(index, index, as_fragment(content))


def can_replace_node(resolved: ResolvedPos, content: Content) -> bool:
    """Check whether ``content`` may take the place of the node after ``resolved``."""
    if resolved.node_after is None:
        return False
    index = resolved.index()
    return resolved.parent.can_replace(index, index + 1, as_fragment(content))


__all__ = [
    "Content",
    "Kind",
    "KindSpec",
    "NodeShape",
    "as_fragment",
    "can_insert",
    "can_replace_node",
    "is_empty_paragraph",
    "is_node_empty",
    "is_node_selection",
    "matches_kind",
    "node_shape",
    "normalize_kinds",
]
