#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/structedit/finders.py
"""Ancestor search relative to positions and selections.

Every search here walks the ancestor chain of a position from the innermost
node outwards and stops at the first match. When several kinds are accepted,
the nearest matching ancestor wins no matter in which order the kinds were
listed.

Examples
--------
Find the table cell around the cursor:

    >>> cell = find_parent_node_of_type(tr.selection, "table_cell")
    >>> if cell:
    ...     print(cell.pos, cell.node.attrs)

Prefer the closest of several kinds:

    >>> find_ancestor(tr.selection.resolved_from, ["table", "paragraph"]).node.type.name
    'paragraph'

"""

from __future__ import annotations

from typing import Callable, Optional

from prosemirror.model import Node, ResolvedPos

from structedit.position import Ancestor, ancestor_at
from structedit.predicates import KindSpec, is_node_selection, matches_kind
from structedit.state import Selection


def find_parent_node_closest_to_pos(
    resolved: ResolvedPos, predicate: Callable[[Node], bool]
) -> Optional[Ancestor]:
    """Find the closest node containing ``resolved`` for which ``predicate`` holds.

    Parameters
    ----------
    resolved : ResolvedPos
        Position to search from
    predicate : callable
        Test applied to each ancestor node, innermost first

    Returns
    -------
    Ancestor or None
        The first matching ancestor, including the document root

    """
    for depth in range(resolved.depth, -1, -1):
        node = resolved.node(depth)
        if predicate(node):
            return ancestor_at(resolved, depth)
    return None


def find_ancestor(resolved: ResolvedPos, kinds: KindSpec) -> Optional[Ancestor]:
    """Find the closest ancestor of ``resolved`` whose kind is in ``kinds``.

    Parameters
    ----------
    resolved : ResolvedPos
        Position to search from
    kinds : str, NodeType or list of them
        Accepted kinds. List order does not matter: proximity to the
        position decides between several matches.

    Returns
    -------
    Ancestor or None
        Node, position, start and depth of the match, or None

    """
    return find_parent_node_closest_to_pos(resolved, lambda node: matches_kind(node, kinds))


def find_parent_node(selection: Selection, predicate: Callable[[Node], bool]) -> Optional[Ancestor]:
    """Find the closest ancestor of the selection start for which ``predicate`` holds."""
    return find_parent_node_closest_to_pos(selection.resolved_from, predicate)


def find_parent_node_of_type(selection: Selection, kinds: KindSpec) -> Optional[Ancestor]:
    """Find the closest ancestor of the selection start whose kind is in ``kinds``."""
    return find_ancestor(selection.resolved_from, kinds)


def has_parent_node(selection: Selection, predicate: Callable[[Node], bool]) -> bool:
    """Check whether any ancestor of the selection start satisfies ``predicate``."""
    return find_parent_node(selection, predicate) is not None


def has_parent_node_of_type(selection: Selection, kinds: KindSpec) -> bool:
    """Check whether the selection start has an ancestor whose kind is in ``kinds``."""
    return find_parent_node_of_type(selection, kinds) is not None


def find_selected_node_of_type(selection: Selection, kinds: KindSpec) -> Optional[Ancestor]:
    """Return the selected node when the selection is a node selection of one of ``kinds``."""
    if is_node_selection(selection) and matches_kind(selection.node, kinds):
        resolved = selection.resolved_from
        return Ancestor(node=selection.node, pos=resolved.pos, start=resolved.pos + 1, depth=resolved.depth + 1)
    return None


def find_position_of_node_before(selection: Selection) -> Optional[int]:
    """Return the position right before the node preceding the selection start.

    The node before is the sibling immediately preceding the position at its
    own depth. For a position inside a text node this is the part of the text
    before the position.

    Returns
    -------
    int or None
        Start of the preceding node, or None when nothing precedes the
        position in its parent

    """
    resolved = selection.resolved_from
    node_before = resolved.node_before
    if node_before is None:
        return None
    return resolved.pos - node_before.node_size


__all__ = [
    "find_ancestor",
    "find_parent_node",
    "find_parent_node_closest_to_pos",
    "find_parent_node_of_type",
    "find_position_of_node_before",
    "find_selected_node_of_type",
    "has_parent_node",
    "has_parent_node_of_type",
]
