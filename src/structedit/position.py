#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/structedit/position.py
"""Position resolution and ancestor chains.

A position is an integer offset into a document where every non-text node
takes one unit for its opening boundary and one for its closing boundary.
Resolving a position yields a ``ResolvedPos`` that knows every node
containing it. This module wraps that resolution with a range check and
materializes the ancestor chain as a plain list, innermost ancestor first.

Examples
--------
List the kinds of all nodes around a cursor:

    >>> resolved = resolve(doc, 4)
    >>> [ancestor.node.type.name for ancestor in ancestors(resolved)]
    ['paragraph', 'doc']

"""

from __future__ import annotations

from dataclasses import dataclass

from prosemirror.model import Node, ResolvedPos

from structedit.exceptions import PositionError


@dataclass(frozen=True)
class Ancestor:
    """A node containing a resolved position.

    Parameters
    ----------
    node : Node
        The containing node
    pos : int
        Position of the node's opening boundary; 0 for the document root
    start : int
        Position of the node's first content slot
    depth : int
        Depth of the node; the root sits at depth 0

    """

    node: Node
    pos: int
    start: int
    depth: int

    @property
    def end(self) -> int:
        """Position right after the node's closing boundary.

        The document root has no closing boundary; for it this is the end of
        its content, the largest valid position.
        """
        if self.depth == 0:
            return self.node.content.size
        return self.pos + self.node.node_size


def resolve(doc: Node, pos: int) -> ResolvedPos:
    """Resolve ``pos`` against ``doc``.

    Parameters
    ----------
    doc : Node
        Document the position belongs to
    pos : int
        Position to resolve

    Returns
    -------
    ResolvedPos
        Resolved view of the position

    Raises
    ------
    PositionError
        If ``pos`` is not an integer within ``0..doc.content.size``

    """
    size = doc.content.size
    if isinstance(pos, bool) or not isinstance(pos, int) or not 0 <= pos <= size:
        raise PositionError(pos, size)
    return doc.resolve(pos)


def ancestor_at(resolved: ResolvedPos, depth: int) -> Ancestor:
    """Describe the ancestor of ``resolved`` at ``depth``."""
    return Ancestor(
        node=resolved.node(depth),
        pos=resolved.before(depth) if depth > 0 else 0,
        start=resolved.start(depth),
        depth=depth,
    )


def ancestors(resolved: ResolvedPos) -> list[Ancestor]:
    """Return every node containing ``resolved``, innermost first.

    The first entry is the immediate parent (depth ``resolved.depth``) and the
    last one is the document root (depth 0).

    Parameters
    ----------
    resolved : ResolvedPos
        Position whose ancestors are wanted

    Returns
    -------
    list of Ancestor
        The ancestor chain, ordered from the innermost node to the root

    """
    return [ancestor_at(resolved, depth) for depth in range(resolved.depth, -1, -1)]


def node_span(resolved: ResolvedPos, depth: int) -> tuple[int, int]:
    """Return the ``(start, end)`` positions around the ancestor at ``depth``.

    ``start`` is the ancestor's opening boundary and ``end`` the position
    right after its closing boundary, so deleting ``start..end`` removes the
    node entirely.

    Raises
    ------
    ValueError
        If ``depth`` is 0; the root has no boundaries inside the document.

    """
    if depth < 1:
        raise ValueError("The document root has no span inside the document")
    return resolved.before(depth), resolved.after(depth)


__all__ = [
    "Ancestor",
    "ancestor_at",
    "ancestors",
    "node_span",
    "resolve",
]
