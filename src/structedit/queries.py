#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/structedit/queries.py
"""Descendant queries over document nodes.

These helpers list descendants of a node together with their positions. A
position is relative to the start of the queried node's content, so for a
document it is an absolute document position.

Examples
--------
Collect every table cell in a document:

    >>> cells = find_children_by_type(doc, "table_cell")
    >>> [cell.pos for cell in cells]
    [3, 9]

"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any, Callable, Union

from prosemirror.model import MarkType, Node

from structedit.predicates import KindSpec, matches_kind


@dataclass(frozen=True)
class NodeWithPos:
    """A descendant node and its position relative to the queried node's content."""

    node: Node
    pos: int


def _walk(node: Node, offset: int, descend: bool) -> Iterator[NodeWithPos]:
    pos = offset
    for child in node.content.content:
        yield NodeWithPos(child, pos)
        if descend and child.child_count:
            yield from _walk(child, pos + 1, descend)
        pos += child.node_size


def flatten(node: Node, descend: bool = True) -> list[NodeWithPos]:
    """List the descendants of ``node`` in document order.

    Parameters
    ----------
    node : Node
        Node whose descendants are listed
    descend : bool, default True
        When False only direct children are listed

    Returns
    -------
    list of NodeWithPos
        Descendants with their positions

    """
    return list(_walk(node, 0, descend))


def find_children(node: Node, predicate: Callable[[Node], bool], descend: bool = True) -> list[NodeWithPos]:
    """List the descendants of ``node`` that satisfy ``predicate``."""
    return [item for item in _walk(node, 0, descend) if predicate(item.node)]


def find_text_nodes(node: Node, descend: bool = True) -> list[NodeWithPos]:
    """List the text descendants of ``node``."""
    return find_children(node, lambda child: child.is_text, descend)


def find_inline_nodes(node: Node, descend: bool = True) -> list[NodeWithPos]:
    """List the inline descendants of ``node``, text included."""
    return find_children(node, lambda child: child.is_inline, descend)


def find_block_nodes(node: Node, descend: bool = True) -> list[NodeWithPos]:
    """List the block descendants of ``node``."""
    return find_children(node, lambda child: child.is_block, descend)


def find_children_by_attr(
    node: Node, predicate: Callable[[dict[str, Any]], bool], descend: bool = True
) -> list[NodeWithPos]:
    """List the descendants of ``node`` whose attributes satisfy ``predicate``."""
    return find_children(node, lambda child: bool(predicate(child.attrs)), descend)


def find_children_by_type(node: Node, kinds: KindSpec, descend: bool = True) -> list[NodeWithPos]:
    """List the descendants of ``node`` whose kind is in ``kinds``."""
    return find_children(node, lambda child: matches_kind(child, kinds), descend)


def find_children_by_mark(node: Node, mark_type: Union[str, MarkType], descend: bool = True) -> list[NodeWithPos]:
    """List the descendants of ``node`` carrying a mark of ``mark_type``.

    Parameters
    ----------
    node : Node
        Node whose descendants are searched
    mark_type : str or MarkType
        Mark type, or its name
    descend : bool, default True
        When False only direct children are searched

    Returns
    -------
    list of NodeWithPos
        Marked descendants with their positions

    """

    def has_mark(child: Node) -> bool:
        if isinstance(mark_type, str):
            return any(mark.type.name == mark_type for mark in child.marks)
        return any(mark.type is mark_type for mark in child.marks)

    return find_children(node, has_mark, descend)


def contains(node: Node, kinds: KindSpec) -> bool:
    """Check whether ``node`` has a descendant whose kind is in ``kinds``."""
    return any(matches_kind(item.node, kinds) for item in _walk(node, 0, True))


__all__ = [
    "NodeWithPos",
    "contains",
    "find_block_nodes",
    "find_children",
    "find_children_by_attr",
    "find_children_by_mark",
    "find_children_by_type",
    "find_inline_nodes",
    "find_text_nodes",
    "flatten",
]
