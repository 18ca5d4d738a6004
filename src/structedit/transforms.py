#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/structedit/transforms.py
"""Structural edits on transactions.

Every function takes a ``Transaction`` and returns one. When the edit does not
apply (no matching ancestor, wrong selection variant, content the schema
rejects) the very same transaction object is returned, so callers can detect
a no-op with ``new_tr is tr``. Otherwise a clone of the transaction carrying
the new steps is returned and the input is left untouched.

Examples
--------
Remove the table around the cursor:

    >>> new_tr = remove_ancestor_of_kind(tr, "table")
    >>> if new_tr is tr:
    ...     print("cursor is not inside a table")

Turn the surrounding cell into a header cell, keeping its content:

    >>> new_tr = restyle_ancestor_of_kind(tr, "table_cell", new_kind="table_header")

"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any, Callable, Optional, Union

from prosemirror.model import Fragment, Mark, Node, NodeType, Slice
from prosemirror.transform import ReplaceAroundStep

from structedit.constants import DEFAULT_SEARCH_DIRECTION, SearchDirection
from structedit.exceptions import InvalidContentError
from structedit.finders import find_parent_node, find_parent_node_of_type, find_position_of_node_before
from structedit.options import MarkupOptions
from structedit.position import Ancestor, resolve
from structedit.predicates import Content, KindSpec, can_replace_node, is_node_selection, node_shape
from structedit.state import NodeSelection, Selection, Transaction

logger = logging.getLogger(__name__)


def clone_tr(tr: Transaction) -> Transaction:
    """Return a copy of ``tr`` that can take new steps without affecting ``tr``."""
    return tr.clone()


def set_text_selection(tr: Transaction, pos: int, direction: SearchDirection = DEFAULT_SEARCH_DIRECTION) -> Transaction:
    """Place a text cursor at the first valid position from ``pos`` in ``direction``.

    Parameters
    ----------
    tr : Transaction
        Transaction to update
    pos : int
        Position to search from
    direction : {-1, 1}, default 1
        Search backwards (-1) or forwards (1)

    Returns
    -------
    Transaction
        A clone with the new selection, or ``tr`` when no text position
        exists in that direction

    """
    found = Selection.find_from(resolve(tr.doc, pos), direction, text_only=True)
    if found is None:
        logger.debug("No text position found from %d in direction %d", pos, direction)
        return tr
    return tr.clone().set_selection(found)


def remove_node_at_pos(tr: Transaction, pos: int) -> Transaction:
    """Delete the node starting at ``pos``."""
    node = resolve(tr.doc, pos).node_after
    if node is None:
        logger.debug("No node at position %d to remove", pos)
        return tr
    new_tr = tr.clone()
    new_tr.delete(pos, pos + node.node_size)
    return new_tr


def replace_node_at_pos(tr: Transaction, pos: int, content: Content) -> Transaction:
    """Replace the node starting at ``pos`` with ``content``.

    The replacement only happens when the schema accepts ``content`` in the
    slot the node occupies in its parent.
    """
    resolved = resolve(tr.doc, pos)
    node = resolved.node_after
    if node is None:
        logger.debug("No node at position %d to replace", pos)
        return tr
    if not can_replace_node(resolved, content):
        logger.debug("Content does not fit in place of %s at %d", node.type.name, pos)
        return tr
    new_tr = tr.clone()
    new_tr.replace_with(pos, pos + node.node_size, content)
    return new_tr


def _editable_ancestor(ancestor: Optional[Ancestor]) -> Optional[Ancestor]:
    # The root has no span that could be deleted or replaced
    if ancestor is None or ancestor.depth == 0:
        return None
    return ancestor


def remove_ancestor_of_kind(tr: Transaction, kinds: KindSpec) -> Transaction:
    """Delete the closest ancestor of the selection whose kind is in ``kinds``.

    Parameters
    ----------
    tr : Transaction
        Transaction to edit
    kinds : str, NodeType or list of them
        Kinds of ancestor to remove

    Returns
    -------
    Transaction
        A clone without the ancestor, or ``tr`` when there is no such ancestor

    """
    ancestor = _editable_ancestor(find_parent_node_of_type(tr.selection, kinds))
    if ancestor is None:
        logger.debug("No ancestor of kind %s to remove", kinds)
        return tr
    return remove_node_at_pos(tr, ancestor.pos)


def remove_parent_node(tr: Transaction, predicate: Callable[[Node], bool]) -> Transaction:
    """Delete the closest ancestor of the selection for which ``predicate`` holds."""
    ancestor = _editable_ancestor(find_parent_node(tr.selection, predicate))
    if ancestor is None:
        return tr
    return remove_node_at_pos(tr, ancestor.pos)


def replace_ancestor_of_kind(tr: Transaction, kinds: KindSpec, content: Content) -> Transaction:
    """Replace the closest ancestor of the selection whose kind is in ``kinds``.

    The selection is mapped through the replacement, so a cursor inside the
    replaced ancestor ends up at the nearest valid position after the new
    content.

    Parameters
    ----------
    tr : Transaction
        Transaction to edit
    kinds : str, NodeType or list of them
        Kinds of ancestor to replace
    content : Node or Fragment
        Replacement content

    Returns
    -------
    Transaction
        A clone with the ancestor replaced, or ``tr`` when there is no such
        ancestor or the schema does not accept ``content`` in its place

    """
    ancestor = _editable_ancestor(find_parent_node_of_type(tr.selection, kinds))
    if ancestor is None:
        logger.debug("No ancestor of kind %s to replace", kinds)
        return tr
    return replace_node_at_pos(tr, ancestor.pos, content)


def _lookup_node_type(schema: Any, kind: Union[str, NodeType]) -> NodeType:
    if isinstance(kind, NodeType):
        return kind
    try:
        return schema.nodes[kind]
    except KeyError as e:
        raise InvalidContentError(kind, f"Schema has no node type '{kind}'", original_error=e) from e


def _merge_marks(current: Sequence[Mark], marks: Sequence[Mark]) -> list[Mark]:
    merged = list(current)
    for mark in marks:
        merged = mark.add_to_set(merged)
    return merged


def _rebuild_node(
    node: Node,
    node_type: NodeType,
    attrs: Optional[dict[str, Any]],
    marks: Optional[Sequence[Mark]],
    options: MarkupOptions,
) -> Node:
    """Build a node of ``node_type`` around ``node``'s existing content.

    Raises
    ------
    InvalidContentError
        If the schema rejects the content or attributes for ``node_type``

    """
    if attrs is None:
        new_attrs = dict(node.attrs)
    elif options.merge_attrs:
        new_attrs = {**node.attrs, **attrs}
    else:
        new_attrs = dict(attrs)

    if marks is None:
        new_marks = list(node.marks)
    elif options.merge_marks:
        new_marks = _merge_marks(node.marks, marks)
    else:
        new_marks = list(marks)

    try:
        return node_type.create_checked(new_attrs, node.content, new_marks)
    except ValueError as e:
        raise InvalidContentError(node_type.name, original_error=e) from e


def restyle_ancestor_of_kind(
    tr: Transaction,
    kinds: KindSpec,
    new_kind: Union[str, NodeType, None] = None,
    attrs: Optional[dict[str, Any]] = None,
    marks: Optional[Sequence[Mark]] = None,
    options: Optional[MarkupOptions] = None,
) -> Transaction:
    """Change the type, attributes or marks of the closest matching ancestor.

    Only the ancestor's own markup changes. Its content is carried over
    untouched and positions inside it stay valid.

    Parameters
    ----------
    tr : Transaction
        Transaction to edit
    kinds : str, NodeType or list of them
        Kinds of ancestor to restyle
    new_kind : str or NodeType, optional
        New node type; defaults to the ancestor's current type
    attrs : dict, optional
        New attributes, merged over the current ones unless
        ``options.merge_attrs`` is False
    marks : sequence of Mark, optional
        New marks, added to the current ones unless ``options.merge_marks``
        is False
    options : MarkupOptions, optional
        Merge behaviour; defaults to ``MarkupOptions()``

    Returns
    -------
    Transaction
        A clone with the restyled ancestor, or ``tr`` when there is no such
        ancestor or the schema rejects the new markup

    """
    options = options or MarkupOptions()
    ancestor = _editable_ancestor(find_parent_node_of_type(tr.selection, kinds))
    if ancestor is None:
        logger.debug("No ancestor of kind %s to restyle", kinds)
        return tr

    node = ancestor.node
    try:
        node_type = node.type if new_kind is None else _lookup_node_type(node.type.schema, new_kind)
        new_node = _rebuild_node(node, node_type, attrs, marks, options)
    except InvalidContentError as e:
        logger.debug("Cannot restyle %s: %s", node.type.name, e.message)
        return tr

    resolved = resolve(tr.doc, ancestor.pos)
    if not can_replace_node(resolved, new_node):
        logger.debug("Parent does not accept %s in place of %s", node_type.name, node.type.name)
        return tr

    start, end = ancestor.pos, ancestor.pos + node.node_size
    # The step carries an empty wrapper and moves the existing content into it
    wrapper = node_type.create(new_node.attrs, None, new_node.marks)
    new_tr = tr.clone()
    new_tr.step(ReplaceAroundStep(start, end, start + 1, end - 1, Slice(Fragment.from_(wrapper), 0, 0), 1, True))
    return new_tr


def remove_selected_node(tr: Transaction) -> Transaction:
    """Delete the node selected by a node selection."""
    selection = tr.selection
    if not is_node_selection(selection):
        return tr
    new_tr = tr.clone()
    new_tr.delete(selection.from_, selection.to)
    return new_tr


def replace_selected_node(tr: Transaction, node: Content) -> Transaction:
    """Replace the node selected by a node selection with ``node``.

    When the replacement is a single selectable node it becomes the new node
    selection.

    Returns
    -------
    Transaction
        A clone with the node replaced, or ``tr`` when the selection is not
        a node selection or the schema rejects ``node`` in that slot

    """
    selection = tr.selection
    if not is_node_selection(selection):
        return tr
    if not can_replace_node(selection.resolved_from, node):
        logger.debug("Content does not fit in place of the selected %s", selection.node.type.name)
        return tr
    new_tr = tr.clone()
    new_tr.replace_with(selection.from_, selection.to, node)
    if isinstance(node, Node) and NodeSelection.is_selectable(node):
        new_tr.set_selection(NodeSelection.create(new_tr.doc, selection.from_))
    return new_tr


def select_parent_node_of_type(tr: Transaction, kinds: KindSpec) -> Transaction:
    """Select the closest ancestor of the cursor whose kind is in ``kinds``.

    An existing node selection is never overridden.
    """
    if is_node_selection(tr.selection):
        return tr
    ancestor = _editable_ancestor(find_parent_node_of_type(tr.selection, kinds))
    if ancestor is None or not NodeSelection.is_selectable(ancestor.node):
        return tr
    return tr.clone().set_selection(NodeSelection.create(tr.doc, ancestor.pos))


def remove_node_before(tr: Transaction) -> Transaction:
    """Delete the node immediately preceding the selection start.

    The whole span of the preceding sibling is deleted, whatever its shape:
    a container with content, a container holding a single empty child, or
    an atom.
    """
    start = find_position_of_node_before(tr.selection)
    if start is None:
        return tr
    node = tr.selection.resolved_from.node_before
    end = start + node.node_size
    logger.debug("Removing %s node %s at %d..%d", node_shape(node).name.lower(), node.type.name, start, end)
    new_tr = tr.clone()
    new_tr.delete(start, end)
    return new_tr


__all__ = [
    "clone_tr",
    "remove_ancestor_of_kind",
    "remove_node_at_pos",
    "remove_node_before",
    "remove_parent_node",
    "remove_selected_node",
    "replace_ancestor_of_kind",
    "replace_node_at_pos",
    "replace_selected_node",
    "restyle_ancestor_of_kind",
    "select_parent_node_of_type",
    "set_text_selection",
]
