#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/structedit/insertion.py
"""Insert content where the schema allows it.

``safe_insert`` tries, in order:

1. Replacing a selected node, when ``InsertOptions.try_to_replace`` is set.
2. Inserting at the target position itself.
3. Replacing the empty block around the target position, so no empty
   sibling is left behind.
4. Inserting right after one of the target position's ancestors, innermost
   first.

If none of these fit, the transaction is returned unchanged. After a
successful insertion the cursor is moved into the inserted content.

Examples
--------
Insert a paragraph below the block holding the cursor:

    >>> new_tr = safe_insert(tr, schema.nodes["paragraph"].create(None, schema.text("two")))
    >>> new_tr.selection.resolved_from.parent.text_content
    'two'

"""

from __future__ import annotations

import logging
from typing import Optional

from prosemirror.model import Fragment, Node, ResolvedPos

from structedit.options import InsertOptions
from structedit.position import node_span, resolve
from structedit.predicates import Content, as_fragment, can_insert, is_node_empty, is_node_selection
from structedit.state import NodeSelection, Selection, TextSelection, Transaction
from structedit.transforms import replace_selected_node

logger = logging.getLogger(__name__)


def _selection_in_inserted(doc: Node, pos: int, fragment: Fragment) -> Optional[Selection]:
    """Find the selection to use after inserting ``fragment`` at ``pos``.

    Inline content gets a cursor at its start. Block content gets a cursor
    at the start of its first textblock; without one, a lone selectable node
    is selected instead.
    """
    end = pos + fragment.size
    resolved = doc.resolve(pos)
    if resolved.parent.inline_content:
        return TextSelection.create(doc, pos)
    found = Selection.find_from(resolved, 1, text_only=True)
    if found is not None and found.from_ <= end:
        return found
    if len(fragment.content) == 1 and NodeSelection.is_selectable(fragment.content[0]):
        return NodeSelection.create(doc, pos)
    return None


def _finish(tr: Transaction, pos: int, fragment: Fragment, options: InsertOptions) -> Transaction:
    if options.select_inserted:
        selection = _selection_in_inserted(tr.doc, pos, fragment)
        if selection is not None:
            tr.set_selection(selection)
    return tr


def _empty_ancestor_depth(resolved: ResolvedPos, fragment: Fragment) -> Optional[int]:
    """Return the depth of the smallest empty ancestor ``fragment`` can replace.

    The search starts at the position's parent and moves outward for as long
    as every ancestor holds nothing but empty content.
    """
    for depth in range(resolved.depth, 0, -1):
        if not is_node_empty(resolved.node(depth)):
            break
        index = resolved.index(depth - 1)
        if resolved.node(depth - 1).can_replace(index, index + 1, fragment):
            return depth
    return None


def safe_insert(
    tr: Transaction,
    content: Content,
    position: Optional[int] = None,
    options: Optional[InsertOptions] = None,
) -> Transaction:
    """Insert ``content`` at or near ``position``.

    Parameters
    ----------
    tr : Transaction
        Transaction to edit
    content : Node or Fragment
        Content to insert
    position : int, optional
        Target position; defaults to the head of the current selection
    options : InsertOptions, optional
        Replacement and cursor placement behaviour

    Returns
    -------
    Transaction
        A clone with the content inserted, or ``tr`` when the content is empty
        or fits nowhere between the target position and the document root

    Raises
    ------
    PositionError
        If ``position`` lies outside the document
    TypeError
        If ``content`` is neither a Node nor a Fragment

    """
    options = options or InsertOptions()
    fragment = as_fragment(content)
    if fragment.size == 0:
        logger.debug("Nothing to insert")
        return tr
    selection = tr.selection

    if options.try_to_replace and is_node_selection(selection):
        new_tr = replace_selected_node(tr, content)
        if new_tr is not tr:
            logger.debug("Replaced selected %s", selection.node.type.name)
            return _finish(new_tr, selection.from_, fragment, options)

    resolved = resolve(tr.doc, selection.head if position is None else position)

    if can_insert(resolved, fragment):
        logger.debug("Inserting at %d", resolved.pos)
        new_tr = tr.clone()
        new_tr.insert(resolved.pos, fragment)
        return _finish(new_tr, resolved.pos, fragment, options)

    depth = _empty_ancestor_depth(resolved, fragment)
    if depth is not None:
        start, end = node_span(resolved, depth)
        logger.debug("Replacing empty %s at %d", resolved.node(depth).type.name, start)
        new_tr = tr.clone()
        new_tr.replace_with(start, end, fragment)
        return _finish(new_tr, start, fragment, options)

    for depth in range(resolved.depth, 0, -1):
        pos = resolved.after(depth)
        if can_insert(tr.doc.resolve(pos), fragment):
            logger.debug("Inserting after %s at %d", resolved.node(depth).type.name, pos)
            new_tr = tr.clone()
            new_tr.insert(pos, fragment)
            return _finish(new_tr, pos, fragment, options)

    logger.debug("No place for the content between %d and the document root", resolved.pos)
    return tr


__all__ = [
    "safe_insert",
]
