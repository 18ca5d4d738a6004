#  Copyright (c) 2025 Tom Villani, Ph.D.
"""structedit - structural edits for position-addressed document trees.

This package provides small, composable edits for rich-text documents built
on ``prosemirror`` (prosemirror-py): finding the ancestor of a given kind
around the cursor, inserting content where the schema allows it, replacing
or restyling ancestors, and working with node selections.

Every edit takes a ``Transaction`` and returns one. An edit that does not
apply returns its input unchanged, so ``new_tr is tr`` tells the caller
nothing happened, and the output of one edit can be fed to the next.

Examples
--------
Insert a paragraph below the cursor's block, then select it:

    >>> from structedit import create_transaction, safe_insert, select_parent_node_of_type
    >>> tr = create_transaction(doc, TextSelection.create(doc, 4))
    >>> tr = safe_insert(tr, paragraph)
    >>> tr = select_parent_node_of_type(tr, "paragraph")

"""

from __future__ import annotations

import logging

from structedit.exceptions import InvalidContentError, PositionError, SelectionError, StructEditError
from structedit.finders import (
    find_ancestor,
    find_parent_node,
    find_parent_node_closest_to_pos,
    find_parent_node_of_type,
    find_position_of_node_before,
    find_selected_node_of_type,
    has_parent_node,
    has_parent_node_of_type,
)
from structedit.insertion import safe_insert
from structedit.options import InsertOptions, MarkupOptions
from structedit.position import Ancestor, ancestors, node_span, resolve
from structedit.predicates import (
    NodeShape,
    can_insert,
    can_replace_node,
    is_empty_paragraph,
    is_node_empty,
    is_node_selection,
    matches_kind,
    node_shape,
)
from structedit.queries import (
    NodeWithPos,
    contains,
    find_block_nodes,
    find_children,
    find_children_by_attr,
    find_children_by_mark,
    find_children_by_type,
    find_inline_nodes,
    find_text_nodes,
    flatten,
)
from structedit.state import NodeSelection, Selection, TextSelection, Transaction, create_transaction
from structedit.transforms import (
    clone_tr,
    remove_ancestor_of_kind,
    remove_node_at_pos,
    remove_node_before,
    remove_parent_node,
    remove_selected_node,
    replace_ancestor_of_kind,
    replace_node_at_pos,
    replace_selected_node,
    restyle_ancestor_of_kind,
    select_parent_node_of_type,
    set_text_selection,
)

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "1.0.0"

__all__ = [
    "__version__",
    # Errors
    "StructEditError",
    "PositionError",
    "SelectionError",
    "InvalidContentError",
    # Options
    "InsertOptions",
    "MarkupOptions",
    # Positions
    "Ancestor",
    "ancestors",
    "node_span",
    "resolve",
    # Selections and transactions
    "Selection",
    "TextSelection",
    "NodeSelection",
    "Transaction",
    "create_transaction",
    # Predicates
    "NodeShape",
    "can_insert",
    "can_replace_node",
    "is_empty_paragraph",
    "is_node_empty",
    "is_node_selection",
    "matches_kind",
    "node_shape",
    # Ancestor search
    "find_ancestor",
    "find_parent_node",
    "find_parent_node_closest_to_pos",
    "find_parent_node_of_type",
    "find_position_of_node_before",
    "find_selected_node_of_type",
    "has_parent_node",
    "has_parent_node_of_type",
    # Descendant queries
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
    # Transforms
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
    "safe_insert",
    "select_parent_node_of_type",
    "set_text_selection",
]
