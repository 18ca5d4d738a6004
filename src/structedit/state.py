#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/structedit/state.py
"""Selections and transactions.

A ``Transaction`` is a ``prosemirror.transform.Transform`` that also carries a
selection. Steps added to the transaction move the selection along with the
content: the selection is mapped lazily, the first time it is read after new
steps were added.

Two selection variants exist:

- ``TextSelection``: an anchor/head pair, collapsed to a cursor when both are
  equal.
- ``NodeSelection``: exactly one node, treated as an indivisible unit.

Transforms in this library never mutate the transaction they are given. They
``clone`` it first and return the clone, or return the original object when
there is nothing to do.

Examples
--------
Start an edit with the cursor at the beginning of the first paragraph:

    >>> tr = create_transaction(doc, TextSelection.create(doc, 1))
    >>> tr.selection.head
    1

"""

from __future__ import annotations

import copy
import logging
from collections.abc import Sequence
from typing import Any, Optional

from prosemirror.model import Node, ResolvedPos
from prosemirror.transform import Step, Transform

from structedit.constants import SearchDirection
from structedit.exceptions import SelectionError
from structedit.position import resolve

logger = logging.getLogger(__name__)


class StepMaps:
    """Position mapping through a sequence of steps.

    Parameters
    ----------
    steps : sequence of Step
        Steps to map through, in application order

    """

    def __init__(self, steps: Sequence[Step]):
        """Collect the step maps of ``steps``."""
        self.maps = [step.get_map() for step in steps]

    def map(self, pos: int, assoc: int = 1) -> int:
        """Map ``pos`` through every step, ``assoc`` picking the side on insertions."""
        for step_map in self.maps:
            pos = step_map.map(pos, assoc)
        return pos


class Selection:
    """Base class for selections.

    Parameters
    ----------
    resolved_anchor : ResolvedPos
        The side of the selection that stays put when it is extended
    resolved_head : ResolvedPos
        The side of the selection that moves when it is extended

    """

    def __init__(self, resolved_anchor: ResolvedPos, resolved_head: ResolvedPos):
        """Initialize the selection from its two resolved ends."""
        self.resolved_anchor = resolved_anchor
        self.resolved_head = resolved_head

    @property
    def anchor(self) -> int:
        """Anchor position."""
        return self.resolved_anchor.pos

    @property
    def head(self) -> int:
        """Head position."""
        return self.resolved_head.pos

    @property
    def resolved_from(self) -> ResolvedPos:
        """The lower of the two resolved ends."""
        return self.resolved_anchor if self.anchor <= self.head else self.resolved_head

    @property
    def resolved_to(self) -> ResolvedPos:
        """The upper of the two resolved ends."""
        return self.resolved_head if self.anchor <= self.head else self.resolved_anchor

    @property
    def from_(self) -> int:
        """Lower bound of the selection."""
        return self.resolved_from.pos

    @property
    def to(self) -> int:
        """Upper bound of the selection."""
        return self.resolved_to.pos

    @property
    def empty(self) -> bool:
        """True when the selection is a collapsed cursor."""
        return self.anchor == self.head

    @property
    def doc(self) -> Node:
        """The document this selection points into."""
        return self.resolved_anchor.node(0)

    def map(self, doc: Node, mapping: Any) -> Selection:
        """Map the selection through ``mapping`` into ``doc``."""
        raise NotImplementedError

    def eq(self, other: Any) -> bool:
        """Check whether ``other`` is an equivalent selection."""
        return type(other) is type(self) and other.anchor == self.anchor and other.head == self.head

    def __repr__(self) -> str:
        """Return a short description of the selection."""
        return f"{type(self).__name__}(anchor={self.anchor}, head={self.head})"

    @staticmethod
    def find_from(resolved: ResolvedPos, direction: SearchDirection, text_only: bool = False) -> Optional[Selection]:
        """Find a valid selection starting at ``resolved`` and searching in ``direction``.

        Parameters
        ----------
        resolved : ResolvedPos
            Position to start searching from
        direction : {-1, 1}
            Search backwards (-1) or forwards (1)
        text_only : bool, default False
            Only accept text selections; selectable atoms are skipped

        Returns
        -------
        Selection or None
            The first selection found, or None when the document has no
            suitable place in that direction

        """
        if resolved.parent.inline_content:
            return TextSelection(resolved)
        doc = resolved.node(0)
        found = _find_selection_in(doc, resolved.parent, resolved.pos, resolved.index(), direction, text_only)
        if found is not None:
            return found
        for depth in range(resolved.depth - 1, -1, -1):
            if direction < 0:
                found = _find_selection_in(
                    doc, resolved.node(depth), resolved.before(depth + 1), resolved.index(depth), direction, text_only
                )
            else:
                found = _find_selection_in(
                    doc,
                    resolved.node(depth),
                    resolved.after(depth + 1),
                    resolved.index(depth) + 1,
                    direction,
                    text_only,
                )
            if found is not None:
                return found
        return None

    @staticmethod
    def near(resolved: ResolvedPos, bias: SearchDirection = 1) -> Selection:
        """Find a selection near ``resolved``, preferring the ``bias`` direction.

        Falls back to a cursor at ``resolved`` itself when the document has no
        valid selection point at all.
        """
        found = Selection.find_from(resolved, bias) or Selection.find_from(resolved, -bias)
        if found is None:
            logger.debug("No valid selection near position %d, keeping a bare cursor", resolved.pos)
            return TextSelection(resolved)
        return found

    @staticmethod
    def at_start(doc: Node) -> Selection:
        """Return the first valid selection in ``doc``."""
        return Selection.near(doc.resolve(0), 1)

    @staticmethod
    def at_end(doc: Node) -> Selection:
        """Return the last valid selection in ``doc``."""
        return Selection.near(doc.resolve(doc.content.size), -1)


class TextSelection(Selection):
    """A range selection between two positions, or a cursor when collapsed."""

    def __init__(self, resolved_anchor: ResolvedPos, resolved_head: Optional[ResolvedPos] = None):
        """Initialize the selection; a missing head collapses it onto the anchor."""
        super().__init__(resolved_anchor, resolved_head if resolved_head is not None else resolved_anchor)

    @property
    def cursor(self) -> Optional[ResolvedPos]:
        """The resolved cursor position, or None for a non-empty range."""
        return self.resolved_head if self.empty else None

    def map(self, doc: Node, mapping: Any) -> Selection:
        """Map the selection, falling back to a nearby selection outside inline content."""
        resolved_head = doc.resolve(mapping.map(self.head))
        if not resolved_head.parent.inline_content:
            return Selection.near(resolved_head)
        resolved_anchor = doc.resolve(mapping.map(self.anchor))
        if not resolved_anchor.parent.inline_content:
            resolved_anchor = resolved_head
        return TextSelection(resolved_anchor, resolved_head)

    @classmethod
    def create(cls, doc: Node, anchor: int, head: Optional[int] = None) -> TextSelection:
        """Create a text selection from plain positions in ``doc``."""
        resolved_anchor = resolve(doc, anchor)
        return cls(resolved_anchor, resolved_anchor if head is None else resolve(doc, head))


class NodeSelection(Selection):
    """A selection of exactly one node.

    Parameters
    ----------
    resolved_pos : ResolvedPos
        Position right before the selected node

    """

    def __init__(self, resolved_pos: ResolvedPos):
        """Select the node right after ``resolved_pos``."""
        node = resolved_pos.node_after
        if node is None:
            raise SelectionError(f"No node after position {resolved_pos.pos} to select")
        resolved_end = resolved_pos.node(0).resolve(resolved_pos.pos + node.node_size)
        super().__init__(resolved_pos, resolved_end)
        self.node = node

    def map(self, doc: Node, mapping: Any) -> Selection:
        """Map the selection, degrading to a nearby selection when the node is gone."""
        start = mapping.map(self.anchor, 1)
        end = mapping.map(self.head, -1)
        resolved = doc.resolve(start)
        node = resolved.node_after
        if node is None or start + node.node_size != end:
            return Selection.near(resolved)
        return NodeSelection(resolved)

    def eq(self, other: Any) -> bool:
        """Check whether ``other`` selects the same node position."""
        return isinstance(other, NodeSelection) and other.anchor == self.anchor

    @classmethod
    def create(cls, doc: Node, pos: int) -> NodeSelection:
        """Create a node selection for the node starting at ``pos``."""
        return cls(resolve(doc, pos))

    @staticmethod
    def is_selectable(node: Node) -> bool:
        """Check whether ``node`` can be the target of a node selection."""
        return not node.is_text and node.type.spec.get("selectable", True) is not False


def _find_selection_in(
    doc: Node, node: Node, pos: int, index: int, direction: SearchDirection, text_only: bool
) -> Optional[Selection]:
    if node.inline_content:
        return TextSelection.create(doc, pos)
    i = index if direction > 0 else index - 1
    while 0 <= i < node.child_count:
        child = node.child(i)
        if not child.is_atom:
            inner = _find_selection_in(
                doc, child, pos + direction, child.child_count if direction < 0 else 0, direction, text_only
            )
            if inner is not None:
                return inner
        elif not text_only and NodeSelection.is_selectable(child):
            return NodeSelection.create(doc, pos - (child.node_size if direction < 0 else 0))
        pos += child.node_size * direction
        i += direction
    return None


class Transaction(Transform):
    """A transform that keeps a selection in step with the document.

    Parameters
    ----------
    doc : Node
        Starting document
    selection : Selection, optional
        Starting selection; defaults to the first valid selection in ``doc``

    Attributes
    ----------
    meta : dict
        Free-form metadata callers may attach to the transaction

    """

    def __init__(self, doc: Node, selection: Optional[Selection] = None):
        """Initialize the transaction."""
        super().__init__(doc)
        if selection is None:
            selection = Selection.at_start(doc)
        elif selection.doc is not doc:
            raise SelectionError("Selection passed to a transaction must point at its document")
        self._selection = selection
        self._selection_for = 0
        self._selection_set = False
        self.meta: dict[str, Any] = {}

    @property
    def selection(self) -> Selection:
        """The current selection, mapped through every step added so far."""
        if self._selection_for < len(self.steps):
            self._selection = self._selection.map(self.doc, StepMaps(self.steps[self._selection_for :]))
            self._selection_for = len(self.steps)
        return self._selection

    @property
    def selection_set(self) -> bool:
        """True once ``set_selection`` has been called on this transaction."""
        return self._selection_set

    def set_selection(self, selection: Selection) -> Transaction:
        """Replace the selection.

        Raises
        ------
        SelectionError
            If ``selection`` points into a different document than ``self.doc``

        """
        if selection.doc is not self.doc:
            raise SelectionError("Selection passed to set_selection must point at the current document")
        self._selection = selection
        self._selection_for = len(self.steps)
        self._selection_set = True
        return self

    def clone(self) -> Transaction:
        """Return a copy that can receive further steps without affecting this one."""
        duplicate = copy.copy(self)
        duplicate.steps = list(self.steps)
        duplicate.docs = list(self.docs)
        duplicate.mapping = copy.deepcopy(self.mapping)
        duplicate.meta = dict(self.meta)
        return duplicate


def create_transaction(doc: Node, selection: Optional[Selection] = None) -> Transaction:
    """Start a transaction on ``doc``."""
    return Transaction(doc, selection)


__all__ = [
    "NodeSelection",
    "Selection",
    "StepMaps",
    "TextSelection",
    "Transaction",
    "create_transaction",
]
