#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/structedit/options.py
"""Option classes for the configurable transforms.

Options are frozen dataclasses, so a single instance can be shared between
calls and variations are derived with ``create_updated``.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, replace
from typing import Any

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from structedit.constants import (
    DEFAULT_MERGE_ATTRS,
    DEFAULT_MERGE_MARKS,
    DEFAULT_SELECT_INSERTED,
    DEFAULT_TRY_TO_REPLACE,
)


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities."""

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)


@dataclass(frozen=True)
class InsertOptions(CloneFrozenMixin):
    """Options for ``safe_insert``.

    Parameters
    ----------
    try_to_replace : bool, default=False
        When the current selection is a node selection, replace the selected
        node with the content before trying any other placement.
    select_inserted : bool, default=True
        Move the selection into the inserted content. When False the existing
        selection is only mapped through the insertion.

    """

    try_to_replace: bool = field(
        default=DEFAULT_TRY_TO_REPLACE,
        metadata={"help": "Replace a selected node instead of inserting next to it"},
    )
    select_inserted: bool = field(
        default=DEFAULT_SELECT_INSERTED,
        metadata={"help": "Place the cursor inside the inserted content"},
    )


@dataclass(frozen=True)
class MarkupOptions(CloneFrozenMixin):
    """Options for ``restyle_ancestor_of_kind``.

    Parameters
    ----------
    merge_attrs : bool, default=True
        Merge the given attributes over the node's current ones. When False
        the given mapping replaces the whole attribute set and missing keys
        fall back to the schema defaults.
    merge_marks : bool, default=True
        Add the given marks to the node's current marks. When False they
        replace the current marks.

    """

    merge_attrs: bool = field(
        default=DEFAULT_MERGE_ATTRS,
        metadata={"help": "Merge new attributes over existing ones instead of replacing them"},
    )
    merge_marks: bool = field(
        default=DEFAULT_MERGE_MARKS,
        metadata={"help": "Add new marks to existing ones instead of replacing them"},
    )


__all__ = [
    "CloneFrozenMixin",
    "InsertOptions",
    "MarkupOptions",
]
