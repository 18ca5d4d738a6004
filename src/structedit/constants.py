#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for the structedit library.

This module centralizes the default values used by the option classes and the
transforms, so the behaviour of a bare call is discoverable in one place.

Constants are organized by category:
1. Type Definitions - Literal types and type aliases
2. Selection Placement - Search directions used when moving the cursor
3. Insertion Behavior - Defaults for ``safe_insert``
4. Markup Behavior - Defaults for ``restyle_ancestor_of_kind``
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

SearchDirection = Literal[-1, 1]

# =============================================================================
# Selection Placement
# =============================================================================

# Direction used to look for a valid cursor after an edit
DEFAULT_SEARCH_DIRECTION: SearchDirection = 1

# Node type name treated as a paragraph by ``is_empty_paragraph``
PARAGRAPH_TYPE_NAME = "paragraph"

# =============================================================================
# Insertion Behavior
# =============================================================================

DEFAULT_TRY_TO_REPLACE = False
DEFAULT_SELECT_INSERTED = True

# =============================================================================
# Markup Behavior
# =============================================================================

DEFAULT_MERGE_ATTRS = True
DEFAULT_MERGE_MARKS = True
