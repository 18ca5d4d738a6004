#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the structedit library.

Most transforms never raise: an edit that does not apply hands the caller's
transaction back unchanged. The classes here cover the remaining cases, which
indicate caller misuse rather than an inapplicable edit.

Exception Hierarchy
-------------------
- StructEditError (base exception)

  - PositionError (position outside the document it is resolved against)

  - SelectionError (selection built for a different document version)

  - InvalidContentError (schema rejected a constructed node)

"""

from __future__ import annotations

from typing import Any


class StructEditError(Exception):
    """Base exception class for all structedit-specific errors.

    Parameters
    ----------
    message : str
        Human-readable description of the error
    original_error : Exception, optional
        The original exception that caused this error, if applicable

    Attributes
    ----------
    message : str
        The error message
    original_error : Exception or None
        The wrapped original exception, if any

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the error with a message and optional original exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class PositionError(StructEditError, IndexError):
    """Exception raised when a position cannot be resolved in a document.

    This usually means a position taken from one document version was used
    against another one.

    Parameters
    ----------
    position : any
        The offending position
    document_size : int
        Size of the document content the position was resolved against
    message : str, optional
        Custom error message. If not provided, one is generated

    """

    def __init__(self, position: Any, document_size: int, message: str | None = None):
        """Initialize the position error."""
        if message is None:
            message = f"Position {position!r} is outside of the document range 0..{document_size}"
        super().__init__(message)
        self.position = position
        self.document_size = document_size


class SelectionError(StructEditError):
    """Exception raised when a selection does not belong to the transaction's document."""


class InvalidContentError(StructEditError):
    """Exception raised when the schema rejects a node built by this library.

    Parameters
    ----------
    node_type : str
        Name of the node type that could not be built
    message : str, optional
        Custom error message
    original_error : Exception, optional
        The schema error that caused this one

    """

    def __init__(self, node_type: str, message: str | None = None, original_error: Exception | None = None):
        """Initialize the invalid content error."""
        if message is None:
            message = f"Content is not valid for node type '{node_type}'"
            if original_error is not None:
                message = f"{message}: {original_error}"
        super().__init__(message, original_error=original_error)
        self.node_type = node_type


__all__ = [
    "StructEditError",
    "PositionError",
    "SelectionError",
    "InvalidContentError",
]
