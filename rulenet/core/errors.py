"""
Network Errors
==============

Caller-input errors raised by the network manager and the traversal engine.

All errors are raised synchronously at the point of detection, before any
mutation for that call, so no partial state is ever left behind. None of them
are transient: the caller must correct the input and re-issue the call.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    """Kinds of failures a network operation can report."""

    EMPTY_ID = "empty_id"
    """create_node called with an empty or missing id."""

    DUPLICATE_ID = "duplicate_id"
    """create_node called with an id already present."""

    NODE_NOT_FOUND = "node_not_found"
    """Recalculation or traversal-start lookup by id failed."""


class NetworkError(Exception):
    """Base class for rulenet errors; carries an error kind and the offending id."""

    kind: ErrorKind

    def __init__(self, message: str, *, node_id: Optional[str] = None):
        super().__init__(message)
        self.node_id = node_id

    def to_dict(self) -> dict[str, Optional[str]]:
        """Convert the error to a JSON-serializable dictionary."""
        return {
            "kind": self.kind.value,
            "node_id": self.node_id,
            "message": str(self),
        }


class EmptyIdError(NetworkError, ValueError):
    kind = ErrorKind.EMPTY_ID

    def __init__(self, message: str = "Id is required"):
        super().__init__(message)


class DuplicateIdError(NetworkError, ValueError):
    kind = ErrorKind.DUPLICATE_ID

    def __init__(self, node_id: str):
        super().__init__(f"Duplicate node id: {node_id}", node_id=node_id)


class NodeNotFoundError(NetworkError, LookupError):
    kind = ErrorKind.NODE_NOT_FOUND

    def __init__(self, node_id: str, message: Optional[str] = None):
        super().__init__(message or f"No such node: {node_id}", node_id=node_id)
