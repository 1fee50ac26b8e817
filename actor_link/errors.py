"""
Exceptions raised by actor lookups and path reconstruction.

Store failures are not wrapped: ``sqlite3.Error`` reaches the caller as-is.
A search that finds no connection returns ``None`` rather than raising.
"""

from __future__ import annotations


class ActorNotFoundError(LookupError):
    """A display name did not match any actor in the store."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Actor '{name}' not found in database.")
        self.name = name


class PathReconstructionError(RuntimeError):
    """
    Parent bookkeeping from a search is inconsistent.

    Raised when walking a parent map back to its root hits a node with no
    recorded parent, or loops without reaching the root. This is a bug in
    the search, not a missing connection.
    """

    def __init__(self, node: int, direction: str) -> None:
        super().__init__(
            f"Broken {direction} parent chain at actor {node} while rebuilding path"
        )
        self.node = node
        self.direction = direction
