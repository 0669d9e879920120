"""Exception hierarchy for design-match.

Only malformed input trees are errors.  Empty trees, unmatched nodes and
zero-magnitude vectors all degrade to valid results and never raise.
"""

from __future__ import annotations

from typing import Any

__all__ = [
    "CycleError",
    "DesignMatchError",
    "DuplicateNodeError",
    "MalformedTreeError",
    "UnresolvedChildError",
]


class DesignMatchError(Exception):
    """Base exception for every error raised by this package."""

    def __init__(
        self,
        message: str,
        stage: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.stage = stage
        self.details = details or {}

    def __str__(self) -> str:
        base_msg = super().__str__()
        if self.stage:
            return f"[{self.stage}] {base_msg}"
        return base_msg


class MalformedTreeError(DesignMatchError):
    """Raised when the input node set is not a proper tree."""

    def __init__(
        self,
        message: str,
        node_id: Any = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, stage="Indexing", details=details)
        self.node_id = node_id


class CycleError(MalformedTreeError):
    """A node is reachable twice, or not reachable from any root."""


class UnresolvedChildError(MalformedTreeError):
    """A child id does not resolve to a node of the same tree."""

    def __init__(self, message: str, node_id: Any, child_id: Any) -> None:
        super().__init__(message, node_id=node_id, details={"child_id": child_id})
        self.child_id = child_id


class DuplicateNodeError(MalformedTreeError):
    """Two nodes of the same tree share an id."""
