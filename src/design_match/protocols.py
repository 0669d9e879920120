"""MatchingStrategy Protocol: the extension point for matching passes.

A strategy only proposes pairings; it never attaches a confidence.  The
resolver scores every proposal uniformly.  Any object with a ``name`` and
a conformant ``find_matches`` satisfies the protocol, no inheritance
required.

Example::

    from design_match.protocols import MatchingStrategy

    class SameKind:
        name = "same-kind"

        def find_matches(self, tree1, tree2):
            ...

    assert isinstance(SameKind(), MatchingStrategy)
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from design_match.tree.indexer import IndexedTree
    from design_match.tree.nodes import NodeId


@runtime_checkable
class MatchingStrategy(Protocol):
    """Structural protocol for matching strategies.

    ``find_matches`` must:
    - treat both trees as read-only,
    - return a mapping from ``tree1`` ids to ``tree2`` ids,
    - be deterministic for identical inputs,
    - keep no state between calls, so strategies may run concurrently.
    """

    name: str

    def find_matches(
        self, tree1: IndexedTree, tree2: IndexedTree
    ) -> dict[NodeId, NodeId]: ...
