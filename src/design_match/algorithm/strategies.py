"""The five independent matching strategies.

Each strategy is a stateless object whose ``find_matches`` proposes a
partial mapping from tree-1 ids (design) to tree-2 ids (markup).  No
strategy proposes the same tree-2 node twice, and ties are always broken
by traversal (pre-order) order, so every strategy is deterministic.

- ContentMatching:      identical normalized text, via the content index.
- StructuralMatching:   equal child count and equal level (exhaustive scan).
- SemanticMatching:     equal semantic role.
- PositionalMatching:   equal level, paired by index within the level.
- HierarchicalMatching: lock-step walk from the roots by child index.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import ClassVar

from design_match.algorithm.config import StrategyName
from design_match.protocols import MatchingStrategy
from design_match.tree.indexer import IndexedTree
from design_match.tree.nodes import NodeId, TreeNode

__all__ = [
    "ContentMatching",
    "HierarchicalMatching",
    "PositionalMatching",
    "SemanticMatching",
    "StructuralMatching",
    "build_strategies",
]


def _first_unclaimed(
    node: TreeNode,
    candidates: Iterable[TreeNode],
    claimed: set[NodeId],
    predicate: Callable[[TreeNode, TreeNode], bool],
) -> NodeId | None:
    for candidate in candidates:
        if candidate.id not in claimed and predicate(node, candidate):
            return candidate.id
    return None


class ContentMatching:
    """Pairs nodes whose normalized text is identical.

    When several nodes share a text, the i-th tree-1 node with that text
    is paired with the i-th tree-2 node with that text.
    """

    name: ClassVar[StrategyName] = StrategyName.CONTENT

    def find_matches(
        self, tree1: IndexedTree, tree2: IndexedTree
    ) -> dict[NodeId, NodeId]:
        matches: dict[NodeId, NodeId] = {}
        for content, ids1 in tree1.content_index.items():
            ids2 = tree2.content_index.get(content)
            if ids2:
                matches.update(zip(ids1, ids2, strict=False))
        return matches


class StructuralMatching:
    """Pairs nodes with the same child count at the same level.

    Scans every tree-2 node for every tree-1 node (O(n*m)); the first
    qualifying tree-2 node in traversal order not yet proposed wins.
    """

    name: ClassVar[StrategyName] = StrategyName.STRUCTURAL

    def find_matches(
        self, tree1: IndexedTree, tree2: IndexedTree
    ) -> dict[NodeId, NodeId]:
        matches: dict[NodeId, NodeId] = {}
        claimed: set[NodeId] = set()
        for node in tree1:
            match = _first_unclaimed(node, tree2, claimed, self.structures_match)
            if match is not None:
                matches[node.id] = match
                claimed.add(match)
        return matches

    @staticmethod
    def structures_match(node1: TreeNode, node2: TreeNode) -> bool:
        return len(node1.children) == len(node2.children) and node1.level == node2.level


class SemanticMatching:
    """Pairs nodes whose semantic roles (declared or inferred) agree.

    Tie-break as in ``StructuralMatching``.
    """

    name: ClassVar[StrategyName] = StrategyName.SEMANTIC

    def find_matches(
        self, tree1: IndexedTree, tree2: IndexedTree
    ) -> dict[NodeId, NodeId]:
        matches: dict[NodeId, NodeId] = {}
        claimed: set[NodeId] = set()
        for node in tree1:
            role = tree1.role_of(node.id)
            match = _first_unclaimed(
                node,
                tree2,
                claimed,
                lambda _, candidate: tree2.role_of(candidate.id) == role,
            )
            if match is not None:
                matches[node.id] = match
                claimed.add(match)
        return matches


class PositionalMatching:
    """Pairs nodes at the same level by their index within that level."""

    name: ClassVar[StrategyName] = StrategyName.POSITIONAL

    def find_matches(
        self, tree1: IndexedTree, tree2: IndexedTree
    ) -> dict[NodeId, NodeId]:
        levels1 = self._by_level(tree1)
        levels2 = self._by_level(tree2)

        matches: dict[NodeId, NodeId] = {}
        for level, ids1 in levels1.items():
            ids2 = levels2.get(level)
            if ids2:
                matches.update(zip(ids1, ids2, strict=False))
        return matches

    @staticmethod
    def _by_level(tree: IndexedTree) -> dict[int, list[NodeId]]:
        levels: dict[int, list[NodeId]] = {}
        for node in tree:
            levels.setdefault(node.level, []).append(node.id)
        return levels


class HierarchicalMatching:
    """Walks both trees in lock-step from their roots.

    The i-th root of tree 1 pairs with the i-th root of tree 2; below a
    paired node, the child at index i pairs with the counterpart's child
    at index i while both sides still have one.  An explicit stack keeps
    the walk iterative, and already-paired nodes are never revisited.
    """

    name: ClassVar[StrategyName] = StrategyName.HIERARCHICAL

    def find_matches(
        self, tree1: IndexedTree, tree2: IndexedTree
    ) -> dict[NodeId, NodeId]:
        matches: dict[NodeId, NodeId] = {}
        stack: list[tuple[NodeId, NodeId]] = list(
            zip(tree1.roots, tree2.roots, strict=False)
        )
        stack.reverse()

        while stack:
            id1, id2 = stack.pop()
            if id1 in matches:
                continue
            matches[id1] = id2

            children1 = tree1.get(id1).children
            children2 = tree2.get(id2).children
            pairs = list(zip(children1, children2, strict=False))
            stack.extend(reversed(pairs))

        return matches


_REGISTRY: dict[StrategyName, type[MatchingStrategy]] = {
    StrategyName.CONTENT: ContentMatching,
    StrategyName.STRUCTURAL: StructuralMatching,
    StrategyName.SEMANTIC: SemanticMatching,
    StrategyName.POSITIONAL: PositionalMatching,
    StrategyName.HIERARCHICAL: HierarchicalMatching,
}


def build_strategies(order: Iterable[StrategyName]) -> list[MatchingStrategy]:
    """Instantiate the named strategies, preserving ``order``."""
    return [_REGISTRY[StrategyName(name)]() for name in order]
