"""Multi-factor confidence for a proposed (design, markup) pair.

Formula (default weights)::

    0.30 * content + 0.25 * semantic + 0.20 * structural
        + 0.15 * positional + 0.10 * style

- content:    edit similarity of the normalized texts; 0 when either
              side has no text.
- semantic:   1 when the roles agree, else ``semantic_mismatch`` (0.5).
- structural: child-count closeness; 1 for two leaves, 0 when exactly
              one side is a leaf.
- positional: 1 for equal levels, else ``positional_mismatch`` (0.7).
- style:      constant ``style_placeholder`` (0.5) until style diffing
              exists.
"""

from __future__ import annotations

from dataclasses import dataclass

from design_match.algorithm.config import ConfidenceWeights
from design_match.similarity.text import edit_similarity, normalize
from design_match.tree.indexer import IndexedTree
from design_match.tree.nodes import NodeId, TreeNode

__all__ = ["ConfidenceBreakdown", "ConfidenceScorer"]


@dataclass(frozen=True, slots=True)
class ConfidenceBreakdown:
    """The five factor values and their weighted total, all in [0, 1]."""

    content: float
    semantic: float
    structural: float
    positional: float
    style: float
    total: float


class ConfidenceScorer:
    """Scores proposed pairs with a fixed set of ``ConfidenceWeights``."""

    def __init__(self, weights: ConfidenceWeights | None = None) -> None:
        self._weights = weights if weights is not None else ConfidenceWeights()

    def score(
        self,
        tree1: IndexedTree,
        id1: NodeId,
        tree2: IndexedTree,
        id2: NodeId,
    ) -> ConfidenceBreakdown:
        """Score the pair ``(id1, id2)``.

        Args:
            tree1: Design tree holding ``id1``.
            id1:   Design node id.
            tree2: Markup tree holding ``id2``.
            id2:   Markup node id.

        Returns:
            The factor breakdown; ``total`` is the confidence.
        """
        w = self._weights
        node1 = tree1.get(id1)
        node2 = tree2.get(id2)

        content = self.content_similarity(node1, node2)
        semantic = (
            1.0 if tree1.role_of(id1) == tree2.role_of(id2) else w.semantic_mismatch
        )
        structural = self.structural_similarity(node1, node2)
        positional = 1.0 if node1.level == node2.level else w.positional_mismatch
        style = w.style_placeholder

        total = (
            w.content * content
            + w.semantic * semantic
            + w.structural * structural
            + w.positional * positional
            + w.style * style
        )
        return ConfidenceBreakdown(
            content=content,
            semantic=semantic,
            structural=structural,
            positional=positional,
            style=style,
            total=min(1.0, max(0.0, total)),
        )

    @staticmethod
    def content_similarity(node1: TreeNode, node2: TreeNode) -> float:
        text1 = normalize(node1.text)
        text2 = normalize(node2.text)
        if not text1 or not text2:
            return 0.0
        return edit_similarity(text1, text2)

    @staticmethod
    def structural_similarity(node1: TreeNode, node2: TreeNode) -> float:
        children1 = len(node1.children)
        children2 = len(node2.children)
        if children1 == 0 and children2 == 0:
            return 1.0
        if children1 == 0 or children2 == 0:
            return 0.0
        return 1.0 - abs(children1 - children2) / max(children1, children2)
