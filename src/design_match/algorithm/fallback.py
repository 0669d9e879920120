"""FallbackVectorMatcher: last-resort pairing of nodes no strategy claimed.

Score for a (design, markup) pair::

    w * cosine(feature_vector(d), feature_vector(m)) + (1 - w) * name_overlap

with ``w = fallback_cosine_weight`` (0.7).  Name overlap compares the
design node's name with the markup node's class list.  A pair qualifies
only when its score exceeds ``fallback_threshold`` (0.6).

Every fallback match is recorded with the fixed ``fallback_confidence``
(0.75), whatever its score.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

import numpy as np

from design_match.algorithm.config import AssignmentMode, MatcherConfig
from design_match.algorithm.matcher import hungarian_match
from design_match.similarity.text import token_overlap
from design_match.similarity.vectors import feature_vector
from design_match.tree.indexer import IndexedTree
from design_match.tree.nodes import NodeId, NodeVariant, TreeNode

__all__ = ["FallbackVectorMatcher"]

logger = logging.getLogger(__name__)


def _labels(node: TreeNode) -> Sequence[str]:
    if node.variant == NodeVariant.MARKUP:
        return node.classes
    return (node.name,) if node.name else ()


class FallbackVectorMatcher:
    """Feature-vector matcher for the nodes left over by the strategies.

    Example::

        matcher = FallbackVectorMatcher(MatcherConfig())
        pairs = matcher.match(design_tree, ["3:1"], markup_tree, ["div-card-4"])
        # {"3:1": ("div-card-4", 0.83)}
    """

    def __init__(self, config: MatcherConfig | None = None) -> None:
        self._config = config if config is not None else MatcherConfig()

    def score_matrix(
        self,
        tree1: IndexedTree,
        ids1: Sequence[NodeId],
        tree2: IndexedTree,
        ids2: Sequence[NodeId],
    ) -> np.ndarray:
        """Return the ``(len(ids1), len(ids2))`` matrix of fallback scores."""
        if not ids1 or not ids2:
            return np.zeros((len(ids1), len(ids2)), dtype=float)

        nodes1 = [tree1.get(node_id) for node_id in ids1]
        nodes2 = [tree2.get(node_id) for node_id in ids2]

        vectors1 = np.stack([feature_vector(node) for node in nodes1])
        vectors2 = np.stack([feature_vector(node) for node in nodes2])
        norms1 = np.linalg.norm(vectors1, axis=1, keepdims=True)
        norms2 = np.linalg.norm(vectors2, axis=1, keepdims=True)
        # zero-magnitude rows stay zero, so their cosine is 0
        unit1 = np.divide(
            vectors1, norms1, out=np.zeros_like(vectors1), where=norms1 > 0
        )
        unit2 = np.divide(
            vectors2, norms2, out=np.zeros_like(vectors2), where=norms2 > 0
        )
        cosine = np.clip(unit1 @ unit2.T, 0.0, 1.0)

        names = np.array(
            [
                [token_overlap(_labels(n1), _labels(n2)) for n2 in nodes2]
                for n1 in nodes1
            ],
            dtype=float,
        )

        weight = self._config.fallback_cosine_weight
        return weight * cosine + (1.0 - weight) * names

    def match(
        self,
        tree1: IndexedTree,
        ids1: Sequence[NodeId],
        tree2: IndexedTree,
        ids2: Sequence[NodeId],
    ) -> dict[NodeId, tuple[NodeId, float]]:
        """Pair unmatched design ids with unmatched markup ids.

        Args:
            tree1: Design tree.
            ids1:  Unmatched design ids, in traversal order.
            tree2: Markup tree.
            ids2:  Unmatched markup ids, in traversal order.

        Returns:
            design id -> (markup id, fallback score).  Each markup id is
            used at most once.
        """
        scores = self.score_matrix(tree1, ids1, tree2, ids2)
        if scores.size == 0:
            return {}

        threshold = self._config.fallback_threshold
        if self._config.assignment_mode == AssignmentMode.OPTIMAL:
            cost = np.where(scores > threshold, -scores, np.inf)
            rows, cols = hungarian_match(cost)
            pairs = {
                ids1[r]: (ids2[c], float(scores[r, c]))
                for r, c in zip(rows.tolist(), cols.tolist(), strict=True)
            }
        else:
            pairs = self._greedy(scores, ids1, ids2, threshold)

        logger.debug(
            "Fallback paired %d of %d design nodes (%s)",
            len(pairs),
            len(ids1),
            self._config.assignment_mode,
        )
        return pairs

    @staticmethod
    def _greedy(
        scores: np.ndarray,
        ids1: Sequence[NodeId],
        ids2: Sequence[NodeId],
        threshold: float,
    ) -> dict[NodeId, tuple[NodeId, float]]:
        pairs: dict[NodeId, tuple[NodeId, float]] = {}
        available = np.ones(len(ids2), dtype=bool)
        for i, design_id in enumerate(ids1):
            row = np.where(available & (scores[i] > threshold), scores[i], -np.inf)
            best = int(np.argmax(row))
            if np.isfinite(row[best]):
                pairs[design_id] = (ids2[best], float(scores[i, best]))
                available[best] = False
        return pairs
