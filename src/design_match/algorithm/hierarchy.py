"""HierarchyAnalyzer: whole-tree structural comparison of two indexed trees.

The comparison record is not part of the match contract; it derives the
per-strategy weight multipliers and is surfaced on ``MatchResult`` for
reporting.

Combined confidence::

    0.4 * structural + 0.2 * depth + 0.2 * type + 0.2 * size

Node similarity (used by the structural sub-score) averages three equally
weighted factors: same kind, child-count closeness and depth closeness,
where depth is the path length (``level + 1``).
"""

from __future__ import annotations

import math
from collections import Counter
from dataclasses import dataclass, field, replace
from enum import StrEnum

import numpy as np

from design_match.algorithm.config import StrategyName
from design_match.tree.indexer import IndexedTree, TreeStatistics
from design_match.tree.nodes import NodeId, TreeNode

__all__ = [
    "HierarchyAnalyzer",
    "HierarchyComparison",
    "HierarchyProfile",
    "Recommendation",
    "RecommendationLevel",
    "RepeatingPattern",
]

STRUCTURAL_THRESHOLD = 0.75
WEIGHT_BOOST = 1.5


class RecommendationLevel(StrEnum):
    WARNING = "warning"
    INFO = "info"
    SUCCESS = "success"


@dataclass(frozen=True, slots=True)
class Recommendation:
    level: RecommendationLevel
    message: str
    impact: str


@dataclass(frozen=True, slots=True)
class RepeatingPattern:
    """A parent whose children (three or more) share one signature."""

    parent: NodeId
    children: tuple[NodeId, ...]
    signature: str

    @property
    def count(self) -> int:
        return len(self.children)


@dataclass(frozen=True, slots=True)
class HierarchyProfile:
    """Single-tree profile: index statistics plus derived measures."""

    statistics: TreeStatistics
    complexity_score: float
    patterns: tuple[RepeatingPattern, ...] = ()


@dataclass(frozen=True, slots=True)
class HierarchyComparison:
    """Four independent [0, 1] sub-scores and their weighted combination.

    Attributes:
        size_similarity:       Node-count closeness.
        depth_similarity:      Maximum-depth closeness.
        type_similarity:       Mean per-kind count closeness.
        structural_similarity: Share of tree-1 nodes with a close tree-2 node.
        confidence:            Weighted combination of the four.
        recommendations:       Human-readable observations.
    """

    size_similarity: float
    depth_similarity: float
    type_similarity: float
    structural_similarity: float
    confidence: float
    recommendations: tuple[Recommendation, ...] = field(default=(), compare=False)


def _closeness(a: float, b: float) -> float:
    """``1 - |a - b| / max(a, b)``; 1.0 when both are zero."""
    largest = max(a, b)
    if largest == 0:
        return 1.0
    return 1.0 - abs(a - b) / largest


class HierarchyAnalyzer:
    """Profiles single trees and compares pairs of trees.

    Stateless apart from the node-similarity threshold, so one instance
    can be shared freely.

    Example::

        analyzer = HierarchyAnalyzer()
        comparison = analyzer.compare(design_tree, markup_tree)
        comparison.confidence
    """

    def __init__(self, similarity_threshold: float = STRUCTURAL_THRESHOLD) -> None:
        self._threshold = similarity_threshold

    # ------------------------------------------------------------------
    # Single tree
    # ------------------------------------------------------------------

    def profile(self, tree: IndexedTree) -> HierarchyProfile:
        """Return statistics, complexity score and repeating patterns."""
        stats = tree.statistics
        if stats.node_count == 0:
            return HierarchyProfile(statistics=stats, complexity_score=0.0)

        # path length of the deepest node is max_depth + 1
        depth_factor = math.log2(stats.max_depth + 2)
        size_factor = math.log10(stats.node_count + 1)
        branching_factor = stats.branching_factor / 10
        diversity_factor = len(stats.kind_counts) / 20
        complexity = (
            depth_factor + size_factor + branching_factor + diversity_factor
        ) / 4

        return HierarchyProfile(
            statistics=stats,
            complexity_score=complexity,
            patterns=tuple(self.find_patterns(tree)),
        )

    def find_patterns(self, tree: IndexedTree) -> list[RepeatingPattern]:
        """Find parents with three or more children of identical signature."""
        patterns: list[RepeatingPattern] = []
        for node in tree:
            if len(node.children) < 3:
                continue
            signatures = {self._signature(child) for child in tree.children_of(node.id)}
            if len(signatures) == 1:
                patterns.append(
                    RepeatingPattern(
                        parent=node.id,
                        children=node.children,
                        signature=signatures.pop(),
                    )
                )
        return patterns

    @staticmethod
    def _signature(node: TreeNode) -> str:
        return f"{node.kind.lower()}:{len(node.children)}:{bool(node.text)}"

    # ------------------------------------------------------------------
    # Tree pair
    # ------------------------------------------------------------------

    def compare(self, tree1: IndexedTree, tree2: IndexedTree) -> HierarchyComparison:
        """Compare two indexed trees.

        Args:
            tree1: Reference tree (the design tree in a resolver run).
            tree2: Candidate tree.

        Returns:
            The comparison record; all scores lie in [0, 1].
        """
        stats1 = tree1.statistics
        stats2 = tree2.statistics

        size = _closeness(stats1.node_count, stats2.node_count)
        depth = _closeness(self._tree_depth(tree1), self._tree_depth(tree2))
        types = self._type_similarity(stats1.kind_counts, stats2.kind_counts)
        structural = self.structural_similarity(tree1, tree2)
        confidence = 0.4 * structural + 0.2 * depth + 0.2 * types + 0.2 * size

        comparison = HierarchyComparison(
            size_similarity=size,
            depth_similarity=depth,
            type_similarity=types,
            structural_similarity=structural,
            confidence=confidence,
        )
        return replace(
            comparison, recommendations=tuple(self._recommendations(comparison))
        )

    def node_similarity(self, node1: TreeNode, node2: TreeNode) -> float:
        """Mean of kind equality, child-count closeness and depth closeness."""
        same_kind = float(node1.kind.lower() == node2.kind.lower())
        children = _closeness(len(node1.children), len(node2.children))
        depth = _closeness(node1.level + 1, node2.level + 1)
        return (same_kind + children + depth) / 3

    def structural_similarity(self, tree1: IndexedTree, tree2: IndexedTree) -> float:
        """Share of ``tree1`` nodes whose closest ``tree2`` node beats the threshold.

        Vectorized over ``tree2``: one numpy pass per ``tree1`` node.
        """
        if tree1.is_empty or tree2.is_empty:
            return 0.0

        kinds2 = np.array([node.kind.lower() for node in tree2], dtype=object)
        children2 = np.array([len(node.children) for node in tree2], dtype=float)
        depths2 = np.array([node.level + 1 for node in tree2], dtype=float)

        matched = 0
        for node in tree1:
            same_kind = (kinds2 == node.kind.lower()).astype(float)
            n_children = float(len(node.children))
            # two leaves are fully close: |0 - 0| / 1 == 0
            largest = np.maximum(np.maximum(children2, n_children), 1.0)
            child_score = 1.0 - np.abs(children2 - n_children) / largest
            depth = float(node.level + 1)
            depth_score = 1.0 - np.abs(depths2 - depth) / np.maximum(depths2, depth)
            scores = (same_kind + child_score + depth_score) / 3
            if bool((scores > self._threshold).any()):
                matched += 1

        return matched / len(tree1)

    # ------------------------------------------------------------------
    # Strategy weights
    # ------------------------------------------------------------------

    def strategy_weights(
        self,
        comparison: HierarchyComparison,
        tree1: IndexedTree,
        tree2: IndexedTree,
    ) -> dict[StrategyName, float]:
        """Derive per-strategy multipliers from a comparison.

        Structural and hierarchical strategies are boosted for structurally
        similar trees, semantic for similar kind distributions, content when
        both trees are text-heavy.
        """
        weights = {
            name: 1.0 for name in StrategyName if name != StrategyName.FALLBACK
        }
        if comparison.structural_similarity > 0.8:
            weights[StrategyName.STRUCTURAL] *= WEIGHT_BOOST
            weights[StrategyName.HIERARCHICAL] *= WEIGHT_BOOST
        if comparison.type_similarity > 0.7:
            weights[StrategyName.SEMANTIC] *= WEIGHT_BOOST
        if self._text_heavy(tree1) and self._text_heavy(tree2):
            weights[StrategyName.CONTENT] *= WEIGHT_BOOST
        return weights

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _tree_depth(tree: IndexedTree) -> int:
        return tree.statistics.max_depth + 1 if not tree.is_empty else 0

    @staticmethod
    def _text_heavy(tree: IndexedTree) -> bool:
        stats = tree.statistics
        return stats.node_count > 0 and stats.text_node_count * 2 >= stats.node_count

    @staticmethod
    def _type_similarity(kinds1: dict[str, int], kinds2: dict[str, int]) -> float:
        counts1: Counter[str] = Counter()
        counts2: Counter[str] = Counter()
        for kind, count in kinds1.items():
            counts1[kind.lower()] += count
        for kind, count in kinds2.items():
            counts2[kind.lower()] += count

        labels = counts1.keys() | counts2.keys()
        if not labels:
            return 1.0
        total = sum(_closeness(counts1[label], counts2[label]) for label in labels)
        return total / len(labels)

    @staticmethod
    def _recommendations(comparison: HierarchyComparison) -> list[Recommendation]:
        recommendations: list[Recommendation] = []
        if comparison.size_similarity < 0.5:
            recommendations.append(
                Recommendation(
                    RecommendationLevel.WARNING,
                    "Trees differ significantly in size",
                    "high",
                )
            )
        if comparison.depth_similarity < 0.6:
            recommendations.append(
                Recommendation(
                    RecommendationLevel.INFO,
                    "Trees differ in nesting depth",
                    "medium",
                )
            )
        if comparison.type_similarity < 0.7:
            recommendations.append(
                Recommendation(
                    RecommendationLevel.INFO,
                    "Trees use different node kinds",
                    "low",
                )
            )
        if comparison.confidence > 0.8:
            recommendations.append(
                Recommendation(
                    RecommendationLevel.SUCCESS,
                    "Trees are structurally very similar",
                    "positive",
                )
            )
        return recommendations
