"""ConfidenceResolver: runs the strategies and merges them into one result.

Pipeline for one run:

1. Index both node sets (through the ``ResultCache`` when one is given).
2. Compare the two hierarchies and derive per-strategy weights.
3. Run every configured strategy.  Strategies are independent, so they
   execute on a thread pool; each returns a plain proposal map.
4. Merge single-threaded in the configured priority order: a proposal is
   scored by ``ConfidenceScorer`` and accepted when its confidence reaches
   ``acceptance_threshold``; accepted design and markup ids are claimed.
5. Pass the leftovers to ``FallbackVectorMatcher``; its pairs are recorded
   with the fixed ``fallback_confidence``.
6. Compute statistics once over the final mapping.

Because the merge happens after every strategy finished, completion order
of the pool never influences the result.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Sequence
from concurrent.futures import ThreadPoolExecutor

from design_match.algorithm.config import MatcherConfig, StrategyName
from design_match.algorithm.confidence import ConfidenceScorer
from design_match.algorithm.fallback import FallbackVectorMatcher
from design_match.algorithm.hierarchy import HierarchyAnalyzer
from design_match.algorithm.strategies import build_strategies
from design_match.cache import ResultCache
from design_match.result import MatchCandidate, MatchResult, MatchStatistics
from design_match.tree.indexer import IndexedTree, TreeIndexer
from design_match.tree.nodes import NodeId, TreeNode

__all__ = ["ConfidenceResolver"]

logger = logging.getLogger(__name__)


class ConfidenceResolver:
    """Orchestrator for cross-tree node matching.

    Holds no per-run state: ``resolve`` may be called repeatedly, and from
    several threads, with the same instance.

    Example::

        from design_match.algorithm.resolver import ConfidenceResolver
        from design_match.tree import TreeBuilder

        builder = TreeBuilder()
        resolver = ConfidenceResolver()
        result = resolver.resolve(
            builder.build_design(figma_document),
            builder.build_markup(dom_document),
        )
        result.statistics.match_percentage
    """

    def __init__(
        self,
        config: MatcherConfig | None = None,
        cache: ResultCache | None = None,
    ) -> None:
        """Initialise the resolver.

        Args:
            config: Matcher tunables.  Defaults to ``MatcherConfig()``.
            cache:  Optional caller-owned cache for indexed trees and
                results.  Without one every call recomputes everything.
        """
        self._config = config if config is not None else MatcherConfig()
        self._cache = cache
        self._indexer = TreeIndexer()
        self._analyzer = HierarchyAnalyzer()
        self._scorer = ConfidenceScorer(self._config.weights)
        self._fallback = FallbackVectorMatcher(self._config)
        self._strategies = build_strategies(self._config.strategy_order)

    @property
    def config(self) -> MatcherConfig:
        return self._config

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def resolve(
        self,
        design_nodes: Sequence[TreeNode],
        markup_nodes: Sequence[TreeNode],
    ) -> MatchResult:
        """Match ``design_nodes`` against ``markup_nodes``.

        Args:
            design_nodes: Every node of the design tree.  May be empty.
            markup_nodes: Every node of the markup tree.  May be empty.

        Returns:
            The match result.  Empty trees yield an empty mapping.

        Raises:
            MalformedTreeError: Either node set is not a proper tree.
        """
        design_nodes = list(design_nodes)
        markup_nodes = list(markup_nodes)
        if self._cache is None:
            return self._resolve(design_nodes, markup_nodes)
        return self._cache.get_or_resolve(
            design_nodes,
            markup_nodes,
            self._config,
            lambda: self._resolve(design_nodes, markup_nodes),
        )

    def resolve_indexed(self, tree1: IndexedTree, tree2: IndexedTree) -> MatchResult:
        """Match two already indexed trees (design first, markup second)."""
        t0 = time.perf_counter()

        comparison = self._analyzer.compare(tree1, tree2)
        weights = {
            str(name): weight
            for name, weight in self._analyzer.strategy_weights(
                comparison, tree1, tree2
            ).items()
        }

        matches: dict[NodeId, MatchCandidate] = {}
        claimed: set[NodeId] = set()

        if not tree1.is_empty and not tree2.is_empty:
            proposals = self._run_strategies(tree1, tree2)
            for strategy, proposed in zip(self._strategies, proposals, strict=True):
                self._merge(
                    tree1, tree2, strategy.name, proposed, weights, matches, claimed
                )
            self._run_fallback(tree1, tree2, matches, claimed)

        unmatched_design = frozenset(
            node_id for node_id in tree1.nodes if node_id not in matches
        )
        unmatched_markup = frozenset(
            node_id for node_id in tree2.nodes if node_id not in claimed
        )
        statistics = MatchStatistics.from_matches(matches, len(tree1), len(tree2))
        elapsed_ms = (time.perf_counter() - t0) * 1000.0

        logger.info(
            "Matched %d/%d design nodes (%.1f%%, mean confidence %.3f) in %.1f ms",
            statistics.matched,
            statistics.total_design,
            statistics.match_percentage,
            statistics.average_confidence,
            elapsed_ms,
        )

        return MatchResult(
            matches=matches,
            unmatched_design=unmatched_design,
            unmatched_markup=unmatched_markup,
            statistics=statistics,
            comparison=comparison,
            strategy_weights=weights,
            computation_time_ms=elapsed_ms,
        )

    # ------------------------------------------------------------------
    # Pipeline steps
    # ------------------------------------------------------------------

    def _resolve(
        self, design_nodes: list[TreeNode], markup_nodes: list[TreeNode]
    ) -> MatchResult:
        return self.resolve_indexed(
            self._index(design_nodes), self._index(markup_nodes)
        )

    def _index(self, nodes: list[TreeNode]) -> IndexedTree:
        if self._cache is None:
            return self._indexer.index(nodes)
        return self._cache.get_or_index(nodes, self._indexer)

    def _run_strategies(
        self, tree1: IndexedTree, tree2: IndexedTree
    ) -> list[dict[NodeId, NodeId]]:
        """Run every strategy; results come back in configured order."""
        workers = self._config.max_workers or len(self._strategies)
        if workers == 1:
            return [
                strategy.find_matches(tree1, tree2) for strategy in self._strategies
            ]

        with ThreadPoolExecutor(
            max_workers=workers, thread_name_prefix="design-match"
        ) as pool:
            futures = [
                pool.submit(strategy.find_matches, tree1, tree2)
                for strategy in self._strategies
            ]
            # collected in submission order, not completion order
            return [future.result() for future in futures]

    def _merge(
        self,
        tree1: IndexedTree,
        tree2: IndexedTree,
        name: str,
        proposed: dict[NodeId, NodeId],
        weights: dict[str, float],
        matches: dict[NodeId, MatchCandidate],
        claimed: set[NodeId],
    ) -> None:
        threshold = self._config.acceptance_threshold
        multiplier = 1.0
        if self._config.apply_strategy_weights:
            multiplier = weights.get(name, 1.0)

        accepted = 0
        for id1, id2 in proposed.items():
            if id1 in matches or id2 in claimed:
                continue
            confidence = self._scorer.score(tree1, id1, tree2, id2).total
            confidence = min(1.0, confidence * multiplier)
            if confidence >= threshold:
                matches[id1] = MatchCandidate(id1, id2, confidence, str(name))
                claimed.add(id2)
                accepted += 1

        logger.debug(
            "Strategy %s proposed %d pairs, accepted %d", name, len(proposed), accepted
        )

    def _run_fallback(
        self,
        tree1: IndexedTree,
        tree2: IndexedTree,
        matches: dict[NodeId, MatchCandidate],
        claimed: set[NodeId],
    ) -> None:
        remaining1 = [node_id for node_id in tree1.nodes if node_id not in matches]
        remaining2 = [node_id for node_id in tree2.nodes if node_id not in claimed]
        if not remaining1 or not remaining2:
            return

        confidence = self._config.fallback_confidence
        pairs = self._fallback.match(tree1, remaining1, tree2, remaining2)
        for id1, (id2, _score) in pairs.items():
            matches[id1] = MatchCandidate(
                id1, id2, confidence, str(StrategyName.FALLBACK)
            )
            claimed.add(id2)
