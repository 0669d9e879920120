"""Public API functions for design-match.

Each call creates a fresh ``ConfidenceResolver`` (or indexer/analyzer) so
no state is shared between calls; the only opt-in sharing is an explicit
``ResultCache`` passed by the caller.
"""

from __future__ import annotations

from collections.abc import Sequence

from design_match.algorithm.config import MatcherConfig
from design_match.algorithm.hierarchy import HierarchyAnalyzer, HierarchyComparison
from design_match.algorithm.resolver import ConfidenceResolver
from design_match.cache import ResultCache
from design_match.result import MatchResult
from design_match.tree.indexer import IndexedTree, TreeIndexer
from design_match.tree.nodes import TreeNode

__all__ = ["compare_hierarchies", "index_tree", "match_trees"]


def match_trees(
    design_nodes: Sequence[TreeNode],
    markup_nodes: Sequence[TreeNode],
    config: MatcherConfig | None = None,
    cache: ResultCache | None = None,
) -> MatchResult:
    """Match every design node against the markup tree.

    Args:
        design_nodes: Every node of the design tree.
        markup_nodes: Every node of the markup tree.
        config: Matcher tunables.  Defaults to ``MatcherConfig()`` when None.
        cache:  Optional caller-owned ``ResultCache``.  Identical inputs
                with an identical config are then served from memory.

    Returns:
        A ``MatchResult`` with matches, unmatched ids, statistics, the
        hierarchy comparison and strategy weights populated.

    Raises:
        MalformedTreeError: Either node set is not a proper tree.
    """
    return ConfidenceResolver(config=config, cache=cache).resolve(
        design_nodes, markup_nodes
    )


def compare_hierarchies(
    design_nodes: Sequence[TreeNode],
    markup_nodes: Sequence[TreeNode],
) -> HierarchyComparison:
    """Return the whole-tree structural comparison of two node sets."""
    indexer = TreeIndexer()
    return HierarchyAnalyzer().compare(
        indexer.index(design_nodes), indexer.index(markup_nodes)
    )


def index_tree(nodes: Sequence[TreeNode]) -> IndexedTree:
    """Validate ``nodes`` and return their ``IndexedTree``."""
    return TreeIndexer().index(nodes)
