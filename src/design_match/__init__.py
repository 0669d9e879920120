"""Design match - cross-tree node matching between design and markup trees."""

from __future__ import annotations

import logging

from design_match.algorithm.config import (
    AssignmentMode,
    ConfidenceWeights,
    MatcherConfig,
    StrategyName,
)
from design_match.algorithm.resolver import ConfidenceResolver
from design_match.api import compare_hierarchies, index_tree, match_trees
from design_match.cache import ResultCache
from design_match.exceptions import (
    CycleError,
    DesignMatchError,
    DuplicateNodeError,
    MalformedTreeError,
    UnresolvedChildError,
)
from design_match.result import MatchCandidate, MatchResult, MatchStatistics
from design_match.tree import TreeBuilder, TreeNode

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__: str = "0.1.0"
__all__: list[str] = [
    "AssignmentMode",
    "ConfidenceResolver",
    "ConfidenceWeights",
    "CycleError",
    "DesignMatchError",
    "DuplicateNodeError",
    "MalformedTreeError",
    "MatchCandidate",
    "MatchResult",
    "MatchStatistics",
    "MatcherConfig",
    "ResultCache",
    "StrategyName",
    "TreeBuilder",
    "TreeNode",
    "UnresolvedChildError",
    "compare_hierarchies",
    "index_tree",
    "match_trees",
]
