"""algorithm subpackage: public API for matching and hierarchy analysis.

Import from this module (not from sub-modules directly) to stay on the
stable public interface.

Example::

    from design_match.algorithm import ConfidenceResolver, MatcherConfig

    resolver = ConfidenceResolver(MatcherConfig(acceptance_threshold=0.85))
    result = resolver.resolve(design_nodes, markup_nodes)
"""

from __future__ import annotations

from design_match.algorithm.confidence import ConfidenceBreakdown, ConfidenceScorer
from design_match.algorithm.config import (
    DEFAULT_STRATEGY_ORDER,
    AssignmentMode,
    ConfidenceWeights,
    MatcherConfig,
    StrategyName,
)
from design_match.algorithm.fallback import FallbackVectorMatcher
from design_match.algorithm.hierarchy import (
    HierarchyAnalyzer,
    HierarchyComparison,
    HierarchyProfile,
    Recommendation,
    RecommendationLevel,
    RepeatingPattern,
)
from design_match.algorithm.resolver import ConfidenceResolver
from design_match.algorithm.strategies import (
    ContentMatching,
    HierarchicalMatching,
    PositionalMatching,
    SemanticMatching,
    StructuralMatching,
    build_strategies,
)

__all__ = [
    "DEFAULT_STRATEGY_ORDER",
    "AssignmentMode",
    "ConfidenceBreakdown",
    "ConfidenceResolver",
    "ConfidenceScorer",
    "ConfidenceWeights",
    "ContentMatching",
    "FallbackVectorMatcher",
    "HierarchicalMatching",
    "HierarchyAnalyzer",
    "HierarchyComparison",
    "HierarchyProfile",
    "MatcherConfig",
    "PositionalMatching",
    "Recommendation",
    "RecommendationLevel",
    "RepeatingPattern",
    "SemanticMatching",
    "StrategyName",
    "StructuralMatching",
    "build_strategies",
]
