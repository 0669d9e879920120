"""MatchCandidate, MatchStatistics and MatchResult: the resolver output.

``MatchResult`` is created once per resolver run and never mutated
afterwards; the result cache may hand the same instance to later callers.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from design_match.tree.nodes import NodeId

if TYPE_CHECKING:
    from design_match.algorithm.hierarchy import HierarchyComparison

__all__ = ["MatchCandidate", "MatchResult", "MatchStatistics"]


@dataclass(frozen=True, slots=True)
class MatchCandidate:
    """One accepted pairing.

    Attributes:
        design_id:  Id in the design tree.
        markup_id:  Id in the markup tree.
        confidence: Confidence in [0, 1].
        strategy:   Name of the pass that produced the pairing.
    """

    design_id: NodeId
    markup_id: NodeId
    confidence: float
    strategy: str


@dataclass(frozen=True, slots=True)
class MatchStatistics:
    """Aggregates computed once over the final correspondence.

    Attributes:
        total_design:       Number of design nodes.
        total_markup:       Number of markup nodes.
        matched:            Number of matched design nodes.
        match_percentage:   ``matched / total_design * 100``; 0 for an
                            empty design tree.
        average_confidence: Mean confidence over the matches; 0 without any.
        strategy_counts:    Matches per strategy name.
    """

    total_design: int
    total_markup: int
    matched: int
    match_percentage: float
    average_confidence: float
    strategy_counts: Mapping[str, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "strategy_counts", MappingProxyType(dict(self.strategy_counts))
        )

    @classmethod
    def from_matches(
        cls,
        matches: Mapping[NodeId, MatchCandidate],
        total_design: int,
        total_markup: int,
    ) -> MatchStatistics:
        matched = len(matches)
        counts: dict[str, int] = {}
        for candidate in matches.values():
            counts[candidate.strategy] = counts.get(candidate.strategy, 0) + 1
        return cls(
            total_design=total_design,
            total_markup=total_markup,
            matched=matched,
            match_percentage=matched / total_design * 100 if total_design else 0.0,
            average_confidence=(
                sum(c.confidence for c in matches.values()) / matched
                if matched
                else 0.0
            ),
            strategy_counts=counts,
        )


@dataclass(frozen=True, slots=True)
class MatchResult:
    """Rich result of a resolver run.

    Attributes:
        matches:          design id -> accepted candidate, in acceptance order.
        unmatched_design: Design ids with no counterpart.
        unmatched_markup: Markup ids nobody was paired with.
        statistics:       Aggregates over ``matches``.
        comparison:       Whole-tree comparison used to derive weights.
        strategy_weights: Multiplier per strategy name.
        computation_time_ms: Wall-clock duration; ignored by ``==``.
    """

    matches: Mapping[NodeId, MatchCandidate]
    unmatched_design: frozenset[NodeId]
    unmatched_markup: frozenset[NodeId]
    statistics: MatchStatistics
    comparison: HierarchyComparison | None = None
    strategy_weights: Mapping[str, float] = field(default_factory=dict)
    computation_time_ms: float = field(default=0.0, compare=False)

    def __post_init__(self) -> None:
        # results are shared by reference through ResultCache
        object.__setattr__(self, "matches", MappingProxyType(dict(self.matches)))
        object.__setattr__(
            self, "strategy_weights", MappingProxyType(dict(self.strategy_weights))
        )

    def pairs(self) -> list[tuple[NodeId, NodeId]]:
        """Return ``(design_id, markup_id)`` for every match."""
        return [(c.design_id, c.markup_id) for c in self.matches.values()]

    def to_dict(self) -> dict[str, Any]:
        """Plain-data view suitable for JSON reports."""
        stats = self.statistics
        return {
            "matches": {
                str(design_id): {
                    "markup_id": c.markup_id,
                    "confidence": c.confidence,
                    "strategy": c.strategy,
                }
                for design_id, c in self.matches.items()
            },
            "unmatched_design": sorted(self.unmatched_design, key=str),
            "unmatched_markup": sorted(self.unmatched_markup, key=str),
            "statistics": {
                "total_design": stats.total_design,
                "total_markup": stats.total_markup,
                "matched": stats.matched,
                "match_percentage": stats.match_percentage,
                "average_confidence": stats.average_confidence,
                "strategy_counts": dict(stats.strategy_counts),
            },
            "strategy_weights": dict(self.strategy_weights),
        }
