"""MatcherConfig, ConfidenceWeights and the enums selecting matcher behavior.

``MatcherConfig`` is a frozen (immutable) dataclass holding every tunable
of the resolver.  Defaults give the standard behavior: acceptance
threshold 0.8, fallback threshold 0.6, fixed fallback confidence 0.75 and
the strategy priority order content -> structural -> semantic ->
positional -> hierarchical.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum, auto


class StrategyName(StrEnum):
    """Names of the matching passes, as recorded on each ``MatchCandidate``."""

    CONTENT = "content-based"
    STRUCTURAL = "structural"
    SEMANTIC = "semantic"
    POSITIONAL = "positional"
    HIERARCHICAL = "hierarchical"
    FALLBACK = "fallback-vector"


DEFAULT_STRATEGY_ORDER: tuple[StrategyName, ...] = (
    StrategyName.CONTENT,
    StrategyName.STRUCTURAL,
    StrategyName.SEMANTIC,
    StrategyName.POSITIONAL,
    StrategyName.HIERARCHICAL,
)


class AssignmentMode(StrEnum):
    """How the fallback matcher assigns unmatched design nodes.

    - GREEDY:  Each design node, in traversal order, takes its best-scoring
               unclaimed markup node.
    - OPTIMAL: Hungarian assignment maximizing the summed fallback score.
    """

    GREEDY = auto()
    OPTIMAL = auto()


def _check_unit(name: str, value: float) -> None:
    if not 0.0 <= value <= 1.0:
        msg = f"{name} must be in [0, 1], got {value}"
        raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class ConfidenceWeights:
    """Weights of the five confidence factors plus their soft values.

    Attributes:
        content:     Weight of text similarity.
        semantic:    Weight of semantic-role agreement.
        structural:  Weight of child-count similarity.
        positional:  Weight of depth agreement.
        style:       Weight of style similarity.
        semantic_mismatch:   Factor value when roles differ.
        positional_mismatch: Factor value when depths differ.
        style_placeholder:   Constant style factor; no style diffing yet.

    The five weights must sum to 1.0.
    """

    content: float = 0.30
    semantic: float = 0.25
    structural: float = 0.20
    positional: float = 0.15
    style: float = 0.10
    semantic_mismatch: float = 0.5
    positional_mismatch: float = 0.7
    style_placeholder: float = 0.5

    def __post_init__(self) -> None:
        for name in (
            "content",
            "semantic",
            "structural",
            "positional",
            "style",
            "semantic_mismatch",
            "positional_mismatch",
            "style_placeholder",
        ):
            _check_unit(name, getattr(self, name))
        total = sum(
            (self.content, self.semantic, self.structural, self.positional, self.style)
        )
        if abs(total - 1.0) >= 1e-9:
            msg = f"confidence weights must sum to 1.0, got {total}"
            raise ValueError(msg)


@dataclass(frozen=True, slots=True)
class MatcherConfig:
    """Immutable configuration for ``ConfidenceResolver``.

    Attributes:
        acceptance_threshold: Minimum confidence for a strategy proposal.
        fallback_threshold: Fallback score a pair must exceed.
        fallback_confidence: Confidence recorded on every fallback match.
        fallback_cosine_weight: Weight of feature cosine in the fallback
            score; the name-overlap bonus gets the remainder.
        weights: Confidence factor weights.
        strategy_order: Strategies to run, highest priority first.
        assignment_mode: Greedy or optimal fallback assignment.
        apply_strategy_weights: Multiply confidences by the hierarchy-derived
            strategy weights (clipped to 1.0).  Off by default so that
            confidence is exactly the weighted factor sum.
        max_workers: Thread pool size for running strategies; ``None`` uses
            one worker per strategy, ``1`` runs them sequentially.
    """

    acceptance_threshold: float = 0.8
    fallback_threshold: float = 0.6
    fallback_confidence: float = 0.75
    fallback_cosine_weight: float = 0.7
    weights: ConfidenceWeights = field(default_factory=ConfidenceWeights)
    strategy_order: tuple[StrategyName, ...] = DEFAULT_STRATEGY_ORDER
    assignment_mode: AssignmentMode = AssignmentMode.GREEDY
    apply_strategy_weights: bool = False
    max_workers: int | None = None

    def __post_init__(self) -> None:
        _check_unit("acceptance_threshold", self.acceptance_threshold)
        _check_unit("fallback_threshold", self.fallback_threshold)
        _check_unit("fallback_confidence", self.fallback_confidence)
        _check_unit("fallback_cosine_weight", self.fallback_cosine_weight)
        if not self.strategy_order:
            msg = "strategy_order must name at least one strategy"
            raise ValueError(msg)
        if StrategyName.FALLBACK in self.strategy_order:
            msg = "strategy_order cannot include the fallback pass"
            raise ValueError(msg)
        if len(set(self.strategy_order)) != len(self.strategy_order):
            msg = f"strategy_order contains duplicates: {self.strategy_order}"
            raise ValueError(msg)
        # Accept plain strings and store the enum members
        object.__setattr__(
            self,
            "strategy_order",
            tuple(StrategyName(name) for name in self.strategy_order),
        )
        if self.max_workers is not None and self.max_workers < 1:
            msg = f"max_workers must be >= 1, got {self.max_workers}"
            raise ValueError(msg)
