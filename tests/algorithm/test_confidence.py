"""Tests for ConfidenceScorer: factor values and the weighted total."""

from __future__ import annotations

import pytest

from design_match.algorithm.config import ConfidenceWeights
from design_match.algorithm.confidence import ConfidenceScorer
from design_match.tree import TreeBuilder, TreeIndexer, TreeNode
from design_match.tree.nodes import NodeVariant


@pytest.fixture
def scorer() -> ConfidenceScorer:
    return ConfidenceScorer()


class TestScenarios:
    def test_submit_with_agreeing_roles(
        self,
        scorer: ConfidenceScorer,
        indexer: TreeIndexer,
        submit_design: list[TreeNode],
        submit_markup: list[TreeNode],
    ) -> None:
        b = scorer.score(
            indexer.index(submit_design), "1", indexer.index(submit_markup), "submit"
        )
        assert b.content == 1.0
        assert b.semantic == 1.0
        assert b.structural == 1.0
        assert b.positional == 1.0
        assert b.style == 0.5
        # 0.30 + 0.25 + 0.20 + 0.15 + 0.10 * 0.5
        assert b.total == pytest.approx(0.95)

    def test_submit_with_role_mismatch_still_accepted(
        self, scorer: ConfidenceScorer, indexer: TreeIndexer, builder: TreeBuilder
    ) -> None:
        design = indexer.index(
            builder.build_design({"id": "1", "type": "TEXT", "characters": "Submit"})
        )
        markup = indexer.index(
            builder.build_markup({"tag": "button", "id": "b", "text": "Submit"})
        )
        b = scorer.score(design, "1", markup, "b")
        assert b.semantic == 0.5
        # 0.30 + 0.25 * 0.5 + 0.20 + 0.15 + 0.05
        assert b.total == pytest.approx(0.825)
        assert b.total >= 0.8

    def test_three_leaves_without_shared_text(
        self,
        scorer: ConfidenceScorer,
        indexer: TreeIndexer,
        three_leaf_design: list[TreeNode],
        three_leaf_markup: list[TreeNode],
    ) -> None:
        design = indexer.index(three_leaf_design)
        markup = indexer.index(three_leaf_markup)
        for i in range(3):
            b = scorer.score(design, f"t{i}", markup, f"s{i}")
            assert b.content == 0.0
            assert b.semantic == 1.0
            assert b.structural == 1.0
            assert b.positional == 1.0
            # structure, position and style alone: 0.25 + 0.20 + 0.15 + 0.05
            assert b.total == pytest.approx(0.65)

    def test_parent_pair_of_three_leaf_trees(
        self,
        scorer: ConfidenceScorer,
        indexer: TreeIndexer,
        three_leaf_design: list[TreeNode],
        three_leaf_markup: list[TreeNode],
    ) -> None:
        b = scorer.score(
            indexer.index(three_leaf_design),
            "row",
            indexer.index(three_leaf_markup),
            "list",
        )
        assert b.content == 0.0
        assert b.structural == 1.0
        assert b.total == pytest.approx(0.65)


class TestFactors:
    def test_positional_mismatch(
        self, scorer: ConfidenceScorer, indexer: TreeIndexer, builder: TreeBuilder
    ) -> None:
        design = indexer.index(
            builder.build_design(
                {"id": "r", "children": [{"id": "leaf", "characters": "Hi"}]}
            )
        )
        markup = indexer.index(
            builder.build_markup({"tag": "p", "id": "p", "text": "Hi"})
        )
        b = scorer.score(design, "leaf", markup, "p")
        assert b.positional == 0.7
        assert b.total == pytest.approx(0.3 + 0.25 + 0.2 + 0.15 * 0.7 + 0.05)

    def test_weights_configurable(
        self,
        indexer: TreeIndexer,
        submit_design: list[TreeNode],
        submit_markup: list[TreeNode],
    ) -> None:
        weights = ConfidenceWeights(
            content=0.6, semantic=0.1, structural=0.1, positional=0.1, style=0.1
        )
        b = ConfidenceScorer(weights).score(
            indexer.index(submit_design), "1", indexer.index(submit_markup), "submit"
        )
        assert b.total == pytest.approx(0.6 + 0.1 + 0.1 + 0.1 + 0.05)

    def test_total_within_unit_interval(
        self,
        scorer: ConfidenceScorer,
        indexer: TreeIndexer,
        landing_design: list[TreeNode],
        landing_markup: list[TreeNode],
    ) -> None:
        design = indexer.index(landing_design)
        markup = indexer.index(landing_markup)
        for node1 in design:
            for node2 in markup:
                total = scorer.score(design, node1.id, markup, node2.id).total
                assert 0.0 <= total <= 1.0


class TestContentSimilarity:
    @staticmethod
    def _pair(text1: str, text2: str) -> tuple[TreeNode, TreeNode]:
        return (
            TreeNode(id=1, variant=NodeVariant.DESIGN, kind="TEXT", text=text1),
            TreeNode(id=2, variant=NodeVariant.MARKUP, kind="p", text=text2),
        )

    def test_normalized_before_comparison(self) -> None:
        pair = self._pair("Sign up!", "sign  UP")
        assert ConfidenceScorer.content_similarity(*pair) == 1.0

    def test_empty_side_is_zero(self) -> None:
        assert ConfidenceScorer.content_similarity(*self._pair("", "text")) == 0.0
        assert ConfidenceScorer.content_similarity(*self._pair("", "")) == 0.0

    def test_partial(self) -> None:
        value = ConfidenceScorer.content_similarity(*self._pair("kitten", "sitting"))
        assert value == pytest.approx(1 - 3 / 7)


class TestStructuralSimilarity:
    @staticmethod
    def _with_children(n1: int, n2: int) -> tuple[TreeNode, TreeNode]:
        return (
            TreeNode(
                id=1,
                variant=NodeVariant.DESIGN,
                kind="FRAME",
                children=tuple(range(n1)),
            ),
            TreeNode(
                id=2,
                variant=NodeVariant.MARKUP,
                kind="div",
                children=tuple(range(n2)),
            ),
        )

    def test_two_leaves(self) -> None:
        assert ConfidenceScorer.structural_similarity(*self._with_children(0, 0)) == 1.0

    def test_exactly_one_leaf(self) -> None:
        assert ConfidenceScorer.structural_similarity(*self._with_children(0, 2)) == 0.0
        assert ConfidenceScorer.structural_similarity(*self._with_children(3, 0)) == 0.0

    def test_ratio(self) -> None:
        value = ConfidenceScorer.structural_similarity(*self._with_children(3, 2))
        assert value == pytest.approx(1 - 1 / 3)
