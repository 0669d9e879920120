"""pytest plugin for design-match.

Auto-discovered by pytest via the pytest11 entry point declared in pyproject.toml.
When the package is installed (even in editable mode), pytest discovers this plugin
automatically -- no conftest.py changes are needed.

Source: https://docs.pytest.org/en/stable/how-to/writing_plugins.html
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from typing import Any

import pytest

from design_match import MatcherConfig, match_trees
from design_match.tree.nodes import NodeId, TreeNode


@pytest.fixture(scope="session")
def assert_trees_match() -> Any:
    """Fixture that returns a callable design/markup match asserter.

    The fixture is session-scoped because the returned callable is stateless
    (delegates to match_trees() which creates a fresh resolver per call).

    Usage in tests::

        def test_page(assert_trees_match):
            assert_trees_match(design_nodes, markup_nodes, min_match_percentage=80)

        def test_button(assert_trees_match):
            assert_trees_match(design_nodes, markup_nodes, expected={"1:2": "button-0"})

    Returns:
        A callable ``_assert(design, markup, min_match_percentage=100.0,
        expected=None, config=None) -> None`` that raises ``AssertionError``
        when the run falls short.
    """

    def _assert(
        design: Sequence[TreeNode],
        markup: Sequence[TreeNode],
        min_match_percentage: float = 100.0,
        expected: Mapping[NodeId, NodeId] | None = None,
        config: MatcherConfig | None = None,
    ) -> None:
        """Assert that a design tree matches a markup tree well enough.

        Args:
            design:   Design tree nodes.
            markup:   Markup tree nodes.
            min_match_percentage: Minimum share of matched design nodes.
            expected: Optional design id -> markup id pairs that must appear
                      in the result.
            config:   Optional MatcherConfig for custom matcher parameters.

        Raises:
            AssertionError: When the match percentage is below the minimum or
                an expected pair is missing, with a message including the
                percentage, the mismatching pairs and the unmatched ids.
        """
        result = match_trees(design, markup, config=config)
        actual = dict(result.pairs())
        mismatches = {
            design_id: (markup_id, actual.get(design_id))
            for design_id, markup_id in (expected or {}).items()
            if actual.get(design_id) != markup_id
        }
        percentage = result.statistics.match_percentage
        if percentage < min_match_percentage or mismatches:
            raise AssertionError(
                f"Trees do not match: "
                f"match_percentage={percentage:.2f} (minimum={min_match_percentage})\n"
                f"  mismatches (expected, actual): {mismatches}\n"
                f"  unmatched_design: {sorted(result.unmatched_design, key=str)}\n"
                f"  unmatched_markup: {sorted(result.unmatched_markup, key=str)}"
            )

    return _assert
