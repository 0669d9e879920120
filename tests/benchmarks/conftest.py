"""Deterministic tree generators for performance benchmarks.

All generators produce fixed, reproducible documents. No random values.
Three tiers: ~10 nodes, ~100 nodes, ~500 nodes per tree.
Each tier provides both "similar" and "dissimilar" pair generators.

Pages are laid out as sections of cards; every card carries a title
and a body text, which is what the content strategy keys on.
"""

from __future__ import annotations

from typing import Any

import pytest

from design_match import TreeBuilder, TreeNode

TreePair = tuple[list[TreeNode], list[TreeNode]]


def _design_page(sections: int, cards: int, copy: str = "copy") -> dict[str, Any]:
    """Design frame: sections x cards, each card a frame with two text layers."""
    return {
        "id": "page",
        "type": "FRAME",
        "name": "Page",
        "children": [
            {
                "id": f"s{i}",
                "type": "FRAME",
                "name": f"Section {i}",
                "children": [
                    {
                        "id": f"s{i}c{j}",
                        "type": "FRAME",
                        "name": "Card",
                        "children": [
                            {
                                "id": f"s{i}c{j}t",
                                "type": "TEXT",
                                "name": "Title",
                                "characters": f"{copy} title {i} {j}",
                            },
                            {
                                "id": f"s{i}c{j}b",
                                "type": "TEXT",
                                "name": "Body",
                                "characters": f"{copy} body {i} {j}",
                            },
                        ],
                    }
                    for j in range(cards)
                ],
            }
            for i in range(sections)
        ],
    }


def _markup_page(sections: int, cards: int, copy: str = "copy") -> dict[str, Any]:
    """Markup mirror of ``_design_page``."""
    return {
        "tag": "main",
        "children": [
            {
                "tag": "section",
                "class": f"section-{i}",
                "children": [
                    {
                        "tag": "div",
                        "class": "card",
                        "children": [
                            {"tag": "h3", "text": f"{copy} title {i} {j}"},
                            {"tag": "p", "text": f"{copy} body {i} {j}"},
                        ],
                    }
                    for j in range(cards)
                ],
            }
            for i in range(sections)
        ],
    }


def _make_pair(sections: int, cards: int, markup_copy: str = "copy") -> TreePair:
    builder = TreeBuilder()
    return (
        builder.build_design(_design_page(sections, cards)),
        builder.build_markup(_markup_page(sections, cards, markup_copy)),
    )


# --- Fixtures for each size tier ---


@pytest.fixture
def pair_10node_similar() -> TreePair:
    """1 section x 2 cards: 8 nodes per tree, identical copy."""
    return _make_pair(1, 2)


@pytest.fixture
def pair_10node_dissimilar() -> TreePair:
    """1 section x 2 cards with unrelated markup copy."""
    return _make_pair(1, 2, markup_copy="lorem")


@pytest.fixture
def pair_100node_similar() -> TreePair:
    """4 sections x 8 cards: 101 nodes per tree, identical copy."""
    return _make_pair(4, 8)


@pytest.fixture
def pair_100node_dissimilar() -> TreePair:
    """4 sections x 8 cards with unrelated markup copy."""
    return _make_pair(4, 8, markup_copy="lorem")


@pytest.fixture
def pair_500node_similar() -> TreePair:
    """8 sections x 20 cards: 489 nodes per tree, identical copy."""
    return _make_pair(8, 20)


@pytest.fixture
def pair_500node_dissimilar() -> TreePair:
    """8 sections x 20 cards with unrelated markup copy."""
    return _make_pair(8, 20, markup_copy="lorem")
