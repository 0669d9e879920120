"""Shared fixtures: small design/markup documents built via TreeBuilder."""

from __future__ import annotations

from typing import Any

import pytest

from design_match.tree import TreeBuilder, TreeIndexer, TreeNode

LANDING_DESIGN: dict[str, Any] = {
    "id": "0:1",
    "type": "FRAME",
    "name": "Landing",
    "children": [
        {
            "id": "1:1",
            "type": "FRAME",
            "name": "Header",
            "children": [
                {
                    "id": "1:2",
                    "type": "TEXT",
                    "name": "Title",
                    "characters": "Welcome home",
                },
                {
                    "id": "1:3",
                    "type": "INSTANCE",
                    "name": "Button / Primary",
                    "characters": "Sign up",
                },
            ],
        },
        {
            "id": "2:1",
            "type": "FRAME",
            "name": "Card",
            "children": [
                {
                    "id": "2:2",
                    "type": "TEXT",
                    "name": "Body",
                    "characters": "Fresh ideas every week",
                },
            ],
        },
    ],
}

LANDING_MARKUP: dict[str, Any] = {
    "tag": "body",
    "children": [
        {
            "tag": "header",
            "class": "site-header",
            "children": [
                {"tag": "h1", "text": "Welcome home"},
                {"tag": "button", "class": "btn btn-primary", "text": "Sign up"},
            ],
        },
        {
            "tag": "div",
            "class": "card",
            "children": [{"tag": "p", "text": "Fresh ideas every week"}],
        },
    ],
}

# Markup ids generated by TreeBuilder for LANDING_MARKUP, in pre-order.
LANDING_MARKUP_IDS = (
    "body-no-class-0",
    "header-site-header-1",
    "h1-no-class-2",
    "button-btn-btn-primary-3",
    "div-card-4",
    "p-no-class-5",
)


@pytest.fixture
def builder() -> TreeBuilder:
    """A fresh TreeBuilder instance for each test."""
    return TreeBuilder()


@pytest.fixture
def indexer() -> TreeIndexer:
    return TreeIndexer()


@pytest.fixture
def landing_design(builder: TreeBuilder) -> list[TreeNode]:
    return builder.build_design(LANDING_DESIGN)


@pytest.fixture
def landing_markup(builder: TreeBuilder) -> list[TreeNode]:
    return builder.build_markup(LANDING_MARKUP)


@pytest.fixture
def landing_markup_ids() -> tuple[str, ...]:
    return LANDING_MARKUP_IDS


@pytest.fixture
def submit_design(builder: TreeBuilder) -> list[TreeNode]:
    """Single text layer named like a button, reading "Submit"."""
    return builder.build_design(
        {"id": "1", "type": "TEXT", "name": "Button / Submit", "characters": "Submit"}
    )


@pytest.fixture
def submit_markup(builder: TreeBuilder) -> list[TreeNode]:
    return builder.build_markup({"tag": "button", "id": "submit", "text": "Submit"})


@pytest.fixture
def three_leaf_design(builder: TreeBuilder) -> list[TreeNode]:
    """Frame with three text leaves whose copy shares no character with the markup."""
    return builder.build_design(
        {
            "id": "row",
            "type": "FRAME",
            "name": "Row",
            "children": [
                {"id": f"t{i}", "type": "TEXT", "name": "Label", "characters": "aaa"}
                for i in range(3)
            ],
        }
    )


@pytest.fixture
def three_leaf_markup(builder: TreeBuilder) -> list[TreeNode]:
    return builder.build_markup(
        {
            "tag": "div",
            "id": "list",
            "children": [
                {"tag": "span", "id": f"s{i}", "text": "zzz"} for i in range(3)
            ],
        }
    )
