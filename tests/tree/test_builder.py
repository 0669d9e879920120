"""Tests for TreeBuilder.

Covers design documents (ids, kinds, text, styles, geometry, paths) and
markup documents (generated ids, class parsing, attributes, declared
roles), pre-order emission, parent/child wiring and TypeError on invalid
input.
"""

from __future__ import annotations

from typing import Any

import pytest

from design_match.tree.builder import TreeBuilder
from design_match.tree.indexer import TreeIndexer
from design_match.tree.nodes import NodeVariant, SemanticRole, TreeNode


def _by_id(nodes: list[TreeNode]) -> dict[Any, TreeNode]:
    return {node.id: node for node in nodes}


class TestBuildDesign:
    def test_preorder_emission(self, landing_design: list[TreeNode]) -> None:
        assert [n.id for n in landing_design] == [
            "0:1",
            "1:1",
            "1:2",
            "1:3",
            "2:1",
            "2:2",
        ]

    def test_variant_and_kind(self, landing_design: list[TreeNode]) -> None:
        nodes = _by_id(landing_design)
        assert all(n.variant == NodeVariant.DESIGN for n in landing_design)
        assert nodes["1:2"].kind == "TEXT"
        assert nodes["1:3"].kind == "INSTANCE"

    def test_parent_and_children_wired(self, landing_design: list[TreeNode]) -> None:
        nodes = _by_id(landing_design)
        assert nodes["0:1"].parent is None
        assert nodes["0:1"].children == ("1:1", "2:1")
        assert nodes["1:1"].children == ("1:2", "1:3")
        assert nodes["2:2"].parent == "2:1"

    def test_text_from_characters(self, landing_design: list[TreeNode]) -> None:
        assert _by_id(landing_design)["1:2"].text == "Welcome home"

    def test_paths_are_name_chains(self, landing_design: list[TreeNode]) -> None:
        nodes = _by_id(landing_design)
        assert nodes["0:1"].path == "Landing"
        assert nodes["1:2"].path == "Landing/Header/Title"
        assert nodes["1:2"].level == 2

    def test_slash_in_name_does_not_add_a_level(
        self, landing_design: list[TreeNode]
    ) -> None:
        node = _by_id(landing_design)["1:3"]
        assert node.path == "Landing/Header/Button - Primary"
        assert node.level == 2

    def test_styles_keys_and_geometry(self, builder: TreeBuilder) -> None:
        (node,) = builder.build_design(
            {
                "id": "5:5",
                "type": "RECTANGLE",
                "name": "Bg",
                "styles": {"fill": "S:1", "stroke": "S:2"},
                "absoluteBoundingBox": {"x": 0, "y": 0, "width": 10, "height": 4},
            }
        )
        assert node.classes == ("fill", "stroke")
        assert node.geometry["width"] == 10

    def test_missing_id_and_type_defaulted(self, builder: TreeBuilder) -> None:
        nodes = builder.build_design({"name": "Root", "children": [{"name": "Child"}]})
        assert [n.id for n in nodes] == ["0", "1"]
        assert nodes[0].kind == "FRAME"
        assert nodes[1].parent == "0"

    def test_unnamed_node_path_uses_kind(self, builder: TreeBuilder) -> None:
        (node,) = builder.build_design({"id": "1", "type": "TEXT"})
        assert node.path == "TEXT"

    def test_declared_role_read(self, builder: TreeBuilder) -> None:
        (node,) = builder.build_design(
            {"id": "1", "name": "Promo", "role": "hero-section"}
        )
        assert node.semantic_role is SemanticRole.HERO_SECTION

    def test_unknown_role_ignored(self, builder: TreeBuilder) -> None:
        (node,) = builder.build_design({"id": "1", "name": "Promo", "role": "banner"})
        assert node.semantic_role is None

    def test_heading_variant_role_folded(self, builder: TreeBuilder) -> None:
        (node,) = builder.build_design(
            {"id": "1", "name": "Hero", "role": "section-heading"}
        )
        assert node.semantic_role is SemanticRole.HEADING


class TestBuildMarkup:
    def test_generated_ids(
        self, landing_markup: list[TreeNode], landing_markup_ids: tuple[str, ...]
    ) -> None:
        assert tuple(n.id for n in landing_markup) == landing_markup_ids

    def test_class_string_split(self, landing_markup: list[TreeNode]) -> None:
        button = landing_markup[3]
        assert button.kind == "button"
        assert button.classes == ("btn", "btn-primary")

    def test_classes_sequence_accepted(self, builder: TreeBuilder) -> None:
        (node,) = builder.build_markup({"tag": "DIV", "classes": ["hero", "wide"]})
        assert node.kind == "div"
        assert node.classes == ("hero", "wide")
        assert node.id == "div-hero-wide-0"

    def test_paths_are_tag_chains(self, landing_markup: list[TreeNode]) -> None:
        assert landing_markup[2].path == "body/header/h1"
        assert landing_markup[2].level == 2

    def test_text_attributes_and_role(self, builder: TreeBuilder) -> None:
        (node,) = builder.build_markup(
            {
                "tag": "a",
                "id": "cta",
                "text": "Read more",
                "attributes": {"href": "/blog"},
                "role": "interactive",
            }
        )
        assert node.id == "cta"
        assert node.text == "Read more"
        assert node.attributes == {"href": "/blog"}
        assert node.semantic_role is SemanticRole.INTERACTIVE

    def test_provider_heading_role_folded(self, builder: TreeBuilder) -> None:
        (node,) = builder.build_markup({"tag": "div", "role": "main-heading"})
        assert node.semantic_role is SemanticRole.HEADING

    def test_unknown_markup_role_dropped(
        self, builder: TreeBuilder, indexer: TreeIndexer
    ) -> None:
        (node,) = builder.build_markup({"tag": "nav", "role": "banner"})
        assert node.semantic_role is None
        assert indexer.index([node]).role_of(node.id) is SemanticRole.NAVIGATION

    def test_variant(self, landing_markup: list[TreeNode]) -> None:
        assert all(n.variant == NodeVariant.MARKUP for n in landing_markup)


class TestInvalidInput:
    def test_non_mapping_design_raises(self, builder: TreeBuilder) -> None:
        with pytest.raises(TypeError, match="mapping"):
            builder.build_design(["not", "a", "node"])  # type: ignore[arg-type]

    def test_non_mapping_child_raises(self, builder: TreeBuilder) -> None:
        with pytest.raises(TypeError, match="mapping"):
            builder.build_markup({"tag": "ul", "children": ["li"]})

    def test_children_must_be_sequence(self, builder: TreeBuilder) -> None:
        with pytest.raises(TypeError, match="sequence"):
            builder.build_markup({"tag": "ul", "children": "li"})


class TestDeterminism:
    def test_same_document_builds_equal_nodes(self, builder: TreeBuilder) -> None:
        document = {"tag": "ul", "children": [{"tag": "li", "text": "One"}] * 3}
        assert builder.build_markup(document) == builder.build_markup(document)
