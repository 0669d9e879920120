"""TreeBuilder: converts nested mappings into flat ``TreeNode`` sets.

Two input shapes are supported:

- Design documents as exported by a design-file API::

      {"id": "1:2", "type": "FRAME", "name": "Hero Card",
       "styles": {"fill": "S:1"}, "children": [...]}

  Text comes from ``characters`` (or ``text``); the keys of ``styles``
  become the declared style groups; ``absoluteBoundingBox`` is kept as
  geometry.

- DOM-like markup documents::

      {"tag": "div", "class": "card featured", "text": "Buy",
       "attributes": {...}, "children": [...]}

  ``classes`` may be given as a sequence instead of a ``class`` string;
  ``role`` pre-declares the semantic role; values outside the role
  vocabulary are dropped (see ``coerce_role``).

Nodes are emitted in pre-order, each with its ``path`` (slash-joined
names for design, tag names for markup), ``parent`` and child ids set.
Raw markup text parsing is the caller's business; this builder only
consumes already-parsed structures.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from design_match.tree.nodes import (
    PATH_SEPARATOR,
    NodeId,
    NodeVariant,
    TreeNode,
)
from design_match.tree.roles import coerce_role

__all__ = ["TreeBuilder"]


def _segment(label: str) -> str:
    """Make ``label`` safe to use as one path segment."""
    return label.replace(PATH_SEPARATOR, "-").strip() or "node"


def _join(path: str, segment: str) -> str:
    return f"{path}{PATH_SEPARATOR}{segment}" if path else segment


@dataclass
class TreeBuilder:
    """Converts design and markup documents into ``TreeNode`` lists.

    Example::

        builder = TreeBuilder()
        nodes = builder.build_markup(
            {"tag": "body", "children": [{"tag": "button", "text": "Submit"}]}
        )
        # [TreeNode(id='body-no-class-0', ...), TreeNode(id='button-no-class-1', ...)]
    """

    def build_design(self, document: Mapping[str, Any]) -> list[TreeNode]:
        """Flatten a design document into pre-ordered nodes.

        Args:
            document: Root design node mapping.

        Returns:
            All nodes of the tree, root first.

        Raises:
            TypeError: If ``document`` or any child is not a mapping.
        """
        nodes: list[TreeNode] = []
        self._design_node(document, None, "", nodes)
        return nodes

    def build_markup(self, document: Mapping[str, Any]) -> list[TreeNode]:
        """Flatten a markup document into pre-ordered nodes.

        Args:
            document: Root element mapping.

        Returns:
            All nodes of the tree, root first.

        Raises:
            TypeError: If ``document`` or any child is not a mapping.
        """
        nodes: list[TreeNode] = []
        self._markup_node(document, None, "", nodes)
        return nodes

    # ------------------------------------------------------------------
    # Design documents
    # ------------------------------------------------------------------

    def _design_node(
        self,
        value: Any,
        parent: NodeId | None,
        parent_path: str,
        nodes: list[TreeNode],
    ) -> NodeId:
        if not isinstance(value, Mapping):
            raise TypeError(f"Design node must be a mapping, got {type(value)!r}")

        node_id: NodeId = value.get("id", str(len(nodes)))
        kind = str(value.get("type", "FRAME"))
        name = str(value.get("name", ""))
        styles = value.get("styles") or {}
        text = value.get("characters", value.get("text", "")) or ""

        node = TreeNode(
            id=node_id,
            variant=NodeVariant.DESIGN,
            kind=kind,
            name=name,
            text=str(text),
            classes=tuple(str(key) for key in styles),
            parent=parent,
            path=_join(parent_path, _segment(name or kind)),
            semantic_role=coerce_role(value.get("role")),
            geometry=dict(value.get("absoluteBoundingBox") or {}),
        )
        nodes.append(node)

        node.children = tuple(
            self._design_node(child, node_id, node.path, nodes)
            for child in self._children(value)
        )
        return node_id

    # ------------------------------------------------------------------
    # Markup documents
    # ------------------------------------------------------------------

    def _markup_node(
        self,
        value: Any,
        parent: NodeId | None,
        parent_path: str,
        nodes: list[TreeNode],
    ) -> NodeId:
        if not isinstance(value, Mapping):
            raise TypeError(f"Markup node must be a mapping, got {type(value)!r}")

        tag = str(value.get("tag", "div")).lower()
        classes = self._classes(value)
        node_id: NodeId = value.get(
            "id", f"{tag}-{'-'.join(classes) or 'no-class'}-{len(nodes)}"
        )

        node = TreeNode(
            id=node_id,
            variant=NodeVariant.MARKUP,
            kind=tag,
            name=tag,
            text=str(value.get("text", "") or ""),
            classes=classes,
            parent=parent,
            path=_join(parent_path, _segment(tag)),
            semantic_role=coerce_role(value.get("role")),
            attributes=dict(value.get("attributes") or {}),
        )
        nodes.append(node)

        node.children = tuple(
            self._markup_node(child, node_id, node.path, nodes)
            for child in self._children(value)
        )
        return node_id

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    @staticmethod
    def _children(value: Mapping[str, Any]) -> Sequence[Any]:
        children = value.get("children") or ()
        if isinstance(children, (str, bytes)) or not isinstance(children, Sequence):
            raise TypeError(f"children must be a sequence, got {type(children)!r}")
        return children

    @staticmethod
    def _classes(value: Mapping[str, Any]) -> tuple[str, ...]:
        classes = value.get("classes")
        if classes is None:
            classes = str(value.get("class", "")).split()
        elif isinstance(classes, str):
            classes = classes.split()
        return tuple(str(c) for c in classes if c)
