"""TreeNode dataclass and the enums describing both tree variants.

A single ``TreeNode`` type carries nodes of the design tree (frames,
shapes, text layers) and of the markup tree (tags with classes and text).
Both variants expose the same capability surface so that every matching
strategy can treat them uniformly.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum, auto
from typing import Any

NodeId = str | int

PATH_SEPARATOR = "/"


class NodeVariant(StrEnum):
    """Which of the two trees a node belongs to.

    - DESIGN -> "design" : layout node with geometry and style metadata
    - MARKUP -> "markup" : rendered element with tag, classes and text
    """

    DESIGN = auto()
    MARKUP = auto()


class SemanticRole(StrEnum):
    """Coarse functional category a node plays, independent of tag or type."""

    HEADER = "header"
    FOOTER = "footer"
    NAVIGATION = "navigation"
    MAIN_CONTENT = "main-content"
    SECTION = "section"
    ARTICLE = "article"
    SIDEBAR = "sidebar"
    HEADING = "heading"
    INTERACTIVE = "interactive"
    LINK = "link"
    FORM = "form"
    IMAGE = "image"
    HERO_SECTION = "hero-section"
    CONTENT_CARD = "content-card"
    LIST = "list"
    GENERIC = "generic"


@dataclass(slots=True)
class TreeNode:
    """A node of either the design tree or the markup tree.

    Attributes:
        id:             Identifier, unique within its own tree.
        variant:        DESIGN or MARKUP.
        kind:           Type tag: design node type (``FRAME``, ``TEXT``...)
                        or the markup tag name.
        name:           Author-assigned label (design) or tag name (markup).
        text:           Extracted text content, possibly empty.
        classes:        CSS class names (markup) or names of the declared
                        style groups (design).
        children:       Ordered child ids; empty for leaves.
        parent:         Id of the parent node, ``None`` for a root.
        path:           Slash-joined ancestor-name chain ending with this
                        node.  Empty means "derive it while indexing".
        semantic_role:  Pre-declared role, or ``None`` to infer one.  Raw
                        strings are mapped by ``coerce_role`` at
                        indexing time.
        geometry:       Optional bounding box or layout metadata.
        attributes:     Optional markup attributes / design properties.
    """

    id: NodeId
    variant: NodeVariant
    kind: str
    name: str = ""
    text: str = ""
    classes: tuple[str, ...] = ()
    children: tuple[NodeId, ...] = ()
    parent: NodeId | None = None
    path: str = ""
    semantic_role: SemanticRole | str | None = None
    geometry: dict[str, Any] = field(default_factory=dict)
    attributes: dict[str, Any] = field(default_factory=dict)

    @property
    def level(self) -> int:
        """Depth of the node: 0 for a root, derived from ``path``."""
        if not self.path:
            return 0
        return len(self.path.split(PATH_SEPARATOR)) - 1

    @property
    def is_root(self) -> bool:
        return self.parent is None

    @property
    def is_leaf(self) -> bool:
        return not self.children
