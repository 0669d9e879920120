"""Fixed-shape numeric feature vectors for the fallback matcher.

Both tree variants encode to the same nine dimensions so that cosine
similarity between a design node and a markup node is always defined::

    [text length, word count, has digit, child count, depth,
     role flag 1, role flag 2, role flag 3, class/style count]

Role flags:
- markup: is-button, is-heading, is-image
- design: is-shape, is-text, is-frame

The depth dimension is ``TreeNode.level`` (0 for a root).  The
hierarchy analyzer works with path lengths (``level + 1``) instead; the
two never mix, since cosine similarity only compares vectors built here.
"""

from __future__ import annotations

import re

import numpy as np

from design_match.tree.nodes import NodeVariant, TreeNode

__all__ = ["FEATURE_DIMENSIONS", "cosine_similarity", "feature_vector"]

FEATURE_DIMENSIONS = 9

_DIGIT = re.compile(r"\d")

_HEADING_TAGS = frozenset({"h1", "h2", "h3", "h4", "h5", "h6"})
_IMAGE_TAGS = frozenset({"img", "picture", "svg"})

_SHAPE_TYPES = frozenset(
    {"RECTANGLE", "ELLIPSE", "POLYGON", "STAR", "VECTOR", "LINE", "BOOLEAN_OPERATION"}
)
_FRAME_TYPES = frozenset({"FRAME", "COMPONENT", "COMPONENT_SET", "INSTANCE"})


def feature_vector(node: TreeNode, variant: NodeVariant | None = None) -> np.ndarray:
    """Encode ``node`` as a float64 vector of length ``FEATURE_DIMENSIONS``.

    Args:
        node:    The node to encode.
        variant: Encode as this variant; defaults to ``node.variant``.

    Returns:
        Shape ``(FEATURE_DIMENSIONS,)`` float64 array.
    """
    variant = variant if variant is not None else node.variant
    text = node.text or ""
    kind = node.kind.strip()

    if variant == NodeVariant.MARKUP:
        tag = kind.lower()
        role_flags = [
            float(tag == "button"),
            float(tag in _HEADING_TAGS),
            float(tag in _IMAGE_TAGS),
        ]
    else:
        node_type = kind.upper()
        role_flags = [
            float(node_type in _SHAPE_TYPES),
            float(node_type == "TEXT"),
            float(node_type in _FRAME_TYPES),
        ]

    return np.array(
        [
            float(len(text)),
            float(len(text.split())),
            float(bool(_DIGIT.search(text))),
            float(len(node.children)),
            float(node.level),
            *role_flags,
            float(len(node.classes)),
        ],
        dtype=np.float64,
    )


def cosine_similarity(u: np.ndarray, v: np.ndarray) -> float:
    """Cosine similarity of two dense vectors; 0.0 if either has zero magnitude."""
    norm_u = float(np.linalg.norm(u))
    norm_v = float(np.linalg.norm(v))
    if norm_u == 0.0 or norm_v == 0.0:
        return 0.0
    return float(np.clip(np.dot(u, v) / (norm_u * norm_v), 0.0, 1.0))
