"""Tree subpackage: node model, builders, role inference and indexing.

Re-exports the public API for the tree module:
- TreeNode, NodeVariant, SemanticRole: the node model shared by both trees
- TreeBuilder: converts nested design/markup mappings into node lists
- TreeIndexer, IndexedTree, TreeStatistics: validation and O(1) lookups
- infer_role, coerce_role: symmetric semantic role inference
"""

from design_match.tree.builder import TreeBuilder
from design_match.tree.indexer import IndexedTree, TreeIndexer, TreeStatistics
from design_match.tree.nodes import NodeId, NodeVariant, SemanticRole, TreeNode
from design_match.tree.roles import coerce_role, infer_role

__all__ = [
    "IndexedTree",
    "NodeId",
    "NodeVariant",
    "SemanticRole",
    "TreeBuilder",
    "TreeIndexer",
    "TreeNode",
    "TreeStatistics",
    "coerce_role",
    "infer_role",
]
