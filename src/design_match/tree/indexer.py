"""TreeIndexer: validates a node set and builds an ``IndexedTree``.

A single iterative depth-first traversal from the roots:

- registers every node by id (traversal order is preserved),
- derives missing paths from the ancestor-name chain,
- registers normalized non-empty text in the content index,
- infers each node's semantic role,
- accumulates depth, branching and kind statistics.

The traversal uses an explicit stack, so arbitrarily deep trees never hit
the interpreter recursion limit, and a visited set, so cycles and shared
children are reported instead of looped over.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field, replace

from design_match.exceptions import (
    CycleError,
    DuplicateNodeError,
    UnresolvedChildError,
)
from design_match.similarity.text import normalize
from design_match.tree.nodes import (
    PATH_SEPARATOR,
    NodeId,
    NodeVariant,
    SemanticRole,
    TreeNode,
)
from design_match.tree.roles import infer_role

__all__ = ["IndexedTree", "TreeIndexer", "TreeStatistics"]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TreeStatistics:
    """Aggregate statistics gathered while indexing.

    Attributes:
        node_count:       Total number of nodes.
        max_depth:        Largest ``level`` in the tree (0 for a lone root).
        kind_counts:      Histogram of node kinds.
        depth_counts:     Histogram of node levels.
        leaf_count:       Nodes without children.
        branch_count:     Nodes with at least one child.
        branching_factor: Mean child count over branch nodes (0 without any).
        text_node_count:  Nodes carrying non-empty normalized text.
    """

    node_count: int = 0
    max_depth: int = 0
    kind_counts: dict[str, int] = field(default_factory=dict)
    depth_counts: dict[int, int] = field(default_factory=dict)
    leaf_count: int = 0
    branch_count: int = 0
    branching_factor: float = 0.0
    text_node_count: int = 0


@dataclass(frozen=True, slots=True)
class IndexedTree:
    """A validated tree with constant-time lookups.

    Attributes:
        nodes:         id -> node, in traversal (pre-order) order.
        content_index: normalized text -> ids sharing it, in traversal order.
        roles:         id -> semantic role (declared or inferred).
        roots:         Root ids in input order.
        statistics:    Aggregate statistics.
        variant:       Variant of the nodes; ``None`` for an empty tree.
    """

    nodes: dict[NodeId, TreeNode]
    content_index: dict[str, tuple[NodeId, ...]]
    roles: dict[NodeId, SemanticRole]
    roots: tuple[NodeId, ...]
    statistics: TreeStatistics
    variant: NodeVariant | None = None

    def __len__(self) -> int:
        return len(self.nodes)

    def __contains__(self, node_id: object) -> bool:
        return node_id in self.nodes

    def __iter__(self) -> Iterator[TreeNode]:
        return iter(self.nodes.values())

    @property
    def is_empty(self) -> bool:
        return not self.nodes

    def get(self, node_id: NodeId) -> TreeNode:
        """Return the node with ``node_id``; ``KeyError`` if absent."""
        return self.nodes[node_id]

    def children_of(self, node_id: NodeId) -> list[TreeNode]:
        return [self.nodes[child] for child in self.nodes[node_id].children]

    def role_of(self, node_id: NodeId) -> SemanticRole:
        return self.roles[node_id]


class TreeIndexer:
    """Builds ``IndexedTree`` instances from flat node collections.

    The indexer is stateless; one instance may index any number of trees,
    from any number of threads.

    Example::

        nodes = TreeBuilder().build_design(document)
        tree = TreeIndexer().index(nodes)
        tree.statistics.max_depth
    """

    def index(self, nodes: Iterable[TreeNode]) -> IndexedTree:
        """Validate ``nodes`` as a proper tree (or forest) and index it.

        Args:
            nodes: Every node of the tree.  Roots are the nodes whose
                ``parent`` is ``None``.  May be empty.

        Returns:
            The indexed tree.

        Raises:
            DuplicateNodeError:   Two nodes share an id.
            UnresolvedChildError: A child id is not among ``nodes``.
            CycleError:           A node is reachable twice, its parent
                reference contradicts the child lists, or it cannot be
                reached from any root.
        """
        by_id: dict[NodeId, TreeNode] = {}
        for node in nodes:
            if node.id in by_id:
                raise DuplicateNodeError(
                    f"Duplicate node id {node.id!r}", node_id=node.id
                )
            by_id[node.id] = node

        if not by_id:
            return IndexedTree(
                nodes={},
                content_index={},
                roles={},
                roots=(),
                statistics=TreeStatistics(),
            )

        roots = tuple(
            node_id for node_id, node in by_id.items() if node.parent is None
        )
        if not roots:
            first = next(iter(by_id))
            raise CycleError("Tree has no root node", node_id=first)

        indexed: dict[NodeId, TreeNode] = {}
        content: dict[str, list[NodeId]] = {}
        roles: dict[NodeId, SemanticRole] = {}
        kinds: Counter[str] = Counter()
        depths: Counter[int] = Counter()
        leaf_count = branch_count = total_children = text_nodes = 0

        # (node id, expected parent id, parent path)
        stack: list[tuple[NodeId, NodeId | None, str]] = [
            (root, None, "") for root in reversed(roots)
        ]
        while stack:
            node_id, expected_parent, parent_path = stack.pop()
            if node_id in indexed:
                raise CycleError(
                    f"Node {node_id!r} is reachable more than once",
                    node_id=node_id,
                )

            node = by_id[node_id]
            if node.parent != expected_parent:
                raise CycleError(
                    f"Node {node_id!r} declares parent {node.parent!r} but is "
                    f"listed as a child of {expected_parent!r}",
                    node_id=node_id,
                )

            if not node.path:
                segment = (node.name or node.kind).replace(PATH_SEPARATOR, "-")
                path = segment
                if parent_path:
                    path = f"{parent_path}{PATH_SEPARATOR}{segment}"
                node = replace(node, path=path)

            indexed[node_id] = node
            roles[node_id] = infer_role(node)
            kinds[node.kind] += 1
            depths[node.level] += 1

            key = normalize(node.text)
            if key:
                content.setdefault(key, []).append(node_id)
                text_nodes += 1

            if node.children:
                branch_count += 1
                total_children += len(node.children)
            else:
                leaf_count += 1

            for child_id in reversed(node.children):
                if child_id not in by_id:
                    raise UnresolvedChildError(
                        f"Child {child_id!r} of node {node_id!r} does not resolve",
                        node_id=node_id,
                        child_id=child_id,
                    )
                stack.append((child_id, node_id, node.path))

        if len(indexed) < len(by_id):
            unreachable = [node_id for node_id in by_id if node_id not in indexed]
            raise CycleError(
                f"{len(unreachable)} node(s) are not reachable from any root",
                node_id=unreachable[0],
                details={"unreachable": unreachable},
            )

        statistics = TreeStatistics(
            node_count=len(indexed),
            max_depth=max(depths),
            kind_counts=dict(kinds),
            depth_counts=dict(sorted(depths.items())),
            leaf_count=leaf_count,
            branch_count=branch_count,
            branching_factor=total_children / branch_count if branch_count else 0.0,
            text_node_count=text_nodes,
        )
        logger.debug(
            "Indexed %d nodes (max depth %d, %d distinct texts)",
            statistics.node_count,
            statistics.max_depth,
            len(content),
        )

        return IndexedTree(
            nodes=indexed,
            content_index={key: tuple(ids) for key, ids in content.items()},
            roles=roles,
            roots=roots,
            statistics=statistics,
            variant=indexed[roots[0]].variant,
        )
