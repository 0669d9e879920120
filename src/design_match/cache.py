"""ResultCache: explicitly-owned LRU cache for indexed trees and results.

The cache is never global: callers create one and pass it to the resolver
(or to ``match_trees``).  Keys are content digests, so structurally
identical inputs share entries even when they are different objects.

- ``get_or_index``:   digest of one node set -> ``IndexedTree``.
- ``get_or_resolve``: digest of both node sets plus the config -> result.

Writers follow an insert-if-absent discipline under a lock: computation
happens outside the lock, and when two threads race on the same key the
first stored value wins and is returned to both.

Example::

    from design_match.cache import ResultCache
    from design_match.api import match_trees

    cache = ResultCache(max_size=64)
    first = match_trees(design_nodes, markup_nodes, cache=cache)
    again = match_trees(design_nodes, markup_nodes, cache=cache)
    assert again is first
"""

from __future__ import annotations

import hashlib
import json
import logging
import threading
from collections.abc import Callable, Iterable, Sequence
from dataclasses import asdict
from typing import TYPE_CHECKING, Any, TypeVar

from cachetools import LRUCache

from design_match.tree.nodes import TreeNode

if TYPE_CHECKING:
    from design_match.algorithm.config import MatcherConfig
    from design_match.result import MatchResult
    from design_match.tree.indexer import IndexedTree, TreeIndexer

__all__ = ["ResultCache", "tree_digest"]

logger = logging.getLogger(__name__)

_T = TypeVar("_T")


def tree_digest(nodes: Iterable[TreeNode]) -> str:
    """Return a SHA-256 hex digest over the content of ``nodes``.

    Every node field takes part, in input order, so any change to ids,
    links, text, classes or metadata yields a different digest.
    """
    payload = [asdict(node) for node in nodes]
    encoded = json.dumps(payload, sort_keys=True, default=str).encode("utf-8")
    return hashlib.sha256(encoded).hexdigest()


class ResultCache:
    """LRU-backed, thread-safe cache owned by the caller.

    Args:
        max_size: Maximum number of entries (indexed trees and results
            share the budget).  Defaults to 128.  When exceeded, the
            least-recently-used entry is silently evicted.
    """

    def __init__(self, max_size: int = 128) -> None:
        self._cache: LRUCache[tuple[str, ...], Any] = LRUCache(maxsize=max_size)
        self._lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def max_size(self) -> int:
        """The maximum number of entries this cache can hold."""
        return int(self._cache.maxsize)

    @property
    def curr_size(self) -> int:
        """The current number of entries stored in the cache."""
        return int(self._cache.currsize)

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def get_or_index(
        self, nodes: Sequence[TreeNode], indexer: TreeIndexer
    ) -> IndexedTree:
        """Return the indexed form of ``nodes``, indexing on a miss.

        Malformed trees raise from ``indexer.index`` and are not cached.
        """
        key = ("tree", tree_digest(nodes))
        return self._get_or_compute(key, lambda: indexer.index(nodes))

    def get_or_resolve(
        self,
        design_nodes: Sequence[TreeNode],
        markup_nodes: Sequence[TreeNode],
        config: MatcherConfig,
        compute: Callable[[], MatchResult],
    ) -> MatchResult:
        """Return the cached result for this input pair, or ``compute()`` it."""
        key = (
            "result",
            tree_digest(design_nodes),
            tree_digest(markup_nodes),
            repr(config),
        )
        return self._get_or_compute(key, compute)

    def clear(self) -> None:
        """Drop every entry and reset the hit/miss counters."""
        with self._lock:
            self._cache.clear()
            self.hits = 0
            self.misses = 0

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _get_or_compute(
        self, key: tuple[str, ...], compute: Callable[[], _T]
    ) -> _T:
        with self._lock:
            if key in self._cache:
                self.hits += 1
                logger.debug("Cache hit for %s entry", key[0])
                return self._cache[key]  # type: ignore[no-any-return]
            self.misses += 1

        logger.debug("Cache miss for %s entry", key[0])
        value = compute()

        with self._lock:
            # another thread may have stored the same key meanwhile
            if key in self._cache:
                return self._cache[key]  # type: ignore[no-any-return]
            self._cache[key] = value
        return value
