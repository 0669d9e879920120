"""Similarity primitives over text and numeric feature vectors.

Re-exports the stateless helpers used by the indexer, the strategies
and the resolver.
"""

from design_match.similarity.text import (
    TextComparison,
    compare_text,
    edit_similarity,
    keywords,
    normalize,
    set_overlap_similarity,
    term_frequency,
    token_overlap,
    tokenize,
    vector_similarity,
)
from design_match.similarity.vectors import (
    FEATURE_DIMENSIONS,
    cosine_similarity,
    feature_vector,
)

__all__ = [
    "FEATURE_DIMENSIONS",
    "TextComparison",
    "compare_text",
    "cosine_similarity",
    "edit_similarity",
    "feature_vector",
    "keywords",
    "normalize",
    "set_overlap_similarity",
    "term_frequency",
    "token_overlap",
    "tokenize",
    "vector_similarity",
]
