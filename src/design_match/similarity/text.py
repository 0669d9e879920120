"""Text similarity primitives: normalization, tokenization and scoring.

All functions are pure and total: they never raise for string input and
map empty input to a well-defined value.

Normalization keeps every Unicode word character (Latin, Cyrillic and the
rest of ``\\w``), so Ukrainian and English copy normalize the same way.
"""

from __future__ import annotations

import re
from collections import Counter
from collections.abc import Iterable, Mapping
from dataclasses import dataclass

__all__ = [
    "STOP_WORDS",
    "TextComparison",
    "compare_text",
    "edit_similarity",
    "keyword_similarity",
    "keywords",
    "levenshtein_distance",
    "normalize",
    "set_overlap_similarity",
    "term_frequency",
    "token_overlap",
    "tokenize",
    "vector_similarity",
]

# Whitespace runs; \s is Unicode-aware and also covers non-breaking spaces
_WHITESPACE = re.compile(r"\s+")

# Anything that is neither a word character nor whitespace
_PUNCT = re.compile(r"[^\w\s]")

# Separators used in author-assigned names and class lists
_NAME_SEP = re.compile(r"[\s\-_/]+")

STOP_WORDS: frozenset[str] = frozenset(
    ["і", "та", "або", "але", "що", "як", "в", "на", "з", "до", "для"]
    + ["and", "or", "but", "the", "a", "an", "in", "on", "at", "to", "for"]
)


def normalize(text: str, keep: str = "") -> str:
    """Lowercase, strip punctuation, collapse whitespace and trim.

    Args:
        text: Raw text, possibly empty.
        keep: Extra non-word characters to preserve (e.g. ``"-"``).

    Returns:
        The normalized string; ``""`` for empty or punctuation-only input.
    """
    if not text:
        return ""
    s = _WHITESPACE.sub(" ", text.lower())
    if keep:
        s = re.sub(rf"[^\w\s{re.escape(keep)}]", "", s)
    else:
        s = _PUNCT.sub("", s)
    return " ".join(s.split())


def tokenize(text: str) -> list[str]:
    """Split normalized text into words."""
    return normalize(text).split()


def levenshtein_distance(a: str, b: str) -> int:
    """Compute the Levenshtein (edit) distance between two strings.

    Rolling-row dynamic programming; the shorter string drives the row
    allocation.
    """
    if a == b:
        return 0

    if len(a) < len(b):
        a, b = b, a

    if len(b) == 0:
        return len(a)

    prev_row = list(range(len(b) + 1))

    for i, ch_a in enumerate(a):
        curr_row = [i + 1] + [0] * len(b)
        for j, ch_b in enumerate(b):
            insert_cost = curr_row[j] + 1
            delete_cost = prev_row[j + 1] + 1
            replace_cost = prev_row[j] + (0 if ch_a == ch_b else 1)
            curr_row[j + 1] = min(insert_cost, delete_cost, replace_cost)
        prev_row = curr_row

    return prev_row[len(b)]


def edit_similarity(a: str, b: str) -> float:
    """Return ``1 - levenshtein(a, b) / max(len(a), len(b))``.

    Both empty -> 1.0; exactly one empty -> 0.0.  Symmetric and reflexive.
    The inputs are compared as given; normalize them first if needed.
    """
    if not a and not b:
        return 1.0
    if not a or not b:
        return 0.0
    distance = levenshtein_distance(a, b)
    return 1.0 - distance / max(len(a), len(b))


def set_overlap_similarity(a: str, b: str) -> float:
    """Jaccard similarity of the normalized word sets of ``a`` and ``b``."""
    words_a = set(tokenize(a))
    words_b = set(tokenize(b))

    if not words_a and not words_b:
        return 1.0
    if not words_a or not words_b:
        return 0.0

    return len(words_a & words_b) / len(words_a | words_b)


def term_frequency(text: str) -> dict[str, float]:
    """Build a sparse term-frequency vector scaled by its maximum frequency.

    Stop words are dropped.  The most frequent term has weight 1.0.
    """
    counts = Counter(word for word in tokenize(text) if word not in STOP_WORDS)
    if not counts:
        return {}
    max_freq = max(counts.values())
    return {term: freq / max_freq for term, freq in counts.items()}


def vector_similarity(u: Mapping[str, float], v: Mapping[str, float]) -> float:
    """Cosine similarity of two sparse term vectors, clipped to [0, 1].

    Returns 0.0 whenever either vector has zero magnitude.
    """
    dot = sum(weight * v.get(term, 0.0) for term, weight in u.items())
    magnitude_u = sum(weight * weight for weight in u.values()) ** 0.5
    magnitude_v = sum(weight * weight for weight in v.values()) ** 0.5
    if not magnitude_u or not magnitude_v:
        return 0.0
    return min(1.0, max(0.0, dot / (magnitude_u * magnitude_v)))


def keywords(text: str, limit: int = 10) -> list[str]:
    """Most frequent non-stop words longer than two characters.

    Ties keep first-occurrence order.
    """
    counts = Counter(
        word for word in tokenize(text) if word not in STOP_WORDS and len(word) > 2
    )
    return [word for word, _ in counts.most_common(limit)]


def keyword_similarity(a: str, b: str) -> float:
    """Dice overlap of the keyword lists plus 0.1 per aligned position, capped at 1."""
    keywords_a = keywords(a)
    keywords_b = keywords(b)

    if not keywords_a and not keywords_b:
        return 1.0
    if not keywords_a or not keywords_b:
        return 0.0

    common = [k for k in keywords_a if k in keywords_b]
    similarity = 2 * len(common) / (len(keywords_a) + len(keywords_b))
    order_bonus = 0.1 * sum(
        1 for ka, kb in zip(keywords_a, keywords_b, strict=False) if ka == kb
    )
    return min(1.0, similarity + order_bonus)


def token_overlap(left: Iterable[str], right: Iterable[str]) -> float:
    """Share of words of the longer label list that overlap the other side.

    Labels are split on whitespace, dashes, underscores and slashes.  A
    word counts as shared when it contains, or is contained in, any word
    on the other side.  Returns 0.0 when either side has no words.
    """
    left_words = [w for w in _NAME_SEP.split(" ".join(left).lower()) if w]
    right_words = [w for w in _NAME_SEP.split(" ".join(right).lower()) if w]

    if not left_words or not right_words:
        return 0.0

    common = [
        word
        for word in left_words
        if any(other in word or word in other for other in right_words)
    ]
    return min(1.0, len(common) / max(len(left_words), len(right_words)))


@dataclass(frozen=True, slots=True)
class TextComparison:
    """Every text similarity measure for a pair of strings.

    Attributes:
        exact:   True when the normalized strings are equal.
        edit:    Edit similarity of the normalized strings.
        jaccard: Word-set overlap.
        cosine:  Term-frequency cosine.
        keyword: Keyword overlap with order bonus.
        overall: ``0.3*edit + 0.2*jaccard + 0.2*cosine + 0.3*keyword``.
    """

    exact: bool
    edit: float
    jaccard: float
    cosine: float
    keyword: float
    overall: float


def compare_text(a: str, b: str) -> TextComparison:
    """Compare two strings with every available text measure."""
    norm_a = normalize(a)
    norm_b = normalize(b)

    edit = edit_similarity(norm_a, norm_b)
    jaccard = set_overlap_similarity(a, b)
    cosine = vector_similarity(term_frequency(a), term_frequency(b))
    keyword = keyword_similarity(a, b)
    overall = 0.3 * edit + 0.2 * jaccard + 0.2 * cosine + 0.3 * keyword

    return TextComparison(
        exact=norm_a == norm_b,
        edit=edit,
        jaccard=jaccard,
        cosine=cosine,
        keyword=keyword,
        overall=overall,
    )
