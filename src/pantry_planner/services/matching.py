"""Approximate matching of free-text labels against catalog entries."""

from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")

DEFAULT_MATCH_THRESHOLD = 0.4
EXACT_SCORE = 1.0
CONTAINMENT_SCORE = 0.8
# Keeps two different strings with identical bigram sets below an exact match.
_MAX_APPROXIMATE_SCORE = 0.99


@dataclass(frozen=True)
class MatchResult(Generic[T]):
    """Catalog entry chosen for a query and its similarity score."""

    item: T
    score: float


def normalize_label(value: str) -> str:
    """Lower-case a label and collapse runs of whitespace."""
    return " ".join(value.split()).lower()


def similarity_score(a: str, b: str) -> float:
    """Return a similarity between 0 and 1 for two labels."""
    left = normalize_label(a)
    right = normalize_label(b)
    if left == right:
        return EXACT_SCORE
    if not left or not right:
        return 0.0
    if left in right or right in left:
        return CONTAINMENT_SCORE

    left_bigrams = _bigrams(left)
    right_bigrams = _bigrams(right)
    if not left_bigrams or not right_bigrams:
        return 0.0
    overlap = len(left_bigrams & right_bigrams)
    dice = 2 * overlap / (len(left_bigrams) + len(right_bigrams))
    return min(dice, _MAX_APPROXIMATE_SCORE)


def find_best_match(
    query: str,
    catalog: Sequence[T],
    name_of: Callable[[T], str],
    threshold: float = DEFAULT_MATCH_THRESHOLD,
) -> MatchResult[T] | None:
    """Return the closest catalog entry for a query, or None below threshold.

    An exact case-insensitive match wins immediately. Otherwise ties on score
    go to the shorter name, then to the earlier catalog entry.
    """
    normalized_query = normalize_label(query)
    if not normalized_query or not catalog:
        return None

    for item in catalog:
        if normalize_label(name_of(item)) == normalized_query:
            return MatchResult(item=item, score=EXACT_SCORE)

    best: MatchResult[T] | None = None
    best_length = 0
    for item in catalog:
        name = normalize_label(name_of(item))
        score = similarity_score(normalized_query, name)
        if score < threshold:
            continue
        if (
            best is None
            or score > best.score
            or (score == best.score and len(name) < best_length)
        ):
            best = MatchResult(item=item, score=score)
            best_length = len(name)
    return best


def _bigrams(value: str) -> set[str]:
    return {value[index : index + 2] for index in range(len(value) - 1)}
