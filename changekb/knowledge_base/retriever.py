from __future__ import annotations

import logging
from typing import Iterable, Sequence

from ..utils.text import normalize, tokenize
from .models import KnowledgeEntry, MatchResult

logger = logging.getLogger("changekb")

DEFAULT_CONFIDENCE_THRESHOLD = 0.35


def score(query: str, patterns: Iterable[str]) -> float:
    """
    Best whole-word coverage of any pattern by the query.

    A pattern's coverage is the share of its words found as whole words in the
    normalised query, so "cat" never matches inside "category".
    """
    padded = f" {normalize(query)} "
    best = 0.0
    for pattern in patterns:
        words = tokenize(pattern)
        if not words:
            continue
        hits = sum(1 for word in words if f" {word} " in padded)
        best = max(best, hits / len(words))
    return best


def best_match(
    query: str,
    entries: Sequence[KnowledgeEntry],
    *,
    threshold: float = DEFAULT_CONFIDENCE_THRESHOLD,
) -> MatchResult:
    """
    Score every entry and return the first one with the highest score, provided
    that score is strictly above ``threshold``. Otherwise ``entry_index`` is
    None and ``score`` carries the best score seen.
    """
    best_index = None
    best_score = 0.0
    for idx, entry in enumerate(entries):
        current = score(query, entry.patterns)
        if current > best_score:
            best_index, best_score = idx, current

    if best_index is not None and best_score > threshold:
        logger.debug("Query %r matched entry %s (score %.3f)", query, best_index, best_score)
        return MatchResult(entry_index=best_index, score=best_score)

    logger.debug("Query %r below threshold %.2f (best %.3f)", query, threshold, best_score)
    return MatchResult(entry_index=None, score=best_score)


__all__ = ["DEFAULT_CONFIDENCE_THRESHOLD", "best_match", "score"]
