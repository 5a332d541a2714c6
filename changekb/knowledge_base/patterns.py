from __future__ import annotations

from typing import List

from ..utils.text import tokenize

DEFAULT_MAX_KEYWORDS = 8
MIN_KEYWORD_LENGTH = 4

STOPWORDS = frozenset(
    {
        "the", "and", "for", "with", "that", "this", "from", "your", "have", "will",
        "into", "about", "after", "before", "when", "what", "how", "why", "who", "are",
        "was", "were", "is", "a", "an", "to", "of", "in", "on", "at",
        "by", "as", "it", "or", "be", "we", "you", "our", "their", "there",
        "any", "can", "do",
    }
)


def build_patterns(question: str, *, max_keywords: int = DEFAULT_MAX_KEYWORDS) -> List[str]:
    """
    Return the question verbatim followed by up to ``max_keywords`` distinct
    keywords taken from it, in first-seen order. Short tokens and stop words
    are skipped.
    """
    if max_keywords < 0:
        raise ValueError("max_keywords must not be negative")

    keywords: list[str] = []
    seen: set[str] = set()
    for token in tokenize(question):
        if len(keywords) >= max_keywords:
            break
        if len(token) < MIN_KEYWORD_LENGTH or token in STOPWORDS or token in seen:
            continue
        seen.add(token)
        keywords.append(token)

    return [question] + keywords


__all__ = ["DEFAULT_MAX_KEYWORDS", "STOPWORDS", "build_patterns"]
