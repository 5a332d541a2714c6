from __future__ import annotations

from typing import Sequence, Union

from .models import Answer, Fallback, KnowledgeEntry
from .retriever import DEFAULT_CONFIDENCE_THRESHOLD, best_match

DEFAULT_FALLBACK_MESSAGE = "I couldn't confidently match that. Please rephrase."

AnswerResult = Union[Answer, Fallback]


def answer(
    query: str,
    entries: Sequence[KnowledgeEntry],
    *,
    threshold: float = DEFAULT_CONFIDENCE_THRESHOLD,
    fallback_message: str = DEFAULT_FALLBACK_MESSAGE,
) -> AnswerResult:
    """
    Answer a query from a knowledge base snapshot: the matched entry's body with
    its confidence, or a fallback message when nothing clears the threshold.
    """
    result = best_match(query, entries, threshold=threshold)
    if not result.matched:
        return Fallback(message=fallback_message, score=result.score)

    entry = entries[result.entry_index]
    return Answer(
        body=entry.body,
        confidence_percent=confidence_percent(result.score),
        label=entry.label,
        entry_index=result.entry_index,
    )


def confidence_percent(score: float) -> int:
    # half-up, not banker's rounding
    return int(score * 100 + 0.5)


def format_answer(result: AnswerResult) -> str:
    if isinstance(result, Answer):
        return f"{result.body}\n(Match confidence {result.confidence_percent}%)"
    return f"{result.message}\n(Low confidence)"


__all__ = [
    "AnswerResult",
    "DEFAULT_FALLBACK_MESSAGE",
    "answer",
    "confidence_percent",
    "format_answer",
]
