from __future__ import annotations

import logging
import re
from typing import List, Tuple

from .models import KnowledgeEntry, Strategy
from .patterns import DEFAULT_MAX_KEYWORDS, build_patterns

logger = logging.getLogger("changekb")

DEFAULT_MAX_ENTRIES = 300
MAX_LABEL_LENGTH = 120
ELLIPSIS = "…"

# A "Q:" line, then an "A:" line whose content runs until the next "Q:" line
# or the end of the text.
_QA_BLOCK = re.compile(
    r"(?:^|\n)\s*Q:[ \t]*([^\n]+?)\s*\n[ \t]*A:[ \t]*(.*?)(?=\n[ \t]*Q:|\Z)",
    re.IGNORECASE | re.DOTALL,
)
_PARAGRAPH_BREAK = re.compile(r"\n{2,}")
_SENTENCE_END = re.compile(r"[.?!](?=\s)")


def parse_structured(text: str, *, max_keywords: int = DEFAULT_MAX_KEYWORDS) -> List[KnowledgeEntry]:
    """
    Extract explicit ``Q:``/``A:`` blocks in document order.

    Returns an empty list when the text holds no such block; callers use that
    as the signal to fall back to paragraph chunking.
    """
    if not text:
        return []

    entries: list[KnowledgeEntry] = []
    for match in _QA_BLOCK.finditer(_normalize_newlines(text)):
        label = match.group(1).strip()
        body = match.group(2).strip()
        if not label or not body:
            logger.debug("Skipping incomplete Q/A block at offset %s", match.start())
            continue
        entries.append(
            KnowledgeEntry(
                label=label,
                body=body,
                patterns=tuple(build_patterns(label, max_keywords=max_keywords)),
            )
        )
    return entries


def parse_unstructured(
    text: str,
    *,
    max_entries: int = DEFAULT_MAX_ENTRIES,
    max_keywords: int = DEFAULT_MAX_KEYWORDS,
) -> List[KnowledgeEntry]:
    """
    Chunk text into paragraphs (split on blank lines). Each paragraph becomes
    one entry labelled by its first sentence. Paragraphs past ``max_entries``
    are dropped.
    """
    if max_entries < 0:
        raise ValueError("max_entries must not be negative")
    if not text:
        return []

    entries: list[KnowledgeEntry] = []
    for paragraph in _PARAGRAPH_BREAK.split(_normalize_newlines(text)):
        if len(entries) >= max_entries:
            break
        para = paragraph.strip()
        if not para:
            continue
        label = _summary_label(para)
        entries.append(
            KnowledgeEntry(
                label=label,
                body=para,
                patterns=tuple(build_patterns(label, max_keywords=max_keywords)),
            )
        )
    return entries


def segment(
    text: str,
    *,
    max_entries: int = DEFAULT_MAX_ENTRIES,
    max_keywords: int = DEFAULT_MAX_KEYWORDS,
) -> Tuple[List[KnowledgeEntry], Strategy]:
    """
    Structured parsing first; paragraph chunking only when no Q/A block exists.
    """
    structured = parse_structured(text, max_keywords=max_keywords)
    if structured:
        return structured, "structured"

    unstructured = parse_unstructured(text, max_entries=max_entries, max_keywords=max_keywords)
    if unstructured:
        return unstructured, "fallback"
    return [], "empty"


def _summary_label(paragraph: str) -> str:
    match = _SENTENCE_END.search(paragraph)
    label = paragraph[: match.end()] if match else paragraph
    if len(label) > MAX_LABEL_LENGTH:
        label = label[: MAX_LABEL_LENGTH - 3] + ELLIPSIS
    return label


def _normalize_newlines(text: str) -> str:
    return re.sub(r"\r\n?", "\n", text)


__all__ = ["DEFAULT_MAX_ENTRIES", "parse_structured", "parse_unstructured", "segment"]
