"""
Knowledge base module: document segmentation, keyword patterns, and matching.
"""

from .builder import KnowledgeStore, ReloadStatus, build_knowledge_base, load_document_text  # noqa: F401
from .chunker import parse_structured, parse_unstructured, segment  # noqa: F401
from .models import Answer, Fallback, KnowledgeBase, KnowledgeEntry, MatchResult  # noqa: F401
from .patterns import STOPWORDS, build_patterns  # noqa: F401
from .qa import DEFAULT_FALLBACK_MESSAGE, answer, format_answer  # noqa: F401
from .retriever import DEFAULT_CONFIDENCE_THRESHOLD, best_match, score  # noqa: F401
from .watcher import SourceWatcher  # noqa: F401

__all__ = [
    "Answer",
    "DEFAULT_CONFIDENCE_THRESHOLD",
    "DEFAULT_FALLBACK_MESSAGE",
    "Fallback",
    "KnowledgeBase",
    "KnowledgeEntry",
    "KnowledgeStore",
    "MatchResult",
    "ReloadStatus",
    "STOPWORDS",
    "SourceWatcher",
    "answer",
    "best_match",
    "build_knowledge_base",
    "build_patterns",
    "format_answer",
    "load_document_text",
    "parse_structured",
    "parse_unstructured",
    "score",
    "segment",
]
