from __future__ import annotations

import logging
import threading
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Callable, List, Optional

from ..errors import EmptyDocument, ExtractionFailed
from ..services import extract_text
from ..utils import file_fingerprint, is_plain_text, read_document_bytes
from ..utils.files import FileFingerprint
from .chunker import DEFAULT_MAX_ENTRIES, segment
from .models import KnowledgeBase
from .patterns import DEFAULT_MAX_KEYWORDS
from .qa import DEFAULT_FALLBACK_MESSAGE, AnswerResult, answer
from .retriever import DEFAULT_CONFIDENCE_THRESHOLD

logger = logging.getLogger("changekb")

Extractor = Callable[[bytes], str]


class ReloadStatus(str, Enum):
    LOADED = "loaded"
    MISSING = "missing"
    EXTRACTION_FAILED = "extraction_failed"
    EMPTY = "empty"


def build_knowledge_base(
    text: str,
    *,
    source: Optional[str] = None,
    max_keywords: int = DEFAULT_MAX_KEYWORDS,
    max_fallback_entries: int = DEFAULT_MAX_ENTRIES,
) -> KnowledgeBase:
    """
    Segment extracted text into a new knowledge base snapshot. Explicit Q/A
    blocks win; otherwise the text is chunked by paragraph.
    """
    entries, strategy = segment(
        text or "",
        max_entries=max_fallback_entries,
        max_keywords=max_keywords,
    )
    return KnowledgeBase(
        entries=tuple(entries),
        strategy=strategy,
        source=source,
        loaded_at=datetime.now(timezone.utc),
    )


def load_document_text(path: str | Path, extractor: Extractor = extract_text) -> Optional[str]:
    """
    Return the text of the source document, or None when it does not exist.
    Markdown and plain-text files are read as UTF-8; anything else goes through
    ``extractor``.

    Raises:
        ExtractionFailed: if the extractor cannot read the document.
        EmptyDocument: if the document holds no usable text.
    """
    data = read_document_bytes(path)
    if data is None:
        return None

    if is_plain_text(path):
        text = data.decode("utf-8", errors="replace")
    else:
        text = extractor(data)

    if not text or not text.strip():
        raise EmptyDocument(f"{path} contained no extractable text")
    return text.strip()


class KnowledgeStore:
    """
    Owns the current knowledge base snapshot for one source document.

    Readers take ``snapshot`` without locking; ``reload`` builds the new
    snapshot aside and publishes it with a single assignment.
    """

    def __init__(
        self,
        source_path: str | Path,
        *,
        extractor: Extractor = extract_text,
        max_keywords: int = DEFAULT_MAX_KEYWORDS,
        max_fallback_entries: int = DEFAULT_MAX_ENTRIES,
        threshold: float = DEFAULT_CONFIDENCE_THRESHOLD,
        fallback_message: str = DEFAULT_FALLBACK_MESSAGE,
    ) -> None:
        if not 0.0 <= threshold <= 1.0:
            raise ValueError("threshold must be between 0 and 1")
        if max_keywords < 0 or max_fallback_entries < 0:
            raise ValueError("max_keywords and max_fallback_entries must not be negative")

        self.source_path = Path(source_path)
        self.extractor = extractor
        self.max_keywords = max_keywords
        self.max_fallback_entries = max_fallback_entries
        self.threshold = threshold
        self.fallback_message = fallback_message

        self._snapshot = KnowledgeBase.empty(str(self.source_path))
        self._reload_lock = threading.Lock()
        self._last_fingerprint: Optional[FileFingerprint] = None

    @property
    def snapshot(self) -> KnowledgeBase:
        return self._snapshot

    @property
    def last_fingerprint(self) -> Optional[FileFingerprint]:
        """(size, mtime_ns) of the source as seen by the latest reload."""
        return self._last_fingerprint

    def reload(self) -> ReloadStatus:
        """
        Re-read the source and replace the snapshot. A missing source empties the
        knowledge base; extraction failures and empty documents keep the current
        snapshot. The outcome is reported through the return value.
        """
        with self._reload_lock:
            self._last_fingerprint = file_fingerprint(self.source_path)
            try:
                text = load_document_text(self.source_path, self.extractor)
            except ExtractionFailed as exc:
                logger.warning("[KB] Extraction failed for %s: %s", self.source_path, exc)
                return ReloadStatus.EXTRACTION_FAILED
            except EmptyDocument as exc:
                logger.warning("[KB] %s", exc)
                return ReloadStatus.EMPTY
            except OSError as exc:
                logger.warning("[KB] Unable to read %s: %s", self.source_path, exc)
                return ReloadStatus.EXTRACTION_FAILED

            if text is None:
                logger.info("[KB] No source document found at %s", self.source_path)
                self._snapshot = KnowledgeBase.empty(str(self.source_path))
                return ReloadStatus.MISSING

            knowledge_base = build_knowledge_base(
                text,
                source=str(self.source_path),
                max_keywords=self.max_keywords,
                max_fallback_entries=self.max_fallback_entries,
            )
            if not knowledge_base.entries:
                logger.warning("[KB] %s yielded no entries; keeping previous knowledge", self.source_path)
                return ReloadStatus.EMPTY

            self._snapshot = knowledge_base
            logger.info("[KB] Loaded %s KB: %s entries", knowledge_base.strategy, len(knowledge_base))
            return ReloadStatus.LOADED

    def get_knowledge_base(self) -> List[dict]:
        return self._snapshot.to_list()

    def answer(self, query: str) -> AnswerResult:
        return answer(
            query,
            self._snapshot.entries,
            threshold=self.threshold,
            fallback_message=self.fallback_message,
        )


__all__ = [
    "Extractor",
    "KnowledgeStore",
    "ReloadStatus",
    "build_knowledge_base",
    "load_document_text",
]
