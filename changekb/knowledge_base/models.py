from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterator, List, Literal, Optional, Tuple

Strategy = Literal["structured", "fallback", "empty"]


@dataclass(frozen=True)
class KnowledgeEntry:
    """One question-label/answer-body pair with the patterns used to match it."""

    label: str
    body: str
    patterns: Tuple[str, ...]

    def to_dict(self) -> dict:
        return {
            "label": self.label,
            "body": self.body,
            "patterns": list(self.patterns),
        }


@dataclass(frozen=True)
class KnowledgeBase:
    """
    Immutable snapshot of every entry extracted from one version of the source
    document. A reload builds a new snapshot instead of mutating this one.
    """

    entries: Tuple[KnowledgeEntry, ...] = ()
    strategy: Strategy = "empty"
    source: Optional[str] = None
    loaded_at: Optional[datetime] = field(default=None, compare=False)

    @classmethod
    def empty(cls, source: Optional[str] = None) -> "KnowledgeBase":
        return cls(entries=(), strategy="empty", source=source)

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[KnowledgeEntry]:
        return iter(self.entries)

    def __getitem__(self, index: int) -> KnowledgeEntry:
        return self.entries[index]

    def to_list(self) -> List[dict]:
        return [entry.to_dict() for entry in self.entries]


@dataclass(frozen=True)
class MatchResult:
    entry_index: Optional[int]
    score: float

    @property
    def matched(self) -> bool:
        return self.entry_index is not None


@dataclass(frozen=True)
class Answer:
    body: str
    confidence_percent: int
    label: str
    entry_index: int

    def to_dict(self) -> dict:
        return {
            "body": self.body,
            "confidencePercent": self.confidence_percent,
            "label": self.label,
            "entryIndex": self.entry_index,
        }


@dataclass(frozen=True)
class Fallback:
    """Low-confidence outcome: no entry cleared the threshold."""

    message: str
    score: float

    def to_dict(self) -> dict:
        return {"fallbackMessage": self.message, "score": self.score}


__all__ = ["Answer", "Fallback", "KnowledgeBase", "KnowledgeEntry", "MatchResult", "Strategy"]
